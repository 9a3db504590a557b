"""Category weight configuration.

One validated object replaces the per-module weight constants. The
five weights must be non-negative and sum to exactly 100; anything else
fails when the configuration is built, never at analysis time.
"""

from pydantic import BaseModel, ConfigDict, model_validator

from aeo_audit.exceptions import WeightConfigurationError
from aeo_audit.scoring.models import Category

TOTAL_WEIGHT = 100


class WeightConfig(BaseModel):
    """Per-category weight percentages."""

    model_config = ConfigDict(frozen=True)

    discoverability: int = 20
    structured_data: int = 25
    llm_formatting: int = 25
    accessibility: int = 15
    readability: int = 15

    @model_validator(mode="after")
    def check_total(self) -> "WeightConfig":
        weights = self.as_dict()
        negative = [name for name, value in weights.items() if value < 0]
        if negative:
            raise WeightConfigurationError(
                f"Weights must be non-negative: {', '.join(negative)}", weights
            )
        total = sum(weights.values())
        if total != TOTAL_WEIGHT:
            raise WeightConfigurationError(
                f"Weights must sum to {TOTAL_WEIGHT}, got {total}", weights
            )
        return self

    def as_dict(self) -> dict[str, int]:
        return {
            "discoverability": self.discoverability,
            "structured_data": self.structured_data,
            "llm_formatting": self.llm_formatting,
            "accessibility": self.accessibility,
            "readability": self.readability,
        }

    def weight_for(self, category: Category) -> int:
        """Weight percentage for a report category."""
        return {
            Category.DISCOVERABILITY: self.discoverability,
            Category.STRUCTURED_DATA: self.structured_data,
            Category.LLM_FORMATTING: self.llm_formatting,
            Category.ACCESSIBILITY: self.accessibility,
            Category.READABILITY: self.readability,
        }[category]
