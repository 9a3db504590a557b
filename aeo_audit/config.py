"""Engine configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from aeo_audit.scoring.weights import WeightConfig


class Settings(BaseSettings):
    """Engine settings loaded from AEO_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AEO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Category weights (must sum to 100)
    weight_discoverability: int = 20
    weight_structured_data: int = 25
    weight_llm_formatting: int = 25
    weight_accessibility: int = 15
    weight_readability: int = 15

    # Aggregation
    penalty_cap: float = 0.7  # Max fraction of the base score penalties may remove

    # Orchestration
    analyzer_timeout_seconds: float = 30.0  # Per-analyzer ceiling

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.env == "test"

    def weight_config(self) -> WeightConfig:
        """Build the validated category weight configuration."""
        return WeightConfig(
            discoverability=self.weight_discoverability,
            structured_data=self.weight_structured_data,
            llm_formatting=self.weight_llm_formatting,
            accessibility=self.weight_accessibility,
            readability=self.weight_readability,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
