"""Recommendation templates.

Knowledge-base entries are stored as templates whose problem, solution
and explanation may contain ``{placeholder}`` fields. Rendering checks
that every placeholder has a value, so a missing value fails loudly
instead of leaking a raw token into a report.
"""

from dataclasses import dataclass
from string import Formatter
from typing import Any

from aeo_audit.scoring.models import Recommendation


def _fields(text: str | None) -> set[str]:
    if not text:
        return set()
    return {name for _, name, _, _ in Formatter().parse(text) if name}


@dataclass(frozen=True)
class RecommendationTemplate:
    """Template for one knowledge-base recommendation."""

    key: str
    problem: str
    solution: str
    impact: int  # 0-10 severity
    explanation: str | None = None

    @property
    def placeholders(self) -> set[str]:
        """Names every render() call must supply."""
        return _fields(self.problem) | _fields(self.solution) | _fields(self.explanation)

    def render(self, **values: Any) -> Recommendation:
        """Fill placeholders and build the recommendation.

        Raises:
            KeyError: If a placeholder has no value.
        """
        missing = self.placeholders - values.keys()
        if missing:
            raise KeyError(f"Template '{self.key}' is missing values for: {sorted(missing)}")

        return Recommendation(
            problem=self.problem.format(**values),
            solution=self.solution.format(**values),
            impact=self.impact,
            explanation=self.explanation.format(**values) if self.explanation else None,
        )


def build_registry(*templates: RecommendationTemplate) -> dict[str, RecommendationTemplate]:
    """Key templates by name, rejecting duplicates."""
    registry: dict[str, RecommendationTemplate] = {}
    for template in templates:
        if template.key in registry:
            raise ValueError(f"Duplicate recommendation template: {template.key}")
        registry[template.key] = template
    return registry
