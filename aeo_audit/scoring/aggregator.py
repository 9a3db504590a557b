"""Score aggregator.

Combines the five category results into one 0-100 AEO score:

    base = sum(normalized_score * weight) / sum(weight of present categories)
    final = base * (1 - min(sum(penalty factors), cap))

A category that failed or is missing contributes no weight, so missing
data shrinks the denominator instead of counting as zero.
"""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

import structlog

from aeo_audit.scoring.models import (
    CATEGORY_ORDER,
    AEOReport,
    Category,
    CategoryBreakdown,
    CategoryResult,
    GlobalPenalty,
    MainSection,
    ReportMetadata,
    level_for,
    round_half_up,
    round_to_tenth,
)
from aeo_audit.scoring.weights import WeightConfig

if TYPE_CHECKING:
    from aeo_audit.config import Settings

logger = structlog.get_logger(__name__)

DEFAULT_PENALTY_CAP = 0.7

# Section statuses that count as a completed analysis
ACCEPTED_STATUSES = frozenset(["excellent", "good", "warning", "error", "complete"])

# Section id and display name used when a category has no result
SECTION_INFO = {
    Category.DISCOVERABILITY: ("discoverability", "Discoverability"),
    Category.STRUCTURED_DATA: ("structured-data", "Structured Data"),
    Category.LLM_FORMATTING: ("llm-formatting", "LLM Formatting"),
    Category.ACCESSIBILITY: ("accessibility", "Accessibility"),
    Category.READABILITY: ("readability", "Readability"),
}

UNAVAILABLE = "unavailable"


def normalize_score(score: float, max_score: float) -> int:
    """Scale a section score onto 0-100."""
    if max_score == 100:
        return round_half_up(score)
    return round_half_up(score / max_score * 100)


def is_usable(result: CategoryResult | None) -> bool:
    """Check whether a category result can take part in the weighted score."""
    if result is None or result.failed:
        return False
    if not isinstance(result.score, int | float) or result.max_score <= 0:
        return False
    return result.status in ACCEPTED_STATUSES


def dedupe_penalties(penalties: Sequence[GlobalPenalty]) -> list[GlobalPenalty]:
    """Keep the first penalty of each type so none is applied twice."""
    seen: set[str] = set()
    unique: list[GlobalPenalty] = []
    for penalty in penalties:
        if penalty.type in seen:
            continue
        seen.add(penalty.type)
        unique.append(penalty)
    return unique


class ScoreAggregator:
    """
    Builds the final AEO report from category results.

    Weights are validated when the aggregator is built, so a bad
    configuration fails before any page is analyzed.
    """

    def __init__(
        self,
        weights: WeightConfig | None = None,
        penalty_cap: float = DEFAULT_PENALTY_CAP,
    ):
        self.weights = weights or WeightConfig()
        self.penalty_cap = penalty_cap

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ScoreAggregator":
        """Build an aggregator from engine settings."""
        return cls(weights=settings.weight_config(), penalty_cap=settings.penalty_cap)

    def with_weights(self, **overrides: int) -> "ScoreAggregator":
        """
        Copy of this aggregator with some weights replaced.

        Raises:
            WeightConfigurationError: If the new weights do not sum to 100
        """
        weights = WeightConfig(**{**self.weights.as_dict(), **overrides})
        return ScoreAggregator(weights=weights, penalty_cap=self.penalty_cap)

    def aggregate(
        self,
        results: Mapping[Category, CategoryResult | None],
        url: str = "",
        penalties: Sequence[GlobalPenalty] = (),
        errors: Mapping[Category, str] | None = None,
    ) -> AEOReport:
        """
        Combine category results into the final report.

        Args:
            results: Result per category; missing or failed entries are skipped
            url: Audited URL, echoed on the report
            penalties: Extra global penalties beyond those the analyzers emit
            errors: Why a category has no result, shown on its error section

        Returns:
            AEOReport, or an all-zero report with error set if aggregation fails
        """
        try:
            return self._aggregate(results, url, penalties, errors or {})
        except Exception as e:
            logger.error("aggregation_failed", url=url, error=str(e), exc_info=True)
            return AEOReport.empty(error=str(e), url=url)

    def _aggregate(
        self,
        results: Mapping[Category, CategoryResult | None],
        url: str,
        extra_penalties: Sequence[GlobalPenalty],
        errors: Mapping[Category, str],
    ) -> AEOReport:
        breakdown: dict[Category, CategoryBreakdown] = {}
        sections: list[MainSection] = []
        collected_penalties: list[GlobalPenalty] = []
        weighted_total = 0.0
        total_weight = 0
        completed = 0

        for category in CATEGORY_ORDER:
            result = results.get(category)
            weight = self.weights.weight_for(category)

            if not is_usable(result):
                breakdown[category] = CategoryBreakdown(
                    score=0, weight=weight, contribution=0, status=UNAVAILABLE
                )
                sections.append(
                    self._missing_section(category, weight, result, errors.get(category))
                )
                logger.debug("category_unavailable", category=str(category))
                continue

            normalized = normalize_score(result.score, result.max_score)
            contribution = normalized * weight / 100
            breakdown[category] = CategoryBreakdown(
                score=normalized,
                weight=weight,
                contribution=round_to_tenth(contribution),
                status=result.status,
            )
            sections.append(result.section)
            collected_penalties.extend(result.global_penalties)
            weighted_total += contribution
            total_weight += weight
            completed += 1

        base_score = round_half_up(weighted_total / total_weight * 100) if total_weight > 0 else 0

        applied = dedupe_penalties([*collected_penalties, *extra_penalties])
        reduction = min(sum(p.penalty_factor for p in applied), self.penalty_cap)
        final_score = max(round_half_up(base_score * (1 - reduction)), 0)

        recommendations = sorted(
            (rec for section in sections for rec in section.recommendations()),
            key=lambda rec: rec.impact,
            reverse=True,
        )

        logger.info(
            "aggregation_completed",
            url=url,
            base_score=base_score,
            final_score=final_score,
            completed=completed,
            penalties=len(applied),
        )

        return AEOReport(
            total_score=final_score,
            breakdown=breakdown,
            completeness=f"{completed}/{len(CATEGORY_ORDER)} analyses completed",
            metadata=ReportMetadata(
                base_score=base_score,
                final_score=final_score,
                total_weight=total_weight,
                completed_analyses=completed,
                total_analyses=len(CATEGORY_ORDER),
                global_penalties_count=len(applied),
            ),
            level=level_for(final_score),
            global_penalties=tuple(applied),
            sections=tuple(sections),
            recommendations=tuple(recommendations),
            url=url,
        )

    def _missing_section(
        self,
        category: Category,
        weight: int,
        result: CategoryResult | None,
        reason: str | None = None,
    ) -> MainSection:
        if result is not None and result.failed:
            return result.section
        section_id, name = SECTION_INFO[category]
        message = "Analysis result unavailable"
        if reason:
            message = f"{message} ({reason})"
        return MainSection.error(section_id, name, weight, message)
