"""Report data model shared by every analyzer and the aggregator.

Cards are grouped into drawers, drawers into the five main sections,
and sections into the final AEOReport. Every type serialises to the
camelCase JSON shape consumed by presentation layers via ``to_dict()``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Category(StrEnum):
    """The five audit categories, valued by their report key."""

    DISCOVERABILITY = "discoverability"
    STRUCTURED_DATA = "structuredData"
    LLM_FORMATTING = "llmFormatting"
    ACCESSIBILITY = "accessibility"
    READABILITY = "readability"


CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)


class PerformanceStatus(StrEnum):
    """Status derived from a score/maxScore ratio."""

    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    ERROR = "error"


class ScoreLevel(StrEnum):
    """Overall level label for a final 0-100 score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    PASS = "pass"
    NEEDS_IMPROVEMENT = "needs-improvement"
    FAIL = "fail"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def status_for(score: float, max_score: float) -> PerformanceStatus:
    """Map a score against its maximum onto a performance status."""
    if max_score <= 0:
        return PerformanceStatus.ERROR
    percentage = score / max_score * 100
    if percentage >= 90:
        return PerformanceStatus.EXCELLENT
    if percentage >= 70:
        return PerformanceStatus.GOOD
    if percentage >= 50:
        return PerformanceStatus.WARNING
    return PerformanceStatus.ERROR


def level_for(score: float) -> ScoreLevel:
    """Map a final 0-100 score onto its level label."""
    if score >= 90:
        return ScoreLevel.EXCELLENT
    if score >= 80:
        return ScoreLevel.GOOD
    if score >= 70:
        return ScoreLevel.PASS
    if score >= 60:
        return ScoreLevel.NEEDS_IMPROVEMENT
    return ScoreLevel.FAIL


@dataclass(frozen=True)
class Recommendation:
    """A single problem/solution pair with a 0-10 impact."""

    problem: str
    solution: str
    impact: int
    explanation: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.impact <= 10:
            raise ValueError(f"impact must be within 0..10, got {self.impact}")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "problem": self.problem,
            "solution": self.solution,
            "impact": self.impact,
        }
        if self.explanation:
            data["explanation"] = self.explanation
        return data


@dataclass
class MetricCard:
    """A single measured criterion.

    The score is clamped into ``[0, max_score]`` on construction and the
    status is derived from the ratio unless explicitly given. A card with
    a zero maximum is informational and never moves a section total.
    """

    id: str
    name: str
    score: float
    max_score: float
    explanation: str = ""
    recommendations: list[Recommendation] = field(default_factory=list)
    success_message: str = ""
    raw_data: dict[str, Any] = field(default_factory=dict)
    status: PerformanceStatus | None = None

    def __post_init__(self) -> None:
        if self.max_score < 0:
            raise ValueError(f"max_score must not be negative for card {self.id}")
        if isinstance(self.score, float) and math.isnan(self.score):
            self.score = 0
        self.score = min(max(self.score, 0), self.max_score)
        if self.status is None:
            self.status = status_for(self.score, self.max_score)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "maxScore": self.max_score,
            "status": str(self.status),
            "explanation": self.explanation,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "successMessage": self.success_message,
            "rawData": self.raw_data,
        }


@dataclass
class DrawerSubSection:
    """A named group of related cards inside a main section."""

    id: str
    name: str
    description: str
    cards: list[MetricCard] = field(default_factory=list)

    @property
    def total_score(self) -> float:
        return sum(card.score for card in self.cards)

    @property
    def max_score(self) -> float:
        return sum(card.max_score for card in self.cards)

    @property
    def status(self) -> PerformanceStatus:
        return status_for(self.total_score, self.max_score)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "totalScore": self.total_score,
            "maxScore": self.max_score,
            "status": str(self.status),
            "cards": [card.to_dict() for card in self.cards],
        }


@dataclass
class MainSection:
    """One of the five top-level audit categories."""

    id: str
    name: str
    description: str
    weight_percentage: int
    total_score: float
    max_score: float
    drawers: list[DrawerSubSection] = field(default_factory=list)
    status: PerformanceStatus | None = None

    def __post_init__(self) -> None:
        if self.status is None:
            self.status = status_for(self.total_score, self.max_score)

    @classmethod
    def additive(
        cls,
        id: str,
        name: str,
        description: str,
        weight_percentage: int,
        drawers: list[DrawerSubSection],
    ) -> MainSection:
        """Build a section whose totals are the sums of its drawers."""
        return cls(
            id=id,
            name=name,
            description=description,
            weight_percentage=weight_percentage,
            total_score=sum(d.total_score for d in drawers),
            max_score=sum(d.max_score for d in drawers),
            drawers=drawers,
        )

    @classmethod
    def error(
        cls,
        id: str,
        name: str,
        weight_percentage: int,
        message: str,
    ) -> MainSection:
        """Build a zero-score section describing an analyzer failure."""
        card = MetricCard(
            id=f"{id}-error",
            name=f"{name} Analysis Error",
            score=0,
            max_score=100,
            explanation=f"The {name.lower()} analysis could not be completed.",
            recommendations=[
                Recommendation(
                    problem=f"{name} analysis failed: {message}",
                    solution="Check that the page returns valid HTML and try the audit again.",
                    impact=5,
                )
            ],
            raw_data={"error": message},
            status=PerformanceStatus.ERROR,
        )
        drawer = DrawerSubSection(
            id=f"{id}-error",
            name="Analysis Error",
            description=message,
            cards=[card],
        )
        return cls(
            id=id,
            name=name,
            description=message,
            weight_percentage=weight_percentage,
            total_score=0,
            max_score=100,
            drawers=[drawer],
            status=PerformanceStatus.ERROR,
        )

    def recommendations(self) -> list[Recommendation]:
        """All card recommendations in drawer/card order."""
        return [
            rec for drawer in self.drawers for card in drawer.cards for rec in card.recommendations
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "weightPercentage": self.weight_percentage,
            "totalScore": self.total_score,
            "maxScore": self.max_score,
            "status": str(self.status),
            "drawers": [drawer.to_dict() for drawer in self.drawers],
        }


@dataclass(frozen=True)
class GlobalPenalty:
    """A cross-cutting reduction applied once to the weighted base score."""

    type: str
    description: str
    penalty_factor: float
    details: tuple[str, ...] = ()
    solutions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 0.0 <= self.penalty_factor <= 1.0:
            raise ValueError(f"penalty_factor must be within 0..1, got {self.penalty_factor}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "description": self.description,
            "penaltyFactor": self.penalty_factor,
            "details": list(self.details),
            "solutions": list(self.solutions),
        }


@dataclass
class CategoryResult:
    """Analyzer output consumed by the aggregator.

    ``error`` is set when the analyzer failed at its boundary; the
    section is then a zero-score error section and the aggregator
    treats the category as missing.
    """

    category: Category
    section: MainSection
    global_penalties: list[GlobalPenalty] = field(default_factory=list)
    raw_data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @classmethod
    def failure(
        cls,
        category: Category,
        section_id: str,
        name: str,
        weight_percentage: int,
        message: str,
    ) -> CategoryResult:
        """Result for an analyzer that failed at its boundary."""
        return cls(
            category=category,
            section=MainSection.error(section_id, name, weight_percentage, message),
            error=message,
        )

    @property
    def score(self) -> float:
        return self.section.total_score

    @property
    def max_score(self) -> float:
        return self.section.max_score

    @property
    def status(self) -> str:
        return str(self.section.status)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": str(self.category),
            "score": self.score,
            "maxScore": self.max_score,
            "status": self.status,
            "section": self.section.to_dict(),
            "globalPenalties": [p.to_dict() for p in self.global_penalties],
            "rawData": self.raw_data,
            "error": self.error,
        }


@dataclass(frozen=True)
class CategoryBreakdown:
    """Per-category contribution to the overall score."""

    score: int
    weight: int
    contribution: float
    status: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "weight": self.weight,
            "contribution": self.contribution,
            "status": self.status,
        }


@dataclass(frozen=True)
class ReportMetadata:
    """Aggregation bookkeeping."""

    base_score: int = 0
    final_score: int = 0
    total_weight: int = 0
    completed_analyses: int = 0
    total_analyses: int = len(CATEGORY_ORDER)
    global_penalties_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseScore": self.base_score,
            "finalScore": self.final_score,
            "totalWeight": self.total_weight,
            "completedAnalyses": self.completed_analyses,
            "totalAnalyses": self.total_analyses,
            "globalPenaltiesCount": self.global_penalties_count,
        }


@dataclass(frozen=True)
class AEOReport:
    """Final audit output."""

    total_score: int
    breakdown: dict[Category, CategoryBreakdown]
    completeness: str
    metadata: ReportMetadata
    level: ScoreLevel
    max_score: int = 100
    global_penalties: tuple[GlobalPenalty, ...] = ()
    sections: tuple[MainSection, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()
    url: str = ""
    error: str | None = None

    @classmethod
    def empty(cls, error: str, url: str = "") -> AEOReport:
        """All-zero report returned when aggregation itself fails."""
        return cls(
            total_score=0,
            breakdown={
                category: CategoryBreakdown(score=0, weight=0, contribution=0, status="error")
                for category in CATEGORY_ORDER
            },
            completeness=f"0/{len(CATEGORY_ORDER)} analyses completed",
            metadata=ReportMetadata(),
            level=ScoreLevel.FAIL,
            url=url,
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "totalScore": self.total_score,
            "maxScore": self.max_score,
            "level": str(self.level),
            "breakdown": {str(k): v.to_dict() for k, v in self.breakdown.items()},
            "completeness": self.completeness,
            "globalPenalties": [p.to_dict() for p in self.global_penalties],
            "metadata": self.metadata.to_dict(),
            "sections": [s.to_dict() for s in self.sections],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "error": self.error,
        }
