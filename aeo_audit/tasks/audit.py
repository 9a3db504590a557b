"""Audit orchestrator.

Runs the five category analyzers side by side and hands whatever
settles to the aggregator. One analyzer failing or timing out never
cancels the others; its category is reported as unavailable.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from aeo_audit.config import Settings, get_settings
from aeo_audit.exceptions import AnalyzerError
from aeo_audit.logging import audit_context
from aeo_audit.scoring.accessibility import AccessibilityAnalyzer
from aeo_audit.scoring.aggregator import ScoreAggregator
from aeo_audit.scoring.discoverability import DiscoverabilityAnalyzer
from aeo_audit.scoring.llm_formatting import LLMFormattingAnalyzer
from aeo_audit.scoring.models import CATEGORY_ORDER, AEOReport, Category, CategoryResult
from aeo_audit.scoring.readability import ReadabilityAnalyzer
from aeo_audit.scoring.structured_data import StructuredDataAnalyzer
from aeo_audit.scoring.weights import WeightConfig
from aeo_audit.signals.models import CollectedSignals

logger = structlog.get_logger(__name__)

AnalyzeFn = Callable[[str, str, CollectedSignals | None], CategoryResult]


@dataclass
class CategoryOutcome:
    """Settled outcome of one analyzer: a result or an error, never both."""

    category: Category
    result: CategoryResult | None = None
    error: AnalyzerError | None = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None and self.error is None


def build_analyzers(weights: WeightConfig) -> dict[Category, AnalyzeFn]:
    """One analyze callable per category, weighted from the configuration."""
    return {
        Category.DISCOVERABILITY: DiscoverabilityAnalyzer(weights.discoverability).analyze,
        Category.STRUCTURED_DATA: StructuredDataAnalyzer(weights.structured_data).analyze,
        Category.LLM_FORMATTING: LLMFormattingAnalyzer(weights.llm_formatting).analyze,
        Category.ACCESSIBILITY: AccessibilityAnalyzer(weights.accessibility).analyze,
        Category.READABILITY: ReadabilityAnalyzer(weights.readability).analyze,
    }


def _settle(category: Category, outcome: CategoryResult | BaseException) -> CategoryOutcome:
    if isinstance(outcome, BaseException):
        if isinstance(outcome, asyncio.TimeoutError):
            message = "analysis timed out"
        else:
            message = str(outcome) or type(outcome).__name__
        logger.warning("analyzer_failed", category=str(category), error=message)
        return CategoryOutcome(category=category, error=AnalyzerError(str(category), message))
    return CategoryOutcome(category=category, result=outcome)


def _report(
    outcomes: list[CategoryOutcome],
    aggregator: ScoreAggregator,
    url: str,
) -> AEOReport:
    results = {o.category: o.result for o in outcomes if o.succeeded}
    errors = {o.category: o.error.message for o in outcomes if o.error is not None}
    report = aggregator.aggregate(results, url=url, errors=errors)
    logger.info(
        "audit_completed",
        url=url,
        final_score=report.total_score,
        completeness=report.completeness,
        failed=[str(o.category) for o in outcomes if not o.succeeded],
    )
    return report


async def run_analyzers(
    html: str,
    url: str,
    collected: CollectedSignals | None,
    analyzers: dict[Category, AnalyzeFn],
    timeout: float,
) -> list[CategoryOutcome]:
    """
    Run every analyzer concurrently and capture each outcome.

    Analyzers are synchronous, so each one runs in a worker thread under
    its own timeout.
    """
    categories = [c for c in CATEGORY_ORDER if c in analyzers]
    settled = await asyncio.gather(
        *(
            asyncio.wait_for(asyncio.to_thread(analyzers[c], html, url, collected), timeout)
            for c in categories
        ),
        return_exceptions=True,
    )
    return [_settle(category, outcome) for category, outcome in zip(categories, settled)]


async def run_audit(
    html: str,
    url: str,
    collected: CollectedSignals | None = None,
    *,
    aggregator: ScoreAggregator | None = None,
    settings: Settings | None = None,
) -> AEOReport:
    """
    Audit one page.

    Args:
        html: Page HTML as served
        url: Page URL
        collected: Signals gathered before the audit (fetch status,
            robots.txt, sitemap, rendered HTML, page speed)
        aggregator: Aggregator to use instead of one built from settings
        settings: Settings to use instead of the cached ones

    Returns:
        AEOReport; analyzer failures only reduce its completeness
    """
    settings = settings or get_settings()
    aggregator = aggregator or ScoreAggregator.from_settings(settings)

    with audit_context(url):
        logger.info("audit_started", url=url, signals=collected is not None)

        outcomes = await run_analyzers(
            html,
            url,
            collected,
            build_analyzers(aggregator.weights),
            settings.analyzer_timeout_seconds,
        )
        return _report(outcomes, aggregator, url)


def run_audit_sync(
    html: str,
    url: str,
    collected: CollectedSignals | None = None,
    *,
    aggregator: ScoreAggregator | None = None,
    settings: Settings | None = None,
) -> AEOReport:
    """
    Synchronous wrapper for run_audit.

    Must not be called from a running event loop.
    """
    return asyncio.run(
        run_audit(html, url, collected, aggregator=aggregator, settings=settings)
    )
