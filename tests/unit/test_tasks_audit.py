"""Tests for the audit orchestrator."""

import time

import pytest

from aeo_audit.config import Settings
from aeo_audit.exceptions import AnalyzerError
from aeo_audit.scoring.aggregator import ScoreAggregator
from aeo_audit.scoring.models import CATEGORY_ORDER, Category, round_half_up
from aeo_audit.scoring.weights import WeightConfig
from aeo_audit.tasks.audit import (
    CategoryOutcome,
    _report,
    build_analyzers,
    run_analyzers,
    run_audit,
    run_audit_sync,
)


def _raising(html, url, collected):
    raise RuntimeError("parser exploded")


def _slow(html, url, collected):
    time.sleep(0.5)


class TestBuildAnalyzers:
    """Tests for build_analyzers."""

    def test_one_per_category(self):
        """Test every category gets an analyzer."""
        analyzers = build_analyzers(WeightConfig())

        assert list(analyzers) == list(CATEGORY_ORDER)
        assert all(callable(fn) for fn in analyzers.values())

    def test_weights_flow_into_sections(self, perfect_html, page_url):
        """Test the configured weight lands on the section."""
        weights = WeightConfig(discoverability=10, readability=25)
        result = build_analyzers(weights)[Category.READABILITY](perfect_html, page_url, None)

        assert result.section.weight_percentage == 25


class TestCategoryOutcome:
    """Tests for CategoryOutcome."""

    def test_succeeded(self):
        """Test an outcome with an error never counts as succeeded."""
        error = AnalyzerError("readability", "boom")

        assert not CategoryOutcome(category=Category.READABILITY).succeeded
        assert not CategoryOutcome(category=Category.READABILITY, error=error).succeeded


class TestRunAnalyzers:
    """Tests for concurrent analyzer execution."""

    @pytest.mark.asyncio
    async def test_failure_isolated(self, perfect_html, page_url):
        """Test one raising analyzer does not affect the others."""
        analyzers = build_analyzers(WeightConfig())
        analyzers[Category.READABILITY] = _raising

        outcomes = await run_analyzers(perfect_html, page_url, None, analyzers, timeout=30)
        by_category = {o.category: o for o in outcomes}

        assert [o.category for o in outcomes] == list(CATEGORY_ORDER)
        failed = by_category[Category.READABILITY]
        assert not failed.succeeded
        assert isinstance(failed.error, AnalyzerError)
        assert str(failed.error) == "readability: parser exploded"
        assert all(
            by_category[c].succeeded for c in CATEGORY_ORDER if c != Category.READABILITY
        )

    @pytest.mark.asyncio
    async def test_timeout(self, perfect_html, page_url):
        """Test a slow analyzer is reported as timed out."""
        analyzers = {Category.ACCESSIBILITY: _slow}

        outcomes = await run_analyzers(perfect_html, page_url, None, analyzers, timeout=0.05)

        assert len(outcomes) == 1
        assert outcomes[0].error is not None
        assert outcomes[0].error.message == "accessibility: analysis timed out"
        assert outcomes[0].error.category == "accessibility"

    @pytest.mark.asyncio
    async def test_failure_reason_reaches_report(self, perfect_html, page_url):
        """Test the analyzer error message is shown on the unavailable section."""
        analyzers = build_analyzers(WeightConfig())
        analyzers[Category.READABILITY] = _raising

        outcomes = await run_analyzers(perfect_html, page_url, None, analyzers, timeout=30)
        report = _report(outcomes, ScoreAggregator(), page_url)

        section = report.sections[CATEGORY_ORDER.index(Category.READABILITY)]
        assert section.status == "error"
        assert "Analysis result unavailable" in section.description
        assert "parser exploded" in section.description
        assert report.completeness == "4/5 analyses completed"


class TestRunAudit:
    """Tests for the audit entry points."""

    def test_perfect_page_sync(self, perfect_html, page_url, perfect_signals):
        """Test a well built page gets an excellent report."""
        report = run_audit_sync(perfect_html, page_url, perfect_signals)

        assert report.total_score >= 90
        assert report.completeness == "5/5 analyses completed"
        assert report.global_penalties == ()
        assert report.url == page_url
        assert report.error is None

    def test_minimal_page_scores_low(self, minimal_html, page_url):
        """Test a bare page scores far below a complete one."""
        report = run_audit_sync(minimal_html, page_url)

        assert report.total_score < 60
        assert report.recommendations

    def test_blocking_robots_penalized(self, perfect_html, page_url, blocking_signals):
        """Test blocking every AI bot applies the robots penalty."""
        report = run_audit_sync(perfect_html, page_url, blocking_signals)

        assert [p.type for p in report.global_penalties] == ["robots_txt_blocking"]
        assert report.total_score == round_half_up(report.metadata.base_score * (1 - 0.7))
        assert report.total_score <= 30

    def test_invalid_url_degrades(self, perfect_html):
        """Test a malformed URL degrades the report instead of raising."""
        report = run_audit_sync(perfect_html, "not a url")

        assert report.metadata.completed_analyses < 5
        assert report.breakdown[Category.DISCOVERABILITY].status == "unavailable"

    @pytest.mark.asyncio
    async def test_async_with_custom_aggregator(self, perfect_html, page_url, perfect_signals):
        """Test run_audit honors an injected aggregator."""
        aggregator = ScoreAggregator().with_weights(discoverability=40, readability=0, accessibility=10)

        report = await run_audit(perfect_html, page_url, perfect_signals, aggregator=aggregator)

        assert report.breakdown[Category.DISCOVERABILITY].weight == 40
        assert report.breakdown[Category.READABILITY].contribution == 0
        assert report.completeness == "5/5 analyses completed"

    @pytest.mark.asyncio
    async def test_settings_weights(self, perfect_html, page_url):
        """Test weights come from settings when no aggregator is given."""
        settings = Settings(weight_structured_data=35, weight_llm_formatting=15)

        report = await run_audit(perfect_html, page_url, settings=settings)

        assert report.breakdown[Category.STRUCTURED_DATA].weight == 35
        assert report.metadata.total_weight == 100
