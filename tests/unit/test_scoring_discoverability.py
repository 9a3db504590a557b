"""Tests for the discoverability analyzer."""

from aeo_audit.scoring.discoverability import (
    DiscoverabilityAnalyzer,
    analyze_discoverability,
    robots_penalty_factor,
)
from aeo_audit.scoring.models import Category
from aeo_audit.signals.models import CollectedSignals, FetchResult
from aeo_audit.signals.robots import AIBotAccess


def _cards(result):
    return {card.id: card for drawer in result.section.drawers for card in drawer.cards}


class TestDiscoverabilityAnalyzer:
    """Tests for DiscoverabilityAnalyzer."""

    def test_perfect_signals(self, perfect_html, perfect_signals, page_url):
        """Test a reachable HTTPS page with open robots.txt and sitemap scores 100."""
        result = DiscoverabilityAnalyzer().analyze(perfect_html, page_url, perfect_signals)

        assert result.category == Category.DISCOVERABILITY
        assert result.score == 100
        assert result.max_score == 100
        assert result.global_penalties == []
        assert result.section.recommendations() == []
        assert result.raw_data["httpsEnabled"] is True
        assert result.raw_data["blockedAIBots"] == []

    def test_http_url(self, perfect_html, perfect_signals):
        """Test plain HTTP loses the protocol card."""
        result = DiscoverabilityAnalyzer().analyze(
            perfect_html, "http://example.com/page", perfect_signals
        )
        cards = _cards(result)

        assert cards["https-protocol"].score == 0
        assert cards["https-protocol"].recommendations[0].impact == 10

    def test_all_bots_blocked(self, perfect_html, blocking_signals, page_url):
        """Test a wildcard Disallow: / zeroes bot access and adds a 0.7 penalty."""
        result = DiscoverabilityAnalyzer().analyze(perfect_html, page_url, blocking_signals)
        card = _cards(result)["ai-bots-access"]

        assert card.score == 0
        assert card.max_score == 30
        assert len(result.global_penalties) == 1
        penalty = result.global_penalties[0]
        assert penalty.type == "robots_txt_blocking"
        assert penalty.penalty_factor == 0.7
        assert "Impact on final score: -70%" in penalty.details

    def test_some_bots_blocked(self, perfect_html, page_url):
        """Test blocking two bots costs a share of the card without a penalty."""
        robots = "User-agent: GPTBot\nDisallow: /\n\nUser-agent: CCBot\nDisallow: /\n"
        signals = CollectedSignals(robots_txt=FetchResult(success=True, data=robots))
        result = DiscoverabilityAnalyzer().analyze(perfect_html, page_url, signals)
        card = _cards(result)["ai-bots-access"]

        # 5 of 7 bots allowed
        assert card.score == 21
        assert result.global_penalties == []
        assert "GPTBot, CCBot" in card.recommendations[0].problem

    def test_missing_robots(self, perfect_html, page_url):
        """Test a missing robots.txt scores zero for bots and sitemap."""
        signals = CollectedSignals(robots_txt=FetchResult(success=False, status_code=404))
        result = DiscoverabilityAnalyzer().analyze(perfect_html, page_url, signals)
        cards = _cards(result)

        assert cards["ai-bots-access"].score == 0
        assert cards["sitemap-presence"].score == 0
        assert result.global_penalties == []

    def test_empty_robots_allows_all(self, perfect_html, page_url):
        """Test an empty robots.txt allows every crawler."""
        signals = CollectedSignals(robots_txt=FetchResult(success=True, data="   "))
        result = DiscoverabilityAnalyzer().analyze(perfect_html, page_url, signals)

        assert _cards(result)["ai-bots-access"].score == 30

    def test_redirect_and_error_status(self, perfect_html, page_url):
        """Test redirects earn partial credit and errors none."""
        redirect = CollectedSignals(html_fetch=FetchResult(success=True, status_code=301))
        error = CollectedSignals(html_fetch=FetchResult(success=False, status_code=503))

        redirect_card = _cards(DiscoverabilityAnalyzer().analyze(perfect_html, page_url, redirect))[
            "http-status"
        ]
        error_card = _cards(DiscoverabilityAnalyzer().analyze(perfect_html, page_url, error))[
            "http-status"
        ]

        assert redirect_card.score == 15
        assert error_card.score == 0
        assert "503" in error_card.recommendations[0].problem

    def test_sitemap_freshness_recommendation(self, perfect_html, page_url):
        """Test sitemap entries without lastmod produce a recommendation."""
        sitemap = (
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
            "<url><loc>https://example.com/</loc></url></urlset>"
        )
        signals = CollectedSignals(
            robots_txt=FetchResult(success=True, data="User-agent: *\nAllow: /"),
            sitemap=FetchResult(success=True, data=sitemap),
        )
        card = _cards(DiscoverabilityAnalyzer().analyze(perfect_html, page_url, signals))[
            "sitemap-presence"
        ]

        assert card.score == 20
        assert len(card.recommendations) == 2
        assert card.raw_data["declaredInRobots"] == []
        assert card.raw_data["freshness"]["missingLastmod"] == 1

    def test_malformed_url_fails_gracefully(self, perfect_html):
        """Test a malformed URL yields an error section instead of raising."""
        result = DiscoverabilityAnalyzer(weight_percentage=20).analyze(perfect_html, "not a url")

        assert result.failed
        assert result.score == 0
        assert result.section.status == "error"
        assert result.section.weight_percentage == 20

    def test_convenience_function(self, perfect_html, perfect_signals, page_url):
        """Test analyze_discoverability matches the analyzer."""
        result = analyze_discoverability(perfect_html, page_url, perfect_signals)

        assert result.score == 100


class TestRobotsPenaltyFactor:
    """Tests for robots_penalty_factor thresholds."""

    def test_thresholds(self):
        """Test penalty by blocked share."""
        all_blocked = AIBotAccess(blocked=["a", "b"])
        majority = AIBotAccess(allowed=["a"], blocked=["b", "c"])
        half = AIBotAccess(allowed=["a"], blocked=["b"])

        assert robots_penalty_factor(all_blocked) == 0.7
        assert robots_penalty_factor(majority) == 0.4
        assert robots_penalty_factor(half) == 0.0
        assert robots_penalty_factor(AIBotAccess()) == 0.0


class TestLlmsTxtCard:
    """Tests for the informational llms.txt card."""

    def test_valid_file_reported(self, perfect_html, perfect_signals, page_url):
        """Test a complete llms.txt is reported without moving the score."""
        result = DiscoverabilityAnalyzer().analyze(perfect_html, page_url, perfect_signals)
        card = _cards(result)["llms-txt"]

        assert card.score == 0
        assert card.max_score == 0
        assert card.status == "excellent"
        assert card.recommendations == []
        assert card.raw_data["llmsTxtFound"] is True
        assert card.raw_data["valid"] is True
        assert card.raw_data["linkCount"] == 3
        assert result.raw_data["llmsTxtPresent"] is True

    def test_missing_file_recommends_one(self, perfect_html, perfect_signals, page_url):
        """Test a missing llms.txt adds a zero-impact recommendation and no points."""
        signals = perfect_signals.model_copy(
            update={"llms_txt": FetchResult(success=False, status_code=404)}
        )
        result = DiscoverabilityAnalyzer().analyze(perfect_html, page_url, signals)
        card = _cards(result)["llms-txt"]

        assert result.score == 100
        assert result.max_score == 100
        assert card.status == "warning"
        assert card.raw_data == {"llmsTxtFound": False, "valid": False}
        assert card.recommendations[0].impact == 0
        assert "llms.txt" in card.recommendations[0].problem

    def test_incomplete_file(self, perfect_html, page_url):
        """Test a file without a title is present but invalid."""
        signals = CollectedSignals(
            llms_txt=FetchResult(success=True, data="Some notes for bots\n- [Home](/)")
        )
        card = _cards(DiscoverabilityAnalyzer().analyze(perfect_html, page_url, signals))[
            "llms-txt"
        ]

        assert card.raw_data["llmsTxtFound"] is True
        assert card.raw_data["valid"] is False
        assert card.status == "warning"
        assert "Missing title" in card.recommendations[0].problem

    def test_signal_accepts_camel_case_alias(self):
        """Test llms.txt results can be supplied under the llmsTxt key."""
        signals = CollectedSignals.model_validate(
            {"llmsTxt": {"success": True, "data": "# Site", "statusCode": 200}}
        )

        assert signals.llms_txt.data == "# Site"
