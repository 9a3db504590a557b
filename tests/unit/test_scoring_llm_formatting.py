"""Tests for the LLM formatting analyzer."""

from aeo_audit.scoring.llm_formatting import (
    LLM_FORMATTING_WEIGHTS,
    LLMFormattingAnalyzer,
    analyze_llm_formatting,
)
from aeo_audit.scoring.models import Category

PAGE_URL = "https://example.com/blog/post"


def _cards(result):
    return {card.id: card for drawer in result.section.drawers for card in drawer.cards}


class TestLLMFormattingAnalyzer:
    """Tests for LLMFormattingAnalyzer."""

    def test_weights_total(self):
        """Test card maxima add up to 135."""
        assert sum(LLM_FORMATTING_WEIGHTS.values()) == 135

    def test_perfect_page(self, perfect_html, page_url):
        """Test a well structured page scores near the maximum."""
        result = LLMFormattingAnalyzer().analyze(perfect_html, page_url)
        cards = _cards(result)

        assert result.category == Category.LLM_FORMATTING
        assert result.max_score == 135
        assert result.score >= 130
        assert cards["heading-hierarchy"].score == 15
        assert cards["heading-quality"].score == 10
        assert cards["semantic-structure"].score == 12
        assert cards["external-links"].score == 7
        assert cards["navigation-structure"].score == 7
        assert cards["cta-context-clarity"].score == 20
        assert cards["data-grouping"].score == 15
        assert result.raw_data["grouping"]["semanticLists"] == 1
        assert [d.id for d in result.section.drawers] == [
            "heading-structure",
            "semantic-html5",
            "link-quality",
            "technical-markup",
            "cta-context-clarity",
        ]

    def test_no_headings(self):
        """Test a page without headings loses every heading card."""
        html = "<html><body><div>Just text without any structure at all.</div></body></html>"
        cards = _cards(LLMFormattingAnalyzer().analyze(html, PAGE_URL))

        assert cards["heading-hierarchy"].score == 0
        assert cards["heading-quality"].score == 0
        assert cards["heading-semantic-value"].score == 0
        assert cards["heading-hierarchy"].recommendations[0].impact == 9

    def test_hierarchy_violations(self):
        """Test skipped levels and multiple H1s cost hierarchy points."""
        html = "<h1>First title here</h1><h1>Second title here</h1><h4>Deep heading here</h4>"
        card = _cards(LLMFormattingAnalyzer().analyze(html, PAGE_URL))["heading-hierarchy"]

        # 8 - 2 for one skip, no single H1 bonus, 3 for three headings
        assert card.score == 9
        assert len(card.recommendations) == 2

    def test_generic_headings(self):
        """Test generic headings reduce heading quality."""
        html = "<h1>Introduction</h1><h2>About</h2><h2>Planting tomatoes in spring</h2>"
        card = _cards(LLMFormattingAnalyzer().analyze(html, PAGE_URL))["heading-quality"]

        # round(1/3 * 10) = 3, minus two generic headings
        assert card.score == 1
        assert card.raw_data["genericHeadings"] == ["Introduction", "About"]

    def test_no_internal_links(self):
        """Test a page without internal links scores zero on them."""
        html = '<p>See <a href="https://other.org/x">the other site guide</a> today.</p>'
        cards = _cards(LLMFormattingAnalyzer().analyze(html, PAGE_URL))

        assert cards["internal-links"].score == 0
        assert cards["internal-links"].recommendations

    def test_no_external_links_neutral(self):
        """Test a page without external links gets half the external card."""
        html = '<p><a href="/a">Internal planting guide</a></p>'
        card = _cards(LLMFormattingAnalyzer().analyze(html, PAGE_URL))["external-links"]

        assert card.score == 4
        assert card.recommendations == []

    def test_weak_external_links(self):
        """Test generic anchors to unknown hosts are flagged."""
        html = '<a href="https://random.biz/x">here</a><a href="https://random.biz/y">click here</a>'
        card = _cards(LLMFormattingAnalyzer().analyze(html, PAGE_URL))["external-links"]

        assert card.score == 0
        assert len(card.recommendations) == 1

    def test_dirty_markup(self):
        """Test inline styles, deprecated tags and deep nesting are penalized."""
        styled = "".join(f'<span style="color:red">{i}</span>' for i in range(6))
        nested = "<div>" * 12 + "deep" + "</div>" * 12
        html = f"<body><font>old</font><center>x</center>{styled}{nested}</body>"
        card = _cards(LLMFormattingAnalyzer().analyze(html, PAGE_URL))["clean-markup"]

        assert card.score == 0
        assert card.raw_data["deprecatedTags"] == ["font", "center"]
        assert len(card.recommendations) == 3

    def test_navigation_missing(self):
        """Test missing nav, few links and no breadcrumb."""
        card = _cards(LLMFormattingAnalyzer().analyze("<p>Hi</p>", PAGE_URL))["navigation-structure"]

        assert card.score == 0
        assert len(card.recommendations) == 3

    def test_cta_penalties_capped(self):
        """Test generic and empty CTA penalties are each capped at 10."""
        generic = "".join(f'<a href="/p{i}">Read more</a>' for i in range(15))
        empty = "".join("<button></button>" for _ in range(8))
        card = _cards(LLMFormattingAnalyzer().analyze(generic + empty, PAGE_URL))["cta-context-clarity"]

        assert card.score == 0
        assert card.raw_data["genericLinksCount"] == 15
        assert card.raw_data["emptyLinksCount"] == 8
        assert "'read more' (15x)" in card.recommendations[1].problem

    def test_invalid_url_fails_gracefully(self, perfect_html):
        """Test a malformed URL yields an error section."""
        result = analyze_llm_formatting(perfect_html, "ftp://example.com")

        assert result.failed
        assert result.score == 0

    def test_simulated_list_penalized(self):
        """Test a bulleted list typed into a paragraph costs grouping points."""
        html = (
            "<p>- Apples are red and sweet<br>- Bananas are yellow<br>"
            "- Cherries are dark red</p>"
        )
        card = _cards(LLMFormattingAnalyzer().analyze(html, PAGE_URL))["data-grouping"]

        assert card.score == 12
        assert card.raw_data["simulatedLists"] == 1
        assert len(card.recommendations) == 1
        assert "<ul> or <ol>" in card.recommendations[0].solution
        assert "3 items" in card.recommendations[0].problem

    def test_simulated_table_penalized(self):
        """Test pipe-separated rows are reported as a simulated table."""
        html = (
            "<div>| Crop | Sun | Water |<br>| Tomato | Full | High |<br>"
            "| Lettuce | Part | Low |</div>"
        )
        card = _cards(LLMFormattingAnalyzer().analyze(html, PAGE_URL))["data-grouping"]

        assert card.score == 12
        assert card.raw_data["simulatedTables"] == 1
        assert "<table>" in card.recommendations[0].solution

    def test_semantic_structures_offset_penalty(self):
        """Test real lists and tables earn back part of a simulated-structure penalty."""
        real = "<ul><li>One item</li></ul><ol><li>Two</li></ol><table><tr><td>x</td></tr></table>"
        fake = "<p>1. Prepare the soil bed<br>2. Sow the seeds evenly</p>"
        card = _cards(LLMFormattingAnalyzer().analyze(real + fake, PAGE_URL))["data-grouping"]

        # 15 - 3 + min(2, 3 * 0.5) = 13.5
        assert card.score == 14
        assert card.raw_data["semanticRatio"] == 0.75
