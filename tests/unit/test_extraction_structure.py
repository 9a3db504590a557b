"""Tests for heading, link, image, grouping and semantic HTML5 extraction."""

from aeo_audit.extraction.dom import parse_html
from aeo_audit.extraction.grouping import StructureType, analyze_grouping
from aeo_audit.extraction.headings import HeadingIssueType, analyze_headings, is_generic_heading
from aeo_audit.extraction.images import analyze_images
from aeo_audit.extraction.links import (
    analyze_ctas,
    analyze_links,
    is_authoritative,
    is_descriptive_text,
)
from aeo_audit.extraction.semantic import STRUCTURAL_MAX, score_semantic_html5

PAGE_URL = "https://example.com/blog/post"


class TestAnalyzeHeadings:
    """Tests for heading hierarchy validation."""

    def test_valid_hierarchy(self):
        """Test a single H1 with nested headings is valid."""
        result = analyze_headings(parse_html("<h1>Title</h1><h2>A</h2><h3>B</h3><h2>C</h2>"))

        assert result.total == 4
        assert result.has_single_h1
        assert result.hierarchy_valid
        assert result.issues == []

    def test_skipped_level(self):
        """Test an H2 followed by an H4 is a violation."""
        result = analyze_headings(parse_html("<h1>Title</h1><h2>A</h2><h4>Deep</h4>"))

        assert not result.hierarchy_valid
        assert [v.issue_type for v in result.violations] == [HeadingIssueType.SKIP_LEVEL]
        assert result.violations[0].text == "Deep"

    def test_first_heading_not_h1(self):
        """Test a page starting with an H2 is flagged."""
        result = analyze_headings(parse_html("<h2>Intro</h2><h1>Title</h1>"))

        types = [i.issue_type for i in result.violations]
        assert HeadingIssueType.FIRST_NOT_H1 in types

    def test_missing_and_multiple_h1(self):
        """Test H1 count issues are recorded but are not order violations."""
        missing = analyze_headings(parse_html("<p>No headings</p>"))
        multiple = analyze_headings(parse_html("<h1>One</h1><h1>Two</h1>"))

        assert missing.issues[0].issue_type == HeadingIssueType.MISSING_H1
        assert not missing.hierarchy_valid
        assert multiple.issues[0].issue_type == HeadingIssueType.MULTIPLE_H1
        assert multiple.issues[0].text == "Two"
        assert multiple.hierarchy_valid

    def test_generic_heading(self):
        """Test headings starting with a generic word are generic."""
        assert is_generic_heading("Introduction to soil")
        assert is_generic_heading("  About us")
        assert not is_generic_heading("Choosing the best spot")


class TestAnalyzeLinks:
    """Tests for link classification."""

    def test_internal_and_external(self):
        """Test relative and same-host links are internal."""
        doc = parse_html(
            """
            <a href="/about">About the team behind it</a>
            <a href="https://www.example.com/contact">Contact our editors</a>
            <a href="https://github.com/org/repo">Source repository</a>
            """
        )
        result = analyze_links(doc, PAGE_URL)

        assert len(result.internal) == 2
        assert len(result.external) == 1
        assert result.external[0].host == "github.com"

    def test_skipped_schemes(self):
        """Test mailto, tel, javascript and bare fragments are ignored."""
        doc = parse_html(
            """
            <a href="mailto:a@example.com">Mail</a>
            <a href="tel:123">Call</a>
            <a href="javascript:void(0)">JS</a>
            <a href="#">Top</a>
            """
        )

        assert analyze_links(doc, PAGE_URL).links == []

    def test_context_detection(self):
        """Test links inside prose paragraphs are contextual."""
        doc = parse_html(
            """
            <p>Read the full <a href="/guide">planting guide</a> before you dig any beds.</p>
            <div><a href="/other">Another planting guide</a></div>
            """
        )
        links = analyze_links(doc, PAGE_URL).links

        assert links[0].in_context is True
        assert links[1].in_context is False

    def test_descriptive_text(self):
        """Test generic and URL-like anchor text is not descriptive."""
        assert is_descriptive_text("Soil testing guide")
        assert not is_descriptive_text("click here")
        assert not is_descriptive_text("Go")
        assert not is_descriptive_text("https://example.com")

    def test_authoritative_domains(self):
        """Test suffix and exact-domain authority matching."""
        assert is_authoritative("extension.illinois.edu")
        assert is_authoritative("www.epa.gov")
        assert is_authoritative("docs.github.com")
        assert not is_authoritative("notgithub.com")


class TestAnalyzeCtas:
    """Tests for call-to-action clarity."""

    def test_generic_and_empty(self):
        """Test generic texts and empty controls are counted."""
        doc = parse_html(
            """
            <a href="/a">Read more</a>
            <a href="/b">read more</a>
            <a href="/c">Download the planting calendar</a>
            <button></button>
            <button aria-label="Close the newsletter dialog"></button>
            <a href="/d" aria-label="Read more about composting at home">More</a>
            """
        )
        result = analyze_ctas(doc)

        assert result.total_links == 4
        assert result.total_buttons == 2
        assert result.generic_count == 2
        assert result.empty_count == 1
        assert result.top_examples() == "'read more' (2x)"


class TestAnalyzeImages:
    """Tests for image accessibility extraction."""

    def test_alt_coverage(self):
        """Test missing, decorative, poor and long alt text."""
        long_alt = "x" * 130
        doc = parse_html(
            f"""
            <img src="a.jpg" alt="A tomato plant with ripe fruit">
            <img src="b.jpg">
            <img src="c.jpg" role="presentation">
            <img src="d.jpg" alt="IMG_1234.jpg">
            <img src="e.jpg" alt="{long_alt}" loading="lazy" width="2400">
            """
        )
        result = analyze_images(doc)

        assert result.total == 5
        assert [img.src for img in result.missing_alt] == ["b.jpg"]
        assert [img.src for img in result.poor_alt] == ["d.jpg"]
        assert [img.src for img in result.long_alt] == ["e.jpg"]
        assert [img.src for img in result.oversized] == ["e.jpg"]
        assert result.lazy_ratio == 0.2

    def test_rendered_images_preferred(self):
        """Test rendered images are analyzed and dynamic ones counted."""
        static = parse_html('<img src="a.jpg" alt="Static photo of a garden">')
        rendered = parse_html(
            '<img src="a.jpg" alt="Static photo of a garden"><img src="late.jpg">'
        )
        result = analyze_images(static, rendered)

        assert result.total == 2
        assert result.static_count == 1
        assert result.dynamic_count == 1

    def test_modern_formats(self):
        """Test WebP and AVIF sources, including <picture> fallbacks, count as modern."""
        doc = parse_html(
            """
            <img src="/a.webp?v=2" alt="Seedlings on a windowsill">
            <img src="/b.AVIF" alt="Tomato harvest in a basket">
            <picture><source srcset="/c.webp" type="image/webp"><img src="/c.jpg" alt="Garden path"></picture>
            <img src="/d.png" alt="Soil test kit on a table">
            """
        )
        result = analyze_images(doc)

        assert [img.is_modern_format for img in result.images] == [True, True, True, False]
        assert result.modern_ratio == 0.75
        assert result.to_dict()["modernFormat"] == 3


class TestAnalyzeGrouping:
    """Tests for semantic and simulated list and table detection."""

    def test_semantic_structures_counted(self):
        """Test real lists and tables are counted and nothing is flagged."""
        doc = parse_html("<ul><li>a</li></ul><ol><li>b</li></ol><table><tr><td>c</td></tr></table>")
        result = analyze_grouping(doc)

        assert result.semantic_lists == 2
        assert result.semantic_tables == 1
        assert result.simulated == []
        assert result.semantic_ratio == 1.0

    def test_bulleted_paragraph_is_simulated_list(self):
        """Test bullet lines separated by <br> are a simulated list."""
        doc = parse_html(
            "<p>• Water deeply twice a week<br>• Mulch around every plant<br>"
            "• Pick weeds while small</p>"
        )
        result = analyze_grouping(doc)

        assert result.simulated_lists == 1
        structure = result.simulated[0]
        assert structure.structure_type == StructureType.LIST
        assert structure.item_count == 3
        assert structure.confidence == 1.0
        assert structure.sample == "• Water deeply twice a week"

    def test_tab_separated_rows_are_simulated_table(self):
        """Test tab separated rows in a div are a simulated table."""
        doc = parse_html("<div>Crop\tSun\tWater\nTomato\tFull\tHigh\nLettuce\tPart\tLow</div>")
        result = analyze_grouping(doc)

        assert result.simulated_tables == 1
        assert result.simulated[0].item_count == 3

    def test_inline_links_do_not_split_lines(self):
        """Test inline markup inside prose is not mistaken for separate lines."""
        doc = parse_html(
            '<p>Use <a href="/c">compost</a> and <em>mulch</em> for soil - 1. not a list</p>'
        )

        assert analyze_grouping(doc).simulated == []

    def test_containers_with_real_lists_skipped(self):
        """Test a div holding a real list is not scanned as text."""
        doc = parse_html("<div><p>- first item here</p><ul><li>- second item here</li></ul></div>")

        assert analyze_grouping(doc).simulated == []


class TestSemanticHtml5:
    """Tests for the shared semantic HTML5 scorer."""

    def test_full_structure(self, perfect_html):
        """Test a well structured page maxes structural semantics."""
        result = score_semantic_html5(parse_html(perfect_html))

        assert result.structural_score == STRUCTURAL_MAX
        assert result.structural_elements == ["main", "header", "nav", "footer"]
        assert result.accessibility_score == 8
        assert result.content_flow_score >= 10

    def test_div_soup(self):
        """Test a page without semantic elements scores zero and lists issues."""
        result = score_semantic_html5(parse_html("<div><div>Text</div></div>"))

        assert result.total == 0
        assert any("Missing main" in issue for issue in result.issues)
        assert "No landmark roles found for screen reader navigation" in result.issues

    def test_multiple_main_penalized(self):
        """Test more than one main element costs points."""
        result = score_semantic_html5(
            parse_html("<header></header><nav></nav><main></main><main></main><footer></footer>")
        )

        assert result.structural_score == STRUCTURAL_MAX - 2
        assert any("Multiple main" in issue for issue in result.issues)
