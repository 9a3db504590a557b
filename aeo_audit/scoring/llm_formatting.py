"""LLM formatting score calculator.

Measures how easily a language model can split a page into answerable
chunks: heading outline, semantic HTML5 landmarks, link quality,
markup hygiene, real lists and tables, and clarity of calls to action.

The drawers add up to 135 points; the aggregator normalizes the
section to 0-100.
"""

import structlog

from aeo_audit.extraction.dom import PageDocument, parse_html, validate_url
from aeo_audit.extraction.grouping import GroupingAnalysis, StructureType, analyze_grouping
from aeo_audit.extraction.headings import HeadingAnalysis, analyze_headings, is_generic_heading
from aeo_audit.extraction.links import (
    CTAAnalysis,
    LinkAnalysis,
    analyze_ctas,
    analyze_links,
    is_authoritative,
)
from aeo_audit.extraction.semantic import (
    ACCESSIBILITY_MAX,
    CONTENT_FLOW_MAX,
    STRUCTURAL_MAX,
    STRUCTURAL_WEIGHTS,
    SemanticHTML5Result,
    score_semantic_html5,
)
from aeo_audit.fixes.llm_formatting import LLM_FORMATTING_FIXES
from aeo_audit.scoring.models import (
    Category,
    CategoryResult,
    DrawerSubSection,
    MainSection,
    MetricCard,
    Recommendation,
    round_half_up,
)
from aeo_audit.signals.models import CollectedSignals

logger = structlog.get_logger(__name__)

SECTION_ID = "llm-formatting"
SECTION_NAME = "LLM Formatting"
SECTION_DESCRIPTION = "Content structure and markup that language models can parse reliably"

# Card maxima (total = 135)
LLM_FORMATTING_WEIGHTS = {
    "heading_hierarchy": 15,
    "heading_quality": 10,
    "heading_semantic_value": 10,
    "data_grouping": 15,
    "semantic_structure": STRUCTURAL_MAX,
    "semantic_accessibility": ACCESSIBILITY_MAX,
    "content_flow": CONTENT_FLOW_MAX,
    "internal_links": 8,
    "external_links": 7,
    "link_context": 5,
    "clean_markup": 8,
    "navigation_structure": 7,
    "cta_context_clarity": 20,
}

# Heading thresholds
DESCRIPTIVE_HEADING_LENGTH = 10
INFORMATIVE_HEADING_LENGTH = 20
KEYWORD_RICH_WORDS = 3
MIN_HEADINGS = 3

# Data grouping
SIMULATED_STRUCTURE_PENALTY = 3
SEMANTIC_STRUCTURE_BONUS = 0.5
MAX_SEMANTIC_STRUCTURE_BONUS = 2
MAX_GROUPING_RECOMMENDATIONS = 3

# Markup hygiene
DEPRECATED_TAGS = ("font", "center", "b", "i")
MAX_INLINE_STYLES = 5
MAX_NESTING_DEPTH = 10
INLINE_STYLE_PENALTY = 3
DEPRECATED_TAG_PENALTY = 2
NESTING_PENALTY = 3

NAV_LINKS_SELECTOR = "nav a[href], [role='navigation'] a[href]"
BREADCRUMB_SELECTOR = (
    "[aria-label*='breadcrumb' i], [class*='breadcrumb' i], [itemtype*='BreadcrumbList']"
)
MIN_NAV_LINKS = 3

# CTA penalties are per occurrence and each capped
MAX_GENERIC_CTA_PENALTY = 10
MAX_EMPTY_CTA_PENALTY = 10
EMPTY_CTA_PENALTY = 2


class LLMFormattingAnalyzer:
    """Scores how well a page's structure suits language models."""

    def __init__(self, weight_percentage: int = 25):
        self.weight_percentage = weight_percentage

    def analyze(
        self,
        html: str,
        url: str,
        signals: CollectedSignals | None = None,
    ) -> CategoryResult:
        """
        Analyze LLM formatting of a page.

        Args:
            html: Page HTML
            url: Page URL, used to tell internal from external links
            signals: Unused

        Returns:
            CategoryResult with five drawers totalling 135 points
        """
        try:
            return self._analyze(html, url)
        except Exception as e:
            logger.warning("llm_formatting_analysis_failed", url=url, error=str(e))
            return CategoryResult.failure(
                Category.LLM_FORMATTING, SECTION_ID, SECTION_NAME, self.weight_percentage, str(e)
            )

    def _analyze(self, html: str, url: str) -> CategoryResult:
        url = validate_url(url)
        doc = parse_html(html)

        headings = analyze_headings(doc)
        semantic = score_semantic_html5(doc)
        links = analyze_links(doc, url)
        ctas = analyze_ctas(doc)
        grouping = analyze_grouping(doc)

        drawers = [
            DrawerSubSection(
                id="heading-structure",
                name="Heading Structure",
                description="Outline, descriptiveness and information value of headings, and data grouping",
                cards=[
                    self._score_heading_hierarchy(headings),
                    self._score_heading_quality(headings),
                    self._score_heading_semantic_value(headings),
                    self._score_data_grouping(grouping),
                ],
            ),
            DrawerSubSection(
                id="semantic-html5",
                name="Semantic HTML5",
                description="Landmarks, ARIA attributes and content-flow elements",
                cards=self._score_semantic(semantic),
            ),
            DrawerSubSection(
                id="link-quality",
                name="Link Quality",
                description="Anchor text, link authority and surrounding context",
                cards=[
                    self._score_internal_links(links),
                    self._score_external_links(links),
                    self._score_link_context(links),
                ],
            ),
            DrawerSubSection(
                id="technical-markup",
                name="Technical Markup",
                description="Markup hygiene and navigation structure",
                cards=[self._score_clean_markup(doc), self._score_navigation(doc)],
            ),
            DrawerSubSection(
                id="cta-context-clarity",
                name="CTA Context Clarity",
                description="Whether links and buttons say what they do",
                cards=[self._score_cta_clarity(ctas)],
            ),
        ]
        section = MainSection.additive(
            id=SECTION_ID,
            name=SECTION_NAME,
            description=SECTION_DESCRIPTION,
            weight_percentage=self.weight_percentage,
            drawers=drawers,
        )

        logger.info(
            "llm_formatting_analyzed",
            url=url,
            headings=headings.total,
            links=len(links.links),
            total_score=section.total_score,
        )

        return CategoryResult(
            category=Category.LLM_FORMATTING,
            section=section,
            raw_data={
                "headings": headings.to_dict(),
                "semanticHtml5": semantic.to_dict(),
                "links": links.to_dict(),
                "ctas": ctas.to_dict(),
                "grouping": grouping.to_dict(),
            },
        )

    def _score_heading_hierarchy(self, headings: HeadingAnalysis) -> MetricCard:
        recommendations: list[Recommendation] = []
        score = 0

        if headings.total == 0:
            recommendations.append(LLM_FORMATTING_FIXES["no_headings"].render())
        else:
            violations = len(headings.violations)
            score += max(0, 8 - 2 * violations)
            if violations:
                recommendations.append(
                    LLM_FORMATTING_FIXES["hierarchy_violations"].render(count=violations)
                )

            if headings.has_single_h1:
                score += 4
            elif headings.h1_count == 0:
                recommendations.append(LLM_FORMATTING_FIXES["missing_h1"].render())
            else:
                recommendations.append(
                    LLM_FORMATTING_FIXES["multiple_h1"].render(count=headings.h1_count)
                )

            if headings.total >= MIN_HEADINGS:
                score += 3
            else:
                score += 1
                recommendations.append(LLM_FORMATTING_FIXES["few_headings"].render(count=headings.total))

        return MetricCard(
            id="heading-hierarchy",
            name="Heading Hierarchy",
            score=score,
            max_score=LLM_FORMATTING_WEIGHTS["heading_hierarchy"],
            explanation=(
                "A single H1 followed by nested H2/H3 headings gives models the outline they use "
                "to chunk and cite a page."
            ),
            recommendations=recommendations,
            success_message="Headings form a clean hierarchy under a single H1.",
            raw_data={
                "totalHeadings": headings.total,
                "h1Count": headings.h1_count,
                "hierarchyValid": headings.hierarchy_valid,
                "violations": [issue.to_dict() for issue in headings.violations],
            },
        )

    def _score_heading_quality(self, headings: HeadingAnalysis) -> MetricCard:
        max_score = LLM_FORMATTING_WEIGHTS["heading_quality"]
        recommendations: list[Recommendation] = []
        texts = [h.text for h in headings.headings]

        generic = [t for t in texts if is_generic_heading(t)]
        descriptive = [
            t for t in texts if len(t) > DESCRIPTIVE_HEADING_LENGTH and not is_generic_heading(t)
        ]
        if texts:
            ratio = len(descriptive) / len(texts)
            score = max(0, round_half_up(ratio * max_score) - len(generic))
        else:
            ratio = 0.0
            score = 0

        weak = len(texts) - len(descriptive)
        if weak:
            recommendations.append(LLM_FORMATTING_FIXES["generic_headings"].render(count=weak))

        return MetricCard(
            id="heading-quality",
            name="Heading Quality",
            score=score,
            max_score=max_score,
            explanation="Descriptive headings act as labels retrieval systems match against questions.",
            recommendations=recommendations,
            success_message="Headings clearly describe their sections.",
            raw_data={
                "descriptiveRatio": round(ratio, 2),
                "genericHeadings": generic[:10],
            },
        )

    def _score_heading_semantic_value(self, headings: HeadingAnalysis) -> MetricCard:
        max_score = LLM_FORMATTING_WEIGHTS["heading_semantic_value"]
        recommendations: list[Recommendation] = []
        texts = [h.text for h in headings.headings]

        if texts:
            informative = sum(1 for t in texts if len(t) > INFORMATIVE_HEADING_LENGTH) / len(texts)
            keyword_rich = sum(1 for t in texts if len(t.split()) >= KEYWORD_RICH_WORDS) / len(texts)
            score = round_half_up(informative * 5 + keyword_rich * 5)
        else:
            informative = keyword_rich = 0.0
            score = 0

        if texts and informative < 0.5:
            recommendations.append(
                LLM_FORMATTING_FIXES["low_semantic_headings"].render(
                    percent=round_half_up(informative * 100)
                )
            )

        return MetricCard(
            id="heading-semantic-value",
            name="Heading Semantic Value",
            score=score,
            max_score=max_score,
            explanation="Headings with several meaningful words carry the key terms of each section.",
            recommendations=recommendations,
            success_message="Headings carry meaningful, keyword-rich information.",
            raw_data={
                "informativeRatio": round(informative, 2),
                "keywordRichRatio": round(keyword_rich, 2),
            },
        )

    def _score_data_grouping(self, grouping: GroupingAnalysis) -> MetricCard:
        max_score = LLM_FORMATTING_WEIGHTS["data_grouping"]
        semantic = grouping.semantic_lists + grouping.semantic_tables
        bonus = min(MAX_SEMANTIC_STRUCTURE_BONUS, semantic * SEMANTIC_STRUCTURE_BONUS)
        score = round_half_up(
            max_score - SIMULATED_STRUCTURE_PENALTY * len(grouping.simulated) + bonus
        )

        recommendations = [
            LLM_FORMATTING_FIXES["simulated_structure"].render(
                structure=str(structure.structure_type),
                count=structure.item_count,
                sample=structure.sample,
                element="<table>" if structure.structure_type == StructureType.TABLE else "<ul> or <ol>",
            )
            for structure in grouping.simulated[:MAX_GROUPING_RECOMMENDATIONS]
        ]

        return MetricCard(
            id="data-grouping",
            name="Data Grouping",
            score=max(0, score),
            max_score=max_score,
            explanation=(
                "Real <ul>, <ol> and <table> elements keep related items together when a page "
                "is chunked; lists typed as plain text lose that grouping."
            ),
            recommendations=recommendations,
            success_message="Lists and tables use semantic HTML elements.",
            raw_data=grouping.to_dict(),
        )

    def _score_semantic(self, semantic: SemanticHTML5Result) -> list[MetricCard]:
        structural_recs: list[Recommendation] = []
        missing = [e for e in STRUCTURAL_WEIGHTS if not semantic.counts.get(e)]
        if missing:
            structural_recs.append(
                LLM_FORMATTING_FIXES["missing_structural_elements"].render(
                    elements=", ".join(f"<{e}>" for e in missing)
                )
            )
        if semantic.counts.get("main", 0) > 1:
            structural_recs.append(
                LLM_FORMATTING_FIXES["multiple_main"].render(count=semantic.counts["main"])
            )

        accessibility_recs: list[Recommendation] = []
        if semantic.accessibility_score < ACCESSIBILITY_MAX / 2:
            accessibility_recs.append(LLM_FORMATTING_FIXES["weak_semantic_accessibility"].render())

        flow_recs: list[Recommendation] = []
        if semantic.content_flow_score < CONTENT_FLOW_MAX / 2:
            flow_recs.append(LLM_FORMATTING_FIXES["weak_content_flow"].render())

        return [
            MetricCard(
                id="semantic-structure",
                name="Semantic Structure",
                score=min(semantic.structural_score, STRUCTURAL_MAX),
                max_score=STRUCTURAL_MAX,
                explanation="<main>, <header>, <nav> and <footer> separate content from page chrome.",
                recommendations=structural_recs,
                success_message="All structural landmarks are present.",
                raw_data={"structuralElements": semantic.structural_elements},
            ),
            MetricCard(
                id="semantic-accessibility",
                name="Semantic Accessibility",
                score=min(semantic.accessibility_score, ACCESSIBILITY_MAX),
                max_score=ACCESSIBILITY_MAX,
                explanation="ARIA labels, relationships and landmark roles name the parts of a page.",
                recommendations=accessibility_recs,
                success_message="ARIA attributes and landmark roles are used well.",
                raw_data={
                    key: semantic.counts.get(key, 0)
                    for key in ("ariaLabels", "ariaRelationships", "landmarks", "images", "imagesWithAlt")
                },
            ),
            MetricCard(
                id="content-flow",
                name="Content Flow",
                score=min(semantic.content_flow_score, CONTENT_FLOW_MAX),
                max_score=CONTENT_FLOW_MAX,
                explanation="<article>, <section> and <aside> mark where topics begin and end.",
                recommendations=flow_recs,
                success_message="Content is organized with article, section and aside elements.",
                raw_data={
                    "contentElements": semantic.content_elements,
                    "issues": semantic.issues,
                },
            ),
        ]

    def _score_internal_links(self, links: LinkAnalysis) -> MetricCard:
        max_score = LLM_FORMATTING_WEIGHTS["internal_links"]
        internal = links.internal
        recommendations: list[Recommendation] = []

        if not internal:
            score = 0
            ratio = 0.0
            recommendations.append(LLM_FORMATTING_FIXES["no_internal_links"].render())
        else:
            descriptive = sum(1 for link in internal if link.is_descriptive)
            ratio = descriptive / len(internal)
            score = round_half_up(ratio * max_score)
            if descriptive < len(internal):
                recommendations.append(
                    LLM_FORMATTING_FIXES["non_descriptive_internal_links"].render(
                        count=len(internal) - descriptive
                    )
                )

        return MetricCard(
            id="internal-links",
            name="Internal Links",
            score=score,
            max_score=max_score,
            explanation="Descriptive internal links map the topical relationships of your site.",
            recommendations=recommendations,
            success_message="Internal links use descriptive anchor text.",
            raw_data={"internalLinks": len(internal), "descriptiveRatio": round(ratio, 2)},
        )

    def _score_external_links(self, links: LinkAnalysis) -> MetricCard:
        max_score = LLM_FORMATTING_WEIGHTS["external_links"]
        external = links.external
        recommendations: list[Recommendation] = []

        if not external:
            # Neutral: a page does not need outbound links
            score = round_half_up(max_score / 2)
            quality = None
        else:
            descriptive = sum(1 for link in external if link.is_descriptive) / len(external)
            authority = sum(1 for link in external if is_authoritative(link.host)) / len(external)
            quality = (descriptive + authority) / 2
            score = round_half_up(quality * max_score)
            if quality < 0.5:
                recommendations.append(
                    LLM_FORMATTING_FIXES["weak_external_links"].render(
                        percent=round_half_up(quality * 100)
                    )
                )

        return MetricCard(
            id="external-links",
            name="External Links",
            score=score,
            max_score=max_score,
            explanation="Citing authoritative sources with clear anchor text supports credibility.",
            recommendations=recommendations,
            success_message="External links point to authoritative, clearly described sources.",
            raw_data={
                "externalLinks": len(external),
                "quality": round(quality, 2) if quality is not None else None,
            },
        )

    def _score_link_context(self, links: LinkAnalysis) -> MetricCard:
        max_score = LLM_FORMATTING_WEIGHTS["link_context"]
        recommendations: list[Recommendation] = []

        if links.links:
            ratio = sum(1 for link in links.links if link.in_context) / len(links.links)
            if ratio < 0.5:
                recommendations.append(
                    LLM_FORMATTING_FIXES["links_without_context"].render(
                        percent=round_half_up(ratio * 100)
                    )
                )
        else:
            ratio = 0.0

        return MetricCard(
            id="link-context",
            name="Link Context",
            score=round_half_up(ratio * max_score),
            max_score=max_score,
            explanation="Links inside prose come with the context that explains their relevance.",
            recommendations=recommendations,
            success_message="Links are embedded in meaningful paragraph context.",
            raw_data={"contextualRatio": round(ratio, 2)},
        )

    def _score_clean_markup(self, doc: PageDocument) -> MetricCard:
        max_score = LLM_FORMATTING_WEIGHTS["clean_markup"]
        recommendations: list[Recommendation] = []
        score = max_score

        inline_styles = doc.count("[style]")
        if inline_styles > MAX_INLINE_STYLES:
            score -= INLINE_STYLE_PENALTY
            recommendations.append(LLM_FORMATTING_FIXES["inline_styles"].render(count=inline_styles))

        deprecated = [tag for tag in DEPRECATED_TAGS if doc.exists(tag)]
        if deprecated:
            score -= DEPRECATED_TAG_PENALTY
            recommendations.append(
                LLM_FORMATTING_FIXES["deprecated_tags"].render(
                    tags=", ".join(f"<{t}>" for t in deprecated)
                )
            )

        depth = doc.max_depth()
        if depth > MAX_NESTING_DEPTH:
            score -= NESTING_PENALTY
            recommendations.append(LLM_FORMATTING_FIXES["deep_nesting"].render(depth=depth))

        return MetricCard(
            id="clean-markup",
            name="Clean Markup",
            score=score,
            max_score=max_score,
            explanation="Lean, semantic markup is parsed faster and with fewer extraction errors.",
            recommendations=recommendations,
            success_message="Markup is clean and free of presentational tags.",
            raw_data={"inlineStyles": inline_styles, "deprecatedTags": deprecated, "maxDepth": depth},
        )

    def _score_navigation(self, doc: PageDocument) -> MetricCard:
        recommendations: list[Recommendation] = []
        score = 0

        has_nav = doc.exists("nav")
        nav_links = doc.count(NAV_LINKS_SELECTOR)
        has_breadcrumb = doc.exists(BREADCRUMB_SELECTOR)

        if has_nav:
            score += 3
        else:
            recommendations.append(LLM_FORMATTING_FIXES["missing_nav"].render())
        if nav_links >= MIN_NAV_LINKS:
            score += 2
        else:
            recommendations.append(LLM_FORMATTING_FIXES["few_nav_links"].render())
        if has_breadcrumb:
            score += 2
        else:
            recommendations.append(LLM_FORMATTING_FIXES["missing_breadcrumb_markup"].render())

        return MetricCard(
            id="navigation-structure",
            name="Navigation Structure",
            score=score,
            max_score=LLM_FORMATTING_WEIGHTS["navigation_structure"],
            explanation="Navigation landmarks and breadcrumbs expose the site structure.",
            recommendations=recommendations,
            success_message="Navigation and breadcrumbs are clearly marked up.",
            raw_data={"hasNav": has_nav, "navLinks": nav_links, "hasBreadcrumb": has_breadcrumb},
        )

    def _score_cta_clarity(self, ctas: CTAAnalysis) -> MetricCard:
        max_score = LLM_FORMATTING_WEIGHTS["cta_context_clarity"]
        recommendations: list[Recommendation] = []

        generic_penalty = min(ctas.generic_count, MAX_GENERIC_CTA_PENALTY)
        empty_penalty = min(EMPTY_CTA_PENALTY * ctas.empty_count, MAX_EMPTY_CTA_PENALTY)

        if ctas.empty_count:
            recommendations.append(LLM_FORMATTING_FIXES["empty_ctas"].render(count=ctas.empty_count))
        if ctas.generic_count:
            recommendations.append(
                LLM_FORMATTING_FIXES["generic_ctas"].render(
                    count=ctas.generic_count, examples=ctas.top_examples()
                )
            )

        return MetricCard(
            id="cta-context-clarity",
            name="CTA Context Clarity",
            score=max_score - generic_penalty - empty_penalty,
            max_score=max_score,
            explanation=(
                "Links and buttons should say what happens on click so AI agents can act on "
                "them without guessing."
            ),
            recommendations=recommendations,
            success_message="Links and buttons clearly describe their action.",
            raw_data=ctas.to_dict(),
        )


def analyze_llm_formatting(
    html: str,
    url: str,
    signals: CollectedSignals | None = None,
    weight_percentage: int = 25,
) -> CategoryResult:
    """Convenience function to score LLM formatting."""
    return LLMFormattingAnalyzer(weight_percentage).analyze(html, url, signals)
