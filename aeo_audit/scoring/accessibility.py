"""Accessibility score calculator.

Five components, each scored 0-100:
- Critical DOM: how much of the rendered page exists before JavaScript runs
- Semantic navigation: landmarks, ARIA, heading structure and skip links
- Image alt coverage: alt text plus a lazy-loading bonus
- Image optimization: WebP/AVIF formats and lazy loading
- Page speed: externally supplied performance score

The section total is a weighted average over the components that are
available and scored above zero, re-normalized by the weights present.
"""

from dataclasses import dataclass

import structlog

from aeo_audit.extraction.dom import PageDocument, parse_html
from aeo_audit.extraction.headings import HeadingAnalysis, analyze_headings
from aeo_audit.extraction.images import ImageAnalysis, analyze_images
from aeo_audit.extraction.semantic import SEMANTIC_ELEMENTS, score_semantic_html5
from aeo_audit.extraction.text import extract_main_text
from aeo_audit.fixes.accessibility import ACCESSIBILITY_FIXES
from aeo_audit.scoring.models import (
    Category,
    CategoryResult,
    DrawerSubSection,
    MainSection,
    MetricCard,
    PerformanceStatus,
    Recommendation,
    round_half_up,
)
from aeo_audit.signals.models import CollectedSignals, PageSpeedResult

logger = structlog.get_logger(__name__)

SECTION_ID = "accessibility"
SECTION_NAME = "Accessibility"
SECTION_DESCRIPTION = "Content available to crawlers that do not run JavaScript or see images"

# Component weights for the combined score (total = 100)
ACCESSIBILITY_WEIGHTS = {
    "critical_dom": 35,
    "semantic_navigation": 20,
    "images": 20,
    "page_speed": 15,
    "image_optimization": 10,
}

# (excellent, good, poor) thresholds for each critical DOM ratio
CRITICAL_DOM_THRESHOLDS = {
    "content": (80, 60, 40),
    "navigation": (90, 70, 50),
    "semantic": (85, 65, 45),
}
CRITICAL_DOM_RATIO_WEIGHTS = {"content": 0.4, "navigation": 0.3, "semantic": 0.3}

SEMANTIC_POINTS = 60
HEADING_POINTS = 20
NAV_POINTS = 10
NAV_LINKS_POINTS = 5
SKIP_LINK_POINTS = 5
MIN_NAV_LINKS = 3

LAZY_LOADING_BONUS = 10
MODERN_FORMAT_POINTS = 50
LAZY_LOADING_POINTS = 50
MIN_MODERN_RATIO = 0.3
MIN_LAZY_RATIO = 0.5
PAGE_SPEED_FALLBACK = 10
SLOW_PAGE_THRESHOLD = 50

FOCUSABLE_SELECTOR = "a[href], button, input, select, textarea, [tabindex]"


def bucket_ratio(ratio: float, thresholds: tuple[int, int, int]) -> int:
    """Map a 0-100 ratio onto 100/75/50/25."""
    excellent, good, poor = thresholds
    if ratio >= excellent:
        return 100
    if ratio >= good:
        return 75
    if ratio >= poor:
        return 50
    return 25


def _ratio(static: float, rendered: float) -> float:
    if rendered <= 0:
        return 100.0
    return min(100.0, static / rendered * 100)


@dataclass
class DOMMetrics:
    """Content measures compared between static and rendered HTML."""

    text_length: int
    headings: int
    paragraphs: int
    links: int
    images: int
    semantic_elements: int

    @classmethod
    def from_document(cls, doc: PageDocument) -> "DOMMetrics":
        return cls(
            text_length=len(extract_main_text(doc.html)),
            headings=len(doc.headings()),
            paragraphs=doc.count("p"),
            links=doc.count("a[href]"),
            images=doc.count("img"),
            semantic_elements=len(doc.soup.find_all(SEMANTIC_ELEMENTS)),
        )

    def to_dict(self) -> dict:
        return {
            "textLength": self.text_length,
            "headings": self.headings,
            "paragraphs": self.paragraphs,
            "links": self.links,
            "images": self.images,
            "semanticElements": self.semantic_elements,
        }


@dataclass
class Component:
    """One scored component and its share of the combined score."""

    key: str
    card: MetricCard
    available: bool = True

    @property
    def weight(self) -> int:
        return ACCESSIBILITY_WEIGHTS[self.key]

    @property
    def counts(self) -> bool:
        return self.available and self.card.score > 0


def combine_components(components: list[Component]) -> tuple[int, dict]:
    """Weighted average over counted components, re-normalized."""
    valid = [c for c in components if c.counts]
    total_weight = sum(c.weight for c in valid)
    if total_weight == 0:
        return 0, {"method": "weighted", "validComponents": 0, "weights": {}}

    score = round_half_up(sum(c.card.score * c.weight for c in valid) / total_weight)
    return score, {
        "method": "weighted",
        "validComponents": len(valid),
        "weights": {c.key: c.weight for c in valid},
        "totalWeight": total_weight,
    }


class AccessibilityAnalyzer:
    """Scores accessibility of a page for crawlers and assistive technology."""

    def __init__(self, weight_percentage: int = 15):
        self.weight_percentage = weight_percentage

    def analyze(
        self,
        html: str,
        url: str,
        signals: CollectedSignals | None = None,
    ) -> CategoryResult:
        """
        Analyze accessibility of a page.

        Args:
            html: Static page HTML as served
            url: Page URL
            signals: Optional rendered HTML and page speed result

        Returns:
            CategoryResult whose total is the weighted component average
        """
        try:
            return self._analyze(html, url, signals or CollectedSignals())
        except Exception as e:
            logger.warning("accessibility_analysis_failed", url=url, error=str(e))
            return CategoryResult.failure(
                Category.ACCESSIBILITY, SECTION_ID, SECTION_NAME, self.weight_percentage, str(e)
            )

    def _analyze(self, html: str, url: str, signals: CollectedSignals) -> CategoryResult:
        static = parse_html(html)
        # blank rendered HTML counts as not captured
        has_rendered = bool(signals.rendered_html and signals.rendered_html.strip())
        rendered = parse_html(signals.rendered_html) if has_rendered else None

        critical = self._score_critical_dom(static, rendered)
        navigation = self._score_semantic_navigation(static)
        image_analysis = analyze_images(static, rendered)
        images = self._score_images(image_analysis)
        optimization = self._score_image_optimization(image_analysis)
        speed = self._score_page_speed(signals.page_speed)

        components = [
            Component("critical_dom", critical, available=rendered is not None),
            Component("semantic_navigation", navigation),
            Component("images", images),
            Component("page_speed", speed, available=speed.raw_data["availability"] == "available"),
            Component("image_optimization", optimization),
        ]
        total, combination = combine_components(components)

        drawers = [
            DrawerSubSection(
                id="critical-dom",
                name="Critical DOM",
                description="Content present without JavaScript execution",
                cards=[critical],
            ),
            DrawerSubSection(
                id="navigational-accessibility",
                name="Navigational Accessibility",
                description="Semantic landmarks, headings and keyboard navigation",
                cards=[navigation],
            ),
            DrawerSubSection(
                id="image-accessibility",
                name="Image Accessibility",
                description="Alt text coverage, image formats and loading",
                cards=[images, optimization],
            ),
            DrawerSubSection(
                id="technical-performance",
                name="Technical Performance",
                description="Page speed measured by an external performance API",
                cards=[speed],
            ),
        ]
        section = MainSection(
            id=SECTION_ID,
            name=SECTION_NAME,
            description=SECTION_DESCRIPTION,
            weight_percentage=self.weight_percentage,
            total_score=total,
            max_score=100,
            drawers=drawers,
        )

        logger.info(
            "accessibility_analyzed",
            url=url,
            rendered=rendered is not None,
            valid_components=combination["validComponents"],
            total_score=total,
        )

        return CategoryResult(
            category=Category.ACCESSIBILITY,
            section=section,
            raw_data={
                "combination": combination,
                "validComponents": combination["validComponents"],
                "totalComponents": len(components),
                "components": {
                    c.key: {"score": c.card.score, "available": c.available} for c in components
                },
            },
        )

    def _score_critical_dom(
        self,
        static: PageDocument,
        rendered: PageDocument | None,
    ) -> MetricCard:
        explanation = (
            "Most AI crawlers do not execute JavaScript. Content that only appears after "
            "rendering is invisible to them."
        )
        if rendered is None:
            return MetricCard(
                id="critical-dom-ratio",
                name="Critical DOM Ratio",
                score=0,
                max_score=100,
                explanation=explanation,
                recommendations=[ACCESSIBILITY_FIXES["rendered_html_unavailable"].render()],
                raw_data={"availability": "unavailable"},
                status=PerformanceStatus.ERROR,
            )

        before = DOMMetrics.from_document(static)
        after = DOMMetrics.from_document(rendered)

        ratios = {
            "content": (
                _ratio(before.text_length, after.text_length)
                + _ratio(before.headings + before.paragraphs, after.headings + after.paragraphs)
            )
            / 2,
            "navigation": _ratio(before.links, after.links),
            "semantic": _ratio(before.semantic_elements, after.semantic_elements),
        }
        buckets = {
            key: bucket_ratio(value, CRITICAL_DOM_THRESHOLDS[key]) for key, value in ratios.items()
        }
        score = round_half_up(
            sum(buckets[key] * weight for key, weight in CRITICAL_DOM_RATIO_WEIGHTS.items())
        )

        recommendations: list[Recommendation] = []
        fix_keys = {
            "content": "content_requires_javascript",
            "navigation": "navigation_requires_javascript",
            "semantic": "semantics_require_javascript",
        }
        for key, fix_key in fix_keys.items():
            if buckets[key] < 75:
                recommendations.append(
                    ACCESSIBILITY_FIXES[fix_key].render(percent=round_half_up(ratios[key]))
                )

        return MetricCard(
            id="critical-dom-ratio",
            name="Critical DOM Ratio",
            score=score,
            max_score=100,
            explanation=explanation,
            recommendations=recommendations,
            success_message="The essential content is available without JavaScript.",
            raw_data={
                "availability": "available",
                "static": before.to_dict(),
                "rendered": after.to_dict(),
                "ratios": {key: round(value, 1) for key, value in ratios.items()},
                "buckets": buckets,
            },
        )

    def _score_semantic_navigation(self, doc: PageDocument) -> MetricCard:
        recommendations: list[Recommendation] = []

        semantic = score_semantic_html5(doc)
        semantic_points = round_half_up(semantic.total / semantic.max_total * SEMANTIC_POINTS)
        if semantic_points < SEMANTIC_POINTS / 2:
            recommendations.append(
                ACCESSIBILITY_FIXES["weak_semantic_structure"].render(score=semantic_points)
            )

        headings = analyze_headings(doc)
        heading_points = self._heading_points(headings, recommendations)

        nav_points = 0
        has_nav = doc.exists("nav, [role='navigation']")
        nav_links = doc.count("nav a[href], [role='navigation'] a[href]")
        skip_links = [
            a for a in doc.select("a[href^='#']") if "skip" in a.get_text(" ", strip=True).lower()
        ]
        if has_nav:
            nav_points += NAV_POINTS
        else:
            recommendations.append(ACCESSIBILITY_FIXES["missing_navigation_landmark"].render())
        if nav_links >= MIN_NAV_LINKS:
            nav_points += NAV_LINKS_POINTS
        if skip_links:
            nav_points += SKIP_LINK_POINTS
        else:
            recommendations.append(ACCESSIBILITY_FIXES["missing_skip_link"].render())

        return MetricCard(
            id="semantic-navigation",
            name="Semantic Navigation",
            score=semantic_points + heading_points + nav_points,
            max_score=100,
            explanation=(
                "Landmarks, a clear heading outline and keyboard shortcuts let assistive "
                "technology and agents move through the page."
            ),
            recommendations=recommendations,
            success_message="The page is easy to navigate with assistive technology.",
            raw_data={
                "semanticPoints": semantic_points,
                "headingPoints": heading_points,
                "navigationPoints": nav_points,
                "imagesWithAlt": doc.count("img[alt]"),
                "imagesWithEmptyAlt": doc.count("img[alt='']"),
                "ariaLabels": doc.count("[aria-label]"),
                "buttonsWithAriaLabel": doc.count("button[aria-label]"),
                "inputsWithAriaLabel": doc.count("input[aria-label]"),
                "focusableElements": doc.count(FOCUSABLE_SELECTOR),
                "tabindexElements": doc.count("[tabindex]"),
                "skipLinks": len(skip_links),
            },
        )

    def _heading_points(
        self, headings: HeadingAnalysis, recommendations: list[Recommendation]
    ) -> int:
        has_h1 = headings.h1_count > 0
        valid = headings.hierarchy_valid
        if has_h1 and valid:
            return HEADING_POINTS

        issues = []
        if not has_h1:
            issues.append("no H1")
        if not valid:
            issues.append("invalid hierarchy")
        recommendations.append(
            ACCESSIBILITY_FIXES["heading_structure_issues"].render(issues=", ".join(issues))
        )
        return HEADING_POINTS // 2 if has_h1 or valid else 0

    def _score_images(self, images: ImageAnalysis) -> MetricCard:
        recommendations: list[Recommendation] = []

        if images.total == 0:
            score = 100
        else:
            missing = len(images.missing_alt)
            coverage = (images.total - missing) / images.total * 100
            score = min(100, round_half_up(coverage + images.lazy_ratio * LAZY_LOADING_BONUS))

            if missing:
                recommendations.append(
                    ACCESSIBILITY_FIXES["images_missing_alt"].render(count=missing, total=images.total)
                )
            if images.poor_alt:
                recommendations.append(
                    ACCESSIBILITY_FIXES["images_poor_alt"].render(count=len(images.poor_alt))
                )
            if images.long_alt:
                recommendations.append(
                    ACCESSIBILITY_FIXES["images_long_alt"].render(count=len(images.long_alt))
                )
            if images.oversized:
                recommendations.append(
                    ACCESSIBILITY_FIXES["images_oversized"].render(count=len(images.oversized))
                )

        return MetricCard(
            id="image-alt-coverage",
            name="Image Alt Coverage",
            score=score,
            max_score=100,
            explanation="Alt text is how text-only crawlers and screen readers understand images.",
            recommendations=recommendations,
            success_message="All informative images carry alt text.",
            raw_data=images.to_dict(),
        )

    def _score_image_optimization(self, images: ImageAnalysis) -> MetricCard:
        recommendations: list[Recommendation] = []

        if images.total == 0:
            score = 100
        else:
            score = round_half_up(images.modern_ratio * MODERN_FORMAT_POINTS) + round_half_up(
                images.lazy_ratio * LAZY_LOADING_POINTS
            )
            legacy = images.total - sum(1 for img in images.images if img.is_modern_format)
            eager = images.total - sum(1 for img in images.images if img.is_lazy)
            if images.modern_ratio < MIN_MODERN_RATIO:
                recommendations.append(
                    ACCESSIBILITY_FIXES["images_legacy_format"].render(
                        count=legacy, total=images.total
                    )
                )
            if images.lazy_ratio < MIN_LAZY_RATIO:
                recommendations.append(
                    ACCESSIBILITY_FIXES["images_not_lazy"].render(count=eager, total=images.total)
                )

        return MetricCard(
            id="image-optimization",
            name="Image Optimization",
            score=score,
            max_score=100,
            explanation=(
                "WebP and AVIF images with lazy loading keep pages light, so crawlers fetch "
                "them faster and more often."
            ),
            recommendations=recommendations,
            success_message="Images use modern formats and load lazily.",
            raw_data={
                "totalImages": images.total,
                "modernFormatRatio": round(images.modern_ratio, 2),
                "lazyLoadedRatio": round(images.lazy_ratio, 2),
            },
        )

    def _score_page_speed(self, page_speed: PageSpeedResult | None) -> MetricCard:
        explanation = "Fast pages are crawled more often and are less likely to time out."
        if page_speed is None or page_speed.performance_score is None:
            return MetricCard(
                id="page-speed",
                name="Page Speed",
                score=PAGE_SPEED_FALLBACK,
                max_score=100,
                explanation=explanation,
                recommendations=[ACCESSIBILITY_FIXES["page_speed_unavailable"].render()],
                raw_data={"availability": "unavailable"},
                status=PerformanceStatus.WARNING,
            )

        score = round_half_up(page_speed.performance_score)
        recommendations: list[Recommendation] = []
        if score < SLOW_PAGE_THRESHOLD:
            opportunities = ", ".join(page_speed.opportunities[:3]) or "reduce page weight"
            recommendations.append(
                ACCESSIBILITY_FIXES["slow_page"].render(score=score, opportunities=opportunities)
            )

        return MetricCard(
            id="page-speed",
            name="Page Speed",
            score=score,
            max_score=100,
            explanation=explanation,
            recommendations=recommendations,
            success_message="The page loads quickly.",
            raw_data={"availability": "available", **page_speed.model_dump(by_alias=True)},
        )


def analyze_accessibility(
    html: str,
    url: str,
    signals: CollectedSignals | None = None,
    weight_percentage: int = 15,
) -> CategoryResult:
    """Convenience function to score accessibility."""
    return AccessibilityAnalyzer(weight_percentage).analyze(html, url, signals)
