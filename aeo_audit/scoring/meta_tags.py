"""Meta tag and social meta scoring.

Sub-analyzers of the structured data category: the classic head tags
(title, description, viewport, charset, robots) and the Open Graph /
Twitter Card tags used when a page is shared or previewed.
"""

from dataclasses import dataclass

from aeo_audit.extraction.dom import PageDocument
from aeo_audit.fixes.structured_data import META_TAG_FIXES, SOCIAL_META_FIXES
from aeo_audit.scoring.models import DrawerSubSection, MetricCard, Recommendation

# Social meta points (total = 100)
SOCIAL_WEIGHTS = {
    "og:title": 20,
    "og:description": 15,
    "og:image": 20,
    "og:url": 10,
    "og:type": 15,
    "twitter:card": 10,
}
OG_IMAGE_ALT_POINTS = 5
ATTRIBUTION_POINTS = {"og:site_name": 1, "twitter:site": 2, "twitter:creator": 2}
ATTRIBUTION_CAP = 5
SOCIAL_MAX = 100

_SOCIAL_FIX_KEYS = {
    "og:title": "og_title_missing",
    "og:description": "og_description_missing",
    "og:image": "og_image_missing",
    "og:url": "og_url_missing",
    "og:type": "og_type_missing",
    "twitter:card": "twitter_card_missing",
    "og:site_name": "site_name_missing",
    "twitter:site": "twitter_site_missing",
}


def title_length_points(length: int) -> int:
    if 50 <= length <= 60:
        return 10
    if 30 <= length <= 70:
        return 7
    if length >= 20:
        return 5
    return 0


def description_length_points(length: int) -> int:
    if 140 <= length <= 160:
        return 7
    if 120 <= length <= 170:
        return 5
    if length >= 50:
        return 3
    return 0


def _title_card(doc: PageDocument) -> MetricCard:
    title = doc.text_of("title")
    length = len(title)
    recommendations: list[Recommendation] = []
    score = 0

    if not title:
        recommendations.append(META_TAG_FIXES["title_missing"].render())
    else:
        score = 5 + title_length_points(length)
        if length < 20:
            recommendations.append(META_TAG_FIXES["title_very_short"].render(length=length))
        elif length < 30 or length > 70:
            recommendations.append(META_TAG_FIXES["title_length"].render(length=length))

    return MetricCard(
        id="title-tag-analysis",
        name="Title Tag",
        score=score,
        max_score=15,
        explanation="A concise, descriptive title tells crawlers what the page is about.",
        recommendations=recommendations,
        success_message="The title tag is present and well sized.",
        raw_data={"title": title, "length": length},
    )


def _description_card(doc: PageDocument) -> MetricCard:
    description = doc.meta_content("description") or ""
    length = len(description)
    recommendations: list[Recommendation] = []
    score = 0

    if not description:
        recommendations.append(META_TAG_FIXES["description_missing"].render())
    else:
        score = 3 + description_length_points(length)
        if length < 50:
            recommendations.append(META_TAG_FIXES["description_very_short"].render(length=length))
        elif length < 120 or length > 170:
            recommendations.append(META_TAG_FIXES["description_length"].render(length=length))

    return MetricCard(
        id="meta-description-analysis",
        name="Meta Description",
        score=score,
        max_score=10,
        explanation="The meta description is the summary engines show next to a result or citation.",
        recommendations=recommendations,
        success_message="The meta description is present and well sized.",
        raw_data={"description": description, "length": length},
    )


def _technical_card(doc: PageDocument) -> MetricCard:
    recommendations: list[Recommendation] = []
    score = 0

    has_viewport = bool(doc.meta_content("viewport"))
    has_charset = doc.exists("meta[charset]") or doc.exists('meta[http-equiv="content-type" i]')
    has_robots = bool(doc.meta_content("robots"))

    if has_viewport:
        score += 4
    else:
        recommendations.append(META_TAG_FIXES["viewport_missing"].render())
    if has_charset:
        score += 3
    else:
        recommendations.append(META_TAG_FIXES["charset_missing"].render())
    if has_robots:
        score += 3
    else:
        recommendations.append(META_TAG_FIXES["robots_meta_missing"].render())

    return MetricCard(
        id="technical-meta-analysis",
        name="Technical Meta Tags",
        score=score,
        max_score=10,
        explanation="Viewport, charset and robots tags tell crawlers how to render and index the page.",
        recommendations=recommendations,
        success_message="Viewport, charset and robots meta tags are all declared.",
        raw_data={"viewport": has_viewport, "charset": has_charset, "robots": has_robots},
    )


def analyze_meta_tags(doc: PageDocument) -> DrawerSubSection:
    """Score title, description and technical head tags."""
    return DrawerSubSection(
        id="meta-tags-analysis",
        name="Meta Tags",
        description="Title, description and technical head tags",
        cards=[_title_card(doc), _description_card(doc), _technical_card(doc)],
    )


@dataclass
class SocialTags:
    """Open Graph and Twitter Card values found on a page."""

    values: dict[str, str]

    def has(self, key: str) -> bool:
        return bool(self.values.get(key))


def _collect_social(doc: PageDocument) -> SocialTags:
    keys = [
        *SOCIAL_WEIGHTS,
        *ATTRIBUTION_POINTS,
        "og:image:alt",
        "og:image:width",
        "og:image:height",
    ]
    return SocialTags(values={key: doc.meta_content(key) or "" for key in keys})


def analyze_social_meta(doc: PageDocument) -> MetricCard:
    """Score Open Graph and Twitter Card coverage out of 100."""
    tags = _collect_social(doc)
    recommendations: list[Recommendation] = []
    score = 0

    for key, points in SOCIAL_WEIGHTS.items():
        if tags.has(key):
            score += points
        else:
            recommendations.append(SOCIAL_META_FIXES[_SOCIAL_FIX_KEYS[key]].render())

    has_image = tags.has("og:image")
    if has_image:
        if tags.has("og:image:alt"):
            score += OG_IMAGE_ALT_POINTS
        else:
            recommendations.append(SOCIAL_META_FIXES["og_image_alt_missing"].render())

    attribution = 0
    is_article = tags.values.get("og:type", "").lower() == "article"
    for key, points in ATTRIBUTION_POINTS.items():
        if tags.has(key):
            attribution += points
        elif key == "twitter:creator":
            if is_article:
                recommendations.append(SOCIAL_META_FIXES["twitter_creator_missing"].render())
        else:
            recommendations.append(SOCIAL_META_FIXES[_SOCIAL_FIX_KEYS[key]].render())
    score += min(attribution, ATTRIBUTION_CAP)

    if has_image and not (tags.has("og:image:width") and tags.has("og:image:height")):
        recommendations.append(SOCIAL_META_FIXES["og_image_dimensions_missing"].render())

    return MetricCard(
        id="social-meta-analysis",
        name="Social Meta Tags",
        score=score,
        max_score=SOCIAL_MAX,
        explanation=(
            "Open Graph and Twitter Card tags control how the page is summarized when shared "
            "and give AI systems a clean title, description and image."
        ),
        recommendations=recommendations,
        success_message="Open Graph and Twitter Card tags are complete.",
        raw_data={
            "tags": {k: v for k, v in tags.values.items() if v},
            "attributionPoints": min(attribution, ATTRIBUTION_CAP),
        },
    )
