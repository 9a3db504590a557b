"""Shared semantic HTML5 scorer.

Used by both the LLM formatting and accessibility analyzers so the two
categories always agree on how semantic a page is.
"""

from dataclasses import dataclass, field

from aeo_audit.extraction.dom import PageDocument
from aeo_audit.scoring.models import round_to_tenth

# Semantic HTML5 elements for ratio calculation
SEMANTIC_ELEMENTS = [
    "main", "header", "nav", "footer", "article", "section", "aside",
    "h1", "h2", "h3", "h4", "h5", "h6", "figure", "figcaption", "blockquote",
    "address", "time", "mark", "code", "kbd", "samp", "var", "fieldset",
    "legend", "label", "output", "details", "summary", "dialog",
]

STRUCTURAL_WEIGHTS = {"main": 4, "header": 3, "nav": 3, "footer": 2}
STRUCTURAL_MAX = sum(STRUCTURAL_WEIGHTS.values())

LANDMARK_ROLES = ["banner", "main", "navigation", "complementary", "contentinfo", "search", "form"]

ACCESSIBILITY_MAX = 8
CONTENT_FLOW_MAX = 10


@dataclass
class SemanticHTML5Result:
    """Semantic HTML5 scores with the counts behind them."""

    structural_score: float
    accessibility_score: float
    content_flow_score: float
    semantic_ratio: float
    structural_elements: list[str] = field(default_factory=list)
    content_elements: list[str] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)
    issues: list[str] = field(default_factory=list)

    @property
    def total(self) -> float:
        return self.structural_score + self.accessibility_score + self.content_flow_score

    @property
    def max_total(self) -> int:
        return STRUCTURAL_MAX + ACCESSIBILITY_MAX + CONTENT_FLOW_MAX

    def to_dict(self) -> dict:
        return {
            "structuralScore": self.structural_score,
            "accessibilityScore": self.accessibility_score,
            "contentFlowScore": self.content_flow_score,
            "semanticRatio": self.semantic_ratio,
            "structuralElements": self.structural_elements,
            "contentElements": self.content_elements,
            "counts": self.counts,
            "issues": self.issues,
        }


def _structural(doc: PageDocument, counts: dict[str, int], issues: list[str]) -> float:
    score = 0
    for element, weight in STRUCTURAL_WEIGHTS.items():
        count = doc.count(element)
        counts[element] = count
        if count:
            score += weight
        else:
            issues.append(f"Missing {element} element for proper page structure")
    if counts["main"] > 1:
        issues.append(f"Multiple main elements found ({counts['main']}). Should be unique per page.")
        score -= 2
    return max(0, score)


def _accessibility(doc: PageDocument, counts: dict[str, int], issues: list[str]) -> float:
    aria_labels = doc.count("[aria-label]")
    relationships = doc.count("[aria-describedby]") + doc.count("[aria-labelledby]")
    roles = doc.count("[role]")
    landmarks = sum(doc.count(f'[role="{role}"]') for role in LANDMARK_ROLES)
    images = doc.count("img")
    images_with_alt = doc.count("img[alt]")

    counts.update(
        ariaLabels=aria_labels,
        ariaRelationships=relationships,
        roles=roles,
        landmarks=landmarks,
        images=images,
        imagesWithAlt=images_with_alt,
    )

    score = 0.0
    if aria_labels:
        score += min(2, aria_labels * 0.5)
    if relationships:
        score += min(2, relationships * 0.5)
    if landmarks:
        score += min(2, landmarks * 0.4)
    if images:
        alt_ratio = images_with_alt / images
        score += alt_ratio * 2
        if alt_ratio < 0.8:
            issues.append(f"{images - images_with_alt} images missing alt text")

    if aria_labels == 0 and roles == 0:
        issues.append("No ARIA attributes found for enhanced accessibility")
    if landmarks == 0:
        issues.append("No landmark roles found for screen reader navigation")

    return round_to_tenth(score)


def _content_flow(doc: PageDocument, counts: dict[str, int], issues: list[str]) -> float:
    articles = doc.count("article")
    sections = doc.count("section")
    asides = doc.count("aside")
    counts.update(article=articles, section=sections, aside=asides)

    score = 0.0
    if articles:
        score += min(4, articles * 2)
        if doc.exists("article article"):
            score += 1
    else:
        issues.append("No article elements found for main content organization")

    if sections:
        score += min(3, sections)
        if doc.exists("section section"):
            score += 0.5
    else:
        issues.append("No section elements found for content grouping")

    if asides:
        score += min(3, asides * 1.5)
    else:
        issues.append("No aside elements found for supplementary content")

    return round_to_tenth(score)


def score_semantic_html5(doc: PageDocument) -> SemanticHTML5Result:
    """Score structural, accessibility and content-flow semantics of a page."""
    counts: dict[str, int] = {}
    issues: list[str] = []

    structural = _structural(doc, counts, issues)
    accessibility = _accessibility(doc, counts, issues)
    content_flow = _content_flow(doc, counts, issues)

    total_elements = len(doc.soup.find_all(True))
    semantic_elements = len(doc.soup.find_all(SEMANTIC_ELEMENTS))
    counts.update(totalElements=total_elements, semanticElements=semantic_elements)

    return SemanticHTML5Result(
        structural_score=structural,
        accessibility_score=accessibility,
        content_flow_score=content_flow,
        semantic_ratio=round(semantic_elements / total_elements, 2) if total_elements else 0.0,
        structural_elements=[e for e in STRUCTURAL_WEIGHTS if counts[e]],
        content_elements=[e for e in ("article", "section", "aside") if counts[e]],
        counts=counts,
        issues=issues,
    )
