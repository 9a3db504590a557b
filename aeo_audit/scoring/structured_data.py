"""Structured data score calculator.

Scores the JSON-LD graph of a page (identity, main entity, enrichment
schemas and graph connectivity) together with its meta and social tags.
JSON-LD carries 80% of the category and social meta 20%; the classic
meta tags are reported for guidance but do not move the score.
"""

import structlog

from aeo_audit.extraction.dom import parse_html
from aeo_audit.extraction.schema import SchemaEntity, find_entity, parse_entities
from aeo_audit.fixes.structured_data import JSONLD_FIXES
from aeo_audit.scoring.meta_tags import SOCIAL_MAX, analyze_meta_tags, analyze_social_meta
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

SECTION_ID = "structured-data"
SECTION_NAME = "Structured Data"
SECTION_DESCRIPTION = "Machine-readable JSON-LD, meta tags and social metadata"

JSONLD_SHARE = 80
SOCIAL_SHARE = 20

OWNER_TYPES = ("Organization", "Person")
ARTICLE_TYPES = ("Article", "BlogPosting", "NewsArticle")
MAIN_ENTITY_TYPES = (*ARTICLE_TYPES, "Product", "LocalBusiness", "Service")
# Any one of these earns the owner detail bonus, whatever the owner type
OWNER_EXTRA_FIELDS = ("address", "contactPoint", "description", "foundingDate", "founder")
OFFER_REQUIRED_FIELDS = ("price", "priceCurrency", "availability")

IDENTITY_MAX = 30
MAIN_ENTITY_MAX = 50
MAIN_ENTITY_BASE = 10
ENRICHMENT_MAX = 20
CONNECTIVITY_MAX = 10
ID_POINTS = 2


def _has_search_action(website: SchemaEntity) -> bool:
    actions = website.get("potentialAction")
    if isinstance(actions, dict):
        actions = [actions]
    if not isinstance(actions, list):
        return False
    for action in actions:
        if not isinstance(action, dict):
            continue
        action_type = action.get("@type")
        types = action_type if isinstance(action_type, list) else [action_type]
        if "SearchAction" in types:
            return True
    return False


def _first_offer(product: SchemaEntity) -> dict:
    offers = product.get("offers")
    if isinstance(offers, list):
        offers = next((o for o in offers if isinstance(o, dict)), None)
    return offers if isinstance(offers, dict) else {}


class StructuredDataAnalyzer:
    """Scores JSON-LD, meta tags and social metadata."""

    def __init__(self, weight_percentage: int = 25):
        self.weight_percentage = weight_percentage

    def analyze(
        self,
        html: str,
        url: str,
        signals: CollectedSignals | None = None,
    ) -> CategoryResult:
        """
        Analyze structured data of a page.

        Args:
            html: Page HTML
            url: Page URL
            signals: Unused; structured data only needs the HTML

        Returns:
            CategoryResult with JSON-LD, meta tag and social meta drawers
        """
        try:
            return self._analyze(html, url)
        except Exception as e:
            logger.warning("structured_data_analysis_failed", url=url, error=str(e))
            return CategoryResult.failure(
                Category.STRUCTURED_DATA, SECTION_ID, SECTION_NAME, self.weight_percentage, str(e)
            )

    def _analyze(self, html: str, url: str) -> CategoryResult:
        doc = parse_html(html)
        entities = parse_entities(doc)

        owner = find_entity(entities, *OWNER_TYPES)
        website = find_entity(entities, "WebSite")
        breadcrumb = find_entity(entities, "BreadcrumbList")
        main = find_entity(entities, *MAIN_ENTITY_TYPES)

        jsonld_cards = [
            self._score_identity(owner, website, breadcrumb),
            self._score_main_entity(main),
        ]
        enrichment = self._score_enrichment(entities)
        if enrichment is not None:
            jsonld_cards.append(enrichment)
        jsonld_cards.append(self._score_connectivity(entities, owner, website, main, breadcrumb))

        jsonld_drawer = DrawerSubSection(
            id="jsonld-analysis",
            name="JSON-LD Analysis",
            description="Schema.org entities describing the site, the page and their links",
            cards=jsonld_cards,
        )
        meta_drawer = analyze_meta_tags(doc)
        social_card = analyze_social_meta(doc)
        social_drawer = DrawerSubSection(
            id="social-meta-analysis",
            name="Social Meta",
            description="Open Graph and Twitter Card tags",
            cards=[social_card],
        )

        jsonld_ratio = jsonld_drawer.total_score / jsonld_drawer.max_score
        total = round_half_up(
            jsonld_ratio * JSONLD_SHARE + social_card.score / SOCIAL_MAX * SOCIAL_SHARE
        )

        section = MainSection(
            id=SECTION_ID,
            name=SECTION_NAME,
            description=SECTION_DESCRIPTION,
            weight_percentage=self.weight_percentage,
            total_score=total,
            max_score=100,
            drawers=[jsonld_drawer, meta_drawer, social_drawer],
        )

        logger.info(
            "structured_data_analyzed",
            url=url,
            entities=len(entities),
            main_entity=main.type if main else None,
            total_score=total,
        )

        return CategoryResult(
            category=Category.STRUCTURED_DATA,
            section=section,
            raw_data={
                "entityTypes": [e.type for e in entities],
                "mainEntityType": main.type if main else None,
                "combination": {
                    "method": "weighted",
                    "jsonLd": {
                        "score": jsonld_drawer.total_score,
                        "maxScore": jsonld_drawer.max_score,
                        "share": JSONLD_SHARE,
                    },
                    "socialMeta": {
                        "score": social_card.score,
                        "maxScore": SOCIAL_MAX,
                        "share": SOCIAL_SHARE,
                    },
                    "metaTags": {"score": meta_drawer.total_score, "share": 0},
                },
            },
        )

    def _score_identity(
        self,
        owner: SchemaEntity | None,
        website: SchemaEntity | None,
        breadcrumb: SchemaEntity | None,
    ) -> MetricCard:
        score = 0
        recommendations: list[Recommendation] = []

        if owner is None:
            recommendations.append(JSONLD_FIXES["no_owner"].render())
        else:
            score += 5
            if not owner.has("name"):
                recommendations.append(JSONLD_FIXES["owner_missing_name"].render(owner_type=owner.type))
            if not owner.has("url"):
                recommendations.append(JSONLD_FIXES["owner_missing_url"].render(owner_type=owner.type))
            if owner.type == "Organization":
                if owner.has("logo"):
                    score += 3
                else:
                    recommendations.append(JSONLD_FIXES["organization_missing_logo"].render())
            if any(owner.has(f) for f in OWNER_EXTRA_FIELDS):
                score += 2
            if owner.has("sameAs"):
                score += 5
            else:
                recommendations.append(
                    JSONLD_FIXES["owner_missing_same_as"].render(owner_type=owner.type)
                )

        if website is None:
            recommendations.append(JSONLD_FIXES["no_website"].render())
        else:
            score += 5
            if _has_search_action(website):
                score += 5
            else:
                recommendations.append(JSONLD_FIXES["website_missing_search_action"].render())

        if breadcrumb is None:
            recommendations.append(JSONLD_FIXES["no_breadcrumb"].render())
        else:
            score += 5

        return MetricCard(
            id="identity-and-structure-analysis",
            name="Identity & Structure",
            score=score,
            max_score=IDENTITY_MAX,
            explanation=(
                "Owner, WebSite and BreadcrumbList entities tell AI systems who publishes the "
                "site and where this page sits in it."
            ),
            recommendations=recommendations,
            success_message="The site owner, website and breadcrumb trail are all declared.",
            raw_data={
                "ownerType": owner.type if owner else None,
                "hasWebsite": website is not None,
                "hasBreadcrumb": breadcrumb is not None,
            },
        )

    def _score_main_entity(self, main: SchemaEntity | None) -> MetricCard:
        recommendations: list[Recommendation] = []

        if main is None:
            score = 0
            recommendations.append(JSONLD_FIXES["no_main_entity"].render())
        else:
            score = MAIN_ENTITY_BASE
            if main.type in ARTICLE_TYPES:
                score += self._score_article(main, recommendations)
            elif main.type == "Product":
                score += self._score_product(main, recommendations)
            elif main.type == "LocalBusiness":
                score += self._score_local_business(main, recommendations)
            elif main.type == "Service":
                score += self._score_service(main, recommendations)

        return MetricCard(
            id="main-entity-analysis",
            name="Main Entity",
            score=min(score, MAIN_ENTITY_MAX),
            max_score=MAIN_ENTITY_MAX,
            explanation=(
                "The main entity describes what the page is fundamentally about and is the "
                "most important schema for answer engines."
            ),
            recommendations=recommendations,
            success_message="The page declares a complete main entity.",
            raw_data={"type": main.type if main else None, "id": main.id if main else None},
        )

    def _score_article(self, main: SchemaEntity, recommendations: list[Recommendation]) -> int:
        score = 0
        if main.has("headline"):
            score += 10
        else:
            recommendations.append(
                JSONLD_FIXES["article_missing_headline"].render(entity_type=main.type)
            )
        if main.is_object("author"):
            score += 15
        else:
            recommendations.append(
                JSONLD_FIXES["article_author_not_linked"].render(entity_type=main.type)
            )
        if main.is_object("publisher"):
            score += 10
        else:
            recommendations.append(
                JSONLD_FIXES["article_publisher_not_linked"].render(entity_type=main.type)
            )
        if main.has("image"):
            score += 5
        if main.has("datePublished"):
            score += 5
        return score

    def _score_product(self, main: SchemaEntity, recommendations: list[Recommendation]) -> int:
        score = sum(5 for key in ("name", "description", "image") if main.has(key))
        if main.has("offers"):
            score += 20
            offer = _first_offer(main)
            missing = [f for f in OFFER_REQUIRED_FIELDS if offer.get(f) in (None, "")]
            if missing:
                recommendations.append(
                    JSONLD_FIXES["product_offer_incomplete"].render(missing_fields=", ".join(missing))
                )
        else:
            recommendations.append(JSONLD_FIXES["product_missing_offers"].render())
        if main.has("aggregateRating") or main.has("review"):
            score += 5
        if main.has("brand"):
            score += 5
        return score

    def _score_local_business(
        self, main: SchemaEntity, recommendations: list[Recommendation]
    ) -> int:
        score = 5 if main.has("name") else 0
        if main.has("address"):
            score += 15
        else:
            recommendations.append(JSONLD_FIXES["local_business_missing_address"].render())
        if main.has("telephone"):
            score += 10
        else:
            recommendations.append(JSONLD_FIXES["local_business_missing_telephone"].render())
        if main.has("openingHours") or main.has("openingHoursSpecification"):
            score += 10
        else:
            recommendations.append(JSONLD_FIXES["local_business_missing_hours"].render())
        return score

    def _score_service(self, main: SchemaEntity, recommendations: list[Recommendation]) -> int:
        score = sum(10 for key in ("name", "description") if main.has(key))
        if main.is_object("provider"):
            score += 15
        else:
            recommendations.append(JSONLD_FIXES["service_provider_not_linked"].render())
        if main.has("areaServed"):
            score += 5
        return score

    def _score_enrichment(self, entities: list[SchemaEntity]) -> MetricCard | None:
        faq = find_entity(entities, "FAQPage")
        howto = find_entity(entities, "HowTo")
        if faq is None and howto is None:
            return None

        score = 0
        recommendations: list[Recommendation] = []
        checks = [
            (faq, "mainEntity", "faq_missing_questions"),
            (howto, "step", "howto_missing_steps"),
        ]
        for entity, items_key, fix_key in checks:
            if entity is None:
                continue
            items = entity.get(items_key)
            if isinstance(items, list) and items:
                score += 10
            else:
                score += 5
                recommendations.append(JSONLD_FIXES[fix_key].render())

        return MetricCard(
            id="enrichment-analysis",
            name="Enrichment Schemas",
            score=min(score, ENRICHMENT_MAX),
            max_score=ENRICHMENT_MAX,
            explanation="FAQPage and HowTo schemas expose question-answer pairs and steps directly.",
            recommendations=recommendations,
            success_message="Enrichment schemas are complete and well structured.",
            raw_data={"hasFaq": faq is not None, "hasHowTo": howto is not None},
        )

    def _score_connectivity(
        self,
        entities: list[SchemaEntity],
        *checked: SchemaEntity | None,
    ) -> MetricCard:
        score = 0
        recommendations: list[Recommendation] = []

        for entity in checked:
            if entity is None:
                continue
            if entity.id:
                score += ID_POINTS
            else:
                recommendations.append(
                    JSONLD_FIXES["entity_missing_id"].render(entity_type=entity.type)
                )

        references = [ref for entity in entities for ref in entity.references()]
        if references:
            score += ID_POINTS
        elif len(entities) > 1:
            recommendations.append(JSONLD_FIXES["no_entity_references"].render())

        return MetricCard(
            id="graph-connectivity-analysis",
            name="Graph Connectivity",
            score=min(score, CONNECTIVITY_MAX),
            max_score=CONNECTIVITY_MAX,
            explanation=(
                "'@id' identifiers and references connect entities into a knowledge graph "
                "instead of a list of isolated items."
            ),
            recommendations=recommendations,
            success_message="Entities carry '@id' identifiers and reference each other.",
            raw_data={"references": len(references), "entities": len(entities)},
        )


def analyze_structured_data(
    html: str,
    url: str,
    signals: CollectedSignals | None = None,
    weight_percentage: int = 25,
) -> CategoryResult:
    """Convenience function to score structured data."""
    return StructuredDataAnalyzer(weight_percentage).analyze(html, url, signals)
