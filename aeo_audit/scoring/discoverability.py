"""Discoverability score calculator.

Checks whether AI crawlers can reach the page at all: secure protocol,
HTTP status, robots.txt access for the major AI bots and a sitemap.
An llms.txt file is reported for information only and adds no points.
This is the one category that can emit a global penalty, because a
robots.txt that shuts out AI crawlers makes every other score moot.
"""

import hashlib
from urllib.parse import urlparse

import structlog

from aeo_audit.extraction.cache import TTLCache
from aeo_audit.extraction.dom import validate_url
from aeo_audit.fixes.discoverability import DISCOVERABILITY_FIXES, ROBOTS_PENALTY_SOLUTIONS
from aeo_audit.scoring.models import (
    Category,
    CategoryResult,
    DrawerSubSection,
    GlobalPenalty,
    MainSection,
    MetricCard,
    PerformanceStatus,
    Recommendation,
    round_half_up,
)
from aeo_audit.signals.llms_txt import parse_llms_txt
from aeo_audit.signals.models import CollectedSignals, FetchResult
from aeo_audit.signals.robots import (
    AI_BOTS,
    AIBotAccess,
    RobotsRules,
    check_ai_bot_access,
    find_sitemap_directives,
    parse_robots_txt,
)
from aeo_audit.signals.sitemap import check_sitemap_freshness

logger = structlog.get_logger(__name__)

SECTION_ID = "discoverability"
SECTION_NAME = "Discoverability"
SECTION_DESCRIPTION = "Visibility and accessibility for search engines and AI crawlers"

# Card maxima (total = 100)
DISCOVERABILITY_WEIGHTS = {
    "https_protocol": 25,
    "http_status": 25,
    "ai_bots_access": 30,
    "sitemap_presence": 20,
}

REDIRECT_SCORE = 15

# Blocked fraction thresholds and the penalty they trigger
ALL_BLOCKED_THRESHOLD = 1.0
MAJORITY_BLOCKED_THRESHOLD = 0.5
ALL_BLOCKED_PENALTY = 0.7
MAJORITY_BLOCKED_PENALTY = 0.4

# Parsed rules keyed by robots.txt digest
_robots_cache: TTLCache[RobotsRules] = TTLCache()


def robots_penalty_factor(access: AIBotAccess) -> float:
    """Penalty factor for the share of AI bots robots.txt blocks."""
    fraction = access.blocked_fraction
    if fraction >= ALL_BLOCKED_THRESHOLD:
        return ALL_BLOCKED_PENALTY
    if fraction > MAJORITY_BLOCKED_THRESHOLD:
        return MAJORITY_BLOCKED_PENALTY
    return 0.0


def _parse_robots_cached(content: str) -> RobotsRules:
    key = hashlib.sha256(content.encode("utf-8")).hexdigest()
    return _robots_cache.get_or_compute(key, lambda: parse_robots_txt(content))


class DiscoverabilityAnalyzer:
    """Scores crawler reachability of a page."""

    def __init__(self, weight_percentage: int = 20):
        self.weight_percentage = weight_percentage

    def analyze(
        self,
        html: str,
        url: str,
        signals: CollectedSignals | None = None,
    ) -> CategoryResult:
        """
        Analyze discoverability of a page.

        Args:
            html: Page HTML (unused; reachability comes from the signals)
            url: Page URL
            signals: Pre-fetched page, robots.txt and sitemap results

        Returns:
            CategoryResult with the section and any robots.txt penalty
        """
        try:
            return self._analyze(url, signals or CollectedSignals())
        except Exception as e:
            logger.warning("discoverability_analysis_failed", url=url, error=str(e))
            return CategoryResult.failure(
                Category.DISCOVERABILITY, SECTION_ID, SECTION_NAME, self.weight_percentage, str(e)
            )

    def _analyze(self, url: str, signals: CollectedSignals) -> CategoryResult:
        url = validate_url(url)

        https_card = self._score_https(url)
        status_card = self._score_http_status(signals.html_fetch)
        bots_card, access = self._score_ai_bots(signals.robots_txt)
        sitemap_card = self._score_sitemap(url, signals.robots_txt, signals.sitemap)
        llms_card = self._score_llms_txt(signals.llms_txt)

        drawers = [
            DrawerSubSection(
                id="technical-foundation",
                name="Technical Foundation",
                description="Secure protocol, a successful HTTP response and LLM instructions",
                cards=[https_card, status_card, llms_card],
            ),
            DrawerSubSection(
                id="ai-access",
                name="AI Access",
                description="robots.txt rules for AI crawlers and sitemap availability",
                cards=[bots_card, sitemap_card],
            ),
        ]
        section = MainSection.additive(
            id=SECTION_ID,
            name=SECTION_NAME,
            description=SECTION_DESCRIPTION,
            weight_percentage=self.weight_percentage,
            drawers=drawers,
        )

        penalties = []
        if access is not None:
            penalty = self._robots_penalty(access)
            if penalty is not None:
                penalties.append(penalty)

        logger.info(
            "discoverability_analyzed",
            url=url,
            total_score=section.total_score,
            blocked_bots=access.blocked if access else None,
            penalties=len(penalties),
        )

        return CategoryResult(
            category=Category.DISCOVERABILITY,
            section=section,
            global_penalties=penalties,
            raw_data={
                "httpsEnabled": https_card.raw_data["isSecure"],
                "httpStatusCode": status_card.raw_data["statusCode"],
                "sitemapPresent": sitemap_card.raw_data["sitemapFound"],
                "llmsTxtPresent": llms_card.raw_data["llmsTxtFound"],
                "blockedAIBots": access.blocked if access else [],
                "allowedAIBots": access.allowed if access else [],
            },
        )

    def _score_https(self, url: str) -> MetricCard:
        max_score = DISCOVERABILITY_WEIGHTS["https_protocol"]
        is_secure = urlparse(url).scheme == "https"
        recommendations = [] if is_secure else [DISCOVERABILITY_FIXES["insecure_protocol"].render()]

        return MetricCard(
            id="https-protocol",
            name="HTTPS Protocol",
            score=max_score if is_secure else 0,
            max_score=max_score,
            explanation=(
                "HTTPS ensures encrypted communication between users and your site. "
                "AI crawlers and search engines treat it as a basic trust signal."
            ),
            recommendations=recommendations,
            success_message="Your site uses HTTPS, giving users and AI crawlers a trusted connection.",
            raw_data={"protocol": urlparse(url).scheme, "isSecure": is_secure},
        )

    def _score_http_status(self, html_fetch: FetchResult | None) -> MetricCard:
        max_score = DISCOVERABILITY_WEIGHTS["http_status"]
        recommendations: list[Recommendation] = []

        if html_fetch is None:
            # HTML was supplied directly, so the page was reachable
            status_code: int | None = 200
            success = True
        else:
            status_code = html_fetch.status_code
            success = html_fetch.success

        if success and status_code is not None and 200 <= status_code < 300:
            score = max_score
        elif status_code is not None and 300 <= status_code < 400:
            score = REDIRECT_SCORE
            recommendations.append(
                DISCOVERABILITY_FIXES["http_redirect"].render(status_code=status_code)
            )
        elif status_code is not None and status_code >= 400:
            score = 0
            recommendations.append(DISCOVERABILITY_FIXES["http_error"].render(status_code=status_code))
        else:
            score = 0
            reason = (html_fetch.error if html_fetch else None) or "no status code"
            recommendations.append(DISCOVERABILITY_FIXES["fetch_failed"].render(reason=reason))

        return MetricCard(
            id="http-status",
            name="HTTP Status",
            score=score,
            max_score=max_score,
            explanation=(
                "A page must answer with a 2xx status for crawlers to read it. Redirects cost "
                "crawl budget and errors stop crawlers entirely."
            ),
            recommendations=recommendations,
            success_message="The page responds with a successful status code.",
            raw_data={"statusCode": status_code, "success": success},
        )

    def _score_ai_bots(self, robots: FetchResult | None) -> tuple[MetricCard, AIBotAccess | None]:
        max_score = DISCOVERABILITY_WEIGHTS["ai_bots_access"]
        recommendations: list[Recommendation] = []
        access: AIBotAccess | None = None

        if robots is None or not robots.success:
            score = 0
            recommendations.append(DISCOVERABILITY_FIXES["robots_not_found"].render())
        else:
            content = robots.data or ""
            if not content.strip():
                access = AIBotAccess(allowed=list(AI_BOTS))
            else:
                access = check_ai_bot_access(_parse_robots_cached(content))

            score = round_half_up(max_score * len(access.allowed) / len(AI_BOTS))
            if access.blocked and not access.allowed:
                recommendations.append(DISCOVERABILITY_FIXES["all_bots_blocked"].render())
            elif access.blocked:
                recommendations.append(
                    DISCOVERABILITY_FIXES["some_bots_blocked"].render(
                        blocked_bots=", ".join(access.blocked)
                    )
                )

        return (
            MetricCard(
                id="ai-bots-access",
                name="AI Bots Access",
                score=score,
                max_score=max_score,
                explanation=(
                    "robots.txt decides which crawlers may read your content. Each blocked "
                    "AI crawler removes your pages from that assistant's answers."
                ),
                recommendations=recommendations,
                success_message="All major AI crawlers are allowed to access your content.",
                raw_data={
                    "robotsFound": bool(robots and robots.success),
                    **(access.to_dict() if access else {"allowed": [], "blocked": []}),
                },
            ),
            access,
        )

    def _score_sitemap(
        self,
        url: str,
        robots: FetchResult | None,
        sitemap: FetchResult | None,
    ) -> MetricCard:
        max_score = DISCOVERABILITY_WEIGHTS["sitemap_presence"]
        recommendations: list[Recommendation] = []
        found = bool(sitemap and sitemap.success)
        raw: dict = {"sitemapFound": found}

        if not found:
            recommendations.append(DISCOVERABILITY_FIXES["sitemap_not_found"].render())

        if robots is not None and robots.success:
            declared = find_sitemap_directives(robots.data or "")
            raw["declaredInRobots"] = declared
            if not declared:
                parsed = urlparse(url)
                recommendations.append(
                    DISCOVERABILITY_FIXES["sitemap_not_referenced"].render(
                        sitemap_url=f"{parsed.scheme}://{parsed.netloc}/sitemap.xml"
                    )
                )

        if found and sitemap is not None and sitemap.data:
            freshness = check_sitemap_freshness(sitemap.data)
            if freshness is not None:
                raw["freshness"] = freshness.to_dict()
                if freshness.missing_lastmod:
                    recommendations.append(
                        DISCOVERABILITY_FIXES["missing_lastmod"].render(
                            missing=freshness.missing_lastmod, total=freshness.total_urls
                        )
                    )

        return MetricCard(
            id="sitemap-presence",
            name="Sitemap Presence",
            score=max_score if found else 0,
            max_score=max_score,
            explanation=(
                "An XML sitemap lists every page you want crawled, so AI crawlers find "
                "content that is not well linked."
            ),
            recommendations=recommendations,
            success_message="An XML sitemap is available to crawlers.",
            raw_data=raw,
        )

    def _score_llms_txt(self, llms_txt: FetchResult | None) -> MetricCard:
        explanation = (
            "llms.txt is an emerging practice for giving AI models a site summary and a "
            "curated list of key pages. It is informational and does not affect your score."
        )
        content = (llms_txt.data or "") if llms_txt is not None and llms_txt.success else ""

        if not content.strip():
            return MetricCard(
                id="llms-txt",
                name="LLM Instructions File",
                score=0,
                max_score=0,
                explanation=explanation,
                recommendations=[DISCOVERABILITY_FIXES["llms_txt_not_found"].render()],
                success_message="LLM instructions file analysis completed.",
                raw_data={"llmsTxtFound": False, "valid": False},
                status=PerformanceStatus.WARNING,
            )

        analysis = parse_llms_txt(content)
        recommendations: list[Recommendation] = []
        if analysis.issues:
            recommendations.append(
                DISCOVERABILITY_FIXES["llms_txt_incomplete"].render(issues="; ".join(analysis.issues))
            )

        return MetricCard(
            id="llms-txt",
            name="LLM Instructions File",
            score=0,
            max_score=0,
            explanation=explanation,
            recommendations=recommendations,
            success_message=(
                "An llms.txt file was found. This advanced practice gives compatible AI models "
                "a summary of your site."
            ),
            raw_data={"llmsTxtFound": True, **analysis.to_dict()},
            status=PerformanceStatus.EXCELLENT if analysis.is_valid else PerformanceStatus.WARNING,
        )

    def _robots_penalty(self, access: AIBotAccess) -> GlobalPenalty | None:
        factor = robots_penalty_factor(access)
        if factor <= 0:
            return None
        return GlobalPenalty(
            type="robots_txt_blocking",
            description=f"Robots.txt blocks {len(access.blocked)}/{access.total} major AI bots",
            penalty_factor=factor,
            details=(
                f"Blocked bots: {', '.join(access.blocked)}",
                f"Blocked percentage: {round_half_up(access.blocked_fraction * 100)}%",
                f"Impact on final score: -{round_half_up(factor * 100)}%",
            ),
            solutions=ROBOTS_PENALTY_SOLUTIONS,
        )


def analyze_discoverability(
    html: str,
    url: str,
    signals: CollectedSignals | None = None,
    weight_percentage: int = 20,
) -> CategoryResult:
    """Convenience function to score discoverability."""
    return DiscoverabilityAnalyzer(weight_percentage).analyze(html, url, signals)
