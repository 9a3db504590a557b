"""Knowledge base for discoverability recommendations."""

from aeo_audit.fixes.templates import RecommendationTemplate, build_registry

DISCOVERABILITY_FIXES = build_registry(
    # Technical foundation
    RecommendationTemplate(
        key="insecure_protocol",
        problem="Your site uses the insecure HTTP protocol instead of HTTPS.",
        solution=(
            "Install a valid SSL/TLS certificate and configure a permanent redirection "
            "from HTTP to HTTPS."
        ),
        explanation=(
            "HTTPS is a fundamental trust signal. AI crawlers and search engines prioritize "
            "secure sites to ensure data integrity."
        ),
        impact=10,
    ),
    RecommendationTemplate(
        key="http_error",
        problem="The page is not accessible and returns an HTTP error code: {status_code}.",
        solution="Investigate your server or page configuration so it returns a 200 OK status.",
        explanation=(
            "An error code is a dead end for an AI crawler. It prevents access to your content "
            "and makes analysis impossible."
        ),
        impact=10,
    ),
    RecommendationTemplate(
        key="http_redirect",
        problem="The page is redirecting (HTTP status {status_code}), which can slow down crawlers.",
        solution="Make sure the redirection is intended and use a permanent (301) redirect for moved content.",
        explanation=(
            "Crawlers follow redirects, but each hop consumes crawl budget and can signal an "
            "outdated site structure."
        ),
        impact=4,
    ),
    RecommendationTemplate(
        key="fetch_failed",
        problem="The page could not be fetched or returned an unknown status ({reason}).",
        solution="Check that the URL is reachable from the public internet and responds with a 200 OK status.",
        explanation="If a crawler cannot load the page, none of its content can be indexed or cited.",
        impact=8,
    ),
    # AI access
    RecommendationTemplate(
        key="robots_not_found",
        problem="The robots.txt file could not be found.",
        solution="Create a robots.txt file at your domain's root to provide clear crawling instructions.",
        explanation=(
            "Most bots crawl by default when this file is missing, but its absence creates "
            "uncertainty and prevents you from setting important rules."
        ),
        impact=5,
    ),
    RecommendationTemplate(
        key="all_bots_blocked",
        problem="The robots.txt file is blocking all major AI crawlers.",
        solution="Remove the 'Disallow: /' rule for key AI user-agents (like GPTBot) in your robots.txt.",
        explanation=(
            "This is the most severe barrier to discoverability: it explicitly forbids AI "
            "crawlers from reading your content."
        ),
        impact=10,
    ),
    RecommendationTemplate(
        key="some_bots_blocked",
        problem="The robots.txt file is blocking some AI crawlers: {blocked_bots}.",
        solution="Review your robots.txt and add specific 'Allow' rules for the blocked bots.",
        explanation="Blocked crawlers cannot use your content, which limits your reach on their platforms.",
        impact=7,
    ),
    RecommendationTemplate(
        key="sitemap_not_referenced",
        problem="The sitemap.xml file is not referenced in your robots.txt.",
        solution="Add a line 'Sitemap: {sitemap_url}' to your robots.txt file.",
        explanation=(
            "Declaring the sitemap in robots.txt is a standard signal that helps crawlers find "
            "your site's map immediately."
        ),
        impact=4,
    ),
    RecommendationTemplate(
        key="sitemap_not_found",
        problem="No sitemap.xml file was found.",
        solution="Create and submit an XML sitemap.",
        explanation=(
            "A sitemap tells crawlers about every page on your site, which makes crawling more "
            "complete and efficient."
        ),
        impact=8,
    ),
    RecommendationTemplate(
        key="missing_lastmod",
        problem="{missing} of {total} sitemap entries have no <lastmod> date.",
        solution="Make your sitemap generator include a <lastmod> tag for each URL.",
        explanation=(
            "The <lastmod> tag tells crawlers when content changed and helps them prioritize "
            "re-crawling updated pages."
        ),
        impact=6,
    ),
    # Informational, impact 0
    RecommendationTemplate(
        key="llms_txt_not_found",
        problem="No llms.txt or llms-full.txt file was found.",
        solution="Consider creating an llms.txt file at your domain root to provide AI-specific instructions.",
        explanation=(
            "This is an emerging practice to provide AI-specific instructions, such as a site "
            "summary or content usage policies, directly to advanced crawlers."
        ),
        impact=0,
    ),
    RecommendationTemplate(
        key="llms_txt_incomplete",
        problem="Your llms.txt file is incomplete: {issues}.",
        solution="Start with a # title, add a > summary, then list key pages as [name](url) links under ## sections.",
        explanation="The llmstxt.org format lets models find your most important pages quickly.",
        impact=0,
    ),
)

ROBOTS_PENALTY_SOLUTIONS = (
    "Allow AI bots in robots.txt",
    "Use 'Allow: /' for GPTBot, Claude-Web and the other AI user-agents",
    "Avoid global blocking with 'User-agent: *' followed by 'Disallow: /'",
)
