"""AI crawler access rules from robots.txt.

Parses robots.txt into per-user-agent allow/disallow rule sets and
checks the major AI crawlers against them. A crawler is only considered
blocked by a ``Disallow: /`` in the block that applies to it.
"""

from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger(__name__)

WILDCARD_AGENT = "*"

# Tracked AI crawlers
AI_BOTS: dict[str, dict[str, str]] = {
    "GPTBot": {"owner": "OpenAI", "purpose": "Training data collection"},
    "Google-Extended": {"owner": "Google", "purpose": "Gemini and AI Overviews grounding"},
    "ChatGPT-User": {"owner": "OpenAI", "purpose": "Real-time browsing for ChatGPT users"},
    "CCBot": {"owner": "Common Crawl", "purpose": "Open web corpus used by many models"},
    "anthropic-ai": {"owner": "Anthropic", "purpose": "Training data collection"},
    "Claude-Web": {"owner": "Anthropic", "purpose": "Real-time browsing for Claude users"},
    "PerplexityBot": {"owner": "Perplexity", "purpose": "Perplexity answer index"},
}


@dataclass
class RuleSet:
    """Allow and disallow paths for one user-agent."""

    allows: list[str] = field(default_factory=list)
    disallows: list[str] = field(default_factory=list)

    def blocks_everything(self) -> bool:
        return "/" in self.disallows


RobotsRules = dict[str, RuleSet]


def _split_directive(line: str) -> tuple[str, str] | None:
    if "#" in line:
        line = line.split("#", 1)[0]
    line = line.strip()
    if not line or ":" not in line:
        return None
    directive, _, value = line.partition(":")
    return directive.strip().lower(), value.strip()


def parse_robots_txt(content: str) -> RobotsRules:
    """
    Parse robots.txt content into rule sets keyed by lowercased user-agent.

    Consecutive User-agent lines share the rules that follow them.

    Args:
        content: The robots.txt file content

    Returns:
        Mapping of user-agent to its RuleSet
    """
    rules: RobotsRules = {}
    current_agents: list[str] = []
    in_rules = False

    for raw_line in content.splitlines():
        parsed = _split_directive(raw_line)
        if parsed is None:
            continue
        directive, value = parsed

        if directive == "user-agent":
            if in_rules:
                current_agents = []
                in_rules = False
            agent = value.lower()
            if agent:
                current_agents.append(agent)
                rules.setdefault(agent, RuleSet())

        elif directive in ("allow", "disallow"):
            in_rules = True
            if not value:  # Empty disallow means allow all
                continue
            for agent in current_agents:
                target = rules[agent].allows if directive == "allow" else rules[agent].disallows
                target.append(value)

    return rules


def find_sitemap_directives(content: str) -> list[str]:
    """Sitemap URLs declared in robots.txt."""
    sitemaps = []
    for raw_line in content.splitlines():
        parsed = _split_directive(raw_line)
        if parsed and parsed[0] == "sitemap" and parsed[1]:
            sitemaps.append(parsed[1])
    return sitemaps


def is_bot_allowed(rules: RobotsRules, bot: str) -> bool:
    """Check a bot against its own block, then the wildcard block, else allow."""
    key = bot.lower()
    if key in rules:
        return not rules[key].blocks_everything()
    if WILDCARD_AGENT in rules:
        return not rules[WILDCARD_AGENT].blocks_everything()
    return True


@dataclass
class AIBotAccess:
    """Which tracked AI crawlers a robots.txt allows."""

    allowed: list[str] = field(default_factory=list)
    blocked: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.allowed) + len(self.blocked)

    @property
    def blocked_fraction(self) -> float:
        return len(self.blocked) / self.total if self.total else 0.0

    def to_dict(self) -> dict:
        return {
            "allowed": self.allowed,
            "blocked": self.blocked,
            "totalBots": self.total,
        }


def check_ai_bot_access(rules: RobotsRules) -> AIBotAccess:
    """Evaluate every tracked AI crawler against parsed rules."""
    access = AIBotAccess()
    for bot in AI_BOTS:
        if is_bot_allowed(rules, bot):
            access.allowed.append(bot)
        else:
            access.blocked.append(bot)

    logger.debug(
        "ai_bot_access_checked",
        allowed=len(access.allowed),
        blocked=access.blocked,
    )
    return access
