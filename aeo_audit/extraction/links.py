"""Link and call-to-action extraction.

Classifies every ``<a href>`` as internal or external, checks anchor
text against a shared generic-term list and records whether the link
sits inside a paragraph of real prose. The same term list drives the
CTA clarity check on links and buttons.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from urllib.parse import urljoin, urlparse

import structlog
from bs4 import Tag

from aeo_audit.extraction.dom import PageDocument, normalize_host

logger = structlog.get_logger(__name__)

# Generic call-to-action and non-descriptive link terms
GENERIC_CTA_TERMS = frozenset(
    [
        "add", "article", "back", "begin", "browse", "buy", "buy now", "cancel", "check",
        "click here", "close", "confirm", "continue", "delete", "details", "discover",
        "download", "edit", "explore", "find", "forward", "get", "go", "here", "home",
        "info", "learn more", "link", "menu", "more", "next", "no", "ok", "open", "page",
        "previous", "read", "read more", "remove", "save", "search", "see", "see more",
        "send", "shop", "shop now", "show", "sign up", "start", "submit", "subscribe",
        "take", "test", "that", "this", "try", "url", "use", "verify", "view",
        "view more", "website", "yes",
    ]
)

# Domains and suffixes treated as authoritative external sources
AUTHORITATIVE_DOMAINS = [
    ".edu", ".gov", ".org",
    "github.com", "stackoverflow.com", "developer.mozilla.org",
    "reuters.com", "bbc.com", "cnn.com", "nytimes.com",
    "linkedin.com", "medium.com",
]

SKIPPED_SCHEMES = ("mailto:", "tel:", "javascript:", "data:")

MIN_ANCHOR_LENGTH = 3
MIN_CONTEXT_LENGTH = 20
MIN_CTA_TEXT_LENGTH = 2
MIN_EMPTY_ARIA_LENGTH = 10
MIN_GENERIC_ARIA_LENGTH = 15


def is_descriptive_text(text: str) -> bool:
    """Anchor text long enough and not a generic term."""
    text = text.strip().lower()
    if len(text) < MIN_ANCHOR_LENGTH or text in GENERIC_CTA_TERMS:
        return False
    return not text.startswith(("http://", "https://"))


def is_authoritative(host: str) -> bool:
    host = host.lower()
    for domain in AUTHORITATIVE_DOMAINS:
        if domain.startswith("."):
            if host.endswith(domain):
                return True
        elif host == domain or host.endswith(f".{domain}"):
            return True
    return False


@dataclass
class LinkInfo:
    """Information about a single link."""

    href: str
    anchor_text: str
    host: str
    is_internal: bool
    is_descriptive: bool
    in_context: bool  # Inside a <p> with surrounding prose


@dataclass
class LinkAnalysis:
    """All links of a page."""

    links: list[LinkInfo] = field(default_factory=list)

    @property
    def internal(self) -> list[LinkInfo]:
        return [link for link in self.links if link.is_internal]

    @property
    def external(self) -> list[LinkInfo]:
        return [link for link in self.links if not link.is_internal]

    def to_dict(self) -> dict:
        return {
            "totalLinks": len(self.links),
            "internalLinks": len(self.internal),
            "externalLinks": len(self.external),
            "descriptiveLinks": sum(1 for link in self.links if link.is_descriptive),
            "contextualLinks": sum(1 for link in self.links if link.in_context),
        }


def _surrounding_text_length(anchor: Tag) -> int:
    paragraph = anchor.find_parent("p")
    if paragraph is None:
        return 0
    return len(paragraph.get_text(" ", strip=True)) - len(anchor.get_text(" ", strip=True))


def analyze_links(doc: PageDocument, url: str) -> LinkAnalysis:
    """
    Classify every link on the page.

    Args:
        doc: Parsed page
        url: Page URL, used to resolve relative links

    Returns:
        LinkAnalysis with one entry per followable link
    """
    base_host = normalize_host(url)
    result = LinkAnalysis()

    for anchor in doc.soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href == "#" or href.lower().startswith(SKIPPED_SCHEMES):
            continue

        full_url = urljoin(url, href)
        if urlparse(full_url).scheme not in ("http", "https"):
            logger.debug("link_skipped", href=href[:200])
            continue

        host = normalize_host(full_url)
        text = anchor.get_text(" ", strip=True)
        result.links.append(
            LinkInfo(
                href=href,
                anchor_text=text[:200],
                host=host,
                is_internal=host == base_host,
                is_descriptive=is_descriptive_text(text),
                in_context=_surrounding_text_length(anchor) > MIN_CONTEXT_LENGTH,
            )
        )

    return result


@dataclass
class CTAAnalysis:
    """Clarity of links and buttons as calls to action."""

    total_links: int = 0
    total_buttons: int = 0
    generic_count: int = 0
    empty_count: int = 0
    generic_examples: Counter = field(default_factory=Counter)

    def top_examples(self, limit: int = 3) -> str:
        """Most frequent generic texts, e.g. "'read more' (3x), 'here'"."""
        return ", ".join(
            f"'{text}'" + (f" ({count}x)" if count > 1 else "")
            for text, count in self.generic_examples.most_common(limit)
        )

    def to_dict(self) -> dict:
        return {
            "totalLinks": self.total_links,
            "totalButtons": self.total_buttons,
            "genericLinksCount": self.generic_count,
            "emptyLinksCount": self.empty_count,
            "genericTextExamples": dict(self.generic_examples),
        }


def analyze_ctas(doc: PageDocument) -> CTAAnalysis:
    """Count generic and empty links and buttons."""
    result = CTAAnalysis()
    for element in doc.soup.find_all(["a", "button"]):
        if element.name == "a":
            result.total_links += 1
        else:
            result.total_buttons += 1

        text = element.get_text(" ", strip=True).lower()
        aria_label = (element.get("aria-label") or "").strip()

        if len(text) < MIN_CTA_TEXT_LENGTH:
            if len(aria_label) < MIN_EMPTY_ARIA_LENGTH:
                result.empty_count += 1
        elif text in GENERIC_CTA_TERMS and len(aria_label) < MIN_GENERIC_ARIA_LENGTH:
            result.generic_count += 1
            result.generic_examples[text] += 1

    return result
