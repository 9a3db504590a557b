"""Sitemap freshness checks."""

from dataclasses import dataclass
from xml.etree import ElementTree as ET

import structlog

logger = structlog.get_logger(__name__)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


@dataclass
class SitemapFreshness:
    """How many sitemap entries declare a <lastmod> date."""

    total_urls: int = 0
    missing_lastmod: int = 0
    is_index: bool = False

    def to_dict(self) -> dict:
        return {
            "totalUrls": self.total_urls,
            "missingLastmod": self.missing_lastmod,
            "isIndex": self.is_index,
        }


def check_sitemap_freshness(content: str) -> SitemapFreshness | None:
    """
    Count <url> entries without <lastmod>, namespace-agnostic.

    Args:
        content: Sitemap XML

    Returns:
        SitemapFreshness, or None when the XML cannot be parsed
    """
    try:
        root = ET.fromstring(content.strip())
    except ET.ParseError as e:
        logger.warning("sitemap_parse_error", error=str(e))
        return None

    result = SitemapFreshness(is_index=_local_name(root.tag) == "sitemapindex")
    entry_tag = "sitemap" if result.is_index else "url"
    for element in root.iter():
        if _local_name(element.tag) != entry_tag:
            continue
        result.total_urls += 1
        has_lastmod = any(
            _local_name(child.tag) == "lastmod" and (child.text or "").strip()
            for child in element
        )
        if not has_lastmod:
            result.missing_lastmod += 1

    return result
