"""DOM feature extraction.

Wraps a parsed BeautifulSoup tree with the count, text and attribute
queries every analyzer needs. Queries never mutate the tree.
"""

from dataclasses import dataclass
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from aeo_audit.exceptions import InvalidInputError

PARSER = "html.parser"
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


@dataclass
class HeadingNode:
    """A heading in document order."""

    level: int
    text: str
    position: int

    def to_dict(self) -> dict:
        return {"level": self.level, "text": self.text, "position": self.position}


class PageDocument:
    """Read-only query surface over one parsed HTML document."""

    def __init__(self, html: str):
        self.html = html
        self.soup = BeautifulSoup(html, PARSER)

    def select(self, selector: str) -> list[Tag]:
        return self.soup.select(selector)

    def count(self, selector: str) -> int:
        """Number of elements matching a CSS selector."""
        return len(self.soup.select(selector))

    def exists(self, selector: str) -> bool:
        return self.soup.select_one(selector) is not None

    def text_of(self, selector: str) -> str:
        """Stripped text of the first match, or an empty string."""
        element = self.soup.select_one(selector)
        return element.get_text(" ", strip=True) if element else ""

    def attr(self, selector: str, name: str) -> str | None:
        """Attribute of the first match, or None."""
        element = self.soup.select_one(selector)
        if element is None:
            return None
        value = element.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def meta_content(self, key: str) -> str | None:
        """Content of a <meta> tag matched by name or property, case-insensitively."""
        wanted = key.lower()
        for meta in self.soup.find_all("meta"):
            keys = {(meta.get(attr) or "").strip().lower() for attr in ("name", "property")}
            if wanted in keys:
                content = meta.get("content")
                return content.strip() if content else ""
        return None

    def headings(self) -> list[HeadingNode]:
        """All h1-h6 headings in document order."""
        return [
            HeadingNode(level=int(tag.name[1]), text=tag.get_text(" ", strip=True), position=i)
            for i, tag in enumerate(self.soup.find_all(HEADING_TAGS))
        ]

    def max_depth(self) -> int:
        """Deepest element nesting level in the document."""
        deepest = 0
        stack: list[tuple[Tag, int]] = [
            (child, 1) for child in self.soup.children if isinstance(child, Tag)
        ]
        while stack:
            element, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend(
                (child, depth + 1) for child in element.children if isinstance(child, Tag)
            )
        return deepest

    def body_text(self) -> str:
        body = self.soup.body or self.soup
        return body.get_text(" ", strip=True)


def parse_html(html: str) -> PageDocument:
    """
    Parse HTML into a PageDocument.

    Raises:
        InvalidInputError: If html is not a non-empty string
    """
    if not isinstance(html, str) or not html.strip():
        raise InvalidInputError("HTML content is empty or not a string", field="html")
    return PageDocument(html)


def has_ancestor(element: Tag, names: set[str]) -> bool:
    """Check whether any ancestor of element has one of the given tag names."""
    return any(parent.name in names for parent in element.parents)


def normalize_host(url: str) -> str:
    """Lowercased hostname without a leading www."""
    host = (urlparse(url).hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def validate_url(url: str) -> str:
    """
    Check that url is absolute http(s).

    Raises:
        InvalidInputError: If the URL has no scheme or host
    """
    if not isinstance(url, str):
        raise InvalidInputError("URL must be a string", field="url")
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidInputError(f"Malformed URL: {url!r}", field="url")
    return url.strip()
