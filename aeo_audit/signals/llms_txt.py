"""llms.txt parsing.

llms.txt is a markdown file at the site root that summarises the site
for language models: an H1 title, an optional ``>`` blockquote summary,
then ``##`` sections of ``[name](url): notes`` links.
See https://llmstxt.org.
"""

import re
from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger(__name__)

SECTION_PATTERN = re.compile(r"^##\s+(.+)$", re.MULTILINE)
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)(?:[ \t]*[-:]?[ \t]*(.+))?")

MIN_LINKS = 3
MAX_CONTENT_LENGTH = 50_000


@dataclass
class LlmsTxtLink:
    """A link listed in llms.txt."""

    text: str
    url: str
    description: str | None = None

    def to_dict(self) -> dict:
        return {"text": self.text, "url": self.url, "description": self.description}


@dataclass
class LlmsTxtAnalysis:
    """Structure of an llms.txt file."""

    title: str | None = None
    description: str | None = None
    sections: list[str] = field(default_factory=list)
    links: list[LlmsTxtLink] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """The H1 title is the one required element."""
        return self.title is not None

    @property
    def quality_score(self) -> float:
        score = 0.0
        if self.title:
            score += 20
        if self.description:
            score += 20
        if self.sections:
            score += 15
        score += min(45, len(self.links) * 4.5)
        return score

    @property
    def level(self) -> str:
        score = self.quality_score
        if score >= 80:
            return "excellent"
        if score >= 50:
            return "good"
        return "poor"

    def to_dict(self) -> dict:
        return {
            "valid": self.is_valid,
            "title": self.title,
            "description": self.description,
            "sections": self.sections,
            "linkCount": len(self.links),
            "links": [link.to_dict() for link in self.links[:20]],
            "qualityScore": round(self.quality_score, 1),
            "level": self.level,
            "issues": self.issues,
        }


def _first_prefixed(lines: list[str], prefix: str) -> str | None:
    for line in lines:
        if line.startswith(prefix):
            return line[len(prefix) :].strip() or None
    return None


def parse_llms_txt(content: str) -> LlmsTxtAnalysis:
    """
    Parse llms.txt content and list its structural issues.

    Args:
        content: Raw file body

    Returns:
        LlmsTxtAnalysis; an empty body yields an invalid analysis
    """
    lines = [line.strip() for line in content.strip().splitlines()]
    analysis = LlmsTxtAnalysis(
        title=_first_prefixed(lines, "# "),
        description=_first_prefixed(lines, "> "),
        sections=[s.strip() for s in SECTION_PATTERN.findall(content)],
    )
    for match in LINK_PATTERN.finditer(content):
        description = match.group(3).strip() if match.group(3) else None
        analysis.links.append(
            LlmsTxtLink(text=match.group(1).strip(), url=match.group(2).strip(), description=description)
        )

    if analysis.title is None:
        analysis.issues.append("Missing title (# heading)")
    if analysis.description is None:
        analysis.issues.append("Missing description (> blockquote)")
    if not analysis.links:
        analysis.issues.append("No links found")
    elif len(analysis.links) < MIN_LINKS:
        analysis.issues.append("Very few links (recommend 5+)")
    if len(content) > MAX_CONTENT_LENGTH:
        analysis.issues.append("File too large (>50KB), may slow parsing")

    logger.debug(
        "llms_txt_parsed",
        valid=analysis.is_valid,
        links=len(analysis.links),
        issues=len(analysis.issues),
    )
    return analysis
