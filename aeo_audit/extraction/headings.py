"""Heading hierarchy analysis.

A hierarchy is valid when the first heading is an H1 and no heading
jumps more than one level deeper than the one before it. Shared by the
LLM formatting and accessibility analyzers.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum

from aeo_audit.extraction.dom import HeadingNode, PageDocument

# Headings that say nothing about the section they introduce
GENERIC_HEADING_PATTERN = re.compile(
    r"^(introduction|content|about|info|data|text|section)", re.IGNORECASE
)


class HeadingIssueType(StrEnum):
    """Types of heading hierarchy issues."""

    MISSING_H1 = "missing_h1"
    MULTIPLE_H1 = "multiple_h1"
    FIRST_NOT_H1 = "first_not_h1"
    SKIP_LEVEL = "skip_level"  # e.g., H2 → H4


@dataclass
class HeadingIssue:
    """A single heading hierarchy issue."""

    issue_type: HeadingIssueType
    level: int
    text: str
    position: int

    def to_dict(self) -> dict:
        return {
            "issueType": str(self.issue_type),
            "level": self.level,
            "text": self.text[:100],
            "position": self.position,
        }


@dataclass
class HeadingAnalysis:
    """Heading structure of a page."""

    headings: list[HeadingNode] = field(default_factory=list)
    h1_count: int = 0
    issues: list[HeadingIssue] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.headings)

    @property
    def violations(self) -> list[HeadingIssue]:
        """Order violations: a non-H1 first heading and every skipped level."""
        return [
            i
            for i in self.issues
            if i.issue_type in (HeadingIssueType.FIRST_NOT_H1, HeadingIssueType.SKIP_LEVEL)
        ]

    @property
    def hierarchy_valid(self) -> bool:
        return bool(self.headings) and not self.violations

    @property
    def has_single_h1(self) -> bool:
        return self.h1_count == 1

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "h1Count": self.h1_count,
            "hierarchyValid": self.hierarchy_valid,
            "issues": [i.to_dict() for i in self.issues],
            "headings": [h.to_dict() for h in self.headings],
        }


def analyze_headings(doc: PageDocument) -> HeadingAnalysis:
    """Collect headings and validate their hierarchy."""
    headings = doc.headings()
    result = HeadingAnalysis(headings=headings)
    result.h1_count = sum(1 for h in headings if h.level == 1)

    if result.h1_count == 0:
        result.issues.append(HeadingIssue(HeadingIssueType.MISSING_H1, 1, "", 0))
    elif result.h1_count > 1:
        second_h1 = [h for h in headings if h.level == 1][1]
        result.issues.append(
            HeadingIssue(HeadingIssueType.MULTIPLE_H1, 1, second_h1.text, second_h1.position)
        )

    if headings and headings[0].level != 1:
        first = headings[0]
        result.issues.append(
            HeadingIssue(HeadingIssueType.FIRST_NOT_H1, first.level, first.text, first.position)
        )

    for previous, current in zip(headings, headings[1:]):
        if current.level > previous.level + 1:
            result.issues.append(
                HeadingIssue(
                    HeadingIssueType.SKIP_LEVEL, current.level, current.text, current.position
                )
            )

    return result


def is_generic_heading(text: str) -> bool:
    return bool(GENERIC_HEADING_PATTERN.match(text.strip()))
