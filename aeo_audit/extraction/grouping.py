"""Data grouping extraction.

Compares real ``<ul>``/``<ol>``/``<table>`` markup with lists and tables
faked in plain text: bullet or numbered lines inside a paragraph, or
columns separated by pipes, tabs or runs of spaces.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum

from bs4 import Comment, NavigableString, Tag

from aeo_audit.extraction.dom import PageDocument

LIST_LINE_PATTERNS = [
    re.compile(r"^\s*[•▪▫▸▹►‣⁃]\s+\w"),
    re.compile(r"^\s*[*\-+]\s+\w{2,}"),
    re.compile(r"^\s*\d+[.)]\s+\w{2,}"),
    re.compile(r"^\s*[a-zA-Z][.)]\s+\w{2,}"),
    re.compile(r"^\s*[ivxlcdm]+[.)]\s+\w{2,}", re.IGNORECASE),
]
TABLE_LINE_PATTERNS = [
    re.compile(r"\|\s*\w+\s*\|\s*\w+\s*\|"),
    re.compile(r"\w+\s{4,}\w+\s{4,}\w+"),
    re.compile(r"\w+\t+\w+\t+\w+"),
]

MIN_LINES = 2
MIN_LIST_LINE_LENGTH = 10
MIN_LIST_LINE_RATIO = 0.5
MIN_TABLE_COLUMNS = 2
SAMPLE_LENGTH = 50


class StructureType(StrEnum):
    LIST = "list"
    TABLE = "table"


@dataclass
class SimulatedStructure:
    """A list or table written as plain text."""

    structure_type: StructureType
    confidence: float  # share of the element's lines that match
    sample: str
    item_count: int

    def to_dict(self) -> dict:
        return {
            "type": str(self.structure_type),
            "confidence": round(self.confidence, 2),
            "sample": self.sample,
            "itemCount": self.item_count,
        }


@dataclass
class GroupingAnalysis:
    """Semantic and simulated data structures on a page."""

    semantic_lists: int = 0
    semantic_tables: int = 0
    simulated: list[SimulatedStructure] = field(default_factory=list)

    @property
    def simulated_lists(self) -> int:
        return sum(1 for s in self.simulated if s.structure_type == StructureType.LIST)

    @property
    def simulated_tables(self) -> int:
        return sum(1 for s in self.simulated if s.structure_type == StructureType.TABLE)

    @property
    def semantic_ratio(self) -> float:
        semantic = self.semantic_lists + self.semantic_tables
        total = semantic + len(self.simulated)
        return semantic / total if total else 1.0

    def to_dict(self) -> dict:
        return {
            "semanticLists": self.semantic_lists,
            "simulatedLists": self.simulated_lists,
            "semanticTables": self.semantic_tables,
            "simulatedTables": self.simulated_tables,
            "semanticRatio": round(self.semantic_ratio, 2),
            "simulatedStructures": [s.to_dict() for s in self.simulated],
        }


def _element_lines(element: Tag) -> list[str]:
    """Text lines of an element, breaking on newlines and <br>."""
    parts: list[str] = []
    for node in element.descendants:
        if isinstance(node, Tag):
            if node.name == "br":
                parts.append("\n")
        elif isinstance(node, NavigableString) and not isinstance(node, Comment):
            parts.append(str(node))
    # keep tabs and space runs, they separate table columns
    return [line.rstrip() for line in "".join(parts).split("\n") if line.strip()]


def _column_count(line: str) -> int:
    if "|" in line:
        cells = line.split("|")
    elif "\t" in line:
        cells = line.split("\t")
    else:
        cells = re.split(r"\s{4,}", line)
    return sum(1 for cell in cells if cell.strip())


def detect_simulated_list(lines: list[str]) -> SimulatedStructure | None:
    matching = [
        line
        for line in lines
        if len(line) > MIN_LIST_LINE_LENGTH and any(p.search(line) for p in LIST_LINE_PATTERNS)
    ]
    if len(matching) < MIN_LINES or len(matching) / len(lines) < MIN_LIST_LINE_RATIO:
        return None
    return SimulatedStructure(
        structure_type=StructureType.LIST,
        confidence=len(matching) / len(lines),
        sample=matching[0].strip()[:SAMPLE_LENGTH],
        item_count=len(matching),
    )


def detect_simulated_table(lines: list[str]) -> SimulatedStructure | None:
    matching = [
        line
        for line in lines
        if any(p.search(line) for p in TABLE_LINE_PATTERNS)
        and _column_count(line) >= MIN_TABLE_COLUMNS
    ]
    if len(matching) < MIN_LINES:
        return None
    return SimulatedStructure(
        structure_type=StructureType.TABLE,
        confidence=len(matching) / len(lines),
        sample=matching[0].strip()[:SAMPLE_LENGTH],
        item_count=len(matching),
    )


def analyze_grouping(doc: PageDocument) -> GroupingAnalysis:
    """
    Count real lists and tables and find text that imitates them.

    Paragraphs and divs that already contain list or table markup are
    skipped.
    """
    analysis = GroupingAnalysis(
        semantic_lists=doc.count("ul, ol"),
        semantic_tables=doc.count("table"),
    )
    for element in doc.select("p, div"):
        if element.find(["ul", "ol", "table"]):
            continue
        # nested divs are examined on their own
        if element.name == "div" and element.find(["div", "p"]):
            continue
        lines = _element_lines(element)
        if len(lines) < MIN_LINES:
            continue
        for detect in (detect_simulated_list, detect_simulated_table):
            structure = detect(lines)
            if structure is not None:
                analysis.simulated.append(structure)
    return analysis
