"""JSON-LD entity parser.

Finds every ``<script type="application/ld+json">`` block, parses it
and flattens arrays and ``@graph`` containers into a flat entity list.
A malformed block is logged and skipped; the remaining blocks are
still parsed.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any

import structlog
from bs4 import BeautifulSoup

from aeo_audit.extraction.dom import PARSER, PageDocument

logger = structlog.get_logger(__name__)

JSON_LD_TYPE = re.compile(r"^\s*application/ld\+json\s*$", re.IGNORECASE)


@dataclass
class SchemaEntity:
    """One normalized JSON-LD object."""

    type: str
    id: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def has(self, key: str) -> bool:
        """Property exists with a non-empty value."""
        value = self.properties.get(key)
        return value not in (None, "", [], {})

    def is_object(self, key: str) -> bool:
        """Property is a linked object (or a list starting with one), not plain text."""
        value = self.properties.get(key)
        if isinstance(value, list):
            value = value[0] if value else None
        return isinstance(value, dict)

    def references(self) -> list[str]:
        """@id values of property objects that point at other entities."""
        refs: list[str] = []
        for key, value in self.properties.items():
            if key.startswith("@"):
                continue
            items = value if isinstance(value, list) else [value]
            refs.extend(
                item["@id"] for item in items if isinstance(item, dict) and "@id" in item
            )
        return refs

    def to_dict(self) -> dict:
        return {"type": self.type, "id": self.id, "properties": self.properties}


def _entity_type(raw: Any) -> str | None:
    if isinstance(raw, list):
        raw = next((item for item in raw if isinstance(item, str)), None)
    return raw if isinstance(raw, str) and raw else None


def _flatten(node: Any) -> list[dict]:
    if isinstance(node, list):
        return [item for child in node for item in _flatten(child)]
    if not isinstance(node, dict):
        return []
    if "@graph" in node:
        return _flatten(node["@graph"])
    return [node]


def entities_from_json(data: Any) -> list[SchemaEntity]:
    """Normalize decoded JSON-LD into entities, dropping those without @type."""
    entities = []
    for obj in _flatten(data):
        entity_type = _entity_type(obj.get("@type"))
        if entity_type is None:
            continue
        entity_id = obj.get("@id")
        entities.append(
            SchemaEntity(
                type=entity_type,
                id=entity_id if isinstance(entity_id, str) else None,
                properties=obj,
            )
        )
    return entities


def parse_entities(source: str | PageDocument) -> list[SchemaEntity]:
    """
    Extract every JSON-LD entity from a page.

    Args:
        source: Raw HTML or an already parsed PageDocument

    Returns:
        Entities in document order
    """
    soup = source.soup if isinstance(source, PageDocument) else BeautifulSoup(source, PARSER)

    entities: list[SchemaEntity] = []
    for index, script in enumerate(soup.find_all("script", attrs={"type": JSON_LD_TYPE})):
        content = script.string or script.get_text()
        if not content or not content.strip():
            continue
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("json_ld_parse_error", block=index, error=str(e))
            continue
        entities.extend(entities_from_json(data))

    logger.debug("json_ld_parsed", entities=len(entities))
    return entities


def find_entity(entities: list[SchemaEntity], *types: str) -> SchemaEntity | None:
    """First entity whose type is one of types."""
    return next((e for e in entities if e.type in types), None)
