"""
Udonarium XML importer.

Udonarium stores a character as a tree of ``<data name="...">`` elements,
grouped arbitrarily deep under a ``<character>`` element::

    <character>
      <data name="character">
        <data name="common"><data name="name">Aria</data></data>
        <data name="detail"><data name="HP">18</data></data>
      </data>
    </character>

The grouping carries no meaning for import, so leaf elements are indexed by
their ``name`` attribute and read like a flat JSON object.
"""

from __future__ import annotations

import logging
import re

from lxml import etree

from ..config import DEFAULT_SETTINGS, ImportSettings
from ..models import ABILITY_KEYS, Character, PointPool
from .base import (
    ImportError,
    ImportFailure,
    ImportResult,
    build_ability_scores,
    require_name,
)
from .coercion import parse_int_or, string_or
from .formats import ImportFormat

logger = logging.getLogger("trpg-importer.udonarium")

FORMAT = ImportFormat.UDONARIUM

_XML_DECLARATION = re.compile(r"^\s*<\?xml\s[^>]*\?>")


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False, no_network=True, load_dtd=False, huge_tree=False
    )


def find_character_node(raw_text: str) -> etree._Element:
    """Parse the document and return its ``character`` element.

    Raises:
        ImportFailure: If the XML is malformed or has no character element.
    """
    try:
        # The text is already decoded; a declared encoding no longer applies
        text = _XML_DECLARATION.sub("", raw_text, count=1)
        root = etree.fromstring(text, parser=_parser())
    except (etree.XMLSyntaxError, ValueError) as e:
        raise ImportFailure(
            ImportError.parse_error(f"Invalid Udonarium XML: {e}")
        ) from None

    if root.tag == "character":
        return root
    node = root.find(".//character")
    if node is None:
        raise ImportFailure(
            ImportError.schema_error("Character data not found", field="character")
        )
    return node


def index_data_nodes(character: etree._Element) -> dict[str, str]:
    """Map each leaf ``data`` element's name attribute to its text.

    The first element with a given name wins.
    """
    values: dict[str, str] = {}
    for node in character.iter("data"):
        key = node.get("name")
        if not key or key in values:
            continue
        if node.find("data") is not None:
            continue
        values[key] = node.text or ""
    return values


def parse(raw_text: str, settings: ImportSettings | None = None) -> ImportResult:
    """Import a character from a Udonarium XML export.

    Args:
        raw_text: XML document text.
        settings: Defaults to apply; DEFAULT_SETTINGS when omitted.

    Returns:
        ImportResult with the character, or a parse/schema/validation error.
    """
    settings = settings or DEFAULT_SETTINGS

    try:
        node = find_character_node(raw_text)
        values = index_data_nodes(node)
        name = require_name(values.get("name"))
    except ImportFailure as e:
        logger.warning(f"Udonarium import failed: {e}")
        return ImportResult.failed(FORMAT.value, e.error)

    # The format has a single HP/MP value, used for both current and max
    hp = parse_int_or(values.get("HP"), settings.default_hit_points)
    mp = parse_int_or(values.get("MP"), settings.default_mana_points)

    character = Character(
        name=name,
        level=parse_int_or(values.get("level"), 1, minimum=1),
        race=string_or(values.get("race"), settings.default_race),
        character_class=string_or(values.get("class"), settings.default_class),
        ability_scores=build_ability_scores(
            {key: values.get(key) for key in ABILITY_KEYS},
            settings.default_ability_score,
        ),
        hit_points=PointPool(current=hp, max=hp),
        mana_points=PointPool(current=mp, max=mp),
        backstory=string_or(values.get("backstory"), ""),
        personality=string_or(values.get("personality"), ""),
        goals=string_or(values.get("goals"), ""),
        notes=settings.provenance(FORMAT.value),
    )

    logger.info(f"Imported '{character.name}' from Udonarium")
    return ImportResult(character=character, source_format=FORMAT.value)
