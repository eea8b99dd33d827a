"""
Roll20 character sheet importer.

Roll20 exports sheet attributes as one flat object whose values are all
strings, numbers included (``"level": "3"``).
"""

from __future__ import annotations

import logging

from ..config import DEFAULT_SETTINGS, ImportSettings
from ..models import Character, PointPool
from .base import (
    ImportFailure,
    ImportResult,
    build_ability_scores,
    load_json_object,
    require_name,
)
from .coercion import parse_int_or, string_or
from .formats import ImportFormat

logger = logging.getLogger("trpg-importer.roll20")

FORMAT = ImportFormat.ROLL20

# Roll20 attribute → canonical ability key
ABILITY_ATTRIBUTES = {
    "strength": "STR",
    "dexterity": "DEX",
    "constitution": "CON",
    "intelligence": "INT",
    "wisdom": "WIS",
    "charisma": "CHA",
}


def map_pool(data: dict, current_key: str, max_key: str, default: int) -> PointPool:
    """Map a pool whose max falls back to the current value."""
    current = parse_int_or(data.get(current_key), default)
    return PointPool(current=current, max=parse_int_or(data.get(max_key), current))


def parse(raw_text: str, settings: ImportSettings | None = None) -> ImportResult:
    """Import a character from a Roll20 attribute export.

    Args:
        raw_text: JSON document text.
        settings: Defaults to apply; DEFAULT_SETTINGS when omitted.

    Returns:
        ImportResult with the character, or a parse/validation error.
    """
    settings = settings or DEFAULT_SETTINGS

    try:
        data = load_json_object(raw_text, "Roll20")
        name = require_name(data.get("name"))
    except ImportFailure as e:
        logger.warning(f"Roll20 import failed: {e}")
        return ImportResult.failed(FORMAT.value, e.error)

    character = Character(
        name=name,
        level=parse_int_or(data.get("level"), 1, minimum=1),
        race=string_or(data.get("race"), settings.default_race),
        character_class=string_or(data.get("class"), settings.default_class),
        ability_scores=build_ability_scores(
            {key: data.get(attr) for attr, key in ABILITY_ATTRIBUTES.items()},
            settings.default_ability_score,
        ),
        hit_points=map_pool(data, "hp", "hp_max", settings.default_hit_points),
        mana_points=map_pool(data, "mp", "mp_max", settings.default_mana_points),
        backstory=string_or(data.get("bio"), ""),
        personality=string_or(data.get("personality_traits"), ""),
        goals=string_or(data.get("ideals"), ""),
        notes=settings.provenance(FORMAT.value),
    )

    logger.info(f"Imported '{character.name}' from Roll20")
    return ImportResult(character=character, source_format=FORMAT.value)
