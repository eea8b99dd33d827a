"""
Generic JSON importer.

Reads the tool's own export shape (camelCase canonical keys) as well as the
older flat ``stats`` block, where hit points, mana and abilities share one
object::

    {"name": "Aria", "stats": {"HP": 18, "maxHP": 20, "strength": 16, ...}}
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from ..config import DEFAULT_SETTINGS, ImportSettings
from ..models import (
    ABILITY_KEYS,
    Character,
    CharacterAbility,
    CharacterType,
    EquipmentItem,
    PointPool,
    Skill,
)
from .base import (
    ImportFailure,
    ImportResult,
    build_ability_scores,
    load_json_object,
    require_name,
)
from .coercion import (
    dig,
    id_or,
    list_or,
    parse_datetime_or,
    parse_int_or,
    string_or,
)
from .formats import ImportFormat

logger = logging.getLogger("trpg-importer.json")

FORMAT = ImportFormat.GENERIC_JSON

# Long ability names used by the flat stats block
ABILITY_LONG_NAMES = {
    "STR": "strength",
    "DEX": "dexterity",
    "CON": "constitution",
    "INT": "intelligence",
    "WIS": "wisdom",
    "CHA": "charisma",
}


def parse_character_type(raw: Any) -> CharacterType:
    """Match a character type case-insensitively, defaulting to PC."""
    text = string_or(raw, "").lower()
    for member in CharacterType:
        if member.value.lower() == text:
            return member
    return CharacterType.PC


def map_abilities(data: dict) -> dict[str, Any]:
    """Collect raw ability values keyed by STR, DEX, ... .

    ``abilityScores`` wins over the flat ``stats`` block; within ``stats``
    the long name (``strength``) wins over the short one.
    """
    canonical = data.get("abilityScores")
    stats = data.get("stats")
    raw: dict[str, Any] = {}
    for key in ABILITY_KEYS:
        value = dig(canonical, key)
        if value is None:
            value = dig(stats, ABILITY_LONG_NAMES[key])
        if value is None:
            value = dig(stats, key)
        raw[key] = value
    return raw


def map_pool(data: dict, canonical_key: str, stat_key: str, default: int) -> PointPool:
    """Map a current/max pool from ``hitPoints``-style or flat ``stats`` keys."""
    current = dig(data, canonical_key, "current")
    if current is None:
        current = dig(data, "stats", stat_key)
    maximum = dig(data, canonical_key, "max")
    if maximum is None:
        maximum = dig(data, "stats", "max" + stat_key)

    current_value = parse_int_or(current, default)
    return PointPool(current=current_value, max=parse_int_or(maximum, current_value))


def map_skill(entry: Any) -> Skill | None:
    if not isinstance(entry, dict):
        return None
    name = string_or(entry.get("name"), "")
    if not name:
        return None
    return Skill(
        name=name,
        level=parse_int_or(entry.get("level"), 0),
        description=string_or(entry.get("description"), ""),
    )


def map_equipment(entry: Any, settings: ImportSettings) -> EquipmentItem | None:
    if not isinstance(entry, dict):
        return None
    name = string_or(entry.get("name"), "")
    if not name:
        return None
    return EquipmentItem(
        name=name,
        type=string_or(entry.get("type"), settings.default_equipment_type),
        description=string_or(entry.get("description"), ""),
        quantity=parse_int_or(entry.get("quantity"), 1),
    )


def map_ability(entry: Any, settings: ImportSettings) -> CharacterAbility | None:
    if not isinstance(entry, dict):
        return None
    name = string_or(entry.get("name"), "")
    if not name:
        return None
    kind = string_or(entry.get("kind"), "") or string_or(
        entry.get("type"), settings.default_ability_kind
    )
    return CharacterAbility(
        name=name,
        description=string_or(entry.get("description"), ""),
        kind=kind,
    )


def parse(raw_text: str, settings: ImportSettings | None = None) -> ImportResult:
    """Import a character from generic JSON.

    Args:
        raw_text: JSON document text.
        settings: Defaults to apply; DEFAULT_SETTINGS when omitted.

    Returns:
        ImportResult with the character, or a parse/validation error.
    """
    settings = settings or DEFAULT_SETTINGS

    try:
        data = load_json_object(raw_text, "JSON")
        name = require_name(data.get("name"))
    except ImportFailure as e:
        logger.warning(f"JSON import failed: {e}")
        return ImportResult.failed(FORMAT.value, e.error)

    character = Character(
        name=name,
        level=parse_int_or(data.get("level"), 1, minimum=1),
        character_type=parse_character_type(data.get("characterType")),
        race=string_or(data.get("race"), settings.default_race),
        character_class=string_or(data.get("class"), settings.default_class),
        ability_scores=build_ability_scores(
            map_abilities(data), settings.default_ability_score
        ),
        hit_points=map_pool(data, "hitPoints", "HP", settings.default_hit_points),
        mana_points=map_pool(data, "manaPoints", "MP", settings.default_mana_points),
        skills=list_or(data.get("skills"), map_skill),
        equipment=list_or(data.get("equipment"), lambda e: map_equipment(e, settings)),
        abilities=list_or(data.get("abilities"), lambda e: map_ability(e, settings)),
        backstory=string_or(data.get("backstory"), ""),
        personality=string_or(data.get("personality"), ""),
        goals=string_or(data.get("goals"), ""),
        notes=settings.provenance(FORMAT.value),
        image_url=string_or(data.get("imageUrl"), "") or None,
        created_at=parse_datetime_or(data.get("createdAt"), datetime.now),
    )

    source_id = id_or(data.get("id"), "")
    if source_id:
        character.id = source_id

    logger.info(f"Imported '{character.name}' from JSON")
    return ImportResult(character=character, source_format=FORMAT.value)
