"""
Foundry VTT actor importer.

Foundry exports an actor as nested JSON: core stats live under ``data``,
owned items (gear, feats, spells) in a top-level ``items`` array. Every access
goes through ``dig`` so a missing sub-object degrades to defaults.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import DEFAULT_SETTINGS, ImportSettings
from ..models import Character, CharacterAbility, EquipmentItem, PointPool, Skill
from .base import (
    ImportFailure,
    ImportResult,
    build_ability_scores,
    load_json_object,
    require_name,
)
from .coercion import dig, list_or, parse_int_or, string_or
from .formats import ImportFormat

logger = logging.getLogger("trpg-importer.foundry")

FORMAT = ImportFormat.FOUNDRY_VTT

# Foundry ability key → canonical key
ABILITY_MAP = {
    "str": "STR",
    "dex": "DEX",
    "con": "CON",
    "int": "INT",
    "wis": "WIS",
    "cha": "CHA",
}

EQUIPMENT_ITEM_TYPES = {"equipment"}
ABILITY_ITEM_TYPES = {"feat", "spell"}


def map_skills(data: dict) -> list[Skill]:
    """Turn the ``data.skills`` map (key → {label, value}) into a list."""
    skills_map = dig(data, "data", "skills")
    if not isinstance(skills_map, dict):
        return []

    skills: list[Skill] = []
    for key, entry in skills_map.items():
        if not isinstance(entry, dict):
            entry = {}
        skills.append(
            Skill(
                name=string_or(entry.get("label"), str(key)),
                level=parse_int_or(entry.get("value"), 0),
            )
        )
    return skills


def _items_of_type(data: dict, item_types: set[str]) -> list[Any]:
    items = data.get("items")
    if not isinstance(items, list):
        return []
    return [
        i for i in items
        if isinstance(i, dict) and string_or(i.get("type"), "") in item_types
    ]


def map_equipment_item(item: dict, settings: ImportSettings) -> EquipmentItem | None:
    name = string_or(item.get("name"), "")
    if not name:
        return None
    item_type = string_or(dig(item, "data", "armorType"), "") or string_or(
        dig(item, "data", "weaponType"), settings.default_equipment_type
    )
    return EquipmentItem(
        name=name,
        type=item_type,
        description=string_or(dig(item, "data", "description", "value"), ""),
        quantity=parse_int_or(dig(item, "data", "quantity"), 1),
    )


def map_ability_item(item: dict) -> CharacterAbility | None:
    name = string_or(item.get("name"), "")
    if not name:
        return None
    return CharacterAbility(
        name=name,
        description=string_or(dig(item, "data", "description", "value"), ""),
        kind=string_or(item.get("type"), "feat"),
    )


def parse(raw_text: str, settings: ImportSettings | None = None) -> ImportResult:
    """Import a character from a Foundry VTT actor export.

    Args:
        raw_text: JSON document text.
        settings: Defaults to apply; DEFAULT_SETTINGS when omitted.

    Returns:
        ImportResult with the character, or a parse/validation error.
    """
    settings = settings or DEFAULT_SETTINGS

    try:
        data = load_json_object(raw_text, "Foundry VTT")
        name = require_name(data.get("name"))
    except ImportFailure as e:
        logger.warning(f"Foundry VTT import failed: {e}")
        return ImportResult.failed(FORMAT.value, e.error)

    details = dig(data, "data", "details")
    attributes = dig(data, "data", "attributes")

    hp_current = parse_int_or(dig(attributes, "hp", "value"), settings.default_hit_points)
    mp_current = parse_int_or(dig(attributes, "mp", "value"), settings.default_mana_points)

    character = Character(
        name=name,
        level=parse_int_or(dig(details, "level"), 1, minimum=1),
        race=string_or(dig(details, "race"), settings.default_race),
        character_class=string_or(dig(details, "class"), settings.default_class),
        ability_scores=build_ability_scores(
            {
                key: dig(data, "data", "abilities", abbr, "value")
                for abbr, key in ABILITY_MAP.items()
            },
            settings.default_ability_score,
        ),
        hit_points=PointPool(
            current=hp_current,
            max=parse_int_or(dig(attributes, "hp", "max"), settings.default_hit_points),
        ),
        mana_points=PointPool(
            current=mp_current,
            max=parse_int_or(dig(attributes, "mp", "max"), settings.default_mana_points),
        ),
        skills=map_skills(data),
        equipment=list_or(
            _items_of_type(data, EQUIPMENT_ITEM_TYPES),
            lambda item: map_equipment_item(item, settings),
        ),
        abilities=list_or(_items_of_type(data, ABILITY_ITEM_TYPES), map_ability_item),
        backstory=string_or(dig(details, "biography", "value"), ""),
        personality=string_or(dig(details, "personality"), ""),
        goals=string_or(dig(details, "ideals"), ""),
        notes=settings.provenance(FORMAT.value),
    )

    logger.info(f"Imported '{character.name}' from Foundry VTT")
    return ImportResult(character=character, source_format=FORMAT.value)
