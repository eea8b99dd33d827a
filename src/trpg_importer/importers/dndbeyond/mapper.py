"""
Mapper functions for translating D&D Beyond JSON to the canonical Character.

DDB's export is deeply nested; each mapper function below handles one area
and falls back to defaults when its part of the document is missing, so a
partial export still yields a character.
"""

from __future__ import annotations

import logging
from typing import Any

from ...config import DEFAULT_SETTINGS, ImportSettings
from ...models import Character, CharacterAbility, EquipmentItem, PointPool, Skill
from ..base import (
    ImportFailure,
    ImportResult,
    build_ability_scores,
    load_json_object,
    require_name,
)
from ..coercion import dig, list_or, parse_int_or, string_or
from ..formats import ImportFormat
from .schema import (
    ITEM_FILTER_TYPE_MAP,
    MODIFIER_SECTIONS,
    SKILL_MODIFIER_RANKS,
    SKILL_SUBTYPES,
    SPELL_SECTIONS,
    STAT_POSITION_KEYS,
)

logger = logging.getLogger("trpg-importer.dndbeyond")

FORMAT = ImportFormat.DND_BEYOND


def unwrap(document: dict) -> dict:
    """Unwrap the ``{"data": {...}}`` envelope if present."""
    inner = document.get("data")
    if isinstance(inner, dict):
        return inner
    return document


def map_identity(ddb: dict, settings: ImportSettings) -> dict:
    """Map level, race and class.

    Only the first entry of ``classes`` is read; multiclass levels are not
    summed.
    """
    return {
        "level": parse_int_or(dig(ddb, "classes", 0, "level"), 1, minimum=1),
        "race": string_or(dig(ddb, "race", "fullName"), settings.default_race),
        "character_class": string_or(
            dig(ddb, "classes", 0, "definition", "name"), settings.default_class
        ),
    }


def map_abilities(ddb: dict) -> dict[str, Any]:
    """Read raw ability values by array position: 0=STR ... 5=CHA.

    DDB entries also carry a stat ``id``, but the export order is what the
    character sheet shows, so position is authoritative here.
    """
    return {
        key: dig(ddb, "stats", index, "value")
        for index, key in enumerate(STAT_POSITION_KEYS)
    }


def map_hit_points(ddb: dict, settings: ImportSettings) -> PointPool:
    """Map hit points; current falls back to max minus damage taken."""
    hp_max = parse_int_or(ddb.get("baseHitPoints"), settings.default_hit_points)
    removed = parse_int_or(ddb.get("removedHitPoints"), 0)
    current = parse_int_or(ddb.get("currentHitPoints"), max(0, hp_max - removed))
    return PointPool(current=current, max=hp_max)


def map_skills(ddb: dict) -> list[Skill]:
    """Collect skill proficiencies from every modifier section.

    Expertise outranks proficiency; each skill appears once, in the order it
    was first seen.
    """
    ranks: dict[str, int] = {}
    names: dict[str, str] = {}

    modifiers = ddb.get("modifiers")
    if not isinstance(modifiers, dict):
        return []

    for section_name in MODIFIER_SECTIONS:
        section = modifiers.get(section_name)
        if not isinstance(section, list):
            continue
        for mod in section:
            if not isinstance(mod, dict):
                continue
            rank = SKILL_MODIFIER_RANKS.get(string_or(mod.get("type"), ""))
            sub_type = string_or(mod.get("subType"), "")
            if rank is None or sub_type not in SKILL_SUBTYPES:
                continue
            names.setdefault(
                sub_type, string_or(mod.get("friendlySubtypeName"), SKILL_SUBTYPES[sub_type])
            )
            ranks[sub_type] = max(rank, ranks.get(sub_type, 0))

    return [Skill(name=names[key], level=ranks[key]) for key in names]


def map_inventory_item(item: Any, settings: ImportSettings) -> EquipmentItem | None:
    if not isinstance(item, dict):
        return None
    name = string_or(dig(item, "definition", "name"), "") or string_or(item.get("name"), "")
    if not name:
        return None

    filter_type = string_or(dig(item, "definition", "filterType"), "")
    item_type = ITEM_FILTER_TYPE_MAP.get(filter_type) or string_or(
        dig(item, "definition", "type"), settings.default_equipment_type
    )
    return EquipmentItem(
        name=name,
        type=item_type,
        description=string_or(dig(item, "definition", "description"), ""),
        quantity=parse_int_or(item.get("quantity"), 1),
    )


def map_spell(entry: Any) -> CharacterAbility | None:
    name = string_or(dig(entry, "definition", "name"), "")
    if not name:
        return None
    return CharacterAbility(
        name=name,
        description=string_or(dig(entry, "definition", "description"), ""),
        kind="spell",
    )


def map_spells(ddb: dict) -> list[CharacterAbility]:
    """Map spells from each spell section, class spells first."""
    spells: list[CharacterAbility] = []
    for section_name in SPELL_SECTIONS:
        spells.extend(list_or(dig(ddb, "spells", section_name), map_spell))
    return spells


def parse(raw_text: str, settings: ImportSettings | None = None) -> ImportResult:
    """Import a character from a D&D Beyond JSON export.

    Args:
        raw_text: JSON document text, with or without the ``data`` envelope.
        settings: Defaults to apply; DEFAULT_SETTINGS when omitted.

    Returns:
        ImportResult with the character, or a parse/validation error.
    """
    settings = settings or DEFAULT_SETTINGS

    try:
        ddb = unwrap(load_json_object(raw_text, "D&D Beyond"))
        name = require_name(ddb.get("name"))
    except ImportFailure as e:
        logger.warning(f"D&D Beyond import failed: {e}")
        return ImportResult.failed(FORMAT.value, e.error)

    character = Character(
        name=name,
        **map_identity(ddb, settings),
        ability_scores=build_ability_scores(
            map_abilities(ddb), settings.default_ability_score
        ),
        hit_points=map_hit_points(ddb, settings),
        # DDB characters have no mana
        mana_points=PointPool(
            current=settings.default_mana_points, max=settings.default_mana_points
        ),
        skills=map_skills(ddb),
        equipment=list_or(
            ddb.get("inventory"), lambda item: map_inventory_item(item, settings)
        ),
        abilities=map_spells(ddb),
        backstory=string_or(dig(ddb, "notes", "backstory"), ""),
        personality=string_or(dig(ddb, "traits", "personalityTraits"), ""),
        goals=string_or(dig(ddb, "traits", "ideals"), ""),
        notes=settings.provenance(FORMAT.value),
    )

    logger.info(f"Imported '{character.name}' from D&D Beyond")
    return ImportResult(character=character, source_format=FORMAT.value)
