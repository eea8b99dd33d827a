"""
CSV character sheet importer.

The first row is a header, the second row is the character. One character
per file: any further rows are ignored. Header names are case-insensitive and
several spellings are accepted per field (see FIELD_ALIASES).
"""

from __future__ import annotations

import csv
import io
import logging

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

logger = logging.getLogger("trpg-importer.csv")

FORMAT = ImportFormat.CSV

# Canonical field → accepted column names, highest priority first
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "level": ("level",),
    "race": ("race",),
    "class": ("class",),
    "hp": ("hp",),
    "max_hp": ("maxhp", "hp_max", "hp"),
    "mp": ("mp",),
    "max_mp": ("maxmp", "mp_max", "mp"),
    "STR": ("strength", "str"),
    "DEX": ("dexterity", "dex"),
    "CON": ("constitution", "con"),
    "INT": ("intelligence", "int"),
    "WIS": ("wisdom", "wis"),
    "CHA": ("charisma", "cha"),
    "backstory": ("backstory",),
    "personality": ("personality",),
    "goals": ("goals",),
}


def read_rows(raw_text: str) -> tuple[list[str], list[str]]:
    """Return the header row and the first data row.

    Raises:
        ImportFailure: If the text cannot be read as CSV.
    """
    text = raw_text.lstrip("\ufeff")
    try:
        reader = csv.reader(io.StringIO(text), strict=True)
        rows = [row for row in reader if any(cell.strip() for cell in row)]
    except csv.Error as e:
        raise ImportFailure(ImportError.parse_error(f"Invalid CSV: {e}")) from None

    if not rows:
        return [], []
    if len(rows) > 2:
        logger.debug(f"Ignoring {len(rows) - 2} extra CSV rows, one character per file")

    header = [h.strip().lower() for h in rows[0]]
    values = [v.strip() for v in rows[1]] if len(rows) > 1 else []
    return header, values


def build_record(header: list[str], values: list[str]) -> dict[str, str]:
    """Pair header names with values; missing trailing values become ""."""
    record: dict[str, str] = {}
    for index, key in enumerate(header):
        if key and key not in record:
            record[key] = values[index] if index < len(values) else ""
    return record


def lookup(record: dict[str, str], field: str) -> str | None:
    """Return the first non-blank value among the field's aliases."""
    for alias in FIELD_ALIASES[field]:
        value = record.get(alias)
        if value:
            return value
    return None


def parse(raw_text: str, settings: ImportSettings | None = None) -> ImportResult:
    """Import a character from a CSV sheet.

    Args:
        raw_text: CSV text with a header row and one data row.
        settings: Defaults to apply; DEFAULT_SETTINGS when omitted.

    Returns:
        ImportResult with the character, or a parse/validation error.
    """
    settings = settings or DEFAULT_SETTINGS

    try:
        header, values = read_rows(raw_text)
        record = build_record(header, values)
        name = require_name(lookup(record, "name"))
    except ImportFailure as e:
        logger.warning(f"CSV import failed: {e}")
        return ImportResult.failed(FORMAT.value, e.error)

    hp = parse_int_or(lookup(record, "hp"), settings.default_hit_points)
    mp = parse_int_or(lookup(record, "mp"), settings.default_mana_points)

    character = Character(
        name=name,
        level=parse_int_or(lookup(record, "level"), 1, minimum=1),
        race=string_or(lookup(record, "race"), settings.default_race),
        character_class=string_or(lookup(record, "class"), settings.default_class),
        ability_scores=build_ability_scores(
            {key: lookup(record, key) for key in ABILITY_KEYS},
            settings.default_ability_score,
        ),
        hit_points=PointPool(current=hp, max=parse_int_or(lookup(record, "max_hp"), hp)),
        mana_points=PointPool(current=mp, max=parse_int_or(lookup(record, "max_mp"), mp)),
        backstory=string_or(lookup(record, "backstory"), ""),
        personality=string_or(lookup(record, "personality"), ""),
        goals=string_or(lookup(record, "goals"), ""),
        notes=settings.provenance(FORMAT.value),
    )

    logger.info(f"Imported '{character.name}' from CSV")
    return ImportResult(character=character, source_format=FORMAT.value)
