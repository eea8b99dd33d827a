"""
D&D Beyond JSON schema constants and lookup tables.

These map DDB's internal field names to canonical equivalents.
Based on community reverse-engineering of the v5 character-service export.
"""

# ---------------------------------------------------------------------------
# Ability scores
# ---------------------------------------------------------------------------

# DDB exports ``stats`` in a fixed order; the importer reads them by position,
# not by the ``id`` each entry carries.
STAT_POSITION_KEYS: tuple[str, ...] = ("STR", "DEX", "CON", "INT", "WIS", "CHA")

# ---------------------------------------------------------------------------
# Item filter types → canonical equipment type
# ---------------------------------------------------------------------------

ITEM_FILTER_TYPE_MAP: dict[str, str] = {
    "Weapon": "weapon",
    "Armor": "armor",
    "Potion": "consumable",
    "Scroll": "consumable",
    "Wondrous Item": "accessory",
    "Ring": "accessory",
    "Rod": "misc",
    "Staff": "weapon",
    "Wand": "misc",
    "Ammunition": "consumable",
    "Holy Symbol": "misc",
    "Adventuring Gear": "misc",
    "Tool": "tool",
    "Shield": "armor",
    "Other Gear": "misc",
}

# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------

# Modifier types that grant a skill; expertise ranks above proficiency
SKILL_MODIFIER_RANKS: dict[str, int] = {
    "proficiency": 1,
    "expertise": 2,
}

# DDB modifier "subType" values for skills → display name
SKILL_SUBTYPES: dict[str, str] = {
    "acrobatics": "Acrobatics",
    "animal-handling": "Animal Handling",
    "arcana": "Arcana",
    "athletics": "Athletics",
    "deception": "Deception",
    "history": "History",
    "insight": "Insight",
    "intimidation": "Intimidation",
    "investigation": "Investigation",
    "medicine": "Medicine",
    "nature": "Nature",
    "perception": "Perception",
    "performance": "Performance",
    "persuasion": "Persuasion",
    "religion": "Religion",
    "sleight-of-hand": "Sleight of Hand",
    "stealth": "Stealth",
    "survival": "Survival",
}

# Modifier source sections in DDB JSON
MODIFIER_SECTIONS = ("race", "class", "background", "item", "feat", "condition")

# ---------------------------------------------------------------------------
# Spells
# ---------------------------------------------------------------------------

# Spell list sections, class spells first
SPELL_SECTIONS = ("class", "race", "item", "feat")
