"""
Configuration model for the character import engine.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "TRPG_IMPORT_"


class ImportSettings(BaseModel):
    """Defaults and labels applied while normalizing imported data.

    Every adapter reads its fallback values from here, so two formats that
    both omit a field end up with the same default.
    """
    model_config = ConfigDict(frozen=True)

    # Identity defaults
    default_race: str = Field(
        default="Human",
        description="Race used when the source has none"
    )
    default_class: str = Field(
        default="Warrior",
        description="Class used when the source has none"
    )

    # Numeric defaults
    default_ability_score: int = Field(
        default=10,
        description="Score used for any missing or unparsable ability"
    )
    default_hit_points: int = Field(
        default=10,
        description="Current and max HP when the source has none"
    )
    default_mana_points: int = Field(
        default=10,
        description="Current and max MP when the source has none"
    )

    # List entry defaults
    default_equipment_type: str = Field(
        default="misc",
        description="Equipment type when the source item carries none"
    )
    default_ability_kind: str = Field(
        default="ability",
        description="Kind assigned to abilities with no type of their own"
    )

    # Provenance notes, one per source format
    provenance_notes: dict[str, str] = Field(
        default_factory=lambda: {
            "json": "Imported from JSON",
            "udonarium": "Imported from Udonarium",
            "foundry": "Imported from Foundry VTT",
            "roll20": "Imported from Roll20",
            "dndbeyond": "Imported from D&D Beyond",
            "csv": "Imported from CSV",
        },
        description="Text written to Character.notes, keyed by format tag"
    )

    # Campaign import
    imported_suffix: str = Field(
        default=" (imported)",
        description="Appended to a campaign title when its id collides"
    )

    def provenance(self, format_tag: str) -> str:
        """Return the provenance note for a format tag."""
        return self.provenance_notes.get(format_tag, f"Imported from {format_tag}")


DEFAULT_SETTINGS = ImportSettings()

# Environment variable suffix → settings field
_ENV_FIELDS = {
    "DEFAULT_RACE": "default_race",
    "DEFAULT_CLASS": "default_class",
    "DEFAULT_ABILITY_SCORE": "default_ability_score",
    "DEFAULT_HIT_POINTS": "default_hit_points",
    "DEFAULT_MANA_POINTS": "default_mana_points",
    "DEFAULT_EQUIPMENT_TYPE": "default_equipment_type",
    "DEFAULT_ABILITY_KIND": "default_ability_kind",
    "IMPORTED_SUFFIX": "imported_suffix",
}


def load_settings(env_file: str | Path | None = None) -> ImportSettings:
    """Build settings from the environment.

    Loads ``env_file`` (or a ``.env`` found from the working directory) without
    overriding variables that are already set, then reads ``TRPG_IMPORT_*``
    variables over the defaults.

    Args:
        env_file: Optional path to a dotenv file.

    Returns:
        ImportSettings with environment overrides applied.

    Raises:
        pydantic.ValidationError: If a numeric variable is not an integer.
    """
    load_dotenv(dotenv_path=env_file)

    overrides: dict[str, str] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        value = os.getenv(ENV_PREFIX + suffix)
        if value is not None:
            overrides[field_name] = value

    return ImportSettings(**overrides)
