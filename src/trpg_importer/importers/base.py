"""
Base models for the character import system.

Import problems are returned as data, never raised: every importer hands back
an ImportResult whose ``errors`` list explains why no character was produced.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field

from ..models import ABILITY_KEYS, AbilityScores, Campaign, Character
from .coercion import parse_int_or, string_or


class ImportErrorKind(str, Enum):
    """Category of a fatal import problem."""
    PARSE = "parse"            # text is not valid for the declared format
    SCHEMA = "schema"          # valid syntax, required node missing
    VALIDATION = "validation"  # node present, value rejected
    INTERNAL = "internal"      # importer bug caught at the service boundary


class ImportError(BaseModel):
    """A field-level import error.

    ``field`` is a dotted path into the source document when one is known,
    otherwise a synthetic tag such as ``"format"`` or ``"file"``.
    """

    field: str = Field(description="Source field (dotted path) or synthetic tag")
    message: str = Field(description="Human-readable error message")
    kind: ImportErrorKind = Field(description="Error category")

    @classmethod
    def parse_error(cls, message: str, field: str = "format") -> ImportError:
        return cls(field=field, message=message, kind=ImportErrorKind.PARSE)

    @classmethod
    def schema_error(cls, message: str, field: str = "format") -> ImportError:
        return cls(field=field, message=message, kind=ImportErrorKind.SCHEMA)

    @classmethod
    def validation_error(cls, field: str, message: str) -> ImportError:
        return cls(field=field, message=message, kind=ImportErrorKind.VALIDATION)

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ImportResult(BaseModel):
    """Result of a character import operation."""

    character: Character | None = Field(
        default=None,
        description="The normalized character, or None when the import failed",
    )
    errors: list[ImportError] = Field(
        default_factory=list,
        description="Fatal problems that prevented the import",
    )
    source_format: str = Field(description="Format tag of the adapter that ran")

    @classmethod
    def failed(cls, source_format: str, *errors: ImportError) -> ImportResult:
        return cls(character=None, errors=list(errors), source_format=source_format)

    @property
    def ok(self) -> bool:
        """True when a character was produced without errors."""
        return self.character is not None and not self.errors

    def format(self) -> str:
        """Format the result as a readable text block.

        Returns:
            A short preview of the imported character, or the list of errors.
        """
        lines: list[str] = []

        if self.character is None:
            lines.append(f"Import Failed ({self.source_format})")
            lines.append(f"Errors ({len(self.errors)}):")
            for error in self.errors:
                lines.append(f"  - {error}")
            return "\n".join(lines)

        char = self.character
        lines.append(f"Import Preview ({self.source_format}) - {char.name}")
        lines.append(
            f"  Level {char.level} {char.race} {char.character_class} "
            f"[{char.character_type.value}]"
        )
        scores = ", ".join(f"{k} {v}" for k, v in char.ability_scores.by_key().items())
        lines.append(f"  Abilities: {scores}")
        lines.append(
            f"  HP {char.hit_points.current}/{char.hit_points.max}, "
            f"MP {char.mana_points.current}/{char.mana_points.max}"
        )
        lines.append(
            f"  {len(char.skills)} skills, {len(char.equipment)} items, "
            f"{len(char.abilities)} abilities"
        )
        return "\n".join(lines)


class CampaignImportResult(BaseModel):
    """Result of a campaign import operation."""

    campaign: Campaign | None = Field(
        default=None,
        description="The validated campaign, or None when the import failed",
    )
    errors: list[ImportError] = Field(
        default_factory=list,
        description="Fatal problems that prevented the import",
    )
    renamed: bool = Field(
        default=False,
        description="True when the id collided and a new id/title was assigned",
    )

    @property
    def ok(self) -> bool:
        return self.campaign is not None and not self.errors


class ImportFailure(Exception):
    """Raised inside an importer for a fatal condition.

    Importers catch it at their ``parse`` boundary and turn ``error`` into a
    failed ImportResult, so it never reaches the caller.
    """

    def __init__(self, error: ImportError):
        super().__init__(str(error))
        self.error = error


def load_json_object(raw_text: str, label: str) -> dict[str, Any]:
    """Parse text as a JSON object.

    Args:
        raw_text: Raw file content.
        label: Format name used in error messages.

    Returns:
        The decoded object.

    Raises:
        ImportFailure: If the text is not JSON, or not a JSON object.
    """
    try:
        data = json.loads(raw_text)
    except ValueError as e:
        # JSONDecodeError, or an integer literal past the int conversion limit
        raise ImportFailure(
            ImportError.parse_error(f"Invalid JSON in {label} file: {e}")
        ) from None

    if not isinstance(data, dict):
        raise ImportFailure(
            ImportError.schema_error(
                f"Invalid {label} file: expected JSON object, got {type(data).__name__}"
            )
        )
    return data


def require_name(raw: Any, field: str = "name") -> str:
    """Return the character name, or fail if it is missing or blank.

    Raises:
        ImportFailure: With a validation error on ``field``.
    """
    name = string_or(raw, "")
    if not name:
        raise ImportFailure(
            ImportError.validation_error(field, "Character name is required")
        )
    return name


def build_ability_scores(raw_by_key: Mapping[str, Any], default: int) -> AbilityScores:
    """Build AbilityScores from raw values keyed by STR, DEX, ... .

    Missing or unparsable values take ``default``.
    """
    return AbilityScores(
        **{key: parse_int_or(raw_by_key.get(key), default) for key in ABILITY_KEYS}
    )
