"""
Supported external character formats and extension-based detection.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath


class ImportFormat(str, Enum):
    """External TRPG tool formats the importer understands."""
    GENERIC_JSON = "json"
    UDONARIUM = "udonarium"
    FOUNDRY_VTT = "foundry"
    ROLL20 = "roll20"
    DND_BEYOND = "dndbeyond"
    CSV = "csv"


# Display label and typical file extension per format
FORMAT_LABELS: dict[ImportFormat, tuple[str, str]] = {
    ImportFormat.GENERIC_JSON: ("Generic JSON", ".json"),
    ImportFormat.UDONARIUM: ("Udonarium", ".xml"),
    ImportFormat.FOUNDRY_VTT: ("Foundry VTT", ".json"),
    ImportFormat.ROLL20: ("Roll20", ".json"),
    ImportFormat.DND_BEYOND: ("D&D Beyond", ".json"),
    ImportFormat.CSV: ("CSV", ".csv"),
}

_EXTENSION_FORMATS: dict[str, ImportFormat] = {
    ".xml": ImportFormat.UDONARIUM,
    ".csv": ImportFormat.CSV,
}


def detect_format(filename: str | PurePath) -> ImportFormat:
    """Guess the import format from a file name.

    Only the extension is considered, never the file content. Anything that
    is not ``.xml`` or ``.csv`` is treated as generic JSON.

    Args:
        filename: File name or path.

    Returns:
        The guessed ImportFormat.
    """
    suffix = PurePath(filename).suffix.lower()
    return _EXTENSION_FORMATS.get(suffix, ImportFormat.GENERIC_JSON)
