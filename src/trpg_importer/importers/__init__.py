"""
Character import from external TRPG tools.

Currently supports:
- Generic JSON (including this library's own export)
- Udonarium (XML)
- Foundry VTT (actor JSON)
- Roll20 (attribute JSON)
- D&D Beyond (character JSON)
- CSV (one character per file)
"""

from .base import CampaignImportResult, ImportError, ImportErrorKind, ImportResult
from .formats import FORMAT_LABELS, ImportFormat, detect_format
from .service import import_campaign, import_character, import_character_file

__all__ = [
    "import_character",
    "import_character_file",
    "import_campaign",
    "detect_format",
    "ImportFormat",
    "FORMAT_LABELS",
    "ImportResult",
    "CampaignImportResult",
    "ImportError",
    "ImportErrorKind",
]
