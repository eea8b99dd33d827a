"""
TRPG character importer - normalizes character sheets exported by other TRPG tools.
"""

from .config import DEFAULT_SETTINGS, ImportSettings, load_settings
from .importers import (
    ImportFormat,
    detect_format,
    import_campaign,
    import_character,
    import_character_file,
)
from .models import Campaign, Character, CharacterType

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("trpg-importer")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = [
    "import_character",
    "import_character_file",
    "import_campaign",
    "detect_format",
    "ImportFormat",
    "Character",
    "CharacterType",
    "Campaign",
    "ImportSettings",
    "DEFAULT_SETTINGS",
    "load_settings",
]
