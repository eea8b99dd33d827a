"""
Public entry points for character and campaign import.

The service only decodes input, picks an adapter and returns its result
unchanged. It holds no state between calls.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Container

from ..config import ImportSettings
from . import csv_sheet, foundry, generic_json, roll20, udonarium
from .base import CampaignImportResult, ImportError, ImportErrorKind, ImportResult
from .campaign import parse_campaign
from .dndbeyond import mapper as dndbeyond
from .formats import ImportFormat, detect_format

logger = logging.getLogger("trpg-importer")

Adapter = Callable[[str, ImportSettings | None], ImportResult]

ADAPTERS: dict[ImportFormat, Adapter] = {
    ImportFormat.GENERIC_JSON: generic_json.parse,
    ImportFormat.UDONARIUM: udonarium.parse,
    ImportFormat.FOUNDRY_VTT: foundry.parse,
    ImportFormat.ROLL20: roll20.parse,
    ImportFormat.DND_BEYOND: dndbeyond.parse,
    ImportFormat.CSV: csv_sheet.parse,
}

_missing = set(ImportFormat) - set(ADAPTERS)
if _missing:
    raise RuntimeError(f"No adapter registered for formats: {sorted(f.value for f in _missing)}")


def decode_text(raw: str | bytes) -> str:
    """Decode raw file content as UTF-8, tolerating a byte-order mark.

    Raises:
        UnicodeDecodeError: If the bytes are not valid UTF-8.
    """
    if isinstance(raw, bytes):
        return raw.decode("utf-8-sig")
    return raw.removeprefix("\ufeff")


def resolve_format(
    format: ImportFormat | str | None, filename: str | Path | None
) -> ImportFormat:
    """Return the explicit format, or detect it from the file name.

    Raises:
        ValueError: If ``format`` is a string that names no known format.
    """
    if format is None:
        return detect_format(filename or "")
    if isinstance(format, str):
        format = format.strip().lower()
    return ImportFormat(format)


def _format_tag(format: ImportFormat | str | None, filename: str | Path | None) -> str:
    try:
        return resolve_format(format, filename).value
    except ValueError:
        return str(format)


def import_character(
    raw: str | bytes,
    format: ImportFormat | str | None = None,
    *,
    filename: str | Path | None = None,
    settings: ImportSettings | None = None,
) -> ImportResult:
    """Import a character from raw file content.

    Args:
        raw: File content as text, or UTF-8 bytes.
        format: Source format; detected from ``filename`` when omitted.
        filename: Used only for format detection.
        settings: Defaults to apply; DEFAULT_SETTINGS when omitted.

    Returns:
        The adapter's ImportResult. Never raises for bad input.
    """
    try:
        source_format = resolve_format(format, filename)
    except ValueError:
        supported = ", ".join(f.value for f in ImportFormat)
        return ImportResult.failed(
            str(format),
            ImportError.schema_error(
                f"Unsupported import format '{format}'. Supported: {supported}"
            ),
        )

    try:
        text = decode_text(raw)
    except UnicodeDecodeError as e:
        return ImportResult.failed(
            source_format.value,
            ImportError.parse_error(f"File is not valid UTF-8 text: {e}", field="file"),
        )

    try:
        return ADAPTERS[source_format](text, settings)
    except Exception as e:
        logger.exception(f"Unexpected error in {source_format.value} importer")
        return ImportResult.failed(
            source_format.value,
            ImportError(
                field="format",
                message=f"Import failed due to an internal error: {e}",
                kind=ImportErrorKind.INTERNAL,
            ),
        )


def import_character_file(
    path: str | Path,
    format: ImportFormat | str | None = None,
    *,
    settings: ImportSettings | None = None,
) -> ImportResult:
    """Read a character file and import it.

    Args:
        path: Path to the exported file.
        format: Source format; detected from the file extension when omitted.
        settings: Defaults to apply; DEFAULT_SETTINGS when omitted.

    Returns:
        ImportResult; a missing or unreadable file is reported on ``file``.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return ImportResult.failed(
            _format_tag(format, path),
            ImportError.parse_error(f"Character file not found: {path}", field="file"),
        )
    except OSError as e:
        return ImportResult.failed(
            _format_tag(format, path),
            ImportError.parse_error(f"Failed to read character file: {e}", field="file"),
        )

    return import_character(raw, format, filename=path, settings=settings)


def import_campaign(
    raw: str | bytes,
    existing_ids: Container[str] = (),
    *,
    settings: ImportSettings | None = None,
) -> CampaignImportResult:
    """Import a campaign from raw JSON content.

    Args:
        raw: File content as text, or UTF-8 bytes.
        existing_ids: Ids already present in the destination store.
        settings: Supplies the title suffix used on id collision.

    Returns:
        CampaignImportResult. Never raises for bad input.
    """
    try:
        text = decode_text(raw)
    except UnicodeDecodeError as e:
        return CampaignImportResult(
            errors=[ImportError.parse_error(f"File is not valid UTF-8 text: {e}", field="file")]
        )
    return parse_campaign(text, existing_ids, settings)
