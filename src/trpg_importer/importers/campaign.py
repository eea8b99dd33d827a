"""
Campaign JSON importer.

Validates a whole-campaign export before it is handed to a store. Unlike
character import, the result is checked against the ids already in the
destination: a colliding campaign gets a new id and a marked title.
"""

from __future__ import annotations

import logging
from typing import Any, Container

from pydantic import ValidationError

from ..config import DEFAULT_SETTINGS, ImportSettings
from ..models import Campaign, new_id
from .base import CampaignImportResult, ImportError, ImportFailure, load_json_object
from .coercion import id_or, string_or

logger = logging.getLogger("trpg-importer.campaign")

REQUIRED_TEXT_FIELDS: dict[str, str] = {
    "title": "Campaign title is required",
    "gameSystem": "Game system is required",
}

LIST_FIELDS: dict[str, str] = {
    "characters": "Character list must be an array",
    "sessions": "Session list must be an array",
}


def validate_campaign(data: dict[str, Any]) -> list[ImportError]:
    """Check required fields and list types, collecting every problem."""
    errors: list[ImportError] = []

    for field, message in REQUIRED_TEXT_FIELDS.items():
        if not string_or(data.get(field), ""):
            errors.append(ImportError.validation_error(field, message))

    for field, message in LIST_FIELDS.items():
        value = data.get(field)
        if value is not None and not isinstance(value, list):
            errors.append(ImportError.validation_error(field, message))

    return errors


def _model_errors(error: ValidationError) -> list[ImportError]:
    return [
        ImportError.validation_error(
            ".".join(str(part) for part in detail["loc"]) or "campaign",
            detail["msg"],
        )
        for detail in error.errors()
    ]


def parse_campaign(
    raw_text: str,
    existing_ids: Container[str] = (),
    settings: ImportSettings | None = None,
) -> CampaignImportResult:
    """Import a campaign from its JSON export.

    Args:
        raw_text: JSON document text.
        existing_ids: Ids already present in the destination store.
        settings: Supplies the title suffix used on id collision.

    Returns:
        CampaignImportResult with the campaign, or field-tagged errors.
    """
    settings = settings or DEFAULT_SETTINGS

    try:
        data = load_json_object(raw_text, "campaign")
    except ImportFailure as e:
        logger.warning(f"Campaign import failed: {e}")
        return CampaignImportResult(errors=[e.error])

    errors = validate_campaign(data)
    if errors:
        logger.warning(f"Campaign import failed with {len(errors)} errors")
        return CampaignImportResult(errors=errors)

    document = {
        key: value for key, value in data.items()
        if not (key in LIST_FIELDS and value is None)
    }

    campaign_id = id_or(document.get("id"), "")
    renamed = False
    if not campaign_id:
        campaign_id = new_id()
    elif campaign_id in existing_ids:
        logger.info(f"Campaign id '{campaign_id}' already exists, assigning a new id")
        campaign_id = new_id()
        document["title"] = f"{document['title']}{settings.imported_suffix}"
        renamed = True
    document["id"] = campaign_id

    try:
        campaign = Campaign.model_validate(document)
    except ValidationError as e:
        logger.warning(f"Campaign import failed validation: {e.error_count()} errors")
        return CampaignImportResult(errors=_model_errors(e))

    logger.info(f"Imported campaign '{campaign.title}'")
    return CampaignImportResult(campaign=campaign, renamed=renamed)
