"""Tests for campaign import."""

import json

import pytest
from pydantic import ValidationError

from trpg_importer import import_campaign
from trpg_importer.config import ImportSettings
from trpg_importer.importers.base import ImportErrorKind
from trpg_importer.importers.campaign import _model_errors
from trpg_importer.models import Campaign


class TestCampaignImport:
    """Test successful campaign import."""

    def test_sample(self, read_fixture):
        result = import_campaign(read_fixture("campaign_sample.json"))

        assert result.ok
        assert not result.renamed
        campaign = result.campaign
        assert campaign.id == "camp-001"
        assert campaign.title == "The Sunken Crown"
        assert campaign.game_system == "D&D 5e"
        assert len(campaign.characters) == 1
        assert len(campaign.sessions) == 1

    def test_extra_fields_preserved(self, read_fixture):
        data = import_campaign(read_fixture("campaign_sample.json")).campaign.to_json_dict()

        assert data["gamemaster"] == "Rin"
        assert data["synopsis"] == "A drowned kingdom stirs."
        assert data["worldBuilding"] == {"places": []}

    def test_missing_id_generated(self):
        result = import_campaign(json.dumps({"title": "T", "gameSystem": "G"}))

        assert result.ok
        assert len(result.campaign.id) == 8
        assert result.campaign.characters == []

    def test_null_lists_treated_as_absent(self):
        raw = json.dumps({"title": "T", "gameSystem": "G", "characters": None})
        assert import_campaign(raw).campaign.characters == []

    def test_list_entries_not_inspected(self):
        raw = json.dumps({
            "title": "T", "gameSystem": "G", "characters": ["pc-1", "pc-2"], "sessions": [3],
        })
        result = import_campaign(raw)

        assert result.ok
        assert result.campaign.characters == ["pc-1", "pc-2"]
        assert result.campaign.sessions == [3]

    def test_bytes(self, read_fixture):
        raw = read_fixture("campaign_sample.json").encode("utf-8")
        assert import_campaign(raw).ok


class TestCampaignCollision:
    """Test id collision handling."""

    def test_collision_assigns_new_id(self, read_fixture):
        result = import_campaign(read_fixture("campaign_sample.json"), existing_ids={"camp-001"})

        assert result.ok
        assert result.renamed
        assert result.campaign.id != "camp-001"
        assert result.campaign.title == "The Sunken Crown (imported)"

    def test_custom_suffix(self, read_fixture):
        settings = ImportSettings(imported_suffix=" [copy]")
        result = import_campaign(
            read_fixture("campaign_sample.json"), ["camp-001"], settings=settings
        )
        assert result.campaign.title == "The Sunken Crown [copy]"

    def test_numeric_id_collision(self):
        raw = json.dumps({"id": 7, "title": "T", "gameSystem": "D&D"})
        result = import_campaign(raw, existing_ids={"7"})

        assert result.renamed
        assert result.campaign.id != "7"
        assert result.campaign.title == "T (imported)"

    def test_numeric_id_kept_without_collision(self):
        raw = json.dumps({"id": 7, "title": "T", "gameSystem": "D&D"})
        result = import_campaign(raw)

        assert not result.renamed
        assert result.campaign.id == "7"

    def test_no_collision(self, read_fixture):
        result = import_campaign(read_fixture("campaign_sample.json"), existing_ids={"other"})

        assert not result.renamed
        assert result.campaign.id == "camp-001"


class TestCampaignErrors:
    """Test rejected campaigns."""

    def test_malformed(self):
        result = import_campaign("{oops")

        assert result.campaign is None
        assert result.errors[0].kind == ImportErrorKind.PARSE

    def test_not_an_object(self):
        result = import_campaign('"campaign"')

        assert result.errors[0].kind == ImportErrorKind.SCHEMA

    def test_all_missing_fields_reported(self):
        result = import_campaign(json.dumps({"characters": {}, "sessions": "none"}))

        assert result.campaign is None
        assert {e.field for e in result.errors} == {
            "title", "gameSystem", "characters", "sessions",
        }
        assert {e.kind for e in result.errors} == {ImportErrorKind.VALIDATION}

    def test_blank_title(self):
        result = import_campaign(json.dumps({"title": " ", "gameSystem": "G"}))

        assert [e.field for e in result.errors] == ["title"]

    def test_model_errors_use_dotted_location(self):
        with pytest.raises(ValidationError) as excinfo:
            Campaign.model_validate({"title": "T", "gameSystem": "G", "sessions": "x"})

        errors = _model_errors(excinfo.value)

        assert [e.field for e in errors] == ["sessions"]
        assert errors[0].kind == ImportErrorKind.VALIDATION

    def test_invalid_utf8(self):
        result = import_campaign(b"\xc3\x28")

        assert result.errors[0].field == "file"
