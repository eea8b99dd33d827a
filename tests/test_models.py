"""Tests for the canonical character and campaign models."""

import pytest
from pydantic import ValidationError

from trpg_importer.models import (
    AbilityScores,
    Campaign,
    Character,
    CharacterType,
    PointPool,
)


class TestCharacter:
    """Test Character defaults and serialization."""

    def test_defaults(self):
        char = Character(name="Aria")

        assert char.level == 1
        assert char.character_type == CharacterType.PC
        assert char.race == "Human"
        assert char.character_class == "Warrior"
        assert char.ability_scores.by_key() == {
            "STR": 10, "DEX": 10, "CON": 10, "INT": 10, "WIS": 10, "CHA": 10,
        }
        assert char.hit_points == PointPool(current=10, max=10)
        assert char.skills == []
        assert char.equipment == []
        assert char.abilities == []
        assert char.image_url is None
        assert len(char.id) == 8

    def test_ids_are_unique(self):
        assert Character(name="A").id != Character(name="A").id

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Character(name="")

    def test_level_must_be_positive(self):
        with pytest.raises(ValidationError):
            Character(name="Aria", level=0)

    def test_json_shape_uses_camel_case(self):
        char = Character(name="Aria", character_class="Bard")
        data = char.to_json_dict()

        assert data["class"] == "Bard"
        assert data["characterType"] == "PC"
        assert data["abilityScores"]["STR"] == 10
        assert data["hitPoints"] == {"current": 10, "max": 10}
        assert data["manaPoints"] == {"current": 10, "max": 10}
        assert "createdAt" in data and "updatedAt" in data
        assert "imageUrl" not in data

    def test_accepts_camel_case_input(self):
        char = Character.model_validate({
            "name": "Aria",
            "class": "Bard",
            "characterType": "Enemy",
            "abilityScores": {"STR": 14},
            "imageUrl": "https://example.com/a.png",
        })

        assert char.character_class == "Bard"
        assert char.character_type == CharacterType.ENEMY
        assert char.ability_scores.strength == 14
        assert char.ability_scores.dexterity == 10
        assert char.to_json_dict()["imageUrl"] == "https://example.com/a.png"


class TestAbilityScores:
    """Test ability score model."""

    def test_by_key_order(self):
        scores = AbilityScores(STR=1, DEX=2, CON=3, INT=4, WIS=5, CHA=6)
        assert list(scores.by_key().items()) == [
            ("STR", 1), ("DEX", 2), ("CON", 3), ("INT", 4), ("WIS", 5), ("CHA", 6),
        ]

    def test_populate_by_field_name(self):
        assert AbilityScores(wisdom=15).wisdom == 15


class TestCampaign:
    """Test the campaign model."""

    def test_extra_fields_survive(self):
        campaign = Campaign.model_validate({
            "id": "c1",
            "title": "Sunken Crown",
            "gameSystem": "D&D 5e",
            "synopsis": "Drowned kingdom",
        })

        data = campaign.to_json_dict()
        assert data["gameSystem"] == "D&D 5e"
        assert data["synopsis"] == "Drowned kingdom"
        assert data["characters"] == []
        assert data["sessions"] == []
