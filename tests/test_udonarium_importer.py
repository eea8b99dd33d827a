"""Tests for the Udonarium XML importer."""

from lxml import etree

from trpg_importer.importers import udonarium
from trpg_importer.importers.base import ImportErrorKind


class TestUdonariumFixture:
    """Import the sample Udonarium character."""

    def test_character(self, read_fixture):
        result = udonarium.parse(read_fixture("udonarium_character.xml"))

        assert result.ok
        char = result.character
        assert char.name == "Mira Ashgrove"
        assert char.level == 3
        assert char.race == "Half-Elf"
        assert char.character_class == "Wizard"
        assert result.source_format == "udonarium"

    def test_scores_and_pools(self, read_fixture):
        char = udonarium.parse(read_fixture("udonarium_character.xml")).character

        assert char.ability_scores.by_key() == {
            "STR": 8, "DEX": 14, "CON": 12, "INT": 17, "WIS": 13, "CHA": 10,
        }
        assert (char.hit_points.current, char.hit_points.max) == (18, 18)
        assert (char.mana_points.current, char.mana_points.max) == (12, 12)

    def test_text_fields(self, read_fixture):
        char = udonarium.parse(read_fixture("udonarium_character.xml")).character

        assert char.backstory == "Apprenticed to a court mage."
        assert char.personality == "Curious"
        assert char.goals == "Find the lost library"
        assert char.notes == "Imported from Udonarium"
        assert char.skills == [] and char.equipment == []


class TestUdonariumStructure:
    """Test document layouts and node indexing."""

    def test_character_nested_in_room(self):
        xml = (
            "<room><character><data name=\"character\">"
            "<data name=\"name\">Nested</data>"
            "</data></character></room>"
        )
        result = udonarium.parse(xml)

        assert result.ok
        assert result.character.name == "Nested"

    def test_first_leaf_wins(self):
        node = etree.fromstring(
            "<character>"
            "<data name=\"a\"><data name=\"HP\">5</data></data>"
            "<data name=\"HP\">9</data>"
            "</character>"
        )
        assert udonarium.index_data_nodes(node) == {"HP": "5"}

    def test_group_nodes_not_indexed(self):
        node = etree.fromstring(
            "<character><data name=\"common\"><data name=\"name\">X</data></data></character>"
        )
        assert "common" not in udonarium.index_data_nodes(node)

    def test_declared_encoding_ignored_for_decoded_text(self):
        xml = (
            '<?xml version="1.0" encoding="Shift_JIS"?>\n'
            '<character><data name="name">\u30df\u30e9</data></character>'
        )
        result = udonarium.parse(xml)

        assert result.ok
        assert result.character.name == "\u30df\u30e9"

    def test_missing_stats_default(self):
        xml = "<character><data name=\"name\">Bare</data></character>"
        char = udonarium.parse(xml).character

        assert char.level == 1
        assert char.hit_points.max == 10
        assert char.ability_scores.wisdom == 10


class TestUdonariumErrors:
    """Test fatal import errors."""

    def test_malformed_xml(self):
        result = udonarium.parse("<character><data>")

        assert result.character is None
        assert result.errors[0].field == "format"
        assert result.errors[0].kind == ImportErrorKind.PARSE

    def test_no_character_element(self):
        result = udonarium.parse("<room><data name=\"name\">X</data></room>")

        assert result.character is None
        assert result.errors[0].field == "character"
        assert result.errors[0].kind == ImportErrorKind.SCHEMA

    def test_missing_name(self):
        result = udonarium.parse("<character><data name=\"HP\">5</data></character>")

        assert result.character is None
        assert result.errors[0].field == "name"

    def test_external_entities_not_resolved(self):
        xml = (
            "<?xml version=\"1.0\"?>"
            "<!DOCTYPE character [<!ENTITY x SYSTEM \"file:///etc/hostname\">]>"
            "<character><data name=\"name\">Safe</data>"
            "<data name=\"race\">&x;</data></character>"
        )
        result = udonarium.parse(xml)

        # Either the document is rejected or the entity stays unexpanded
        if result.character is not None:
            assert result.character.race == "Human"
