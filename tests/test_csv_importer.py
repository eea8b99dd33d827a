"""Tests for the CSV character sheet importer."""

from trpg_importer.importers import csv_sheet
from trpg_importer.importers.base import ImportErrorKind


class TestCsvFixture:
    """Import the sample CSV sheet."""

    def test_first_row_only(self, read_fixture):
        result = csv_sheet.parse(read_fixture("character_sheet.csv"))

        assert result.ok
        char = result.character
        assert char.name == "Garrick Hale"
        assert char.level == 4
        assert char.race == "Human"
        assert char.character_class == "Paladin"
        assert result.source_format == "csv"

    def test_values(self, read_fixture):
        char = csv_sheet.parse(read_fixture("character_sheet.csv")).character

        assert (char.hit_points.current, char.hit_points.max) == (30, 36)
        assert (char.mana_points.current, char.mana_points.max) == (8, 8)
        assert char.ability_scores.by_key() == {
            "STR": 16, "DEX": 10, "CON": 14, "INT": 8, "WIS": 12, "CHA": 15,
        }
        assert char.backstory == "Sworn knight, once a farmer"
        assert char.notes == "Imported from CSV"


class TestCsvHeaders:
    """Test header matching."""

    def test_short_names_case_insensitive(self):
        char = csv_sheet.parse('name,level,str\n"Aria",5,17\n').character

        assert char.name == "Aria"
        assert char.level == 5
        assert char.ability_scores.strength == 17
        assert char.ability_scores.dexterity == 10

    def test_long_name_wins(self):
        char = csv_sheet.parse("NAME,STR,Strength\nBo,9,15\n").character
        assert char.ability_scores.strength == 15

    def test_hp_max_aliases(self):
        char = csv_sheet.parse("name,hp,hp_max\nCy,7,12\n").character
        assert (char.hit_points.current, char.hit_points.max) == (7, 12)

    def test_short_row_padded(self):
        char = csv_sheet.parse("name,race,class\nDee\n").character

        assert char.race == "Human"
        assert char.character_class == "Warrior"

    def test_bom_and_blank_lines(self):
        char = csv_sheet.parse("\ufeffname,level\n\n,\nEli,2\n").character

        assert char.name == "Eli"
        assert char.level == 2

    def test_build_record_keeps_first_duplicate(self):
        assert csv_sheet.build_record(["a", "a", ""], ["1", "2", "3"]) == {"a": "1"}


class TestCsvErrors:
    """Test fatal CSV errors."""

    def test_header_only(self):
        result = csv_sheet.parse("name,level\n")

        assert result.character is None
        assert result.errors[0].field == "name"
        assert result.errors[0].kind == ImportErrorKind.VALIDATION

    def test_empty(self):
        result = csv_sheet.parse("")

        assert result.character is None
        assert result.errors[0].field == "name"

    def test_unterminated_quote(self):
        result = csv_sheet.parse('name,level\n"Aria,5\n')

        assert result.character is None
        assert result.errors[0].field == "format"
        assert result.errors[0].kind == ImportErrorKind.PARSE
