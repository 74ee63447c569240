"""Tests for the openpyxl-backed spreadsheet."""

import datetime as dt
import io

import pytest
from openpyxl import Workbook

from sheet_powertools.config import FakeConfigRepository, ValidationSettings
from sheet_powertools.errors import ValidationError
from sheet_powertools.sheets import XlsxSpreadsheet, read_tab, write_to_tab
from sheet_powertools.validation import TabValidator, validate_tab


@pytest.fixture
def roster_workbook():
    """Workbook with a config tab and a Roster tab, saved to bytes."""
    wb = Workbook()
    config = wb.active
    config.title = "config"
    config.append(["Sheet name", "Column name", "Identifier", "Type", "Required"])
    config.append(["Roster", "Name", "name", "string", "true"])
    config.append(["Roster", "Age", "age", "number", "no"])
    config.append(["Roster", "Joined", "joined", "date", "false"])

    roster = wb.create_sheet("Roster")
    roster.append(["Name", "Age", "Joined"])
    roster.append(["Ann", 41, dt.datetime(2020, 3, 1)])
    roster.append(["Bob", None, None])

    fp = io.BytesIO()
    wb.save(fp)
    fp.seek(0)
    return fp


@pytest.fixture
def validator():
    return TabValidator(ValidationSettings.load(repo=FakeConfigRepository()))


class TestXlsxSpreadsheet:
    def test_open_stream(self, roster_workbook):
        book = XlsxSpreadsheet.open(roster_workbook, name="Club")
        assert book.name == "Club"
        assert book.tab_names() == ["config", "Roster"]
        assert book.get_tab("Missing") is None

    def test_open_path(self, roster_workbook, tmp_path):
        path = tmp_path / "club.xlsx"
        path.write_bytes(roster_workbook.getvalue())

        book = XlsxSpreadsheet.open(path)
        assert book.name == "club"
        assert book.id == f"xlsx:{path.resolve()}"

    def test_open_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            XlsxSpreadsheet.open(tmp_path / "nope.xlsx")

    def test_empty_cells_read_as_empty_string(self, roster_workbook):
        book = XlsxSpreadsheet.open(roster_workbook)
        rows = read_tab(book, "Roster")
        assert rows[2] == ["Bob", "", ""]
        assert isinstance(rows[1][2], dt.datetime)

    def test_read_beyond_extent_is_padded(self, roster_workbook):
        tab = XlsxSpreadsheet.open(roster_workbook).get_tab("Roster")
        rows = tab.read_rows(5, 4)
        assert len(rows) == 5 and all(len(row) == 4 for row in rows)
        assert rows[4] == ["", "", "", ""]
        assert tab.max_rows == 3

    def test_write_and_append(self, roster_workbook):
        book = XlsxSpreadsheet.open(roster_workbook)
        write_to_tab(book, "Roster", [["Cy", 29]], append=True)
        tab = book.get_tab("Roster")
        assert tab.last_row() == 4
        assert tab.read_rows(1, 2, start_row=4) == [["Cy", 29]]

    def test_clear(self, roster_workbook):
        tab = XlsxSpreadsheet.open(roster_workbook).get_tab("Roster")
        tab.clear(start_row=2)
        assert tab.last_row() == 1

    def test_save_round_trip(self, roster_workbook, tmp_path):
        book = XlsxSpreadsheet.open(roster_workbook)
        book.get_tab("Roster").write_rows([["Dee", 33]], start_row=4)
        target = book.save(tmp_path / "out.xlsx")

        reopened = XlsxSpreadsheet.open(target)
        assert reopened.get_tab("Roster").read_rows(1, 2, start_row=4) == [["Dee", 33]]

    def test_save_without_path(self):
        with pytest.raises(ValueError, match="No path given"):
            XlsxSpreadsheet(Workbook()).save()


class TestXlsxValidation:
    def test_valid_workbook(self, roster_workbook, validator):
        book = XlsxSpreadsheet.open(roster_workbook)
        rules = validate_tab(book, "Roster", validator=validator)
        assert set(rules) == {"Name", "Age", "Joined"}

    def test_wrong_type_in_workbook(self, roster_workbook, validator):
        book = XlsxSpreadsheet.open(roster_workbook)
        book.get_tab("Roster").write_rows([["Cy", "forty"]], start_row=4)

        with pytest.raises(ValidationError, match='Expected type "number"'):
            validate_tab(book, "Roster", validator=validator)

    def test_config_tab_itself(self, roster_workbook, validator):
        book = XlsxSpreadsheet.open(roster_workbook)
        assert len(validate_tab(book, "config", validator=validator)) == 5
