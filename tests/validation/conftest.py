"""Shared spreadsheet fixtures for validation tests."""

import pytest

from sheet_powertools.config import FakeConfigRepository, ValidationSettings
from sheet_powertools.sheets import InMemorySpreadsheet
from sheet_powertools.validation import TabValidator

CONFIG_HEADER = ["Sheet name", "Column name", "Identifier", "Type", "Required"]


def config_rows(*rows):
    return [CONFIG_HEADER, *[list(row) for row in rows]]


@pytest.fixture
def roster_book():
    """Spreadsheet with a config tab declaring a Roster tab (Name required, Age optional)."""
    return InMemorySpreadsheet(
        {
            "config": config_rows(
                ["config", "Sheet name", "sheetName", "string", "true"],
                ["Roster", "Name", "name", "string", "true"],
                ["Roster", "Age", "age", "number", "false"],
            ),
            "Roster": [["Name", "Age"], ["Ann", ""]],
            "Notes": [["Anything"], [1]],
        },
        name="Club",
    )


@pytest.fixture
def validator():
    return TabValidator(ValidationSettings.load(repo=FakeConfigRepository()))
