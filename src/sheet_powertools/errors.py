"""Exception hierarchy shared by the validation engine and the tab I/O helpers."""

from __future__ import annotations

from typing import Any


class SheetError(Exception):
    """Base exception for sheet-powertools errors."""


class SchemaMismatch(SheetError):
    """Raised when a table's header does not match the expected field labels."""

    def __init__(self, position: int, expected: str, found: Any) -> None:
        self.position = position
        self.expected = expected
        self.found = found
        super().__init__(
            f"Unexpected column name at position {position}. "
            f"Expected: {expected!r} Got: {found!r}"
        )


class ValidationError(SheetError):
    """Raised when tab contents violate the declared column rules."""


class ConfigurationError(SheetError):
    """Raised for structural problems not tied to a specific cell.

    These usually point at a programming bug in the caller, e.g. validating a
    tab handle that does not match the requested tab name.
    """


class TabNotFoundError(SheetError):
    """Raised when a named tab does not exist in the spreadsheet."""

    def __init__(self, tab_name: str, spreadsheet_name: str | None = None) -> None:
        self.tab_name = tab_name
        self.spreadsheet_name = spreadsheet_name
        where = f" in spreadsheet {spreadsheet_name!r}" if spreadsheet_name else ""
        super().__init__(f"Tab {tab_name!r} was not found{where}")


class SettingsError(SheetError):
    """Raised when the settings file or a settings group cannot be loaded."""
