"""Collaborator protocols and cell-kind tags for spreadsheet backends.

The validation engine never talks to a concrete spreadsheet. It consumes the
``Spreadsheet`` / ``Tab`` protocols below and classifies cell values into the
closed ``CellKind`` tag set.
"""

from __future__ import annotations

import datetime as dt
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Sequence, runtime_checkable

Row = list[Any]


class CellKind(str, Enum):
    """Closed set of value kinds a cell can hold.

    The enum value is the type name used in the config tab's ``Type`` column.
    """

    text = "string"
    number = "number"
    boolean = "boolean"
    datetime = "date"


@dataclass(frozen=True)
class Cell:
    """A cell value with an explicit kind, for backends that know better than ``type()``.

    Example: a backend may hand back the display string of a number cell as
    ``Cell("1,234", CellKind.number)``.
    """

    value: Any
    kind: CellKind


def unwrap(value: Any) -> Any:
    """Return the plain value of a ``Cell``; other values pass through."""
    if isinstance(value, Cell):
        return value.value
    return value


def cell_kind(value: Any) -> CellKind | None:
    """Classify a cell value.

    Returns ``None`` for ``None`` and for values outside the known kinds.
    ``bool`` is checked before numbers since it subclasses ``int``.
    """
    if isinstance(value, Cell):
        return value.kind
    if value is None:
        return None
    if isinstance(value, bool):
        return CellKind.boolean
    if isinstance(value, numbers.Number):
        return CellKind.number
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return CellKind.datetime
    if isinstance(value, str):
        return CellKind.text
    return None


def kind_name(value: Any) -> str:
    """Name of a value's kind for error messages (falls back to the Python type name)."""
    kind = cell_kind(value)
    if kind is not None:
        return kind.value
    if value is None:
        return "null"
    return type(value).__name__


@runtime_checkable
class Tab(Protocol):
    """One tab (worksheet) of a spreadsheet. Rows and columns are 1-based."""

    @property
    def name(self) -> str:
        ...

    @property
    def max_rows(self) -> int:
        ...

    @property
    def max_columns(self) -> int:
        ...

    def read_rows(
        self,
        row_count: int,
        column_count: int,
        start_row: int = 1,
        start_column: int = 1,
    ) -> list[Row]:
        """Return a rectangular block; cells outside the data read as ``""``."""
        ...

    def write_rows(
        self,
        rows: Sequence[Sequence[Any]],
        start_row: int = 1,
        start_column: int = 1,
    ) -> None:
        ...

    def clear(
        self,
        start_row: int = 1,
        start_column: int = 1,
        row_count: int | None = None,
        column_count: int | None = None,
    ) -> None:
        ...

    def append_row(self, row: Sequence[Any]) -> None:
        ...

    def last_row(self) -> int:
        """1-based index of the last row holding a non-empty cell, 0 if none."""
        ...


@runtime_checkable
class Spreadsheet(Protocol):
    """A collection of named tabs with a stable identity."""

    @property
    def id(self) -> str:
        ...

    @property
    def name(self) -> str:
        ...

    def get_tab(self, name: str) -> Tab | None:
        ...

    def tab_names(self) -> list[str]:
        ...
