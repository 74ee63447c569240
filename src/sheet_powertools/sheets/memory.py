"""List-backed spreadsheet for tests and for hosts that hand over plain rows."""

from __future__ import annotations

import uuid
from typing import Any, Iterable, Sequence

from ._types import Row

EMPTY = ""


def _is_empty(value: Any) -> bool:
    return value is None or value == EMPTY


class InMemoryTab:
    """A tab stored as a ragged list of rows.

    ``read_count`` counts ``read_rows`` calls so tests can assert how often a
    tab was read.

    >>> tab = InMemoryTab("Roster", [["Name"], ["Ann"]])
    >>> tab.read_rows(3, 2)
    [['Name', ''], ['Ann', ''], ['', '']]
    """

    def __init__(self, name: str, rows: Iterable[Sequence[Any]] | None = None) -> None:
        self._name = name
        self._rows: list[Row] = [list(row) for row in rows or []]
        self.read_count = 0

    def __repr__(self) -> str:
        return f"InMemoryTab({self._name!r}, rows={len(self._rows)})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_rows(self) -> int:
        return len(self._rows)

    @property
    def max_columns(self) -> int:
        return max((len(row) for row in self._rows), default=0)

    @property
    def rows(self) -> list[Row]:
        """A copy of the stored rows, as written."""
        return [list(row) for row in self._rows]

    def read_rows(
        self,
        row_count: int,
        column_count: int,
        start_row: int = 1,
        start_column: int = 1,
    ) -> list[Row]:
        self.read_count += 1
        block: list[Row] = []
        for r in range(start_row - 1, start_row - 1 + row_count):
            source = self._rows[r] if r < len(self._rows) else []
            block.append(
                [
                    source[c] if c < len(source) else EMPTY
                    for c in range(start_column - 1, start_column - 1 + column_count)
                ]
            )
        return block

    def _cell_slot(self, row: int, column: int) -> Row:
        while len(self._rows) < row:
            self._rows.append([])
        target = self._rows[row - 1]
        while len(target) < column:
            target.append(EMPTY)
        return target

    def write_rows(
        self,
        rows: Sequence[Sequence[Any]],
        start_row: int = 1,
        start_column: int = 1,
    ) -> None:
        for i, row in enumerate(rows):
            for j, value in enumerate(row):
                r, c = start_row + i, start_column + j
                self._cell_slot(r, c)[c - 1] = value

    def clear(
        self,
        start_row: int = 1,
        start_column: int = 1,
        row_count: int | None = None,
        column_count: int | None = None,
    ) -> None:
        if row_count is None:
            row_count = self.max_rows - start_row + 1
        if column_count is None:
            column_count = self.max_columns - start_column + 1
        for r in range(start_row - 1, min(start_row - 1 + row_count, len(self._rows))):
            row = self._rows[r]
            for c in range(start_column - 1, min(start_column - 1 + column_count, len(row))):
                row[c] = EMPTY

    def append_row(self, row: Sequence[Any]) -> None:
        self.write_rows([row], start_row=self.last_row() + 1)

    def last_row(self) -> int:
        for index in range(len(self._rows), 0, -1):
            if not all(_is_empty(value) for value in self._rows[index - 1]):
                return index
        return 0


class InMemorySpreadsheet:
    """A named collection of ``InMemoryTab`` objects.

    >>> book = InMemorySpreadsheet({"Roster": [["Name"], ["Ann"]]}, name="Club")
    >>> book.get_tab("Roster").name
    'Roster'
    """

    def __init__(
        self,
        tabs: dict[str, Iterable[Sequence[Any]]] | None = None,
        *,
        name: str = "Spreadsheet",
        spreadsheet_id: str | None = None,
    ) -> None:
        self._id = spreadsheet_id or uuid.uuid4().hex
        self._name = name
        self._tabs: dict[str, InMemoryTab] = {}
        for tab_name, rows in (tabs or {}).items():
            self.add_tab(tab_name, rows)

    def __repr__(self) -> str:
        return f"InMemorySpreadsheet({self._name!r}, tabs={list(self._tabs)})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    def add_tab(self, name: str, rows: Iterable[Sequence[Any]] | None = None) -> InMemoryTab:
        if name in self._tabs:
            raise ValueError(f"Tab {name!r} already exists in {self._name!r}")
        tab = InMemoryTab(name, rows)
        self._tabs[name] = tab
        return tab

    def get_tab(self, name: str) -> InMemoryTab | None:
        return self._tabs.get(name)

    def tab_names(self) -> list[str]:
        return list(self._tabs)
