"""openpyxl-backed spreadsheet.

Wraps a loaded ``openpyxl`` workbook so ``.xlsx`` files can be read, validated
and written through the same protocols as any other backend. Empty cells read
as ``""`` to match the rectangular-range contract of ``Tab.read_rows``.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, BinaryIO, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from ._types import Row

EMPTY = ""


class XlsxTab:
    """One worksheet of an ``XlsxSpreadsheet``."""

    def __init__(self, worksheet: Worksheet) -> None:
        self._ws = worksheet

    def __repr__(self) -> str:
        return f"XlsxTab({self._ws.title!r})"

    @property
    def name(self) -> str:
        return self._ws.title

    @property
    def max_rows(self) -> int:
        return self._ws.max_row

    @property
    def max_columns(self) -> int:
        return self._ws.max_column

    def read_rows(
        self,
        row_count: int,
        column_count: int,
        start_row: int = 1,
        start_column: int = 1,
    ) -> list[Row]:
        block = [[EMPTY] * column_count for _ in range(row_count)]
        # Only touch existing cells: iter_rows past max_row would create them.
        last_row = min(start_row + row_count - 1, self._ws.max_row)
        last_column = min(start_column + column_count - 1, self._ws.max_column)
        if last_row < start_row or last_column < start_column:
            return block

        for i, values in enumerate(
            self._ws.iter_rows(
                min_row=start_row,
                max_row=last_row,
                min_col=start_column,
                max_col=last_column,
                values_only=True,
            )
        ):
            for j, value in enumerate(values):
                block[i][j] = EMPTY if value is None else value
        return block

    def write_rows(
        self,
        rows: Sequence[Sequence[Any]],
        start_row: int = 1,
        start_column: int = 1,
    ) -> None:
        for i, row in enumerate(rows):
            for j, value in enumerate(row):
                self._ws.cell(row=start_row + i, column=start_column + j, value=value)

    def clear(
        self,
        start_row: int = 1,
        start_column: int = 1,
        row_count: int | None = None,
        column_count: int | None = None,
    ) -> None:
        if row_count is None:
            row_count = self._ws.max_row - start_row + 1
        if column_count is None:
            column_count = self._ws.max_column - start_column + 1
        last_row = min(start_row + row_count - 1, self._ws.max_row)
        last_column = min(start_column + column_count - 1, self._ws.max_column)
        if last_row < start_row or last_column < start_column:
            return
        for row in self._ws.iter_rows(
            min_row=start_row, max_row=last_row, min_col=start_column, max_col=last_column
        ):
            for cell in row:
                cell.value = None

    def append_row(self, row: Sequence[Any]) -> None:
        self.write_rows([row], start_row=self.last_row() + 1)

    def last_row(self) -> int:
        last = 0
        for index, values in enumerate(self._ws.iter_rows(values_only=True), start=1):
            if any(value not in (None, EMPTY) for value in values):
                last = index
        return last


class XlsxSpreadsheet:
    """A workbook loaded with ``openpyxl``.

    >>> book = XlsxSpreadsheet(Workbook(), name="Empty")
    >>> book.tab_names()
    ['Sheet']
    """

    def __init__(
        self,
        workbook: Workbook,
        *,
        name: str = "Workbook",
        spreadsheet_id: str | None = None,
        path: Path | None = None,
    ) -> None:
        self._wb = workbook
        self._name = name
        self._id = spreadsheet_id or f"xlsx:{path.resolve() if path else hex(id(workbook))}"
        self._path = path

    @classmethod
    def open(cls, source: str | Path | BinaryIO, *, name: str | None = None) -> "XlsxSpreadsheet":
        """Load a workbook from a path or a binary stream.

        Formula cells read as their cached values (``data_only=True``).
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"Workbook not found: {path}")
            workbook = load_workbook(path, data_only=True)
            return cls(workbook, name=name or path.stem, path=path)

        # openpyxl needs the stream to be seekable, so read all content if needed
        if not hasattr(source, "seek") or not hasattr(source, "tell"):
            source = io.BytesIO(source.read())
        workbook = load_workbook(source, data_only=True)
        return cls(workbook, name=name or "Workbook")

    def __repr__(self) -> str:
        return f"XlsxSpreadsheet({self._name!r}, tabs={self._wb.sheetnames})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def workbook(self) -> Workbook:
        return self._wb

    def get_tab(self, name: str) -> XlsxTab | None:
        if name not in self._wb.sheetnames:
            return None
        return XlsxTab(self._wb[name])

    def tab_names(self) -> list[str]:
        return list(self._wb.sheetnames)

    def save(self, path: str | Path | None = None) -> Path:
        """Save the workbook, by default back to the file it was opened from."""
        target = Path(path) if path is not None else self._path
        if target is None:
            raise ValueError("No path given and the workbook was not opened from a file")
        self._wb.save(target)
        return target
