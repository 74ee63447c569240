"""Spreadsheet I/O layer: collaborator protocols, backends and read/write helpers."""

from __future__ import annotations

from ._types import Cell, CellKind, Row, Spreadsheet, Tab, cell_kind, kind_name, unwrap
from .helpers import clear_tab, read_tab, require_tab, update_tab, write_to_tab
from .memory import InMemorySpreadsheet, InMemoryTab
from .xlsx import XlsxSpreadsheet, XlsxTab

__all__ = [
    "Cell",
    "CellKind",
    "InMemorySpreadsheet",
    "InMemoryTab",
    "Row",
    "Spreadsheet",
    "Tab",
    "XlsxSpreadsheet",
    "XlsxTab",
    "cell_kind",
    "clear_tab",
    "kind_name",
    "read_tab",
    "require_tab",
    "unwrap",
    "update_tab",
    "write_to_tab",
]
