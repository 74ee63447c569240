"""Read/write helpers over the ``Spreadsheet`` / ``Tab`` protocols."""

from __future__ import annotations

import datetime as dt
import traceback
from typing import Any, Callable, Sequence

from ..config import ValidationSettings
from ..errors import TabNotFoundError
from ..utils.log import get_logger
from ._types import Row, Spreadsheet, Tab

logger = get_logger("sheets")


def require_tab(spreadsheet: Spreadsheet, name: str) -> Tab:
    """Return the named tab or raise ``TabNotFoundError``."""
    tab = spreadsheet.get_tab(name)
    if tab is None:
        raise TabNotFoundError(name, spreadsheet.name)
    return tab


def read_tab(spreadsheet: Spreadsheet, name: str) -> list[Row]:
    """Read the full extent of a tab as a rectangular list of rows."""
    tab = require_tab(spreadsheet, name)
    return tab.read_rows(tab.max_rows, tab.max_columns)


def clear_tab(
    tab: Tab,
    start_row: int = 1,
    start_column: int = 1,
    row_count: int | None = None,
    column_count: int | None = None,
) -> None:
    """Clear cell contents; the block defaults to everything from the start cell on."""
    tab.clear(start_row, start_column, row_count, column_count)


def write_to_tab(
    spreadsheet: Spreadsheet,
    name: str,
    rows: Sequence[Sequence[Any]],
    start_row: int = 1,
    start_column: int = 1,
    *,
    append: bool = False,
) -> None:
    """Write a block of rows into a tab.

    Args:
        spreadsheet: Spreadsheet holding the tab.
        name: Target tab name.
        rows: Rows to write. An empty sequence is a no-op.
        start_row: 1-based row of the top-left cell (overwrite mode only).
        start_column: 1-based column of the top-left cell.
        append: Write below the last non-empty row instead of overwriting
            the block at ``start_row``.

    Raises:
        TabNotFoundError: When the target tab does not exist.
    """
    tab = require_tab(spreadsheet, name)
    if not rows:
        logger.debug("Nothing to write to %r", name)
        return

    column_count = max(len(row) for row in rows)
    if append:
        start_row = tab.last_row() + 1
    else:
        tab.clear(start_row, start_column, len(rows), column_count)

    logger.info(
        "Writing the results to %r. # of rows: %d and cols: %d",
        name,
        len(rows),
        column_count,
    )
    tab.write_rows(rows, start_row, start_column)


def update_tab(
    func: Callable[..., Sequence[Sequence[Any]]],
    params: Sequence[Any],
    spreadsheet: Spreadsheet,
    output_tab: str,
    start_row: int,
    start_column: int,
    error_tab: str | None = None,
) -> None:
    """Run ``func(*params)`` and write its rows to ``output_tab``.

    A failure inside ``func`` is recorded as a row
    ``[timestamp, function name, message, traceback]`` appended to
    ``error_tab`` (by default ``ValidationSettings.error_tab_name``) and then
    reported as ``RuntimeError``.

    Raises:
        TabNotFoundError: When the error tab or the output tab is missing.
        RuntimeError: When ``func`` raised or returned ``None``.
    """
    if error_tab is None:
        error_tab = ValidationSettings.load().error_tab_name
    log_tab = require_tab(spreadsheet, error_tab)
    func_name = getattr(func, "__name__", repr(func))

    logger.info("Now running %s", func_name)
    try:
        result = func(*params)
    except Exception as exc:
        logger.error("%s failed: %s", func_name, exc)
        log_tab.append_row(
            [dt.datetime.now(), func_name, str(exc), traceback.format_exc()]
        )
        raise RuntimeError(f"Error running {func_name}") from exc

    if result is None:
        raise RuntimeError(f"Error running {func_name}: no rows returned")

    write_to_tab(spreadsheet, output_tab, result, start_row, start_column)
    logger.info("Done running %s", func_name)
