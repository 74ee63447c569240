"""Row validator: check a tab's rows against its column rules."""

from __future__ import annotations

import threading
from typing import Any, Sequence

from ..config import ValidationSettings
from ..errors import ConfigurationError, ValidationError
from ..sheets import CellKind, Spreadsheet, Tab, cell_kind, kind_name, unwrap
from ..utils.log import get_logger
from ._cache import CacheEntry, SchemaCache
from ._resolver import resolve_column_rules
from ._schema import KNOWN_TYPES, ColumnRule, ColumnRuleSet, is_blank, parse_boolean

logger = get_logger("validation")


def _first_cell(row: Sequence[Any]) -> Any:
    return row[0] if row else None


def _data_end(rows: Sequence[Sequence[Any]], tab_name: str) -> int:
    """Index of the end-of-data sentinel row (``len(rows)`` if there is none).

    Every row from the sentinel on must have a blank first cell.
    """
    end = len(rows)
    for index, row in enumerate(rows):
        if is_blank(_first_cell(row)):
            end = index
            break

    for index in range(end + 1, len(rows)):
        if not is_blank(_first_cell(rows[index])):
            raise ValidationError(
                f'Tab "{tab_name}" has a non-empty cell after empty cell: '
                f"row {end + 1} is empty but row {index + 1} is not."
            )
    return end


def _check_header(rules: ColumnRuleSet, header: Sequence[Any], tab_name: str) -> None:
    if (
        len(header) == len(rules)
        and all(name in rules for name in header)
        and len(set(header)) == len(header)
    ):
        return
    expected = sorted(rules)
    found = sorted(str(name) for name in header)
    raise ValidationError(
        f'Columns of tab "{tab_name}" do not match its config. '
        f"Expected: {expected} Found: {found}"
    )


def _check_cell(rule: ColumnRule, value: Any, tab_name: str, row_number: int) -> None:
    where = f'column "{rule.column_name}" of tab "{tab_name}" (row {row_number})'

    if is_blank(value):
        if rule.required:
            raise ValidationError(f"A value is required in {where}, but the cell is blank.")
        return

    if rule.type == "boolean":
        try:
            parse_boolean(value)
        except ValidationError as exc:
            raise ValidationError(f"Invalid boolean in {where}. {exc}") from exc
    elif rule.type == "date":
        if cell_kind(value) is not CellKind.datetime:
            raise ValidationError(
                f'Expected a date in {where}, found type "{kind_name(value)}".'
            )
    elif kind_name(value) != rule.type:
        raise ValidationError(
            f'Expected type "{rule.type}" in {where}, found type "{kind_name(value)}".'
        )


def check_rows(rules: ColumnRuleSet, rows: Sequence[Sequence[Any]], tab_name: str) -> None:
    """Check header shape and every data cell of ``rows`` against ``rules``.

    Raises:
        ValidationError: On the first violation.
    """
    end = _data_end(rows, tab_name)
    if end == 0:
        return

    header = [unwrap(name) for name in rows[0]]
    _check_header(rules, header, tab_name)

    for index in range(1, end):
        row = rows[index]
        for j, column_name in enumerate(header):
            value = row[j] if j < len(row) else None
            _check_cell(rules[column_name], value, tab_name, index + 1)


class TabValidator:
    """Validate tabs against the type/requiredness rules of their spreadsheet's config tab.

    Owns the ``SchemaCache``: build one validator per run and reuse it, so each
    spreadsheet's config tab is read and self-validated once.

    >>> validator = TabValidator()
    >>> rules = validator.validate(book, book.get_tab("Roster"), rows)  # doctest: +SKIP
    """

    def __init__(self, settings: ValidationSettings | None = None) -> None:
        self.settings = settings or ValidationSettings.load()
        self.cache = SchemaCache(self.settings.config_tab_name, on_load=self._self_validate)

    @property
    def config_tab_name(self) -> str:
        return self.settings.config_tab_name

    def resolve_column_rules(
        self, spreadsheet: Spreadsheet, tab_name: str
    ) -> ColumnRuleSet | None:
        """Rules for ``tab_name``; ``None`` when its validation is skipped."""
        return resolve_column_rules(self.cache, spreadsheet, tab_name)

    def validate(
        self,
        spreadsheet: Spreadsheet,
        tab: Tab | None,
        rows: Sequence[Sequence[Any]],
        *,
        tab_name: str | None = None,
    ) -> ColumnRuleSet | None:
        """Validate ``rows`` of ``tab``.

        Args:
            spreadsheet: Spreadsheet owning the tab and its config tab.
            tab: Handle of the tab the rows came from.
            rows: Header row followed by data rows.
            tab_name: Name the caller asked for; checked against ``tab.name``.

        Returns:
            The column rules the rows were checked against, or ``None`` when
            the tab has no declared rules and validation was skipped.

        Raises:
            ConfigurationError: ``tab`` is ``None`` or does not match ``tab_name``.
            ValidationError: The rows (or the config tab) violate the rules.
        """
        if tab is None:
            raise ConfigurationError(
                f'Tab "{tab_name}" was not found in spreadsheet "{spreadsheet.name}"'
            )
        if tab_name is not None and tab_name != tab.name:
            raise ConfigurationError(
                f'Validation inconsistency: "{tab_name}" does not match "{tab.name}". '
                "This is likely to be a programming bug."
            )

        rules = self.resolve_column_rules(spreadsheet, tab.name)
        if rules is None:
            return None

        check_rows(rules, rows, tab.name)
        return rules

    def _self_validate(self, spreadsheet: Spreadsheet, entry: CacheEntry) -> None:
        """Validate a freshly loaded config tab: meta-schema, type names, sheet references."""
        self.validate(spreadsheet, entry.config_tab, entry.raw_rows)

        for record in entry.records:
            type_name = str(record["type"]).strip().lower()
            if type_name not in KNOWN_TYPES:
                raise ValidationError(
                    f'Unknown type "{record["type"]}" for column "{record["columnName"]}" '
                    f'of tab "{record["sheetName"]}" in the "{self.config_tab_name}" tab. '
                    f"Known types: {', '.join(KNOWN_TYPES)}"
                )

        # Every tab named in the config must exist, not only the one being validated.
        sheet_names = dict.fromkeys(str(record["sheetName"]).strip() for record in entry.records)
        for name in sheet_names:
            if spreadsheet.get_tab(name) is None:
                raise ValidationError(
                    f'The "{self.config_tab_name}" tab declares columns for tab "{name}", '
                    f'but this tab was not found in spreadsheet "{spreadsheet.name}"'
                )
        logger.debug('Config tab of "%s" passed self-validation', spreadsheet.name)


# ---------------------------------------------------------------------------
# Module-level convenience
# ---------------------------------------------------------------------------

_default_validator: TabValidator | None = None
_default_lock = threading.Lock()


def get_default_validator() -> TabValidator:
    """Return the process-wide validator, creating it on first use."""
    global _default_validator
    with _default_lock:
        if _default_validator is None:
            _default_validator = TabValidator()
        return _default_validator


def reset_default_validator() -> None:
    """Drop the process-wide validator (and with it, its schema cache)."""
    global _default_validator
    with _default_lock:
        _default_validator = None


def validate_tab(
    spreadsheet: Spreadsheet,
    tab_name: str,
    rows: Sequence[Sequence[Any]] | None = None,
    *,
    validator: TabValidator | None = None,
) -> ColumnRuleSet | None:
    """Validate a tab by name, reading its full extent when ``rows`` is not given."""
    active = validator or get_default_validator()
    tab = spreadsheet.get_tab(tab_name)
    if rows is None and tab is not None:
        rows = tab.read_rows(tab.max_rows, tab.max_columns)
    return active.validate(spreadsheet, tab, rows or [], tab_name=tab_name)
