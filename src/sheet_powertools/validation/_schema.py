"""Schema vocabulary: config fields, meta-schema, column rules and the cell predicates."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

from ..errors import ValidationError
from ..sheets import unwrap
from .parse import Field, parse_rows

# ---------------------------------------------------------------------------
# Type names and boolean grammar
# ---------------------------------------------------------------------------

KNOWN_TYPES = ("string", "number", "date", "boolean")

_TRUE_WORDS = frozenset({"true", "yes"})
_FALSE_WORDS = frozenset({"false", "no"})
VALID_BOOLEANS = ("true", "yes", "false", "no")


def is_blank(value: Any) -> bool:
    """A value is blank if it is ``None`` or a string that trims to ``""``."""
    value = unwrap(value)
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_boolean(value: Any) -> bool:
    """Parse a boolean cell.

    Native booleans pass through. Strings are matched case-insensitively
    against ``true``/``yes`` and ``false``/``no``.

    Raises:
        ValidationError: For any other string or value.
    """
    value = unwrap(value)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValidationError(
        f"Invalid boolean value {value!r}. Valid representations are "
        f"{', '.join(VALID_BOOLEANS)} (case-insensitive) or a native boolean."
    )


# ---------------------------------------------------------------------------
# Config tab layout
# ---------------------------------------------------------------------------

CONFIG_FIELDS: tuple[Field, ...] = (
    Field("Sheet name", "sheetName"),
    Field("Column name", "columnName"),
    Field("Identifier", "identifier"),
    Field("Type", "type"),
    Field("Required", "required"),
)


def meta_schema_rows(config_tab_name: str) -> list[list[Any]]:
    """Config rows describing the config tab's own five columns."""
    header = [field.label for field in CONFIG_FIELDS]
    rows = [header]
    for field in CONFIG_FIELDS:
        type_name = "boolean" if field.key == "required" else "string"
        rows.append([config_tab_name, field.label, field.key, type_name, True])
    return rows


# ---------------------------------------------------------------------------
# Column rules
# ---------------------------------------------------------------------------


class ColumnRule(BaseModel):
    """Type and requiredness of one column of one tab."""

    model_config = ConfigDict(frozen=True)

    column_name: str
    identifier: str
    type: str
    required: bool


ColumnRuleSet = dict[str, ColumnRule]


def _text(value: Any) -> str:
    value = unwrap(value)
    return "" if value is None else str(value).strip()


def build_column_rule(record: Mapping[str, Any]) -> ColumnRule:
    """Normalize one parsed config record into a ``ColumnRule``."""
    return ColumnRule(
        column_name=_text(record["columnName"]),
        identifier=_text(record["identifier"]),
        type=_text(record["type"]).lower(),
        required=parse_boolean(record["required"]),
    )


def build_rule_set(records: list[Mapping[str, Any]], tab_name: str) -> ColumnRuleSet:
    """Rules for the records naming ``tab_name``; a repeated column name keeps the last row."""
    rules: ColumnRuleSet = {}
    for record in records:
        if _text(record["sheetName"]) == tab_name:
            rule = build_column_rule(record)
            rules[rule.column_name] = rule
    return rules


def meta_rule_set(config_tab_name: str) -> ColumnRuleSet:
    """Rules for the config tab itself, parsed from the hardcoded meta-schema."""
    records = parse_rows(CONFIG_FIELDS, meta_schema_rows(config_tab_name))
    return build_rule_set(records, config_tab_name)
