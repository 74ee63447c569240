"""Schema-driven validation of spreadsheet tabs.

Each spreadsheet may carry a ``config`` tab whose rows declare, per tab and
column, a type (string, number, date, boolean) and whether a value is
required. ``TabValidator`` checks a tab's rows against those declarations.
"""

from __future__ import annotations

from ._cache import CacheEntry, EntryState, SchemaCache
from ._resolver import resolve_column_rules
from ._schema import (
    CONFIG_FIELDS,
    KNOWN_TYPES,
    ColumnRule,
    ColumnRuleSet,
    is_blank,
    meta_schema_rows,
    parse_boolean,
)
from ._validator import (
    TabValidator,
    check_rows,
    get_default_validator,
    reset_default_validator,
    validate_tab,
)
from .parse import Field, parse_rows

__all__ = [
    "CONFIG_FIELDS",
    "KNOWN_TYPES",
    "CacheEntry",
    "ColumnRule",
    "ColumnRuleSet",
    "EntryState",
    "Field",
    "SchemaCache",
    "TabValidator",
    "check_rows",
    "get_default_validator",
    "is_blank",
    "meta_schema_rows",
    "parse_boolean",
    "parse_rows",
    "reset_default_validator",
    "resolve_column_rules",
    "validate_tab",
]
