from ._version import __version__
from .errors import (
    ConfigurationError,
    SchemaMismatch,
    SettingsError,
    SheetError,
    TabNotFoundError,
    ValidationError,
)
from .utils.log import configure_logging
from .validation import ColumnRule, Field, TabValidator, is_blank, parse_boolean, parse_rows, validate_tab

__all__ = [
    "__version__",
    "ColumnRule",
    "ConfigurationError",
    "Field",
    "SchemaMismatch",
    "SettingsError",
    "SheetError",
    "TabNotFoundError",
    "TabValidator",
    "ValidationError",
    "configure_logging",
    "is_blank",
    "parse_boolean",
    "parse_rows",
    "validate_tab",
]
