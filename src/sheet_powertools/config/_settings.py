"""Settings groups read by the validation engine, the tab helpers and logging."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import field_validator

from ._app_config import AppConfig


class ValidationSettings(AppConfig):
    """Names of the well-known tabs.

    Read from ``SHEET_POWERTOOLS_*`` environment variables or the
    ``"validation"`` object of the settings file.
    """

    class Meta:
        key = "validation"
        env_prefix = "SHEET_POWERTOOLS"

    config_tab_name: str = "config"
    error_tab_name: str = "errors"

    @field_validator("config_tab_name", "error_tab_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tab name must not be blank")
        return value


class LogSettings(AppConfig):
    """Level and optional file of the package log.

    ``SHEET_POWERTOOLS_LOG_LEVEL`` / ``SHEET_POWERTOOLS_LOG_FILE``, or the
    ``"logging"`` object of the settings file.
    """

    class Meta:
        key = "logging"
        env_prefix = "SHEET_POWERTOOLS_LOG"

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    file: Optional[Path] = None

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value
