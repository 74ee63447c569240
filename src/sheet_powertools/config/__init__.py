"""Typed settings for sheet-powertools.

Settings groups are Pydantic models loaded from environment variables and an
optional JSON settings file (named by ``SHEET_POWERTOOLS_SETTINGS``).
"""

from ._app_config import AppConfig
from ._repository import (
    ConfigRepository,
    EnvConfigRepository,
    FakeConfigRepository,
    active_repository,
    swap_repository,
)
from ._settings import LogSettings, ValidationSettings
from ._testing import override_config

__all__ = [
    # Typed groups
    "AppConfig",
    "LogSettings",
    "ValidationSettings",
    # Sources
    "ConfigRepository",
    "EnvConfigRepository",
    "active_repository",
    "swap_repository",
    # Testing
    "FakeConfigRepository",
    "override_config",
]
