"""Where settings come from: the process environment and a JSON settings file."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ..errors import SettingsError

SETTINGS_ENV_VAR = "SHEET_POWERTOOLS_SETTINGS"


@runtime_checkable
class ConfigRepository(Protocol):
    """Source of raw setting values.

    ``get_env`` returns one environment variable; ``get_file_config`` returns
    one top-level key of the settings file (for settings groups, a JSON object).
    """

    def get_env(self, key: str) -> str | None:
        ...

    def get_file_config(self, key: str) -> Any:
        ...


class EnvConfigRepository:
    """Reads ``os.environ`` and an optional JSON settings file.

    The settings file path is taken from the constructor, or else from the
    ``SHEET_POWERTOOLS_SETTINGS`` environment variable. The file is read once,
    on first lookup.
    """

    def __init__(self, settings_path: str | Path | None = None) -> None:
        self._settings_path = settings_path
        self._file_config: dict[str, Any] | None = None

    def get_env(self, key: str) -> str | None:
        return os.environ.get(key)

    def get_file_config(self, key: str) -> Any:
        if self._file_config is None:
            self._file_config = self._load_file()
        return self._file_config.get(key)

    def _load_file(self) -> dict[str, Any]:
        path = self._settings_path or os.environ.get(SETTINGS_ENV_VAR)
        if not path:
            return {}
        try:
            with open(path, "r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except FileNotFoundError:
            raise SettingsError(f"Settings file not found: {path}")
        except json.JSONDecodeError as exc:
            raise SettingsError(f"Settings file {path} is not valid JSON: {exc}")
        if not isinstance(payload, dict):
            raise SettingsError(f"Settings file {path} must contain a JSON object")
        return payload


class FakeConfigRepository:
    """Dict-backed repository for tests.

    >>> repo = FakeConfigRepository(file={"validation": {"config_tab_name": "schema"}})
    >>> repo.get_file_config("validation")
    {'config_tab_name': 'schema'}
    """

    def __init__(
        self,
        env: dict[str, str] | None = None,
        file: dict[str, Any] | None = None,
    ) -> None:
        self._env: dict[str, str] = dict(env or {})
        self._file: dict[str, Any] = dict(file or {})

    def get_env(self, key: str) -> str | None:
        return self._env.get(key)

    def get_file_config(self, key: str) -> Any:
        return self._file.get(key)

    def set_env(self, key: str, value: str) -> None:
        self._env[key] = value

    def set_file(self, key: str, value: Any) -> None:
        self._file[key] = value


_active: ConfigRepository | None = None


def active_repository() -> ConfigRepository:
    """Repository used by ``AppConfig.load()`` when none is passed."""
    global _active
    if _active is None:
        _active = EnvConfigRepository()
    return _active


def swap_repository(repo: ConfigRepository | None) -> ConfigRepository | None:
    """Install ``repo`` as the active repository and return the previous one.

    ``None`` resets to a fresh ``EnvConfigRepository`` on next use.
    """
    global _active
    previous, _active = _active, repo
    return previous
