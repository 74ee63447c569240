"""Typed settings groups.

A group is a Pydantic model whose ``Meta`` names the settings file object it
lives in and the prefix of the environment variables that override it::

    class ValidationSettings(AppConfig):
        class Meta:
            key = "validation"
            env_prefix = "SHEET_POWERTOOLS"

        config_tab_name: str = "config"

    # SHEET_POWERTOOLS_CONFIG_TAB_NAME, else {"validation": {"config_tab_name": ...}}
    ValidationSettings.load().config_tab_name
"""

from __future__ import annotations

from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict

from ..errors import SettingsError
from ._repository import ConfigRepository, active_repository


class AppConfig(BaseModel):
    """Base class for declarative, typed settings groups."""

    model_config = ConfigDict(frozen=True)

    class Meta:
        key: str = ""
        env_prefix: str = ""

    @classmethod
    def load(cls, repo: ConfigRepository | None = None) -> "AppConfig":
        """Read the group and return a validated instance.

        Per field, an ``{ENV_PREFIX}_{FIELD}`` environment variable beats the
        field of the ``Meta.key`` settings object; fields found in neither keep
        their declared default.

        Raises:
            SettingsError: The settings object is not a JSON object, or a value
                fails validation.
        """
        source = repo or active_repository()
        key = getattr(cls.Meta, "key", "")
        env_prefix = getattr(cls.Meta, "env_prefix", "")

        section = source.get_file_config(key) if key else None
        if section is None:
            section = {}
        elif not isinstance(section, dict):
            raise SettingsError(
                f'Settings key "{key}" must hold a JSON object, got {type(section).__name__}'
            )

        values: dict[str, Any] = {
            name: section[name] for name in cls.model_fields if name in section
        }
        if env_prefix:
            for name in cls.model_fields:
                raw = source.get_env(f"{env_prefix}_{name}".upper())
                if raw is not None:
                    values[name] = raw

        try:
            return cls.model_validate(values)
        except pydantic.ValidationError as exc:
            raise SettingsError(f"Invalid {cls.__name__}: {exc}") from exc
