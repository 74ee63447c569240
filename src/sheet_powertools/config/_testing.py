"""Test utilities for the config module."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from ._repository import FakeConfigRepository, swap_repository


@contextmanager
def override_config(
    *,
    file: dict[str, Any] | None = None,
    env: dict[str, str] | None = None,
) -> Iterator[FakeConfigRepository]:
    """Load settings groups from a ``FakeConfigRepository`` inside the block.

    Usage::

        with override_config(file={"validation": {"config_tab_name": "schema"}}) as repo:
            assert ValidationSettings.load().config_tab_name == "schema"
            repo.set_env("SHEET_POWERTOOLS_LOG_LEVEL", "DEBUG")
    """
    fake = FakeConfigRepository(env=env, file=file)
    previous = swap_repository(fake)
    try:
        yield fake
    finally:
        swap_repository(previous)
