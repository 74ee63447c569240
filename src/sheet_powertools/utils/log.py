"""Logging helpers for the sheet_powertools package."""

# Module responsibilities:
# - Give every module a logger under the "sheet_powertools" namespace.
# - Leave output to the host: importing the package only attaches a NullHandler;
#   configure_logging() installs console (+ optional rotating file) handlers.

from __future__ import annotations

import logging
import logging.handlers

from ..config import LogSettings

ROOT_LOGGER_NAME = "sheet_powertools"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())

_installed_handlers: list[logging.Handler] = []


def configure_logging(settings: LogSettings | None = None) -> logging.Logger:
    """Send package logs to the console and, if configured, a rotating file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        settings: Level and log file; loaded from the environment/settings file
            when omitted.

    Returns:
        The package root logger.
    """
    settings = settings or LogSettings.load()
    level = getattr(logging, settings.level)
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.file is not None:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                settings.file, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        root_logger.addHandler(handler)
        _installed_handlers.append(handler)

    root_logger.setLevel(level)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger scoped under ``sheet_powertools``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
