"""Tests for utils/log.py — package loggers and opt-in handler setup."""

import logging

import pytest

from sheet_powertools.config import LogSettings, override_config
from sheet_powertools.utils import log as log_module


@pytest.fixture
def package_logger():
    """Package root logger, restored to its import-time state afterwards."""
    root = logging.getLogger(log_module.ROOT_LOGGER_NAME)
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for handler in log_module._installed_handlers:
        handler.close()
    log_module._installed_handlers.clear()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def _installed(root):
    return [h for h in root.handlers if not isinstance(h, logging.NullHandler)]


class TestGetLogger:
    def test_namespaced(self):
        assert log_module.get_logger("validation").name == "sheet_powertools.validation"

    def test_import_only_adds_null_handler(self, package_logger):
        assert any(isinstance(h, logging.NullHandler) for h in package_logger.handlers)
        log_module.get_logger("x")
        assert _installed(package_logger) == []


class TestConfigureLogging:
    def test_level_from_settings(self, package_logger):
        log_module.configure_logging(LogSettings(level="DEBUG"))
        assert package_logger.level == logging.DEBUG
        assert len(_installed(package_logger)) == 1

    def test_settings_loaded_when_omitted(self, package_logger):
        with override_config(env={"SHEET_POWERTOOLS_LOG_LEVEL": "warning"}):
            log_module.configure_logging()
        assert package_logger.level == logging.WARNING

    def test_log_file_handler(self, package_logger, tmp_path):
        log_file = tmp_path / "logs" / "sheet_powertools.log"
        log_module.configure_logging(LogSettings(file=log_file))
        log_module.get_logger("x").warning("written")

        assert len(_installed(package_logger)) == 2
        for handler in package_logger.handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")

    def test_reconfigure_replaces_handlers(self, package_logger):
        log_module.configure_logging(LogSettings())
        log_module.configure_logging(LogSettings(level="ERROR"))
        installed = _installed(package_logger)
        assert len(installed) == 1
        assert installed[0].level == logging.ERROR
