"""Unit tests for logging configuration module.

Tests verify that setup_logging installs the expected handlers, formats and
per-module levels.
"""

import json
import logging
import sys
from unittest.mock import patch

import pytest

from lanmic_site.core.logging_config import (
    DETAILED_FORMAT,
    LOG_FILE_NAME,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    JsonFormatter,
    get_logger,
    setup_logging,
)
from lanmic_site.server.core.config import settings


def _console_handler():
    root_logger = logging.getLogger()
    return next(
        (
            h
            for h in root_logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ),
        None,
    )


class TestSetupLoggingLogLevels:
    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        handler = _console_handler()
        assert handler is not None
        assert handler.level == expected_level
        assert logging.getLogger().level == logging.DEBUG


class TestSetupLoggingFormats:
    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("unknown", DETAILED_FORMAT),
        ],
    )
    def test_setup_logging_with_different_formats(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)

        assert _console_handler().formatter._fmt == expected_format

    def test_json_format_installs_json_formatter(self):
        setup_logging(log_format="json", enable_file=False)

        assert isinstance(_console_handler().formatter, JsonFormatter)

    def test_json_lines_survive_quotes_in_message(self):
        record = logging.LogRecord("lanmic_site.test", logging.WARNING, "blog.py", 12, 'slug "%s" taken', ("a-b",), None)

        entry = json.loads(JsonFormatter().format(record))

        assert entry["message"] == 'slug "a-b" taken'
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "lanmic_site.test"
        assert entry["line"] == 12

    def test_json_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, "x.py", 1, "failed", None, sys.exc_info())

        entry = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in entry["exception"]


class TestSetupLoggingHandlers:
    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)

        assert len(logging.getLogger().handlers) == 1

    def test_file_logging(self, tmp_path):
        with patch.object(settings, "enable_file_logging", True):
            setup_logging(log_file_dir=str(tmp_path / "logs"), enable_file=True)

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG
        assert (tmp_path / "logs" / LOG_FILE_NAME).exists()

        setup_logging(enable_file=False)
        assert not [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert file_handlers[0].stream is None

    def test_file_logging_disabled_by_settings(self, tmp_path):
        with patch.object(settings, "enable_file_logging", False):
            setup_logging(log_file_dir=str(tmp_path / "logs"), enable_file=True)

        assert not (tmp_path / "logs").exists()

    def test_defaults_come_from_settings(self):
        with patch.object(settings, "log_level", "warning"), patch.object(settings, "log_format", "simple"):
            setup_logging(enable_file=False)

        handler = _console_handler()
        assert handler.level == logging.WARNING
        assert handler.formatter._fmt == SIMPLE_FORMAT


class TestModuleLevels:
    def test_module_levels_applied(self):
        setup_logging(enable_file=False)

        for module_name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(level)

    def test_noisy_libraries_quietened(self):
        assert MODULE_LOG_LEVELS["sqlalchemy.engine"] == "WARNING"
        assert MODULE_LOG_LEVELS["aiosmtplib"] == "WARNING"


def test_get_logger_returns_named_logger():
    logger = get_logger("lanmic_site.server.api.v1.blog")
    assert logger.name == "lanmic_site.server.api.v1.blog"
    assert logger is logging.getLogger("lanmic_site.server.api.v1.blog")
