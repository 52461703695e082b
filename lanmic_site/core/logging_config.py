"""
Logging setup for the LANMIC site backend.

``setup_logging`` runs once when the application module is imported. It
replaces any handlers on the root logger with a console handler at the
configured level and, when file logging is on, a DEBUG-level handler writing
``lanmic_site.log``. Modules get their logger via ``get_logger(__name__)``.

Everything defaults to the ``LANMIC_LOG_LEVEL``, ``LOG_FORMAT``,
``LOG_FILE_DIR`` and ``ENABLE_FILE_LOGGING`` settings.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from lanmic_site.server.core.config import settings

LOG_FILE_NAME = "lanmic_site.log"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

# Levels applied on every setup. Our API and service layers log request
# decisions at DEBUG; the drivers underneath only matter when they complain.
MODULE_LOG_LEVELS = {
    "lanmic_site": "INFO",
    "lanmic_site.core.database": "INFO",
    "lanmic_site.server.api": "DEBUG",
    "lanmic_site.server.services": "DEBUG",
    "lanmic_site.server.middleware": "INFO",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "aiosmtplib": "WARNING",
    "passlib": "ERROR",
    "sse_starlette": "INFO",
    "uvicorn.access": "INFO",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "module": record.filename,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def build_formatter(log_format: str) -> logging.Formatter:
    """Formatter for ``simple``, ``detailed`` or ``json``; anything else is ``detailed``."""
    if log_format == "json":
        return JsonFormatter(datefmt=DATE_FORMAT)
    if log_format == "simple":
        return logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file_dir: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Install the root handlers and per-module levels.

    Args:
        log_level: Console level; defaults to ``settings.log_level``.
        log_format: ``simple``, ``detailed`` or ``json``; defaults to ``settings.log_format``.
        log_file_dir: Directory for the log file; defaults to ``settings.log_file_dir``.
        enable_file: Pass ``False`` to skip the file handler even when the
            settings enable it. Tests do this.
    """
    level = (log_level or settings.log_level).upper()
    fmt = log_format or settings.log_format
    formatter = build_formatter(fmt)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_logging = enable_file and settings.enable_file_logging
    if file_logging:
        directory = Path(log_file_dir or settings.log_file_dir)
        directory.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(directory / LOG_FILE_NAME)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, normally called with ``__name__``."""
    return logging.getLogger(name)
