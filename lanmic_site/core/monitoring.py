"""
Monitoring and Tracing Configuration Module.

This module wires Pydantic Logfire into the application when it is enabled
through settings:
- FastAPI endpoint tracing
- SQLAlchemy query tracing
- Structured request metrics

When Logfire is disabled every helper degrades to plain logging.
"""

from typing import Any, Optional

import logfire
from fastapi import FastAPI

from lanmic_site.core.logging_config import get_logger
from lanmic_site.server.core.config import settings

logger = get_logger(__name__)

_logfire_active = False


def is_logfire_active() -> bool:
    return _logfire_active


def initialize_logfire(app: FastAPI | None = None, engine: Any = None) -> None:
    """
    Initialize Logfire for monitoring and tracing.

    Args:
        app: FastAPI application to instrument (optional).
        engine: SQLAlchemy engine to instrument (optional).
    """
    global _logfire_active

    config = settings.logfire
    if not config.enabled:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not config.token:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set. Monitoring will not work.")
        return

    try:
        logfire.configure(
            token=config.token,
            service_name=config.service_name,
            environment=config.environment,
        )
        if engine is not None:
            logfire.instrument_sqlalchemy(engine=getattr(engine, "sync_engine", engine))
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        if app is not None:
            logfire.instrument_fastapi(app)
            logger.info("Logfire: FastAPI instrumentation enabled")
        _logfire_active = True
        logger.info(
            f"Logfire monitoring initialized: service={config.service_name}, environment={config.environment}"
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if _logfire_active:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    else:
        logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """Forward an error with context to Logfire when tracing is active."""
    if _logfire_active:
        logfire.error(
            "{error_type}: {error_message}",
            error_type=error_type,
            error_message=error_message,
            **(context or {}),
        )
