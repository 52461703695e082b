"""
Global Exception Handlers for the FastAPI Application.

HTTP errors, request validation failures and domain errors are rendered as::

    {"statusCode", "timestamp", "path", "method", "message": [...], "error"}

Anything else is logged with full request context and returned as a 500.
"""

import traceback
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lanmic_site.core.logging_config import get_logger
from lanmic_site.core.models.io.common import ErrorResponse
from lanmic_site.core.monitoring import log_error
from lanmic_site.server.services.errors import ServiceError

logger = get_logger(__name__)


def _phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_envelope(
    request: Request,
    status_code: int,
    messages: List[str],
    error: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build the standard error response for a request."""
    body = ErrorResponse(
        statusCode=status_code,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        path=request.url.path,
        method=request.method,
        message=messages,
        error=error or _phrase(status_code),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def _validation_messages(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return messages


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail: Any = exc.detail
    messages = [str(item) for item in detail] if isinstance(detail, list) else [str(detail)]
    return error_envelope(request, exc.status_code, messages, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = _validation_messages(exc)
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {messages}")
    return error_envelope(request, 400, messages)


async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    return error_envelope(request, exc.status_code, [exc.message])


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context including an error ID that can be used to
    find the log entry when a client reports the failure.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with the standard 500 envelope
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return error_envelope(request, 500, ["Internal server error"], error="InternalServerError")


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
