"""Global exception handlers for consistent error responses.

This module provides FastAPI exception handlers that intercept all errors
(domain, framework and unexpected) and return the same flat JSON shape:

    {"error": "<code>", "message": "<human text>", "details": {...}}

Design:
- AppError subclasses -> their own HTTP status (400, 404, 429, 500)
- Request validation failures -> 400 with per-field details
- Starlette HTTP exceptions (404 routes, 405 methods) -> same shape
- Unexpected Exception -> generic 500 (crash recovery, no internals leaked)
"""

from __future__ import annotations

import logging
import math
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_api.core.errors import AppError, RateLimitAppError
from portfolio_api.core.logging import get_correlation_id

logger = logging.getLogger(__name__)


def error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build the error payload shared by every handler."""
    body: dict[str, Any] = {"error": code, "message": message}
    if details:
        body["details"] = details
    return body


def _status_code_slug(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase.lower().replace(" ", "_").replace("-", "_")
    except ValueError:
        return "http_error"


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI puts first
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with consistent JSON format.

    The HTTP status comes from the error class (``http_status``). Server-side
    failures are logged at error level, client faults at warning.
    """
    status_code = exc.http_status
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    headers: dict[str, str] | None = None
    if isinstance(exc, RateLimitAppError) and exc.retry_after_seconds is not None:
        headers = {"Retry-After": str(max(1, math.ceil(exc.retry_after_seconds)))}

    return JSONResponse(
        status_code=status_code,
        content=error_body(exc.code, exc.message, exc.details),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as ``validation_failed``.

    Each failing field maps to its first error message, mirroring how the
    client is expected to display them next to form inputs.
    """
    details: dict[str, Any] = {}
    for error in exc.errors():
        details.setdefault(_field_name(error.get("loc", ())), error.get("msg", "invalid"))

    logger.warning(
        "validation_failed",
        extra={
            "request_path": request.url.path,
            "request_method": request.method,
            "fields": sorted(details),
        },
    )

    return JSONResponse(
        status_code=400,
        content=error_body("validation_failed", "Request validation failed", details),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (unknown route, bad method) in our shape."""
    message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(_status_code_slug(exc.status_code), message),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs the traceback for debugging while returning a generic message.
    Prevents information leakage (no stack traces to client).
    """
    logger.error(
        "panic_recovered",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "request_path": request.url.path,
            "request_method": request.method,
            "client_ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent"),
            "correlation_id": get_correlation_id(),
        },
    )

    return JSONResponse(
        status_code=500,
        content=error_body("internal_server_error", "An unexpected error occurred"),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app.

    Must be called during app initialization. Specific handlers are
    registered before the general fallback.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(Exception)(general_exception_handler)
