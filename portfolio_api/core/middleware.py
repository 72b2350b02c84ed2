"""HTTP middleware for correlation ids, access logging and security headers.

Usage:
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)
    app.middleware("http")(security_headers_middleware)

Starlette runs the last registered middleware first, so register in the
reverse of the desired execution order.
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from portfolio_api.core.config import settings
from portfolio_api.core.logging import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'",
}


async def correlation_id_middleware(request: Request, call_next) -> Response:
    """Propagate a correlation id through the request lifecycle.

    If the client provides the correlation header (``LOG_CORRELATION_ID_HEADER``,
    default ``X-Correlation-ID``) that value is used, otherwise a UUID4 is
    generated. The id is stored in contextvars for log correlation and echoed
    in the response headers together with the request duration.
    """

    header_name = getattr(request.app.state, "settings", settings).log.correlation_id_header
    correlation_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_correlation_id(correlation_id)
    request.state.correlation_id = correlation_id
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_correlation_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = correlation_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def request_logging_middleware(request: Request, call_next) -> Response:
    """Log one structured ``http.request`` event per request.

    Level follows the status code: error for 5xx, warning for 4xx, info
    otherwise.
    """

    start = time.perf_counter()
    response: Response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000

    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"

    status_code = response.status_code
    if status_code >= 500:
        level = logging.ERROR
    elif status_code >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger.log(
        level,
        "http.request",
        extra={
            "method": request.method,
            "path": path,
            "status": status_code,
            "latency_ms": round(latency_ms, 2),
            "client_ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent"),
            "body_size": response.headers.get("content-length"),
        },
    )
    return response


async def security_headers_middleware(request: Request, call_next) -> Response:
    """Add fixed security headers to every response."""

    response: Response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response
