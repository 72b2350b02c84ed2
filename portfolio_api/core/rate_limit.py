"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Design goals:
- Minimal coupling: routes depend on a dependency function only.
- Explicit ownership: the limiter lives on ``app.state`` and is created and
  stopped by the application lifespan, never as a module-level singleton.
- Swap-friendly: any ``AbstractRateLimiter`` can be installed.

Strategy:
- Per-client token bucket keyed by client IP.
- Client IP comes from X-Real-IP, then X-Forwarded-For, then the peer address.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request

from portfolio_api.adapters.rate_limit.base import AbstractRateLimiter
from portfolio_api.adapters.rate_limit.token_bucket import InMemoryTokenBucketRateLimiter
from portfolio_api.core.config import RateLimitSettings, settings
from portfolio_api.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later"


def build_rate_limiter(
    rate_limit_settings: RateLimitSettings | None = None,
    *,
    start_janitor: bool = True,
) -> InMemoryTokenBucketRateLimiter:
    """Create a limiter from configuration.

    Args:
        rate_limit_settings: Settings to use; defaults to global settings.
        start_janitor: Start the background eviction sweep.

    Returns:
        A new limiter. The caller owns it and must ``close()`` it.
    """

    cfg = rate_limit_settings or settings.rate_limit
    limiter = InMemoryTokenBucketRateLimiter(cfg.to_policy(), start_janitor=start_janitor)
    logger.info(
        "rate_limit.configured",
        extra={
            "requests_per_second": cfg.requests_per_second,
            "burst_size": cfg.burst_size,
            "cleanup_interval_s": cfg.cleanup_interval_seconds,
            "idle_multiplier": cfg.idle_multiplier,
        },
    )
    return limiter


def get_client_id(request: Request) -> str:
    """Resolve the client identifier for the current request.

    Proxy headers take precedence: ``X-Real-IP``, then ``X-Forwarded-For``
    (used verbatim), then the transport peer address.
    """

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for

    return request.client.host if request.client else "unknown"


def _hash_client_id(client_id: str) -> str:
    """Hash the client id for logging without exposing raw addresses."""
    return hashlib.sha256(client_id.encode()).hexdigest()[:16]


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing per-client rate limits.

    Consumes one token from the requester's bucket. Requests pass untouched
    when limiting is disabled or no limiter is installed on ``app.state``.

    Raises:
        RateLimitAppError: 429 Too Many Requests when the bucket is empty.
    """

    rate_limit_settings = getattr(request.app.state, "settings", settings).rate_limit
    if not rate_limit_settings.enabled:
        return

    limiter: AbstractRateLimiter | None = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return

    client_id = get_client_id(request)
    result = limiter.consume(client_id)
    if result.allowed:
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "client_hash": _hash_client_id(client_id),
            "path": request.url.path,
            "method": request.method,
            "limit": result.limit,
            "retry_after_s": result.retry_after_seconds,
        },
    )

    error = RateLimitAppError(code="rate_limit_exceeded", message=RATE_LIMIT_MESSAGE)
    if rate_limit_settings.include_retry_after:
        error.retry_after_seconds = result.retry_after_seconds
    raise error
