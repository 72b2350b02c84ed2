"""Rate limiting adapters.

This package provides a small abstraction layer so the API can start with an
in-memory token bucket and later migrate to a shared store without changing
the HTTP layer.
"""

from portfolio_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from portfolio_api.adapters.rate_limit.janitor import Janitor
from portfolio_api.adapters.rate_limit.policy import RateLimitPolicy
from portfolio_api.adapters.rate_limit.token_bucket import (
    ClientState,
    InMemoryTokenBucketRateLimiter,
)

__all__ = [
    "AbstractRateLimiter",
    "ClientState",
    "InMemoryTokenBucketRateLimiter",
    "Janitor",
    "RateLimitPolicy",
    "RateLimitResult",
]
