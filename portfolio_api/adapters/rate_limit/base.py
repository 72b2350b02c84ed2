"""Rate limiter interfaces.

The HTTP layer depends on this abstraction (not the concrete implementation)
so the in-memory token bucket can be swapped for another store later with
minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a single admission decision.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Bucket capacity (maximum instantaneous burst).
        remaining: Whole tokens left after this decision.
        retry_after_seconds: Seconds until one token is available when
            blocked, None when allowed.
    """

    allowed: bool
    limit: int
    remaining: int
    retry_after_seconds: float | None


class AbstractRateLimiter(ABC):
    """Interface for per-client rate limiters."""

    @abstractmethod
    def consume(self, client_id: str) -> RateLimitResult:
        """Decide admission for one request from ``client_id``.

        Args:
            client_id: Opaque client identifier (e.g., IP address).

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    def allow(self, client_id: str) -> bool:
        """Return True if the request from ``client_id`` is admitted."""
        return self.consume(client_id).allowed

    @abstractmethod
    def sweep(self, now: float | None = None) -> int:
        """Evict idle client state.

        Returns:
            Number of evicted entries.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release background resources (no-op by default)."""
