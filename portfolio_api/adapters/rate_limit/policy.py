"""Rate limit policy value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class RateLimitPolicy:
    """Immutable token-bucket configuration.

    Attributes:
        requests_per_second: Sustained refill rate in tokens per second.
        burst_size: Bucket capacity, also the maximum instantaneous burst.
        cleanup_interval: Seconds between idle-eviction sweeps.
        idle_multiplier: A client idle longer than
            ``idle_multiplier * cleanup_interval`` is evicted on the next sweep.
    """

    requests_per_second: float
    burst_size: int
    cleanup_interval: float
    idle_multiplier: float = 2.0

    DEFAULT: ClassVar[RateLimitPolicy]
    STRICT: ClassVar[RateLimitPolicy]

    @property
    def idle_threshold(self) -> float:
        """Seconds of inactivity after which a client may be evicted."""
        return self.cleanup_interval * self.idle_multiplier

    def validate(self) -> None:
        """Check policy preconditions.

        Raises:
            ValueError: If any field is out of range.
        """
        if self.requests_per_second <= 0:
            raise ValueError("requests_per_second must be > 0")
        if self.burst_size < 1:
            raise ValueError("burst_size must be >= 1")
        if self.cleanup_interval <= 0:
            raise ValueError("cleanup_interval must be > 0")
        if self.idle_multiplier < 1:
            raise ValueError("idle_multiplier must be >= 1")


RateLimitPolicy.DEFAULT = RateLimitPolicy(
    requests_per_second=10.0,
    burst_size=20,
    cleanup_interval=300.0,
)
RateLimitPolicy.STRICT = RateLimitPolicy(
    requests_per_second=5.0,
    burst_size=10,
    cleanup_interval=300.0,
)
