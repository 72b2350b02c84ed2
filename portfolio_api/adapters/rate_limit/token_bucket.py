"""In-memory per-client token-bucket rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: one lock guards lookup, insert, refill/consume and sweeps, so
  concurrent requests for the same client never spend the same token twice.
- Memory is bounded only by the janitor. A flood of distinct identifiers
  between two sweeps grows the table; that is an accepted operational risk.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from portfolio_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from portfolio_api.adapters.rate_limit.janitor import Janitor
from portfolio_api.adapters.rate_limit.policy import RateLimitPolicy


@dataclass
class ClientState:
    """Token bucket for a single client.

    Attributes:
        tokens: Available admission credits, kept within ``[0, capacity]``.
        last_refill: Clock reading of the last refill computation.
        last_seen: Clock reading of the most recent request, used for eviction.
    """

    tokens: float
    last_refill: float
    last_seen: float

    def try_acquire(self, *, now: float, rate: float, capacity: int) -> bool:
        """Refill from elapsed time, then spend one token if available.

        ``last_refill`` moves to ``now`` even on denial so a run of denied
        requests does not count the same elapsed time twice.
        """
        elapsed = max(0.0, now - self.last_refill)
        self.tokens = min(float(capacity), self.tokens + elapsed * rate)
        self.last_refill = now
        self.last_seen = now

        if self.tokens >= 1.0:
            self.tokens -= 1.0
            return True
        return False


class InMemoryTokenBucketRateLimiter(AbstractRateLimiter):
    """Registry of per-client token buckets with idle eviction.

    Each client identifier gets an independent bucket created on first
    sight with a full burst allowance. A background janitor evicts clients
    idle for longer than ``policy.idle_threshold``; a returning client starts
    over as new.

    Important:
        This limiter is per-process only. If the API runs with multiple
        workers, each worker enforces its own independent limits.
    """

    def __init__(
        self,
        policy: RateLimitPolicy,
        *,
        clock: Callable[[], float] = time.monotonic,
        start_janitor: bool = True,
    ) -> None:
        """Initialize the limiter.

        Args:
            policy: Rate, burst and cleanup configuration.
            clock: Monotonic time source in seconds.
            start_janitor: Start the background eviction sweep immediately.

        Raises:
            ValueError: If the policy is invalid.
        """
        policy.validate()

        self._policy = policy
        self._clock = clock
        self._lock = threading.Lock()
        self._clients: dict[str, ClientState] = {}
        self._janitor = Janitor(self.sweep, interval=policy.cleanup_interval)
        if start_janitor:
            self._janitor.start()

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    def __contains__(self, client_id: object) -> bool:
        with self._lock:
            return client_id in self._clients

    def __enter__(self) -> InMemoryTokenBucketRateLimiter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def policy(self) -> RateLimitPolicy:
        return self._policy

    @property
    def janitor(self) -> Janitor:
        return self._janitor

    def _get_or_create_locked(self, client_id: str, now: float) -> ClientState:
        state = self._clients.get(client_id)
        if state is None:
            state = ClientState(
                tokens=float(self._policy.burst_size),
                last_refill=now,
                last_seen=now,
            )
            self._clients[client_id] = state
        return state

    def _retry_after(self, tokens: float) -> float:
        deficit = 1.0 - tokens
        return max(0.0, deficit / self._policy.requests_per_second)

    def consume(self, client_id: str) -> RateLimitResult:
        """Decide admission for one request and record the access.

        Args:
            client_id: Opaque client identifier. Any string is accepted.

        Returns:
            RateLimitResult with the decision and bucket metadata.
        """
        with self._lock:
            now = self._clock()
            state = self._get_or_create_locked(client_id, now)
            allowed = state.try_acquire(
                now=now,
                rate=self._policy.requests_per_second,
                capacity=self._policy.burst_size,
            )
            tokens = state.tokens

        return RateLimitResult(
            allowed=allowed,
            limit=self._policy.burst_size,
            remaining=int(math.floor(tokens)),
            retry_after_seconds=None if allowed else self._retry_after(tokens),
        )

    def sweep(self, now: float | None = None) -> int:
        """Evict clients not seen within the idle threshold.

        Args:
            now: Clock reading to sweep against; defaults to the limiter clock.

        Returns:
            Number of evicted clients.
        """
        with self._lock:
            if now is None:
                now = self._clock()
            cutoff = now - self._policy.idle_threshold
            stale = [cid for cid, state in self._clients.items() if state.last_seen < cutoff]
            for cid in stale:
                del self._clients[cid]
        return len(stale)

    def tokens_for(self, client_id: str) -> float | None:
        """Return the stored token count for a client without refilling it."""
        with self._lock:
            state = self._clients.get(client_id)
            return None if state is None else state.tokens

    def close(self) -> None:
        """Stop the background janitor."""
        self._janitor.stop()
