"""Background idle-eviction sweep for in-memory rate limiters.

The janitor runs a sweep callable every ``interval`` seconds in a daemon
thread. Waiting happens on a ``threading.Event`` so ``stop()`` wakes the
thread immediately instead of waiting out the current interval.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class Janitor:
    """Cancellable periodic task bound to a limiter's lifetime."""

    def __init__(
        self,
        sweep: Callable[[], int],
        *,
        interval: float,
        name: str = "rate-limit-janitor",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")

        self._sweep = sweep
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._started = False

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> None:
        """Start the sweep schedule (idempotent)."""
        if self._started:
            return
        if self._stop_event.is_set():
            logger.warning("janitor.start_after_stop")
            return
        self._started = True
        self._thread.start()
        logger.debug("janitor.started", extra={"interval_s": self._interval})

    def stop(self, timeout: float | None = 5.0) -> None:
        """Cancel the schedule and wait for the thread to exit (idempotent)."""
        self._stop_event.set()
        if self._started and self._thread is not threading.current_thread():
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("janitor.stop_timeout", extra={"timeout_s": timeout})
                return
        logger.debug("janitor.stopped")

    def _run(self) -> None:
        # wait() returns True once stop() is called
        while not self._stop_event.wait(self._interval):
            try:
                evicted = self._sweep()
            except Exception:
                logger.exception("janitor.sweep_failed")
                continue
            if evicted:
                logger.info("janitor.swept", extra={"evicted": evicted})
