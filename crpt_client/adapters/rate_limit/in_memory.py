"""In-memory fixed-window rate limiter with background reset.

Notes:
- Per-process only: each process holding a limiter enforces its own budget.
- Thread-safe: every read and write of the permit count goes through one lock.
- One daemon thread per limiter performs the resets; ``shutdown()`` stops it.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable

from crpt_client.adapters.rate_limit.base import AbstractRateLimiter
from crpt_client.core.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


def _is_positive_finite(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


class FixedWindowRateLimiter(AbstractRateLimiter):
    """Admit at most ``capacity`` operations per ``period_seconds`` window.

    Every ``period_seconds``, counted at a fixed rate from construction, the
    available permits are reset to ``capacity``. Unused budget from the
    previous window is discarded and missed windows never accumulate, so the
    count always stays within ``[0, capacity]``.

    Callers are never queued: ``try_acquire`` answers immediately. Because the
    windows are fixed, up to ``2 * capacity`` operations can be admitted
    around a window boundary.

    Important:
        The replenishment thread is started in the constructor. Call
        ``shutdown()`` (or use the limiter as a context manager) when done.
    """

    def __init__(
        self,
        *,
        capacity: int,
        period_seconds: float,
        shutdown_timeout_seconds: float = 1.0,
        clock: Callable[[], float] = time.time,
        name: str = "rate-limiter",
    ) -> None:
        """Initialize the limiter and start its replenishment thread.

        Args:
            capacity: Maximum number of permits per window.
            period_seconds: Window length in seconds.
            shutdown_timeout_seconds: How long ``shutdown()`` waits for the
                replenishment thread to exit.
            clock: Wall-clock source used to timestamp window starts.
            name: Name given to the replenishment thread.

        Raises:
            InvalidConfigurationError: If any numeric argument is not a finite positive number.
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidConfigurationError(
                code="invalid_configuration",
                message="capacity must be a positive integer",
                details={"field": "capacity", "actual_value": capacity},
            )
        if not _is_positive_finite(period_seconds):
            raise InvalidConfigurationError(
                code="invalid_configuration",
                message="period_seconds must be a finite number > 0",
                details={"field": "period_seconds", "actual_value": period_seconds},
            )
        if not _is_positive_finite(shutdown_timeout_seconds):
            raise InvalidConfigurationError(
                code="invalid_configuration",
                message="shutdown_timeout_seconds must be a finite number > 0",
                details={
                    "field": "shutdown_timeout_seconds",
                    "actual_value": shutdown_timeout_seconds,
                },
            )

        self._capacity = capacity
        self._period = float(period_seconds)
        self._shutdown_timeout = shutdown_timeout_seconds
        self._clock = clock

        self._lock = threading.Lock()
        self._available = capacity
        self._window_anchor = clock()
        self._admitted = 0
        self._denied = 0
        self._resets = 0

        self._stop_event = threading.Event()
        self._started_at = time.monotonic()
        self._next_deadline = self._started_at + self._period
        self._thread = threading.Thread(target=self._replenish_worker, name=name, daemon=True)
        self._thread.start()

        logger.debug(
            "rate_limit.started",
            extra={"capacity": capacity, "period_s": self._period, "worker": name},
        )

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"FixedWindowRateLimiter(capacity={self._capacity}, "
            f"period_seconds={self._period}, available={self._available}, "
            f"running={self.is_running})"
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def period_seconds(self) -> float:
        return self._period

    @property
    def available_permits(self) -> int:
        with self._lock:
            return self._available

    @property
    def window_anchor(self) -> float:
        """Wall-clock time at which the current window started."""
        with self._lock:
            return self._window_anchor

    @property
    def is_running(self) -> bool:
        return not self._stop_event.is_set() and self._thread.is_alive()

    def try_acquire(self) -> bool:
        """Consume one permit if available.

        The check and the decrement happen inside a single critical section,
        so concurrent callers can never take the same permit twice.

        Returns:
            True if admitted, False if the current window is exhausted.
        """
        with self._lock:
            if self._available > 0:
                self._available -= 1
                self._admitted += 1
                return True
            self._denied += 1
            return False

    def reset(self) -> None:
        """Start a new window immediately with the full budget.

        The background schedule is not shifted; the next automatic reset
        still happens at its fixed-rate deadline.
        """
        with self._lock:
            self._reset_locked()

    def _reset_locked(self) -> None:
        self._window_anchor = self._clock()
        self._available = self._capacity
        self._resets += 1

    def seconds_until_reset(self) -> float | None:
        """Time left in the current window, or None once shut down."""
        if self._stop_event.is_set():
            return None
        with self._lock:
            remaining = self._next_deadline - time.monotonic()
        return max(0.0, remaining)

    def stats(self) -> dict[str, int | float | bool]:
        """Return a consistent snapshot of limiter counters."""
        with self._lock:
            return {
                "capacity": self._capacity,
                "period_seconds": self._period,
                "available_permits": self._available,
                "admitted": self._admitted,
                "denied": self._denied,
                "resets": self._resets,
                "running": self.is_running,
            }

    def shutdown(self) -> None:
        """Stop the replenishment thread; permits are frozen afterwards.

        Safe to call more than once, from any thread, including from the
        replenishment thread itself.
        """
        # Setting the event under the permit lock orders it against resets.
        with self._lock:
            if self._stop_event.is_set():
                return
            self._stop_event.set()

        if self._thread is not threading.current_thread():
            self._thread.join(timeout=self._shutdown_timeout)
            if self._thread.is_alive():
                logger.warning(
                    "rate_limit.shutdown_timeout",
                    extra={"timeout_s": self._shutdown_timeout},
                )

        logger.debug("rate_limit.stopped", extra={"resets": self._resets})

    def _scheduled_reset(self, deadline: float) -> None:
        with self._lock:
            # Fixed rate from construction; deadlines already passed are skipped.
            elapsed_periods = int((time.monotonic() - self._started_at) // self._period)
            self._next_deadline = max(
                deadline + self._period,
                self._started_at + (elapsed_periods + 1) * self._period,
            )
            if self._stop_event.is_set():
                return
            self._reset_locked()

    def _replenish_worker(self) -> None:
        while True:
            with self._lock:
                deadline = self._next_deadline
            timeout = max(0.0, deadline - time.monotonic())
            if self._stop_event.wait(timeout):
                return

            try:
                self._scheduled_reset(deadline)
            except Exception:
                logger.exception(
                    "rate_limit.reset_failed",
                    extra={"capacity": self._capacity, "period_s": self._period},
                )
