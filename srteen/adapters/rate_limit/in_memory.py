"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: a single lock guards the whole state map.
- Timestamps are integer milliseconds from a monotonic clock by default.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from srteen.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from srteen.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    """Return the monotonic clock reading in whole milliseconds."""
    return int(time.monotonic() * 1000)


@dataclass
class ClientWindowState:
    window_start: int
    count: int


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting requests per identifier in a fixed window.

    A window opens on the first request seen from an identifier and lasts
    ``window_length_ms``. Once a request arrives strictly later than that,
    the counter restarts from that request. Every evaluated request is
    counted, rejected ones included, so a client that keeps hammering the
    endpoint stays blocked until its window has fully elapsed.

    Burst behavior at the window boundary is the usual fixed-window tradeoff:
    up to ``2 * max_requests`` can be admitted in just under two windows.

    Each call is O(1) except the one that triggers an automatic sweep, which
    scans the whole map under the lock. With ``sweep_interval_ms`` set, that
    O(n) cost is paid at most once per interval, so it averages out to O(1)
    per call; set it to 0 and call ``sweep`` from elsewhere to keep every
    request O(1).
    """

    def __init__(
        self,
        *,
        max_requests: int = 50,
        window_length_ms: int = 60_000,
        sweep_interval_ms: int = 0,
        clock: Callable[[], int] = monotonic_ms,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_requests: Maximum number of admitted requests per window.
            window_length_ms: Window length in milliseconds.
            sweep_interval_ms: Minimum time between opportunistic sweeps of
                expired entries; 0 disables automatic sweeping.
            clock: Time source returning milliseconds, used when callers do
                not pass ``now`` explicitly.

        Raises:
            ConfigurationError: If any numeric setting is out of range.
        """
        if max_requests < 1:
            raise ConfigurationError(
                code="invalid_rate_limit_config",
                message="max_requests must be >= 1",
                details={"actual_value": max_requests, "min_value": 1},
            )
        if window_length_ms < 1:
            raise ConfigurationError(
                code="invalid_rate_limit_config",
                message="window_length_ms must be >= 1",
                details={"actual_value": window_length_ms, "min_value": 1},
            )
        if sweep_interval_ms < 0:
            raise ConfigurationError(
                code="invalid_rate_limit_config",
                message="sweep_interval_ms must be >= 0",
                details={"actual_value": sweep_interval_ms, "min_value": 0},
            )

        self._max_requests = max_requests
        self._window_length_ms = window_length_ms
        self._sweep_interval_ms = sweep_interval_ms
        self._clock = clock
        self._lock = threading.RLock()
        self._state_by_key: dict[str, ClientWindowState] = {}
        self._last_sweep_ms: int | None = None

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_length_ms(self) -> int:
        return self._window_length_ms

    def _is_expired(self, state: ClientWindowState, now: int) -> bool:
        return now - state.window_start > self._window_length_ms

    def _maybe_sweep(self, now: int) -> None:
        """Run a sweep when the configured interval has elapsed (lock held)."""
        if not self._sweep_interval_ms:
            return
        if self._last_sweep_ms is None:
            self._last_sweep_ms = now
            return
        if now - self._last_sweep_ms < self._sweep_interval_ms:
            return
        self._last_sweep_ms = now
        removed = self._sweep_locked(now)
        if removed:
            logger.debug(
                "rate_limit.swept",
                extra={"removed": removed, "tracked": len(self._state_by_key)},
            )

    def _sweep_locked(self, now: int) -> int:
        expired = [k for k, s in self._state_by_key.items() if self._is_expired(s, now)]
        for key in expired:
            del self._state_by_key[key]
        return len(expired)

    def _build_result(self, state: ClientWindowState, now: int) -> RateLimitResult:
        reset_at_ms = state.window_start + self._window_length_ms
        # The window expires on the first millisecond after reset_at_ms.
        reset_after = max(0, int(math.ceil((reset_at_ms + 1 - now) / 1000)))
        allowed = state.count <= self._max_requests
        return RateLimitResult(
            allowed=allowed,
            limit=self._max_requests,
            remaining=max(0, self._max_requests - state.count),
            reset_at_ms=reset_at_ms,
            reset_after_seconds=reset_after,
            retry_after_seconds=None if allowed else reset_after,
        )

    def consume(self, identifier: str | None, now: int | None = None) -> RateLimitResult:
        """Count one request for ``identifier`` and decide whether it is admitted.

        The state is always mutated, even when the request is rejected.

        Args:
            identifier: Client identifier. ``None`` and ``""`` share one budget.
            now: Current time in milliseconds. Must not decrease between calls.

        Returns:
            RateLimitResult with the decision and window metadata.
        """
        key = identifier or ""
        if now is None:
            now = self._clock()

        with self._lock:
            self._maybe_sweep(now)

            state = self._state_by_key.get(key)
            if state is None:
                state = ClientWindowState(window_start=now, count=0)
                self._state_by_key[key] = state
            elif self._is_expired(state, now):
                state.window_start = now
                state.count = 0

            state.count += 1
            return self._build_result(state, now)

    def sweep(self, now: int | None = None) -> int:
        """Remove every identifier whose window has expired.

        An expired entry would be reset by its next request anyway, so
        dropping it never changes a later decision.

        Returns:
            Number of identifiers removed.
        """
        if now is None:
            now = self._clock()
        with self._lock:
            return self._sweep_locked(now)
