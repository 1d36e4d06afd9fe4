"""Rate limiter interfaces.

The HTTP layer depends on this abstraction (not the concrete implementation)
so the storage backend can be swapped later with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a single admission decision.

    Attributes:
        allowed: Whether the request is admitted.
        limit: Max requests per window.
        remaining: Requests left in the current window (0 when blocked).
        reset_at_ms: Timestamp (limiter clock, milliseconds) after which the
            current window expires. Only meaningful against the same clock.
        reset_after_seconds: Whole seconds until the current window expires.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at_ms: int
    reset_after_seconds: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for request admission limiters."""

    @abstractmethod
    def consume(self, identifier: str | None, now: int | None = None) -> RateLimitResult:
        """Record one request for ``identifier`` and decide whether it may proceed.

        Args:
            identifier: Client identifier (e.g., remote address).
            now: Current time in milliseconds; the limiter clock when omitted.

        Returns:
            RateLimitResult describing the decision.
        """
        raise NotImplementedError

    def check_and_record(self, identifier: str | None, now: int | None = None) -> bool:
        """Record one request and return only the admission decision."""
        return self.consume(identifier, now).allowed

    @abstractmethod
    def sweep(self, now: int | None = None) -> int:
        """Drop state whose window has expired.

        Returns:
            Number of identifiers removed.
        """
        raise NotImplementedError
