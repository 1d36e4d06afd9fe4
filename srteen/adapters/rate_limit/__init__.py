"""Rate limiting adapters.

This package keeps the admission decision behind a small interface so the
in-memory limiter can later be replaced by a shared store (e.g., Redis)
without touching the HTTP layer.
"""

from srteen.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from srteen.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "RateLimitResult",
]
