"""Wiring between the rate limiting adapter and the HTTP layer.

The limiter is built once by the app factory and kept on ``app.state``;
the middleware only reaches it through the request, never through a module
global, so tests can install a limiter with a fake clock.

Strategy:
- Fixed-window limit per client address.
- Requests whose client address is unknown share the "" budget.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from srteen.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from srteen.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from srteen.core.config import AppSettings

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS_MESSAGE = "Too many requests, please try again later."


def build_rate_limiter(app_settings: AppSettings) -> AbstractRateLimiter:
    """Create the process-wide limiter from settings.

    Raises:
        ConfigurationError: If the configured window or budget is not positive.
    """

    return InMemoryFixedWindowRateLimiter(
        max_requests=app_settings.rate_limit_requests,
        window_length_ms=app_settings.rate_limit_window_ms,
        sweep_interval_ms=app_settings.rate_limit_sweep_interval_ms,
    )


def client_identifier(request: Request) -> str:
    """Return the rate limit key for a request (the remote address)."""

    return request.client.host if request.client else ""


def hash_identifier(identifier: str) -> str:
    """Hash the identifier for logging without exposing client addresses."""
    return hashlib.sha256(identifier.encode()).hexdigest()[:16]


def rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    headers = {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_after_seconds),
    }
    if result.retry_after_seconds is not None:
        headers["Retry-After"] = str(result.retry_after_seconds)
    return headers


def too_many_requests_response(
    result: RateLimitResult, *, include_headers: bool
) -> JSONResponse:
    """Build the 429 response sent when a client is over budget."""

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"error": TOO_MANY_REQUESTS_MESSAGE},
        headers=rate_limit_headers(result) if include_headers else None,
    )


def admit(request: Request) -> JSONResponse | None:
    """Run the admission check for ``request``.

    Returns:
        None when the request may proceed, otherwise the 429 response to send.
    """

    app_settings: AppSettings = request.app.state.settings.app
    if not app_settings.rate_limit_enabled:
        return None

    limiter: AbstractRateLimiter = request.app.state.rate_limiter
    identifier = client_identifier(request)
    result = limiter.consume(identifier)
    if result.allowed:
        return None

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": hash_identifier(identifier),
            "limit": result.limit,
            "window_ms": app_settings.rate_limit_window_ms,
            "retry_after_s": result.retry_after_seconds,
            "path": request.url.path,
        },
    )
    return too_many_requests_response(
        result, include_headers=app_settings.rate_limit_include_headers
    )
