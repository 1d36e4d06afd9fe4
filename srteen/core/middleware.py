"""HTTP middleware: request correlation and admission control.

Every request/response pair carries a correlation ID:
- an incoming X-Request-ID header is reused, otherwise a UUID4 is generated
- the ID lives in a ContextVar for the duration of the request so log lines
  pick it up automatically
- the ID and the total handling time are echoed back as response headers

Rate limiting runs inside the correlation middleware so throttling logs
carry the request id.

Usage:
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from srteen.core.logging import clear_request_id, set_request_id
from srteen.core.rate_limit import admit


async def request_id_middleware(request: Request, call_next) -> Response:
    """Attach a request id to the context, the logs and the response.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response with ``X-Request-ID`` and
            ``X-Request-Duration-ms`` headers added.
    """

    header_name = request.app.state.settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def rate_limit_middleware(request: Request, call_next) -> Response:
    """Reject over-budget clients before any routing happens.

    CORS preflight requests are answered by the CORS layer, which wraps this
    middleware, so they never consume budget.
    """

    rejection = admit(request)
    if rejection is not None:
        return rejection
    return await call_next(request)
