"""Global exception handlers for consistent error responses.

Every error response is a JSON object whose ``error`` field holds a short,
stable string: the domain error code (which the browser client uses as a
translation key) or the HTTP reason for routing errors.

Design:
- AppError subclasses -> 400 / 401 / 409 / 500 by type
- Starlette HTTP errors (404, 405, ...) -> their own status, ``{"error": detail}``
- Request validation errors -> 422
- Unexpected Exception -> generic 500 (safety net)
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from srteen.core.errors import (
    AppError,
    AuthenticationAppError,
    ConfigurationError,
    ConflictAppError,
    ValidationAppError,
)
from srteen.core.logging import get_request_id

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (ValidationAppError, 400),
    (AuthenticationAppError, 401),
    (ConflictAppError, 409),
    (ConfigurationError, 500),
)


def status_for(exc: AppError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors.

    Response body:
    - error: machine-readable error code
    - message: human-readable message
    - request_id: for log correlation
    - details: optional structured context
    """
    status_code = status_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_path": request.url.path,
        },
    )

    content = {
        "error": exc.code,
        "message": exc.message,
        "request_id": get_request_id(),
    }
    if exc.details:
        content["details"] = exc.details

    return JSONResponse(status_code=status_code, content=content)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render routing and static-file errors as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(
        "request_validation_failed",
        extra={"request_path": request.url.path, "error_count": len(exc.errors())},
    )
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "message": "Request parameters are invalid.",
            "request_id": get_request_id(),
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs the failure in full but returns a generic message, so no stack
    traces or internal messages reach the client.
    """
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": get_request_id(),
        },
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app.

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(Exception)(general_exception_handler)
