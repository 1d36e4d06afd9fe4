"""Application factory for the FastAPI app.

Builds the app together with the long-lived objects it owns (rate limiter,
translation catalogs, feed service, user store). Each call returns an
independent app with fresh state, which keeps tests isolated.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from srteen.api.routes import auth_router, feed_router, health_router, translations_router
from srteen.core.config import Settings, settings as default_settings
from srteen.core.exception_handlers import setup_exception_handlers
from srteen.core.logging import configure_logging
from srteen.core.middleware import rate_limit_middleware, request_id_middleware
from srteen.core.openapi import apply_openapi_customizations
from srteen.core.rate_limit import build_rate_limiter
from srteen.services.feed_service import FeedService
from srteen.services.translation_service import TranslationCatalog
from srteen.services.user_store import UserStore

logger = logging.getLogger(__name__)


def _parse_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        app_settings: Settings to use; the process-wide settings when omitted.

    Returns:
        Configured app with middleware, handlers, routers and state.

    Raises:
        ConfigurationError: If the rate limiter configuration is invalid.
    """
    cfg = app_settings or default_settings

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(cfg.log)

    app = FastAPI(
        title="SRTEEN API",
        description=(
            "Backend for the SRTEEN social network demo: localized UI strings, "
            "demo short-video and live feeds, demo signup/login, all behind a "
            "per-client fixed-window rate limit."
        ),
        version="0.1.0",
    )

    app.state.settings = cfg
    app.state.rate_limiter = build_rate_limiter(cfg.app)
    app.state.translations = TranslationCatalog.from_directory(
        cfg.app.locales_dir, default_language=cfg.app.default_language
    )
    app.state.feed_service = FeedService()
    app.state.user_store = UserStore()

    # Middleware: the last one registered is the outermost.
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_parse_origins(cfg.app.cors_allow_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )

    setup_exception_handlers(app)

    app.include_router(translations_router, prefix="/api")
    app.include_router(feed_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(health_router)

    static_dir = cfg.app.static_dir
    if static_dir is not None and static_dir.is_dir():
        # Mounted last so API routes take precedence.
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="client")
    else:
        logger.info("static.disabled", extra={"static_dir": str(static_dir)})

    apply_openapi_customizations(app)

    logger.info(
        "app.created",
        extra={
            "app_env": cfg.app_env,
            "rate_limit_enabled": cfg.app.rate_limit_enabled,
            "rate_limit_requests": cfg.app.rate_limit_requests,
            "rate_limit_window_ms": cfg.app.rate_limit_window_ms,
            "languages": app.state.translations.languages,
        },
    )
    return app
