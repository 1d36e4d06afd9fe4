from __future__ import annotations

from srteen.api.routes.auth import router as auth_router
from srteen.api.routes.feed import router as feed_router
from srteen.api.routes.health import router as health_router
from srteen.api.routes.translations import router as translations_router

__all__ = ["auth_router", "feed_router", "health_router", "translations_router"]
