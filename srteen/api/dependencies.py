"""FastAPI dependency providers.

Long-lived services are created by the app factory and stored on
``app.state``; routes receive them through these providers so tests can
swap them via ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Request

from srteen.core.config import Settings
from srteen.services.feed_service import FeedService
from srteen.services.translation_service import TranslationCatalog
from srteen.services.user_store import UserStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_translation_catalog(request: Request) -> TranslationCatalog:
    return request.app.state.translations


def get_feed_service(request: Request) -> FeedService:
    return request.app.state.feed_service


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store
