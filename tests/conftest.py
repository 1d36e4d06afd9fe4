"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before any ``srteen`` import so the global
settings object is built for the testing environment.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from pathlib import Path
from typing import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from srteen.core.app_factory import create_app
from srteen.core.config import AppSettings, LogSettings, Settings
from srteen.services.user_store import UserStore


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def locales_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "locales"
    directory.mkdir()
    (directory / "en.json").write_text('{"appTitle": "SRTEEN Social Network"}', encoding="utf-8")
    (directory / "es.json").write_text('{"appTitle": "Red Social SRTEEN"}', encoding="utf-8")
    return directory


@pytest.fixture
def make_settings(locales_dir: Path, tmp_path: Path) -> Callable[..., Settings]:
    """Build isolated settings; keyword arguments override AppSettings fields."""

    def _make(**overrides) -> Settings:
        values = {
            "locales_dir": locales_dir,
            "static_dir": tmp_path / "no-client",
            "rate_limit_requests": 50,
            "rate_limit_window_ms": 60_000,
        }
        values.update(overrides)
        return Settings(app=AppSettings(**values), log=LogSettings(level="WARNING"))

    return _make


@pytest.fixture
def make_app(make_settings) -> Callable[..., FastAPI]:
    def _make(**overrides) -> FastAPI:
        app = create_app(make_settings(**overrides))
        # Cheap hashing keeps auth tests fast.
        app.state.user_store = UserStore(iterations=1)
        return app

    return _make


@pytest.fixture
def client(make_app) -> TestClient:
    return TestClient(make_app())
