"""Tests for settings validation and app construction."""

import pytest
from pydantic import ValidationError

from srteen.core.config import AppSettings
from srteen.core.errors import ConfigurationError
from srteen.core.rate_limit import build_rate_limiter


def test_defaults_match_documented_limits(monkeypatch) -> None:
    for name in ("APP_RATE_LIMIT_REQUESTS", "APP_RATE_LIMIT_WINDOW_MS"):
        monkeypatch.delenv(name, raising=False)

    app_settings = AppSettings()

    assert app_settings.rate_limit_requests == 50
    assert app_settings.rate_limit_window_ms == 60_000
    assert app_settings.rate_limit_enabled is True


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("APP_RATE_LIMIT_REQUESTS", "5")
    monkeypatch.setenv("APP_RATE_LIMIT_WINDOW_MS", "1000")

    app_settings = AppSettings()

    assert app_settings.rate_limit_requests == 5
    assert app_settings.rate_limit_window_ms == 1000


@pytest.mark.parametrize(
    "overrides",
    [
        {"rate_limit_requests": 0},
        {"rate_limit_window_ms": 0},
        {"rate_limit_window_ms": -1},
        {"rate_limit_sweep_interval_ms": -1},
    ],
)
def test_non_positive_limits_rejected_at_startup(overrides) -> None:
    with pytest.raises(ValidationError):
        AppSettings(**overrides)


def test_limiter_factory_rejects_invalid_values() -> None:
    bad = AppSettings.model_construct(
        rate_limit_requests=0,
        rate_limit_window_ms=60_000,
        rate_limit_sweep_interval_ms=0,
    )

    with pytest.raises(ConfigurationError):
        build_rate_limiter(bad)


def test_limiter_factory_uses_settings() -> None:
    limiter = build_rate_limiter(AppSettings(rate_limit_requests=7, rate_limit_window_ms=1234))

    assert limiter.max_requests == 7
    assert limiter.window_length_ms == 1234


def test_each_app_gets_its_own_limiter(make_app) -> None:
    first = make_app()
    second = make_app()

    assert first.state.rate_limiter is not second.state.rate_limiter


def test_static_client_is_served_when_present(make_app, tmp_path) -> None:
    from fastapi.testclient import TestClient

    static_dir = tmp_path / "client"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<h1>SRTEEN</h1>", encoding="utf-8")
    (static_dir / "main.js").write_text("console.log('hi');", encoding="utf-8")
    client = TestClient(make_app(static_dir=static_dir))

    root = client.get("/")
    assert root.status_code == 200
    assert "SRTEEN" in root.text
    assert root.headers["content-type"].startswith("text/html")

    script = client.get("/main.js")
    assert script.status_code == 200
    assert "javascript" in script.headers["content-type"]

    missing = client.get("/nope.css")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Not Found"}

    # API routes still win over the static mount.
    assert client.get("/api/feed/live").status_code == 200


def test_path_traversal_is_not_served(make_app, tmp_path) -> None:
    from fastapi.testclient import TestClient

    static_dir = tmp_path / "client"
    static_dir.mkdir()
    (tmp_path / "secret.txt").write_text("top secret", encoding="utf-8")
    client = TestClient(make_app(static_dir=static_dir))

    response = client.get("/..%2Fsecret.txt")

    assert response.status_code == 404
    assert "top secret" not in response.text


def test_unknown_path_without_static_dir_is_json_404(client) -> None:
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_openapi_documents_rate_limit_response(client) -> None:
    schema = client.get("/openapi.json").json()

    operation = schema["paths"]["/api/feed/shorts"]["get"]
    assert "429" in operation["responses"]
    assert {"Translations", "Feed", "Auth", "Health"} <= {t["name"] for t in schema["tags"]}


def test_app_settings_expose_only_used_fields() -> None:
    assert set(AppSettings.model_fields) == {
        "host",
        "port",
        "rate_limit_enabled",
        "rate_limit_requests",
        "rate_limit_window_ms",
        "rate_limit_sweep_interval_ms",
        "rate_limit_include_headers",
        "locales_dir",
        "default_language",
        "static_dir",
        "cors_allow_origins",
        "auth_demo_token",
    }


def test_error_details_keys() -> None:
    from srteen.core.errors import ErrorDetails

    assert set(ErrorDetails.__annotations__) == {"field", "min_value", "actual_value"}
