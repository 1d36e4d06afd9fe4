"""OpenAPI metadata customization.

Adds tag descriptions and documents the 429 response every operation can
return, keeping documentation concerns out of the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {"name": "Translations", "description": "Localized UI strings per language."},
    {"name": "Feed", "description": "Demo short-video and live-stream feeds."},
    {"name": "Auth", "description": "Demo signup and login (not secure)."},
    {"name": "Health", "description": "Liveness checks."},
]

_RATE_LIMITED_RESPONSE = {
    "description": "Too many requests from this client in the current window.",
    "content": {
        "application/json": {
            "example": {"error": "Too many requests, please try again later."}
        }
    },
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and the 429 response."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for methods in schema.get("paths", {}).values():
            for method_obj in methods.values():
                if isinstance(method_obj, dict):
                    method_obj.setdefault("responses", {}).setdefault("429", _RATE_LIMITED_RESPONSE)

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
