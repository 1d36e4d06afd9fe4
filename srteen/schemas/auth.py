"""Pydantic schemas for the signup/login endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Username/password pair as posted by the client.

    Both fields are optional at the schema level; missing or blank values are
    reported by the user store with the ``errorMissingFields`` code so the
    client gets a translatable error instead of a 422.
    """

    username: str | None = None
    password: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Credentials":
        """Build credentials from an arbitrary decoded JSON body.

        Anything that is not an object, and any non-string field, counts as
        missing.
        """
        if not isinstance(payload, dict):
            return cls()
        username = payload.get("username")
        password = payload.get("password")
        return cls(
            username=username if isinstance(username, str) else None,
            password=password if isinstance(password, str) else None,
        )


class UserOut(BaseModel):
    username: str


class LoginResponse(BaseModel):
    user: UserOut
    token: str = Field(..., description="Session token (constant demo value).")


class SignupResponse(BaseModel):
    message: str = Field("signupSuccess", description="Translation key of the success message.")
