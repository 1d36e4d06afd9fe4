"""Demo signup/login endpoints.

Bodies are decoded leniently: malformed JSON is treated as an empty object so
the client always receives a translatable ``errorMissingFields`` code rather
than a framework validation error.

The handlers are plain functions: password hashing is CPU-bound, so FastAPI
runs them in its threadpool instead of on the event loop.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request, status

from srteen.api.dependencies import get_settings, get_user_store
from srteen.core.config import Settings
from srteen.schemas.auth import Credentials, LoginResponse, SignupResponse, UserOut
from srteen.services.user_store import UserStore

router = APIRouter(prefix="/auth", tags=["Auth"])


async def read_credentials(request: Request) -> Credentials:
    """Decode the request body into credentials, tolerating bad JSON."""

    raw = await request.body()
    try:
        payload: Any = json.loads(raw) if raw else {}
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = {}
    return Credentials.from_payload(payload)


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    credentials: Credentials = Depends(read_credentials),
    users: UserStore = Depends(get_user_store),
) -> SignupResponse:
    """Register a new user.

    Errors: 400 ``errorMissingFields``, 409 ``errorUserExists``.
    """

    users.signup(credentials)
    return SignupResponse()


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: Credentials = Depends(read_credentials),
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Check credentials and hand back the demo token.

    Errors: 400 ``errorMissingFields``, 401 ``errorInvalidCredentials``.
    """

    user = users.authenticate(credentials)
    return LoginResponse(user=UserOut(username=user.username), token=settings.app.auth_demo_token)
