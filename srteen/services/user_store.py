"""In-memory user registry backing the demo signup/login endpoints.

Users live for the lifetime of the process. Passwords are kept as salted
PBKDF2 digests rather than in clear text, but this store is demo-grade:
there is no persistence, lockout, or session management.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import threading
from dataclasses import dataclass

from srteen.core.errors import AuthenticationAppError, ConflictAppError, ValidationAppError
from srteen.schemas.auth import Credentials

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


@dataclass(frozen=True)
class StoredUser:
    username: str
    salt: bytes
    password_hash: bytes


def _username_hash(username: str) -> str:
    return hashlib.sha256(username.encode()).hexdigest()[:16]


def _require_fields(credentials: Credentials) -> tuple[str, str]:
    """Return (username, password) or raise when either is missing/blank."""
    if not credentials.username or not credentials.password:
        raise ValidationAppError(
            code="errorMissingFields",
            message="Both username and password are required.",
        )
    return credentials.username, credentials.password


class UserStore:
    """Thread-safe registry of demo users keyed by username."""

    def __init__(self, *, iterations: int = PBKDF2_ITERATIONS) -> None:
        self._iterations = iterations
        self._users: dict[str, StoredUser] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def _derive(self, password: str, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode(), salt, self._iterations)

    def signup(self, credentials: Credentials) -> StoredUser:
        """Register a new user.

        Raises:
            ValidationAppError: ``errorMissingFields`` if a field is missing.
            ConflictAppError: ``errorUserExists`` if the username is taken.
        """
        username, password = _require_fields(credentials)
        salt = secrets.token_bytes(16)
        user = StoredUser(username=username, salt=salt, password_hash=self._derive(password, salt))

        with self._lock:
            if username in self._users:
                logger.info("auth.signup_conflict", extra={"username_hash": _username_hash(username)})
                raise ConflictAppError(
                    code="errorUserExists",
                    message="A user with this username already exists.",
                )
            self._users[username] = user

        logger.info("auth.signup", extra={"username_hash": _username_hash(username)})
        return user

    def authenticate(self, credentials: Credentials) -> StoredUser:
        """Check a username/password pair.

        Raises:
            ValidationAppError: ``errorMissingFields`` if a field is missing.
            AuthenticationAppError: ``errorInvalidCredentials`` for an unknown
                user or a wrong password.
        """
        username, password = _require_fields(credentials)

        with self._lock:
            user = self._users.get(username)

        if user is None or not hmac.compare_digest(
            user.password_hash, self._derive(password, user.salt)
        ):
            logger.warning(
                "auth.login_failed",
                extra={"username_hash": _username_hash(username), "known_user": user is not None},
            )
            raise AuthenticationAppError(
                code="errorInvalidCredentials",
                message="Invalid username or password.",
            )

        logger.info("auth.login", extra={"username_hash": _username_hash(username)})
        return user
