"""Unit tests for the in-memory user store."""

import pytest

from srteen.core.errors import AuthenticationAppError, ConflictAppError, ValidationAppError
from srteen.schemas.auth import Credentials
from srteen.services.user_store import UserStore


@pytest.fixture
def store() -> UserStore:
    return UserStore(iterations=1)


class TestSignup:
    def test_registers_user(self, store: UserStore) -> None:
        user = store.signup(Credentials(username="alice", password="s3cret"))

        assert user.username == "alice"
        assert len(store) == 1

    def test_password_is_not_stored_in_clear(self, store: UserStore) -> None:
        user = store.signup(Credentials(username="alice", password="s3cret"))

        assert b"s3cret" not in user.password_hash
        assert user.salt

    def test_duplicate_username_conflicts(self, store: UserStore) -> None:
        store.signup(Credentials(username="alice", password="one"))

        with pytest.raises(ConflictAppError) as exc_info:
            store.signup(Credentials(username="alice", password="two"))

        assert exc_info.value.code == "errorUserExists"
        assert len(store) == 1

    @pytest.mark.parametrize(
        "credentials",
        [
            Credentials(),
            Credentials(username="alice"),
            Credentials(password="pw"),
            Credentials(username="", password="pw"),
            Credentials(username="alice", password=""),
        ],
    )
    def test_missing_fields(self, store: UserStore, credentials: Credentials) -> None:
        with pytest.raises(ValidationAppError) as exc_info:
            store.signup(credentials)

        assert exc_info.value.code == "errorMissingFields"


class TestAuthenticate:
    def test_accepts_correct_password(self, store: UserStore) -> None:
        store.signup(Credentials(username="alice", password="s3cret"))

        user = store.authenticate(Credentials(username="alice", password="s3cret"))

        assert user.username == "alice"

    def test_rejects_wrong_password(self, store: UserStore) -> None:
        store.signup(Credentials(username="alice", password="s3cret"))

        with pytest.raises(AuthenticationAppError) as exc_info:
            store.authenticate(Credentials(username="alice", password="wrong"))

        assert exc_info.value.code == "errorInvalidCredentials"

    def test_rejects_unknown_user(self, store: UserStore) -> None:
        with pytest.raises(AuthenticationAppError) as exc_info:
            store.authenticate(Credentials(username="ghost", password="pw"))

        assert exc_info.value.code == "errorInvalidCredentials"

    def test_missing_fields_checked_before_lookup(self, store: UserStore) -> None:
        with pytest.raises(ValidationAppError):
            store.authenticate(Credentials(username="ghost"))

    def test_same_password_gets_distinct_salts(self, store: UserStore) -> None:
        first = store.signup(Credentials(username="a", password="same"))
        second = store.signup(Credentials(username="b", password="same"))

        assert first.salt != second.salt
        assert first.password_hash != second.password_hash


class TestCredentialsFromPayload:
    def test_reads_string_fields(self) -> None:
        creds = Credentials.from_payload({"username": "alice", "password": "pw", "extra": 1})

        assert creds == Credentials(username="alice", password="pw")

    @pytest.mark.parametrize("payload", [None, [], "text", 42])
    def test_non_object_payload_is_empty(self, payload) -> None:
        assert Credentials.from_payload(payload) == Credentials()

    def test_non_string_fields_count_as_missing(self) -> None:
        creds = Credentials.from_payload({"username": 123, "password": ["pw"]})

        assert creds.username is None
        assert creds.password is None
