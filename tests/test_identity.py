"""
Tests for accounts and sessions.
"""

from datetime import datetime, timedelta, timezone

import pytest

from barangay.errors import AuthenticationError, DuplicateKeyError, MissingFieldError
from barangay.identity import IdentityGateway, hash_password, hash_token, verify_password


@pytest.fixture
def identity(store):
    return IdentityGateway(store, session_timeout_minutes=30)


def test_password_hash_round_trip():
    encoded = hash_password("kagawad123", iterations=1000)

    assert encoded.startswith("pbkdf2$sha256$1000$")
    assert verify_password("kagawad123", encoded)
    assert not verify_password("wrong", encoded)
    assert not verify_password("kagawad123", "not-a-hash")


def test_sign_up_opens_session(identity, store):
    session = identity.sign_up(" Secretary@Barangay.gov.ph ", "kagawad123", "Lisa")

    assert session.user.email == "secretary@barangay.gov.ph"
    assert session.token_type == "bearer"
    assert identity.get_current_user(session.access_token).id == session.user.id
    # Only the token hash is stored
    assert store.get('sessions', session.access_token) is None
    assert store.get('sessions', hash_token(session.access_token)) is not None


def test_sign_up_validation(identity):
    with pytest.raises(MissingFieldError):
        identity.sign_up("", "kagawad123")
    with pytest.raises(MissingFieldError) as exc_info:
        identity.sign_up("a@b.ph", "123")
    assert exc_info.value.field == 'password'


def test_sign_up_duplicate_email(identity):
    identity.sign_up("a@b.ph", "kagawad123")

    with pytest.raises(DuplicateKeyError) as exc_info:
        identity.sign_up("A@B.ph", "kagawad123")

    assert exc_info.value.message == "An account with this email already exists"


def test_sign_in(identity):
    identity.sign_up("a@b.ph", "kagawad123")

    session = identity.sign_in("a@b.ph", "kagawad123")

    assert session.user.email == "a@b.ph"


@pytest.mark.parametrize("email,password", [
    ("a@b.ph", "wrong-password"),
    ("nobody@b.ph", "kagawad123"),
    ("", "kagawad123"),
])
def test_sign_in_rejects_bad_credentials(identity, email, password):
    identity.sign_up("a@b.ph", "kagawad123")

    with pytest.raises(AuthenticationError):
        identity.sign_in(email, password)


def test_sign_out_ends_session(identity):
    session = identity.sign_up("a@b.ph", "kagawad123")

    identity.sign_out(session.access_token)

    assert identity.get_current_user(session.access_token) is None


def test_expired_session(identity, store):
    session = identity.sign_up("a@b.ph", "kagawad123")
    store.update('sessions', {
        'expires_at': datetime.now(timezone.utc) - timedelta(minutes=1)
    }, hash_token(session.access_token))

    assert identity.get_current_user(session.access_token) is None
    assert store.get('sessions', hash_token(session.access_token)) is None


def test_unknown_token(identity):
    assert identity.get_current_user(None) is None
    assert identity.get_current_user("not-a-token") is None
