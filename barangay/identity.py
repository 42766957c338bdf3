"""
Identity gateway: accounts and sign-in sessions.

Passwords are stored as PBKDF2-HMAC-SHA256 hashes. A session is an opaque
bearer token; only its SHA-256 digest is stored, as the session row id.
"""

import base64
import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from .database import RowStore
from .errors import AuthenticationError, DuplicateKeyError, MissingFieldError
from .models import User

logger = logging.getLogger(__name__)

PASSWORD_ITERATIONS = 310_000
MIN_PASSWORD_LENGTH = 6


# ============================================================================
# Hashing
# ============================================================================

def hash_password(password: str, *, iterations: int = PASSWORD_ITERATIONS) -> str:
    salt = secrets.token_bytes(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return "pbkdf2$sha256$%d$%s$%s" % (
        iterations,
        base64.urlsafe_b64encode(salt).decode("ascii"),
        base64.urlsafe_b64encode(dk).decode("ascii"),
    )


def verify_password(password: str, encoded: str) -> bool:
    """Check ``password`` against a hash from ``hash_password``"""
    if not password or not encoded:
        return False
    parts = encoded.split("$")
    if len(parts) != 5 or parts[0] != "pbkdf2" or parts[1] != "sha256":
        return False
    iterations = int(parts[2])
    salt = base64.urlsafe_b64decode(parts[3])
    expected = base64.urlsafe_b64decode(parts[4])
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(dk, expected)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ============================================================================
# Gateway
# ============================================================================

@dataclass
class AuthSession:
    """A signed-in session as returned to the client"""
    access_token: str
    user: User
    expires_at: datetime
    token_type: str = "bearer"


class IdentityGateway:
    """
    Sign-up, sign-in, sign-out and current-user lookup.

    Backed by the ``users`` and ``sessions`` collections of a RowStore.
    """

    def __init__(self, store: RowStore, session_timeout_minutes: int = 30):
        self.store = store
        self.session_timeout = timedelta(minutes=session_timeout_minutes)

    def sign_up(self, email: str, password: str, display_name: Optional[str] = None) -> AuthSession:
        """
        Create an account and sign it in.

        Raises:
            MissingFieldError: email or password missing, or password too short
            DuplicateKeyError: an account with this email already exists
        """
        email = (email or "").strip().lower()
        if not email:
            raise MissingFieldError('email')
        if not password:
            raise MissingFieldError('password')
        if len(password) < MIN_PASSWORD_LENGTH:
            raise MissingFieldError(
                'password', f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        try:
            row = self.store.insert('users', {
                'email': email,
                'password_hash': hash_password(password),
                'display_name': (display_name or "").strip() or None,
            })
        except DuplicateKeyError as e:
            raise DuplicateKeyError(
                "An account with this email already exists", collection='users', keys=['email']
            ) from e

        logger.info(f"Registered user {row['id']}")
        return self._open_session(User.from_row(row))

    def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Sign in with email and password.

        Raises:
            AuthenticationError: unknown email or wrong password
        """
        email = (email or "").strip().lower()
        rows = self.store.select('users', where={'email': email}) if email else []
        if not rows or not rows[0].get('is_active', True):
            raise AuthenticationError("Invalid login credentials")
        if not verify_password(password, rows[0]['password_hash']):
            raise AuthenticationError("Invalid login credentials")

        return self._open_session(User.from_row(rows[0]))

    def sign_out(self, token: str) -> None:
        if token:
            self.store.delete('sessions', hash_token(token))

    def get_current_user(self, token: Optional[str]) -> Optional[User]:
        """
        Resolve a bearer token to its user.

        Returns None for a missing, unknown or expired token.
        """
        if not token:
            return None

        session_id = hash_token(token)
        session = self.store.get('sessions', session_id)
        if session is None:
            return None

        if _as_utc(session['expires_at']) <= datetime.now(timezone.utc):
            logger.info(f"Session for user {session['user_id']} expired")
            self.store.delete('sessions', session_id)
            return None

        row = self.store.get('users', session['user_id'])
        if row is None or not row.get('is_active', True):
            return None
        return User.from_row(row)

    def _open_session(self, user: User) -> AuthSession:
        token = secrets.token_urlsafe(32)
        expires_at = datetime.now(timezone.utc) + self.session_timeout
        self.store.insert('sessions', {
            'id': hash_token(token),
            'user_id': user.id,
            'expires_at': expires_at,
        })
        logger.info(f"Opened session for user {user.id}")
        return AuthSession(access_token=token, user=user, expires_at=expires_at)
