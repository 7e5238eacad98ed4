"""
Local identity provider.

Owns credentials (bcrypt hashes in `auth_users`) and issues opaque access
tokens for signed-in sessions. Sign-up writes the credential row and the
matching `users` profile row in a single transaction, using the profile
metadata supplied by the signup form.

Rejections raise ProviderError with the message shown to the user.
"""
import logging
import sqlite3
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import bcrypt
from email_validator import EmailNotValidError, validate_email

from core import config
from core.accounts.roles import IDENTIFIER_FIELDS
from core.db.db import get_conn, transaction
from core.db.repo import get_auth_user, get_auth_user_by_email, insert_auth_user, insert_profile
from core.errors import ProviderError
from core.util.ids import new_access_token, new_user_id
from core.util.time import utcnow_iso
from core.util.validation import named_schema, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str
    created_at: str
    user_metadata: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Session:
    access_token: str
    user: AuthUser
    created_at: str


class IdentityProvider:
    """Process-wide identity provider backed by the portal SQLite database."""

    def __init__(self, db_path: Path, min_password_length: int = config.MIN_PASSWORD_LENGTH):
        self._db_path = db_path
        self._min_password_length = min_password_length
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    # ── Sign up / sign in ──────────────────────────────────────────────────

    def sign_up(self, email: str, password: str, metadata: dict) -> Session:
        """Register credentials plus profile and return a signed-in session."""
        email = email.strip().lower()
        self._check_credentials(email, password)

        errors = validate(metadata, named_schema("profile_metadata"))
        if errors:
            raise ProviderError(f"Invalid user metadata: {errors[0]}")

        conn = get_conn(self._db_path)
        if get_auth_user_by_email(conn, email) is not None:
            raise ProviderError("User already registered")

        user_id = new_user_id()
        created_at = utcnow_iso()
        pw_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()
        identifiers = {k: metadata[k] for k in IDENTIFIER_FIELDS if k in metadata}
        try:
            with transaction(conn):
                insert_auth_user(
                    conn, user_id=user_id, email=email, password_hash=pw_hash,
                    user_metadata=metadata, created_at=created_at,
                )
                insert_profile(
                    conn, user_id=user_id, name=metadata["name"], email=email,
                    role=metadata["role"], created_at=created_at, **identifiers,
                )
        except sqlite3.IntegrityError as e:
            logger.warning("Sign-up rejected by store constraint: %s", e)
            raise ProviderError("Database error saving new user") from e

        logger.info("Signed up %s (role=%s)", user_id, metadata["role"])
        user = AuthUser(id=user_id, email=email, created_at=created_at, user_metadata=dict(metadata))
        return self._issue_session(user)

    def sign_in_with_password(self, email: str, password: str) -> Session:
        conn = get_conn(self._db_path)
        row = get_auth_user_by_email(conn, email.strip().lower())
        if row is None or not bcrypt.checkpw(password.encode(), row["password_hash"].encode()):
            logger.warning("Sign-in rejected for unknown user or bad password")
            raise ProviderError("Invalid login credentials")
        user = AuthUser(
            id=row["id"], email=row["email"], created_at=row["created_at"],
            user_metadata=row["user_metadata"],
        )
        logger.info("Signed in %s", user.id)
        return self._issue_session(user)

    # ── Sessions ───────────────────────────────────────────────────────────

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        """Return the user for a live token, None if unknown or revoked."""
        with self._lock:
            session = self._sessions.get(access_token)
        if session is None:
            return None
        row = get_auth_user(get_conn(self._db_path), session.user.id)
        if row is None:
            return None
        return AuthUser(
            id=row["id"], email=row["email"], created_at=row["created_at"],
            user_metadata=row["user_metadata"],
        )

    def revoke_session(self, access_token: str) -> None:
        with self._lock:
            session = self._sessions.pop(access_token, None)
        if session is None:
            raise ProviderError("Session not found")
        logger.info("Signed out %s", session.user.id)

    def _issue_session(self, user: AuthUser) -> Session:
        session = Session(access_token=new_access_token(), user=user, created_at=utcnow_iso())
        with self._lock:
            self._sessions[session.access_token] = session
        return session

    def _check_credentials(self, email: str, password: str) -> None:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            logger.warning("Rejected sign-up email: %s", e)
            raise ProviderError("Unable to validate email address: invalid format") from e
        if len(password) < self._min_password_length:
            raise ProviderError(f"Password should be at least {self._min_password_length} characters.")
