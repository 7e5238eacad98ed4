"""Shared fixtures: a fresh SQLite store per test plus provider / auth helpers."""
import pytest

from core import config
from core.auth.context import AuthContext
from core.auth.identity import IdentityProvider
from core.db.db import init_db


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "portal_test.db"
    init_db(path, config.SCHEMA_PATH)
    return path


@pytest.fixture
def provider(db_path):
    return IdentityProvider(db_path)


@pytest.fixture
def auth(provider):
    return AuthContext(provider)


@pytest.fixture
def signed_in_auth(auth):
    """AuthContext with a freshly registered serving-personnel account."""
    auth.sign_up(
        "soldier@example.com",
        "s3cret-pass",
        {"name": "Test Soldier", "role": "personnel", "service_number": "SN-0001"},
    )
    return auth


class RecordingAuth:
    """Stands in for AuthContext and records sign-up calls."""

    def __init__(self):
        self.calls = []
        self.raise_error = None

    def sign_up(self, email, password, metadata):
        self.calls.append((email, password, metadata))
        if self.raise_error is not None:
            raise self.raise_error
        return None


@pytest.fixture
def recording_auth():
    return RecordingAuth()
