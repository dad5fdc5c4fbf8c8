"""Shared test fixtures for the LabDash test suite.

Tests run against a throwaway SQLite file. Tables are created when the
app is imported and emptied before each test, so every test starts from
an empty store and an empty change hub.
"""

import os
import tempfile

# Point the app at the test database before any app imports.
_tmpdir = tempfile.mkdtemp(prefix="labdash-tests-")
os.environ["DATABASE_URL"] = os.environ.get(
    "TEST_DATABASE_URL", f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
)
os.environ["LOG_FORMAT"] = "text"
os.environ["ADMIN_REGISTRATION_CODE"] = "test-admin-code"
os.environ["ENVIRONMENT"] = "development"

import pytest
from fastapi.testclient import TestClient

from labdash.database import Base, SessionLocal, engine, get_db
from labdash.main import app
from labdash.core.config import settings
from labdash.core.token_factory import create_token
from labdash.middleware.request_context import rate_limiter
from labdash.realtime.hub import change_hub
from labdash.services.auth_service import bootstrap_admin_id

TEST_PASSWORD = "correct-horse"


@pytest.fixture(autouse=True)
def _clean_tables():
    """Empty every table and drop every subscription before each test.

    Runs before the test (not after) so a failing test leaves its data
    behind for debugging.
    """
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    change_hub.clear()
    yield
    change_hub.clear()


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """TestClient with the DB dependency bound to the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    rate_limiter.reset()  # so tests don't hit 429
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def admin_token() -> str:
    """Session token of the configured bootstrap admin."""
    return create_token(
        subject=bootstrap_admin_id(),
        role="admin",
        secret=settings.jwt_secret_key,
        email=settings.bootstrap_admin_email,
        name=settings.bootstrap_admin_name,
    )


@pytest.fixture()
def auth_headers(admin_token) -> dict:
    """Bearer headers for the bootstrap admin (valid on any database state)."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture()
def user_login(client):
    """Register a regular user and log in. Returns ``(user_id, headers)``."""

    def _login(email: str = "alice@lab.example", name: str = "Alice") -> tuple:
        resp = client.post("/api/auth/register", json=make_registration(email=email, name=name))
        assert resp.status_code == 201, resp.text
        login = client.post("/api/auth/login", json={"email": email, "password": TEST_PASSWORD})
        assert login.status_code == 200, login.text
        body = login.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    return _login


def make_registration(
    email: str = "alice@lab.example",
    name: str = "Alice",
    password: str = TEST_PASSWORD,
    **overrides,
) -> dict:
    """Factory for registration payloads."""
    payload = {
        "name": name,
        "email": email,
        "password": password,
        "confirm_password": password,
    }
    payload.update(overrides)
    return payload


def make_project(title: str = "Beamforming testbed", **overrides) -> dict:
    """Factory for project creation payloads."""
    payload = {
        "title": title,
        "description": "mmWave array calibration",
        "status": "in_progress",
        "progress": 30,
        "priority": "high",
        "manager": "Dr. Kim",
        "team_members": ["Lee", "Park"],
    }
    payload.update(overrides)
    return payload
