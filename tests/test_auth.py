"""Tests for session tokens, login, registration and role checks."""

from labdash.core.identifiers import is_valid_uuid
from labdash.core.token_factory import create_token, decode_token
from labdash.core.config import settings
from labdash.models import User
from labdash.services.auth_service import bootstrap_admin_id

from tests.conftest import TEST_PASSWORD, make_registration


class TestTokenFactory:

    def test_create_and_decode(self):
        token = create_token("user-1", "user", "test-secret", email="a@b.c", name="A")
        payload = decode_token(token, "test-secret")
        assert payload is not None
        assert payload.sub == "user-1"
        assert payload.role == "user"
        assert payload.email == "a@b.c"
        assert payload.name == "A"

    def test_wrong_secret_returns_none(self):
        token = create_token("user-1", "user", "correct-secret")
        assert decode_token(token, "wrong-secret") is None

    def test_expired_token_returns_none(self):
        token = create_token("user-1", "user", "secret", expires_hours=-1)
        assert decode_token(token, "secret") is None

    def test_malformed_token_returns_none(self):
        assert decode_token("not.a.token", "secret") is None
        assert decode_token("", "secret") is None


class TestBootstrapAdmin:

    def test_login_succeeds_on_empty_database(self, client):
        resp = client.post("/api/auth/login", json={"email": "qubi6018@admin.com", "password": "qubi6018!"})
        assert resp.status_code == 200
        user = resp.json()["user"]
        assert user["role"] == "admin"
        assert user["email"] == "qubi6018@admin.com"
        assert user["id"] == bootstrap_admin_id()

    def test_id_passes_identifier_gate(self):
        assert is_valid_uuid(bootstrap_admin_id())

    def test_wrong_password_rejected(self, client):
        resp = client.post("/api/auth/login", json={"email": "qubi6018@admin.com", "password": "nope"})
        assert resp.status_code == 401

    def test_me_resolves_without_users_row(self, client, auth_headers):
        resp = client.get("/api/auth/me", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["role"] == "admin"

    def test_cannot_register_bootstrap_email(self, client):
        resp = client.post("/api/auth/register", json=make_registration(email="qubi6018@admin.com"))
        assert resp.status_code == 400


class TestRegistration:

    def test_register_then_login(self, client):
        resp = client.post("/api/auth/register", json=make_registration(email="Bob@Lab.Example", name="Bob"))
        assert resp.status_code == 201
        assert resp.json()["role"] == "user"
        assert resp.json()["email"] == "bob@lab.example"

        login = client.post("/api/auth/login", json={"email": "bob@lab.example", "password": TEST_PASSWORD})
        assert login.status_code == 200
        token = login.json()["token"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["name"] == "Bob"

    def test_password_is_hashed(self, client, db):
        client.post("/api/auth/register", json=make_registration())
        user = db.query(User).one()
        assert user.password_hash != TEST_PASSWORD
        assert user.password_hash.startswith("$2")

    def test_password_mismatch(self, client):
        resp = client.post("/api/auth/register", json=make_registration(confirm_password="different1"))
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "confirm_password"

    def test_short_password(self, client):
        resp = client.post("/api/auth/register", json=make_registration(password="short"))
        assert resp.status_code == 400

    def test_invalid_email(self, client):
        resp = client.post("/api/auth/register", json=make_registration(email="not-an-email"))
        assert resp.status_code == 400

    def test_duplicate_email(self, client):
        client.post("/api/auth/register", json=make_registration())
        resp = client.post("/api/auth/register", json=make_registration())
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "email"

    def test_admin_code_grants_admin(self, client):
        resp = client.post("/api/auth/register", json=make_registration(admin_code="test-admin-code"))
        assert resp.status_code == 201
        assert resp.json()["role"] == "admin"

    def test_wrong_admin_code_rejected(self, client, db):
        resp = client.post("/api/auth/register", json=make_registration(admin_code="guess"))
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "admin_code"
        assert db.query(User).count() == 0

    def test_admin_code_disabled(self, client, monkeypatch):
        monkeypatch.setattr(settings, "admin_registration_code", "")
        resp = client.post("/api/auth/register", json=make_registration(admin_code="test-admin-code"))
        assert resp.status_code == 400


class TestAccessControl:

    def test_me_requires_token(self, client):
        resp = client.get("/api/auth/me")
        assert resp.status_code == 401
        assert resp.json()["error"] == "UNAUTHORIZED"

    def test_invalid_token_rejected(self, client):
        resp = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
        assert resp.status_code == 401

    def test_token_for_unknown_user_rejected(self, client):
        token = create_token("3f1c2a4e-8b7d-4c6e-9a1b-2d3e4f5a6b7c", "admin", settings.jwt_secret_key)
        resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_list_users_admin_only(self, client, auth_headers, user_login):
        _, headers = user_login()
        assert client.get("/api/auth/users", headers=headers).status_code == 403

        resp = client.get("/api/auth/users", headers=auth_headers)
        assert resp.status_code == 200
        assert [u["email"] for u in resp.json()] == ["alice@lab.example"]

    def test_deactivated_user_cannot_log_in(self, client, db):
        client.post("/api/auth/register", json=make_registration())
        user = db.query(User).one()
        user.is_active = False
        db.commit()
        resp = client.post("/api/auth/login", json={"email": "alice@lab.example", "password": TEST_PASSWORD})
        assert resp.status_code == 401
