"""Tests for the HTTP Basic authentication gate."""

import pytest

from user_microservice import create_app

REGISTRATION = {"email": "alice@example.com", "firstName": "Alice", "lastName": "Smith", "password": "S3cret!pw"}

PROTECTED = [
    ("get", "/api/users"),
    ("get", "/api/users/1"),
    ("put", "/api/users/1"),
    ("delete", "/api/users/1"),
    ("get", "/api/users/search"),
    ("get", "/api/users/email/a@example.com"),
    ("get", "/api/users/count"),
    ("get", "/api/health/status"),
    ("get", "/api/health/info"),
]


class TestProtectedRoutes:
    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_requires_credentials(self, client, method, path) -> None:
        resp = getattr(client, method)(path)
        assert resp.status_code == 401
        assert resp.headers["WWW-Authenticate"].startswith("Basic realm=")

    def test_wrong_service_password(self, client) -> None:
        assert client.get("/api/users", auth=("user", "wrong")).status_code == 401

    def test_service_account(self, client, auth) -> None:
        assert client.get("/api/users", auth=auth).status_code == 200

    def test_self_registered_user_is_rejected(self, client) -> None:
        resp = client.post("/api/users", json=REGISTRATION)
        assert resp.status_code == 201
        creds = ("alice@example.com", "S3cret!pw")
        assert client.get("/api/users", auth=creds).status_code == 401
        assert client.delete(f"/api/users/{resp.get_json()['id']}", auth=creds).status_code == 401

    def test_bearer_scheme_rejected(self, client) -> None:
        resp = client.get("/api/users", headers={"Authorization": "Bearer abc"})
        assert resp.status_code == 401


class TestStoredUserLogin:
    """Stored users authenticate only when BASIC_AUTH_ALLOW_USERS is on."""

    @pytest.fixture
    def app_overrides(self) -> dict:
        return {"BASIC_AUTH_ALLOW_USERS": True}

    def test_stored_user_credentials(self, client) -> None:
        client.post("/api/users", json=REGISTRATION)
        assert client.get("/api/users/count", auth=("alice@example.com", "S3cret!pw")).status_code == 200
        assert client.get("/api/users/count", auth=("alice@example.com", "nope")).status_code == 401

    def test_service_account_still_accepted(self, client, auth) -> None:
        assert client.get("/api/users", auth=auth).status_code == 200


class TestPublicRoutes:
    def test_registration_is_public(self, client) -> None:
        resp = client.post(
            "/api/users",
            json={"email": "a@example.com", "firstName": "A", "lastName": "B", "password": "pw"},
        )
        assert resp.status_code == 201

    @pytest.mark.parametrize("path", ["/actuator/health", "/healthz"])
    def test_health_probe_is_public(self, client, path) -> None:
        assert client.get(path).status_code == 200

    def test_preflight_is_public(self, client) -> None:
        assert client.options("/api/users").status_code == 200


def test_generated_password_when_unset() -> None:
    app = create_app({"SQLALCHEMY_DATABASE_URI": "sqlite://", "BASIC_AUTH_PASSWORD": "", "LOG_LEVEL": "ERROR"})
    generated = app.config["BASIC_AUTH_PASSWORD"]
    assert len(generated) >= 24
    client = app.test_client()
    assert client.get("/api/users", auth=("user", generated)).status_code == 200
    assert client.get("/api/users", auth=("user", "")).status_code == 401
