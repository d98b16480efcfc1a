"""Tests for the login endpoint and bearer token handling."""

import pytest

from hearing_api.auth.jwt_auth import JWTTokenManager
from hearing_api.core.enums import UserRole
from hearing_api.domain.models import User

ADMIN_CREDENTIALS = {"username": "admin@hearingtest.com", "password": "SecurePass123!"}


@pytest.mark.unit
class TestLogin:

    def test_login_success(self, client):
        response = client.post("/login", json=ADMIN_CREDENTIALS)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["expires_in"] == 3600
        assert data["token"]
        assert data["user"] == {
            "id": "tester-001",
            "name": "Dr. Sarah Johnson",
            "role": "certified_tester",
        }

    @pytest.mark.parametrize("credentials", [
        {"username": "admin@hearingtest.com", "password": "wrong"},
        {"username": "nobody@hearingtest.com", "password": "SecurePass123!"},
    ])
    def test_invalid_credentials(self, client, credentials):
        response = client.post("/login", json=credentials)

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid credentials"}

    @pytest.mark.parametrize("body", [
        {},
        {"username": "admin@hearingtest.com"},
        {"password": "SecurePass123!"},
        {"username": "", "password": "SecurePass123!"},
    ])
    def test_missing_fields(self, client, body):
        response = client.post("/login", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["errors"]
        assert all(error["field"].startswith("body") for error in data["errors"])

    def test_malformed_json(self, client):
        response = client.post(
            "/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


@pytest.mark.unit
class TestBearerToken:

    def test_missing_token(self, client):
        response = client.get("/tenants")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Access token required"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_garbage_token(self, client):
        response = client.get("/tenants", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Invalid or expired token"}

    def test_token_from_other_key(self, client):
        forged = JWTTokenManager(secret_key="an-Unrelated-Signing-Key-abcdef0123456789").create_token(
            User(
                id="tester-001",
                username="admin@hearingtest.com",
                name="Dr. Sarah Johnson",
                role=UserRole.CERTIFIED_TESTER,
                password_salt="",
                password_hash="",
                password_iterations=1,
            )
        )

        response = client.get("/tenants", headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == 403
