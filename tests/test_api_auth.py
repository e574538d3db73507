"""Tests for admin login and bearer tokens."""

from fastapi.testclient import TestClient

from music_ranking.config import get_settings

LOGIN_URL = "/api/v1/auth/login"


class TestLogin:
    """Credential exchange."""

    def test_login_returns_token_and_user(self, client: TestClient):
        response = client.post(
            LOGIN_URL, json={"email": "Admin@Example.com", "password": "password123"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login realizado com sucesso."
        assert body["data"]["user"]["email"] == "admin@example.com"
        assert "password_hash" not in body["data"]["user"]

        token_id, _, secret = body["data"]["token"].partition("|")
        assert token_id.isdigit()
        assert len(secret) == 64

    def test_wrong_password(self, client: TestClient):
        response = client.post(
            LOGIN_URL, json={"email": "admin@example.com", "password": "wrong-password"}
        )
        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Credenciais inválidas."
        assert body["errors"]["email"] == ["The provided credentials are incorrect."]

    def test_unknown_email(self, client: TestClient):
        response = client.post(
            LOGIN_URL, json={"email": "nobody@example.com", "password": "password123"}
        )
        assert response.status_code == 422

    def test_short_password_is_validation_error(self, client: TestClient):
        response = client.post(LOGIN_URL, json={"email": "admin@example.com", "password": "short"})
        assert response.status_code == 422
        assert response.json()["message"] == "Dados inválidos."
        assert "password" in response.json()["errors"]


class TestTokens:
    """Token use, refresh and revocation."""

    def test_me(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/v1/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Administrador"

    def test_me_without_token(self, client: TestClient):
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Unauthenticated."}
        assert response.headers["www-authenticate"] == "Bearer"

    def test_malformed_token(self, client: TestClient):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_logout_revokes_token(self, client: TestClient, auth_headers: dict):
        response = client.post("/api/v1/auth/logout", headers=auth_headers)
        assert response.status_code == 200
        assert client.get("/api/v1/auth/me", headers=auth_headers).status_code == 401

    def test_refresh_replaces_token(self, client: TestClient, auth_headers: dict):
        response = client.post("/api/v1/auth/refresh", headers=auth_headers)
        assert response.status_code == 200
        new_token = response.json()["data"]["token"]

        assert client.get("/api/v1/auth/me", headers=auth_headers).status_code == 401
        new_headers = {"Authorization": f"Bearer {new_token}"}
        assert client.get("/api/v1/auth/me", headers=new_headers).status_code == 200

    def test_expired_token(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(get_settings(), "TOKEN_TTL_MINUTES", -1)
        response = client.post(
            LOGIN_URL, json={"email": "admin@example.com", "password": "password123"}
        )
        token = response.json()["data"]["token"]
        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
