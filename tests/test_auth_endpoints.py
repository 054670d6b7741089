"""Tests for registration, login and bearer-token enforcement."""

import pytest

from beetrail_api.app.core.security import create_access_token, decode_access_token


class TestRegister:
    def test_register_beekeeper(self, client):
        resp = client.post("/auth/register", json={"username": "bee1", "password": "password123", "role": "beekeeper"})
        assert resp.status_code == 201
        assert resp.json() == {"message": "User registered successfully"}
        assert "token" not in resp.json()

    def test_duplicate_username(self, client):
        body = {"username": "bee1", "password": "password123", "role": "beekeeper"}
        assert client.post("/auth/register", json=body).status_code == 201
        resp = client.post("/auth/register", json={**body, "role": "admin"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Username already exists"}

    @pytest.mark.parametrize(
        "body, field",
        [
            ({"username": "", "password": "password123", "role": "beekeeper"}, "username"),
            ({"username": "   ", "password": "password123", "role": "beekeeper"}, "username"),
            ({"username": "bee1", "password": "12345", "role": "beekeeper"}, "password"),
            ({"username": "bee1", "password": "password123", "role": "queen"}, "role"),
            ({"password": "password123", "role": "beekeeper"}, "username"),
        ],
    )
    def test_validation(self, client, body, field):
        resp = client.post("/auth/register", json=body)
        assert resp.status_code == 400
        assert field in [err["field"] for err in resp.json()["errors"]]

    def test_malformed_json(self, client):
        resp = client.post("/auth/register", content=b"{not json", headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert [err["field"] for err in resp.json()["errors"]] == ["body"]


class TestLogin:
    def test_login_returns_token_with_same_identity(self, client, settings):
        client.post("/auth/register", json={"username": "bee1", "password": "password123", "role": "beekeeper"})
        resp = client.post("/auth/login", json={"username": "bee1", "password": "password123"})
        assert resp.status_code == 200
        body = resp.json()
        claims = decode_access_token(body["token"], settings)
        assert claims["username"] == "bee1"
        assert claims["role"] == "beekeeper"
        assert claims["issuedSyncToken"] == body["issuedSyncToken"]
        assert claims["exp"] - claims["iat"] == 3600

    def test_unknown_user_and_wrong_password_look_the_same(self, client):
        client.post("/auth/register", json={"username": "bee1", "password": "password123", "role": "beekeeper"})
        wrong_password = client.post("/auth/login", json={"username": "bee1", "password": "password124"})
        unknown_user = client.post("/auth/login", json={"username": "ghost", "password": "password123"})
        assert wrong_password.status_code == unknown_user.status_code == 400
        assert wrong_password.json() == unknown_user.json() == {"error": "Invalid credentials"}

    def test_empty_password(self, client):
        resp = client.post("/auth/login", json={"username": "bee1", "password": ""})
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "password"


class TestBearerToken:
    def test_missing_token(self, client):
        resp = client.get("/sync")
        assert resp.status_code == 401
        assert resp.json() == {"error": "Access token required"}
        assert resp.headers["WWW-Authenticate"] == "Bearer"

    def test_garbage_token(self, client):
        resp = client.get("/sync", headers={"Authorization": "Bearer garbage"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid token"}

    def test_expired_token(self, client, settings):
        token = create_access_token({"sub": "bee1", "username": "bee1", "role": "beekeeper"}, settings, expires_in=-5)
        resp = client.get("/sync", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Token expired"}

    def test_token_without_role(self, client, settings):
        token = create_access_token({"sub": "bee1", "username": "bee1"}, settings)
        resp = client.get("/sync", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_valid_token(self, client, beekeeper_headers):
        resp = client.get("/sync", headers=beekeeper_headers)
        assert resp.status_code == 200
