from datetime import timedelta

import jwt
import pytest

from skillsync.config import settings
from skillsync.models.enums import Role
from skillsync.utils.security import create_access_token


class TestRegister:
    def test_register_returns_token_and_user(self, client):
        r = client.post("/api/v1/register", json={
            "name": "Ada",
            "email": "Ada@Example.com",
            "password": "secret-password",
            "skills": "python, sql",
        })
        assert r.status_code == 201
        data = r.json()
        assert data["token"]
        assert data["user"]["email"] == "ada@example.com"
        assert data["user"]["role"] == "candidate"
        assert data["user"]["skills"] == ["python", "sql"]
        assert "password_hash" not in data["user"]

    def test_legacy_user_role_maps_to_candidate(self, client):
        r = client.post("/api/v1/register", json={
            "name": "Bo", "email": "bo@example.com", "password": "secret-password", "role": "User",
        })
        assert r.status_code == 201
        assert r.json()["user"]["role"] == "candidate"

    def test_unknown_role_rejected(self, client):
        r = client.post("/api/v1/register", json={
            "name": "Cy", "email": "cy@example.com", "password": "secret-password", "role": "wizard",
        })
        assert r.status_code == 400

    def test_admin_signup_disabled(self, client):
        r = client.post("/api/v1/register", json={
            "name": "Di", "email": "di@example.com", "password": "secret-password", "role": "admin",
        })
        assert r.status_code == 400

    def test_duplicate_email(self, client, register):
        register(email="dup@example.com")
        r = client.post("/api/v1/register", json={
            "name": "Again", "email": "DUP@example.com", "password": "secret-password",
        })
        assert r.status_code == 409
        assert r.json() == {"message": "User already exists"}

    @pytest.mark.parametrize("email", ["a\nb@example.com", "a b@example.com", "ab@example.com\r\nBcc: x@y.z"])
    def test_email_with_inner_whitespace_rejected(self, client, email):
        r = client.post("/api/v1/register", json={
            "name": "Fay", "email": email, "password": "secret-password",
        })
        assert r.status_code == 400

    def test_short_password(self, client):
        r = client.post("/api/v1/register", json={
            "name": "Ed", "email": "ed@example.com", "password": "123",
        })
        assert r.status_code == 400


class TestLogin:
    def test_login(self, client, register):
        register(email="login@example.com", skills=["go"])
        r = client.post("/api/v1/login", json={"email": "login@example.com", "password": "secret-password"})
        assert r.status_code == 200
        data = r.json()
        assert data["user"]["skills"] == ["go"]

        r = client.get("/api/v1/profile", headers={"Authorization": f"Bearer {data['token']}"})
        assert r.status_code == 200
        assert r.json()["email"] == "login@example.com"

    def test_wrong_password(self, client, register):
        register(email="login@example.com")
        r = client.post("/api/v1/login", json={"email": "login@example.com", "password": "nope-nope"})
        assert r.status_code == 400
        assert r.json() == {"message": "Invalid credentials"}

    def test_unknown_email(self, client):
        r = client.post("/api/v1/login", json={"email": "ghost@example.com", "password": "whatever"})
        assert r.status_code == 400


class TestAuthGuard:
    def test_missing_token(self, client):
        r = client.get("/api/v1/profile")
        assert r.status_code == 401
        assert r.json() == {"message": "No token, authorization denied"}

    def test_x_auth_token_header(self, client, register):
        token, user = register()
        r = client.get("/api/v1/profile", headers={"x-auth-token": token})
        assert r.status_code == 200
        assert r.json()["id"] == user["id"]

    def test_raw_authorization_header_without_bearer(self, client, register):
        token, _ = register()
        r = client.get("/api/v1/profile", headers={"Authorization": token})
        assert r.status_code == 200

    def test_malformed_token(self, client):
        r = client.get("/api/v1/profile", headers={"x-auth-token": "not-a-jwt"})
        assert r.status_code == 401
        assert r.json() == {"message": "Token is not valid"}

    def test_expired_token(self, client, register):
        _, user = register()
        expired = create_access_token(user["id"], expires_in=timedelta(seconds=-10))
        r = client.get("/api/v1/profile", headers={"x-auth-token": expired})
        assert r.status_code == 401

    def test_wrong_signature(self, client, register):
        _, user = register()
        forged = jwt.encode({"sub": user["id"], "exp": 4102444800}, "other-secret", algorithm="HS256")
        r = client.get("/api/v1/profile", headers={"x-auth-token": forged})
        assert r.status_code == 401

    def test_token_for_deleted_user(self, client):
        token = create_access_token("no-such-user")
        r = client.get("/api/v1/profile", headers={"x-auth-token": token})
        assert r.status_code == 401

    def test_token_uses_configured_secret(self, register):
        token, user = register()
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        assert payload["sub"] == user["id"]


class TestRole:
    def test_parse(self):
        assert Role.parse("Recruiter") is Role.RECRUITER
        assert Role.parse("user") is Role.CANDIDATE
        assert Role.parse(Role.ADMIN) is Role.ADMIN

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            Role.parse("superuser")
