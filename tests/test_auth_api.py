"""Tests for /api/auth endpoints and token handling."""

from datetime import timedelta

import pytest
from jose import jwt

from promptchat.core.config import get_settings
from promptchat.core.security import create_access_token, decode_access_token

from .conftest import create_user


class TestRegister:
    async def test_register_returns_user_and_token(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"name": "Ada Lovelace", "email": "Ada@Example.com ", "password": "engine42"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["user"]["email"] == "ada@example.com"
        assert data["user"]["role"] == "user"
        assert "passwordHash" not in data["user"]
        assert decode_access_token(data["token"]).user_id == data["user"]["id"]

    async def test_duplicate_email_is_case_insensitive(self, client, test_user):
        response = await client.post(
            "/api/auth/register",
            json={"name": "Copy Cat", "email": "USER@example.com", "password": "secret123"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Email is already registered"}

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "A", "email": "a@example.com", "password": "secret123"},
            {"name": "Valid Name", "email": "not-an-email", "password": "secret123"},
            {"name": "Valid Name", "email": "a@example.com", "password": "onlyletters"},
            {"name": "Valid Name", "email": "a@example.com", "password": "1234567"},
            {"name": "Valid Name", "email": "a@example.com", "password": "a1"},
        ],
    )
    async def test_validation(self, client, payload):
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 400
        assert response.json()["errors"]


class TestLogin:
    async def test_login_updates_last_login(self, client, test_user):
        response = await client.post(
            "/api/auth/login",
            json={"email": "user@example.com", "password": "secret123"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == test_user.id
        assert data["user"]["lastLoginAt"] is not None
        assert data["token"]

    async def test_wrong_password(self, client, test_user):
        response = await client.post(
            "/api/auth/login",
            json={"email": "user@example.com", "password": "wrong-password1"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    async def test_unknown_email(self, client):
        response = await client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "secret123"},
        )
        assert response.status_code == 401


class TestProfile:
    async def test_profile(self, client, user_headers, test_user):
        response = await client.get("/api/auth/profile", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["user"]["email"] == test_user.email

    async def test_invalid_token(self, client):
        response = await client.get("/api/auth/profile", headers={"Authorization": "Bearer not.a.token"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid token"}

    async def test_expired_token(self, client, test_user):
        token = create_access_token(test_user.id, test_user.email, test_user.role, expires_delta=timedelta(minutes=-1))

        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token expired"

    async def test_token_for_deleted_user(self, client):
        token = create_access_token("f" * 24, "ghost@example.com", "user")

        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "User not found or inactive"

    async def test_inactive_user_is_rejected(self, client, db_session):
        from promptchat.modules.users import UserCreateInput, UserService

        inactive = await UserService.with_session(db_session).register(
            UserCreateInput(name="Sleepy", email="sleepy@example.com", password="secret123", is_active=False)
        )
        await db_session.commit()
        token = create_access_token(inactive.id, inactive.email, inactive.role)

        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401


class TestTokens:
    def test_claims(self):
        settings = get_settings()
        token = create_access_token("a" * 24, "user@example.com", "admin")

        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm], issuer="prompt-chat-api")

        assert claims["sub"] == "a" * 24
        assert claims["email"] == "user@example.com"
        assert claims["role"] == "admin"
        assert claims["iss"] == "prompt-chat-api"
        assert "exp" in claims

    async def test_system_role_counts_as_admin(self, client, db_session):
        system_user = await create_user(db_session, email="system@example.com", role="system")
        token = create_access_token(system_user.id, system_user.email, system_user.role)

        response = await client.post(
            "/api/prompts",
            json={
                "name": "System Template",
                "description": "Created by the system account",
                "template": "Answer the question precisely: {data}",
                "systemInstructions": "You are a precise and helpful assistant.",
                "category": "general",
            },
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 201
