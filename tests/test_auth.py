"""
Tests for registration, login sessions and authentication.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import status
from sqlalchemy import select

from budget_server.models import UserSession
from conftest import ALICE_AUTH


@pytest.mark.asyncio
async def test_register_user(async_client, session_factory):
    """Test user registration."""
    user_data = {
        "username": "carol",
        "password": "carol-password",
        "email": "carol@example.com",
        "name": "Carol",
    }

    response = await async_client.post("/users/new", json=user_data)
    assert response.status_code == status.HTTP_200_OK

    data = response.json()
    assert data["username"] == "carol"
    assert data["email"] == "carol@example.com"
    assert data["name"] == "Carol"
    assert "password" not in data
    assert "hashedPassword" not in data

    response = await async_client.get("/users/me", auth=("carol", "carol-password"))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == data["id"]


@pytest.mark.asyncio
async def test_register_duplicate_username(async_client, alice):
    """Test registration with duplicate username."""
    response = await async_client.post(
        "/users/new", json={"username": "alice", "password": "another-password"}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Username already taken"}


@pytest.mark.asyncio
async def test_register_short_password(async_client, session_factory):
    response = await async_client.post("/users/new", json={"username": "dave", "password": "short"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_me_with_basic_auth(async_client, alice):
    response = await async_client.get("/users/me", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["username"] == "alice"


@pytest.mark.asyncio
async def test_me_with_unknown_user(async_client, alice):
    response = await async_client.get("/users/me", auth=("mallory", "whatever-password"))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Invalid username or password"}


@pytest.mark.asyncio
async def test_me_for_inactive_user(async_client, db_session, alice):
    alice.is_active = False
    await db_session.commit()

    response = await async_client.get("/users/me", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Inactive user"}


@pytest.mark.asyncio
async def test_login_and_use_session_token(async_client, alice):
    """Test logging in and authenticating with the returned token."""
    response = await async_client.post("/sessions/login", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK

    data = response.json()
    assert len(data["token"]) == 255
    assert data["token"].isalnum()
    expiration = datetime.fromisoformat(data["expiration"].replace("Z", "+00:00"))
    assert expiration > datetime.now(timezone.utc) + timedelta(days=13)

    headers = {"Authorization": f"Bearer {data['token']}"}
    response = await async_client.get("/users/me", headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["username"] == "alice"


@pytest.mark.asyncio
async def test_login_requires_credentials(async_client, alice):
    response = await async_client.post("/sessions/login")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_invalid_session_token(async_client, alice):
    headers = {"Authorization": "Bearer not-a-real-token"}
    response = await async_client.get("/users/me", headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Invalid or expired session"}


@pytest.mark.asyncio
async def test_expired_session_token(async_client, db_session, alice):
    response = await async_client.post("/sessions/login", auth=ALICE_AUTH)
    token = response.json()["token"]

    result = await db_session.execute(select(UserSession).where(UserSession.token == token))
    session = result.scalars().one()
    session.expiration = datetime.now(timezone.utc) - timedelta(minutes=1)
    await db_session.commit()

    response = await async_client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_logout(async_client, alice):
    response = await async_client.post("/sessions/login", auth=ALICE_AUTH)
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    response = await async_client.delete("/sessions/logout", headers=headers)
    assert response.status_code == status.HTTP_200_OK

    response = await async_client.get("/users/me", headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_logout_without_session_token(async_client, alice):
    response = await async_client.delete("/sessions/logout", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
