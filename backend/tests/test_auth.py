"""
Tests for authentication endpoints and role checks.
"""

import pytest
from httpx import AsyncClient

from app.core.security import create_access_token, decode_access_token


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient):
    """Successful registration returns user data with the default role."""
    response = await client.post("/api/auth/register", json={
        "email": "new@example.com",
        "username": "newuser",
        "password": "securepassword123",
        "phone": "9876543210",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new@example.com"
    assert data["username"] == "newuser"
    assert data["role"] == "user"
    assert "hashed_password" not in data  # Never expose password hash


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, test_user):
    """Duplicate email returns 409."""
    response = await client.post("/api/auth/register", json={
        "email": "testuser@example.com",
        "username": "different",
        "password": "securepassword123",
    })
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, test_user):
    """Duplicate username returns 409."""
    response = await client.post("/api/auth/register", json={
        "email": "different@example.com",
        "username": "testuser",
        "password": "securepassword123",
    })
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_register_weak_password(client: AsyncClient):
    """Password under 8 chars returns 422."""
    response = await client.post("/api/auth/register", json={
        "email": "weak@example.com",
        "username": "weakuser",
        "password": "short",
    })
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, test_user):
    """Valid credentials return a JWT carrying user id and role."""
    response = await client.post("/api/auth/login", json={
        "email": "testuser@example.com",
        "password": "testpassword123",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["role"] == "user"

    payload = decode_access_token(data["access_token"])
    assert payload["sub"] == str(test_user.id)
    assert payload["role"] == "user"


@pytest.mark.asyncio
async def test_login_returns_staff_role(client: AsyncClient, admin_user):
    response = await client.post("/api/auth/login", json={
        "email": "admin@example.com",
        "password": "testpassword123",
    })
    assert response.status_code == 200
    assert response.json()["role"] == "admin"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, test_user):
    """Wrong password returns 401."""
    response = await client.post("/api/auth/login", json={
        "email": "testuser@example.com",
        "password": "wrongpassword",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_nonexistent_email(client: AsyncClient):
    """Non-existent email returns 401."""
    response = await client.post("/api/auth/login", json={
        "email": "nobody@example.com",
        "password": "anypassword123",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_missing_token_is_401_not_403(client: AsyncClient):
    response = await client.get("/api/bookings/my")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_garbage_token_is_401(client: AsyncClient):
    response = await client.get("/api/bookings/my", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_for_deleted_user_is_401(client: AsyncClient):
    token = create_access_token(data={"sub": "9999", "role": "admin"})
    response = await client.get("/api/bookings/my", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_plain_user_cannot_list_bookings(client: AsyncClient, auth_headers):
    """Staff endpoints refuse the `user` role with 403."""
    response = await client.get("/api/bookings", headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_form_manager_is_not_booking_staff(client: AsyncClient, form_manager_headers):
    response = await client.get("/api/bookings", headers=form_manager_headers)
    assert response.status_code == 403
