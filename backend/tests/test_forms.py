"""
Tests for registration form windows.
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from app.models import FormWindow


def _iso(delta: timedelta) -> str:
    return (datetime.now(timezone.utc) + delta).isoformat()


@pytest.mark.asyncio
async def test_public_status_without_configuration(client: AsyncClient):
    response = await client.get("/api/forms/public/status")
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"samuhLagan", "studentAwards"}
    assert data["samuhLagan"]["is_currently_active"] is False


@pytest.mark.asyncio
async def test_open_form_window(client: AsyncClient, admin_headers):
    response = await client.put(
        "/api/forms/status/samuhLagan",
        json={"active": True, "start_time": _iso(timedelta(hours=-1)), "end_time": _iso(timedelta(days=7))},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["is_currently_active"] is True
    assert response.json()["last_updated"] is not None

    visibility = await client.get("/api/forms/check-form-visibility/registrationForm")
    assert visibility.status_code == 200
    assert visibility.json()["visible"] is True


@pytest.mark.asyncio
async def test_window_not_started(client: AsyncClient, form_manager_headers):
    """Active but starting tomorrow reads as not currently active."""
    response = await client.put(
        "/api/forms/status/studentAwards",
        json={"active": True, "start_time": _iso(timedelta(days=1))},
        headers=form_manager_headers,
    )
    assert response.status_code == 200
    assert response.json()["active"] is True
    assert response.json()["is_currently_active"] is False

    visibility = await client.get("/api/forms/check-form-visibility/studentAwardForm")
    assert visibility.json()["visible"] is False


@pytest.mark.asyncio
async def test_end_before_start(client: AsyncClient, admin_headers):
    response = await client.put(
        "/api/forms/status/samuhLagan",
        json={"active": True, "start_time": _iso(timedelta(days=2)), "end_time": _iso(timedelta(days=1))},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_active_must_be_boolean(client: AsyncClient, admin_headers):
    response = await client.put("/api/forms/status/samuhLagan", json={"active": "yes"}, headers=admin_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_form_type(client: AsyncClient, admin_headers):
    response = await client.put("/api/forms/status/raffle", json={"active": True}, headers=admin_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_plain_user_cannot_toggle_forms(client: AsyncClient, auth_headers):
    response = await client.put("/api/forms/status/samuhLagan", json={"active": True}, headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_visibility_unknown_name(client: AsyncClient):
    response = await client.get("/api/forms/check-form-visibility/contactForm")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_visibility_unconfigured(client: AsyncClient):
    response = await client.get("/api/forms/check-form-visibility/registrationForm")
    assert response.status_code == 404


def test_is_currently_active_bounds():
    now = datetime(2026, 5, 1, 12, tzinfo=timezone.utc)
    form = FormWindow(
        form_type="samuhLagan",
        active=True,
        start_time=now - timedelta(hours=1),
        end_time=now + timedelta(hours=1),
    )
    assert form.is_currently_active(now) is True
    assert form.is_currently_active(now + timedelta(hours=2)) is False
    assert form.is_currently_active(now - timedelta(hours=2)) is False

    form.active = False
    assert form.is_currently_active(now) is False


def test_naive_bounds_are_treated_as_utc():
    now = datetime(2026, 5, 1, 12, tzinfo=timezone.utc)
    form = FormWindow(form_type="studentAwards", active=True, end_time=datetime(2026, 5, 1, 11))
    assert form.is_currently_active(now) is False
