"""
Tests for cached booking views with Redis enabled.

An in-memory double stands in for the redis.asyncio client, covering the
calls cache_service makes.
"""

import fnmatch
import json

import pytest
import pytest_asyncio
from httpx import AsyncClient

from app.db.session import commit_session
from app.schemas.booking import GeneralBookingCreate
from app.services import booking_service, cache_service
from app.services.cache_service import CALENDAR_KEY, STALE_VIEWS_FLAG
from factories import future_date, general_booking_payload


class InMemoryRedis:
    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value

    async def delete(self, key):
        self.store.pop(key, None)

    async def scan_iter(self, match, count=None):
        for key in [k for k in self.store if fnmatch.fnmatch(k, match)]:
            yield key


@pytest_asyncio.fixture
async def redis_cache(monkeypatch) -> InMemoryRedis:
    fake = InMemoryRedis()

    async def get_redis():
        return fake

    monkeypatch.setattr(cache_service, "get_redis", get_redis)
    return fake


@pytest.mark.asyncio
async def test_calendar_served_from_cache(client: AsyncClient, redis_cache):
    redis_cache.store[CALENDAR_KEY] = json.dumps(
        [{"date": "2030-01-01", "status": "Booked", "event_type": "Wedding"}]
    )
    response = await client.get("/api/bookings/booked-dates")
    assert response.status_code == 200
    assert response.json()[0]["date"] == "2030-01-01"


@pytest.mark.asyncio
async def test_submission_drops_cached_calendar(client: AsyncClient, redis_cache):
    response = await client.get("/api/bookings/booked-dates")
    assert response.json() == []
    assert CALENDAR_KEY in redis_cache.store

    day = future_date(20)
    response = await client.post("/api/bookings/submit", json=general_booking_payload(date=day.isoformat()))
    assert response.status_code == 201
    assert CALENDAR_KEY not in redis_cache.store

    response = await client.get("/api/bookings/booked-dates")
    assert [d["date"] for d in response.json()] == [day.isoformat()]


@pytest.mark.asyncio
async def test_views_cached_before_commit_are_dropped_on_commit(db_session, redis_cache):
    data = GeneralBookingCreate.model_validate(general_booking_payload())
    await booking_service.submit_general_booking(db_session, data)
    assert db_session.info[STALE_VIEWS_FLAG] is True

    # A reader outside this transaction caches the calendar before the commit.
    redis_cache.store[CALENDAR_KEY] = "[]"

    await commit_session(db_session)

    assert CALENDAR_KEY not in redis_cache.store
    assert STALE_VIEWS_FLAG not in db_session.info


@pytest.mark.asyncio
async def test_read_only_commit_keeps_cache(db_session, redis_cache):
    await booking_service.get_booked_dates(db_session)
    assert CALENDAR_KEY in redis_cache.store

    await commit_session(db_session)

    assert CALENDAR_KEY in redis_cache.store
