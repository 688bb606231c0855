"""
Redis caching service for read-heavy booking views.

CACHING STRATEGY
================

What we cache:
  - The public booked-dates calendar ("bookings:calendar")
  - The admin dashboard summary ("bookings:dashboard")

Why:
  - The calendar is fetched by every visitor opening the booking page
  - The dashboard is polled by every open admin panel
  - Both change only when a booking is submitted, transitioned, edited or deleted

Invalidation strategy:
  - Every write path in the booking services calls invalidate_booking_views(db)
  - The drop is repeated after the request's transaction commits
  - All keys share the "bookings:" prefix so one SCAN clears them
  - Short TTLs as a safety net

Redis is optional. With REDIS_ENABLED=false, or when the server is down,
every call degrades to a cache miss and the request goes to the database.
"""

import json
from typing import Any, Optional

import redis.asyncio as redis
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.metrics import record_cache_operation

logger = get_logger(__name__)
settings = get_settings()

CALENDAR_KEY = "bookings:calendar"
DASHBOARD_KEY = "bookings:dashboard"
BOOKING_VIEWS_PATTERN = "bookings:*"
STALE_VIEWS_FLAG = "booking_views_stale"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


async def get_cached(key: str) -> Optional[Any]:
    client = await get_redis()
    if not client:
        return None

    try:
        data = await client.get(key)
        record_cache_operation("get", hit=data is not None)
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached(key: str, data: Any, ttl: Optional[int] = None) -> None:
    client = await get_redis()
    if not client:
        return

    ttl = ttl or settings.REDIS_CACHE_TTL
    try:
        await client.setex(key, ttl, json.dumps(data, default=str))
        logger.debug("cache_set", key=key, ttl=ttl)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_booking_views(db: Optional[AsyncSession] = None) -> None:
    """
    Drop every cached view derived from the bookings table.

    With `db`, the session is flagged and the drop runs again once it
    commits (see app.db.session.commit_session), so a read that lands
    between the write and the commit cannot keep stale rows cached.
    """
    if db is not None:
        db.info[STALE_VIEWS_FLAG] = True

    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=BOOKING_VIEWS_PATTERN, count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
