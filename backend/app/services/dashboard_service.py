"""
Admin dashboard summary: booking counts per kind and status, plus the
most recent submissions. Cached in Redis until the next booking write.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.domain.enums import BookingKind, BookingStatus
from app.models.booking import Booking
from app.schemas.booking import serialize_booking
from app.services.cache_service import DASHBOARD_KEY, get_cached, set_cached

logger = get_logger(__name__)

RECENT_LIMIT = 5


async def get_dashboard(db: AsyncSession) -> dict:
    cached = await get_cached(DASHBOARD_KEY)
    if cached is not None:
        cached["cached"] = True
        return cached

    rows = await db.execute(
        select(Booking.kind, Booking.status, func.count()).group_by(Booking.kind, Booking.status)
    )

    kinds = {k.value: {"total": 0, "by_status": {}} for k in BookingKind}
    total = pending = 0
    for kind, status, count in rows.all():
        summary = kinds.setdefault(kind, {"total": 0, "by_status": {}})
        summary["total"] += count
        summary["by_status"][status] = count
        total += count
        if status == BookingStatus.PENDING.value:
            pending += count

    recent_result = await db.execute(
        select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc()).limit(RECENT_LIMIT)
    )
    recent = [serialize_booking(b).model_dump(mode="json") for b in recent_result.scalars().all()]

    data = {"total": total, "pending": pending, "kinds": kinds, "recent": recent, "cached": False}
    await set_cached(DASHBOARD_KEY, data)

    logger.info("dashboard_computed", total=total, pending=pending)
    return data
