"""
In-app notifications.

Two producers: the booking workflow (a user's request was approved,
rejected or confirmed) and the frontend's form-status poller, which posts
a "form is now open" notice when it sees a form flip to active.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.core.metrics import record_notification
from app.domain.enums import NotificationType
from app.models.notification import Notification

logger = get_logger(__name__)


async def create_notification(
    db: AsyncSession,
    user_id: int,
    notification_type: NotificationType,
    message: str,
    form_type: str | None = None,
    booking_id: int | None = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        type=notification_type.value,
        message=message,
        form_type=form_type,
        booking_id=booking_id,
        read=False,
    )
    db.add(notification)
    await db.flush()
    await db.refresh(notification)

    logger.info(
        "notification_created",
        notification_id=notification.id,
        user_id=user_id,
        type=notification.type,
        form_type=form_type,
    )
    record_notification(notification.type)
    return notification


async def list_notifications(db: AsyncSession, user_id: int) -> tuple[list[Notification], int]:
    """A user's notifications, newest first, plus the unread count."""
    result = await db.execute(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    unread = (
        await db.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.read.is_(False))
        )
    ).scalar()
    return list(result.scalars().all()), unread


async def mark_read(db: AsyncSession, user_id: int, notification_id: int) -> Notification:
    result = await db.execute(
        select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        )
    )
    notification = result.scalar_one_or_none()
    if not notification:
        raise NotFoundError("Notification", notification_id)

    notification.read = True
    await db.flush()
    await db.refresh(notification)
    return notification
