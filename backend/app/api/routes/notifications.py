"""
Notification feed for the logged-in user.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_user_id
from app.db.session import get_db
from app.schemas.notification import NotificationCreate, NotificationListResponse, NotificationResponse
from app.services import notification_service

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    notifications, unread = await notification_service.list_notifications(db, user_id)
    return NotificationListResponse(notifications=notifications, unread=unread)


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    data: NotificationCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a notification for the caller. Used by the web client when its
    form poller sees a registration form open.
    """
    return await notification_service.create_notification(
        db,
        user_id=user_id,
        notification_type=data.type,
        message=data.message,
        form_type=data.form_type,
    )


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await notification_service.mark_read(db, user_id, notification_id)
