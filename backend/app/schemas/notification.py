"""
Pydantic schemas for the notification feed.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.enums import NotificationType


class NotificationCreate(BaseModel):
    type: NotificationType = NotificationType.FORM
    form_type: Optional[str] = Field(None, max_length=30)
    message: str = Field(..., min_length=1, max_length=1000)


class NotificationResponse(BaseModel):
    id: int
    type: NotificationType
    form_type: Optional[str] = None
    booking_id: Optional[int] = None
    message: str
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread: int
