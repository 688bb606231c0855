"""
In-app notification shown in the user's notification feed.

No uniqueness constraint: the frontend's form-status polling can post the
same "form is open" notice twice when polls overlap.
"""

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Text, Index

from app.db.base import Base, TimestampMixin


class Notification(Base, TimestampMixin):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(20), nullable=False)
    form_type = Column(String(30), nullable=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_notifications_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user={self.user_id}, type={self.type})>"
