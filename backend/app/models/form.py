"""
Registration window for a seasonal form (Samuh Lagan, student awards).

A form accepts submissions when `active` is set and the current time is
inside [start_time, end_time]; a missing bound is open-ended.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime

from app.db.base import Base, TimestampMixin


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class FormWindow(Base, TimestampMixin):
    __tablename__ = "forms"

    id = Column(Integer, primary_key=True, index=True)
    form_type = Column(String(30), unique=True, nullable=False)
    active = Column(Boolean, nullable=False, default=False)
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    event_date = Column(DateTime(timezone=True), nullable=True)
    last_updated = Column(DateTime(timezone=True), nullable=True)

    def is_currently_active(self, now: datetime | None = None) -> bool:
        if not self.active:
            return False
        now = now or datetime.now(timezone.utc)
        if self.start_time and now < _as_utc(self.start_time):
            return False
        if self.end_time and now > _as_utc(self.end_time):
            return False
        return True

    def __repr__(self) -> str:
        return f"<FormWindow(form_type={self.form_type}, active={self.active})>"
