"""
Pydantic schemas for registration form windows.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, StrictBool, field_validator


class FormStatusUpdate(BaseModel):
    active: StrictBool
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    event_date: Optional[datetime] = None

    @field_validator("start_time", "end_time", "event_date")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class FormStatus(BaseModel):
    form_type: str
    active: bool
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    event_date: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    is_currently_active: bool


class FormVisibility(BaseModel):
    visible: bool
    form_status: FormStatus
