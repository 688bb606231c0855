"""
Admin dashboard summary.
"""

from pydantic import BaseModel

from app.schemas.booking import BookingOut


class KindSummary(BaseModel):
    total: int
    by_status: dict[str, int]


class DashboardResponse(BaseModel):
    total: int
    pending: int
    kinds: dict[str, KindSummary]
    recent: list[BookingOut]
    cached: bool = False
