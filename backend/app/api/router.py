"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from app.core.config import get_settings
from app.api.routes import admin, auth, bookings, forms, notifications, samuh_lagan, student_awards

settings = get_settings()

api_router = APIRouter(prefix=settings.API_PREFIX)
api_router.include_router(auth.router)
# The kind-specific routers go before bookings so /bookings/{booking_id}
# does not shadow /bookings/samuh-lagan and /bookings/student-awards.
api_router.include_router(samuh_lagan.router)
api_router.include_router(student_awards.router)
api_router.include_router(bookings.router)
api_router.include_router(notifications.router)
api_router.include_router(forms.router)
api_router.include_router(admin.router)
