from app.schemas.user import UserCreate, UserResponse, UserLogin, Token
from app.schemas.booking import (
    GeneralBookingCreate, SamuhLaganCreate, StudentAwardCreate,
    GeneralBookingUpdate, SamuhLaganUpdate, StudentAwardUpdate,
    RejectRequest, BookingOut, BookingActionResponse, BookingListResponse,
)
from app.schemas.form import FormStatusUpdate, FormStatus, FormVisibility
from app.schemas.notification import NotificationCreate, NotificationResponse, NotificationListResponse
from app.schemas.dashboard import DashboardResponse

__all__ = [
    "UserCreate", "UserResponse", "UserLogin", "Token",
    "GeneralBookingCreate", "SamuhLaganCreate", "StudentAwardCreate",
    "GeneralBookingUpdate", "SamuhLaganUpdate", "StudentAwardUpdate",
    "RejectRequest", "BookingOut", "BookingActionResponse", "BookingListResponse",
    "FormStatusUpdate", "FormStatus", "FormVisibility",
    "NotificationCreate", "NotificationResponse", "NotificationListResponse",
    "DashboardResponse",
]
