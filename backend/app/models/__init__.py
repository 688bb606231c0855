from app.models.user import User
from app.models.booking import Booking, GeneralBooking, SamuhLaganBooking, StudentAwardBooking
from app.models.form import FormWindow
from app.models.notification import Notification

__all__ = [
    "User",
    "Booking", "GeneralBooking", "SamuhLaganBooking", "StudentAwardBooking",
    "FormWindow",
    "Notification",
]
