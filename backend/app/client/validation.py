"""
Client-side checks for the hall booking form.

Messages mirror the server's so the UI shows the same text whichever side
catches the problem.
"""

import re
from datetime import date
from typing import Any

from app.core.config import get_settings

PHONE_PATTERN = re.compile(r"^\d{10}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

REQUIRED_FIELDS = {
    "firstName": "First name is required.",
    "surname": "Surname is required.",
    "email": "Email is required.",
    "phone": "Phone number is required.",
    "eventType": "Event type is required.",
    "date": "Date is required.",
    "villageName": "Village name is required.",
    "guestCount": "Guest count is required.",
    "eventDocument": "Please upload a supporting document.",
}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_booking_form(data: dict[str, Any], today: date | None = None) -> dict[str, str]:
    """Return {field: message} for every problem; empty means the form may be sent."""
    errors: dict[str, str] = {}
    limit = get_settings().MAX_GUEST_COUNT

    for field, message in REQUIRED_FIELDS.items():
        if _blank(data.get(field)):
            errors[field] = message

    email = data.get("email")
    if "email" not in errors and not EMAIL_PATTERN.match(str(email).strip()):
        errors["email"] = "Please enter a valid email address."

    phone = data.get("phone")
    if "phone" not in errors and not PHONE_PATTERN.match(str(phone).strip()):
        errors["phone"] = "Phone number must be 10 digits."

    if "guestCount" not in errors:
        try:
            guests = int(data["guestCount"])
        except (TypeError, ValueError):
            errors["guestCount"] = "Guest count must be a number."
        else:
            if guests < 0:
                errors["guestCount"] = "Guest count cannot be negative."
            elif guests > limit:
                errors["guestCount"] = f"Guest count cannot exceed {limit}."

    if "date" not in errors:
        raw = data["date"]
        try:
            day = raw if isinstance(raw, date) else date.fromisoformat(str(raw))
        except ValueError:
            errors["date"] = "Please enter a valid date."
        else:
            if day < (today or date.today()):
                errors["date"] = "Booking date cannot be in the past."

    return errors
