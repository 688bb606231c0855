"""
Typed calls against the Venue Booking API.

Each method maps to one endpoint, takes an optional CancelToken and
raises the client error taxonomy. Only fetch_dashboard retries.
"""

import asyncio
from datetime import date
from typing import Any, Awaitable, Callable, Optional

from app.client.envelope import Envelope
from app.client.errors import ApiError, FormValidationError, NetworkError, ServerError
from app.client.session import ApiSession, CancelToken
from app.client.validation import validate_booking_form
from app.core.logging import get_logger

logger = get_logger(__name__)

DASHBOARD_ATTEMPTS = 3
DASHBOARD_BASE_DELAY = 0.5
DASHBOARD_MAX_DELAY = 4.0

_BASE = {
    "general": "/api/bookings",
    "samuh_lagan": "/api/bookings/samuh-lagan",
    "student_award": "/api/bookings/student-awards",
}


def backoff_delay(attempt: int, base: float = DASHBOARD_BASE_DELAY, cap: float = DASHBOARD_MAX_DELAY) -> float:
    """Delay before retry number `attempt` (1-based): base, 2*base, 4*base, ... capped."""
    return min(cap, base * (2 ** (attempt - 1)))


class BookingApiClient:
    def __init__(
        self,
        session: ApiSession,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.session = session
        self._sleep = sleep

    # ------------------------------------------------------------ bookings

    async def submit_booking(self, form: dict[str, Any], cancel: Optional[CancelToken] = None) -> Envelope:
        """Validate locally, then submit. An invalid form never reaches the network."""
        errors = validate_booking_form(form)
        if errors:
            raise FormValidationError(errors)

        payload = dict(form)
        payload["guestCount"] = int(payload["guestCount"])
        if isinstance(payload["date"], date):
            payload["date"] = payload["date"].isoformat()
        data = await self.session.request("POST", "/api/bookings/submit", cancel, json=payload)
        return Envelope.parse(data)

    async def list_bookings(
        self,
        kind: str = "general",
        status: Optional[str] = None,
        cancel: Optional[CancelToken] = None,
    ) -> Envelope:
        if kind == "general":
            params = {"kind": kind}
            if status:
                params["status"] = status
            data = await self.session.request("GET", "/api/bookings", cancel, params=params)
        else:
            data = await self.session.request("GET", _BASE[kind], cancel)
        return Envelope.parse(data)

    async def my_bookings(self, cancel: Optional[CancelToken] = None) -> Envelope:
        return Envelope.parse(await self.session.request("GET", "/api/bookings/my", cancel))

    async def booked_dates(self, cancel: Optional[CancelToken] = None) -> list[dict]:
        return await self.session.request("GET", "/api/bookings/booked-dates", cancel)

    async def approve(self, booking_id: int, kind: str = "general", cancel: Optional[CancelToken] = None) -> Envelope:
        data = await self.session.request("PUT", f"{_BASE[kind]}/approve/{booking_id}", cancel)
        return Envelope.parse(data)

    async def reject(
        self,
        booking_id: int,
        reason: str,
        kind: str = "general",
        cancel: Optional[CancelToken] = None,
    ) -> Envelope:
        if not (reason or "").strip():
            raise FormValidationError({"reason": "Please provide a reason for rejection."})
        data = await self.session.request(
            "PUT", f"{_BASE[kind]}/reject/{booking_id}", cancel, json={"reason": reason.strip()}
        )
        return Envelope.parse(data)

    async def confirm_payment(self, booking_id: int, kind: str = "general", cancel: Optional[CancelToken] = None) -> Envelope:
        path = f"{_BASE[kind]}/confirm/{booking_id}" if kind == "samuh_lagan" else f"{_BASE[kind]}/confirm-payment/{booking_id}"
        return Envelope.parse(await self.session.request("PUT", path, cancel))

    async def confirm_booking(self, booking_id: int, cancel: Optional[CancelToken] = None) -> Envelope:
        data = await self.session.request("PUT", f"/api/bookings/confirm-booking/{booking_id}", cancel)
        return Envelope.parse(data)

    async def award(self, booking_id: int, cancel: Optional[CancelToken] = None) -> Envelope:
        data = await self.session.request("PUT", f"/api/bookings/student-awards/award/{booking_id}", cancel)
        return Envelope.parse(data)

    async def update_booking(
        self,
        booking_id: int,
        changes: dict[str, Any],
        kind: str = "general",
        cancel: Optional[CancelToken] = None,
    ) -> Envelope:
        if kind == "student_award":
            data = await self.session.request("PATCH", f"{_BASE[kind]}/{booking_id}", cancel, json=changes)
        else:
            data = await self.session.request("PUT", f"{_BASE[kind]}/update/{booking_id}", cancel, json=changes)
        return Envelope.parse(data)

    async def delete_booking(self, booking_id: int, kind: str = "general", cancel: Optional[CancelToken] = None) -> Envelope:
        return Envelope.parse(await self.session.request("DELETE", f"{_BASE[kind]}/{booking_id}", cancel))

    async def upload_document(
        self,
        filename: str,
        content: bytes,
        folder: str = "documents",
        cancel: Optional[CancelToken] = None,
    ) -> dict:
        return await self.session.request(
            "POST",
            "/api/bookings/upload-document",
            cancel,
            files={"document": (filename, content)},
            data={"folder": folder},
        )

    # ------------------------------------------------------------ admin

    async def fetch_dashboard(
        self,
        cancel: Optional[CancelToken] = None,
        attempts: int = DASHBOARD_ATTEMPTS,
    ) -> dict:
        """
        Load the admin dashboard, retrying network failures and 5xx with
        capped exponential backoff. Auth and other 4xx errors fail at once.
        """
        for attempt in range(1, attempts + 1):
            try:
                return await self.session.request("GET", "/api/admin/dashboard", cancel)
            except (NetworkError, ServerError) as e:
                if attempt == attempts:
                    logger.error("dashboard_fetch_failed", attempts=attempts, error=e.message)
                    raise
                delay = backoff_delay(attempt)
                logger.warning("dashboard_fetch_retry", attempt=attempt, delay=delay, error=e.message)
                await self._sleep(delay)
                if cancel:
                    cancel.raise_if_cancelled()

    # ------------------------------------------------------------ forms & notices

    async def form_statuses(self, cancel: Optional[CancelToken] = None) -> dict:
        return await self.session.request("GET", "/api/forms/public/status", cancel)

    async def check_form_visibility(self, form_name: str, cancel: Optional[CancelToken] = None) -> dict:
        return await self.session.request("GET", f"/api/forms/check-form-visibility/{form_name}", cancel)

    async def create_form_notification(
        self,
        form_type: str,
        message: str,
        cancel: Optional[CancelToken] = None,
    ) -> Optional[dict]:
        """
        Post a "form is open" notice for the current user.
        Returns None instead of raising when logged out or on any API failure.
        """
        if not self.session.is_authenticated:
            logger.debug("form_notification_skipped", form_type=form_type, reason="unauthenticated")
            return None
        try:
            return await self.session.request(
                "POST",
                "/api/notifications",
                cancel,
                json={"type": "form", "form_type": form_type, "message": message},
            )
        except ApiError as e:
            logger.warning("form_notification_failed", form_type=form_type, error=e.message)
            return None

    async def notifications(self, cancel: Optional[CancelToken] = None) -> dict:
        return await self.session.request("GET", "/api/notifications", cancel)
