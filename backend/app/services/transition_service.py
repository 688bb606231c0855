"""
Booking status transitions.

WORKFLOW
========

  Pending --approve--> Approved --confirm_payment / confirm_booking--> Booked      (general)
                                --confirm_payment-------------------> Confirmed   (samuh_lagan)
                                --award-----------------------------> Awarded     (student_award)
  Pending | Approved --reject(reason)--> Rejected

Every transition:
  1. Loads the booking (404 if missing, or if it's of another kind)
  2. Asks the state machine for the target status (409 if not allowed)
  3. Writes the status and its side fields in the request's transaction
  4. Notifies the submitting user, if there is one
  5. Drops the cached calendar/dashboard views

Nothing is written when step 2 refuses, so a failed call leaves the
booking exactly as it was.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidTransition, ValidationError
from app.core.logging import get_logger
from app.core.metrics import record_transition
from app.domain import booking_state
from app.domain.enums import BookingAction, BookingKind, NotificationType, PaymentStatus
from app.models.booking import Booking
from app.services import notification_service
from app.services.booking_service import get_booking
from app.services.cache_service import invalidate_booking_views

logger = get_logger(__name__)

_USER_MESSAGES = {
    BookingAction.APPROVE: "Your {label} has been approved.",
    BookingAction.REJECT: "Your {label} was rejected: {reason}",
    BookingAction.CONFIRM_PAYMENT: "Payment received. Your {label} is confirmed.",
    BookingAction.CONFIRM_BOOKING: "Your {label} is confirmed.",
    BookingAction.AWARD: "Congratulations! Your {label} has been accepted for an award.",
}

_LABELS = {
    BookingKind.GENERAL.value: "booking",
    BookingKind.SAMUH_LAGAN.value: "Samuh Lagan registration",
    BookingKind.STUDENT_AWARD.value: "student award registration",
}


async def apply_transition(
    db: AsyncSession,
    booking_id: int,
    action: BookingAction,
    kind: BookingKind | None = None,
    reason: str | None = None,
) -> Booking:
    booking = await get_booking(db, booking_id, kind)

    try:
        target = booking_state.next_status(booking.kind, booking.status, action)
    except InvalidTransition:
        logger.warning(
            "booking_transition_refused",
            booking_id=booking.id,
            kind=booking.kind,
            action=action.value,
            status=booking.status,
        )
        record_transition(booking.kind, action.value, allowed=False)
        raise

    previous = booking.status
    booking.status = target.value

    if action == BookingAction.REJECT:
        booking.rejection_reason = reason
    elif action == BookingAction.CONFIRM_PAYMENT:
        booking.payment_confirmed = True
        if booking.kind == BookingKind.SAMUH_LAGAN.value:
            booking.payment_status = PaymentStatus.PAID.value

    await db.flush()
    await db.refresh(booking)

    if booking.user_id is not None:
        message = _USER_MESSAGES[action].format(label=_LABELS[booking.kind], reason=reason)
        await notification_service.create_notification(
            db,
            user_id=booking.user_id,
            notification_type=NotificationType.BOOKING,
            message=message,
            booking_id=booking.id,
        )

    logger.info(
        "booking_transition",
        booking_id=booking.id,
        kind=booking.kind,
        action=action.value,
        from_status=previous,
        to_status=booking.status,
    )
    record_transition(booking.kind, action.value)
    await invalidate_booking_views(db)
    return booking


async def approve(db: AsyncSession, booking_id: int, kind: BookingKind | None = None) -> Booking:
    return await apply_transition(db, booking_id, BookingAction.APPROVE, kind)


async def reject(
    db: AsyncSession,
    booking_id: int,
    reason: str,
    kind: BookingKind | None = None,
) -> Booking:
    reason = (reason or "").strip()
    if not reason:
        raise ValidationError("A rejection reason is required")
    return await apply_transition(db, booking_id, BookingAction.REJECT, kind, reason=reason)


async def confirm_payment(db: AsyncSession, booking_id: int, kind: BookingKind | None = None) -> Booking:
    return await apply_transition(db, booking_id, BookingAction.CONFIRM_PAYMENT, kind)


async def confirm_booking(db: AsyncSession, booking_id: int, kind: BookingKind | None = None) -> Booking:
    return await apply_transition(db, booking_id, BookingAction.CONFIRM_BOOKING, kind)


async def award(db: AsyncSession, booking_id: int) -> Booking:
    return await apply_transition(db, booking_id, BookingAction.AWARD, BookingKind.STUDENT_AWARD)
