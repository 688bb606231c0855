"""
Booking state machine.

Each booking kind has its own transition table keyed by action. A lookup
miss means the action is not allowed from the current status (or not
defined for that kind at all).
"""

from app.core.exceptions import InvalidTransition
from app.domain.enums import BookingAction, BookingKind, BookingStatus

S = BookingStatus
A = BookingAction

TRANSITIONS: dict[BookingKind, dict[BookingAction, dict[BookingStatus, BookingStatus]]] = {
    BookingKind.GENERAL: {
        A.APPROVE: {S.PENDING: S.APPROVED},
        A.REJECT: {S.PENDING: S.REJECTED, S.APPROVED: S.REJECTED},
        A.CONFIRM_PAYMENT: {S.APPROVED: S.BOOKED},
        A.CONFIRM_BOOKING: {S.APPROVED: S.BOOKED},
    },
    BookingKind.SAMUH_LAGAN: {
        A.APPROVE: {S.PENDING: S.APPROVED},
        A.REJECT: {S.PENDING: S.REJECTED, S.APPROVED: S.REJECTED},
        A.CONFIRM_PAYMENT: {S.APPROVED: S.CONFIRMED},
    },
    BookingKind.STUDENT_AWARD: {
        A.APPROVE: {S.PENDING: S.APPROVED},
        A.REJECT: {S.PENDING: S.REJECTED, S.APPROVED: S.REJECTED},
        A.AWARD: {S.APPROVED: S.AWARDED},
    },
}

TERMINAL_STATUSES = frozenset({S.BOOKED, S.CONFIRMED, S.AWARDED, S.REJECTED})

# Statuses that block a date on the public calendar.
CALENDAR_BLOCKING_STATUSES = (S.BOOKED, S.PENDING)


def next_status(kind: str, current: str, action: str) -> BookingStatus:
    """Return the status `action` moves a `kind` booking to, or raise InvalidTransition."""
    table = TRANSITIONS.get(BookingKind(kind), {}).get(BookingAction(action), {})
    target = table.get(BookingStatus(current))
    if target is None:
        raise InvalidTransition(kind=kind, current=current, action=action)
    return target


def allowed_actions(kind: str, current: str) -> list[BookingAction]:
    """Actions available for a booking; used to drive admin UI affordances."""
    status = BookingStatus(current)
    return [
        action
        for action, table in TRANSITIONS[BookingKind(kind)].items()
        if status in table
    ]


def is_terminal(status: str) -> bool:
    return BookingStatus(status) in TERMINAL_STATUSES
