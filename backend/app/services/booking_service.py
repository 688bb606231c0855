"""
Booking intake, lookups, edits and the booked-dates calendar.

Status changes do NOT happen here; they go through transition_service so
that every one of them passes the state machine in app.domain.booking_state.

CALENDAR RULE
=============
A date is blocked for new hall bookings when a general booking on that
date is Pending or Booked. Approved bookings do not block it (the
requester has not paid yet, staff may still reject), and Rejected ones
never show up at all.
"""

from datetime import date

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import BadRequestError, BookingConflict, DeleteNotAllowed, NotFoundError
from app.core.logging import get_logger
from app.core.metrics import record_deletion, record_submission
from app.domain.booking_state import CALENDAR_BLOCKING_STATUSES
from app.domain.enums import BookingKind, BookingStatus, FormType
from app.models.booking import Booking, GeneralBooking, SamuhLaganBooking, StudentAwardBooking
from app.schemas.booking import GeneralBookingCreate, SamuhLaganCreate, StudentAwardCreate
from app.services import form_service
from app.services.cache_service import CALENDAR_KEY, get_cached, invalidate_booking_views, set_cached

logger = get_logger(__name__)
settings = get_settings()

_MODEL_BY_KIND = {
    BookingKind.GENERAL: GeneralBooking,
    BookingKind.SAMUH_LAGAN: SamuhLaganBooking,
    BookingKind.STUDENT_AWARD: StudentAwardBooking,
}

_LABEL_BY_KIND = {
    BookingKind.GENERAL: "Booking",
    BookingKind.SAMUH_LAGAN: "Samuh Lagan registration",
    BookingKind.STUDENT_AWARD: "Student award registration",
}


def is_samaj_member(surname: str, village_name: str) -> bool:
    """Samaj members get member pricing: matching surname from one of the listed villages."""
    if (surname or "").strip().lower() != settings.SAMAJ_SURNAME.lower():
        return False
    village = (village_name or "").strip().lower()
    return any(v.lower() == village for v in settings.SAMAJ_VILLAGES)


# ---------------------------------------------------------------- intake


async def submit_general_booking(
    db: AsyncSession,
    data: GeneralBookingCreate,
    user_id: int | None = None,
) -> GeneralBooking:
    if data.date < date.today():
        raise BadRequestError("Booking date cannot be in the past")

    if await is_date_booked(db, data.date):
        logger.warning("booking_date_taken", date=data.date.isoformat())
        raise BookingConflict(f"{data.date.isoformat()} is already booked")

    member = is_samaj_member(data.surname, data.village_name)
    booking = GeneralBooking(
        user_id=user_id,
        email=data.email,
        phone=data.phone,
        event_date=data.date,
        first_name=data.first_name,
        surname=data.surname,
        event_type=data.event_type,
        village_name=data.village_name,
        guest_count=data.guest_count,
        additional_services=data.additional_services,
        additional_notes=data.additional_notes,
        is_samaj_member=member,
        event_document=data.event_document,
        document_type=data.document_type.value,
        documents=[d.model_dump(mode="json") for d in data.documents],
        status=BookingStatus.PENDING.value,
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    logger.info(
        "booking_submitted",
        booking_id=booking.id,
        kind=booking.kind,
        event_date=data.date.isoformat(),
        guests=data.guest_count,
        samaj_member=member,
    )
    record_submission(booking.kind)
    await invalidate_booking_views(db)
    return booking


async def submit_samuh_lagan(
    db: AsyncSession,
    data: SamuhLaganCreate,
    user_id: int,
) -> SamuhLaganBooking:
    await form_service.ensure_form_open(db, FormType.SAMUH_LAGAN)

    booking = SamuhLaganBooking(
        user_id=user_id,
        email=data.bride.email,
        phone=data.bride.contact_number,
        event_date=data.ceremony_date,
        bride=data.bride.model_dump(mode="json"),
        groom=data.groom.model_dump(mode="json"),
        status=BookingStatus.PENDING.value,
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    logger.info("booking_submitted", booking_id=booking.id, kind=booking.kind, user_id=user_id)
    record_submission(booking.kind)
    await invalidate_booking_views(db)
    return booking


async def submit_student_award(
    db: AsyncSession,
    data: StudentAwardCreate,
    user_id: int,
) -> StudentAwardBooking:
    await form_service.ensure_form_open(db, FormType.STUDENT_AWARDS)

    booking = StudentAwardBooking(
        user_id=user_id,
        email=data.email,
        phone=data.contact_number,
        name=data.name,
        address=data.address,
        school_name=data.school_name,
        standard=data.standard,
        board_name=data.board_name,
        exam_year=data.exam_year,
        total_percentage=data.total_percentage,
        rank=data.rank.value,
        marksheet=data.marksheet,
        status=BookingStatus.PENDING.value,
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    logger.info(
        "booking_submitted",
        booking_id=booking.id,
        kind=booking.kind,
        user_id=user_id,
        eligible=booking.is_eligible,
    )
    record_submission(booking.kind)
    await invalidate_booking_views(db)
    return booking


# ---------------------------------------------------------------- lookups


async def get_booking(
    db: AsyncSession,
    booking_id: int,
    kind: BookingKind | None = None,
) -> Booking:
    """Load one booking. With `kind`, a booking of another kind counts as missing."""
    model = _MODEL_BY_KIND[kind] if kind else Booking
    result = await db.execute(select(model).where(model.id == booking_id))
    booking = result.scalar_one_or_none()

    if not booking:
        raise NotFoundError(_LABEL_BY_KIND.get(kind, "Booking"), booking_id)
    return booking


async def list_bookings(
    db: AsyncSession,
    kind: BookingKind | None = None,
    status: BookingStatus | None = None,
) -> tuple[list[Booking], int]:
    model = _MODEL_BY_KIND[kind] if kind else Booking
    query = select(model)
    if status:
        query = query.where(model.status == status.value)

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar()
    result = await db.execute(query.order_by(model.created_at.desc(), model.id.desc()))
    return list(result.scalars().all()), total


async def get_user_bookings(db: AsyncSession, user_id: int) -> list[Booking]:
    """Get all bookings a user submitted."""
    result = await db.execute(
        select(Booking)
        .where(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    return list(result.scalars().all())


# ---------------------------------------------------------------- edits


async def update_booking(
    db: AsyncSession,
    booking_id: int,
    changes: BaseModel,
    kind: BookingKind,
) -> Booking:
    """
    Overwrite the fields present in `changes`.
    Status and kind are not editable here; the update schemas don't carry them.
    """
    booking = await get_booking(db, booking_id, kind)
    fields = {
        field: value
        for field, value in changes.model_dump(exclude_unset=True, mode="json").items()
        if value is not None
    }
    if "event_date" in fields:
        fields["event_date"] = date.fromisoformat(fields["event_date"])

    new_date = fields.get("event_date")
    if (
        kind == BookingKind.GENERAL
        and new_date is not None
        and new_date != booking.event_date
        and await is_date_booked(db, new_date, exclude_id=booking.id)
    ):
        raise BookingConflict(f"{new_date.isoformat()} is already booked")

    for field, value in fields.items():
        setattr(booking, field, value)

    if kind == BookingKind.GENERAL and ("surname" in fields or "village_name" in fields):
        booking.is_samaj_member = is_samaj_member(booking.surname, booking.village_name)

    # Registration contact details follow the bride.
    if kind == BookingKind.SAMUH_LAGAN and "bride" in fields:
        booking.email = fields["bride"]["email"]
        booking.phone = fields["bride"]["contact_number"]

    await db.flush()
    await db.refresh(booking)

    logger.info("booking_updated", booking_id=booking.id, kind=booking.kind, fields=sorted(fields))
    await invalidate_booking_views(db)
    return booking


async def delete_booking(
    db: AsyncSession,
    booking_id: int,
    kind: BookingKind,
) -> int:
    """
    Hard-delete a booking. Hall bookings can go at any time; Samuh Lagan and
    student-award registrations only once they have been rejected.
    """
    booking = await get_booking(db, booking_id, kind)

    if kind != BookingKind.GENERAL and booking.status != BookingStatus.REJECTED.value:
        raise DeleteNotAllowed()

    await db.delete(booking)
    await db.flush()

    logger.info("booking_deleted", booking_id=booking_id, kind=kind.value, status=booking.status)
    record_deletion(kind.value)
    await invalidate_booking_views(db)
    return booking_id


# ---------------------------------------------------------------- calendar


async def is_date_booked(db: AsyncSession, day: date, exclude_id: int | None = None) -> bool:
    query = select(GeneralBooking.id).where(
        GeneralBooking.event_date == day,
        GeneralBooking.status.in_([s.value for s in CALENDAR_BLOCKING_STATUSES]),
    )
    if exclude_id is not None:
        query = query.where(GeneralBooking.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.first() is not None


async def get_booked_dates(db: AsyncSession) -> list[dict]:
    """Dates blocked on the public calendar, cached until the next booking write."""
    cached = await get_cached(CALENDAR_KEY)
    if cached is not None:
        return cached

    result = await db.execute(
        select(GeneralBooking.event_date, GeneralBooking.status, GeneralBooking.event_type)
        .where(GeneralBooking.status.in_([s.value for s in CALENDAR_BLOCKING_STATUSES]))
        .order_by(GeneralBooking.event_date.asc())
    )
    dates = [
        {"date": row.event_date.isoformat(), "status": row.status, "event_type": row.event_type}
        for row in result.all()
    ]

    await set_cached(CALENDAR_KEY, dates, ttl=settings.CALENDAR_CACHE_TTL)
    return dates
