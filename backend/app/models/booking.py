"""
Booking models: one table, three kinds.

Key design decisions:
- Single-table inheritance discriminated on `kind`, so every listing,
  dashboard count and status transition works on one query surface
- Columns every kind needs (status, contact details, event_date) live on
  the base; kind-specific columns are nullable at the DB level and
  required by the intake schemas instead
- Status is a plain string guarded by a CHECK constraint listing the
  BookingStatus values
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
)

from app.core.config import get_settings
from app.db.base import Base, TimestampMixin
from app.domain import booking_state
from app.domain.enums import BookingKind, BookingStatus, PaymentStatus, AwardRank, DocumentType

_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in BookingStatus)
_KIND_VALUES = ", ".join(f"'{k.value}'" for k in BookingKind)


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    rejection_reason = Column(Text, nullable=True)
    payment_confirmed = Column(Boolean, nullable=False, default=False)

    # Submitter, when logged in. Public hall bookings are anonymous.
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)
    event_date = Column(Date, nullable=True)

    # Load every kind's columns when querying the base, so mixed listings
    # never lazy-load inside an async session.
    __mapper_args__ = {"polymorphic_on": kind, "with_polymorphic": "*"}

    __table_args__ = (
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="check_booking_status"),
        CheckConstraint(f"kind IN ({_KIND_VALUES})", name="check_booking_kind"),
        CheckConstraint(
            "status != 'Rejected' OR (rejection_reason IS NOT NULL AND rejection_reason != '')",
            name="check_rejection_has_reason",
        ),
        Index("ix_bookings_kind_status", "kind", "status"),
        Index("ix_bookings_event_date", "event_date"),
    )

    @property
    def allowed_actions(self) -> list[str]:
        return [a.value for a in booking_state.allowed_actions(self.kind, self.status)]

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, status={self.status})>"


class GeneralBooking(Booking):
    """Hall booking for a private event."""

    first_name = Column(String(100))
    surname = Column(String(100))
    event_type = Column(String(100))
    village_name = Column(String(100))
    guest_count = Column(Integer)
    additional_services = Column(JSON, default=list)
    additional_notes = Column(Text, default="")
    is_samaj_member = Column(Boolean, default=False)
    event_document = Column(String(500))
    document_type = Column(String(50), default=DocumentType.OTHER.value)
    documents = Column(JSON, default=list)

    __mapper_args__ = {"polymorphic_identity": BookingKind.GENERAL.value}


class SamuhLaganBooking(Booking):
    """Group-wedding registration; event_date is the ceremony date."""

    bride = Column(JSON)
    groom = Column(JSON)
    payment_status = Column(String(20), default=PaymentStatus.PENDING.value)

    __mapper_args__ = {"polymorphic_identity": BookingKind.SAMUH_LAGAN.value}


class StudentAwardBooking(Booking):
    name = Column(String(200))
    address = Column(Text)
    school_name = Column(String(200))
    standard = Column(String(50))
    board_name = Column(String(100))
    exam_year = Column(String(10))
    total_percentage = Column(Float)
    rank = Column(String(10), default=AwardRank.NONE.value)
    marksheet = Column(String(500))

    __mapper_args__ = {"polymorphic_identity": BookingKind.STUDENT_AWARD.value}

    @property
    def is_eligible(self) -> bool:
        top_rank = self.rank in (AwardRank.FIRST.value, AwardRank.SECOND.value, AwardRank.THIRD.value)
        return top_rank or (self.total_percentage or 0) >= get_settings().AWARD_ELIGIBLE_PERCENTAGE
