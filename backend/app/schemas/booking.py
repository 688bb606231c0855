"""
Pydantic schemas for booking-related request/response validation.

Input models accept both snake_case and the camelCase field names the
web frontend posts (`guestCount`, `firstName`, ...). Output models are a
discriminated union on `kind`.
"""

import re
from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.config import get_settings
from app.domain.enums import (
    AwardRank,
    BookingAction,
    BookingStatus,
    DocumentType,
    PaymentStatus,
)

PHONE_PATTERN = re.compile(r"^\d{10}$")

_RANK_ALIASES = {
    "1": AwardRank.FIRST,
    "2": AwardRank.SECOND,
    "3": AwardRank.THIRD,
    "first": AwardRank.FIRST,
    "second": AwardRank.SECOND,
    "third": AwardRank.THIRD,
    "none": AwardRank.NONE,
    "": AwardRank.NONE,
}


class CamelInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


def check_phone(value: str) -> str:
    if not PHONE_PATTERN.match(value):
        raise ValueError("Phone number must be 10 digits.")
    return value


def check_guest_count(value: int) -> int:
    if value < 0:
        raise ValueError("Guest count cannot be negative.")
    limit = get_settings().MAX_GUEST_COUNT
    if value > limit:
        raise ValueError(f"Guest count cannot exceed {limit}.")
    return value


def normalize_rank(value: str | AwardRank | None) -> AwardRank:
    """Accept `1st`, `2`, `Second`, `none`, ... and return an AwardRank."""
    if value is None:
        return AwardRank.NONE
    if isinstance(value, AwardRank):
        return value
    key = re.sub(r"^(\d)(st|nd|rd)$", r"\1", value.strip().lower())
    if key not in _RANK_ALIASES:
        raise ValueError("Rank must be 1st, 2nd, 3rd, or none")
    return _RANK_ALIASES[key]


Phone = Annotated[str, AfterValidator(check_phone)]
GuestCount = Annotated[int, AfterValidator(check_guest_count)]


# ---------------------------------------------------------------- intake


class DocumentRef(CamelInput):
    url: str = Field(..., min_length=1)
    type: DocumentType = DocumentType.OTHER


class GeneralBookingCreate(CamelInput):
    first_name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Phone
    event_type: str = Field(..., min_length=1, max_length=100)
    date: date
    village_name: str = Field(..., min_length=1, max_length=100)
    guest_count: GuestCount
    additional_services: list[str] = Field(default_factory=list)
    additional_notes: str = ""
    event_document: str = Field(..., min_length=1)
    document_type: DocumentType = DocumentType.OTHER
    documents: list[DocumentRef] = Field(default_factory=list)


class PersonDetails(CamelInput):
    name: str = Field(..., min_length=1, max_length=200)
    father_name: str = Field(..., min_length=1, max_length=200)
    mother_name: str = Field(..., min_length=1, max_length=200)
    age: int = Field(..., gt=0, le=120)
    contact_number: Phone
    email: EmailStr
    address: str = Field(..., min_length=1)
    photo: Optional[str] = None
    documents: list[str] = Field(default_factory=list)


class SamuhLaganCreate(CamelInput):
    bride: PersonDetails
    groom: PersonDetails
    ceremony_date: date


class StudentAwardCreate(CamelInput):
    name: str = Field(..., min_length=1, max_length=200)
    contact_number: Phone
    email: EmailStr
    address: str = Field(..., min_length=1)
    school_name: str = Field(..., min_length=1, max_length=200)
    standard: str = Field(..., min_length=1, max_length=50)
    board_name: str = Field(..., min_length=1, max_length=100)
    exam_year: str = Field(..., min_length=4, max_length=10)
    total_percentage: float = Field(..., ge=0, le=100)
    rank: AwardRank = AwardRank.NONE
    marksheet: str = Field(..., min_length=1)

    @field_validator("rank", mode="before")
    @classmethod
    def _rank(cls, value):
        return normalize_rank(value)


# ---------------------------------------------------------------- admin edits
# Partial updates: only fields present in the body are written.


class GeneralBookingUpdate(CamelInput):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    surname: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[Phone] = None
    event_type: Optional[str] = Field(None, min_length=1, max_length=100)
    event_date: Optional[date] = Field(None, validation_alias=AliasChoices("date", "event_date", "eventDate"))
    village_name: Optional[str] = None
    guest_count: Optional[GuestCount] = None
    additional_services: Optional[list[str]] = None
    additional_notes: Optional[str] = None


class SamuhLaganUpdate(CamelInput):
    bride: Optional[PersonDetails] = None
    groom: Optional[PersonDetails] = None
    event_date: Optional[date] = Field(
        None, validation_alias=AliasChoices("ceremony_date", "ceremonyDate", "event_date")
    )


class StudentAwardUpdate(CamelInput):
    name: Optional[str] = None
    contact_number: Optional[Phone] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    school_name: Optional[str] = None
    standard: Optional[str] = None
    board_name: Optional[str] = None
    exam_year: Optional[str] = None
    total_percentage: Optional[float] = Field(None, ge=0, le=100)
    rank: Optional[AwardRank] = None

    @field_validator("rank", mode="before")
    @classmethod
    def _rank(cls, value):
        return value if value is None else normalize_rank(value)


class RejectRequest(BaseModel):
    reason: str = Field(
        ...,
        validation_alias=AliasChoices("reason", "rejectionReason", "rejection_reason"),
    )

    @field_validator("reason")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("A rejection reason is required")
        return value


# ---------------------------------------------------------------- responses


class BookingOutBase(BaseModel):
    id: int
    status: BookingStatus
    rejection_reason: Optional[str] = None
    payment_confirmed: bool
    email: str
    phone: str
    event_date: Optional[date] = None
    user_id: Optional[int] = None
    allowed_actions: list[BookingAction] = []
    created_at: datetime

    model_config = {"from_attributes": True}


class GeneralBookingOut(BookingOutBase):
    kind: Literal["general"]
    first_name: str
    surname: str
    event_type: str
    village_name: str
    guest_count: int
    additional_services: list[str] = []
    additional_notes: str = ""
    is_samaj_member: bool
    event_document: str
    document_type: DocumentType
    documents: list[dict] = []


class SamuhLaganOut(BookingOutBase):
    kind: Literal["samuh_lagan"]
    bride: dict
    groom: dict
    payment_status: PaymentStatus


class StudentAwardOut(BookingOutBase):
    kind: Literal["student_award"]
    name: str
    address: str
    school_name: str
    standard: str
    board_name: str
    exam_year: str
    total_percentage: float
    rank: AwardRank
    marksheet: str
    is_eligible: bool


BookingOut = Annotated[
    Union[GeneralBookingOut, SamuhLaganOut, StudentAwardOut],
    Field(discriminator="kind"),
]

_OUT_BY_KIND = {
    "general": GeneralBookingOut,
    "samuh_lagan": SamuhLaganOut,
    "student_award": StudentAwardOut,
}


def serialize_booking(booking) -> GeneralBookingOut | SamuhLaganOut | StudentAwardOut:
    return _OUT_BY_KIND[booking.kind].model_validate(booking)


class BookingActionResponse(BaseModel):
    message: str
    booking: BookingOut


class GeneralSubmitResponse(BookingActionResponse):
    is_samaj_member: bool


class BookingListResponse(BaseModel):
    bookings: list[BookingOut]
    total: int


class BookingDeleteResponse(BaseModel):
    message: str
    booking_id: int


class BookedDate(BaseModel):
    date: date
    status: BookingStatus
    event_type: Optional[str] = None


class DocumentUploadResponse(BaseModel):
    message: str
    document_url: str
    document_type: DocumentType
