"""
Hall booking endpoints: public intake, the booked-dates calendar, document
upload and the staff workflow (approve, reject, confirm, edit, delete).
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_user, get_optional_user, require_roles
from app.db.session import get_db
from app.domain.enums import STAFF_ROLES, BookingKind, BookingStatus
from app.models.user import User
from app.schemas.booking import (
    BookedDate,
    BookingActionResponse,
    BookingDeleteResponse,
    BookingListResponse,
    BookingOut,
    DocumentUploadResponse,
    GeneralBookingCreate,
    GeneralBookingUpdate,
    GeneralSubmitResponse,
    RejectRequest,
    serialize_booking,
)
from app.services import booking_service, storage_service, transition_service

router = APIRouter(prefix="/bookings", tags=["Bookings"])

staff_only = require_roles(*STAFF_ROLES)


@router.post("/submit", response_model=GeneralSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_booking(
    data: GeneralBookingCreate,
    user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Submit a hall booking request. Open to anonymous visitors; a logged-in
    user's request is linked to their account so they get status notices.
    """
    booking = await booking_service.submit_general_booking(db, data, user.id if user else None)
    return GeneralSubmitResponse(
        message="Booking request submitted successfully",
        booking=serialize_booking(booking),
        is_samaj_member=booking.is_samaj_member,
    )


@router.get("/booked-dates", response_model=list[BookedDate])
async def booked_dates(db: AsyncSession = Depends(get_db)):
    """Dates that are taken (Booked) or on hold (Pending)."""
    return await booking_service.get_booked_dates(db)


@router.post("/upload-document", response_model=DocumentUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    document: UploadFile = File(...),
    folder: str = Form("documents"),
):
    url, doc_type = await storage_service.save_upload(document, folder)
    return DocumentUploadResponse(
        message="Document uploaded successfully",
        document_url=url,
        document_type=doc_type,
    )


@router.get("/my", response_model=list[BookingOut])
async def my_bookings(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Every request the caller submitted, of any kind."""
    bookings = await booking_service.get_user_bookings(db, user.id)
    return [serialize_booking(b) for b in bookings]


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    kind: Optional[BookingKind] = Query(None),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    bookings, total = await booking_service.list_bookings(db, kind, status_filter)
    return BookingListResponse(bookings=[serialize_booking(b) for b in bookings], total=total)


@router.put("/approve/{booking_id}", response_model=BookingActionResponse)
async def approve_booking(
    booking_id: int,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await transition_service.approve(db, booking_id, BookingKind.GENERAL)
    return BookingActionResponse(message="Booking approved", booking=serialize_booking(booking))


@router.put("/reject/{booking_id}", response_model=BookingActionResponse)
async def reject_booking(
    booking_id: int,
    body: RejectRequest,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await transition_service.reject(db, booking_id, body.reason, BookingKind.GENERAL)
    return BookingActionResponse(message="Booking rejected", booking=serialize_booking(booking))


@router.put("/confirm-payment/{booking_id}", response_model=BookingActionResponse)
async def confirm_payment(
    booking_id: int,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await transition_service.confirm_payment(db, booking_id, BookingKind.GENERAL)
    return BookingActionResponse(message="Payment confirmed", booking=serialize_booking(booking))


@router.put("/confirm-booking/{booking_id}", response_model=BookingActionResponse)
async def confirm_booking(
    booking_id: int,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await transition_service.confirm_booking(db, booking_id, BookingKind.GENERAL)
    return BookingActionResponse(message="Booking confirmed", booking=serialize_booking(booking))


@router.put("/update/{booking_id}", response_model=BookingActionResponse)
async def update_booking(
    booking_id: int,
    changes: GeneralBookingUpdate,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.update_booking(db, booking_id, changes, BookingKind.GENERAL)
    return BookingActionResponse(message="Booking updated", booking=serialize_booking(booking))


@router.get("/{booking_id}", response_model=BookingOut)
async def get_booking(
    booking_id: int,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.get_booking(db, booking_id)
    return serialize_booking(booking)


@router.delete("/{booking_id}", response_model=BookingDeleteResponse)
async def delete_booking(
    booking_id: int,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await booking_service.delete_booking(db, booking_id, BookingKind.GENERAL)
    return BookingDeleteResponse(message="Booking deleted", booking_id=deleted_id)
