"""
Samuh Lagan (group wedding) registrations.

Submissions are JSON; photos and ID proofs are uploaded first through
/bookings/upload-document and referenced here by URL.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_user, require_roles
from app.db.session import get_db
from app.domain.enums import STAFF_ROLES, BookingKind
from app.models.user import User
from app.schemas.booking import (
    BookingActionResponse,
    BookingDeleteResponse,
    BookingListResponse,
    RejectRequest,
    SamuhLaganCreate,
    SamuhLaganUpdate,
    serialize_booking,
)
from app.services import booking_service, transition_service

router = APIRouter(prefix="/bookings/samuh-lagan", tags=["Samuh Lagan"])

KIND = BookingKind.SAMUH_LAGAN
staff_only = require_roles(*STAFF_ROLES)


@router.post("/submit", response_model=BookingActionResponse, status_code=status.HTTP_201_CREATED)
async def submit_registration(
    data: SamuhLaganCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Register a couple. Only accepted while the samuhLagan form window is open."""
    booking = await booking_service.submit_samuh_lagan(db, data, user.id)
    return BookingActionResponse(
        message="Samuh Lagan registration submitted successfully",
        booking=serialize_booking(booking),
    )


@router.get("", response_model=BookingListResponse)
async def list_registrations(
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    bookings, total = await booking_service.list_bookings(db, KIND)
    return BookingListResponse(bookings=[serialize_booking(b) for b in bookings], total=total)


@router.put("/approve/{booking_id}", response_model=BookingActionResponse)
async def approve_registration(
    booking_id: int,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await transition_service.approve(db, booking_id, KIND)
    return BookingActionResponse(message="Registration approved", booking=serialize_booking(booking))


@router.put("/reject/{booking_id}", response_model=BookingActionResponse)
async def reject_registration(
    booking_id: int,
    body: RejectRequest,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await transition_service.reject(db, booking_id, body.reason, KIND)
    return BookingActionResponse(message="Registration rejected", booking=serialize_booking(booking))


@router.put("/confirm/{booking_id}", response_model=BookingActionResponse)
async def confirm_registration(
    booking_id: int,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    """Record the registration fee and confirm the couple's place."""
    booking = await transition_service.confirm_payment(db, booking_id, KIND)
    return BookingActionResponse(
        message="Payment confirmed and registration confirmed",
        booking=serialize_booking(booking),
    )


@router.put("/update/{booking_id}", response_model=BookingActionResponse)
async def update_registration(
    booking_id: int,
    changes: SamuhLaganUpdate,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.update_booking(db, booking_id, changes, KIND)
    return BookingActionResponse(message="Registration updated", booking=serialize_booking(booking))


@router.delete("/{booking_id}", response_model=BookingDeleteResponse)
async def delete_registration(
    booking_id: int,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await booking_service.delete_booking(db, booking_id, KIND)
    return BookingDeleteResponse(message="Registration deleted", booking_id=deleted_id)
