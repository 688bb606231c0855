"""
Student award registrations.
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
    StudentAwardCreate,
    StudentAwardUpdate,
    serialize_booking,
)
from app.services import booking_service, transition_service

router = APIRouter(prefix="/bookings/student-awards", tags=["Student Awards"])

KIND = BookingKind.STUDENT_AWARD
staff_only = require_roles(*STAFF_ROLES)


@router.post("/register", response_model=BookingActionResponse, status_code=status.HTTP_201_CREATED)
async def register_student(
    data: StudentAwardCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.submit_student_award(db, data, user.id)
    return BookingActionResponse(
        message="Student award registration submitted successfully",
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


@router.put("/award/{booking_id}", response_model=BookingActionResponse)
async def award_registration(
    booking_id: int,
    _: User = Depends(staff_only),
    db: AsyncSession = Depends(get_db),
):
    booking = await transition_service.award(db, booking_id)
    return BookingActionResponse(message="Student awarded", booking=serialize_booking(booking))


@router.patch("/{booking_id}", response_model=BookingActionResponse)
async def update_registration(
    booking_id: int,
    changes: StudentAwardUpdate,
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
