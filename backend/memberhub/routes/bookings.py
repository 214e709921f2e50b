"""
Bookings API Routes

Record membership payment bookings and list them per member, for the
unmatched system bucket, or by date range.
"""

import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from memberhub.middleware import BookingNotFoundError, UserNotFoundError
from memberhub.models import (
    BookingAssignRequest,
    BookingCreateRequest,
    BookingPage,
    BookingRecord,
    ErrorResponse,
)
from memberhub.services import (
    BookingLedger,
    UserDirectory,
    get_booking_ledger,
    get_user_directory,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_member(directory: UserDirectory, user_id) -> None:
    if user_id and directory.get_user(user_id) is None:
        raise UserNotFoundError(str(user_id))


@router.post(
    "/bookings",
    response_model=BookingRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Record Booking",
    responses={404: {"description": "Owner not found", "model": ErrorResponse}},
)
async def create_booking(
    request: BookingCreateRequest,
    ledger: BookingLedger = Depends(get_booking_ledger),
    directory: UserDirectory = Depends(get_user_directory),
) -> BookingRecord:
    _require_member(directory, request.userId)
    return ledger.create_booking(
        user_id=request.userId,
        expected_purpose=request.expectedPurpose,
        expected_amount=request.expectedAmount,
        received_at=request.receivedAt,
        actual_purpose=request.actualPurpose,
        actual_amount=request.actualAmount,
        note=request.note,
        code=request.code,
    )


@router.get(
    "/bookings",
    response_model=BookingPage,
    summary="List Bookings",
    description="Bookings created within the optional [from, to] range, newest first.",
    responses={400: {"description": "Range ends before it starts", "model": ErrorResponse}},
)
async def list_bookings(
    start: datetime | None = Query(default=None, alias="from"),
    end: datetime | None = Query(default=None, alias="to"),
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, gt=0, le=100),
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> BookingPage:
    return BookingPage(**ledger.bookings_between(start, end, page=page, size=size))


@router.get(
    "/bookings/system",
    response_model=BookingPage,
    summary="List System Bookings",
    description="Bookings not yet matched to a member, newest first.",
)
async def list_system_bookings(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, gt=0, le=100),
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> BookingPage:
    return BookingPage(**ledger.system_bookings(page=page, size=size))


@router.get(
    "/users/{userId}/bookings",
    response_model=BookingPage,
    summary="List Member Bookings",
    responses={404: {"description": "User not found", "model": ErrorResponse}},
)
async def list_member_bookings(
    userId: UUID,
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, gt=0, le=100),
    ledger: BookingLedger = Depends(get_booking_ledger),
    directory: UserDirectory = Depends(get_user_directory),
) -> BookingPage:
    _require_member(directory, userId)
    return BookingPage(**ledger.bookings_for_user(userId, page=page, size=size))


@router.get(
    "/bookings/{bookingId}",
    response_model=BookingRecord,
    summary="Get Booking",
    responses={404: {"description": "Booking not found", "model": ErrorResponse}},
)
async def get_booking(
    bookingId: UUID,
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> BookingRecord:
    booking = ledger.get_booking(bookingId)
    if booking is None:
        raise BookingNotFoundError(str(bookingId))
    return booking


@router.put(
    "/bookings/{bookingId}/owner",
    response_model=BookingRecord,
    summary="Assign Booking",
    responses={404: {"description": "Booking or user not found", "model": ErrorResponse}},
)
async def assign_booking(
    bookingId: UUID,
    request: BookingAssignRequest,
    ledger: BookingLedger = Depends(get_booking_ledger),
    directory: UserDirectory = Depends(get_user_directory),
) -> BookingRecord:
    _require_member(directory, request.userId)
    return ledger.assign_booking(bookingId, request.userId)


@router.delete(
    "/bookings/{bookingId}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Booking",
    responses={404: {"description": "Booking not found", "model": ErrorResponse}},
)
async def delete_booking(
    bookingId: UUID,
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> None:
    ledger.soft_delete_booking(bookingId)
