"""Pydantic models for API request/response schemas."""

from .upload_response import UploadResponse
from .error_response import ErrorResponse, MessageResponse
from .booking_record import (
    BookingAssignRequest,
    BookingCreateRequest,
    BookingPage,
    BookingRecord,
)
from .user_record import UserCreateRequest, UserRecord
from .user_response import UserPage, UserResponse

__all__ = [
    "UploadResponse",
    "ErrorResponse",
    "MessageResponse",
    "BookingAssignRequest",
    "BookingCreateRequest",
    "BookingPage",
    "BookingRecord",
    "UserCreateRequest",
    "UserRecord",
    "UserPage",
    "UserResponse",
]
