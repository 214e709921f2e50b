"""
Centralized error handling middleware for FastAPI.

Provides consistent error responses and logging for all API routes.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class MemberHubError(Exception):
    """Base exception for member and profile picture errors."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class UserNotFoundError(MemberHubError):
    """Raised when a user record does not exist or is soft-deleted."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class DuplicateEmailError(MemberHubError):
    """Raised when a live user already owns the email address."""

    def __init__(self, email: str):
        super().__init__(
            message=f"A user with email '{email}' already exists",
            status_code=409,
            details={"email": email},
        )


class AvatarNotFoundError(MemberHubError):
    """Raised when a user has no stored profile picture."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"No profile picture for user {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class AvatarStorageError(MemberHubError):
    """Raised when profile picture storage operations fail."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            message=f"Failed to store profile picture: {reason}",
            status_code=500,
            details={"user_id": user_id, "reason": reason},
        )


class RecordStorageError(MemberHubError):
    """Raised when a user or booking record cannot be read or written."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Failed to access stored record: {reason}",
            status_code=500,
            details={"path": path, "reason": reason},
        )


class BookingNotFoundError(MemberHubError):
    """Raised when a booking does not exist or is soft-deleted."""

    def __init__(self, booking_id: str):
        super().__init__(
            message=f"Booking not found: {booking_id}",
            status_code=404,
            details={"booking_id": booking_id},
        )


class InvalidDateRangeError(MemberHubError):
    """Raised when a date range query ends before it starts."""

    def __init__(self, start, end):
        super().__init__(
            message=f"Invalid date range: {start} is after {end}",
            status_code=400,
            details={"from": str(start), "to": str(end)},
        )


class UploadReadError(MemberHubError):
    """Raised when the incoming upload stream cannot be read."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Failed to read uploaded file: {reason}",
            status_code=500,
            details={"reason": reason},
        )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches unhandled exceptions and returns consistent error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response

        except MemberHubError as e:
            log = logger.error if e.status_code >= 500 else logger.warning
            log(
                f"{type(e).__name__}: {e.message}",
                extra={"status_code": e.status_code, "details": e.details},
            )
            return JSONResponse(
                status_code=e.status_code,
                content={
                    "error": e.message,
                    "details": e.details,
                },
            )

        except Exception as e:
            # Log full stack trace for unexpected errors
            logger.exception(f"Unhandled exception: {str(e)}")
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "message": str(e) if logger.isEnabledFor(logging.DEBUG) else None,
                },
            )
