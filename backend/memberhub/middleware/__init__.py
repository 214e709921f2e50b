"""FastAPI middleware for request/response processing."""

from .error_handler import (
    ErrorHandlerMiddleware,
    MemberHubError,
    UserNotFoundError,
    DuplicateEmailError,
    AvatarNotFoundError,
    AvatarStorageError,
    RecordStorageError,
    BookingNotFoundError,
    InvalidDateRangeError,
    UploadReadError,
)
from .upload_reader import read_upload

__all__ = [
    "ErrorHandlerMiddleware",
    "MemberHubError",
    "UserNotFoundError",
    "DuplicateEmailError",
    "AvatarNotFoundError",
    "AvatarStorageError",
    "RecordStorageError",
    "BookingNotFoundError",
    "InvalidDateRangeError",
    "UploadReadError",
    "read_upload",
]
