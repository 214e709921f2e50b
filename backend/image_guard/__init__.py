"""Image upload content validation module."""

from .content_sniffer import HEADER_SIZE, ImageFormat, classify, classify_stream
from .exceptions import ContentReadError, ImageGuardError
from .upload_validator import (
    DEFAULT_ALLOWED_MIME_TYPES,
    DEFAULT_MAX_BYTES,
    UploadedFile,
    ValidationVerdict,
    validate_upload,
)

__all__ = [
    "HEADER_SIZE",
    "ImageFormat",
    "classify",
    "classify_stream",
    "ImageGuardError",
    "ContentReadError",
    "DEFAULT_ALLOWED_MIME_TYPES",
    "DEFAULT_MAX_BYTES",
    "UploadedFile",
    "ValidationVerdict",
    "validate_upload",
]
