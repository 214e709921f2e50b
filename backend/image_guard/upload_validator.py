"""
Upload Validator

Combines size limit, declared MIME type allow-list and the content sniffer
into a single accept/reject decision for uploaded images.

The declared MIME type is client metadata and can be spoofed; the signature
check always runs last and is authoritative. Size and type checks only reject
obviously bad input before the content is inspected.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from .content_sniffer import MIN_SIGNATURE_SIZE, ImageFormat, classify

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB

DEFAULT_ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
})

EMPTY_FILE_REASON = "File is empty or null"
INVALID_TYPE_REASON = "Invalid file type. Only JPEG, PNG, and WebP images are allowed"
TOO_SMALL_REASON = "File is too small to be a valid image"
UNKNOWN_CONTENT_REASON = (
    "File content does not match any supported image format (JPEG, PNG, WebP). "
    "The file may be corrupted or is not actually an image."
)


@dataclass(frozen=True)
class UploadedFile:
    """A single incoming file as received from the client."""

    data: bytes | None
    declared_content_type: str | None
    declared_size: int


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of validating an upload. ``reason`` is always populated."""

    is_valid: bool
    reason: str
    image_format: ImageFormat = ImageFormat.UNKNOWN


def format_size_limit(max_bytes: int) -> str:
    """Render a byte limit the way users read it (5MB, 512KB, 100 bytes)."""
    if max_bytes >= 1024 * 1024 and max_bytes % (1024 * 1024) == 0:
        return f"{max_bytes // (1024 * 1024)}MB"
    if max_bytes >= 1024 and max_bytes % 1024 == 0:
        return f"{max_bytes // 1024}KB"
    return f"{max_bytes} bytes"


def normalize_content_type(content_type: str | None) -> str | None:
    """Lower-case a Content-Type value and drop any parameters."""
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower() or None


def validate_upload(
    file: UploadedFile | None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    allowed_mime_types: Iterable[str] = DEFAULT_ALLOWED_MIME_TYPES,
) -> ValidationVerdict:
    """
    Validate an uploaded image.

    Checks run in order and the first failure wins:
    1. Payload must be present and non-empty
    2. Declared size must not exceed max_bytes (inclusive limit)
    3. Declared content type must be in the allow-list
    4. Content signature must match JPEG, PNG or WebP

    Malformed input never raises; it produces a negative verdict.

    Args:
        file: Upload to validate
        max_bytes: Maximum accepted size in bytes
        allowed_mime_types: Accepted declared content types

    Returns:
        ValidationVerdict: Accept/reject decision with a readable reason
    """
    if file is None or not file.data:
        return ValidationVerdict(False, EMPTY_FILE_REASON)

    if file.declared_size > max_bytes:
        logger.warning(
            f"Upload rejected: {file.declared_size} bytes exceeds {max_bytes} byte limit"
        )
        return ValidationVerdict(
            False,
            f"File size exceeds maximum allowed size of {format_size_limit(max_bytes)}",
        )

    allowed = {normalize_content_type(t) for t in allowed_mime_types}
    content_type = normalize_content_type(file.declared_content_type)
    if content_type is None or content_type not in allowed:
        logger.warning(f"Upload rejected: declared content type {file.declared_content_type!r}")
        return ValidationVerdict(False, INVALID_TYPE_REASON)

    if len(file.data) < MIN_SIGNATURE_SIZE:
        return ValidationVerdict(False, TOO_SMALL_REASON)

    image_format = classify(file.data)
    if image_format is ImageFormat.UNKNOWN:
        logger.warning(
            f"Upload rejected: content does not match declared type {content_type}"
        )
        return ValidationVerdict(False, UNKNOWN_CONTENT_REASON)

    return ValidationVerdict(True, f"Valid {image_format.label} file", image_format)
