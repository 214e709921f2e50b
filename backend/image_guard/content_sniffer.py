"""
Content Sniffer

Classifies raw image bytes by their magic bytes (binary file signature),
independent of any declared MIME type or filename extension.

Supported signatures:
- JPEG: FF D8 FF
- PNG:  89 50 4E 47 0D 0A 1A 0A
- WebP: "RIFF" at offset 0 and "WEBP" at offset 8 (RIFF form type)
"""

import logging
from enum import Enum
from typing import BinaryIO

from .exceptions import ContentReadError

logger = logging.getLogger(__name__)

# Longest signature span across supported formats
HEADER_SIZE = 12

# Anything shorter cannot carry even the JPEG signature
MIN_SIGNATURE_SIZE = 3

JPEG_MAGIC = b"\xff\xd8\xff"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
WEBP_RIFF_MAGIC = b"RIFF"
WEBP_FORM_TYPE = b"WEBP"


class ImageFormat(str, Enum):
    """Image formats recognised by signature."""

    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    UNKNOWN = "unknown"

    @property
    def mime_type(self) -> str | None:
        """Canonical MIME type, None for UNKNOWN."""
        return _MIME_TYPES.get(self)

    @property
    def label(self) -> str:
        return _LABELS[self]


_MIME_TYPES = {
    ImageFormat.JPEG: "image/jpeg",
    ImageFormat.PNG: "image/png",
    ImageFormat.WEBP: "image/webp",
}

_LABELS = {
    ImageFormat.JPEG: "JPEG",
    ImageFormat.PNG: "PNG",
    ImageFormat.WEBP: "WebP",
    ImageFormat.UNKNOWN: "unknown",
}


def classify(data: bytes | None) -> ImageFormat:
    """
    Classify a byte buffer by its leading signature.

    Only the first HEADER_SIZE bytes are inspected. Buffers shorter than
    three bytes are UNKNOWN without any comparison.

    Args:
        data: Raw file content (or at least its header)

    Returns:
        ImageFormat: Detected format, UNKNOWN if nothing matches
    """
    if not data or len(data) < MIN_SIGNATURE_SIZE:
        return ImageFormat.UNKNOWN

    header = bytes(data[:HEADER_SIZE])

    if header.startswith(JPEG_MAGIC):
        return ImageFormat.JPEG

    if header.startswith(PNG_MAGIC):
        return ImageFormat.PNG

    if (
        len(header) >= HEADER_SIZE
        and header.startswith(WEBP_RIFF_MAGIC)
        and header[8:12] == WEBP_FORM_TYPE
    ):
        return ImageFormat.WEBP

    return ImageFormat.UNKNOWN


def classify_stream(stream: BinaryIO) -> ImageFormat:
    """
    Classify a seekable binary stream without moving its position.

    Reads at most HEADER_SIZE bytes from the current position and seeks
    back to where the stream was before returning.

    Args:
        stream: Seekable binary file object

    Returns:
        ImageFormat: Detected format

    Raises:
        ContentReadError: If the stream cannot be read or repositioned
    """
    try:
        position = stream.tell()
        header = stream.read(HEADER_SIZE)
        stream.seek(position)
    except OSError as e:
        logger.error(f"Failed to read file header: {e}")
        raise ContentReadError(f"Failed to read file content: {e}") from e

    return classify(header)
