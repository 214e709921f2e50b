"""
Upload Reader

Turns a multipart upload into an UploadedFile without buffering more than
the configured size limit allows.
"""

import logging

from fastapi import UploadFile

from image_guard import UploadedFile
from .error_handler import UploadReadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB chunks


async def read_upload(file: UploadFile, max_bytes: int) -> UploadedFile:
    """
    Read an uploaded file in chunks and measure its size.

    At most max_bytes + 1 bytes are kept in memory: enough for the validator
    to see that the limit was exceeded. Reading stops as soon as the limit is
    passed. The file pointer is reset to the beginning afterwards.

    Args:
        file: FastAPI UploadFile object
        max_bytes: Configured upload size limit

    Returns:
        UploadedFile: Payload, declared content type and measured size

    Raises:
        UploadReadError: If the upload stream cannot be read
    """
    size = 0
    buffer = bytearray()

    try:
        while chunk := await file.read(CHUNK_SIZE):
            size += len(chunk)
            buffer.extend(chunk[: max(0, max_bytes + 1 - len(buffer))])
            if size > max_bytes:
                logger.warning(f"Upload exceeds limit: over {max_bytes} bytes, stopped reading")
                break

        await file.seek(0)
    except OSError as e:
        logger.error(f"Failed to read upload {file.filename}: {e}")
        raise UploadReadError(str(e)) from e

    logger.info(f"Read upload {file.filename}: {size} bytes, {file.content_type}")
    return UploadedFile(
        data=bytes(buffer),
        declared_content_type=file.content_type,
        declared_size=size,
    )
