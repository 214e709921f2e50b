"""
Atomic file replacement.

Content is written to a temp file in the destination directory, flushed to
disk, and renamed over the destination. Readers see either the old file or
the new one, never a partial write.
"""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


def write_atomically(path: Path, content: bytes, mode: int = 0o644) -> None:
    """
    Replace path with content in a single rename.

    Args:
        path: Destination file
        content: Bytes to write
        mode: Permissions applied to the new file (default 644)

    Raises:
        OSError: If the write or rename fails; the temp file is removed
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=TEMP_SUFFIX
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(temp_name, mode)
        os.replace(temp_name, path)
    except OSError:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise


def is_temp_file(path: Path) -> bool:
    """True for leftovers of write_atomically."""
    return path.name.startswith(".") and path.name.endswith(TEMP_SUFFIX)
