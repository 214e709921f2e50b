"""
Profile Picture Store

Persists validated profile pictures on the filesystem, one file per user.
Handles atomic replacement, lookup, loading and deletion.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from uuid import UUID

from image_guard import ContentReadError, ImageFormat, classify, classify_stream
from memberhub.middleware import AvatarStorageError
from .atomic_file import TEMP_SUFFIX, write_atomically

logger = logging.getLogger(__name__)

AVATAR_DIRECTORY = "avatars"


@dataclass(frozen=True)
class StoredAvatar:
    """A persisted profile picture."""

    user_id: str
    path: str
    image_format: ImageFormat
    size: int


def normalize_user_id(user_id) -> str:
    """
    Return the canonical UUID string for user_id.

    Raises:
        ValueError: If user_id is not a UUID (guards against path traversal)
    """
    return str(UUID(str(user_id)))


class AvatarStore:
    """
    Manages profile picture files.

    Layout: {base_path}/avatars/{user_id}

    Every user has exactly one fixed location, so a new upload rewrites the
    same path instead of adding a file next to the old one.
    """

    def __init__(self, base_path: str = "/tmp/memberhub"):
        """
        Initialize AvatarStore with base storage path.

        Args:
            base_path: Root directory for storage operations
        """
        self.base_path = Path(base_path)
        self.avatars_path = self.base_path / AVATAR_DIRECTORY

    def storage_key(self, user_id) -> str:
        """Storage key (relative path) for a user's picture."""
        return f"{AVATAR_DIRECTORY}/{normalize_user_id(user_id)}"

    def _avatar_file(self, user_id) -> Path:
        return self.avatars_path / normalize_user_id(user_id)

    def store(self, user_id, data: bytes) -> StoredAvatar:
        """
        Store validated image bytes as the user's profile picture.

        The new picture replaces the old one atomically. If the write fails,
        the previous picture stays intact and servable.

        Args:
            user_id: Owning user (UUID)
            data: Validated image bytes

        Returns:
            StoredAvatar: Description of the stored picture

        Raises:
            ValueError: If user_id is not a UUID
            AvatarStorageError: If the file cannot be written
        """
        user_key = normalize_user_id(user_id)
        file_path = self._avatar_file(user_key)

        try:
            write_atomically(file_path, data)
        except OSError as e:
            logger.error(f"Failed to store profile picture for user {user_key}: {e}")
            raise AvatarStorageError(user_key, str(e)) from e

        image_format = classify(data)
        logger.info(
            f"Stored profile picture for user {user_key}: "
            f"{len(data)} bytes, {image_format.label}"
        )
        return StoredAvatar(
            user_id=user_key,
            path=self.storage_key(user_key),
            image_format=image_format,
            size=len(data),
        )

    def resolve_path(self, user_id) -> Optional[Path]:
        """
        Locate a user's picture on disk.

        Returns:
            Path if the user has a stored picture, None otherwise
        """
        file_path = self._avatar_file(user_id)
        return file_path if file_path.is_file() else None

    def load(self, user_id) -> Optional[tuple[StoredAvatar, bytes]]:
        """
        Load a user's picture and sniff its format.

        Returns:
            (StoredAvatar, bytes) if present, None if the user has no picture

        Raises:
            AvatarStorageError: If the file exists but cannot be read
        """
        user_key = normalize_user_id(user_id)
        file_path = self.resolve_path(user_key)
        if file_path is None:
            return None

        try:
            with open(file_path, "rb") as f:
                image_format = classify_stream(f)
                content = f.read()
        except FileNotFoundError:
            # Deleted between lookup and open
            return None
        except (OSError, ContentReadError) as e:
            logger.error(f"Failed to read profile picture for user {user_key}: {e}")
            raise AvatarStorageError(user_key, str(e)) from e

        avatar = StoredAvatar(
            user_id=user_key,
            path=self.storage_key(user_key),
            image_format=image_format,
            size=len(content),
        )
        return avatar, content

    def delete(self, user_id) -> bool:
        """
        Delete a user's picture.

        Returns:
            bool: True if a file was removed, False if there was none

        Raises:
            AvatarStorageError: If the file exists but cannot be removed
        """
        user_key = normalize_user_id(user_id)
        file_path = self._avatar_file(user_key)

        try:
            file_path.unlink()
        except FileNotFoundError:
            logger.debug(f"No profile picture to delete for user {user_key}")
            return False
        except OSError as e:
            logger.error(f"Failed to delete profile picture for user {user_key}: {e}")
            raise AvatarStorageError(user_key, str(e)) from e

        logger.info(f"Deleted profile picture for user {user_key}")
        return True

    def delete_if_stale(self, user_id, cutoff: float) -> bool:
        """
        Delete a user's picture only if it was last written before cutoff.

        The file is first moved to a private temp name and its age is checked
        there, so a picture written by a concurrent upload is never removed.
        A moved file that turns out to be fresh is linked back unless a newer
        upload already took its place.

        Args:
            user_id: Owning user (UUID)
            cutoff: Epoch seconds; only files modified before it are removed

        Returns:
            bool: True if a stale file was removed

        Raises:
            AvatarStorageError: If the file cannot be moved or removed
        """
        user_key = normalize_user_id(user_id)
        file_path = self._avatar_file(user_key)
        held = file_path.with_name(f".{user_key}.sweep{TEMP_SUFFIX}")

        try:
            os.rename(file_path, held)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Failed to move profile picture for user {user_key}: {e}")
            raise AvatarStorageError(user_key, str(e)) from e

        try:
            if held.stat().st_mtime >= cutoff:
                try:
                    os.link(held, file_path)
                except FileExistsError:
                    logger.debug(f"Newer picture for user {user_key} already in place")
                held.unlink()
                return False
            held.unlink()
        except OSError as e:
            logger.error(f"Failed to delete profile picture for user {user_key}: {e}")
            raise AvatarStorageError(user_key, str(e)) from e

        logger.info(f"Deleted stale profile picture for user {user_key}")
        return True

    def list_user_ids(self) -> list[str]:
        """User ids that currently have a stored picture."""
        if not self.avatars_path.is_dir():
            return []
        user_ids = []
        for entry in self.avatars_path.iterdir():
            try:
                user_key = normalize_user_id(entry.name)
            except ValueError:
                continue
            if user_key == entry.name and entry.is_file():
                user_ids.append(user_key)
        return user_ids
