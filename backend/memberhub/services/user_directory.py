"""
Member Directory Service

Stores member records as JSON documents with soft delete, lookup and
case-insensitive search.
"""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from memberhub.middleware import DuplicateEmailError, RecordStorageError, UserNotFoundError
from memberhub.models import UserRecord
from .atomic_file import write_atomically
from .paging import paginate

logger = logging.getLogger(__name__)

USER_DIRECTORY = "users"


class UserDirectory:
    """
    Manages member records on the filesystem.

    Layout: {base_path}/users/{user_id}.json

    Soft-deleted records stay on disk with deletedAt set and are hidden from
    lookups and searches.
    """

    def __init__(self, base_path: str = "/tmp/memberhub"):
        self.base_path = Path(base_path)
        self.users_path = self.base_path / USER_DIRECTORY

    def _record_file(self, user_id) -> Path:
        return self.users_path / f"{uuid.UUID(str(user_id))}.json"

    def _read(self, path: Path) -> Optional[UserRecord]:
        try:
            return UserRecord.model_validate_json(path.read_bytes())
        except FileNotFoundError:
            return None
        except ValidationError as e:
            logger.error(f"Corrupted user record {path}: {e}")
            return None
        except OSError as e:
            logger.error(f"Failed to read user record {path}: {e}")
            raise RecordStorageError(str(path), str(e)) from e

    def _write(self, record: UserRecord) -> None:
        path = self._record_file(record.id)
        try:
            write_atomically(path, record.model_dump_json(indent=2).encode("utf-8"))
        except OSError as e:
            logger.error(f"Failed to write user record {path}: {e}")
            raise RecordStorageError(str(path), str(e)) from e

    def _live_records(self) -> list[UserRecord]:
        if not self.users_path.is_dir():
            return []
        records = []
        for path in self.users_path.glob("*.json"):
            record = self._read(path)
            if record is not None and not record.is_deleted:
                records.append(record)
        return records

    def create_user(self, name: str, email: str) -> UserRecord:
        """
        Create a member record.

        Raises:
            DuplicateEmailError: If a live user already has this email
        """
        email = email.strip()
        if any(r.email.lower() == email.lower() for r in self._live_records()):
            raise DuplicateEmailError(email)

        now = datetime.now(timezone.utc)
        record = UserRecord(
            id=str(uuid.uuid4()),
            name=name.strip(),
            email=email,
            avatarPath=None,
            createdAt=now,
            updatedAt=now,
        )
        self._write(record)
        logger.info(f"Created user {record.id}")
        return record

    def get_user(self, user_id) -> Optional[UserRecord]:
        """
        Load a live member record.

        Returns:
            UserRecord, or None when the id is unknown, malformed or soft-deleted
        """
        try:
            path = self._record_file(user_id)
        except ValueError:
            return None

        record = self._read(path)
        if record is None or record.is_deleted:
            return None
        return record

    def _require_user(self, user_id) -> UserRecord:
        record = self.get_user(user_id)
        if record is None:
            raise UserNotFoundError(str(user_id))
        return record

    def set_avatar_path(self, user_id, avatar_path: Optional[str]) -> UserRecord:
        """
        Point a member record at a stored picture, or clear it with None.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        record = self._require_user(user_id)
        if record.avatarPath == avatar_path:
            return record

        updated = record.model_copy(
            update={"avatarPath": avatar_path, "updatedAt": datetime.now(timezone.utc)}
        )
        self._write(updated)
        logger.info(f"Updated avatar path for user {record.id}: {avatar_path}")
        return updated

    def soft_delete_user(self, user_id) -> UserRecord:
        """
        Mark a member record as deleted.

        Raises:
            UserNotFoundError: If the user does not exist or is already deleted
        """
        record = self._require_user(user_id)
        now = datetime.now(timezone.utc)
        deleted = record.model_copy(update={"deletedAt": now, "updatedAt": now})
        self._write(deleted)
        logger.info(f"Soft-deleted user {record.id}")
        return deleted

    def search_users(self, query: str | None = None, page: int = 0, size: int = 20) -> dict:
        """
        Search live members by name or email.

        Matching is a case-insensitive substring test on both fields; an empty
        query matches every live member. Results are sorted by name, then email.

        Args:
            query: Search term
            page: Zero-based page index
            size: Page size

        Returns:
            dict: content, page, size, totalElements, totalPages, first, last

        Raises:
            ValueError: If page is negative or size is not positive
        """
        needle = (query or "").strip().casefold()
        matches = [
            r for r in self._live_records()
            if not needle or needle in r.name.casefold() or needle in r.email.casefold()
        ]
        matches.sort(key=lambda r: (r.name.casefold(), r.email.casefold()))
        return paginate(matches, page, size)

    def list_avatar_owners(self) -> dict[str, str]:
        """Map of live user id -> avatarPath for users that have one."""
        return {r.id: r.avatarPath for r in self._live_records() if r.avatarPath}
