"""
Booking Ledger Service

Stores membership payment bookings as JSON documents. Bookings are listed
newest first per owning member, for the unmatched system bucket, or by
creation date range.
"""

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from memberhub.middleware import BookingNotFoundError, InvalidDateRangeError, RecordStorageError
from memberhub.models import BookingRecord
from .atomic_file import write_atomically
from .paging import paginate

logger = logging.getLogger(__name__)

BOOKING_DIRECTORY = "bookings"


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with stored timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class BookingLedger:
    """
    Manages booking records on the filesystem.

    Layout: {base_path}/bookings/{booking_id}.json

    A booking with userId None is a system booking. Soft-deleted bookings
    stay on disk with deletedAt set and are hidden from every read.
    """

    def __init__(self, base_path: str = "/tmp/memberhub"):
        self.base_path = Path(base_path)
        self.bookings_path = self.base_path / BOOKING_DIRECTORY

    def _record_file(self, booking_id) -> Path:
        return self.bookings_path / f"{uuid.UUID(str(booking_id))}.json"

    def _read(self, path: Path) -> Optional[BookingRecord]:
        try:
            return BookingRecord.model_validate_json(path.read_bytes())
        except FileNotFoundError:
            return None
        except ValidationError as e:
            logger.error(f"Corrupted booking record {path}: {e}")
            return None
        except OSError as e:
            logger.error(f"Failed to read booking record {path}: {e}")
            raise RecordStorageError(str(path), str(e)) from e

    def _write(self, record: BookingRecord) -> None:
        path = self._record_file(record.id)
        try:
            write_atomically(path, record.model_dump_json(indent=2).encode("utf-8"))
        except OSError as e:
            logger.error(f"Failed to write booking record {path}: {e}")
            raise RecordStorageError(str(path), str(e)) from e

    def _page(self, matches: Callable[[BookingRecord], bool], page: int, size: int) -> dict:
        records = []
        if self.bookings_path.is_dir():
            for path in self.bookings_path.glob("*.json"):
                record = self._read(path)
                if record is not None and not record.is_deleted and matches(record):
                    records.append(record)
        records.sort(key=lambda r: (r.createdAt, r.id), reverse=True)
        return paginate(records, page, size)

    def create_booking(
        self,
        user_id: Optional[str] = None,
        expected_purpose: Optional[str] = None,
        expected_amount: Optional[Decimal] = None,
        received_at: Optional[datetime] = None,
        actual_purpose: Optional[str] = None,
        actual_amount: Optional[Decimal] = None,
        note: Optional[str] = None,
        code: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> BookingRecord:
        """
        Record a booking.

        Args:
            user_id: Owning member, None for a system booking
            created_at: Booking date for imported statement lines (default: now)

        Returns:
            BookingRecord: The stored booking
        """
        now = datetime.now(timezone.utc)
        record = BookingRecord(
            id=str(uuid.uuid4()),
            userId=str(uuid.UUID(str(user_id))) if user_id else None,
            expectedPurpose=expected_purpose,
            expectedAmount=expected_amount,
            receivedAt=received_at,
            actualPurpose=actual_purpose,
            actualAmount=actual_amount,
            note=note,
            code=code,
            createdAt=as_utc(created_at) if created_at else now,
            updatedAt=now,
        )
        self._write(record)
        logger.info(f"Created booking {record.id} for {record.userId or 'system'}")
        return record

    def get_booking(self, booking_id) -> Optional[BookingRecord]:
        """
        Load a live booking.

        Returns:
            BookingRecord, or None when the id is unknown, malformed or soft-deleted
        """
        try:
            path = self._record_file(booking_id)
        except ValueError:
            return None

        record = self._read(path)
        if record is None or record.is_deleted:
            return None
        return record

    def _require_booking(self, booking_id) -> BookingRecord:
        record = self.get_booking(booking_id)
        if record is None:
            raise BookingNotFoundError(str(booking_id))
        return record

    def assign_booking(self, booking_id, user_id: Optional[str]) -> BookingRecord:
        """
        Move a booking to a member, or back to the system bucket with None.

        Raises:
            BookingNotFoundError: If the booking does not exist
        """
        record = self._require_booking(booking_id)
        owner = str(uuid.UUID(str(user_id))) if user_id else None
        updated = record.model_copy(
            update={"userId": owner, "updatedAt": datetime.now(timezone.utc)}
        )
        self._write(updated)
        logger.info(f"Assigned booking {record.id} to {owner or 'system'}")
        return updated

    def soft_delete_booking(self, booking_id) -> BookingRecord:
        """
        Mark a booking as deleted.

        Raises:
            BookingNotFoundError: If the booking does not exist or is already deleted
        """
        record = self._require_booking(booking_id)
        now = datetime.now(timezone.utc)
        deleted = record.model_copy(update={"deletedAt": now, "updatedAt": now})
        self._write(deleted)
        logger.info(f"Soft-deleted booking {record.id}")
        return deleted

    def bookings_for_user(self, user_id, page: int = 0, size: int = 20) -> dict:
        """Live bookings owned by a member, newest first."""
        owner = str(uuid.UUID(str(user_id)))
        return self._page(lambda r: r.userId == owner, page, size)

    def system_bookings(self, page: int = 0, size: int = 20) -> dict:
        """Live bookings not yet matched to a member, newest first."""
        return self._page(lambda r: r.userId is None, page, size)

    def bookings_between(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        page: int = 0,
        size: int = 20,
    ) -> dict:
        """
        Live bookings created within [start, end], newest first.

        Either bound may be omitted to leave that side open.

        Raises:
            InvalidDateRangeError: If start is after end
            ValueError: If page is negative or size is not positive
        """
        start = as_utc(start) if start else None
        end = as_utc(end) if end else None
        if start and end and start > end:
            raise InvalidDateRangeError(start, end)

        def within(record: BookingRecord) -> bool:
            if start and record.createdAt < start:
                return False
            if end and record.createdAt > end:
                return False
            return True

        return self._page(within, page, size)
