"""
Unit Tests for BookingLedger

Tests booking storage, ownership, soft delete and the newest-first listings.
"""

import json
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from memberhub.middleware import BookingNotFoundError, InvalidDateRangeError
from memberhub.services import BookingLedger

START = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def ledger(tmp_path):
    return BookingLedger(base_path=str(tmp_path))


@pytest.fixture
def member_id():
    return str(uuid.uuid4())


def on_day(ledger, day, user_id=None, **fields):
    """Create a booking dated START + day days."""
    return ledger.create_booking(user_id=user_id, created_at=START + timedelta(days=day), **fields)


def test_create_booking_writes_json_document(ledger, member_id):
    booking = ledger.create_booking(
        user_id=member_id,
        expected_purpose="Membership fee 2026",
        expected_amount=Decimal("60.00"),
        code="MF-2026-0042",
    )

    path = ledger.bookings_path / f"{booking.id}.json"
    document = json.loads(path.read_text())
    assert document["userId"] == member_id
    assert document["expectedPurpose"] == "Membership fee 2026"
    assert Decimal(document["expectedAmount"]) == Decimal("60.00")
    assert document["code"] == "MF-2026-0042"
    assert document["deletedAt"] is None


def test_booking_without_owner_is_a_system_booking(ledger):
    booking = ledger.create_booking(actual_purpose="UNMATCHED TRANSFER")
    assert booking.userId is None


def test_get_booking(ledger):
    booking = ledger.create_booking(note="first")

    assert ledger.get_booking(booking.id) == booking
    assert ledger.get_booking(str(uuid.uuid4())) is None
    assert ledger.get_booking("not-a-uuid") is None


def test_soft_deleted_booking_is_hidden_but_kept(ledger, member_id):
    booking = on_day(ledger, 0, member_id)

    deleted = ledger.soft_delete_booking(booking.id)

    assert deleted.deletedAt is not None
    assert ledger.get_booking(booking.id) is None
    assert (ledger.bookings_path / f"{booking.id}.json").is_file()
    assert ledger.bookings_for_user(member_id)["totalElements"] == 0
    with pytest.raises(BookingNotFoundError):
        ledger.soft_delete_booking(booking.id)


def test_bookings_for_user_newest_first(ledger, member_id):
    old = on_day(ledger, 1, member_id)
    new = on_day(ledger, 3, member_id)
    middle = on_day(ledger, 2, member_id)
    on_day(ledger, 4, str(uuid.uuid4()))
    on_day(ledger, 5)

    result = ledger.bookings_for_user(member_id)

    assert [b.id for b in result["content"]] == [new.id, middle.id, old.id]
    assert result["totalElements"] == 3


def test_bookings_for_user_paginates(ledger, member_id):
    ids = [on_day(ledger, day, member_id).id for day in range(5)]

    result = ledger.bookings_for_user(member_id, page=1, size=2)

    assert [b.id for b in result["content"]] == [ids[2], ids[1]]
    assert result["totalPages"] == 3
    assert result["first"] is False
    assert result["last"] is False


def test_system_bookings_only_lists_unowned(ledger, member_id):
    on_day(ledger, 0, member_id)
    older = on_day(ledger, 1)
    newer = on_day(ledger, 2)

    result = ledger.system_bookings()

    assert [b.id for b in result["content"]] == [newer.id, older.id]


def test_assign_booking_moves_between_buckets(ledger, member_id):
    booking = on_day(ledger, 0)

    assigned = ledger.assign_booking(booking.id, member_id)

    assert assigned.userId == member_id
    assert ledger.system_bookings()["totalElements"] == 0
    assert ledger.bookings_for_user(member_id)["totalElements"] == 1

    ledger.assign_booking(booking.id, None)
    assert ledger.system_bookings()["totalElements"] == 1


def test_assign_unknown_booking(ledger, member_id):
    with pytest.raises(BookingNotFoundError):
        ledger.assign_booking(str(uuid.uuid4()), member_id)


def test_bookings_between_is_inclusive(ledger):
    on_day(ledger, 0)
    first = on_day(ledger, 1)
    last = on_day(ledger, 3)
    on_day(ledger, 4)

    result = ledger.bookings_between(START + timedelta(days=1), START + timedelta(days=3))

    assert [b.id for b in result["content"]] == [last.id, first.id]


def test_bookings_between_open_bounds(ledger):
    early = on_day(ledger, 0)
    late = on_day(ledger, 10)

    assert [b.id for b in ledger.bookings_between(end=START)["content"]] == [early.id]
    assert [b.id for b in ledger.bookings_between(start=START + timedelta(days=5))["content"]] == [late.id]
    assert ledger.bookings_between()["totalElements"] == 2


def test_bookings_between_treats_naive_bounds_as_utc(ledger):
    booking = on_day(ledger, 1)

    result = ledger.bookings_between(datetime(2026, 1, 2), datetime(2026, 1, 2))

    assert [b.id for b in result["content"]] == [booking.id]


def test_bookings_between_rejects_reversed_range(ledger):
    with pytest.raises(InvalidDateRangeError):
        ledger.bookings_between(START + timedelta(days=1), START)


def test_paging_is_validated(ledger, member_id):
    with pytest.raises(ValueError):
        ledger.system_bookings(page=-1)
    with pytest.raises(ValueError):
        ledger.bookings_for_user(member_id, size=0)


def test_corrupted_record_is_skipped(ledger):
    booking = on_day(ledger, 0)
    (ledger.bookings_path / f"{uuid.uuid4()}.json").write_text("{not json")

    result = ledger.system_bookings()

    assert [b.id for b in result["content"]] == [booking.id]


def test_empty_ledger(ledger):
    result = ledger.system_bookings()
    assert result["content"] == []
    assert result["totalPages"] == 0
    assert result["first"] is True
    assert result["last"] is True
