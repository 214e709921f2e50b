"""
Unit Tests for Rate Limiter Service

Tests per-member sliding windows and pruning of idle members.
"""

import pytest
from fastapi import HTTPException

from memberhub.services.rate_limiter import RateLimiter


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimiter(max_requests=2, window_seconds=60, clock=clock)


def test_allows_requests_up_to_limit(limiter):
    limiter.check_rate_limit("member-a")
    limiter.check_rate_limit("member-a")

    with pytest.raises(HTTPException) as exc_info:
        limiter.check_rate_limit("member-a")

    assert exc_info.value.status_code == 429
    assert "Max 2 uploads per 60 seconds" in exc_info.value.detail
    assert exc_info.value.headers["Retry-After"] == "60"


def test_limits_are_per_member(limiter):
    limiter.check_rate_limit("member-a")
    limiter.check_rate_limit("member-a")

    limiter.check_rate_limit("member-b")

    assert len(limiter.buckets["member-a"]) == 2
    assert len(limiter.buckets["member-b"]) == 1


def test_window_slides(limiter, clock):
    limiter.check_rate_limit("member-a")
    clock.now += 30
    limiter.check_rate_limit("member-a")

    clock.now += 31
    limiter.check_rate_limit("member-a")

    assert list(limiter.buckets["member-a"]) == [1030.0, 1061.0]


def test_rejected_request_is_not_recorded(limiter, clock):
    limiter.check_rate_limit("member-a")
    limiter.check_rate_limit("member-a")
    with pytest.raises(HTTPException):
        limiter.check_rate_limit("member-a")

    clock.now += 61
    limiter.check_rate_limit("member-a")

    assert len(limiter.buckets["member-a"]) == 1


def test_idle_members_are_pruned(limiter, clock):
    limiter.check_rate_limit("member-a")
    limiter.check_rate_limit("member-b")

    clock.now += 61
    limiter.check_rate_limit("member-c")

    assert set(limiter.buckets) == {"member-c"}


def test_reset(limiter):
    limiter.check_rate_limit("member-a")
    limiter.reset()
    assert limiter.buckets == {}
