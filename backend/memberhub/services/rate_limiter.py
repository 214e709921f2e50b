"""
Rate Limiter Service

In-memory per-member upload throttling with a sliding window.
"""

import logging
import time
from collections import deque
from typing import Callable

from fastapi import Depends, HTTPException, status

from memberhub.config import settings
from memberhub.models import UserRecord
from .providers import get_current_user

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Sliding-window limiter keyed by member id.

    Each member owns a deque of monotonic timestamps. Members whose window
    empties are dropped, so only members active within the last window are
    held in memory.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize rate limiter.

        Args:
            max_requests: Maximum number of requests allowed in time window
            window_seconds: Time window in seconds
            clock: Monotonic time source in seconds
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self.buckets: dict[str, deque] = {}

    def _prune(self, now: float) -> None:
        cutoff = now - self.window_seconds
        for key in list(self.buckets):
            bucket = self.buckets[key]
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()
            if not bucket:
                del self.buckets[key]

    def check_rate_limit(self, key: str) -> None:
        """
        Record a request for key, or reject it if the window is full.

        Args:
            key: Member id

        Raises:
            HTTPException: 429 if rate limit exceeded
        """
        now = self.clock()
        self._prune(now)

        bucket = self.buckets.get(key)
        if bucket is not None and len(bucket) >= self.max_requests:
            retry_after = max(1, int(bucket[0] + self.window_seconds - now))
            logger.warning(
                f"Rate limit exceeded for user {key}: {len(bucket)} uploads in window"
            )
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=(
                    f"Rate limit exceeded. Max {self.max_requests} uploads "
                    f"per {self.window_seconds} seconds."
                ),
                headers={"Retry-After": str(retry_after)},
            )

        self.buckets.setdefault(key, deque()).append(now)
        logger.debug(
            f"Rate limit check passed: user {key} has "
            f"{len(self.buckets[key])} uploads in window"
        )

    def reset(self) -> None:
        """Forget all recorded requests."""
        self.buckets.clear()


# Global rate limiter instance for profile picture uploads
upload_rate_limiter = RateLimiter(
    max_requests=settings.RATE_LIMIT_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW,
)


async def check_upload_rate_limit(user: UserRecord = Depends(get_current_user)) -> UserRecord:
    """
    FastAPI dependency enforcing the upload limit for the calling member.

    Returns:
        UserRecord: The authenticated caller

    Raises:
        HTTPException: 401 if the caller is unknown, 429 if rate limit exceeded
    """
    upload_rate_limiter.check_rate_limit(user.id)
    return user
