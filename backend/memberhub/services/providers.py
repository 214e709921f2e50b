"""
Storage providers and request dependencies.

Returns the AvatarStore, UserDirectory and BookingLedger rooted at settings.STORAGE_PATH,
and resolves the calling member for upload requests.
"""

import logging

from fastapi import Depends, Header, HTTPException, status

from memberhub.config import settings
from memberhub.models import UserRecord
from .avatar_store import AvatarStore
from .booking_ledger import BookingLedger
from .user_directory import UserDirectory

logger = logging.getLogger(__name__)

# Singleton instances
_avatar_store: AvatarStore | None = None
_user_directory: UserDirectory | None = None
_booking_ledger: BookingLedger | None = None


def get_avatar_store() -> AvatarStore:
    """Get the configured AvatarStore instance."""
    global _avatar_store

    if _avatar_store is None:
        _avatar_store = AvatarStore(base_path=settings.STORAGE_PATH)
        logger.info(f"Initialized AvatarStore at {settings.STORAGE_PATH}")

    return _avatar_store


def get_user_directory() -> UserDirectory:
    """Get the configured UserDirectory instance."""
    global _user_directory

    if _user_directory is None:
        _user_directory = UserDirectory(base_path=settings.STORAGE_PATH)
        logger.info(f"Initialized UserDirectory at {settings.STORAGE_PATH}")

    return _user_directory


def get_booking_ledger() -> BookingLedger:
    """Get the configured BookingLedger instance."""
    global _booking_ledger

    if _booking_ledger is None:
        _booking_ledger = BookingLedger(base_path=settings.STORAGE_PATH)
        logger.info(f"Initialized BookingLedger at {settings.STORAGE_PATH}")

    return _booking_ledger


def reset_providers() -> None:
    """
    Reset the provider singletons (for testing purposes).

    The next call re-reads settings.STORAGE_PATH.
    """
    global _avatar_store, _user_directory, _booking_ledger
    _avatar_store = None
    _user_directory = None
    _booking_ledger = None
    logger.info("Storage providers reset")


async def get_current_user(
    x_user_id: str | None = Header(default=None),
    directory: UserDirectory = Depends(get_user_directory),
) -> UserRecord:
    """
    FastAPI dependency resolving the calling member from the X-User-Id header.

    Stands in for the session layer, which lives outside this service.

    Raises:
        HTTPException: 401 if the header is missing or names no live user
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )

    user = directory.get_user(x_user_id)
    if user is None:
        logger.warning(f"Request from unknown user {x_user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )

    return user
