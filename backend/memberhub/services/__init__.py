"""Service layer for storage, lookup and business logic."""

from .avatar_resolver import resolve_avatar_url
from .avatar_store import AvatarStore, StoredAvatar
from .booking_ledger import BookingLedger
from .providers import (
    get_avatar_store,
    get_booking_ledger,
    get_current_user,
    get_user_directory,
    reset_providers,
)
from .user_directory import UserDirectory

__all__ = [
    "resolve_avatar_url",
    "AvatarStore",
    "StoredAvatar",
    "BookingLedger",
    "UserDirectory",
    "get_avatar_store",
    "get_booking_ledger",
    "get_user_directory",
    "get_current_user",
    "reset_providers",
]
