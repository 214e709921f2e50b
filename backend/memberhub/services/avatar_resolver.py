"""
Profile Picture Resolver

Builds the public, cache-busting URL for a user's profile picture.
"""

import time
from typing import Callable, Optional

from memberhub.config import settings


def current_epoch_millis() -> int:
    return int(time.time() * 1000)


def resolve_avatar_url(
    user,
    base_path: str | None = None,
    now_millis: Callable[[], int] = current_epoch_millis,
) -> Optional[str]:
    """
    Return the profile picture URL for a user record, or None.

    A URL is only exposed when the record carries both an avatar path and an
    id; a partially initialized record counts as having no picture. The ``t``
    query parameter is recomputed on every call so that browsers fetch the
    new image after an overwrite.

    Args:
        user: Record with ``id`` and ``avatarPath`` attributes (may be None)
        base_path: URL prefix, defaults to settings.PROFILE_PICTURE_BASE_PATH
        now_millis: Clock returning epoch milliseconds

    Returns:
        str | None: e.g. "/api/upload/profile-picture/<id>?t=1718000000000"
    """
    if user is None:
        return None

    user_id = getattr(user, "id", None)
    avatar_path = getattr(user, "avatarPath", None)
    if not avatar_path or not user_id:
        return None

    prefix = settings.PROFILE_PICTURE_BASE_PATH if base_path is None else base_path
    return f"{prefix}{user_id}?t={now_millis()}"
