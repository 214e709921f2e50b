"""
Profile Picture API Routes

Upload, serve and delete member profile pictures.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse, Response

from image_guard import validate_upload
from memberhub.config import settings
from memberhub.middleware import AvatarNotFoundError, UserNotFoundError, read_upload
from memberhub.models import ErrorResponse, MessageResponse, UploadResponse, UserRecord
from memberhub.services import (
    AvatarStore,
    UserDirectory,
    get_avatar_store,
    get_current_user,
    get_user_directory,
    resolve_avatar_url,
)
from memberhub.services.rate_limiter import check_upload_rate_limit

logger = logging.getLogger(__name__)

router = APIRouter()

FALLBACK_CONTENT_TYPE = "application/octet-stream"


@router.post(
    "/profile-picture",
    response_model=UploadResponse,
    summary="Upload Profile Picture",
    description="""
Upload a profile picture for the calling member, replacing any previous one.

**Constraints:**
- **Max File Size:** 5MB (inclusive)
- **Declared Types:** image/jpeg, image/jpg, image/png, image/webp
- **Content:** must carry a JPEG, PNG or WebP signature regardless of the declared type

The caller is identified by the `X-User-Id` header.
""",
    responses={
        200: {"description": "Upload successful"},
        400: {"description": "File rejected", "model": ErrorResponse},
        401: {"description": "Caller unknown"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Storage or read failure", "model": ErrorResponse},
    },
)
async def upload_profile_picture(
    file: UploadFile = File(...),
    user: UserRecord = Depends(check_upload_rate_limit),
    store: AvatarStore = Depends(get_avatar_store),
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Validate and store a profile picture.

    Returns:
        UploadResponse on success, 400 JSON {"error": reason} on rejection

    Raises:
        UploadReadError: If the upload stream cannot be read (500)
        AvatarStorageError: If the picture cannot be written (500)
    """
    logger.info(f"Profile picture upload started for user {user.id}: {file.filename}")

    uploaded = await read_upload(file, settings.MAX_UPLOAD_SIZE)
    verdict = validate_upload(
        uploaded,
        max_bytes=settings.MAX_UPLOAD_SIZE,
        allowed_mime_types=settings.ALLOWED_IMAGE_TYPES,
    )

    if not verdict.is_valid:
        logger.warning(f"File validation failed for user {user.id}: {verdict.reason}")
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=verdict.reason).model_dump(),
        )

    stored = store.store(user.id, uploaded.data)
    updated_user = directory.set_avatar_path(user.id, stored.path)

    logger.info(f"Profile picture upload completed for user {user.id}")

    return UploadResponse(
        message="Profile picture uploaded successfully",
        userId=stored.user_id,
        imageFormat=verdict.image_format.value,
        size=stored.size,
        url=resolve_avatar_url(updated_user),
    )


@router.get(
    "/profile-picture/{userId}",
    summary="Get Profile Picture",
    description="""
Serve a member's profile picture.

The `t` query parameter is ignored; clients append it to defeat HTTP caches
after the picture changes.
""",
    responses={
        200: {"description": "Image bytes", "content": {"image/png": {}, "image/jpeg": {}, "image/webp": {}}},
        404: {"description": "User or picture not found", "model": ErrorResponse},
    },
)
async def get_profile_picture(
    userId: UUID,
    store: AvatarStore = Depends(get_avatar_store),
    directory: UserDirectory = Depends(get_user_directory),
) -> Response:
    """
    Return the stored image with its sniffed content type.

    A record pointing at a picture that no longer exists is cleared.

    Raises:
        UserNotFoundError: If the user does not exist (404)
        AvatarNotFoundError: If the user has no picture (404)
    """
    user_id = str(userId)
    user = directory.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    if not user.avatarPath:
        raise AvatarNotFoundError(user_id)

    loaded = store.load(user_id)
    if loaded is None:
        logger.warning(f"Stale avatar path for user {user_id}, clearing it")
        directory.set_avatar_path(user_id, None)
        raise AvatarNotFoundError(user_id)

    avatar, content = loaded
    return Response(
        content=content,
        media_type=avatar.image_format.mime_type or FALLBACK_CONTENT_TYPE,
        headers={"Cache-Control": f"max-age={settings.PROFILE_PICTURE_CACHE_SECONDS}"},
    )


@router.delete(
    "/profile-picture",
    response_model=MessageResponse,
    summary="Delete Profile Picture",
    responses={
        401: {"description": "Caller unknown"},
        404: {"description": "No picture to delete", "model": ErrorResponse},
    },
)
async def delete_profile_picture(
    user: UserRecord = Depends(get_current_user),
    store: AvatarStore = Depends(get_avatar_store),
    directory: UserDirectory = Depends(get_user_directory),
) -> MessageResponse:
    """Remove the calling member's picture."""
    removed = store.delete(user.id)
    if not removed and not user.avatarPath:
        raise AvatarNotFoundError(user.id)

    directory.set_avatar_path(user.id, None)
    return MessageResponse(message="Profile picture deleted successfully")
