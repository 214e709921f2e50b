"""
Users API Routes

Create, look up, search and soft-delete members.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from memberhub.middleware import AvatarStorageError, UserNotFoundError
from memberhub.models import ErrorResponse, UserCreateRequest, UserPage, UserRecord, UserResponse
from memberhub.services import (
    AvatarStore,
    UserDirectory,
    get_avatar_store,
    get_user_directory,
    resolve_avatar_url,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(user: UserRecord) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        avatarPath=user.avatarPath,
        profilePictureUrl=resolve_avatar_url(user),
        createdAt=user.createdAt,
        updatedAt=user.updatedAt,
    )


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Member",
    responses={409: {"description": "Email already in use", "model": ErrorResponse}},
)
async def create_user(
    request: UserCreateRequest,
    directory: UserDirectory = Depends(get_user_directory),
) -> UserResponse:
    user = directory.create_user(request.name, request.email)
    return _to_response(user)


@router.get(
    "/users",
    response_model=UserPage,
    summary="Search Members",
    description="Case-insensitive substring search over name and email, sorted by name.",
)
async def search_users(
    search: str | None = Query(default=None, max_length=100),
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, gt=0, le=100),
    directory: UserDirectory = Depends(get_user_directory),
) -> UserPage:
    result = directory.search_users(search, page=page, size=size)
    return UserPage(
        **{**result, "content": [_to_response(u) for u in result["content"]]}
    )


@router.get(
    "/users/{userId}",
    response_model=UserResponse,
    summary="Get Member",
    responses={404: {"description": "User not found", "model": ErrorResponse}},
)
async def get_user(
    userId: UUID,
    directory: UserDirectory = Depends(get_user_directory),
) -> UserResponse:
    user = directory.get_user(userId)
    if user is None:
        raise UserNotFoundError(str(userId))
    return _to_response(user)


@router.delete(
    "/users/{userId}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Member",
    description=(
        "Soft-deletes the member and removes their profile picture. A picture "
        "that cannot be removed now is left for the storage sweeper."
    ),
    responses={404: {"description": "User not found", "model": ErrorResponse}},
)
async def delete_user(
    userId: UUID,
    directory: UserDirectory = Depends(get_user_directory),
    store: AvatarStore = Depends(get_avatar_store),
) -> None:
    user = directory.soft_delete_user(userId)
    try:
        store.delete(user.id)
    except AvatarStorageError as e:
        # The sweeper removes pictures of deleted members on its next run
        logger.warning(f"Member {user.id} deleted but picture removal failed: {e.message}")
    logger.info(f"Deleted member {user.id}")
