"""
User response models.

Public representations of member records for the users API.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Member record as returned by the API."""

    id: str = Field(..., description="UUID identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    avatarPath: Optional[str] = Field(None, description="Storage key of the profile picture")
    profilePictureUrl: Optional[str] = Field(
        None,
        description="Cache-busting profile picture URL, null when the user has no picture",
    )
    createdAt: datetime
    updatedAt: datetime

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Ada Lovelace",
                "email": "ada@example.org",
                "avatarPath": "avatars/550e8400-e29b-41d4-a716-446655440000",
                "profilePictureUrl": "/api/upload/profile-picture/550e8400-e29b-41d4-a716-446655440000?t=1767225600000",
                "createdAt": "2026-01-01T00:00:00Z",
                "updatedAt": "2026-01-01T00:00:00Z",
            }
        }
    }


class UserPage(BaseModel):
    """One page of a member search."""

    content: List[UserResponse]
    page: int = Field(..., description="Zero-based page index")
    size: int = Field(..., description="Requested page size")
    totalElements: int
    totalPages: int
    first: bool
    last: bool
