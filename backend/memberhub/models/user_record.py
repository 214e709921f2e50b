"""
User record models.

UserRecord is the persisted JSON document; UserCreateRequest is the body of
POST /api/users.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRecord(BaseModel):
    """Persisted member record. deletedAt marks a soft-deleted record."""

    id: str = Field(..., description="UUID identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address, unique among live users")
    avatarPath: Optional[str] = Field(None, description="Storage key of the profile picture")
    createdAt: datetime
    updatedAt: datetime
    deletedAt: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deletedAt is not None


class UserCreateRequest(BaseModel):
    """Request body for creating a member."""

    name: str = Field(
        ...,
        min_length=2,
        max_length=100,
        description="Display name (2-100 characters)",
    )
    email: str = Field(
        ...,
        max_length=255,
        pattern=EMAIL_PATTERN,
        description="Email address",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@example.org",
            }
        }
    }
