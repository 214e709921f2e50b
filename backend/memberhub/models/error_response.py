"""
Error response models.

Provides error response schemas shared by the upload and users endpoints.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned for rejected uploads and domain errors."""

    error: str = Field(..., description="Human-readable error message")
    details: Optional[Any] = Field(None, description="Additional error context")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "Invalid file type. Only JPEG, PNG, and WebP images are allowed",
                    "details": None,
                },
                {
                    "error": "User not found: 550e8400-e29b-41d4-a716-446655440000",
                    "details": {"user_id": "550e8400-e29b-41d4-a716-446655440000"},
                },
            ]
        }
    }


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
