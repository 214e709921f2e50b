"""
Upload Response Pydantic Model

Defines the response structure for successful profile picture uploads.
"""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """
    Response model for successful profile picture upload.

    Returned by POST /api/upload/profile-picture after validation and storage.
    """

    message: str = Field(
        ...,
        description="Success message confirming upload completion"
    )
    userId: str = Field(
        ...,
        description="Owner of the uploaded picture"
    )
    imageFormat: str = Field(
        ...,
        description="Format detected from the file content (jpeg, png, webp)"
    )
    size: int = Field(
        ...,
        description="File size in bytes"
    )
    url: str = Field(
        ...,
        description="Cache-busting URL of the new picture"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "message": "Profile picture uploaded successfully",
                "userId": "550e8400-e29b-41d4-a716-446655440000",
                "imageFormat": "png",
                "size": 48213,
                "url": "/api/upload/profile-picture/550e8400-e29b-41d4-a716-446655440000?t=1767225600000"
            }
        }
    }
