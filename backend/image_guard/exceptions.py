"""Custom exceptions for image content validation."""


class ImageGuardError(Exception):
    """Base exception for image validation errors."""

    pass


class ContentReadError(ImageGuardError):
    """Error reading file content for signature inspection."""

    pass
