class UploadError(Exception):
    """Base exception for upload handling."""


class EmptyUploadError(UploadError):
    """Raised when an upload carries no bytes."""


class UploadTooLargeError(UploadError):
    """Raised when an upload exceeds the configured size limit."""
