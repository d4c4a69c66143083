class AnnotationError(Exception):
    """Base exception for all annotation-related errors."""


class ProcessNotFoundError(AnnotationError):
    """Raised when a process id does not resolve to an uploaded document."""


class DraftError(AnnotationError):
    """Raised when a draft edit targets a missing or already persisted entry."""
