from __future__ import annotations


class PlgaCalendarError(Exception):
    """Base class for errors raised by the activity core."""


class ValidationError(PlgaCalendarError):
    """Raised when a request is missing a required field or is malformed."""


class StorageError(PlgaCalendarError):
    """Raised when the repository or the upload store fails."""


class NotFoundError(PlgaCalendarError):
    """Raised when an activity does not exist and the caller must know."""


__all__ = ["NotFoundError", "PlgaCalendarError", "StorageError", "ValidationError"]
