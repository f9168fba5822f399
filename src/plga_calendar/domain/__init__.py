"""Domain models for scheduled activities."""

from __future__ import annotations

from .errors import NotFoundError, PlgaCalendarError, StorageError, ValidationError
from .intervals import DateWindow, activity_sort_key, normalize_range, parse_day, sort_activities
from .models import (
    DEFAULT_CATEGORY,
    DEFAULT_PHASE,
    DEFAULT_STATUS,
    Activity,
    Attachment,
    NewActivity,
    StoredFile,
)
from .timestamps import utc_now, utc_timestamp

__all__ = [
    "Activity",
    "Attachment",
    "DEFAULT_CATEGORY",
    "DEFAULT_PHASE",
    "DEFAULT_STATUS",
    "DateWindow",
    "NewActivity",
    "NotFoundError",
    "PlgaCalendarError",
    "StorageError",
    "StoredFile",
    "ValidationError",
    "activity_sort_key",
    "normalize_range",
    "parse_day",
    "sort_activities",
    "utc_now",
    "utc_timestamp",
]
