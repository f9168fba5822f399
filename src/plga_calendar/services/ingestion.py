from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..domain import (
    DEFAULT_CATEGORY,
    DEFAULT_PHASE,
    DEFAULT_STATUS,
    Attachment,
    NewActivity,
    StoredFile,
    ValidationError,
    normalize_range,
    parse_day,
    utc_timestamp,
)

TRUTHY_FLAGS = frozenset({"true", "on", "1", "yes"})

# Wire names are camelCase; snake_case is accepted for Python callers.
_FIELD_ALIASES = {
    "start_date": ("startDate", "start_date"),
    "end_date": ("endDate", "end_date"),
    "is_full_day": ("isFullDay", "is_full_day"),
    "start_time": ("startTime", "start_time"),
    "end_time": ("endTime", "end_time"),
    "title": ("title",),
    "category": ("category",),
    "phase": ("phase",),
    "status": ("status",),
    "notes": ("notes",),
}


def parse_flag(value: Any) -> bool:
    """Resolve checkbox-style encodings (``True``, ``"true"``, ``"on"``...) to a bool."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_FLAGS
    return False


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_ALIASES[field]:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _text(raw: Mapping[str, Any], field: str, default: str = "") -> str:
    value = _lookup(raw, field)
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def normalize_activity(
    raw: Mapping[str, Any],
    files: Sequence[StoredFile] = (),
    *,
    now: Optional[datetime] = None,
) -> NewActivity:
    """Validate a creation request and return the normalized activity.

    Raises ``ValidationError`` when ``startDate`` or ``title`` is missing or
    blank, or when a supplied date is not a real ``YYYY-MM-DD`` date. Inverted
    ranges are clamped and full-day activities lose their times.
    """

    start_date = _text(raw, "start_date")
    title = _text(raw, "title")
    if not start_date or not title:
        raise ValidationError("startDate and title are required")
    parse_day(start_date, field_name="startDate")

    end_date = _text(raw, "end_date") or None
    if end_date is not None:
        parse_day(end_date, field_name="endDate")
    start_date, end_date = normalize_range(start_date, end_date)

    is_full_day = parse_flag(_lookup(raw, "is_full_day"))
    if is_full_day:
        start_time = end_time = ""
    else:
        start_time = _text(raw, "start_time")
        end_time = _text(raw, "end_time")

    uploaded_at = utc_timestamp(now)
    attachments = [Attachment.from_stored_file(item, uploaded_at=uploaded_at) for item in files]

    return NewActivity(
        start_date=start_date,
        end_date=end_date,
        title=title,
        is_full_day=is_full_day,
        start_time=start_time,
        end_time=end_time,
        category=_text(raw, "category", DEFAULT_CATEGORY),
        phase=_text(raw, "phase", DEFAULT_PHASE),
        status=_text(raw, "status", DEFAULT_STATUS),
        notes=_text(raw, "notes"),
        attachments=attachments,
    )


__all__ = ["TRUTHY_FLAGS", "normalize_activity", "parse_flag"]
