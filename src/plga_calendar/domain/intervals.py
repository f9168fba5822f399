from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from .errors import ValidationError

if TYPE_CHECKING:
    from .models import Activity

# Dates stay zero-padded ISO strings so that plain string comparison orders them.
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def parse_day(value: str, *, field_name: str = "date") -> str:
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValidationError(f"{field_name} must be formatted YYYY-MM-DD")
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"{field_name} is not a valid calendar date: {value}") from exc
    return value


def normalize_range(start_date: str, end_date: Optional[str]) -> Tuple[str, str]:
    """Return a ``(start, end)`` pair where ``end >= start``.

    A missing end collapses the range to a single day and an end before the
    start is clamped to the start. Inverted ranges are repaired, never rejected.
    """

    if not end_date:
        return start_date, start_date
    if end_date < start_date:
        return start_date, start_date
    return start_date, end_date


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Closed interval ``[start, end]`` of ISO dates used for overlap queries."""

    start: str
    end: str

    @classmethod
    def for_day(cls, day: str) -> "DateWindow":
        parsed = parse_day(day)
        return cls(start=parsed, end=parsed)

    @classmethod
    def for_month(cls, month: str) -> "DateWindow":
        match = MONTH_PATTERN.match(month) if isinstance(month, str) else None
        if not match:
            raise ValidationError("month must be formatted YYYY-MM")
        year, month_number = int(match.group(1)), int(match.group(2))
        if not 1 <= month_number <= 12:
            raise ValidationError(f"month is out of range: {month}")
        last_day = calendar.monthrange(year, month_number)[1]
        return cls(start=f"{month}-01", end=f"{month}-{last_day:02d}")

    def contains(self, day: str) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, start_date: str, end_date: str) -> bool:
        return start_date <= self.end and end_date >= self.start


def activity_sort_key(activity: "Activity") -> Tuple[str, str, str]:
    # Untimed activities carry "" which sorts ahead of any HH:mm value.
    return (activity.start_date, activity.start_time, activity.created_at)


def sort_activities(activities: Iterable["Activity"]) -> List["Activity"]:
    return sorted(activities, key=activity_sort_key)


__all__ = [
    "DATE_PATTERN",
    "DateWindow",
    "MONTH_PATTERN",
    "activity_sort_key",
    "normalize_range",
    "parse_day",
    "sort_activities",
]
