from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """Fixed-width ISO-8601 UTC timestamp, e.g. ``2025-03-10T09:15:00.000000Z``.

    The width is constant so timestamps order correctly as plain strings.
    """

    value = moment or utc_now()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
