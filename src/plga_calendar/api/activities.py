from __future__ import annotations

from typing import Any, Dict, List, Optional

from .registry import register_api
from .serializers import serialize_activities, serialize_activity
from .state import get_api_state


@register_api(
    "activities_for_day",
    description="Return activities whose date range covers a specific day (YYYY-MM-DD).",
    category="activities",
    tags=("activities", "day"),
)
def activities_for_day(date: str) -> Dict[str, Any]:
    activities = get_api_state().activities.query_by_day(date)
    return {"date": date, "activities": serialize_activities(activities)}


@register_api(
    "activities_for_month",
    description="Return activities overlapping a month (YYYY-MM), or every activity when no month is given.",
    category="activities",
    tags=("activities", "month"),
)
def activities_for_month(month: Optional[str] = None) -> Dict[str, Any]:
    activities = get_api_state().activities.query_by_month(month)
    return {"month": month, "activities": serialize_activities(activities)}


@register_api(
    "activity_create",
    description="Create an activity without attachments.",
    category="activities",
    tags=("activities", "create"),
)
def activity_create(
    startDate: str,
    title: str,
    endDate: Optional[str] = None,
    isFullDay: bool = False,
    startTime: str = "",
    endTime: str = "",
    category: Optional[str] = None,
    phase: Optional[str] = None,
    status: Optional[str] = None,
    notes: str = "",
) -> Dict[str, Any]:
    raw = {
        "startDate": startDate,
        "endDate": endDate,
        "isFullDay": isFullDay,
        "title": title,
        "startTime": startTime,
        "endTime": endTime,
        "category": category,
        "phase": phase,
        "status": status,
        "notes": notes,
    }
    activity = get_api_state().activities.create_activity(raw)
    return serialize_activity(activity)


@register_api(
    "activity_delete",
    description="Delete an activity by id. Unknown ids succeed without changes.",
    category="activities",
    tags=("activities", "delete"),
)
def activity_delete(activity_id: str) -> Dict[str, Any]:
    removed = get_api_state().activities.delete_activity(activity_id)
    return {"success": True, "removed": removed}
