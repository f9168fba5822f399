from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ..domain import Activity
from .models import ActivityPayload


def serialize_activity(activity: Activity) -> Dict[str, Any]:
    return ActivityPayload.from_domain(activity).model_dump(by_alias=True)


def serialize_activities(activities: Iterable[Activity]) -> List[Dict[str, Any]]:
    return [serialize_activity(activity) for activity in activities]
