from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ...domain import Activity, DateWindow, NewActivity, sort_activities, utc_now, utc_timestamp
from ..store import ActivityStore


@dataclass(slots=True)
class JsonActivityRepository:
    store: ActivityStore
    clock: Callable[[], datetime] = utc_now

    def insert(self, activity: NewActivity) -> Activity:
        def _append(state: Dict[str, Any]) -> Activity:
            saved = Activity.from_new(
                activity,
                activity_id=self.store.consume_id(state, "activity"),
                created_at=utc_timestamp(self.clock()),
            )
            state.setdefault("activities", []).append(saved.to_record())
            return saved

        return self.store.mutate(_append)

    def find_overlapping(self, window: Optional[DateWindow]) -> List[Activity]:
        def _select(state: Dict[str, Any]) -> List[Activity]:
            records = state.get("activities", [])
            if window is not None:
                records = [
                    record
                    for record in records
                    if window.overlaps(record["start_date"], record["end_date"])
                ]
            return [Activity.from_record(record) for record in records]

        return sort_activities(self.store.read(_select))

    def delete_by_id(self, activity_id: str) -> bool:
        def _remove(state: Dict[str, Any]) -> bool:
            items = state.setdefault("activities", [])
            for idx, item in enumerate(items):
                if item["id"] == activity_id:
                    del items[idx]
                    return True
            return False

        exists = self.store.read(
            lambda state: any(item["id"] == activity_id for item in state.get("activities", []))
        )
        if not exists:
            return False
        return self.store.mutate(_remove)
