from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from ...domain import Activity, DateWindow, NewActivity, StorageError, sort_activities
from ...domain.timestamps import utc_now, utc_timestamp
from ..supabase import SupabaseGateway

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SupabaseActivityRepository:
    gateway: SupabaseGateway
    table_name: str
    clock: Callable[[], datetime] = utc_now

    def insert(self, activity: NewActivity) -> Activity:
        payload: Dict[str, Any] = activity.to_record()
        payload["id"] = str(uuid4())
        payload["created_at"] = utc_timestamp(self.clock())
        try:
            response = self.gateway.table(self.table_name).insert(payload).execute()
        except StorageError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise StorageError(f"Supabase insert into {self.table_name} failed: {exc}") from exc
        rows = response.data or [payload]
        return Activity.from_record(rows[0])

    def find_overlapping(self, window: Optional[DateWindow]) -> List[Activity]:
        try:
            query = self.gateway.table(self.table_name).select("*")
            if window is not None:
                query = query.lte("start_date", window.end).gte("end_date", window.start)
            response = (
                query.order("start_date", desc=False)
                .order("start_time", desc=False)
                .order("created_at", desc=False)
                .execute()
            )
        except StorageError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise StorageError(f"Supabase query on {self.table_name} failed: {exc}") from exc
        records = response.data or []
        # Postgres may collate "" differently from Python; the final order is ours.
        return sort_activities(Activity.from_record(record) for record in records)

    def delete_by_id(self, activity_id: str) -> bool:
        try:
            response = self.gateway.table(self.table_name).delete().eq("id", activity_id).execute()
        except StorageError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise StorageError(f"Supabase delete on {self.table_name} failed: {exc}") from exc
        deleted = response.data or []
        if not deleted:
            logger.debug("Supabase delete matched no row for %s", activity_id)
        return bool(deleted)
