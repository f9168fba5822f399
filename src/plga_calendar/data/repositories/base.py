from __future__ import annotations

from typing import List, Optional, Protocol

from ...domain import Activity, DateWindow, NewActivity


class ActivityRepository(Protocol):
    """Persistent keyed store of activity records."""

    def insert(self, activity: NewActivity) -> Activity:
        """Persist ``activity`` and return it with ``id`` and ``created_at`` assigned."""
        ...

    def find_overlapping(self, window: Optional[DateWindow]) -> List[Activity]:
        """Return activities intersecting ``window`` (all of them for ``None``), sorted."""
        ...

    def delete_by_id(self, activity_id: str) -> bool:
        """Remove the record; ``False`` when nothing matched."""
        ...
