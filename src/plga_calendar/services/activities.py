from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..data import ActivityRepository, UploadedFile, UploadService
from ..domain import (
    Activity,
    DateWindow,
    NotFoundError,
    StorageError,
    StoredFile,
    ValidationError,
    sort_activities,
)
from .context import ServiceContext
from .ingestion import normalize_activity

logger = logging.getLogger(__name__)

# Deleting an id that is not stored succeeds without touching the store.
DELETE_IS_IDEMPOTENT = True


@dataclass(slots=True)
class ActivityService:
    context: ServiceContext

    @property
    def repository(self) -> ActivityRepository:
        assert self.context.repository is not None
        return self.context.repository

    @property
    def uploads(self) -> UploadService:
        assert self.context.uploads is not None
        return self.context.uploads

    def store_uploads(self, files: Iterable[UploadedFile]) -> List[StoredFile]:
        """Hand each raw file to the upload service, preserving order.

        Files stay stored even if the activity insert later fails.
        """

        return [self.uploads.store(upload) for upload in files]

    def create_activity(self, raw: Mapping[str, Any], files: Sequence[StoredFile] = ()) -> Activity:
        activity = normalize_activity(raw, files, now=self.context.clock())
        try:
            saved = self.repository.insert(activity)
        except StorageError:
            logger.exception("Failed to store activity %r (%d attachments)", activity.title, len(files))
            raise
        logger.info(
            "Created activity %s %r (%s..%s, %d attachments)",
            saved.id,
            saved.title,
            saved.start_date,
            saved.end_date,
            len(saved.attachments),
        )
        return saved

    def query_by_day(self, day: Optional[str]) -> List[Activity]:
        if day is None or not str(day).strip():
            raise ValidationError("date is required")
        window = DateWindow.for_day(str(day).strip())
        return sort_activities(self.repository.find_overlapping(window))

    def query_by_month(self, month: Optional[str] = None) -> List[Activity]:
        window = None
        if month is not None and str(month).strip():
            window = DateWindow.for_month(str(month).strip())
        return sort_activities(self.repository.find_overlapping(window))

    def delete_activity(self, activity_id: str) -> bool:
        if not activity_id or not str(activity_id).strip():
            raise ValidationError("activity id is required")
        removed = self.repository.delete_by_id(str(activity_id).strip())
        if removed:
            # Attachment files are intentionally left on disk.
            logger.info("Deleted activity %s", activity_id)
        elif DELETE_IS_IDEMPOTENT:
            logger.debug("Delete of unknown activity %s treated as success", activity_id)
        else:
            raise NotFoundError(f"Activity {activity_id} not found")
        return removed


__all__ = ["ActivityService", "DELETE_IS_IDEMPOTENT"]
