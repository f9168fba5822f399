from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

DEFAULT_CATEGORY = "Other"
DEFAULT_PHASE = "Unspecified"
DEFAULT_STATUS = "Planned"


@dataclass(frozen=True, slots=True)
class StoredFile:
    """Result of handing one raw upload to the upload service."""

    stored_name: str
    original_name: str
    mime_type: str
    size_bytes: int
    url: str


@dataclass(frozen=True, slots=True)
class Attachment:
    stored_name: str
    original_name: str
    mime_type: str
    size_bytes: int
    url: str
    uploaded_at: str

    @classmethod
    def from_stored_file(cls, stored: StoredFile, *, uploaded_at: str) -> "Attachment":
        return cls(
            stored_name=stored.stored_name,
            original_name=stored.original_name,
            mime_type=stored.mime_type,
            size_bytes=stored.size_bytes,
            url=stored.url,
            uploaded_at=uploaded_at,
        )

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Attachment":
        return cls(
            stored_name=str(record["stored_name"]),
            original_name=str(record.get("original_name") or record["stored_name"]),
            mime_type=record.get("mime_type") or "application/octet-stream",
            size_bytes=int(record.get("size_bytes") or 0),
            url=str(record.get("url") or ""),
            uploaded_at=str(record.get("uploaded_at") or ""),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "stored_name": self.stored_name,
            "original_name": self.original_name,
            "mime_type": self.mime_type,
            "size_bytes": self.size_bytes,
            "url": self.url,
            "uploaded_at": self.uploaded_at,
        }


@dataclass(slots=True)
class NewActivity:
    """A normalized activity that has not been assigned an id yet."""

    start_date: str
    end_date: str
    title: str
    is_full_day: bool = False
    start_time: str = ""
    end_time: str = ""
    category: str = DEFAULT_CATEGORY
    phase: str = DEFAULT_PHASE
    status: str = DEFAULT_STATUS
    notes: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    def to_record(self) -> Dict[str, Any]:
        return {
            "start_date": self.start_date,
            "end_date": self.end_date,
            "is_full_day": self.is_full_day,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "title": self.title,
            "category": self.category,
            "phase": self.phase,
            "status": self.status,
            "notes": self.notes,
            "attachments": [attachment.to_record() for attachment in self.attachments],
        }


@dataclass(frozen=True, slots=True)
class Activity:
    id: str
    start_date: str
    end_date: str
    title: str
    created_at: str
    is_full_day: bool = False
    start_time: str = ""
    end_time: str = ""
    category: str = DEFAULT_CATEGORY
    phase: str = DEFAULT_PHASE
    status: str = DEFAULT_STATUS
    notes: str = ""
    attachments: Tuple[Attachment, ...] = ()

    @classmethod
    def from_new(cls, activity: NewActivity, *, activity_id: str, created_at: str) -> "Activity":
        return cls(
            id=activity_id,
            start_date=activity.start_date,
            end_date=activity.end_date,
            title=activity.title,
            created_at=created_at,
            is_full_day=activity.is_full_day,
            start_time=activity.start_time,
            end_time=activity.end_time,
            category=activity.category,
            phase=activity.phase,
            status=activity.status,
            notes=activity.notes,
            attachments=tuple(activity.attachments),
        )

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Activity":
        return cls(
            id=str(record["id"]),
            start_date=str(record["start_date"]),
            end_date=str(record.get("end_date") or record["start_date"]),
            title=str(record["title"]),
            created_at=str(record.get("created_at") or ""),
            is_full_day=bool(record.get("is_full_day", False)),
            start_time=record.get("start_time") or "",
            end_time=record.get("end_time") or "",
            category=record.get("category") or DEFAULT_CATEGORY,
            phase=record.get("phase") or DEFAULT_PHASE,
            status=record.get("status") or DEFAULT_STATUS,
            notes=record.get("notes") or "",
            attachments=tuple(Attachment.from_record(item) for item in record.get("attachments") or []),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "is_full_day": self.is_full_day,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "title": self.title,
            "category": self.category,
            "phase": self.phase,
            "status": self.status,
            "notes": self.notes,
            "attachments": [attachment.to_record() for attachment in self.attachments],
            "created_at": self.created_at,
        }
