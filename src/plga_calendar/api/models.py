from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..domain import Activity, Attachment


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class AttachmentPayload(_WireModel):
    stored_name: str
    original_name: str
    mime_type: str
    size_bytes: int
    url: str
    uploaded_at: str

    @classmethod
    def from_domain(cls, attachment: Attachment) -> "AttachmentPayload":
        return cls(
            stored_name=attachment.stored_name,
            original_name=attachment.original_name,
            mime_type=attachment.mime_type,
            size_bytes=attachment.size_bytes,
            url=attachment.url,
            uploaded_at=attachment.uploaded_at,
        )


class ActivityPayload(_WireModel):
    id: str
    start_date: str
    end_date: str
    is_full_day: bool
    start_time: str = Field(default="")
    end_time: str = Field(default="")
    title: str
    category: str
    phase: str
    status: str
    notes: str = Field(default="")
    attachments: List[AttachmentPayload] = Field(default_factory=list)
    created_at: str

    @classmethod
    def from_domain(cls, activity: Activity) -> "ActivityPayload":
        return cls(
            id=activity.id,
            start_date=activity.start_date,
            end_date=activity.end_date,
            is_full_day=activity.is_full_day,
            start_time=activity.start_time,
            end_time=activity.end_time,
            title=activity.title,
            category=activity.category,
            phase=activity.phase,
            status=activity.status,
            notes=activity.notes,
            attachments=[AttachmentPayload.from_domain(item) for item in activity.attachments],
            created_at=activity.created_at,
        )


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class StatusMessage(BaseModel):
    success: bool
    message: Optional[str] = None
