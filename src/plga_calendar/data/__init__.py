"""Data access layer."""

from __future__ import annotations

from .repositories import ActivityRepository, JsonActivityRepository, SupabaseActivityRepository
from .store import ActivityStore
from .supabase import SupabaseGateway, SupabaseNotConfiguredError
from .uploads import LocalUploadService, UploadedFile, UploadService

__all__ = [
    "ActivityRepository",
    "ActivityStore",
    "JsonActivityRepository",
    "LocalUploadService",
    "SupabaseActivityRepository",
    "SupabaseGateway",
    "SupabaseNotConfiguredError",
    "UploadService",
    "UploadedFile",
]
