"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    AppSettings,
    AuthSettings,
    ServerSettings,
    StorageSettings,
    SupabaseSettings,
    UploadSettings,
    get_settings,
    load_settings,
)

__all__ = [
    "AppSettings",
    "AuthSettings",
    "ServerSettings",
    "StorageSettings",
    "SupabaseSettings",
    "UploadSettings",
    "get_settings",
    "load_settings",
]
