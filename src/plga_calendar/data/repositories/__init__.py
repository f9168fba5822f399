"""Repositories persisting activity records."""

from __future__ import annotations

from .base import ActivityRepository
from .json_activities import JsonActivityRepository
from .supabase_activities import SupabaseActivityRepository

__all__ = ["ActivityRepository", "JsonActivityRepository", "SupabaseActivityRepository"]
