"""Application services orchestrating data access and domain logic."""

from __future__ import annotations

from .activities import DELETE_IS_IDEMPOTENT, ActivityService
from .auth import AuthPolicy, Credentials, StaticCredentialPolicy
from .context import ServiceContext, build_repository
from .ingestion import normalize_activity, parse_flag

__all__ = [
    "ActivityService",
    "AuthPolicy",
    "Credentials",
    "DELETE_IS_IDEMPOTENT",
    "ServiceContext",
    "StaticCredentialPolicy",
    "build_repository",
    "normalize_activity",
    "parse_flag",
]
