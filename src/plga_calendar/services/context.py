from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ..config import AppSettings, get_settings
from ..data import (
    ActivityRepository,
    ActivityStore,
    JsonActivityRepository,
    LocalUploadService,
    SupabaseActivityRepository,
    SupabaseGateway,
    UploadService,
)
from ..domain import utc_now
from .auth import AuthPolicy, StaticCredentialPolicy


def build_repository(settings: AppSettings, clock: Callable[[], datetime] = utc_now) -> ActivityRepository:
    backend = settings.storage.backend
    if backend == "json":
        return JsonActivityRepository(store=ActivityStore(settings.storage.state_file), clock=clock)
    if backend == "supabase":
        return SupabaseActivityRepository(
            gateway=SupabaseGateway(settings.supabase),
            table_name=settings.storage.activities_table,
            clock=clock,
        )
    raise ValueError(f"Unknown storage backend: {backend!r}")


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings and collaborators."""

    settings: AppSettings = field(default_factory=get_settings)
    repository: Optional[ActivityRepository] = None
    uploads: Optional[UploadService] = None
    auth: Optional[AuthPolicy] = None
    clock: Callable[[], datetime] = utc_now

    def __post_init__(self) -> None:
        if self.repository is None:
            self.repository = build_repository(self.settings, self.clock)
        if self.uploads is None:
            self.uploads = LocalUploadService(
                upload_dir=self.settings.uploads.upload_dir,
                url_prefix=self.settings.uploads.url_prefix,
            )
        if self.auth is None:
            self.auth = StaticCredentialPolicy.from_settings(self.settings.auth)
