from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from plga_calendar.api import ApiState, use_api_state
from plga_calendar.config import (
    AppSettings,
    AuthSettings,
    ServerSettings,
    StorageSettings,
    SupabaseSettings,
    UploadSettings,
)
from plga_calendar.services import ActivityService, ServiceContext

FIXED_NOW = datetime(2025, 3, 1, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        auth=AuthSettings(username="staff", password="staff"),
        storage=StorageSettings(backend="json", data_dir=tmp_path / "data", activities_table="activities"),
        supabase=SupabaseSettings(url=None, anon_key=None),
        uploads=UploadSettings(upload_dir=tmp_path / "uploads", url_prefix="/uploads"),
        server=ServerSettings(host="127.0.0.1", port=3000, cors_origins=("*",), public_dir=tmp_path / "public"),
    )


@pytest.fixture
def context(settings: AppSettings) -> ServiceContext:
    return ServiceContext(settings=settings, clock=lambda: FIXED_NOW)


@pytest.fixture
def service(context: ServiceContext) -> ActivityService:
    return ActivityService(context)


@pytest.fixture
def api_state(context: ServiceContext) -> ApiState:
    state = ApiState(context=context)
    use_api_state(state)
    return state


@pytest.fixture(autouse=True)
def _reset_api_state():
    yield
    use_api_state(None)
