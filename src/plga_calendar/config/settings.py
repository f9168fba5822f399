from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "PLGA Calendar"
APP_AUTHOR = "PLGA"


@dataclass(frozen=True)
class AuthSettings:
    username: str
    password: str


@dataclass(frozen=True)
class StorageSettings:
    backend: str
    data_dir: Path
    activities_table: str

    @property
    def state_file(self) -> Path:
        return self.data_dir / "activities.json"


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing


@dataclass(frozen=True)
class UploadSettings:
    upload_dir: Path
    url_prefix: str


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    cors_origins: Tuple[str, ...]
    public_dir: Path


@dataclass(frozen=True)
class AppSettings:
    auth: AuthSettings
    storage: StorageSettings
    supabase: SupabaseSettings
    uploads: UploadSettings
    server: ServerSettings


def _origins_from_env(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "*")
    origins = tuple(item.strip() for item in raw.split(",") if item.strip())
    return origins or ("*",)


def _port_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_settings() -> AppSettings:
    data_dir = Path(os.getenv("PLGA_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR))

    auth = AuthSettings(
        username=os.getenv("PLGA_STAFF_USERNAME", "staff"),
        password=os.getenv("PLGA_STAFF_PASSWORD", "staff"),
    )

    storage = StorageSettings(
        backend=os.getenv("PLGA_STORAGE_BACKEND", "json").strip().lower(),
        data_dir=data_dir,
        activities_table=os.getenv("SUPABASE_ACTIVITIES_TABLE", "activities"),
    )

    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
    )

    uploads = UploadSettings(
        upload_dir=Path(os.getenv("PLGA_UPLOAD_DIR") or data_dir / "uploads"),
        url_prefix=os.getenv("PLGA_UPLOAD_URL_PREFIX", "/uploads").rstrip("/") or "/uploads",
    )

    server = ServerSettings(
        host=os.getenv("HOST", "127.0.0.1"),
        port=_port_from_env("PORT", 3000),
        cors_origins=_origins_from_env("PLGA_CORS_ORIGINS"),
        public_dir=Path(os.getenv("PLGA_PUBLIC_DIR", "public")),
    )

    return AppSettings(auth=auth, storage=storage, supabase=supabase, uploads=uploads, server=server)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return load_settings()
