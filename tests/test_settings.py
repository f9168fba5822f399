from pathlib import Path

from plga_calendar.config import load_settings
from plga_calendar.data import JsonActivityRepository, SupabaseActivityRepository
from plga_calendar.services import build_repository


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("PLGA_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PLGA_STAFF_USERNAME", "coordinator")
    monkeypatch.setenv("PLGA_STAFF_PASSWORD", "hunter2")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("PLGA_CORS_ORIGINS", "http://localhost:5173, http://127.0.0.1:5173")
    monkeypatch.delenv("PLGA_UPLOAD_DIR", raising=False)

    settings = load_settings()

    assert settings.auth.username == "coordinator"
    assert settings.auth.password == "hunter2"
    assert settings.server.port == 8080
    assert settings.server.cors_origins == ("http://localhost:5173", "http://127.0.0.1:5173")
    assert settings.storage.state_file == tmp_path / "activities.json"
    assert settings.uploads.upload_dir == tmp_path / "uploads"


def test_defaults(monkeypatch, tmp_path):
    for name in (
        "PLGA_STAFF_USERNAME",
        "PLGA_STAFF_PASSWORD",
        "PORT",
        "PLGA_STORAGE_BACKEND",
        "PLGA_CORS_ORIGINS",
        "PLGA_PUBLIC_DIR",
        "PLGA_UPLOAD_URL_PREFIX",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PLGA_DATA_DIR", str(tmp_path))

    settings = load_settings()

    assert (settings.auth.username, settings.auth.password) == ("staff", "staff")
    assert settings.server.port == 3000
    assert settings.server.cors_origins == ("*",)
    assert settings.storage.backend == "json"
    assert settings.uploads.url_prefix == "/uploads"
    assert settings.server.public_dir == Path("public")


def test_invalid_port_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    assert load_settings().server.port == 3000


def test_backend_selection(monkeypatch, tmp_path):
    monkeypatch.setenv("PLGA_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PLGA_STORAGE_BACKEND", "json")
    assert isinstance(build_repository(load_settings()), JsonActivityRepository)

    monkeypatch.setenv("PLGA_STORAGE_BACKEND", "Supabase")
    assert isinstance(build_repository(load_settings()), SupabaseActivityRepository)
