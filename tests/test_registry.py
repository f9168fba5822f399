from __future__ import annotations

from typing import Optional

import pytest

from plga_calendar.api import registry


@pytest.fixture(autouse=True)
def _empty_registry(monkeypatch):
    monkeypatch.setattr(registry, "REGISTRY", {})


def test_describe_reports_types_defaults_and_required_names():
    @registry.register_api("echo", description="Echo.", category="test", tags=("debug",))
    def echo(text: str, count: int = 1, label: Optional[str] = None, loud: bool = False) -> str:
        return text * count

    (function,) = registry.get_api_functions()
    described = function.describe()

    assert described["tags"] == ["debug"]
    assert described["parameters"] == {
        "type": "object",
        "properties": {
            "text": {"type": "string"},
            "count": {"type": "integer", "default": 1},
            "label": {"type": "string"},
            "loud": {"type": "boolean", "default": False},
        },
        "required": ["text"],
    }
    assert registry.call_api("echo", text="ab", count=2) == "abab"


def test_duplicate_names_are_rejected():
    registry.register_api("once", description="", category="test")(lambda: None)

    with pytest.raises(ValueError, match="already registered"):
        registry.register_api("once", description="", category="test")(lambda: None)


def test_unknown_function_raises_key_error():
    with pytest.raises(KeyError, match="not registered"):
        registry.call_api("missing")
