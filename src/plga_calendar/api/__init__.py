"""Public API surface for the HTTP server and the CLI."""

from __future__ import annotations

from .registry import ApiFunction, call_api, get_api_functions, register_api
from .serializers import serialize_activities, serialize_activity
from .state import ApiState, get_api_state, use_api_state

# Import modules so decorators run at import time.
from . import activities, meta  # noqa: F401

__all__ = [
    "ApiFunction",
    "ApiState",
    "call_api",
    "get_api_functions",
    "get_api_state",
    "register_api",
    "serialize_activities",
    "serialize_activity",
    "use_api_state",
]
