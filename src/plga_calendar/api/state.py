from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..services import ActivityService, ServiceContext


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    activities: ActivityService = field(init=False)

    def __post_init__(self) -> None:
        self.activities = ActivityService(self.context)


_api_state: Optional[ApiState] = None


def get_api_state() -> ApiState:
    """Return the process-wide state, building it from settings on first use."""

    global _api_state
    if _api_state is None:
        _api_state = ApiState()
    return _api_state


def use_api_state(state: Optional[ApiState]) -> None:
    global _api_state
    _api_state = state
