from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Protocol

from ..config.settings import AuthSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Credentials:
    username: str
    password: str


class AuthPolicy(Protocol):
    def verify(self, credentials: Credentials) -> bool:
        ...


@dataclass(frozen=True, slots=True)
class StaticCredentialPolicy:
    """Accepts exactly one configured username/password pair."""

    username: str
    password: str

    @classmethod
    def from_settings(cls, settings: AuthSettings) -> "StaticCredentialPolicy":
        return cls(username=settings.username, password=settings.password)

    def verify(self, credentials: Credentials) -> bool:
        user_ok = hmac.compare_digest(credentials.username.encode(), self.username.encode())
        password_ok = hmac.compare_digest(credentials.password.encode(), self.password.encode())
        if not (user_ok and password_ok):
            logger.warning("Rejected login for user %r", credentials.username)
            return False
        return True


__all__ = ["AuthPolicy", "Credentials", "StaticCredentialPolicy"]
