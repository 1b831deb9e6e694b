"""
authgate.auth.models

Auth domain models.

Responsibilities:
- Identify the principal (`LoginInfo`) and the session (`Authenticator`).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any


@dataclass(frozen=True, slots=True)
class LoginInfo:
    """
    Identity-provider qualified principal reference, e.g. ("credentials", "alice@example.com").
    """

    provider_id: str
    provider_key: str


@dataclass(frozen=True, slots=True)
class Authenticator:
    """
    Server-issued artifact binding a request to a principal's session.

    Validators only read it; `touch` returns a new instance. `touched_at` and
    `expires_at` must be timezone-aware.
    """

    id: str
    login_info: LoginInfo
    touched_at: datetime | None = None
    expires_at: datetime | None = None
    fingerprint: str | None = None
    tags: frozenset[str] = frozenset()
    payload: Mapping[str, Any] = field(default_factory=dict, hash=False, compare=True)

    def __post_init__(self) -> None:
        # Validators compare against an aware UTC clock; naive datetimes cannot be ordered with it.
        for name in ("touched_at", "expires_at"):
            value = getattr(self, name)
            if value is not None and value.utcoffset() is None:
                raise ValueError(f"Authenticator.{name} must be timezone-aware")

    def expires_in(self, now: datetime) -> timedelta | None:
        if self.expires_at is None:
            return None
        return self.expires_at - now

    def is_expired(self, now: datetime) -> bool:
        remaining = self.expires_in(now)
        return remaining is not None and remaining <= timedelta(0)

    def idle_for(self, now: datetime) -> timedelta | None:
        if self.touched_at is None:
            return None
        return now - self.touched_at

    def touch(self, now: datetime) -> Authenticator:
        return replace(self, touched_at=now)


# --- Module Notes -----------------------------------------------------------
# Creation, persistence and transport of authenticators belong to the caller;
# `authgate.auth.jwt` is one such transport.
