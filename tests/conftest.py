"""
tests.conftest

Shared fixtures: a fixed clock and a baseline authenticator.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from authgate.auth.models import Authenticator, LoginInfo

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def authenticator() -> Authenticator:
    return Authenticator(
        id="test-id",
        login_info=LoginInfo("credentials", "alice@example.com"),
        touched_at=NOW - timedelta(minutes=5),
        expires_at=NOW + timedelta(hours=1),
    )
