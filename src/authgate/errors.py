"""
authgate.errors

Exception hierarchy shared by every layer of the package.

Responsibilities:
- Give callers one base type (`AuthgateError`) to catch.
- Keep "authenticator is invalid" (a `ValidationResult`, never raised) apart from
  "validity could not be determined" (`ValidationUnavailableError`).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class AuthgateError(Exception):
    """Base exception for all authgate errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class PipelineError(AuthgateError):
    """A native request/response could not be turned into a pipeline."""


class AuthenticatorDecodeError(AuthgateError):
    """An encoded authenticator (e.g. a JWT) could not be decoded."""


class ValidationUnavailableError(AuthgateError):
    """
    Validity of an authenticator could not be determined.

    Raised for infrastructure failures (timeouts, store outages). `causes` holds every
    underlying failure collected during one validation run.
    """

    def __init__(
        self,
        message: str,
        *,
        causes: Sequence[BaseException] = (),
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.causes: tuple[BaseException, ...] = tuple(causes)


class BackingStoreError(ValidationUnavailableError):
    """The backing-store predicate failed instead of answering true/false."""


# --- Module Notes -----------------------------------------------------------
# The FastAPI dependency maps ValidationUnavailableError to 503 and an invalid
# ValidationResult to 401; keep the two channels separate in new validators too.
