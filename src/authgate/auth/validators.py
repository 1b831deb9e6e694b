"""
authgate.auth.validators

Independent checks deciding whether an authenticator is still acceptable.

Responsibilities:
- Define the `Validator` protocol (one async operation).
- Provide the standard validators: backing store, expiration, idle timeout
  (sliding window) and fingerprint.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable

from authgate.auth.models import Authenticator
from authgate.auth.results import ErrorCode, ValidationError, ValidationResult
from authgate.errors import BackingStoreError

Clock = Callable[[], datetime]
BackingStorePredicate = Callable[[Authenticator], Awaitable[bool]]


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


@runtime_checkable
class Validator(Protocol):
    """
    New validator kinds implement this protocol; no base class is required.

    Implementations must not mutate the authenticator and must not depend on other
    validators, since the engine runs them concurrently.
    """

    async def is_valid(self, authenticator: Authenticator) -> ValidationResult: ...


class BackingStoreValidator:
    """
    Asks an injected predicate whether the authenticator still exists in the store.

    The predicate owns all I/O. A predicate that raises is reported as
    `BackingStoreError`, not as an invalid authenticator.
    """

    error = ValidationError(
        ErrorCode.NOT_IN_BACKING_STORE,
        "Authenticator doesn't exist in backing store or was revoked",
    )

    def __init__(self, predicate: BackingStorePredicate) -> None:
        self._predicate = predicate

    async def is_valid(self, authenticator: Authenticator) -> ValidationResult:
        try:
            found = await self._predicate(authenticator)
        except Exception as e:
            raise BackingStoreError(
                "Backing store lookup failed",
                causes=[e],
                details={"authenticator_id": authenticator.id},
            ) from e
        return ValidationResult.valid() if found else ValidationResult.invalid(self.error)


class ExpirationValidator:
    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock

    async def is_valid(self, authenticator: Authenticator) -> ValidationResult:
        remaining = authenticator.expires_in(self._clock())
        if remaining is None or remaining > timedelta(0):
            return ValidationResult.valid()
        ago = -remaining
        return ValidationResult.invalid(
            ValidationError(ErrorCode.EXPIRED, f"Authenticator expired {ago} ago")
        )


class SlidingWindowValidator:
    """
    Rejects authenticators that were not touched within `idle_timeout`.

    Authenticators without `touched_at` are not subject to the window.
    """

    def __init__(self, idle_timeout: timedelta, clock: Clock = utc_now) -> None:
        if idle_timeout <= timedelta(0):
            raise ValueError("idle_timeout must be positive")
        self._idle_timeout = idle_timeout
        self._clock = clock

    async def is_valid(self, authenticator: Authenticator) -> ValidationResult:
        idle = authenticator.idle_for(self._clock())
        if idle is None or idle < self._idle_timeout:
            return ValidationResult.valid()
        return ValidationResult.invalid(
            ValidationError(
                ErrorCode.IDLE_TIMEOUT,
                f"Authenticator idle for {idle}, timeout is {self._idle_timeout}",
            )
        )


class FingerprintValidator:
    """
    Compares the fingerprint stored on the authenticator with the current request's.

    Authenticators issued without a fingerprint pass.
    """

    error = ValidationError(
        ErrorCode.FINGERPRINT_MISMATCH,
        "Fingerprint does not match the client that was issued the authenticator",
    )

    def __init__(self, fingerprint: str) -> None:
        self._fingerprint = fingerprint

    async def is_valid(self, authenticator: Authenticator) -> ValidationResult:
        if authenticator.fingerprint is None or authenticator.fingerprint == self._fingerprint:
            return ValidationResult.valid()
        return ValidationResult.invalid(self.error)


# --- Module Notes -----------------------------------------------------------
# `BackingStoreValidator` catches `Exception`, not `BaseException`, so task
# cancellation still propagates to the engine.
