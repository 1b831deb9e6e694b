"""
authgate.auth.results

Outcome types produced by validators.

Responsibilities:
- Enumerate the reasons an authenticator can be rejected.
- Represent "valid" or "invalid with every collected error" as one immutable value.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    EXPIRED = "EXPIRED"
    IDLE_TIMEOUT = "IDLE_TIMEOUT"
    FINGERPRINT_MISMATCH = "FINGERPRINT_MISMATCH"
    NOT_IN_BACKING_STORE = "NOT_IN_BACKING_STORE"


@dataclass(frozen=True, slots=True)
class ValidationError:
    """
    Why one validator rejected an authenticator. This is a value, never raised.
    """

    code: ErrorCode
    message: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    errors: tuple[ValidationError, ...] = ()

    @classmethod
    def valid(cls) -> ValidationResult:
        return cls()

    @classmethod
    def invalid(cls, error: ValidationError, *more: ValidationError) -> ValidationResult:
        return cls((error, *more))

    @classmethod
    def combine(cls, results: Iterable[ValidationResult]) -> ValidationResult:
        """
        Valid iff every result is valid; otherwise all errors, in result order.
        """

        return cls(tuple(e for r in results for e in r.errors))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> list[ErrorCode]:
        return [e.code for e in self.errors]

    def __bool__(self) -> bool:
        return self.is_valid
