"""
authgate.auth.engine

Validator composition engine.

Responsibilities:
- Fan out every validator concurrently against one authenticator.
- Fan in: wait for all of them, then fold into a single `ValidationResult`
  carrying every error (no short-circuit on the first failure).
- Surface infrastructure failures and timeouts as `ValidationUnavailableError`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from authgate.auth.models import Authenticator
from authgate.auth.results import ValidationResult
from authgate.auth.validators import Validator
from authgate.errors import ValidationUnavailableError
from authgate.observability.logging import get_logger

log = get_logger(__name__)


async def validate(
    authenticator: Authenticator,
    validators: Iterable[Validator],
    *,
    timeout: float | None = None,
) -> ValidationResult:
    """
    Run all `validators` and combine their outcomes.

    The result is valid iff every validator reported valid; otherwise it holds the
    errors of every failing validator, in validator order. Cancelling the caller (or
    hitting `timeout`) cancels all outstanding validators.
    """

    validators = list(validators)
    if not validators:
        return ValidationResult.valid()

    try:
        async with asyncio.timeout(timeout):
            outcomes = await asyncio.gather(
                *(v.is_valid(authenticator) for v in validators),
                return_exceptions=True,
            )
    except TimeoutError as e:
        log.warning(
            "validation_unavailable",
            authenticator_id=authenticator.id,
            reason="timeout",
            timeout=timeout,
        )
        raise ValidationUnavailableError(
            "Authenticator validation timed out",
            causes=[e],
            details={"authenticator_id": authenticator.id, "timeout": timeout},
        ) from e

    results: list[ValidationResult] = []
    failures: list[BaseException] = []
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            failures.append(outcome)
        else:
            results.append(outcome)

    if failures:
        # A bug in a validator is not an infrastructure outage; let it propagate.
        for failure in failures:
            if not isinstance(failure, ValidationUnavailableError):
                raise failure
        log.warning(
            "validation_unavailable",
            authenticator_id=authenticator.id,
            reason="infrastructure",
            failures=[str(f) for f in failures],
        )
        raise ValidationUnavailableError(
            "Authenticator validity could not be determined",
            causes=failures,
            details={"authenticator_id": authenticator.id},
        )

    result = ValidationResult.combine(results)
    if not result.is_valid:
        log.info(
            "validation_failed",
            authenticator_id=authenticator.id,
            codes=[c.value for c in result.codes],
        )
    return result


class CompositeValidator:
    """
    A set of validators exposed as a single `Validator`.
    """

    def __init__(self, validators: Iterable[Validator], *, timeout: float | None = None) -> None:
        self._validators = tuple(validators)
        self._timeout = timeout

    @property
    def validators(self) -> tuple[Validator, ...]:
        return self._validators

    async def is_valid(self, authenticator: Authenticator) -> ValidationResult:
        return await validate(authenticator, self._validators, timeout=self._timeout)


# --- Module Notes -----------------------------------------------------------
# `gather(return_exceptions=True)` is used instead of a TaskGroup so one failing
# validator does not cancel its siblings; every validator always settles.
