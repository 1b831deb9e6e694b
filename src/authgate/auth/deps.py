"""
authgate.auth.deps

FastAPI dependency functions for authenticator validation.

Responsibilities:
- Resolve the request pipeline for the current request.
- Read a bearer authenticator and run the composition engine against it.
- Map "invalid" to 401 and "could not determine validity" to 503.
"""

from __future__ import annotations

from datetime import timedelta

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_503_SERVICE_UNAVAILABLE

from authgate.auth.engine import validate
from authgate.auth.jwt import JwtConfig, decode_authenticator
from authgate.auth.models import Authenticator
from authgate.auth.validators import (
    BackingStorePredicate,
    BackingStoreValidator,
    Clock,
    ExpirationValidator,
    FingerprintValidator,
    SlidingWindowValidator,
    Validator,
    utc_now,
)
from authgate.errors import AuthenticatorDecodeError, ValidationUnavailableError
from authgate.http.request import RequestPipeline
from authgate.integrations.starlette import request_pipeline
from authgate.observability.logging import get_logger
from authgate.settings import Settings, get_settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


def get_request_pipeline(request: Request) -> RequestPipeline[Request]:
    # Installed `RequestContextMiddleware` already built one for this request.
    pipeline = getattr(request.state, "pipeline", None)
    return pipeline if pipeline is not None else request_pipeline(request)


def build_validators(
    *,
    settings: Settings,
    pipeline: RequestPipeline[Request],
    backing_store: BackingStorePredicate | None = None,
    clock: Clock = utc_now,
) -> list[Validator]:
    validators: list[Validator] = [ExpirationValidator(clock)]
    if settings.authenticator_idle_timeout_seconds is not None:
        validators.append(
            SlidingWindowValidator(
                timedelta(seconds=settings.authenticator_idle_timeout_seconds), clock
            )
        )
    if settings.fingerprinting:
        validators.append(FingerprintValidator(pipeline.fingerprint(key=settings.fingerprint_key)))
    if backing_store is not None:
        validators.append(BackingStoreValidator(backing_store))
    return validators


def require_authenticator(
    *,
    backing_store: BackingStorePredicate | None = None,
    clock: Clock = utc_now,
):
    async def _dep(
        creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
        pipeline: RequestPipeline[Request] = Depends(get_request_pipeline),
        settings: Settings = Depends(get_settings),
    ) -> Authenticator:
        # Authn: require a bearer token.
        if creds is None or not creds.credentials:
            raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

        try:
            authenticator = decode_authenticator(cfg=jwt_config(settings), token=creds.credentials)
        except AuthenticatorDecodeError as e:
            raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

        # The pipeline supplies the fingerprint the authenticator is checked against.
        validators = build_validators(
            settings=settings, pipeline=pipeline, backing_store=backing_store, clock=clock
        )
        try:
            # All validators run; the result carries every failure, not just the first.
            result = await validate(
                authenticator, validators, timeout=settings.validation_timeout_seconds
            )
        except ValidationUnavailableError as e:
            raise HTTPException(
                status_code=HTTP_503_SERVICE_UNAVAILABLE,
                detail="Authenticator validation unavailable",
            ) from e

        if not result.is_valid:
            raise HTTPException(
                status_code=HTTP_401_UNAUTHORIZED,
                detail={
                    "message": "Invalid authenticator",
                    "errors": [{"code": e.code.value, "message": e.message} for e in result.errors],
                },
            )
        log.debug("authenticator_valid", authenticator_id=authenticator.id)
        return authenticator

    return _dep


# --- Module Notes -----------------------------------------------------------
# Routes protect themselves with `Depends(require_authenticator(backing_store=...))`;
# the backing-store predicate is supplied by the application (DB, cache, remote call).
