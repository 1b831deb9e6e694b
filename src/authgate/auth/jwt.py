"""
authgate.auth.jwt

JWT transport for authenticators.

Responsibilities:
- Encode an `Authenticator` into a signed JWT.
- Decode and verify a JWT back into an `Authenticator`.

Note:
- `exp` is carried but not enforced here; expiry is the job of `ExpirationValidator`
  so it is reported alongside every other validation error.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import jwt
from jwt import InvalidTokenError

from authgate.auth.models import Authenticator, LoginInfo
from authgate.errors import AuthenticatorDecodeError


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str


def encode_authenticator(*, cfg: JwtConfig, authenticator: Authenticator) -> str:
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "jti": authenticator.id,
        "sub": authenticator.login_info.provider_key,
        "pid": authenticator.login_info.provider_id,
    }
    if authenticator.touched_at is not None:
        payload["iat"] = int(authenticator.touched_at.timestamp())
    if authenticator.expires_at is not None:
        payload["exp"] = int(authenticator.expires_at.timestamp())
    if authenticator.fingerprint is not None:
        payload["fgp"] = authenticator.fingerprint
    if authenticator.tags:
        payload["tags"] = sorted(authenticator.tags)
    if authenticator.payload:
        payload["ext"] = dict(authenticator.payload)
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_authenticator(*, cfg: JwtConfig, token: str) -> Authenticator:
    try:
        claims = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "verify_exp": False,
                "require": ["iss", "aud", "jti", "sub", "pid"],
            },
        )
    except InvalidTokenError as e:
        raise AuthenticatorDecodeError(str(e)) from e

    tags = claims.get("tags", [])
    ext = claims.get("ext", {})
    if not isinstance(tags, list) or not isinstance(ext, dict):
        raise AuthenticatorDecodeError("Malformed authenticator claims", details={"jti": claims["jti"]})

    return Authenticator(
        id=str(claims["jti"]),
        login_info=LoginInfo(provider_id=str(claims["pid"]), provider_key=str(claims["sub"])),
        touched_at=_from_timestamp(claims.get("iat")),
        expires_at=_from_timestamp(claims.get("exp")),
        fingerprint=claims.get("fgp"),
        tags=frozenset(str(t) for t in tags),
        payload=ext,
    )


def _from_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=UTC)


# --- Module Notes -----------------------------------------------------------
# Timestamps are truncated to whole seconds by the JWT encoding; compare decoded
# authenticators with that in mind.
