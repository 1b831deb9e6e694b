"""
authgate.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the auth layer.
- Hide secrets from repr/logging (JWT secret, fingerprint key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    - Env-driven configuration under the `AUTHGATE_` prefix
    - Defaults safe for local dev and tests
    - One settings object shared by the auth dependency and the middleware
    """

    model_config = SettingsConfigDict(env_prefix="AUTHGATE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "authgate"
    log_level: str = "INFO"

    # Authenticator codec (JWT)
    jwt_alg: str = "HS256"
    jwt_issuer: str = "authgate"
    jwt_audience: str = "authgate-clients"
    jwt_secret: str = Field(default="dev-secret-change-me-0123456789abcdef", repr=False)

    # Validators; `None` disables the idle window or the overall timeout.
    authenticator_idle_timeout_seconds: int | None = Field(default=30 * 60, ge=1)
    validation_timeout_seconds: float | None = Field(default=5.0, gt=0)

    # Fingerprinting: when a key is set, fingerprints are HMAC-SHA256 instead of SHA-1.
    fingerprinting: bool = True
    fingerprint_key: str | None = Field(default=None, repr=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Passing `authenticator_idle_timeout_seconds=None` disables the sliding-window check;
# `validation_timeout_seconds=None` lets validators run unbounded.
