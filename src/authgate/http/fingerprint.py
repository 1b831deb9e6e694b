"""
authgate.http.fingerprint

Default client fingerprint generator.

Responsibilities:
- Derive a stable hash from `User-Agent`, `Accept-Language` and `Accept-Charset`.
- Optionally key the hash with a server-side secret.
"""

from __future__ import annotations

from collections.abc import Iterable

from authgate.crypto.hashing import hmac_sha256, sha1
from authgate.http.models import Header, HeaderName

# `Accept` varies with content negotiation and `Accept-Encoding` changes between
# requests in Chromium based browsers; neither is stable enough to include.
FINGERPRINT_HEADERS: tuple[str, ...] = (
    HeaderName.USER_AGENT,
    HeaderName.ACCEPT_LANGUAGE,
    HeaderName.ACCEPT_CHARSET,
)


def fingerprint_material(headers: Iterable[Header]) -> str:
    values = {h.key: h.value for h in headers}
    return ":".join(values.get(name.lower(), "") for name in FINGERPRINT_HEADERS)


def default_fingerprint(headers: Iterable[Header], *, key: str | None = None) -> str:
    material = fingerprint_material(headers)
    if key:
        return hmac_sha256(key, material)
    return sha1(material)
