"""
authgate.crypto.hashing

Deterministic one-way hash helpers over strings.

Responsibilities:
- An unkeyed digest (`sha1`) for stable identifiers such as fingerprints.
- A keyed digest (`hmac_sha256`) when the identifier must not be reproducible
  without a server-side secret.
"""

from __future__ import annotations

import hashlib
import hmac


def sha1(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()


def hmac_sha256(key: str, value: str) -> str:
    return hmac.new(key.encode("utf-8"), value.encode("utf-8"), hashlib.sha256).hexdigest()


# --- Module Notes -----------------------------------------------------------
# All digests are lowercase hex so they can be stored in cookies/JWT claims as-is.
