"""
tests.test_fingerprint

Stability of the default fingerprint across unrelated headers and its sensitivity
to the headers it is built from.
"""

from __future__ import annotations

import hashlib
import hmac

import pytest

from authgate.http.fingerprint import default_fingerprint, fingerprint_material
from authgate.http.models import Header
from authgate.http.request import RequestPipeline

BASE = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64)",
    "Accept-Language": "de-DE,de;q=0.9",
    "Accept-Charset": "utf-8",
}


def _pipeline(headers: dict[str, str]) -> RequestPipeline[None]:
    return RequestPipeline.build(
        None, uri="https://example.com", headers=[Header(k, v) for k, v in headers.items()]
    )


def test_fingerprint_ignores_other_headers() -> None:
    a = _pipeline({**BASE, "Accept": "text/html", "Accept-Encoding": "gzip"})
    b = _pipeline({**BASE, "Accept": "application/json", "X-Request-Id": "abc"})

    assert a.fingerprint() == b.fingerprint()


@pytest.mark.parametrize("name", ["User-Agent", "Accept-Language", "Accept-Charset"])
def test_fingerprint_changes_with_each_selected_header(name: str) -> None:
    changed = _pipeline({**BASE, name: BASE[name] + "-changed"})

    assert changed.fingerprint() != _pipeline(BASE).fingerprint()


def test_missing_headers_contribute_empty_strings() -> None:
    assert fingerprint_material([Header("Accept-Charset", "utf-8")]) == "::utf-8"
    assert _pipeline({}).fingerprint() == hashlib.sha1(b"::").hexdigest()


def test_multi_valued_header_uses_joined_value() -> None:
    material = fingerprint_material([Header("Accept-Language", ("en", "de"))])

    assert material == ":en,de:"


def test_keyed_fingerprint_uses_hmac() -> None:
    headers = [Header(k, v) for k, v in BASE.items()]
    material = ":".join(BASE.values()).encode()

    assert default_fingerprint(headers, key="secret") == hmac.new(
        b"secret", material, hashlib.sha256
    ).hexdigest()
    assert default_fingerprint(headers, key="secret") != default_fingerprint(headers, key="other")
