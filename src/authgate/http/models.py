"""
authgate.http.models

Framework-agnostic HTTP value types.

Responsibilities:
- Represent headers, cookies and query params as immutable values.
- Provide canonical header names with case-insensitive matching.
- Enumerate HTTP request methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Method(str, Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @classmethod
    def parse(cls, raw: str) -> Method:
        return cls(raw.strip().upper())


class HeaderName:
    """
    Canonical spelling of the headers authgate reads or writes.

    Any other name is accepted as-is; matching is always case-insensitive.
    """

    ACCEPT = "Accept"
    ACCEPT_CHARSET = "Accept-Charset"
    ACCEPT_ENCODING = "Accept-Encoding"
    ACCEPT_LANGUAGE = "Accept-Language"
    AUTHORIZATION = "Authorization"
    CACHE_CONTROL = "Cache-Control"
    CONTENT_TYPE = "Content-Type"
    COOKIE = "Cookie"
    HOST = "Host"
    LOCATION = "Location"
    SET_COOKIE = "Set-Cookie"
    USER_AGENT = "User-Agent"
    X_FORWARDED_FOR = "X-Forwarded-For"
    X_REQUEST_ID = "X-Request-Id"


_CANONICAL_NAMES: dict[str, str] = {
    value.lower(): value
    for key, value in vars(HeaderName).items()
    if key.isupper() and isinstance(value, str)
}


def canonical_header_name(name: str) -> str:
    return _CANONICAL_NAMES.get(name.lower(), name)


@dataclass(frozen=True, slots=True)
class Header:
    """
    A single header with its ordered values.

    `Header("Accept", "a")` and `Header("accept", ("a", "b"))` are both accepted; known
    names are normalized to their canonical spelling.
    """

    name: str
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        values = (self.values,) if isinstance(self.values, str) else tuple(self.values)
        if not values:
            raise ValueError(f"Header {self.name!r} needs at least one value")
        object.__setattr__(self, "name", canonical_header_name(self.name))
        object.__setattr__(self, "values", values)

    @property
    def key(self) -> str:
        return self.name.lower()

    @property
    def value(self) -> str:
        return ",".join(self.values)

    def matches(self, name: str) -> bool:
        return self.key == name.lower()


class SameSite(str, Enum):
    STRICT = "Strict"
    LAX = "Lax"
    NONE = "None"


@dataclass(frozen=True, slots=True)
class Cookie:
    name: str
    value: str
    max_age: int | None = None
    domain: str | None = None
    path: str | None = "/"
    secure: bool = True
    http_only: bool = True
    same_site: SameSite | None = SameSite.LAX


@dataclass(frozen=True, slots=True)
class QueryParam:
    """A query param name with every value it had in the query string, in order."""

    name: str
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        values = (self.values,) if isinstance(self.values, str) else tuple(self.values)
        object.__setattr__(self, "values", values)


# --- Module Notes -----------------------------------------------------------
# Merge rules live in `http.reducers`; request and response pipelines share them.
