"""
authgate.http.response

Immutable, framework-agnostic view over an outbound response.

Responsibilities:
- Mirror `RequestPipeline` merge semantics for headers and cookies.
- Carry the status code so adapters can write the whole state back.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from authgate.http.models import Cookie, Header
from authgate.http.reducers import merge_cookies, merge_headers

P = TypeVar("P")


@dataclass(frozen=True, slots=True)
class ResponsePipeline(Generic[P]):
    response: P
    status: int = 200
    headers: tuple[Header, ...] = ()
    cookies: tuple[Cookie, ...] = ()

    def __post_init__(self) -> None:
        if not 100 <= self.status <= 599:
            raise ValueError(f"Invalid HTTP status code: {self.status}")
        object.__setattr__(self, "headers", merge_headers((), self.headers))
        object.__setattr__(self, "cookies", merge_cookies((), self.cookies))

    def with_status(self, status: int) -> ResponsePipeline[P]:
        return replace(self, status=status)

    def header(self, name: str) -> Header | None:
        return next((h for h in self.headers if h.matches(name)), None)

    def with_headers(self, *headers: Header) -> ResponsePipeline[P]:
        return replace(self, headers=merge_headers(self.headers, headers))

    def cookie(self, name: str) -> Cookie | None:
        return next((c for c in self.cookies if c.name == name), None)

    def with_cookies(self, *cookies: Cookie) -> ResponsePipeline[P]:
        return replace(self, cookies=merge_cookies(self.cookies, cookies))

    def unbox(self) -> P:
        return self.response
