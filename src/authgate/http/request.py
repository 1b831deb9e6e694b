"""
authgate.http.request

Immutable, framework-agnostic view over an inbound request.

Responsibilities:
- Expose normalized accessors (uri, method, headers, cookies, query params).
- Provide `with_*` mutators that return a new pipeline using the shared reducers.
- Derive the raw query string and the client fingerprint.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar
from urllib.parse import urlencode

from starlette.datastructures import URL

from authgate.http.fingerprint import default_fingerprint
from authgate.http.models import Cookie, Header, Method, QueryParam
from authgate.http.reducers import merge_cookies, merge_headers, merge_query_params

R = TypeVar("R")

FingerprintGenerator = Callable[[Any], str]


@dataclass(frozen=True, slots=True)
class RequestPipeline(Generic[R]):
    """
    Decorates a framework specific request.

    Framework adapters build one pipeline per inbound request (see
    `authgate.integrations.starlette`). `uri` must be absolute; relative references
    are resolved against it.

    Instances are never mutated: every `with_*` call returns a new pipeline, so one
    instance can be shared by concurrent readers.
    """

    request: R
    uri: URL
    method: Method = Method.GET
    headers: tuple[Header, ...] = ()
    cookies: tuple[Cookie, ...] = ()
    query: tuple[QueryParam, ...] = ()

    def __post_init__(self) -> None:
        # Normalize whatever the adapter passed into the one-entry-per-name shape.
        object.__setattr__(self, "uri", self.uri if isinstance(self.uri, URL) else URL(str(self.uri)))
        object.__setattr__(
            self, "method", self.method if isinstance(self.method, Method) else Method.parse(self.method)
        )
        object.__setattr__(self, "headers", merge_headers((), self.headers))
        object.__setattr__(self, "cookies", merge_cookies((), self.cookies))
        # Same-name params compose like headers: values concatenated in order.
        object.__setattr__(
            self,
            "query",
            merge_query_params((), ((p.name, v) for p in self.query for v in p.values)),
        )

    # URI / method

    def with_uri(self, uri: URL | str) -> RequestPipeline[R]:
        return replace(self, uri=URL(str(uri)))

    def with_method(self, method: Method | str) -> RequestPipeline[R]:
        return replace(self, method=method)

    @property
    def is_secure(self) -> bool:
        return self.uri.scheme == "https"

    # Headers

    def header(self, name: str) -> Header | None:
        return next((h for h in self.headers if h.matches(name)), None)

    def with_headers(self, *headers: Header) -> RequestPipeline[R]:
        """
        Existing headers with a supplied name are replaced; supplied headers that share
        a name are composed into one header, values in argument order:

            pipeline.with_headers(Header("TEST1", "value3"), Header("TEST1", ("value4", "value5")))
            # -> Header("TEST1", ("value3", "value4", "value5")), other headers untouched
        """

        return replace(self, headers=merge_headers(self.headers, headers))

    # Cookies

    def cookie(self, name: str) -> Cookie | None:
        return next((c for c in self.cookies if c.name == name), None)

    def with_cookies(self, *cookies: Cookie) -> RequestPipeline[R]:
        """
        Existing cookies with a supplied name are replaced; if several supplied cookies
        share a name, the last one wins.
        """

        return replace(self, cookies=merge_cookies(self.cookies, cookies))

    # Query params

    @property
    def query_params(self) -> dict[str, list[str]]:
        # Fresh copy on every access; callers may mutate it freely.
        return {p.name: list(p.values) for p in self.query}

    def query_param(self, name: str) -> list[str]:
        return next((list(p.values) for p in self.query if p.name == name), [])

    def with_query_params(self, *params: tuple[str, str]) -> RequestPipeline[R]:
        """
        Same rules as `with_headers`:

            pipeline.with_query_params(("test1", "value3"), ("test1", "value4"))
            # -> {"test1": ["value3", "value4"], ...}
        """

        return replace(self, query=merge_query_params(self.query, params))

    @property
    def raw_query_string(self) -> str:
        # One `name=value` pair per value, names in insertion order, no leading "?".
        return urlencode([(p.name, value) for p in self.query for value in p.values])

    # Fingerprint / unbox

    def fingerprint(
        self,
        generator: FingerprintGenerator | None = None,
        *,
        key: str | None = None,
    ) -> str:
        """
        Fingerprint of the client.

        Without a `generator` this hashes `User-Agent`, `Accept-Language` and
        `Accept-Charset` (see `authgate.http.fingerprint`). A custom generator receives
        the native request.
        """

        if generator is not None:
            return generator(self.request)
        return default_fingerprint(self.headers, key=key)

    def unbox(self) -> R:
        return self.request

    @classmethod
    def build(
        cls,
        request: R,
        *,
        uri: URL | str,
        method: Method | str = Method.GET,
        headers: Iterable[Header] = (),
        cookies: Iterable[Cookie] = (),
        query: Iterable[tuple[str, str]] = (),
    ) -> RequestPipeline[R]:
        return cls(
            request=request,
            uri=URL(str(uri)),
            method=method if isinstance(method, Method) else Method.parse(method),
            headers=tuple(headers),
            cookies=tuple(cookies),
            query=merge_query_params((), query),
        )


# --- Module Notes -----------------------------------------------------------
# `uri` and `query` are independent: `with_uri` does not re-parse the query string,
# and `with_query_params` does not rewrite `uri`.
