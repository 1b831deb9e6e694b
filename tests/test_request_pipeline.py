"""
tests.test_request_pipeline

Merge semantics, derived values and immutability of `RequestPipeline`.
"""

from __future__ import annotations

import hashlib

import pytest

from authgate.http.models import Cookie, Header, HeaderName, Method, QueryParam
from authgate.http.request import RequestPipeline

NATIVE = object()


@pytest.fixture
def pipeline() -> RequestPipeline[object]:
    return RequestPipeline.build(
        NATIVE,
        uri="https://example.com/path?ignored=1",
        method="GET",
        headers=[Header("TEST1", ("value1", "value2")), Header("TEST2", "value1")],
        cookies=[Cookie("test1", "value1"), Cookie("test2", "value2")],
        query=[("test1", "value1"), ("test1", "value2"), ("test2", "value1")],
    )


def _names(headers) -> list[str]:
    return [h.name for h in headers]


def test_with_uri_returns_new_pipeline(pipeline: RequestPipeline[object]) -> None:
    updated = pipeline.with_uri("http://other.example.com/x")

    assert str(updated.uri) == "http://other.example.com/x"
    assert str(pipeline.uri) == "https://example.com/path?ignored=1"
    assert updated is not pipeline


def test_with_method(pipeline: RequestPipeline[object]) -> None:
    updated = pipeline.with_method("post")

    assert updated.method is Method.POST
    assert pipeline.method is Method.GET


def test_header_lookup_is_case_insensitive(pipeline: RequestPipeline[object]) -> None:
    assert pipeline.header("test1") == Header("TEST1", ("value1", "value2"))
    assert pipeline.header("missing") is None


def test_known_header_names_are_canonicalized() -> None:
    p = RequestPipeline.build(NATIVE, uri="https://example.com", headers=[Header("user-agent", "ua")])

    assert p.header(HeaderName.USER_AGENT).name == "User-Agent"


def test_constructor_composes_duplicate_headers() -> None:
    p = RequestPipeline.build(
        NATIVE, uri="https://example.com", headers=[Header("Accept", "a"), Header("accept", "b")]
    )

    assert p.headers == (Header("Accept", ("a", "b")),)


def test_with_headers_appends_new_header(pipeline: RequestPipeline[object]) -> None:
    updated = pipeline.with_headers(Header("TEST3", "value1"))

    assert _names(updated.headers) == ["TEST1", "TEST2", "TEST3"]
    assert updated.header("TEST1").values == ("value1", "value2")
    assert updated.header("TEST3").values == ("value1",)


def test_with_headers_replaces_existing_in_place(pipeline: RequestPipeline[object]) -> None:
    updated = pipeline.with_headers(Header("TEST1", "value3"))

    assert updated.headers == (Header("TEST1", "value3"), Header("TEST2", "value1"))


def test_with_headers_composes_same_name_in_argument_order(pipeline: RequestPipeline[object]) -> None:
    updated = pipeline.with_headers(Header("TEST1", "value3"), Header("TEST1", ("value4", "value5")))

    assert updated.headers == (
        Header("TEST1", ("value3", "value4", "value5")),
        Header("TEST2", "value1"),
    )


def test_with_headers_concatenates_two_new_headers() -> None:
    p = RequestPipeline.build(NATIVE, uri="https://example.com")

    updated = p.with_headers(Header("N", "a"), Header("N", "b"))

    assert len(updated.headers) == 1
    assert updated.header("N").values == ("a", "b")


def test_with_headers_does_not_mutate_original(pipeline: RequestPipeline[object]) -> None:
    before = pipeline.headers
    pipeline.with_headers(Header("TEST1", "changed"), Header("TEST9", "new"))

    assert pipeline.headers == before


def test_header_requires_a_value() -> None:
    with pytest.raises(ValueError):
        Header("Empty", ())


def test_with_cookies_appends_and_replaces(pipeline: RequestPipeline[object]) -> None:
    appended = pipeline.with_cookies(Cookie("test3", "value3"))
    replaced = pipeline.with_cookies(Cookie("test1", "value3"))

    assert [c.name for c in appended.cookies] == ["test1", "test2", "test3"]
    assert [(c.name, c.value) for c in replaced.cookies] == [("test1", "value3"), ("test2", "value2")]


def test_with_cookies_last_write_wins(pipeline: RequestPipeline[object]) -> None:
    updated = pipeline.with_cookies(Cookie("test1", "value3"), Cookie("test1", "value4"))

    assert [(c.name, c.value) for c in updated.cookies] == [("test1", "value4"), ("test2", "value2")]
    assert updated.cookie("test1").value == "value4"
    assert pipeline.cookie("test1").value == "value1"
    assert pipeline.cookie("missing") is None


def test_query_params_accessors(pipeline: RequestPipeline[object]) -> None:
    assert pipeline.query_params == {"test1": ["value1", "value2"], "test2": ["value1"]}
    assert pipeline.query_param("test1") == ["value1", "value2"]
    assert pipeline.query_param("missing") == []


def test_constructor_composes_duplicate_query_params() -> None:
    p = RequestPipeline(
        NATIVE,
        "https://example.com",
        query=(QueryParam("a", "1"), QueryParam("b", "x"), QueryParam("a", ("2", "3"))),
    )

    assert p.query == (QueryParam("a", ("1", "2", "3")), QueryParam("b", "x"))
    assert p.query_params == {"a": ["1", "2", "3"], "b": ["x"]}
    assert p.query_param("a") == ["1", "2", "3"]
    assert p.raw_query_string == "a=1&a=2&a=3&b=x"


def test_query_params_returns_a_copy(pipeline: RequestPipeline[object]) -> None:
    params = pipeline.query_params
    params["test1"].append("mutated")

    assert pipeline.query_param("test1") == ["value1", "value2"]


def test_with_query_params_rules(pipeline: RequestPipeline[object]) -> None:
    appended = pipeline.with_query_params(("test3", "value1"))
    replaced = pipeline.with_query_params(("test1", "value3"))
    composed = pipeline.with_query_params(("test1", "value3"), ("test1", "value4"))

    assert list(appended.query_params) == ["test1", "test2", "test3"]
    assert replaced.query_params == {"test1": ["value3"], "test2": ["value1"]}
    assert composed.query_params == {"test1": ["value3", "value4"], "test2": ["value1"]}


def test_raw_query_string_single_param() -> None:
    p = RequestPipeline.build(NATIVE, uri="https://example.com").with_query_params(("q", "1"), ("q", "2"))

    assert p.query_param("q") == ["1", "2"]
    assert p.raw_query_string == "q=1&q=2"


def test_raw_query_string_multiple_names_and_encoding() -> None:
    p = RequestPipeline.build(NATIVE, uri="https://example.com").with_query_params(
        ("a", "1"), ("b k", "x y"), ("a", "2"), ("c", "ä&=")
    )

    assert p.raw_query_string == "a=1&a=2&b+k=x+y&c=%C3%A4%26%3D"


def test_raw_query_string_empty() -> None:
    assert RequestPipeline.build(NATIVE, uri="https://example.com").raw_query_string == ""


def test_is_secure() -> None:
    assert RequestPipeline.build(NATIVE, uri="https://example.com").is_secure
    assert not RequestPipeline.build(NATIVE, uri="http://example.com").is_secure


def test_unbox_returns_native_request(pipeline: RequestPipeline[object]) -> None:
    assert pipeline.unbox() is NATIVE


def test_default_fingerprint_is_sha1_of_selected_headers() -> None:
    p = RequestPipeline.build(
        NATIVE,
        uri="https://example.com",
        headers=[
            Header("User-Agent", "ua"),
            Header("Accept-Language", "en-US"),
            Header("Accept-Charset", "utf-8"),
        ],
    )

    assert p.fingerprint() == hashlib.sha1(b"ua:en-US:utf-8").hexdigest()


def test_fingerprint_with_custom_generator(pipeline: RequestPipeline[object]) -> None:
    assert pipeline.fingerprint(lambda request: "custom" if request is NATIVE else "x") == "custom"


# --- Module Notes -----------------------------------------------------------
# Fingerprint stability across headers lives in tests/test_fingerprint.py.
