"""
authgate.http

Framework-agnostic request/response pipelines.

Responsibilities:
- Immutable header/cookie/query-param values.
- Request and response pipelines with deterministic merge rules.
- Client fingerprinting.
"""

from authgate.http.models import Cookie, Header, HeaderName, Method, QueryParam, SameSite
from authgate.http.request import RequestPipeline
from authgate.http.response import ResponsePipeline

__all__ = [
    "Cookie",
    "Header",
    "HeaderName",
    "Method",
    "QueryParam",
    "RequestPipeline",
    "ResponsePipeline",
    "SameSite",
]
