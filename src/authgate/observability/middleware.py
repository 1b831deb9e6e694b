"""
authgate.observability.middleware

HTTP middleware binding a request pipeline and request-scoped logging context.

Responsibilities:
- Build the `RequestPipeline` once per request and stash it on `request.state`.
- Generate/propagate request IDs.
- Bind request metadata (including the client fingerprint) into structlog contextvars.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from authgate.http.models import Header, HeaderName
from authgate.integrations.starlette import (
    apply_response_pipeline,
    request_pipeline,
    response_pipeline,
)
from authgate.settings import get_settings


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Builds the request pipeline once per request
    - Ensures every request has a request id
    - Binds request-scoped contextvars for structured logs, including the client fingerprint
    """

    def __init__(self, app: ASGIApp, *, fingerprint_key: str | None = None) -> None:
        super().__init__(app)
        # Same key as `require_authenticator` so logged and validated fingerprints agree.
        self._fingerprint_key = (
            fingerprint_key if fingerprint_key is not None else get_settings().fingerprint_key
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        pipeline = request_pipeline(request)
        request.state.pipeline = pipeline

        # Prefer a caller-provided request id for trace continuity; otherwise generate one.
        incoming = pipeline.header(HeaderName.X_REQUEST_ID)
        request_id = incoming.values[0] if incoming else str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=pipeline.uri.path,
            method=pipeline.method.value,
            secure=pipeline.is_secure,
            fingerprint=pipeline.fingerprint(key=self._fingerprint_key),
        )
        try:
            response: Response = await call_next(request)
        finally:
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        outbound = response_pipeline(response).with_headers(
            Header(HeaderName.X_REQUEST_ID, request_id)
        )
        return apply_response_pipeline(outbound)


# --- Module Notes -----------------------------------------------------------
# `authgate.auth.deps.get_request_pipeline` reuses `request.state.pipeline` when this
# middleware is installed and builds a fresh pipeline otherwise.
