"""
authgate.integrations.starlette

Starlette/FastAPI adapter for the request and response pipelines.

Responsibilities:
- Build a `RequestPipeline` from a native `starlette.requests.Request`.
- Build a `ResponsePipeline` from a native `starlette.responses.Response`.
- Write response pipeline state (status, headers, cookies) back to the native response.
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import Response

from authgate.errors import PipelineError
from authgate.http.models import Cookie, Header, HeaderName, Method
from authgate.http.request import RequestPipeline
from authgate.http.response import ResponsePipeline


def request_pipeline(request: Request) -> RequestPipeline[Request]:
    url = request.url
    # Construction-time validation lives here, not in the pipeline itself.
    if not url.scheme or not url.netloc:
        raise PipelineError("Request target must be an absolute URI", details={"uri": str(url)})
    try:
        method = Method.parse(request.method)
    except ValueError as e:
        raise PipelineError("Unsupported HTTP method", details={"method": request.method}) from e

    headers = [
        Header(name.decode("latin-1"), value.decode("latin-1"))
        for name, value in request.headers.raw
    ]
    cookies = [Cookie(name=name, value=value) for name, value in request.cookies.items()]
    return RequestPipeline.build(
        request,
        uri=url,
        method=method,
        headers=headers,
        cookies=cookies,
        query=request.query_params.multi_items(),
    )


def response_pipeline(response: Response) -> ResponsePipeline[Response]:
    # Existing Set-Cookie lines stay on the native response; the pipeline only adds cookies.
    headers = [
        Header(name.decode("latin-1"), value.decode("latin-1"))
        for name, value in response.raw_headers
        if name.lower() != b"set-cookie"
    ]
    return ResponsePipeline(response=response, status=response.status_code, headers=tuple(headers))


def apply_response_pipeline(pipeline: ResponsePipeline[Response]) -> Response:
    response = pipeline.unbox()
    response.status_code = pipeline.status

    for header in pipeline.headers:
        if header.matches(HeaderName.SET_COOKIE):
            continue
        del response.headers[header.name]
        for value in header.values:
            response.headers.append(header.name, value)

    for cookie in pipeline.cookies:
        response.set_cookie(
            key=cookie.name,
            value=cookie.value,
            max_age=cookie.max_age,
            path=cookie.path,
            domain=cookie.domain,
            secure=cookie.secure,
            httponly=cookie.http_only,
            samesite=cookie.same_site.value.lower() if cookie.same_site else None,
        )
    return response


# --- Module Notes -----------------------------------------------------------
# Other frameworks get their own module here; the pipelines never import a framework
# beyond `starlette.datastructures.URL`.
