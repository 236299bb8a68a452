"""Fallback handler rendering any route without a server-side handler."""

from __future__ import annotations

from starlette.requests import Request as HttpRequest
from starlette.responses import HTMLResponse

from tuono import ssr
from tuono.payload import Payload
from tuono.request import Request

CATCH_ALL_ERROR_HTML = "500 internal server error"


def _uri(request: HttpRequest) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


async def catch_all(request: HttpRequest) -> HTMLResponse:
    """Server-render the page for ``request`` with empty data."""
    req = Request(
        uri=_uri(request),
        headers=dict(request.headers),
        params={key: str(value) for key, value in request.path_params.items()},
    )
    payload = Payload.from_request(req, "").client_payload()
    try:
        html = ssr.render_to_string(payload)
    except ssr.SsrError:
        html = CATCH_ALL_ERROR_HTML
    return HTMLResponse(html)