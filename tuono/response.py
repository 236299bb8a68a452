"""Values returned by route handlers and their HTTP rendering."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.responses import Response as HttpResponse

from tuono import ssr
from tuono.payload import Payload
from tuono.request import Request

RENDER_ERROR_HTML = "500 Internal server error"


class Response(ABC):
    """What a handler returns: props to render, a redirect or a custom reply."""

    @abstractmethod
    def render_to_string(self, request: Request) -> HttpResponse:
        """Return the server-rendered HTTP response for ``request``."""

    @abstractmethod
    def json(self) -> HttpResponse:
        """Return the JSON response used by client-side navigation."""


@dataclass
class Props(Response):
    """Data handed to the React page, with a status code and cookies."""

    data: Any
    http_code: int = HTTPStatus.OK
    cookies: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.http_code = int(self.http_code)

    def status(self, http_code: int) -> None:
        """Set the HTTP status code of the response."""
        self.http_code = int(http_code)

    def add_cookie(self, name: str, value: str) -> None:
        """Add a cookie, replacing any cookie with the same name."""
        self.cookies[name] = value

    def _attach_cookies(self, response: HttpResponse) -> HttpResponse:
        for name, value in self.cookies.items():
            response.headers.append("set-cookie", f"{name}={value}")
        return response

    def render_to_string(self, request: Request) -> HttpResponse:
        payload = Payload.from_request(request, self.data).client_payload()
        try:
            html = ssr.render_to_string(payload)
        except ssr.SsrError:
            html = RENDER_ERROR_HTML
        return self._attach_cookies(HTMLResponse(html, status_code=self.http_code))

    def json(self) -> HttpResponse:
        body = {"data": self.data, "info": {"redirect_destination": None}}
        return self._attach_cookies(JSONResponse(body, status_code=self.http_code))


@dataclass
class Redirect(Response):
    """A permanent redirect to ``destination``."""

    destination: str

    def render_to_string(self, request: Request) -> HttpResponse:
        return RedirectResponse(self.destination, status_code=HTTPStatus.PERMANENT_REDIRECT)

    def json(self) -> HttpResponse:
        body = {"data": None, "info": {"redirect_destination": self.destination}}
        return JSONResponse(body, status_code=HTTPStatus.PERMANENT_REDIRECT)


@dataclass
class Custom(Response):
    """A response outside the React domain, sent as given."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def render_to_string(self, request: Request) -> HttpResponse:
        return HttpResponse(
            self.body,
            status_code=int(self.status),
            headers=dict(self.headers),
            media_type="text/plain",
        )

    def json(self) -> HttpResponse:
        return JSONResponse("{}", status_code=HTTPStatus.OK)