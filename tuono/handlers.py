"""Decorators turning page and API functions into HTTP endpoints.

A page function takes the request as its first argument and returns a
``tuono.response.Response``. Any further parameters are filled by name
from the application state installed on the Starlette app.
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Mapping
from typing import Any, Callable

from starlette.requests import ClientDisconnect
from starlette.requests import Request as HttpRequest
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.responses import Response as HttpResponse

from tuono.request import Request
from tuono.response import Response

APPLICATION_STATE_ATTR = "application_state"
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
_CO_VARARGS = 0x04
_CO_VARKEYWORDS = 0x08


def _parameters(func: Callable[..., Any]) -> list[tuple[str, bool]]:
    """List the parameters of ``func`` as (name, can be passed by name)."""
    target: Any = func
    while hasattr(target, "__wrapped__"):
        target = target.__wrapped__
    is_bound = hasattr(target, "__self__") and hasattr(target, "__func__")
    code = getattr(getattr(target, "__func__", target), "__code__", None)
    if code is None:
        raise TypeError(f"cannot inspect the signature of {func!r}")

    argcount = code.co_argcount
    posonly = code.co_posonlyargcount
    kwonly_end = argcount + code.co_kwonlyargcount
    names = code.co_varnames

    params = [(name, index >= posonly) for index, name in enumerate(names[:argcount])]
    if code.co_flags & _CO_VARARGS:
        params.append(("*", False))
    params.extend((name, True) for name in names[argcount:kwonly_end])
    if code.co_flags & _CO_VARKEYWORDS:
        params.append(("**", False))
    return params[1:] if is_bound else params


def _state_names(func: Callable[..., Any]) -> list[str]:
    """Return the names of the parameters after the request parameter."""
    params = _parameters(func)
    if not params:
        name = getattr(func, "__name__", repr(func))
        raise TypeError(f"{name} must take the request as its first argument")
    return [name for name, named in params[1:] if named]


def _application_state(http_request: HttpRequest, names: list[str]) -> dict[str, Any]:
    if not names:
        return {}
    state = getattr(http_request.app.state, APPLICATION_STATE_ATTR, None)
    values: dict[str, Any] = {}
    for name in names:
        if isinstance(state, Mapping):
            found = name in state
            value = state.get(name)
        else:
            found = hasattr(state, name)
            value = getattr(state, name, None)
        if not found:
            raise RuntimeError(f"application state has no field `{name}`")
        values[name] = value
    return values


async def _build_request(http_request: HttpRequest, with_body: bool) -> Request:
    query = http_request.url.query
    path = http_request.url.path
    body: bytes | None = None
    if with_body:
        try:
            body = await http_request.body()
        except ClientDisconnect:
            body = b""
    return Request(
        uri=f"{path}?{query}" if query else path,
        headers=dict(http_request.headers),
        params={key: str(value) for key, value in http_request.path_params.items()},
        raw_body=body,
    )


async def _invoke(
    func: Callable[..., Any], names: list[str], req: Request, http_request: HttpRequest
) -> Any:
    result = func(req, **_application_state(http_request, names))
    if isinstance(result, Awaitable):
        result = await result
    return result


def _to_http_response(value: Any) -> HttpResponse:
    """Convert what an API function returned into an HTTP response."""
    if isinstance(value, HttpResponse):
        return value
    if isinstance(value, Response):
        return value.json()
    if value is None:
        return HttpResponse(status_code=200)
    if isinstance(value, tuple) and len(value) == 2:
        status, body = value
        if isinstance(status, int) and not isinstance(status, bool):
            response = _to_http_response(body)
            response.status_code = int(status)
            return response
    if isinstance(value, (dict, list, float, bool)):
        return JSONResponse(value)
    if isinstance(value, int):
        return HttpResponse(status_code=int(value))
    if isinstance(value, str):
        return PlainTextResponse(value)
    if isinstance(value, (bytes, bytearray)):
        return HttpResponse(bytes(value))
    raise TypeError(f"cannot turn {type(value).__name__} into an HTTP response")


class Handler:
    """A page function exposed as a server-rendered route and a data endpoint."""

    def __init__(self, func: Callable[..., Any]) -> None:
        self.func = func
        self.state_names = _state_names(func)
        functools.update_wrapper(self, func, updated=())

    async def _response(self, http_request: HttpRequest) -> tuple[Request, Response]:
        req = await _build_request(http_request, with_body=False)
        result = await _invoke(self.func, self.state_names, req, http_request)
        if not isinstance(result, Response):
            raise TypeError(
                f"{self.func.__name__} must return a Response, got {type(result).__name__}"
            )
        return req, result

    async def route(self, request: HttpRequest) -> HttpResponse:
        """Serve the server-rendered HTML page."""
        req, result = await self._response(request)
        return result.render_to_string(req)

    async def data(self, request: HttpRequest) -> HttpResponse:
        """Serve the JSON data used by client-side navigation."""
        _, result = await self._response(request)
        return result.json()


def handler(func: Callable[..., Any]) -> Handler:
    """Turn a page function into a :class:`Handler`."""
    return Handler(func)


def api(method: str) -> Callable[[Callable[..., Any]], Callable[[HttpRequest], Awaitable[HttpResponse]]]:
    """Turn a function into an API endpoint for the HTTP ``method``.

    The request body is read for POST, PUT and PATCH. The endpoint carries the
    upper-cased method in its ``method`` attribute.
    """
    http_method = str(method).strip().upper()
    if not http_method:
        raise ValueError("an HTTP method is required")
    with_body = http_method in _BODY_METHODS

    def decorate(func: Callable[..., Any]) -> Callable[[HttpRequest], Awaitable[HttpResponse]]:
        names = _state_names(func)

        async def endpoint(request: HttpRequest) -> HttpResponse:
            req = await _build_request(request, with_body=with_body)
            return _to_http_response(await _invoke(func, names, req, request))

        functools.update_wrapper(endpoint, func)
        endpoint.method = http_method  # type: ignore[attr-defined]
        return endpoint

    return decorate