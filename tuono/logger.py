"""ASGI middleware that logs every handled HTTP request."""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable, MutableMapping

Scope = MutableMapping[str, Any]
Message = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

DATA_PATH_PREFIX = "/__tuono/data"
_GREEN = "\x1b[32m"
_RESET = "\x1b[0m"


def format_log_line(method: str, path: str, status: int, elapsed_ms: int) -> str:
    """Format one request log line with a green status code."""
    return f"  {method} {path} {_GREEN}{status}{_RESET} in {elapsed_ms}ms"


class LoggerMiddleware:
    """Print method, path, status and duration of each HTTP request.

    Requests for client-side navigation data are not logged.
    """

    def __init__(self, app: ASGIApp, printer: Callable[[str], Any] = print) -> None:
        self.app = app
        self.printer = printer

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "")
        path = scope.get("path", "")
        start = time.perf_counter()
        status: int | None = None

        async def send_with_status(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
            await send(message)

        await self.app(scope, receive, send_with_status)

        if path.startswith(DATA_PATH_PREFIX) or status is None:
            return
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        self.printer(format_log_line(method, path, status, elapsed_ms))