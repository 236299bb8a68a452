"""Server-side rendering of the React bundle.

The JavaScript engine is pluggable: a renderer is a callable taking the
bundle source and the serialized payload and returning the rendered HTML.
In development the bundle is read again on every render so rebuilds show
up without restarting the server. In production it is read once per thread.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Optional

from tuono.config import Mode, get_global_mode

Renderer = Callable[[str, Optional[str]], str]

PROD_BUNDLE_PATH = Path("out", "server", "prod-server.js")
DEV_BUNDLE_PATH = Path(".tuono", "server", "dev-server.js")
FALLBACK_HTML_PATH = Path(".tuono", "index.html")
PAYLOAD_PLACEHOLDER = "[SERVER_PAYLOAD]"
FALLBACK_NOT_LOADED = "Fallback HTML not loaded"


class SsrError(Exception):
    """Raised when the server bundle cannot be rendered."""


_renderer: Renderer | None = None
_generation = 0
_local = threading.local()


def set_renderer(renderer: Renderer | None) -> None:
    """Install the callable that executes the server bundle; ``None`` removes it."""
    global _renderer, _generation
    _renderer = renderer
    _generation += 1


def render_to_string(payload: str | None = None) -> str:
    """Render the server bundle for the current mode with ``payload``."""
    if get_global_mode() is Mode.DEV:
        return _render_dev(payload)
    return _render_prod(payload)


def _run(renderer: Renderer, source: str, payload: str | None) -> str:
    try:
        return renderer(source, payload)
    except SsrError:
        raise
    except Exception as exc:
        raise SsrError(str(exc)) from exc


def _fallback_html(payload: str | None) -> str:
    try:
        html = FALLBACK_HTML_PATH.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        html = FALLBACK_NOT_LOADED
    return html.replace(PAYLOAD_PLACEHOLDER, payload or "")


def _render_dev(payload: str | None) -> str:
    try:
        source = DEV_BUNDLE_PATH.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return _fallback_html(payload)
    renderer = _renderer
    if renderer is None:
        return _fallback_html(payload)
    return _run(renderer, source, payload)


def _prod_bundle() -> str:
    cached = getattr(_local, "bundle", None)
    if cached is not None and cached[0] == _generation:
        return cached[1]
    try:
        source = PROD_BUNDLE_PATH.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SsrError("Server bundle not found") from exc
    _local.bundle = (_generation, source)
    return source


def _render_prod(payload: str | None) -> str:
    renderer = _renderer
    if renderer is None:
        raise SsrError("No server-side renderer installed")
    return _run(renderer, _prod_bundle(), payload)