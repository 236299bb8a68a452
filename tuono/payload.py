"""The hydration payload sent to the client with server-rendered HTML."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from tuono.config import Mode, ServerConfig, get_global_config, get_global_mode
from tuono.manifest import BundleInfo, get_manifest
from tuono.request import Location, Request

_DYNAMIC_SEGMENT = re.compile(r"\[(.*?)\]")


def has_dynamic_path(route: str) -> bool:
    """Tell whether ``route`` holds a ``[param]`` segment."""
    return _DYNAMIC_SEGMENT.search(route) is not None


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def _dynamic_route_key(dynamic_routes: list[str], path_segments: list[str]) -> str | None:
    """Return the manifest key of the first dynamic route that ends the search."""
    for route in dynamic_routes:
        collected: list[str] = []
        for index, segment in enumerate(_segments(route)):
            if segment.startswith("[..."):
                collected.append(segment)
                return "/" + "/".join(collected)
            if index == len(path_segments):
                break
            if segment == path_segments[index] or has_dynamic_path(segment):
                collected.append(segment)
            else:
                break
        if len(collected) == len(path_segments):
            return "/" + "/".join(collected)
    return None


@dataclass
class Payload:
    """Data the client needs for hydration."""

    location: Location
    data: Any
    mode: Mode
    js_bundles: list[str] | None = None
    css_bundles: list[str] | None = None
    dev_server_config: ServerConfig | None = None

    @classmethod
    def from_request(cls, request: Request, data: Any) -> Payload:
        """Build the payload for ``request`` using the process-wide config and mode."""
        config = get_global_config()
        mode = get_global_mode()
        return cls(
            location=request.location(),
            data=data,
            mode=mode,
            dev_server_config=config.server if mode is Mode.DEV else None,
        )

    def client_payload(self) -> str:
        """Serialize the payload to compact JSON, adding bundles in production."""
        if self.mode is Mode.PROD:
            self._add_bundle_sources()
        server = self.dev_server_config
        document = {
            "location": self.location.to_dict(),
            "data": self.data,
            "mode": Mode(self.mode).value,
            "jsBundles": self.js_bundles,
            "cssBundles": self.css_bundles,
            "devServerConfig": (
                {"host": server.host, "origin": server.origin, "port": server.port}
                if server is not None
                else None
            ),
        }
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False)

    def _add_bundle_sources(self) -> None:
        """Collect the main bundle and the bundle of the matching route."""
        manifest = get_manifest()
        try:
            main_bundle = manifest["client-main"]
        except KeyError:
            raise RuntimeError("Failed to get client-main bundle") from None

        js = [main_bundle.file]
        css = list(main_bundle.css)

        pathname = self.location.pathname
        route_bundle: BundleInfo | None = manifest.get(pathname)
        if route_bundle is None:
            dynamic_routes = [key for key in manifest if has_dynamic_path(key)]
            if dynamic_routes:
                key = _dynamic_route_key(dynamic_routes, _segments(pathname))
                if key is not None:
                    route_bundle = manifest.get(key)

        if route_bundle is not None:
            js.append(route_bundle.file)
            css.extend(route_bundle.css)

        self.js_bundles = js
        self.css_bundles = css