"""The Vite build manifest mapping routes to their bundled files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

VITE_MANIFEST_PATH = Path("out", "client", ".vite", "manifest.json")

_KEY_REPLACEMENTS = (("../src/routes", ""), (".tsx", ""), (".jsx", ""), ("index", ""))


@dataclass(frozen=True)
class BundleInfo:
    """The JS file and CSS files Vite emitted for one source entry."""

    file: str
    css: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BundleInfo:
        """Build a bundle from a manifest entry; unknown fields are ignored."""
        if not isinstance(data, dict):
            raise ValueError("manifest entry must be a JSON object")
        if "file" not in data:
            raise ValueError("missing field `file` in manifest entry")
        file = data["file"]
        css = data.get("css", [])
        if not isinstance(file, str):
            raise ValueError("manifest entry `file` must be a string")
        if not isinstance(css, list) or not all(isinstance(item, str) for item in css):
            raise ValueError("manifest entry `css` must be a list of strings")
        return cls(file=file, css=list(css))


def parse_manifest(text: str) -> dict[str, BundleInfo]:
    """Parse the JSON text of a Vite manifest."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("manifest must be a JSON object")
    return {key: BundleInfo.from_dict(entry) for key, entry in data.items()}


def _remap_key(key: str) -> str:
    for old, new in _KEY_REPLACEMENTS:
        key = key.replace(old, new)
    return key


def remap_manifest_keys(manifest: dict[str, BundleInfo]) -> dict[str, BundleInfo]:
    """Turn source file keys into route paths (``../src/routes/about.tsx`` -> ``/about``)."""
    return {_remap_key(key): info for key, info in manifest.items()}


_state: dict[str, dict[str, BundleInfo] | None] = {"manifest": None}


def load_manifest(path: str | Path | None = None) -> dict[str, BundleInfo]:
    """Read, remap and install the manifest; returns the remapped mapping."""
    text = Path(path or VITE_MANIFEST_PATH).read_text(encoding="utf-8")
    manifest = remap_manifest_keys(parse_manifest(text))
    set_manifest(manifest)
    return manifest


def set_manifest(manifest: dict[str, BundleInfo] | None) -> None:
    """Install the process-wide manifest; ``None`` clears it."""
    _state["manifest"] = None if manifest is None else dict(manifest)


def get_manifest() -> dict[str, BundleInfo]:
    """Return the process-wide manifest."""
    manifest = _state["manifest"]
    if manifest is None:
        raise RuntimeError("Failed to load manifest")
    return manifest