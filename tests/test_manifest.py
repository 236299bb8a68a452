import json

import pytest

from tuono.manifest import (
    BundleInfo,
    get_manifest,
    load_manifest,
    parse_manifest,
    remap_manifest_keys,
    set_manifest,
)

_INDEX_ROUTE = "../src/routes/index.tsx"

MANIFEST_EXAMPLE = json.dumps(
    {
        _INDEX_ROUTE: {
            "file": "assets/index.js",
            "name": "index",
            "src": _INDEX_ROUTE,
            "isDynamicEntry": True,
            "imports": ["client-main.tsx"],
            "css": ["assets/index.css"],
        },
        "meta-tags-lib": {
            "file": "assets/meta-lib.js",
            "name": "meta-tags-lib",
            "imports": ["client-main.tsx"],
        },
        "client-main.tsx": {
            "file": "assets/client-main.js",
            "name": "client-main",
            "src": "client-main.tsx",
            "isEntry": True,
            "dynamicImports": [_INDEX_ROUTE, "../src/routes/pokemons/[pokemon].tsx"],
            "css": ["assets/client-main.css"],
        },
    },
    indent=2,
)


@pytest.fixture(autouse=True)
def _reset_manifest():
    yield
    set_manifest(None)


def test_parse_reads_file_and_css_and_defaults_css():
    expected = {
        _INDEX_ROUTE: BundleInfo(file="assets/index.js", css=["assets/index.css"]),
        "client-main.tsx": BundleInfo(
            file="assets/client-main.js", css=["assets/client-main.css"]
        ),
        "meta-tags-lib": BundleInfo(file="assets/meta-lib.js", css=[]),
    }
    assert parse_manifest(MANIFEST_EXAMPLE) == expected


def test_remap_strips_route_prefix_extensions_and_index():
    entries = {
        _INDEX_ROUTE: BundleInfo("assets/index.js", ["assets/index.css"]),
        "../src/routes/about.jsx": BundleInfo("assets/about.js", ["assets/about.css"]),
        "../src/routes/posts/[post].tsx": BundleInfo(
            "assets/posts/[post].js", ["assets/posts/[post].css"]
        ),
        "client-main.tsx": BundleInfo("assets/main.js", ["assets/main.css"]),
    }
    remapped = remap_manifest_keys(entries)
    assert {key: info.file for key, info in remapped.items()} == {
        "/": "assets/index.js",
        "/about": "assets/about.js",
        "/posts/[post]": "assets/posts/[post].js",
        "client-main": "assets/main.js",
    }


def test_from_dict_requires_file():
    with pytest.raises(ValueError):
        BundleInfo.from_dict({"css": []})


def test_parse_manifest_rejects_invalid_json():
    with pytest.raises(ValueError):
        parse_manifest("not json")


def test_load_manifest_remaps_and_installs(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text(MANIFEST_EXAMPLE, encoding="utf-8")
    manifest = load_manifest(path)
    assert manifest["/"] == BundleInfo("assets/index.js", ["assets/index.css"])
    assert get_manifest()["client-main"].file == "assets/client-main.js"


def test_load_manifest_uses_default_path(tmp_path, monkeypatch):
    target = tmp_path / "out" / "client" / ".vite" / "manifest.json"
    target.parent.mkdir(parents=True)
    target.write_text(
        json.dumps({"client-main.tsx": {"file": "assets/index.js", "css": []}}),
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    assert load_manifest() == {"client-main": BundleInfo("assets/index.js", [])}


def test_load_manifest_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_manifest(tmp_path / "missing.json")


def test_get_manifest_before_load_fails():
    with pytest.raises(RuntimeError):
        get_manifest()