"""Loading of ``.env`` files into the process environment."""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from pathlib import Path

from tuono.config import Mode

_MODE_NAMES = {Mode.DEV: "development", Mode.PROD: "production"}


def env_files_for(mode: Mode) -> list[str]:
    """Return the env file names to read for ``mode``, lowest precedence first."""
    name = _MODE_NAMES[Mode(mode)]
    return [".env", ".env.local", f".env.{name}", ".env.local", f".env.{name}.local"]


def load_env_vars(
    mode: Mode,
    base_dir: str | Path | None = None,
    environ: MutableMapping[str, str] | None = None,
) -> dict[str, str]:
    """Read the env files for ``mode`` and store their variables in ``environ``.

    Variables already present in the environment before loading always win.
    Returns the variables that were set.
    """
    target = os.environ if environ is None else environ
    base = Path(base_dir or ".")
    system_names = set(target)
    loaded: dict[str, str] = {}

    for file_name in env_files_for(mode):
        try:
            contents = (base / file_name).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        for line in contents.splitlines():
            key, sep, value = line.partition("=")
            if not sep:
                continue
            if value.startswith('"') and value.endswith('"'):
                value = value[1:-1]
            key = key.strip()
            value = value.strip()
            if key in system_names:
                continue
            target[key] = value
            loaded[key] = value

    return loaded