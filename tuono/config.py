"""Server configuration, run mode and the process-wide settings they feed."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

CONFIG_PATH = Path(".tuono", "config", "config.json")


class Mode(str, Enum):
    """The mode the server runs in."""

    DEV = "Dev"
    PROD = "Prod"


@dataclass
class ServerConfig:
    """Address settings of the HTTP server."""

    host: str = "localhost"
    origin: str | None = None
    port: int = 3000

    @classmethod
    def _from_dict(cls, data: Any) -> ServerConfig:
        if not isinstance(data, dict):
            raise ValueError("server config must be a JSON object")
        try:
            host = data["host"]
            port = data["port"]
        except KeyError as exc:
            raise ValueError(f"missing field `{exc.args[0]}` in server config") from None
        origin = data.get("origin")
        if not isinstance(host, str):
            raise ValueError("server host must be a string")
        if origin is not None and not isinstance(origin, str):
            raise ValueError("server origin must be a string or null")
        if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
            raise ValueError(f"invalid server port: {port!r}")
        return cls(host=host, origin=origin, port=port)


@dataclass
class Config:
    """The project configuration generated in ``.tuono/config/config.json``."""

    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def get(cls, base_dir: str | Path | None = None) -> Config:
        """Read the configuration of the project rooted at ``base_dir`` (default: cwd).

        Raises ``FileNotFoundError`` when the file is missing and ``ValueError``
        when its content is not a valid configuration.
        """
        path = Path(base_dir or ".") / CONFIG_PATH
        text = path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid config file {path}: {exc}") from exc
        if not isinstance(data, dict) or "server" not in data:
            raise ValueError("missing field `server` in config")
        return cls(server=ServerConfig._from_dict(data["server"]))

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as JSON-ready data."""
        return asdict(self)


def tuono_print(message: str) -> None:
    """Print a user-facing message with the framework's indentation."""
    print(f"  {message}")


_GLOBALS: dict[str, Any] = {"config": None, "mode": None}


def set_global_config(config: Config | None) -> None:
    """Install the process-wide configuration; ``None`` clears it."""
    if config is not None and not isinstance(config, Config):
        raise TypeError(f"expected a Config, got {type(config).__name__}")
    _GLOBALS["config"] = config


def get_global_config() -> Config:
    """Return the process-wide configuration."""
    config = _GLOBALS["config"]
    if config is None:
        raise RuntimeError("Failed to load the current config")
    return config


def set_global_mode(mode: Mode | None) -> None:
    """Install the process-wide run mode; ``None`` clears it."""
    _GLOBALS["mode"] = Mode(mode) if mode is not None else None


def get_global_mode() -> Mode:
    """Return the process-wide run mode."""
    mode = _GLOBALS["mode"]
    if mode is None:
        raise RuntimeError("Failed to load the current mode")
    return mode