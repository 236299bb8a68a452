"""Server-side building blocks for a React fullstack framework: handlers, SSR payloads, env and manifest loading."""

__version__ = "0.19.5"

__all__ = [
    "catch_all",
    "config",
    "env",
    "handlers",
    "logger",
    "manifest",
    "payload",
    "request",
    "response",
    "ssr",
]