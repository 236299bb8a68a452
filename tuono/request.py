"""Incoming request data handed to route handlers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlsplit

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class BodyParseErrorKind(str, Enum):
    """Why a request body could not be parsed."""

    IO = "io"
    SERDE = "serde"
    URL_ENCODED = "url_encoded"
    CONTENT_TYPE = "content_type"


class BodyParseError(Exception):
    """Raised when the request body cannot be read or decoded."""

    def __init__(self, kind: BodyParseErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


def _parse_query(query: str) -> dict[str, str]:
    try:
        return dict(parse_qsl(query, keep_blank_values=True, strict_parsing=False))
    except ValueError:
        return {}


@dataclass
class Location:
    """The location of a request, in the shape the client side expects."""

    href: str
    pathname: str
    search_str: str
    search: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_uri(cls, uri: str) -> Location:
        """Build a location from an absolute or origin-form URI."""
        parts = urlsplit(uri)
        path = parts.path or "/"
        query = parts.query
        if parts.scheme and parts.netloc:
            href = f"{parts.scheme}://{parts.netloc}{path}"
            if query:
                href += f"?{query}"
        else:
            href = uri
        return cls(href=href, pathname=path, search_str=query, search=_parse_query(query))

    def to_dict(self) -> dict[str, Any]:
        """Return the location as JSON-ready data."""
        return {
            "href": self.href,
            "pathname": self.pathname,
            "searchStr": self.search_str,
            "search": dict(self.search),
        }


@dataclass
class Request:
    """A request as seen by route and API handlers."""

    uri: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    raw_body: bytes | None = None

    def __post_init__(self) -> None:
        self.headers = _lower_keys(self.headers)

    def location(self) -> Location:
        """Return the client-side location of this request."""
        return Location.from_uri(self.uri)

    def body(self) -> Any:
        """Decode the body as JSON."""
        if self.raw_body is None:
            raise BodyParseError(BodyParseErrorKind.IO, "Failed to read body")
        try:
            return json.loads(self.raw_body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise BodyParseError(BodyParseErrorKind.SERDE, str(exc)) from exc

    def form_data(self) -> dict[str, str]:
        """Decode an ``application/x-www-form-urlencoded`` body."""
        content_type = self.headers.get("content-type", "")
        if FORM_CONTENT_TYPE not in content_type:
            raise BodyParseError(
                BodyParseErrorKind.CONTENT_TYPE,
                f"Invalid content type, expected {FORM_CONTENT_TYPE}",
            )
        if self.raw_body is None:
            raise BodyParseError(BodyParseErrorKind.IO, "Missing request body")
        try:
            text = self.raw_body.decode("utf-8")
            return dict(parse_qsl(text, keep_blank_values=True, strict_parsing=False))
        except (UnicodeDecodeError, ValueError) as exc:
            raise BodyParseError(BodyParseErrorKind.URL_ENCODED, str(exc)) from exc


def _lower_keys(headers: Mapping[str, str]) -> dict[str, str]:
    return {name.lower(): value for name, value in headers.items()}