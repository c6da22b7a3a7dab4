"""
Provider exception hierarchy.

All exceptions inherit from ``PostgrestProviderError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from typing import Any


class PostgrestProviderError(Exception):
    """Base exception for all provider errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class FilterKeyError(PostgrestProviderError, ValueError):
    """Raised when a filter key carries an ambiguous operator suffix."""

    def __init__(self, key: str, separator: str) -> None:
        self.key = key
        self.separator = separator
        super().__init__(
            f"Invalid filter key {key!r}: expected 'field' or "
            f"'field{separator}operator' with non-empty parts. "
            f"Field names must not contain {separator!r}."
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_FILTER_KEY",
            "key": self.key,
            "separator": self.separator,
        }


class MalformedIdentifierError(PostgrestProviderError, ValueError):
    """Raised when a compound identifier is not a JSON array of the key's length."""

    def __init__(self, identifier: object, primary_key: tuple[str, ...]) -> None:
        self.identifier = identifier
        self.primary_key = primary_key
        super().__init__(
            f"Identifier {identifier!r} is not a JSON array of "
            f"{len(primary_key)} values for compound key {list(primary_key)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MALFORMED_IDENTIFIER",
            "identifier": str(self.identifier),
            "primary_key": list(self.primary_key),
        }


class UnsupportedQueryError(PostgrestProviderError):
    """Raised when no matching clause exists for the requested addressing."""

    def __init__(self, resource: str, reason: str) -> None:
        self.resource = resource
        self.reason = reason
        super().__init__(f"Unsupported query on {resource!r}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_QUERY",
            "resource": self.resource,
            "reason": self.reason,
        }


class MissingHeaderError(PostgrestProviderError):
    """Raised when a listing response lacks the pagination-total header."""

    def __init__(self, header: str = "Content-Range") -> None:
        self.header = header
        super().__init__(
            f"The {header} header is missing in the HTTP response. "
            "The data provider expects responses for lists of resources to "
            "contain this header with the total number of results to build "
            f"the pagination. If you are using CORS, did you declare {header} "
            "in the Access-Control-Expose-Headers header?"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MISSING_HEADER",
            "header": self.header,
            "message": str(self),
        }


class MalformedHeaderError(PostgrestProviderError):
    """Raised when the pagination-total header does not end in an integer total."""

    def __init__(self, header: str, value: str) -> None:
        self.header = header
        self.value = value
        super().__init__(
            f"Cannot read a total from {header}: {value!r}. "
            "Was the request sent with 'Prefer: count=exact'?"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MALFORMED_HEADER",
            "header": self.header,
            "value": self.value,
        }


class HttpError(PostgrestProviderError):
    """Raised by the HTTP transport when the API answers with a non-2xx status."""

    def __init__(self, status: int, body: Any = None, url: str | None = None) -> None:
        self.status = status
        self.body = body
        self.url = url
        message = f"HTTP {status}"
        if url:
            message += f" from {url}"
        if isinstance(body, dict) and body.get("message"):
            message += f": {body['message']}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "HTTP_ERROR",
            "status": self.status,
            "body": self.body,
        }
