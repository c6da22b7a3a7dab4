"""IHttpClient: protocol for the transport issuing provider requests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class HttpResponse:
    """Decoded response handed back by the transport."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    json: Any = None

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


@runtime_checkable
class IHttpClient(Protocol):
    """Send one request and return its decoded response.

    Implementations own retries, timeouts and authentication; a non-2xx
    answer must be raised, not returned.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> HttpResponse:
        ...
