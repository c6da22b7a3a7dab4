"""HttpxClient: ``IHttpClient`` backed by ``httpx.AsyncClient``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import HttpError
from .ports import HttpResponse, IHttpClient

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger("postgrest_provider.transport")


class HttpxClient(IHttpClient):
    """
    Plain JSON transport over httpx.

    Extra headers (e.g. ``Authorization``) are sent with every request;
    per-request headers win on conflict.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        headers: Mapping[str, str] | None = None,
        client: Any = None,
    ) -> None:
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._client = client

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> HttpResponse:
        # Lazy import of httpx
        try:
            import httpx
        except ImportError as e:
            raise ImportError(
                "httpx is required for HttpxClient. "
                "Install with: pip install 'postgrest-data-provider[http]'"
            ) from e

        merged = {**self.headers, **headers}
        logger.debug("%s %s", method, url)
        if self._client is not None:
            response = await self._client.request(
                method, url, headers=merged, content=body
            )
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method, url, headers=merged, content=body
                )

        payload = _decode(response)
        if response.status_code < 200 or response.status_code >= 300:
            logger.error("HTTP %s from %s %s", response.status_code, method, url)
            raise HttpError(response.status_code, payload, url)
        return HttpResponse(
            status=response.status_code,
            headers=dict(response.headers.items()),
            json=payload,
        )


def _decode(response: Any) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
