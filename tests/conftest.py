"""Shared fixtures for provider tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from postgrest_provider import (
    HttpResponse,
    PostgrestDataProvider,
    PrimaryKeyRegistry,
    ProviderConfig,
    QueryBuilder,
)

API_URL = "http://api.test"


class FakeHttpClient:
    """Records requests and replays queued responses."""

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self.responses: list[HttpResponse] = []

    def queue(
        self,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
        status: int = 200,
    ) -> None:
        self.responses.append(
            HttpResponse(status=status, headers=dict(headers or {}), json=json)
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> HttpResponse:
        self.requests.append(
            {"method": method, "url": url, "headers": dict(headers), "body": body}
        )
        return self.responses.pop(0)

    @property
    def last(self) -> dict[str, Any]:
        return self.requests[-1]


@pytest.fixture
def config() -> ProviderConfig:
    return ProviderConfig(
        api_url=API_URL + "/",
        primary_keys={
            "memberships": ("user_id", "group_id"),
            "rpc/membership": ("user_id", "group_id"),
            "accounts": ("account_no",),
        },
    )


@pytest.fixture
def registry(config: ProviderConfig) -> PrimaryKeyRegistry:
    return config.registry()


@pytest.fixture
def builder() -> QueryBuilder:
    return QueryBuilder()


@pytest.fixture
def client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def provider(config: ProviderConfig, client: FakeHttpClient) -> PostgrestDataProvider:
    return PostgrestDataProvider(config, client)
