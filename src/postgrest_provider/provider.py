"""
PostgrestDataProvider: CRUD operations mapped onto a PostgREST API.

Example requests::

    get_list           GET    /posts?order=title.asc&offset=0&limit=24&title=ilike.*foo*
    get_one            GET    /posts?id=eq.123
    get_many           GET    /posts?id=in.(123,456,789)
    get_many_reference GET    /posts?author_id=eq.345&order=id.asc&offset=0&limit=25
    create             POST   /posts
    update             PATCH  /posts?id=eq.123
    update_many        PATCH  /posts?id=in.(123,456,789)
    delete             DELETE /posts?id=eq.123
    delete_many        DELETE /posts?id=in.(123,456,789)

Compound keys are addressed with ``and=(...)`` / ``or=(and(...),...)``;
``rpc/`` resources receive compound keys as named arguments.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from .filters import FilterTranslator
from .params import (
    CreateParams,
    DeleteManyParams,
    DeleteParams,
    GetListParams,
    GetManyParams,
    GetManyReferenceParams,
    GetOneParams,
    IdsResult,
    ListResult,
    ManyResult,
    RecordResult,
    UpdateManyParams,
    UpdateParams,
)
from .primary_key import encode_id, key_projection
from .query_builder import QueryBuilder
from .response import CONTENT_RANGE, extract_total, with_generic_id

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .config import ProviderConfig
    from .ports import HttpResponse, IHttpClient
    from .primary_key import PrimaryKey

logger = logging.getLogger("postgrest_provider.provider")

JSON = "application/json"
SINGLE_OBJECT = "application/vnd.pgrst.object+json"

LIST_HEADERS = {"Accept": JSON, "Prefer": "count=exact"}
ONE_HEADERS = {"Accept": SINGLE_OBJECT}
WRITE_ONE_HEADERS = {
    "Accept": SINGLE_OBJECT,
    "Prefer": "return=representation",
    "Content-Type": JSON,
}
WRITE_MANY_HEADERS = {"Prefer": "return=representation", "Content-Type": JSON}


class PostgrestDataProvider:
    """
    Per-operation dispatcher composing the query builder, the response
    shaper and an injected transport.

    Holds only the immutable configuration, its primary key registry and
    the client; every call builds its query from scratch.
    """

    def __init__(self, config: ProviderConfig, client: IHttpClient) -> None:
        self._config = config
        self._client = client
        self._registry = config.registry()
        self._builder = QueryBuilder(
            FilterTranslator(
                config.default_list_operator, separator=config.operator_separator
            ),
            rpc_prefix=config.rpc_prefix,
            id_field=config.id_field,
        )

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def query_builder(self) -> QueryBuilder:
        return self._builder

    def primary_key(self, resource: str) -> PrimaryKey:
        return self._registry.for_resource(resource)

    # -- reads --------------------------------------------------------------

    async def get_list(self, resource: str, params: GetListParams) -> ListResult:
        return await self._list(resource, params)

    async def get_many_reference(
        self, resource: str, params: GetManyReferenceParams
    ) -> ListResult:
        return await self._list(
            resource, params, target=params.target, target_id=params.id
        )

    async def get_one(self, resource: str, params: GetOneParams) -> RecordResult:
        pk = self.primary_key(resource)
        response = await self._send(
            "GET", self._url(resource, pk, params.id), ONE_HEADERS
        )
        return RecordResult(data=self._shape(response.json, pk))

    async def get_many(self, resource: str, params: GetManyParams) -> ManyResult:
        pk = self.primary_key(resource)
        response = await self._send("GET", self._url(resource, pk, params.ids), {})
        return ManyResult(data=[self._shape(r, pk) for r in response.json or []])

    # -- writes -------------------------------------------------------------

    async def create(self, resource: str, params: CreateParams) -> RecordResult:
        pk = self.primary_key(resource)
        url = f"{self._config.api_url}/{resource}"
        response = await self._send(
            "POST", url, WRITE_ONE_HEADERS, json.dumps(params.data)
        )
        data = dict(params.data)
        data[self._config.id_field] = encode_id(response.json or {}, pk)
        return RecordResult(data=data)

    async def update(self, resource: str, params: UpdateParams) -> RecordResult:
        pk = self.primary_key(resource)
        # Key columns in a PATCH body must match the URL's filter.
        body = {
            **self._without_generic_id(params.data, pk),
            **key_projection(pk, params.data),
        }
        response = await self._send(
            "PATCH",
            self._url(resource, pk, params.id),
            WRITE_ONE_HEADERS,
            json.dumps(body),
        )
        return RecordResult(data=self._shape(response.json, pk))

    async def update_many(
        self, resource: str, params: UpdateManyParams
    ) -> IdsResult:
        pk = self.primary_key(resource)
        body = self._without_generic_id(params.data, pk)
        response = await self._send(
            "PATCH",
            self._url(resource, pk, params.ids),
            WRITE_MANY_HEADERS,
            json.dumps(body),
        )
        return IdsResult(data=[encode_id(r, pk) for r in response.json or []])

    async def delete(self, resource: str, params: DeleteParams) -> RecordResult:
        pk = self.primary_key(resource)
        response = await self._send(
            "DELETE", self._url(resource, pk, params.id), WRITE_ONE_HEADERS
        )
        return RecordResult(data=self._shape(response.json, pk))

    async def delete_many(
        self, resource: str, params: DeleteManyParams
    ) -> IdsResult:
        pk = self.primary_key(resource)
        response = await self._send(
            "DELETE", self._url(resource, pk, params.ids), WRITE_MANY_HEADERS
        )
        return IdsResult(data=[encode_id(r, pk) for r in response.json or []])

    # -- internals ----------------------------------------------------------

    async def _list(
        self,
        resource: str,
        params: GetListParams,
        *,
        target: str | None = None,
        target_id: Any = None,
    ) -> ListResult:
        pk = self.primary_key(resource)
        query = self._builder.list_params(
            pk,
            params.pagination,
            params.sort,
            params.filter,
            target=target,
            target_id=target_id,
        )
        url = f"{self._config.api_url}/{resource}?{self._builder.encode(query)}"
        response = await self._send("GET", url, LIST_HEADERS)
        total = extract_total(response.header(CONTENT_RANGE))
        return ListResult(
            data=[self._shape(r, pk) for r in response.json or []], total=total
        )

    def _url(self, resource: str, pk: PrimaryKey, ids: Any) -> str:
        match = self._builder.match_params(pk, ids, resource)
        return f"{self._config.api_url}/{resource}?{self._builder.encode(match)}"

    def _shape(self, record: Mapping[str, Any], pk: PrimaryKey) -> dict[str, Any]:
        return with_generic_id(record, pk, self._config.id_field)

    def _without_generic_id(
        self, data: Mapping[str, Any], pk: PrimaryKey
    ) -> dict[str, Any]:
        body = dict(data)
        if self._config.id_field not in pk:
            body.pop(self._config.id_field, None)
        return body

    async def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> HttpResponse:
        logger.debug("%s %s", method, url)
        return await self._client.request(method, url, headers=dict(headers), body=body)
