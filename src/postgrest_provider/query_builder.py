"""QueryBuilder: sort, pagination, id matching and filters -> query string."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from .exceptions import UnsupportedQueryError
from .filters import FilterTranslator
from .operators import PostgrestOperator, SortOrder
from .primary_key import decode_id, is_compound
from .utils import render_scalar

if TYPE_CHECKING:
    from .params import PaginationSpec, SortSpec
    from .primary_key import Identifier, PrimaryKey

logger = logging.getLogger("postgrest_provider.query")

DEFAULT_RPC_PREFIX = "rpc/"
DEFAULT_ID_FIELD = "id"

_EQ = PostgrestOperator.EQ.value
_IN = PostgrestOperator.IN.value
_AND = PostgrestOperator.AND.value
_OR = PostgrestOperator.OR.value


def _as_id_list(ids: Identifier | Sequence[Identifier]) -> list[Identifier]:
    if isinstance(ids, str | bytes) or not isinstance(ids, Sequence):
        return [ids]  # type: ignore[list-item]
    return list(ids)


def _key_conditions(primary_key: PrimaryKey, values: list[str]) -> str:
    return ",".join(f"{key}.{_EQ}.{value}" for key, value in zip(primary_key, values))


class QueryBuilder:
    """
    Build PostgREST query parameters for listing and id-addressed requests.

    Parameters merge in this order: reference match, ``order``, ``offset``,
    ``limit``, filters. A later key overwrites an earlier one of the same
    name, so a filter on the reference target field replaces the implicit
    ``<target>=eq.<id>`` match.
    """

    def __init__(
        self,
        translator: FilterTranslator | None = None,
        *,
        rpc_prefix: str = DEFAULT_RPC_PREFIX,
        id_field: str = DEFAULT_ID_FIELD,
    ) -> None:
        self._translator = translator or FilterTranslator()
        self._rpc_prefix = rpc_prefix
        self._id_field = id_field

    def is_procedure(self, resource: str) -> bool:
        return resource.startswith(self._rpc_prefix)

    # -- sort / pagination --------------------------------------------------

    def order_by(
        self, field: str, order: SortOrder | str, primary_key: PrimaryKey
    ) -> str:
        """Render an ``order`` value; the generic id expands to the key fields."""
        direction = SortOrder(order).value.lower()
        if field == self._id_field:
            return ",".join(f"{key}.{direction}" for key in primary_key)
        return f"{field}.{direction}"

    @staticmethod
    def paginate(pagination: PaginationSpec) -> dict[str, str]:
        return {
            "offset": str((pagination.page - 1) * pagination.per_page),
            "limit": str(pagination.per_page),
        }

    # -- id matching --------------------------------------------------------

    def match_params(
        self,
        primary_key: PrimaryKey,
        ids: Identifier | Sequence[Identifier],
        resource: str,
    ) -> dict[str, str]:
        """
        Return the query parameters selecting ``ids`` on ``resource``.

        Raises:
            UnsupportedQueryError: several ids against a procedure resource.
            MalformedIdentifierError: a compound id is not a JSON array.
        """
        id_list = _as_id_list(ids)
        if not id_list:
            raise UnsupportedQueryError(resource, "no identifier to match")
        if len(id_list) > 1:
            return self._match_many(primary_key, id_list, resource)
        return self._match_one(primary_key, id_list[0], resource)

    def match_clause(
        self,
        primary_key: PrimaryKey,
        ids: Identifier | Sequence[Identifier],
        resource: str,
    ) -> str:
        """Unencoded ``key=value&...`` rendering of :meth:`match_params`."""
        params = self.match_params(primary_key, ids, resource)
        return "&".join(f"{key}={value}" for key, value in params.items())

    def _match_many(
        self, primary_key: PrimaryKey, ids: list[Identifier], resource: str
    ) -> dict[str, str]:
        if self.is_procedure(resource):
            logger.error(
                "No query generation for multiple key values on procedure %s",
                resource,
            )
            raise UnsupportedQueryError(
                resource,
                "procedure endpoints are not views; "
                "multiple key values cannot be matched",
            )
        if is_compound(primary_key):
            groups = ",".join(
                f"{_AND}({_key_conditions(primary_key, decode_id(i, primary_key))})"
                for i in ids
            )
            return {_OR: f"({groups})"}
        values = ",".join(decode_id(i, primary_key)[0] for i in ids)
        return {primary_key[0]: f"{_IN}.({values})"}

    def _match_one(
        self, primary_key: PrimaryKey, id: Identifier, resource: str
    ) -> dict[str, str]:
        values = decode_id(id, primary_key)
        if not is_compound(primary_key):
            return {primary_key[0]: f"{_EQ}.{values[0]}"}
        if self.is_procedure(resource):
            # Procedures take named arguments, not filters.
            return dict(zip(primary_key, values))
        return {_AND: f"({_key_conditions(primary_key, values)})"}

    # -- listings -----------------------------------------------------------

    def list_params(
        self,
        primary_key: PrimaryKey,
        pagination: PaginationSpec,
        sort: SortSpec,
        filter: Mapping[str, Any] | None = None,
        *,
        target: str | None = None,
        target_id: Identifier | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if target:
            params[target] = f"{_EQ}.{render_scalar(target_id)}"
        params["order"] = self.order_by(sort.field, sort.order, primary_key)
        params.update(self.paginate(pagination))
        params.update(self._translator.translate(filter))
        logger.debug("Built list parameters %s", params)
        return params

    @staticmethod
    def encode(params: Mapping[str, Any]) -> str:
        """Percent-encode ``params``; mapping values are sent as JSON."""
        return urlencode(
            {
                key: json.dumps(value) if isinstance(value, Mapping) else value
                for key, value in params.items()
            }
        )
