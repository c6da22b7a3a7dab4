"""ProviderConfig: immutable provider settings, validated once at start-up."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .filters import DEFAULT_SEPARATOR
from .operators import PostgrestOperator
from .primary_key import PrimaryKeyRegistry
from .query_builder import DEFAULT_ID_FIELD, DEFAULT_RPC_PREFIX


class ProviderConfig(BaseModel):
    """
    Settings shared by every call of one data provider.

    Attributes:
        api_url: Base URL of the API, without trailing slash.
        default_list_operator: Operator used for values whose kind has no
            fixed implicit operator (numbers).
        primary_keys: Resource name -> ordered key fields. Unlisted
            resources use ``("id",)``.
        rpc_prefix: Resource-name prefix marking stored procedures.
        operator_separator: Character separating a filter field from its
            explicit operator.
        id_field: Name of the generic identifier field on records.
    """

    model_config = ConfigDict(frozen=True)

    api_url: str
    default_list_operator: str = PostgrestOperator.EQ.value
    primary_keys: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    rpc_prefix: str = DEFAULT_RPC_PREFIX
    operator_separator: str = Field(
        default=DEFAULT_SEPARATOR, min_length=1, max_length=1
    )
    id_field: str = DEFAULT_ID_FIELD

    @field_validator("api_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        v = v.rstrip("/")
        if not v:
            raise ValueError("api_url must not be empty")
        return v

    @field_validator("default_list_operator", mode="before")
    @classmethod
    def _known_operator(cls, v: Any) -> str:
        value = getattr(v, "value", v)
        valid = [op.value for op in PostgrestOperator]
        if value not in valid:
            raise ValueError(
                f"Unknown operator {value!r}. Valid operators: {', '.join(valid)}"
            )
        return value

    @field_validator("primary_keys", mode="before")
    @classmethod
    def _non_empty_keys(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        out: dict[str, tuple[str, ...]] = {}
        for resource, key in v.items():
            fields = (key,) if isinstance(key, str) else tuple(key)
            if not fields:
                raise ValueError(f"primary key of {resource!r} must not be empty")
            out[resource] = fields
        return out

    def registry(self) -> PrimaryKeyRegistry:
        return PrimaryKeyRegistry(self.primary_keys)
