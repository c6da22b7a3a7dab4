"""
Primary key handling: scalar and compound identifiers.

A resource's primary key is an ordered tuple of field names. Scalar keys
use the raw field value as identifier; compound keys use a compact JSON
array of the key values, in key order::

    >>> encode_id({"a": "x", "b": "y", "c": 1}, ("a", "b"))
    '["x","y"]'
    >>> decode_id('["x","y"]', ("a", "b"))
    ['x', 'y']
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .exceptions import MalformedIdentifierError
from .utils import render_scalar

PrimaryKey = tuple[str, ...]
Identifier = str | int

DEFAULT_PRIMARY_KEY: PrimaryKey = ("id",)


class PrimaryKeyRegistry(Mapping[str, PrimaryKey]):
    """
    Immutable resource name → primary key mapping.

    Built once from configuration and shared read-only by every call.
    Resources that are not registered fall back to ``("id",)``.
    """

    __slots__ = ("_keys",)

    def __init__(self, keys: Mapping[str, Any] | None = None) -> None:
        normalised: dict[str, PrimaryKey] = {}
        for resource, key in (keys or {}).items():
            fields = (key,) if isinstance(key, str) else tuple(key)
            if not fields:
                raise ValueError(f"Primary key of {resource!r} must not be empty")
            normalised[resource] = fields
        self._keys: Mapping[str, PrimaryKey] = MappingProxyType(normalised)

    def __getitem__(self, resource: str) -> PrimaryKey:
        return self._keys[resource]

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"PrimaryKeyRegistry({dict(self._keys)!r})"

    def for_resource(self, resource: str) -> PrimaryKey:
        return self._keys.get(resource, DEFAULT_PRIMARY_KEY)


def primary_key_for(
    resource: str, registry: Mapping[str, PrimaryKey] | None = None
) -> PrimaryKey:
    """Return the registered key of ``resource``, defaulting to ``("id",)``."""
    if registry is None:
        return DEFAULT_PRIMARY_KEY
    return tuple(registry.get(resource, DEFAULT_PRIMARY_KEY))


def is_compound(primary_key: PrimaryKey) -> bool:
    return len(primary_key) > 1


def encode_id(record: Mapping[str, Any], primary_key: PrimaryKey) -> Identifier:
    """
    Build the external identifier of ``record``.

    Missing key fields encode as ``null`` inside a compound identifier.
    """
    if is_compound(primary_key):
        return json.dumps(
            [record.get(key) for key in primary_key], separators=(",", ":")
        )
    return record.get(primary_key[0])  # type: ignore[return-value]


def decode_id(identifier: Identifier, primary_key: PrimaryKey) -> list[str]:
    """
    Split an identifier back into key values aligned with ``primary_key``.

    Raises:
        MalformedIdentifierError: a compound identifier is not a JSON array
            holding exactly one value per key field.
    """
    if not is_compound(primary_key):
        return [render_scalar(identifier)]
    try:
        values = json.loads(str(identifier))
    except (TypeError, ValueError) as e:
        raise MalformedIdentifierError(identifier, primary_key) from e
    if not isinstance(values, list) or len(values) != len(primary_key):
        raise MalformedIdentifierError(identifier, primary_key)
    return [render_scalar(v) for v in values]


def key_projection(
    primary_key: PrimaryKey, record: Mapping[str, Any]
) -> dict[str, Any]:
    """Return the key fields present in ``record``; absent ones are left out."""
    return {key: record[key] for key in primary_key if key in record}
