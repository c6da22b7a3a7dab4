"""
FilterTranslator: loosely typed filter mapping -> PostgREST query values.

Each filter value is wrapped once into a :class:`FilterValue` tagged with
its :class:`FilterValueKind`; the operator is then chosen by looking the
tag up in one of two tables, depending on whether the filter key carries
an explicit ``@operator`` suffix.

Example::

    >>> FilterTranslator().translate({"name": "john", "age@gte": 18})
    {'name': 'ilike.*john*', 'age@gte': 'gte.18'}
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple

from .exceptions import FilterKeyError
from .operators import PostgrestOperator
from .utils import render_scalar, strip_colons

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_SEPARATOR = "@"


class FilterValueKind(str, Enum):
    TEXT = "text"
    BOOLEAN = "boolean"
    NULL = "null"
    NUMBER = "number"
    LIST = "list"
    MAPPING = "mapping"
    OTHER = "other"


@dataclass(frozen=True)
class FilterValue:
    """A raw filter value together with its kind, decided at construction."""

    kind: FilterValueKind
    raw: Any

    @classmethod
    def of(cls, value: Any) -> FilterValue:
        if isinstance(value, FilterValue):
            return value
        return cls(_classify(value), value)


def _classify(value: Any) -> FilterValueKind:
    # bool is checked before Number: True is an int in Python.
    if value is None:
        return FilterValueKind.NULL
    if isinstance(value, bool):
        return FilterValueKind.BOOLEAN
    if isinstance(value, str):
        return FilterValueKind.TEXT
    if isinstance(value, numbers.Number):
        return FilterValueKind.NUMBER
    if isinstance(value, list | tuple | set | frozenset):
        return FilterValueKind.LIST
    if isinstance(value, Mapping):
        return FilterValueKind.MAPPING
    return FilterValueKind.OTHER


class FilterKey(NamedTuple):
    """A filter key split into field and optional explicit operator."""

    key: str
    field: str
    operator: str | None


def parse_filter_key(key: str, separator: str = DEFAULT_SEPARATOR) -> FilterKey:
    """
    Split ``field`` or ``field<separator>operator``.

    Raises:
        FilterKeyError: more than one separator, or an empty part.
    """
    parts = key.split(separator)
    if len(parts) == 1:
        return FilterKey(key, key, None)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise FilterKeyError(key, separator)
    return FilterKey(key, parts[0], parts[1])


# -- formatters ---------------------------------------------------------------
#
# Signature: (filter_key, raw_value, operator) -> {output_key: output_value}


def _substring(fk: FilterKey, raw: Any, op: str) -> dict[str, Any]:
    return {fk.key: f"{op}.*{strip_colons(render_scalar(raw))}*"}


def _plain(fk: FilterKey, raw: Any, op: str) -> dict[str, Any]:
    return {fk.key: f"{op}.{render_scalar(raw)}"}


def _null(fk: FilterKey, raw: Any, op: str) -> dict[str, Any]:
    return {fk.key: f"{PostgrestOperator.IS.value}.null"}


def _array(fk: FilterKey, raw: Any, op: str) -> dict[str, Any]:
    items = ",".join(render_scalar(v) for v in raw)
    return {fk.key: f"{op}.{{{strip_colons(items)}}}"}


def _json_paths(fk: FilterKey, raw: Any, op: str) -> dict[str, Any]:
    return {
        f"{fk.field}->>{nested}": f"{op}.*{render_scalar(value)}*"
        for nested, value in raw.items()
    }


def _pass_through(fk: FilterKey, raw: Any, op: str) -> dict[str, Any]:
    # Procedure argument, not a column filter.
    return {fk.key: raw}


# kind -> (formatter, operator used when the key has no suffix)
_IMPLICIT: dict[
    FilterValueKind, tuple[Callable[[FilterKey, Any, str], dict[str, Any]], str]
] = {
    FilterValueKind.TEXT: (_substring, PostgrestOperator.ILIKE.value),
    FilterValueKind.BOOLEAN: (_plain, PostgrestOperator.IS.value),
    FilterValueKind.NULL: (_null, PostgrestOperator.IS.value),
    FilterValueKind.NUMBER: (_plain, PostgrestOperator.EQ.value),
    FilterValueKind.LIST: (_array, PostgrestOperator.CS.value),
    FilterValueKind.MAPPING: (_json_paths, PostgrestOperator.ILIKE.value),
    FilterValueKind.OTHER: (_substring, PostgrestOperator.ILIKE.value),
}

_EXPLICIT: dict[FilterValueKind, Callable[[FilterKey, Any, str], dict[str, Any]]] = {
    FilterValueKind.TEXT: _substring,
    FilterValueKind.BOOLEAN: _plain,
    FilterValueKind.NULL: _null,
    FilterValueKind.NUMBER: _plain,
    FilterValueKind.LIST: _array,
    FilterValueKind.MAPPING: _pass_through,
    FilterValueKind.OTHER: _substring,
}


class FilterTranslator:
    """
    Translate a filter mapping into PostgREST query parameters.

    Output keys keep the full original key, suffix included
    (``{"name@neq": "john"}`` -> ``{"name@neq": "neq.*john*"}``); the only
    exception is a nested mapping without suffix, which expands into one
    ``field->>nested`` entry per nested key.

    Field names must not contain the separator.

    Keys without a suffix always get the fixed operator of their value's
    kind (numbers match with ``eq``); ``default_operator`` is kept on the
    translator for callers but does not change that choice.
    """

    def __init__(
        self,
        default_operator: str = PostgrestOperator.EQ.value,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        self._default_operator = getattr(default_operator, "value", default_operator)
        self._separator = separator

    @property
    def default_operator(self) -> str:
        return self._default_operator

    def translate(self, filter: Mapping[str, Any] | None) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in (filter or {}).items():
            result.update(self.translate_entry(key, value))
        return result

    def translate_entry(self, key: str, value: Any) -> dict[str, Any]:
        fk = parse_filter_key(key, self._separator)
        fv = FilterValue.of(value)
        if fk.operator is None:
            formatter, operator = _IMPLICIT[fv.kind]
            return formatter(fk, fv.raw, operator)
        return _EXPLICIT[fv.kind](fk, fv.raw, fk.operator)


def translate(
    filter: Mapping[str, Any] | None,
    default_operator: str = PostgrestOperator.EQ.value,
) -> dict[str, Any]:
    """Shortcut for ``FilterTranslator(default_operator).translate(filter)``."""
    return FilterTranslator(default_operator).translate(filter)
