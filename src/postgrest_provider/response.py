"""ResponseShaper: generic ``id`` on records, totals from ``Content-Range``."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .exceptions import MalformedHeaderError, MissingHeaderError
from .primary_key import encode_id

if TYPE_CHECKING:
    from .primary_key import PrimaryKey

logger = logging.getLogger("postgrest_provider.response")

CONTENT_RANGE = "Content-Range"


def with_generic_id(
    record: Mapping[str, Any], primary_key: PrimaryKey, id_field: str = "id"
) -> dict[str, Any]:
    """
    Return a copy of ``record`` exposing ``id_field``.

    The value is the encoded primary key; when the key already is the
    single generic field the copy is returned unchanged. ``record`` itself
    is never modified.
    """
    shaped = dict(record)
    if tuple(primary_key) == (id_field,):
        return shaped
    shaped[id_field] = encode_id(record, primary_key)
    return shaped


def extract_total(header: str | None, header_name: str = CONTENT_RANGE) -> int:
    """
    Read the total from a ``<range>/<total>`` header, e.g. ``0-24/319``.

    Raises:
        MissingHeaderError: the header is absent (often not exposed via CORS).
        MalformedHeaderError: the part after the final ``/`` is not an integer.
    """
    if not header:
        logger.error("%s header missing from listing response", header_name)
        raise MissingHeaderError(header_name)
    total = header.rsplit("/", 1)[-1].strip()
    try:
        return int(total)
    except ValueError as e:
        raise MalformedHeaderError(header_name, header) from e
