"""
Shared utility functions for the provider package.

These are pure-Python helpers with no infrastructure dependencies.
"""

from __future__ import annotations

import json
from typing import Any


def render_scalar(value: Any) -> str:
    """
    Render a scalar the way it appears inside a PostgREST query value.

    Strings are returned untouched. Booleans and ``None`` use their JSON
    spelling (``true``, ``false``, ``null``); everything else goes through
    ``str()``.
    """
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, bool):
        return json.dumps(value)
    return str(value)


def strip_colons(value: str) -> str:
    """Remove every ``:`` (PostgREST reserves it for casts and ranges)."""
    return value.replace(":", "")
