"""Field name conversions and nested value lookup."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

# Matches one "[segment]" of a bracketed field name like user[address][city]
_BRACKET_SEGMENT = re.compile(r"\[([^\]]*)\]")

_MISSING = object()


def _segments(name: str) -> list[str]:
    """Split user[address][city] into ['user', 'address', 'city']. Empty segments are dropped."""
    head, _, rest = name.partition("[")
    segments = [head]
    if rest:
        segments.extend(_BRACKET_SEGMENT.findall("[" + rest))
    return [s for s in segments if s]


def field_name_to_id(name: str | None) -> str | None:
    """Derive an HTML id from a field name. user[address][city] -> user_address_city"""
    if not name:
        return None
    return "_".join(_segments(name))


def field_name_to_dot(name: str) -> str:
    """Convert a bracketed field name to a dotted path. user[address][city] -> user.address.city"""
    return ".".join(_segments(name))


def _get_step(target: Any, key: str) -> Any:
    if isinstance(target, Mapping):
        return target.get(key, _MISSING)
    if isinstance(target, Sequence) and not isinstance(target, (str, bytes)):
        try:
            return target[int(key)]
        except (ValueError, IndexError):
            return _MISSING
    return getattr(target, key, _MISSING)


def data_get(target: Any, path: str, default: Any = None) -> Any:
    """Walk a dotted path through mappings, sequences, and object attributes.

    Returns *default* as soon as a step cannot be resolved or resolves to None.
    """
    if target is None:
        return default
    if not path:
        return target

    for key in path.split("."):
        target = _get_step(target, key)
        if target is _MISSING or target is None:
            return default
    return target
