"""Key and dot-path resolution on ACON values."""

from __future__ import annotations

import re

from .values import Value, VArray, VTable, _Empty, Empty

_INDEX_RE = re.compile(r"[0-9]+")


def apply_getter(value: Value | _Empty, key: str) -> Value | _Empty:
    """Resolve a single key on a value.

    - VTable: direct key lookup
    - VArray: 0-based decimal index
    - VString / Empty: returns Empty

    Missing keys, non-numeric indices and out-of-range indices all
    return Empty.
    """
    if isinstance(value, VTable):
        return value.entries.get(key, Empty)

    if isinstance(value, VArray):
        if not _INDEX_RE.fullmatch(key):
            return Empty
        try:
            idx = int(key)
        except ValueError:
            return Empty
        if idx < len(value.items):
            return value.items[idx]
        return Empty

    return Empty


def resolve_path(value: Value | _Empty, dotted: str) -> Value | _Empty:
    """Apply :func:`apply_getter` once per ``.``-separated segment.

    Empty segments are real lookups: unnamed tables and arrays live under
    the ``""`` key, so ``".0.x"`` first looks up ``""``.
    """
    current = value
    for segment in dotted.split("."):
        current = apply_getter(current, segment)
        if current is Empty:
            return Empty
    return current

