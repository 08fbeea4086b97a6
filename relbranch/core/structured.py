"""Helpers for reading untyped TOML data at the config boundary."""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str, *, keep_empty: bool = False) -> str | None:
    """Get a string value from a mapping, stripping whitespace.

    Returns None if missing or not a str. An empty string (after stripping)
    is None unless ``keep_empty`` is set.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not s and not keep_empty:
        return None
    return s


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))
