"""Typed accessors for TOML data.

``tomllib`` gives back plain ``dict[str, Any]``; these helpers narrow values
at the boundary. A missing key yields ``None``; a present key of the wrong
type raises ``TypeError`` so the config loader can report it.
"""

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
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    value = table.get(key)
    if value is None:
        return None
    result = as_str_dict(value)
    if result is None:
        raise TypeError(f"[{key}] must be a table")
    return result


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty string, stripped of surrounding whitespace."""
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    s = value.strip()
    if not s:
        raise ValueError(f"{key} must not be empty")
    return s


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean, got {type(value).__name__}")
    return value


def get_seconds(table: Mapping[str, object], key: str) -> float | None:
    """Get a positive duration in seconds (int or float)."""
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeError(f"{key} must be a number, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"{key} must be positive")
    return float(value)
