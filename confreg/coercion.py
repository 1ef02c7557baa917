"""Value coercion helpers (pure functions, no registry state).

Stored values are ``str | None``. Loaders and ``Registry.set`` funnel every
incoming value through :func:`to_config_value` so the string form of a
decoded YAML scalar is predictable:

    None            -> None (absent)
    str             -> unchanged
    bool            -> "true" / "false"
    int / float     -> str(value)
    date / datetime -> value.isoformat()
    list/dict/...   -> TypeError
"""
from __future__ import annotations

import datetime as _dt
from typing import Any

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})

_CONTAINER_TYPES = (list, tuple, dict, set, frozenset)


def to_config_value(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (_dt.date, _dt.datetime)):
        return value.isoformat()
    if isinstance(value, _CONTAINER_TYPES):
        raise TypeError(
            f"non-scalar configuration value: {type(value).__name__}"
        )
    return str(value)


def is_true(value: str | None) -> bool:
    """Return True for ``true``/``1``/``yes``/``on`` (trimmed, any case)."""
    if value is None:
        return False
    return value.strip().lower() in TRUE_VALUES


def is_false(value: str | None) -> bool:
    return not is_true(value)


__all__ = ["TRUE_VALUES", "to_config_value", "is_true", "is_false"]
