"""Minimal in-memory metrics collector.

Purpose:
    - Count loads, environment overrides and rejected variables so tests and
      host applications can see what the registry did.
    - Zero external deps; can be swapped by a Prometheus exporter later.

Core API (intentionally tiny):
    inc(name, labels=None, value=1)
    snapshot() -> dict (copy for safe reading)
    reset_for_tests()

Metric names:
    - config_load_total{source}                    # file | env | mapping
    - config_env_override_total{variable}
    - config_unsupported_variable_total{source}
    - config_scope_total

Thread-safety: coarse RLock; overhead negligible for low event volume.
"""
from __future__ import annotations

from threading import RLock
from time import time
from typing import Dict, Tuple, Any

_COUNTERS: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], float] = {}
_LOCK = RLock()


def _norm_labels(labels: dict[str, Any] | None) -> Tuple[Tuple[str, str], ...]:
    if not labels:
        return tuple()
    return tuple(sorted((str(k), str(v)) for k, v in labels.items()))


def inc(
    name: str,
    labels: dict[str, Any] | None = None,
    value: float = 1.0,
) -> None:
    key = (name, _norm_labels(labels))
    with _LOCK:
        _COUNTERS[key] = _COUNTERS.get(key, 0.0) + value


def snapshot() -> dict[str, Any]:
    with _LOCK:
        counters: dict[str, float] = {}
        for (name, labels), v in _COUNTERS.items():
            label_str = ""
            if labels:
                label_str = "{" + ",".join(f"{k}={v}" for k, v in labels) + "}"
            counters[name + label_str] = v
        return {
            "ts": time(),
            "counters": counters,
        }


def reset_for_tests() -> None:
    with _LOCK:
        _COUNTERS.clear()


__all__ = [
    "inc",
    "snapshot",
    "reset_for_tests",
]


# ------------------- Helper wrappers -------------------

def inc_load(source: str) -> None:
    inc("config_load_total", {"source": source})


def inc_env_override(variable: str) -> None:
    inc("config_env_override_total", {"variable": variable})


def inc_unsupported_variable(source: str) -> None:
    """Increment rejected-variable counter.

    source: get | set | file | env | override
    """
    if source:
        inc("config_unsupported_variable_total", {"source": source})


def inc_scope() -> None:
    inc("config_scope_total")


__all__ += [
    "inc_load",
    "inc_env_override",
    "inc_unsupported_variable",
    "inc_scope",
]
