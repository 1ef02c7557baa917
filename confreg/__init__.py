"""Config registry public API.

Provides:
    Registry                 -> declared variable set + values
    install(registry)        -> make it the process-wide registry
    get_registry()           -> the installed registry
    ConfigError & subclasses -> UnsupportedVariableError, LoadError,
                                InitializationError
"""
from __future__ import annotations

import threading
from typing import Optional

from .errors import (  # noqa: F401
    ConfigError,
    InitializationError,
    LoadError,
    UnsupportedVariableError,
)
from .registry import DEFAULT_ENV_PREFIX, Registry  # noqa: F401
from .schema import VariableSpec  # noqa: F401

_lock = threading.Lock()
_installed: Optional[Registry] = None


def install(registry: Registry) -> Registry:
    """Install ``registry`` as the process-wide registry and return it."""
    global _installed
    with _lock:
        _installed = registry
    return registry


def get_registry() -> Registry:
    with _lock:
        if _installed is None:
            raise ConfigError("No configuration registry installed")
        return _installed


def reset_for_tests() -> None:
    """Drop the installed registry (test helper)."""
    global _installed
    with _lock:
        _installed = None


__all__ = [
    "Registry",
    "VariableSpec",
    "DEFAULT_ENV_PREFIX",
    "ConfigError",
    "InitializationError",
    "LoadError",
    "UnsupportedVariableError",
    "install",
    "get_registry",
    "reset_for_tests",
]
