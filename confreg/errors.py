"""Configuration registry exception hierarchy."""
from __future__ import annotations

from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """Base configuration exception."""


class UnsupportedVariableError(ConfigError):
    """Raised when an undeclared variable is read, written or loaded.

    Sources: direct get/set, a YAML file key, an environment variable or a
    scoped override.
    """

    def __init__(self, variable: Any, source: str | None = None):
        self.variable = variable
        self.source = source
        msg = f"Unsupported configuration variable: {variable!r}"
        if source:
            msg += f" (source={source})"
        super().__init__(msg)


class LoadError(ConfigError):
    """Raised when a configuration file cannot be turned into a mapping.

    Typical reasons: missing file, YAML syntax error, non-mapping document,
    non-scalar value.
    """

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class InitializationError(ConfigError):
    """Raised by ``after_initialize`` overrides when post-load checks fail."""


__all__ = [
    "ConfigError",
    "UnsupportedVariableError",
    "LoadError",
    "InitializationError",
]
