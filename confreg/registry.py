"""Configuration registry with a fixed, declared variable set.

The key set is fixed when the registry is built, either statically on a
subclass::

    class AppConfig(Registry):
        ENV_PREFIX = "PREF_"
        VARIABLES = {"my_var": "default value", "default_is_nil": None}

or by passing a declaration to the constructor. Only values change
afterwards. Every access by key is validated against the declared set.

All state access goes through one RLock; ``with_config`` holds it for the
whole scope so snapshot -> overrides -> body -> restore is atomic with
respect to other threads.
"""
from __future__ import annotations

import contextlib
import logging
import threading
from pathlib import Path
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    TypeVar,
)

import yaml

from . import coercion, loader, metrics
from .autodoc.parser import parse_yaml_declaration
from .errors import LoadError, UnsupportedVariableError
from .schema import VariableSpec, build_specs

DEFAULT_ENV_PREFIX = "APP_"

T = TypeVar("T")

_log = logging.getLogger("confreg.registry")


class Registry:
    VARIABLES: ClassVar[Mapping[str, Any] | Iterable[VariableSpec]] = {}
    ENV_PREFIX: ClassVar[str] = DEFAULT_ENV_PREFIX

    def __init__(
        self,
        declaration: Mapping[str, Any] | Iterable[VariableSpec] | None = None,
        env_prefix: Optional[str] = None,
    ) -> None:
        if declaration is None:
            declaration = self.VARIABLES
        self._specs: List[VariableSpec] = build_specs(declaration)
        self._values: Dict[str, Optional[str]] = {
            s.name: s.default for s in self._specs
        }
        self.env_prefix = env_prefix if env_prefix is not None else self.ENV_PREFIX
        self._lock = threading.RLock()

    @classmethod
    def from_declaration_file(
        cls, path: str | Path, env_prefix: Optional[str] = None
    ) -> "Registry":
        """Build a registry from a YAML declaration (``name: default # doc``).

        Names and defaults come from the YAML document; comments are
        recovered line by line from the raw text, so unquoted values with
        spaces or slashes keep their comments.
        """
        p = Path(path)
        try:
            text = p.read_text(encoding="utf-8")
            data = yaml.safe_load(text) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoadError(f"Cannot read declaration {p}: {e}", p) from e
        if not isinstance(data, dict):
            raise LoadError(f"Declaration {p} is not a mapping", p)
        comments = {r.name: r.comment for r in parse_yaml_declaration(text)}
        specs = build_specs(
            {str(k): v for k, v in data.items()}, comments=comments
        )
        return cls(specs, env_prefix=env_prefix)

    # --- Validation -------------------------------------------------------
    def _check(self, key: Any, source: str) -> None:
        if not isinstance(key, str) or key not in self._values:
            metrics.inc_unsupported_variable(source)
            raise UnsupportedVariableError(key, source)

    def validate_keys(self, keys: Iterable[Any], source: str) -> None:
        """Raise UnsupportedVariableError for the first undeclared key."""
        for key in keys:
            self._check(key, source)

    # --- Access -----------------------------------------------------------
    def get(self, key: str) -> Optional[str]:
        with self._lock:
            self._check(key, "get")
            return self._values[key]

    def set(self, key: str, value: Any = None) -> Optional[str]:
        with self._lock:
            self._check(key, "set")
            stored = coercion.to_config_value(value)
            self._values[key] = stored
            return stored

    def update(
        self, values: Mapping[str, Any], source: str = "update"
    ) -> None:
        """Validate every key first, then apply all values under the lock."""
        with self._lock:
            self.validate_keys(values, source)
            for key, value in values.items():
                self._values[key] = coercion.to_config_value(value)

    def is_true(self, key: str) -> bool:
        return coercion.is_true(self.get(key))

    def is_false(self, key: str) -> bool:
        return not self.is_true(key)

    def variables(self) -> List[str]:
        return [s.name for s in self._specs]

    def dump(self) -> Dict[str, Optional[str]]:
        with self._lock:
            return dict(self._values)

    def describe(self) -> List[VariableSpec]:
        return list(self._specs)

    def defaults(self) -> Dict[str, Optional[str]]:
        return {s.name: s.default for s in self._specs}

    def reset(self) -> None:
        """Restore every variable to its declared default."""
        with self._lock:
            self._values = self.defaults()

    def env_variable_name(self, key: str) -> str:
        self._check(key, "get")
        return f"{self.env_prefix}{key.upper()}"

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables())

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(variables={self.variables()!r}, "
            f"env_prefix={self.env_prefix!r})"
        )

    # --- Loading ----------------------------------------------------------
    def after_initialize(self) -> None:
        """Hook run after a loader populated the registry.

        Override for post-load validation (raise InitializationError) or
        derived values. No default behavior.
        """

    def initialize_from_file(self, path: str | Path) -> Dict[str, Optional[str]]:
        return loader.initialize_from_file(self, path)

    def initialize_from_env(
        self,
        prefix: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Optional[str]]:
        return loader.initialize_from_environment(self, prefix, environ)

    def initialize_from_mapping(
        self, data: Mapping[Any, Any]
    ) -> Dict[str, Optional[str]]:
        return loader.initialize_from_mapping(self, data)

    # --- Scoped overrides -------------------------------------------------
    def snapshot(self) -> Dict[str, Optional[str]]:
        return self.dump()

    def restore(self, snap: Mapping[str, Optional[str]]) -> None:
        with self._lock:
            # key set never changes; a snapshot from another registry is a bug
            if set(snap) != set(self._values):
                raise ValueError("snapshot does not match declared variables")
            self._values = dict(snap)

    @contextlib.contextmanager
    def with_config(
        self, overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> Iterator["Registry"]:
        """Temporarily override values; restore the prior state on exit.

        Usage::

            with cfg.with_config(my_var="blah"):
                ...

        Overrides for undeclared variables raise before the body runs. The
        previous state is restored on every exit path and exceptions from
        the body propagate afterwards.

        The registry lock is held while the body runs. Other threads block on
        every registry call until the scope exits, so a body must not wait on
        a thread that reads or writes this registry (that deadlocks).
        """
        merged: Dict[str, Any] = dict(overrides or {})
        merged.update(kwargs)
        with self._lock:
            self.validate_keys(merged, "override")
            originals = self.snapshot()
            metrics.inc_scope()
            try:
                for k, v in merged.items():
                    self.set(k, v)
                yield self
            finally:
                self.restore(originals)
                _log.debug("[config-scope] restored %d variables", len(originals))

    def call_with_config(
        self,
        overrides: Optional[Mapping[str, Any]],
        func: Callable[..., T],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run ``func`` under ``with_config(overrides)`` and return its result."""
        with self.with_config(overrides):
            return func(*args, **kwargs)


__all__ = ["Registry", "DEFAULT_ENV_PREFIX"]
