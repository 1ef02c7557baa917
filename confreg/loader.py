"""Registry population from YAML files and environment variables.

Both loaders validate every incoming key before applying any value, so an
undeclared key leaves the registry untouched. After population they call
``registry.after_initialize()`` and return ``registry.dump()``.

Environment keys look like ``<PREFIX><UPPER_SNAKE_NAME>``; the prefix test is
literal and case-sensitive, the remainder is lowercased. Keys are processed
in sorted order, so if two keys collapse to one variable the
lexicographically last one wins.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

import yaml
from yaml import YAMLError

from . import metrics
from .coercion import to_config_value
from .errors import LoadError

if TYPE_CHECKING:  # pragma: no cover
    from .registry import Registry

_log = logging.getLogger("confreg.loader")


def _load_yaml(path: Path) -> Dict[Any, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise LoadError(f"Cannot read config file {path}: {e}", path) from e
    except YAMLError as e:
        raise LoadError(f"Invalid YAML in {path}: {e}", path) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise LoadError(
            f"Config file {path} must contain a mapping, "
            f"got {type(data).__name__}",
            path,
        )
    return data


def _apply(
    registry: "Registry", values: Mapping[str, Optional[str]], source: str
) -> Dict[str, Optional[str]]:
    registry.update(values, source)
    metrics.inc_load(source)
    _log.info("[config-load] source=%s variables=%d", source, len(values))
    registry.after_initialize()
    return registry.dump()


def initialize_from_mapping(
    registry: "Registry",
    data: Mapping[Any, Any],
    source: str = "mapping",
    path: Optional[Path] = None,
) -> Dict[str, Optional[str]]:
    """Validate and apply a decoded ``{key: scalar}`` mapping."""
    values: Dict[str, Optional[str]] = {}
    for raw_key, raw_value in data.items():
        key = str(raw_key)
        try:
            values[key] = to_config_value(raw_value)
        except TypeError as e:
            raise LoadError(f"Variable {key!r}: {e}", path) from e
    return _apply(registry, values, source)


def initialize_from_file(
    registry: "Registry", path: str | Path
) -> Dict[str, Optional[str]]:
    p = Path(path)
    data = _load_yaml(p)
    return initialize_from_mapping(registry, data, source="file", path=p)


def initialize_from_environment(
    registry: "Registry",
    prefix: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Optional[str]]:
    if prefix is None:
        prefix = registry.env_prefix
    if environ is None:
        environ = os.environ
    prefix_len = len(prefix)
    values: Dict[str, Optional[str]] = {}
    for env_key in sorted(environ):
        if not env_key.startswith(prefix):
            continue
        variable = env_key[prefix_len:].lower()
        values[variable] = environ[env_key]
        _log.debug(
            "[config-env-override] variable=%s value=*** source=env", variable
        )
    result = _apply(registry, values, "env")
    for variable in values:
        metrics.inc_env_override(variable)
    return result


__all__ = [
    "initialize_from_file",
    "initialize_from_environment",
    "initialize_from_mapping",
]
