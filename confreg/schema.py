"""Variable declaration schema."""
from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .coercion import to_config_value
from .errors import ConfigError

_NAME_RE = re.compile(r"^\w+$")


class VariableSpec(BaseModel):
    name: str
    default: Optional[str] = None
    comment: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("name")
    @classmethod
    def _name_is_identifier(cls, v: str) -> str:  # noqa: D401
        if not _NAME_RE.match(v):
            raise ValueError(f"invalid variable name {v!r}")
        return v

    @field_validator("default", mode="before")
    @classmethod
    def _coerce_default(cls, v: Any) -> Optional[str]:  # noqa: D401
        return to_config_value(v)


def build_specs(
    declaration: Mapping[str, Any] | Iterable[VariableSpec | Mapping[str, Any]],
    comments: Mapping[str, str | None] | None = None,
) -> List[VariableSpec]:
    """Normalize a declaration into an ordered list of VariableSpec.

    Accepts either a ``{name: default}`` mapping or an iterable of
    VariableSpec / spec-shaped dicts. Duplicate names are rejected.
    """
    comments = comments or {}
    raw: list[Any]
    if isinstance(declaration, Mapping):
        raw = [
            {"name": str(k), "default": v, "comment": comments.get(str(k))}
            for k, v in declaration.items()
        ]
    else:
        raw = list(declaration)
    specs: List[VariableSpec] = []
    seen: set[str] = set()
    for item in raw:
        if isinstance(item, VariableSpec):
            spec = item
        else:
            try:
                spec = VariableSpec.model_validate(item)
            except Exception as e:  # noqa: BLE001
                raise ConfigError(f"Invalid variable declaration: {e}") from e
        if spec.name in seen:
            raise ConfigError(f"Duplicate variable in declaration: {spec.name}")
        seen.add(spec.name)
        specs.append(spec)
    return specs


__all__ = ["VariableSpec", "build_specs"]
