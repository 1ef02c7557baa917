"""Markdown rendering of declaration records.

Accepts anything with ``name``/``default``/``comment`` attributes: parser
DocRecords or a registry's VariableSpecs.
"""
from __future__ import annotations

from typing import Iterable, Optional, Protocol


class SupportsDoc(Protocol):  # pragma: no cover
    name: str
    default: Optional[str]
    comment: Optional[str]


DEFAULT_TITLE = "Configuration Variables"


def _cell(value: Optional[str]) -> str:
    if value is None:
        return ""
    return value.replace("|", "\\|")


def render_markdown(
    records: Iterable[SupportsDoc],
    env_prefix: Optional[str] = None,
    title: str = DEFAULT_TITLE,
) -> str:
    lines = [f"# {title}", ""]
    if env_prefix is not None:
        lines.append("| Variable | Environment | Default | Description |")
        lines.append("|----------|-------------|---------|-------------|")
    else:
        lines.append("| Variable | Default | Description |")
        lines.append("|----------|---------|-------------|")
    for rec in records:
        default = f"`{_cell(rec.default)}`" if rec.default is not None else ""
        cells = [rec.name]
        if env_prefix is not None:
            cells.append(f"`{env_prefix}{rec.name.upper()}`")
        cells += [default, _cell(rec.comment)]
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines) + "\n"


__all__ = ["render_markdown", "DEFAULT_TITLE"]
