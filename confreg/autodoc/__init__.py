"""Documentation extraction for variable declarations.

parse_declaration(text) -> list[DocRecord]   (source order)
render_markdown(records, env_prefix=None)    -> str
"""
from __future__ import annotations

from .parser import (  # noqa: F401
    DeclarationParser,
    DocRecord,
    is_yaml_path,
    parse_declaration,
    parse_yaml_declaration,
    trim_comment,
)
from .markdown import render_markdown  # noqa: F401

__all__ = [
    "DeclarationParser",
    "DocRecord",
    "is_yaml_path",
    "parse_declaration",
    "parse_yaml_declaration",
    "trim_comment",
    "render_markdown",
]
