"""Declaration text parser: recovers (name, default, comment) records.

Works on the raw text of a variable declaration, never on live registry
state. Two key styles are accepted, freely mixed::

    {
      :my_var => 'default value',   # old style
      other_var: 42,                # new style, with a comment that
                                    # continues on the next line
    }

Top-level YAML declarations (``name: value  # comment``) go through
``parse_yaml_declaration``, which follows YAML comment rules so unquoted
values may contain spaces and slashes.

A key token must start a line or follow ``{`` / ``,``. The comment of an
entry runs across any following lines until the lookahead sees the next
entry, a closing ``}`` or end of text.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

_log = logging.getLogger("confreg.autodoc")

RE_ENTRY = re.compile(
    r"""
    (?:^|(?<=[{,]))[ \t]*
    (?:
        :(?P<old_key>\w+)\s*=>\s*         # :key => value, may wrap
      |
        (?P<new_key>\w+):[ \t]*            # key: value, same line
    )
    (?:
        (?P<quote>['"])(?P<quoted>.*?)(?P=quote)   # 'literal' or "literal"
      |
        (?P<bare>[\w@:.]+)                  # bareword
    )
    [ \t]*,?
    (?:
        [ \t]*\#[ \t]*(?P<comment>.+?)      # optional comment
        (?=                                 # stop before the next entry,
            \n\s*(?::\w+\s*=>|\}|\w+:)      # a closing brace
          | \s*\Z                           # or end of text
        )
    )?
    """,
    re.VERBOSE | re.MULTILINE | re.DOTALL,
)

_CONTINUATION = re.compile(r"(?:\s*\n\s*(?:\#+[ \t]*)?)+")


class DocRecord(BaseModel):
    name: str
    default: str
    comment: Optional[str] = None

    model_config = ConfigDict(frozen=True)


def trim_comment(comment: Optional[str]) -> Optional[str]:
    """Flatten a multi-line comment into one line; empty -> None."""
    if comment is None:
        return None
    text = _CONTINUATION.sub(" ", comment.strip())
    return text or None


def parse_declaration(text: str) -> List[DocRecord]:
    records: List[DocRecord] = []
    for m in RE_ENTRY.finditer(text):
        name = m.group("old_key") or m.group("new_key")
        if m.group("quote"):
            default = m.group("quoted")
        else:
            default = m.group("bare")
        records.append(
            DocRecord(
                name=name,
                default=default,
                comment=trim_comment(m.group("comment")),
            )
        )
    _log.debug("[autodoc] parsed %d records", len(records))
    return records


_YAML_KEY = re.compile(r"^(?P<key>\w+):(?P<rest>(?:[ \t].*)?)$")
_YAML_COMMENT_LINE = re.compile(r"^[ \t]*\#+[ \t]*(?P<text>.*)$")
_YAML_INLINE_COMMENT = re.compile(r"(?:^|[ \t])\#")


def _split_yaml_value(rest: str) -> tuple[str, Optional[str]]:
    """Split ``value  # comment``; ``#`` inside quotes or words is kept."""
    rest = rest.strip()
    start = 0
    if rest[:1] in ("'", '"'):
        end = rest.find(rest[0], 1)
        if end != -1:
            start = end + 1
    m = _YAML_INLINE_COMMENT.search(rest, start)
    if m is None:
        value, comment = rest, None
    else:
        value, comment = rest[: m.start()].rstrip(), rest[m.end():]
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1]
    return value, comment


def parse_yaml_declaration(text: str) -> List[DocRecord]:
    """Line-oriented variant for top-level YAML declarations.

    An unquoted value runs up to `` #`` (YAML comment rules), so values with
    spaces or slashes keep both their text and their comment. Comment-only
    lines right after an entry's inline comment continue that comment.
    """
    records: List[DocRecord] = []
    name: Optional[str] = None
    default = ""
    parts: List[str] = []

    def _flush() -> None:
        if name is not None:
            records.append(
                DocRecord(
                    name=name,
                    default=default,
                    comment=trim_comment(" ".join(parts)),
                )
            )

    for line in text.splitlines():
        m = _YAML_KEY.match(line)
        if m:
            _flush()
            name = m.group("key")
            default, comment = _split_yaml_value(m.group("rest"))
            parts = [comment] if comment is not None else []
            continue
        cont = _YAML_COMMENT_LINE.match(line)
        if cont and name is not None and parts:
            parts.append(cont.group("text"))
            continue
        # blank or unrelated line ends the running comment
        _flush()
        name, parts = None, []
    _flush()
    _log.debug("[autodoc] parsed %d yaml records", len(records))
    return records


def is_yaml_path(path: str | Path) -> bool:
    return Path(path).suffix.lower() in (".yaml", ".yml")


class DeclarationParser:
    """Stateful wrapper keeping the last parse result in ``variables``."""

    def __init__(self, text: str, yaml: bool = False):
        self.text = text
        self.yaml = yaml
        self.variables: List[DocRecord] = []

    @classmethod
    def from_file(cls, path: str | Path) -> "DeclarationParser":
        return cls(
            Path(path).read_text(encoding="utf-8"), yaml=is_yaml_path(path)
        )

    def parse(self) -> List[DocRecord]:
        if self.yaml:
            self.variables = parse_yaml_declaration(self.text)
        else:
            self.variables = parse_declaration(self.text)
        return self.variables


__all__ = [
    "DocRecord",
    "DeclarationParser",
    "is_yaml_path",
    "parse_declaration",
    "parse_yaml_declaration",
    "trim_comment",
]
