"""Generate Markdown reference docs from a variable declaration file.

Parses the raw declaration text (``:name => default  # comment`` or
``name: default  # comment``) and emits a table of variable, environment
name, default and description. YAML declarations (.yaml/.yml) are loaded
through a Registry, so the table shows the decoded defaults.

Usage:
    python scripts/generate_config_docs.py --declaration config/variables.yaml \
        --env-prefix APP_ --output docs/Generated-Config.md
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure root on sys.path before importing project modules
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from confreg import Registry  # noqa: E402
from confreg.autodoc import (  # noqa: E402
    DeclarationParser,
    is_yaml_path,
    render_markdown,
)
from confreg.autodoc.markdown import DEFAULT_TITLE  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("--declaration", required=True, type=Path)
    ap.add_argument("--env-prefix", default=None)
    ap.add_argument("--title", default=DEFAULT_TITLE)
    ap.add_argument("--output", type=Path, default=None)
    ap.add_argument("--verbose", action="store_true")
    return ap


def generate(declaration: Path, env_prefix: str | None, title: str) -> str:
    # YAML declarations document the defaults the registry will actually
    # hold (YAML 1.1 decoding: off -> "false", 0x1F -> "31")
    if is_yaml_path(declaration):
        records = Registry.from_declaration_file(declaration).describe()
    else:
        records = DeclarationParser.from_file(declaration).parse()
    return render_markdown(records, env_prefix=env_prefix, title=title)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(message)s",
    )
    if not args.declaration.exists():
        print(f"[config-doc] declaration not found: {args.declaration}",
              file=sys.stderr)
        return 2
    content = generate(args.declaration, args.env_prefix, args.title)
    if args.output is None:
        sys.stdout.write(content)
        return 0
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(content, encoding="utf-8")
    print(f"[config-doc] written {args.output}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
