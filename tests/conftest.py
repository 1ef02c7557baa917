"""Pytest configuration ensuring project root is importable.

Adds repository root to sys.path explicitly to avoid interpreter/path quirks.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from confreg import Registry  # noqa: E402


class MyConfig(Registry):
    ENV_PREFIX = "PREF_"
    VARIABLES = {
        "my_var": "default value",
        "default_is_nil": None,
    }


@pytest.fixture(autouse=True)
def _isolate_registry_state():  # noqa: D401
    """Ensure process-wide registry/metrics side effects do not leak.

    - Reset metrics counters between tests
    - Drop any installed process-wide registry
    """
    import confreg
    from confreg import metrics

    metrics.reset_for_tests()
    confreg.reset_for_tests()
    try:
        yield
    finally:
        metrics.reset_for_tests()
        confreg.reset_for_tests()


@pytest.fixture
def cfg() -> MyConfig:
    return MyConfig()


@pytest.fixture
def write_yaml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
