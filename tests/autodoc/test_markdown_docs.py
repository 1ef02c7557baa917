import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from confreg import LoadError, Registry
from confreg.autodoc import parse_declaration, render_markdown

ROOT = Path(__file__).resolve().parents[2]
SCRIPT = ROOT / "scripts" / "generate_config_docs.py"

DECLARATION = textwrap.dedent(
    """\
    # Service settings
    host: 'localhost'   # Interface to bind
    port: 8080          # TCP port
    feature_flag: off   # Enables the | experimental path,
                        # see the changelog
    api_token: null
    """
)


def test_render_with_env_column():
    md = render_markdown(parse_declaration(DECLARATION), env_prefix="SVC_")
    lines = md.splitlines()
    assert lines[0] == "# Configuration Variables"
    assert "| Variable | Environment | Default | Description |" in lines
    assert "| host | `SVC_HOST` | `localhost` | Interface to bind |" in lines
    assert (
        "| feature_flag | `SVC_FEATURE_FLAG` | `off` | "
        "Enables the \\| experimental path, see the changelog |"
    ) in lines
    assert "| api_token | `SVC_API_TOKEN` | `null` |  |" in lines


def test_render_without_env_column_from_registry_specs():
    reg = Registry({"a": None, "b": "x"})
    md = render_markdown(reg.describe(), title="App")
    assert md.startswith("# App\n")
    assert "| a |  |  |" in md
    assert "| b | `x` |  |" in md


def test_registry_from_declaration_file(tmp_path):
    path = tmp_path / "variables.yaml"
    path.write_text(DECLARATION, encoding="utf-8")
    reg = Registry.from_declaration_file(path, env_prefix="SVC_")
    assert reg.variables() == ["host", "port", "feature_flag", "api_token"]
    assert reg.get("port") == "8080"
    # YAML 1.1: off -> False -> "false"
    assert reg.get("feature_flag") == "false"
    assert reg.get("api_token") is None
    specs = {s.name: s for s in reg.describe()}
    assert specs["host"].comment == "Interface to bind"
    assert specs["api_token"].comment is None


def test_declaration_file_errors(tmp_path):
    with pytest.raises(LoadError):
        Registry.from_declaration_file(tmp_path / "missing.yaml")
    bad = tmp_path / "list.yaml"
    bad.write_text("- a\n", encoding="utf-8")
    with pytest.raises(LoadError):
        Registry.from_declaration_file(bad)


def test_generate_config_docs_script(tmp_path):
    decl = tmp_path / "variables.yaml"
    decl.write_text(DECLARATION, encoding="utf-8")
    out = tmp_path / "docs" / "Generated-Config.md"
    subprocess.check_call(
        [
            sys.executable,
            str(SCRIPT),
            "--declaration",
            str(decl),
            "--env-prefix",
            "SVC_",
            "--output",
            str(out),
        ],
        cwd=ROOT,
    )
    content = out.read_text(encoding="utf-8")
    reg = Registry.from_declaration_file(decl, env_prefix="SVC_")
    assert content == render_markdown(reg.describe(), env_prefix="SVC_")
    assert "| feature_flag | `SVC_FEATURE_FLAG` | `false` |" in content


def test_generate_config_docs_script_missing_declaration(tmp_path):
    rc = subprocess.call(
        [sys.executable, str(SCRIPT), "--declaration", str(tmp_path / "x")],
        cwd=ROOT,
    )
    assert rc == 2


def test_declaration_file_keeps_comments_of_unquoted_values(tmp_path):
    path = tmp_path / "variables.yaml"
    path.write_text(
        "greeting: hello world  # doc\nurl: http://x.com  # u\n",
        encoding="utf-8",
    )
    reg = Registry.from_declaration_file(path)
    assert reg.dump() == {"greeting": "hello world", "url": "http://x.com"}
    specs = {s.name: s for s in reg.describe()}
    assert specs["greeting"].comment == "doc"
    assert specs["url"].comment == "u"
    md = render_markdown(reg.describe())
    assert "| greeting | `hello world` | doc |" in md
    assert "| url | `http://x.com` | u |" in md


def test_generated_yaml_docs_show_registry_defaults(tmp_path):
    decl = tmp_path / "variables.yaml"
    decl.write_text("flag: off  # switch\nhex: 0x1F  # mask\n", encoding="utf-8")
    out = tmp_path / "docs.md"
    subprocess.check_call(
        [sys.executable, str(SCRIPT), "--declaration", str(decl),
         "--output", str(out)],
        cwd=ROOT,
    )
    content = out.read_text(encoding="utf-8")
    reg = Registry.from_declaration_file(decl)
    assert reg.dump() == {"flag": "false", "hex": "31"}
    assert "| flag | `false` | switch |" in content
    assert "| hex | `31` | mask |" in content
