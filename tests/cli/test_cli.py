"""Tests for the prefer-signals command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from prefer_signals import __version__
from prefer_signals.cli import app
from prefer_signals.scanning.treesitter_parser import TREE_SITTER_AVAILABLE

runner = CliRunner()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Empty home and working directory so no config files are picked up."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    for key in ("TYPE_INFORMATION", "MAX_FILE_SIZE_MB", "FOLLOW_SYMLINKS", "OUTPUT_FORMAT"):
        monkeypatch.delenv(f"PREFER_SIGNALS_{key}", raising=False)
    return tmp_path


class TestMetaCommands:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_rules_json(self):
        result = runner.invoke(app, ["rules", "--json"])

        assert result.exit_code == 0
        [rule] = json.loads(result.stdout)
        assert rule["name"] == "prefer-signals"
        assert rule["hasSuggestions"] is True
        assert "preferReadonly" in rule["messages"]
        assert rule["schema"]["properties"]["typesToReplace"]["default"] == ["BehaviorSubject"]

    def test_rules_table(self):
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "prefer-signals" in result.stdout
        assert "useTypeChecking" in result.stdout


class TestLintErrors:
    def test_missing_path(self, workspace):
        result = runner.invoke(app, ["lint", str(workspace / "missing")])
        assert result.exit_code == 2

    def test_unknown_format(self, workspace):
        result = runner.invoke(app, ["lint", str(workspace), "--format", "xml"])
        assert result.exit_code == 2

    def test_invalid_rule_option(self, workspace):
        (workspace / "prefer-signals.toml").write_text("[rule]\npreferOutputSignal = true\n")
        result = runner.invoke(app, ["lint", str(workspace)])
        assert result.exit_code == 2


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
class TestLint:
    """Lint runs that parse TypeScript."""

    def test_clean_tree(self, workspace):
        (workspace / "a.ts").write_text("class C { readonly x = signal(0); }")

        result = runner.invoke(app, ["lint", str(workspace)])

        assert result.exit_code == 0
        assert "No problems found" in result.stdout

    def test_json_output(self, workspace):
        path = workspace / "a.ts"
        path.write_text("class C {\n  v = new BehaviorSubject(1);\n}\n")

        result = runner.invoke(app, ["lint", str(path), "--format", "json"])

        assert result.exit_code == 1
        [report] = json.loads(result.stdout)
        [diagnostic] = report["diagnostics"]
        assert report["path"] == str(path)
        assert diagnostic["messageId"] == "preferSignal"
        assert diagnostic["data"] == {"type": "BehaviorSubject"}
        assert (diagnostic["line"], diagnostic["column"]) == (2, 11)

    def test_github_output(self, workspace):
        path = workspace / "a.ts"
        path.write_text("class C { @Input() foo: string; }")

        result = runner.invoke(app, ["lint", str(path), "-f", "github"])

        assert result.exit_code == 1
        assert result.stdout.startswith(f"::warning file={path},line=1,col=11,title=prefer-signals::")

    def test_types_to_replace(self, workspace):
        path = workspace / "a.ts"
        path.write_text("class C { readonly v = new ReplaySubject(1); }")

        default = runner.invoke(app, ["lint", str(path), "--no-type-info"])
        custom = runner.invoke(app, ["lint", str(path), "--types-to-replace", "ReplaySubject", "--no-type-info"])

        assert default.exit_code == 0
        assert custom.exit_code == 1

    def test_no_type_info_needs_checker_disabled(self, workspace):
        (workspace / "a.ts").write_text("class C { x = makeCounter(); }")

        result = runner.invoke(app, ["lint", str(workspace), "--no-type-info"])

        assert result.exit_code == 2

    def test_no_type_info_with_checker_disabled(self, workspace):
        (workspace / "a.ts").write_text("class C { x = makeCounter(); }")
        (workspace / "prefer-signals.toml").write_text("[rule]\nuseTypeChecking = false\n")

        result = runner.invoke(app, ["lint", str(workspace), "--no-type-info"])

        assert result.exit_code == 0

    def test_signal_function(self, workspace):
        (workspace / "a.ts").write_text("class C { s = injectState(); }")

        result = runner.invoke(
            app, ["lint", str(workspace), "--signal-function", "injectState", "--format", "json"]
        )

        assert result.exit_code == 1
        [report] = json.loads(result.stdout)
        assert report["diagnostics"][0]["messageId"] == "preferReadonly"

    def test_apply_suggestions(self, workspace):
        path = workspace / "a.ts"
        path.write_text("class C { x: Signal<number>; }")

        result = runner.invoke(app, ["lint", str(path), "--apply-suggestions"])

        assert result.exit_code == 1
        assert path.read_text() == "class C { readonly x: Signal<number>; }"

    def test_log_file(self, workspace):
        path = workspace / "a.ts"
        path.write_text("class C { v = new BehaviorSubject(1); }")
        log_file = workspace / "lint.log"

        result = runner.invoke(app, ["lint", str(path), "-v", "--log-file", str(log_file), "-f", "json"])

        assert result.exit_code == 1
        assert f"{path}: 1 diagnostic(s)" in log_file.read_text(encoding="utf-8")
