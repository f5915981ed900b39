"""Tests for the yake CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import patch

from click.testing import CliRunner

from yake import __version__
from yake.cli import cli
from yake.toolchain import ToolchainError
from yake.utils.git import GitOperationError
from yake.utils.subprocess_runner import SubprocessResult

_VALID_TEST_FILE = 'package main\n\nimport "testing"\n\nfunc TestX(t *testing.T) {\n    t.Log("x")\n}\n'


def _write_file(root: Path, rel: str, content: str) -> Path:
    f = root / rel
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(content, encoding="utf-8")
    return f


def _fake_runner(stdout: str) -> Any:
    def run(command: list[str], **_kwargs: Any) -> SubprocessResult:
        Path(command[3].split("=", 1)[1]).write_text("mode: set\n", encoding="utf-8")
        return SubprocessResult(returncode=0, stdout=stdout, success=True)

    return run


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_groups() -> None:
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    for name in ("policy", "code", "tests"):
        assert name in result.output


class TestPolicyRun:
    def test_without_go_module_passes(self, tmp_path: Path) -> None:
        with patch("yake.policy.coverage.run_subprocess") as run:
            result = CliRunner().invoke(cli, ["policy", "run", "--path", str(tmp_path)])
        assert result.exit_code == 0
        run.assert_not_called()

    def test_clean_project(self, tmp_path: Path) -> None:
        _write_file(tmp_path, "go.mod", "module testproject\n")
        _write_file(tmp_path, "main.go", "package main\n\nfunc main() {}\n")
        output = "ok  \ttestproject\t0.002s\tcoverage: 100.0% of statements\n"
        with patch("yake.policy.coverage.run_subprocess", side_effect=_fake_runner(output)):
            result = CliRunner().invoke(cli, ["policy", "run", "--path", str(tmp_path)])
        assert result.exit_code == 0, result.output

    def test_violations_exit_non_zero(self, tmp_path: Path) -> None:
        _write_file(tmp_path, "go.mod", "module testproject\n")
        _write_file(tmp_path, "orphan_test.go", _VALID_TEST_FILE)
        output = "?   \ttestproject\t[no test files]\n"
        with patch("yake.policy.coverage.run_subprocess", side_effect=_fake_runner(output)):
            result = CliRunner().invoke(cli, ["policy", "run", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert "test file naming violations:" in result.output
        assert "orphan_test.go: missing source file 'orphan.go'" in result.output
        assert "coverage violations (minimum 80%):" in result.output
        assert "testproject: no test files" in result.output

    def test_config_threshold_applies(self, tmp_path: Path) -> None:
        _write_file(tmp_path, "go.mod", "module testproject\n")
        _write_file(tmp_path, ".yake.yml", "policy:\n  min_coverage: 40\n")
        output = "ok  \ttestproject\t0.002s\tcoverage: 50.0% of statements\n"
        with patch("yake.policy.coverage.run_subprocess", side_effect=_fake_runner(output)):
            result = CliRunner().invoke(cli, ["policy", "run", "--path", str(tmp_path)])
        assert result.exit_code == 0, result.output

    def test_invalid_config(self, tmp_path: Path) -> None:
        _write_file(tmp_path, ".yake.yml", "policy:\n  min_coverage: 150\n")
        result = CliRunner().invoke(cli, ["policy", "run", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert "policy.min_coverage" in result.output

    def test_unparseable_config(self, tmp_path: Path) -> None:
        _write_file(tmp_path, ".yake.yml", "policy: [unclosed\n")
        result = CliRunner().invoke(cli, ["policy", "run", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert "failed to read .yake.yml" in result.output

    def test_non_numeric_threshold(self, tmp_path: Path) -> None:
        _write_file(tmp_path, ".yake.yml", "policy:\n  min_coverage: high\n")
        result = CliRunner().invoke(cli, ["policy", "run", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "invalid .yake.yml" in result.output
        assert "high" in result.output

    def test_empty_threshold(self, tmp_path: Path) -> None:
        _write_file(tmp_path, ".yake.yml", "policy:\n  large_function_lines:\n")
        result = CliRunner().invoke(cli, ["policy", "run", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, TypeError)
        assert "invalid .yake.yml" in result.output


class TestCodeCommands:
    def test_linter_new(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            cli, ["code", "linter-new", "--lang", "go", "--path", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".golangci.yml").is_file()
        assert "Created" in result.output

    def test_linter_new_existing(self, tmp_path: Path) -> None:
        _write_file(tmp_path, ".golangci.yml", "custom: true\n")
        result = CliRunner().invoke(
            cli, ["code", "linter-new", "--lang", "go", "--path", str(tmp_path)]
        )
        assert result.exit_code == 1
        assert "linter config file already exists" in result.output

    def test_unsupported_language(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            cli, ["code", "github-workflow", "--lang", "rust", "--path", str(tmp_path)]
        )
        assert result.exit_code == 1
        assert "unsupported language: rust" in result.output

    def test_lang_required(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["code", "linter-new", "--path", str(tmp_path)])
        assert result.exit_code == 2

    def test_dependabot_uses_configured_maintainers(self, tmp_path: Path) -> None:
        _write_file(tmp_path, ".yake.yml", "scaffold:\n  maintainers: [alice]\n")
        result = CliRunner().invoke(
            cli, ["code", "github-dependabot", "--lang", "go", "--path", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        content = (tmp_path / ".github" / "dependabot.yml").read_text(encoding="utf-8")
        assert "alice" in content

    def test_github_workflow(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            cli, ["code", "github-workflow", "-l", "go", "--path", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".github" / "workflows" / "golang.yml").is_file()

    def test_release_please_with_branch(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            cli, ["code", "release-please", "--branch", "trunk", "--path", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        workflow = tmp_path / ".github" / "workflows" / "release-please.yml"
        assert "trunk" in workflow.read_text(encoding="utf-8")

    def test_release_please_detects_branch(self, tmp_path: Path) -> None:
        with patch("yake.cli.get_default_branch", return_value="main") as detect:
            result = CliRunner().invoke(
                cli, ["code", "release-please", "--path", str(tmp_path)]
            )
        assert result.exit_code == 0, result.output
        detect.assert_called_once_with(tmp_path.resolve())

    def test_release_please_detection_failure(self, tmp_path: Path) -> None:
        with patch(
            "yake.cli.get_default_branch",
            side_effect=GitOperationError("could not detect default branch"),
        ):
            result = CliRunner().invoke(
                cli, ["code", "release-please", "--path", str(tmp_path)]
            )
        assert result.exit_code == 1
        assert "could not detect default branch" in result.output

    def test_defaults(self, tmp_path: Path) -> None:
        _write_file(tmp_path, "go.mod", "module example.com/x\n")
        result = CliRunner().invoke(cli, ["code", "defaults", "--path", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".golangci.yml").is_file()


class TestTestsCommand:
    def test_runs_project_tests(self, tmp_path: Path) -> None:
        with patch("yake.cli.run_project_tests") as run:
            result = CliRunner().invoke(cli, ["tests", "--path", str(tmp_path)])
        assert result.exit_code == 0, result.output
        run.assert_called_once_with(tmp_path.resolve(), "go")

    def test_failure(self, tmp_path: Path) -> None:
        with patch(
            "yake.cli.run_project_tests",
            side_effect=ToolchainError("failed to run go vet ./...: exit code 1"),
        ):
            result = CliRunner().invoke(cli, ["tests", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert "failed to run go vet" in result.output
