"""Tests for the synchronous subprocess runner (utils/subprocess_runner.py)."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from yake.utils.subprocess_runner import (
    SubprocessError,
    is_available,
    run_subprocess,
)


def _completed(returncode: int = 0, stdout: str | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout)


class TestRunSubprocess:
    def test_captures_stdout(self, tmp_path: Path) -> None:
        with patch(
            "yake.utils.subprocess_runner.subprocess.run",
            return_value=_completed(stdout="ok  \tpkg\t0.1s\n"),
        ) as run:
            result = run_subprocess(["go", "test", "./..."], cwd=tmp_path, capture_stdout=True)

        assert result.success is True
        assert result.returncode == 0
        assert result.stdout == "ok  \tpkg\t0.1s\n"
        kwargs = run.call_args.kwargs
        assert kwargs["stdout"] is subprocess.PIPE
        assert kwargs["stderr"] is None
        assert kwargs["cwd"] == tmp_path.resolve()

    def test_streams_stdout_by_default(self, tmp_path: Path) -> None:
        with patch(
            "yake.utils.subprocess_runner.subprocess.run", return_value=_completed()
        ) as run:
            result = run_subprocess(["go", "vet", "./..."], cwd=tmp_path)

        assert result.stdout == ""
        assert run.call_args.kwargs["stdout"] is None

    def test_non_zero_exit_without_check(self, tmp_path: Path) -> None:
        with patch(
            "yake.utils.subprocess_runner.subprocess.run", return_value=_completed(returncode=2)
        ):
            result = run_subprocess(["go", "vet"], cwd=tmp_path)
        assert result.success is False
        assert result.returncode == 2

    def test_non_zero_exit_with_check(self, tmp_path: Path) -> None:
        with (
            patch(
                "yake.utils.subprocess_runner.subprocess.run",
                return_value=_completed(returncode=1),
            ),
            pytest.raises(SubprocessError, match="exit code 1: go test ./...") as exc_info,
        ):
            run_subprocess(["go", "test", "./..."], cwd=tmp_path, check=True)
        assert exc_info.value.result.returncode == 1

    def test_missing_executable(self, tmp_path: Path) -> None:
        with (
            patch(
                "yake.utils.subprocess_runner.subprocess.run",
                side_effect=FileNotFoundError("nope"),
            ),
            pytest.raises(SubprocessError, match="Command not found: gofoo"),
        ):
            run_subprocess(["gofoo"], cwd=tmp_path)

    def test_empty_command(self) -> None:
        with pytest.raises(ValueError, match="Command cannot be empty"):
            run_subprocess([])

    def test_missing_working_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Working directory does not exist"):
            run_subprocess(["go"], cwd=tmp_path / "missing")


class TestIsAvailable:
    def test_found(self) -> None:
        with patch("yake.utils.subprocess_runner.shutil.which", return_value="/usr/bin/go"):
            assert is_available("go") is True

    def test_not_found(self) -> None:
        with patch("yake.utils.subprocess_runner.shutil.which", return_value=None):
            assert is_available("goreleaser") is False
