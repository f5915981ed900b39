"""Tests for git utilities."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest import mock

import pytest

from yake.utils.git import GitOperationError, get_default_branch


def _ok(stdout: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


def _fail() -> subprocess.CalledProcessError:
    return subprocess.CalledProcessError(returncode=128, cmd=["git"])


class TestGetDefaultBranch:
    """Tests for get_default_branch."""

    def test_remote_head(self, tmp_path: Path) -> None:
        """The branch origin/HEAD points at wins."""
        with mock.patch(
            "yake.utils.git.subprocess.run", return_value=_ok("refs/remotes/origin/develop\n")
        ) as run:
            assert get_default_branch(tmp_path) == "develop"
        assert run.call_args.kwargs["cwd"] == tmp_path

    def test_falls_back_to_main(self, tmp_path: Path) -> None:
        """Without a remote HEAD a local main branch is used."""
        with mock.patch("yake.utils.git.subprocess.run", side_effect=[_fail(), _ok()]):
            assert get_default_branch(tmp_path) == "main"

    def test_falls_back_to_master(self, tmp_path: Path) -> None:
        """master is used when main does not exist."""
        with mock.patch(
            "yake.utils.git.subprocess.run", side_effect=[_fail(), _fail(), _ok()]
        ):
            assert get_default_branch(tmp_path) == "master"

    def test_no_branch_raises(self, tmp_path: Path) -> None:
        """An error is raised when nothing can be detected."""
        with (
            mock.patch(
                "yake.utils.git.subprocess.run", side_effect=[_fail(), _fail(), _fail()]
            ),
            pytest.raises(GitOperationError, match="could not detect default branch"),
        ):
            get_default_branch(tmp_path)

    def test_git_not_installed(self, tmp_path: Path) -> None:
        """A missing git binary is treated like a missing branch."""
        with (
            mock.patch("yake.utils.git.subprocess.run", side_effect=FileNotFoundError("git")),
            pytest.raises(GitOperationError),
        ):
            get_default_branch(tmp_path)
