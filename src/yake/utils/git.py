"""Git helpers."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

_REMOTE_HEAD_REF = "refs/remotes/origin/HEAD"
_REMOTE_PREFIX = "refs/remotes/origin/"
_FALLBACK_BRANCHES = ("main", "master")


class GitOperationError(Exception):
    """Exception raised when git operations fail."""


def _git_executable() -> str:
    """Resolve the full path to the ``git`` executable."""
    return shutil.which("git") or "git"


def get_default_branch(repo_path: Path | None = None) -> str:
    """Detect the default branch of the repository.

    Tries ``git symbolic-ref refs/remotes/origin/HEAD`` first, then falls
    back to checking whether ``main`` or ``master`` exists locally.

    Args:
        repo_path: Path to git repository. Defaults to the current directory.

    Returns:
        Default branch name (e.g. ``"main"`` or ``"master"``).

    Raises:
        GitOperationError: If no default branch can be determined.
    """
    cwd = repo_path or Path.cwd()
    try:
        result = subprocess.run(
            [_git_executable(), "symbolic-ref", _REMOTE_HEAD_REF],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
        branch = result.stdout.strip().removeprefix(_REMOTE_PREFIX)
        if branch:
            return branch
    except (subprocess.CalledProcessError, FileNotFoundError):
        logger.debug("No remote HEAD in %s, probing local branches", cwd)

    for branch in _FALLBACK_BRANCHES:
        try:
            subprocess.run(
                [_git_executable(), "rev-parse", "--verify", f"refs/heads/{branch}"],
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True,
            )
            return branch
        except (subprocess.CalledProcessError, FileNotFoundError):
            continue

    raise GitOperationError("could not detect default branch")
