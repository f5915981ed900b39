"""Synchronous subprocess runner for the Go toolchain and friends.

Standard error is always passed through to the user's terminal unchanged.
Standard output is either passed through as well or captured for parsing.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


@dataclass
class SubprocessResult:
    """Result of subprocess execution."""

    returncode: int
    """Exit code of the process."""

    stdout: str
    """Captured standard output (empty when output was passed through)."""

    success: bool
    """True if returncode is 0."""

    duration_ms: float = 0.0
    """Actual duration of execution in milliseconds."""


class SubprocessError(Exception):
    """Exception raised when subprocess execution fails."""

    def __init__(self, message: str, result: SubprocessResult) -> None:
        """Initialize with error message and result.

        Args:
            message: Error description.
            result: The SubprocessResult from the failed execution.
        """
        super().__init__(message)
        self.result = result


def is_available(executable: str) -> bool:
    """Return True when *executable* resolves on PATH."""
    return shutil.which(executable) is not None


def run_subprocess(
    command: Sequence[str],
    *,
    cwd: Path | None = None,
    capture_stdout: bool = False,
    check: bool = False,
) -> SubprocessResult:
    """Execute a command and wait for it to finish.

    Args:
        command: Command and arguments as a sequence (e.g. ['go', 'vet', './...']).
        cwd: Working directory for the subprocess. Defaults to current directory.
        capture_stdout: Capture stdout into the result instead of streaming it.
        check: If True, raise SubprocessError on non-zero exit code.

    Returns:
        SubprocessResult with exit code and captured output.

    Raises:
        SubprocessError: If the executable is missing, or check=True and the
            command returns a non-zero exit code.
        ValueError: If command is empty or the working directory is missing.
    """
    if not command:
        raise ValueError("Command cannot be empty")

    work_dir = cwd.resolve() if cwd else Path.cwd()
    if not work_dir.is_dir():
        raise ValueError(f"Working directory does not exist: {work_dir}")

    printable = " ".join(str(c) for c in command)
    logger.debug("Running subprocess: %s (cwd=%s)", printable, work_dir)

    start_time = time.perf_counter()
    try:
        completed = subprocess.run(  # noqa: S603
            list(command),
            cwd=work_dir,
            stdout=subprocess.PIPE if capture_stdout else None,
            stderr=None,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        logger.error("Command not found: %s", command[0])
        raise SubprocessError(
            f"Command not found: {command[0]}",
            result=SubprocessResult(returncode=-1, stdout="", success=False),
        ) from exc

    duration_ms = (time.perf_counter() - start_time) * 1000
    result = SubprocessResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        success=completed.returncode == 0,
        duration_ms=duration_ms,
    )

    logger.debug(
        "Subprocess completed: returncode=%d, duration=%.2fms",
        result.returncode,
        duration_ms,
    )

    if check and not result.success:
        raise SubprocessError(
            f"Command failed with exit code {result.returncode}: {printable}",
            result=result,
        )

    return result
