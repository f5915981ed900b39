"""Run the Go toolchain's formatting, vetting and test commands in sequence."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from yake.scaffold.linter import GOLANGCI_FILE
from yake.utils.subprocess_runner import SubprocessError, is_available, run_subprocess

logger = logging.getLogger(__name__)

GORELEASER_FILE = ".goreleaser.yml"


class ToolchainError(Exception):
    """A toolchain command failed."""


@dataclass(frozen=True)
class ToolCommand:
    name: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.name, *self.args]


def go_test_commands(root: Path, runner: str = "go") -> list[ToolCommand]:
    """The ``yake tests`` sequence for a Go module rooted at *root*."""
    commands = [
        ToolCommand(runner, ("fmt", "./...")),
        ToolCommand(runner, ("vet", "./...")),
        ToolCommand(runner, ("mod", "tidy", "-v")),
        ToolCommand(runner, ("clean", "-testcache")),
        ToolCommand(runner, ("test", "-cover", "./...")),
        ToolCommand(runner, ("test", "-race", "./...")),
    ]
    if (root / GOLANGCI_FILE).exists():
        commands.append(ToolCommand("golangci-lint", ("run",)))
    return commands


def run_command(command: ToolCommand, root: Path) -> None:
    """Run *command* with output streamed to the terminal.

    Raises:
        ToolchainError: The command is missing or exits non-zero.
    """
    logger.info("Running: %s", " ".join(command.argv))
    try:
        run_subprocess(command.argv, cwd=root, check=True)
    except SubprocessError as exc:
        raise ToolchainError(f"failed to run {' '.join(command.argv)}: {exc}") from exc


def run_goreleaser_check(root: Path) -> bool:
    """Validate ``.goreleaser.yml`` when both the file and the tool exist."""
    if not (root / GORELEASER_FILE).exists():
        return False
    if not is_available("goreleaser"):
        logger.debug("goreleaser not on PATH, skipping release config check")
        return False
    run_command(ToolCommand("goreleaser", ("check",)), root)
    return True


def run_project_tests(root: Path, runner: str = "go") -> None:
    """Run the Go sequence (when go.mod exists) and the goreleaser check."""
    if (root / "go.mod").exists():
        for command in go_test_commands(root, runner):
            run_command(command, root)
    run_goreleaser_check(root)
