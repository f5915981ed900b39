"""Terminal reporter with rich output formatting."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()
err_console = Console(stderr=True)


def configure_logging(*, verbose: bool = False) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


class CLIReporter:
    """Rich terminal output for command results."""

    def __init__(self) -> None:
        self.console = console
        self.err_console = err_console

    def print_created(self, path: str) -> None:
        self.console.print("[green]✓[/green] Created ", end="")
        self.console.print(path, style="bold", markup=False, highlight=False, soft_wrap=True)

    def print_error(self, message: str) -> None:
        """Print an error block on stderr without interpreting markup in it."""
        self.err_console.print("[red]✗[/red] ", end="")
        self.err_console.print(message, markup=False, highlight=False, soft_wrap=True)


reporter = CLIReporter()
