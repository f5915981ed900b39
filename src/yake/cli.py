"""yake CLI — top-level command group."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import click
import yaml

from yake import __version__
from yake.config import CONFIG_FILE, YakeConfig, load_config, validate_config
from yake.policy.coverage import GO_MOD
from yake.policy.errors import PolicyError
from yake.policy.golang import run_golang_checks
from yake.reporter import configure_logging, reporter
from yake.scaffold import (
    ScaffoldError,
    apply_defaults,
    create_dependabot_config,
    create_golang_workflow,
    create_linter_config,
    create_release_please,
    parse_lang,
)
from yake.toolchain import ToolchainError, run_project_tests
from yake.utils.git import GitOperationError, get_default_branch

logger = logging.getLogger(__name__)

_path_option = click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory.",
)

_lang_option = click.option(
    "--lang",
    "-l",
    required=True,
    help="Programming language (currently only 'go').",
)


def _fail(message: str) -> NoReturn:
    reporter.print_error(message)
    raise click.Abort


def _load_valid_config(root: Path) -> YakeConfig:
    try:
        config = load_config(root)
    except (yaml.YAMLError, OSError) as exc:
        _fail(f"failed to read {CONFIG_FILE}: {exc}")
    except (ValueError, TypeError) as exc:
        _fail(f"invalid {CONFIG_FILE}: {exc}")
    errors = validate_config(config)
    if errors:
        _fail(f"invalid {CONFIG_FILE}:\n" + "\n".join(f"  - {e}" for e in errors))
    return config


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="yake")
def cli(*, verbose: bool) -> None:
    """yake — Yet Another ToolKit for Go repositories."""
    configure_logging(verbose=verbose)


# ── policy ───────────────────────────────────────────────────────


@cli.group("policy")
def policy_group() -> None:
    """Policy-related commands."""


@policy_group.command("run")
@_path_option
def policy_run(path: str) -> None:
    """Run policy checks for the project."""
    root = Path(path)
    config = _load_valid_config(root)

    if (root / GO_MOD).exists():
        try:
            run_golang_checks(root, config.policy)
        except PolicyError as exc:
            _fail(str(exc))

    logger.info("All policy checks passed")


# ── code ─────────────────────────────────────────────────────────


@cli.group("code")
def code_group() -> None:
    """Code-related commands."""


@code_group.command("defaults")
@_path_option
def code_defaults(path: str) -> None:
    """Apply default configurations for the project."""
    try:
        created = apply_defaults(Path(path))
    except (ScaffoldError, OSError) as exc:
        _fail(str(exc))
    for created_path in created:
        reporter.print_created(str(created_path))


@code_group.command("linter-new")
@_lang_option
@_path_option
def code_linter_new(lang: str, path: str) -> None:
    """Create a new linter configuration file."""
    try:
        created = create_linter_config(Path(path), parse_lang(lang))
    except (ScaffoldError, OSError) as exc:
        _fail(str(exc))
    reporter.print_created(str(created))


@code_group.command("github-dependabot")
@_lang_option
@_path_option
def code_github_dependabot(lang: str, path: str) -> None:
    """Create GitHub Dependabot configuration."""
    root = Path(path)
    config = _load_valid_config(root)
    try:
        created = create_dependabot_config(root, parse_lang(lang), config.scaffold.maintainers)
    except (ScaffoldError, OSError) as exc:
        _fail(str(exc))
    reporter.print_created(str(created))


@code_group.command("github-workflow")
@_lang_option
@_path_option
def code_github_workflow(lang: str, path: str) -> None:
    """Create the GitHub Actions lint and test workflow."""
    try:
        created = create_golang_workflow(Path(path), parse_lang(lang))
    except (ScaffoldError, OSError) as exc:
        _fail(str(exc))
    reporter.print_created(str(created))


@code_group.command("release-please")
@click.option("--branch", default=None, help="Release branch (default: detected from git).")
@_path_option
def code_release_please(branch: str | None, path: str) -> None:
    """Create release-please workflow, config and manifest."""
    root = Path(path)
    try:
        target_branch = branch or get_default_branch(root)
        created = create_release_please(root, target_branch)
    except (ScaffoldError, GitOperationError, OSError) as exc:
        _fail(str(exc))
    for created_path in created:
        reporter.print_created(str(created_path))


# ── tests ────────────────────────────────────────────────────────


@cli.command("tests")
@_path_option
def tests_command(path: str) -> None:
    """Run Go tests with coverage, race detection, and linting."""
    root = Path(path)
    config = _load_valid_config(root)
    try:
        run_project_tests(root, config.policy.runner)
    except ToolchainError as exc:
        _fail(str(exc))
    logger.info("All tests completed successfully")
