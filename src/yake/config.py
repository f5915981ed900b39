"""Configuration parsing from ``.yake.yml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from yake.policy.coverage import DEFAULT_RUNNER, MIN_COVERAGE
from yake.policy.directive import DEFAULT_NAMESPACE
from yake.policy.inspector import LARGE_FN_LINES, SIGNIFICANT_FN_LINES

logger = logging.getLogger(__name__)

CONFIG_FILE = ".yake.yml"

_MAX_COVERAGE = 100.0


@dataclass
class PolicyConfig:
    """Thresholds and tooling used by ``yake policy run``."""

    significant_function_lines: int = SIGNIFICANT_FN_LINES
    """Body length above which a source file must have a paired test file."""

    large_function_lines: int = LARGE_FN_LINES
    """Body length above which a function must be reached by some test."""

    min_coverage: float = MIN_COVERAGE
    """Minimum per-package statement coverage percentage."""

    runner: str = DEFAULT_RUNNER
    """Go toolchain executable used to run tests."""

    directive_namespace: str = DEFAULT_NAMESPACE
    """Namespace of the ``//<namespace>:skip-test`` opt-out directive."""


@dataclass
class ScaffoldConfig:
    """Settings for the generated repository configuration files."""

    maintainers: list[str] = field(default_factory=list)
    """GitHub users set as Dependabot reviewers and assignees."""


@dataclass
class YakeConfig:
    """Top-level configuration."""

    root: str
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    scaffold: ScaffoldConfig = field(default_factory=ScaffoldConfig)
    raw: dict[str, Any] = field(default_factory=dict)


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        logger.warning("Ignoring non-mapping '%s' section in %s", name, CONFIG_FILE)
        return {}
    return value


def _parse_policy_config(raw: dict[str, Any]) -> PolicyConfig:
    policy_raw = _section(raw, "policy")
    return PolicyConfig(
        significant_function_lines=int(
            policy_raw.get("significant_function_lines", SIGNIFICANT_FN_LINES)
        ),
        large_function_lines=int(policy_raw.get("large_function_lines", LARGE_FN_LINES)),
        min_coverage=float(policy_raw.get("min_coverage", MIN_COVERAGE)),
        runner=str(policy_raw.get("runner", DEFAULT_RUNNER)),
        directive_namespace=str(policy_raw.get("directive_namespace", DEFAULT_NAMESPACE)),
    )


def _parse_scaffold_config(raw: dict[str, Any]) -> ScaffoldConfig:
    scaffold_raw = _section(raw, "scaffold")
    maintainers = scaffold_raw.get("maintainers", [])
    if not isinstance(maintainers, list):
        maintainers = [maintainers] if maintainers else []
    return ScaffoldConfig(maintainers=[str(m) for m in maintainers])


def load_config(root: str | Path) -> YakeConfig:
    """Load ``.yake.yml`` from *root*, falling back to defaults.

    A missing file, an empty file or a non-mapping document all yield the
    default configuration.
    """
    root_path = Path(root).resolve()
    config_file = root_path / CONFIG_FILE

    raw: dict[str, Any] = {}
    if config_file.is_file():
        parsed = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        if isinstance(parsed, dict):
            raw = parsed

    return YakeConfig(
        root=str(root_path),
        policy=_parse_policy_config(raw),
        scaffold=_parse_scaffold_config(raw),
        raw=raw,
    )


def _validate_policy_config(policy: PolicyConfig) -> list[str]:
    errors: list[str] = []
    if policy.significant_function_lines < 0:
        errors.append("policy.significant_function_lines must be >= 0")
    if policy.large_function_lines < 0:
        errors.append("policy.large_function_lines must be >= 0")
    if not 0.0 <= policy.min_coverage <= _MAX_COVERAGE:
        errors.append(
            f"policy.min_coverage must be between 0 and {_MAX_COVERAGE:.0f}, "
            f"got {policy.min_coverage}"
        )
    if not policy.runner.strip():
        errors.append("policy.runner must not be empty")
    if not policy.directive_namespace.strip():
        errors.append("policy.directive_namespace must not be empty")
    return errors


def validate_config(config: YakeConfig) -> list[str]:
    """Return human-readable problems with *config*; empty when valid."""
    errors = _validate_policy_config(config.policy)
    errors.extend(
        f"scaffold.maintainers contains an empty name at index {index}"
        for index, name in enumerate(config.scaffold.maintainers)
        if not name.strip()
    )
    return errors
