"""Scaffolding of repository configuration files."""

from yake.scaffold.generate import (
    ScaffoldError,
    apply_defaults,
    create_dependabot_config,
    create_golang_workflow,
    create_linter_config,
    create_release_please,
    parse_lang,
)
from yake.scaffold.github import Lang

__all__ = [
    "Lang",
    "ScaffoldError",
    "apply_defaults",
    "create_dependabot_config",
    "create_golang_workflow",
    "create_linter_config",
    "create_release_please",
    "parse_lang",
]
