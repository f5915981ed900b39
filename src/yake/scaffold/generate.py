"""Create repository configuration files from the scaffold templates.

Every generator refuses to overwrite an existing file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from yake.scaffold.github import (
    DEPENDABOT_FILE,
    GOLANG_WORKFLOW_FILE,
    RELEASE_PLEASE_CONFIG_FILE,
    RELEASE_PLEASE_MANIFEST_FILE,
    RELEASE_PLEASE_WORKFLOW_FILE,
    Lang,
    dependabot_config,
    golang_workflow,
    release_please_config,
    release_please_manifest,
    release_please_workflow,
)
from yake.scaffold.linter import GOLANGCI_FILE, golangci_config
from yake.utils.files import write_json_file, write_text_file, write_yaml_file

logger = logging.getLogger(__name__)

GO_MOD = "go.mod"


class ScaffoldError(Exception):
    """A configuration file could not be generated."""


def parse_lang(value: str) -> Lang:
    try:
        return Lang(value)
    except ValueError:
        raise ScaffoldError(f"unsupported language: {value}") from None


def _target(root: Path, rel: str, what: str) -> Path:
    path = root / rel
    if path.exists():
        raise ScaffoldError(f"{what} already exists")
    return path


def create_linter_config(root: Path, lang: Lang) -> Path:
    if lang is not Lang.GOLANG:
        raise ScaffoldError(f"unsupported language: {lang.value}")
    path = _target(root, GOLANGCI_FILE, "linter config file")
    logger.info("Creating %s", GOLANGCI_FILE)
    write_yaml_file(path, golangci_config())
    return path


def create_dependabot_config(root: Path, lang: Lang, maintainers: list[str]) -> Path:
    path = _target(root, DEPENDABOT_FILE, "dependabot config file")
    logger.info("Creating %s", DEPENDABOT_FILE)
    write_yaml_file(path, dependabot_config(lang, maintainers))
    return path


def create_golang_workflow(root: Path, lang: Lang) -> Path:
    if lang is not Lang.GOLANG:
        raise ScaffoldError(f"unsupported language: {lang.value}")
    path = _target(root, GOLANG_WORKFLOW_FILE, "workflow file")
    logger.info("Creating %s", GOLANG_WORKFLOW_FILE)
    write_text_file(path, golang_workflow().marshal())
    return path


def create_release_please(root: Path, branch: str) -> list[Path]:
    """Write the release-please workflow, config and manifest."""
    workflow_path = _target(root, RELEASE_PLEASE_WORKFLOW_FILE, "release-please workflow")
    config_path = _target(root, RELEASE_PLEASE_CONFIG_FILE, "release-please config")
    manifest_path = _target(root, RELEASE_PLEASE_MANIFEST_FILE, "release-please manifest")

    logger.info("Creating %s for branch %s", RELEASE_PLEASE_WORKFLOW_FILE, branch)
    write_text_file(workflow_path, release_please_workflow(branch).marshal())
    write_json_file(config_path, release_please_config())
    write_json_file(manifest_path, release_please_manifest())
    return [workflow_path, config_path, manifest_path]


def apply_defaults(root: Path) -> list[Path]:
    """Create the default configuration files a Go project is missing."""
    created: list[Path] = []
    if (root / GO_MOD).exists() and not (root / GOLANGCI_FILE).exists():
        created.append(create_linter_config(root, Lang.GOLANG))
    return created
