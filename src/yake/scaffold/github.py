"""GitHub repository configuration: Dependabot, CI and release-please."""

from __future__ import annotations

from enum import Enum
from typing import Any

from yake.scaffold.workflow import (
    Workflow,
    WorkflowJob,
    WorkflowOn,
    WorkflowPermissions,
    WorkflowStep,
    WorkflowTrigger,
)

DEPENDABOT_FILE = ".github/dependabot.yml"
GOLANG_WORKFLOW_FILE = ".github/workflows/golang.yml"
RELEASE_PLEASE_WORKFLOW_FILE = ".github/workflows/release-please.yml"
RELEASE_PLEASE_CONFIG_FILE = ".github/release-please-config.json"
RELEASE_PLEASE_MANIFEST_FILE = ".github/release-please-manifest.json"

_UPDATE_INTERVAL = "monthly"
_RUNNER_IMAGE = "ubuntu-latest"
_CHECKOUT = "actions/checkout@v4"
_SETUP_GO = "actions/setup-go@v5"
_GO_PATHS = ["**.go", "go.mod", "go.sum"]
_INITIAL_VERSION = "0.0.1"


class Lang(Enum):
    """Languages the scaffolders know how to configure."""

    GOLANG = "go"


def _update(ecosystem: str, maintainers: list[str]) -> dict[str, Any]:
    update: dict[str, Any] = {
        "package-ecosystem": ecosystem,
        "directory": "/",
        "schedule": {"interval": _UPDATE_INTERVAL},
    }
    if maintainers:
        update["reviewers"] = list(maintainers)
        update["assignees"] = list(maintainers)
    return update


def dependabot_config(lang: Lang | None, maintainers: list[str] | None = None) -> dict[str, Any]:
    """Dependabot v2 config: GitHub Actions always, Go modules for Go projects."""
    maintainers = maintainers or []
    updates = [_update("github-actions", maintainers)]
    if lang is Lang.GOLANG:
        gomod = _update("gomod", maintainers)
        gomod["groups"] = {"dependencies": {"patterns": ["*"]}}
        updates.append(gomod)
    return {"version": 2, "updates": updates}


def _setup_go_steps() -> list[WorkflowStep]:
    return [
        WorkflowStep(uses=_CHECKOUT),
        WorkflowStep(uses=_SETUP_GO, with_={"go-version-file": "go.mod"}),
    ]


def golang_workflow() -> Workflow:
    """Lint and test workflow for Go sources."""
    return Workflow(
        name="golang",
        on=WorkflowOn(
            workflow_dispatch=True,
            pull_request=WorkflowTrigger(
                types=["opened", "synchronize", "reopened"],
                paths=list(_GO_PATHS),
            ),
            push=WorkflowTrigger(paths=list(_GO_PATHS)),
        ),
        jobs={
            "linter": WorkflowJob(
                runs_on=_RUNNER_IMAGE,
                steps=[
                    *_setup_go_steps(),
                    WorkflowStep(
                        name="golangci-lint",
                        uses="golangci/golangci-lint-action@v8",
                        with_={"args": "--timeout=5m"},
                    ),
                ],
            ),
            "tests": WorkflowJob(
                runs_on=_RUNNER_IMAGE,
                steps=[
                    *_setup_go_steps(),
                    WorkflowStep(
                        name="Test",
                        run="go test -coverprofile=coverage.txt -covermode=atomic ./...",
                    ),
                    WorkflowStep(name="Test Race", run="go test -race ./..."),
                    WorkflowStep(
                        name="Publish coverage",
                        uses="codecov/codecov-action@v5",
                        env={"CODECOV_TOKEN": "${{ secrets.CODECOV_TOKEN }}"},
                        with_={"files": "./coverage.txt"},
                    ),
                ],
            ),
        },
    )


def release_please_workflow(branch: str) -> Workflow:
    """Release-please workflow publishing releases from *branch*."""
    return Workflow(
        name="release-please",
        on=WorkflowOn(push=WorkflowTrigger(branches=[branch])),
        permissions=WorkflowPermissions(
            contents="write",
            issues="write",
            pull_requests="write",
        ),
        jobs={
            "release-please": WorkflowJob(
                name="Creating release",
                runs_on=_RUNNER_IMAGE,
                outputs={
                    "release_created": "${{ steps.release.outputs.release_created }}",
                    "tag_name": "${{ steps.release.outputs.tag_name }}",
                },
                steps=[
                    WorkflowStep(
                        uses="googleapis/release-please-action@v4",
                        id="release",
                        with_={
                            "token": "${{ secrets.GITHUB_TOKEN }}",
                            "config-file": RELEASE_PLEASE_CONFIG_FILE,
                            "manifest-file": RELEASE_PLEASE_MANIFEST_FILE,
                        },
                    ),
                ],
            ),
        },
    )


def release_please_config() -> dict[str, Any]:
    return {
        "release-type": "simple",
        "prerelease": False,
        "packages": {".": {}},
    }


def release_please_manifest() -> dict[str, str]:
    return {".": _INITIAL_VERSION}
