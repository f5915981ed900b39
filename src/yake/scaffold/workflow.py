"""GitHub Actions workflow model and YAML serialisation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from yake.utils.files import dump_yaml

# PyYAML quotes ``on`` because YAML 1.1 reads it as a boolean; GitHub
# Actions expects the bare key.
_QUOTED_ON_KEY = re.compile(r"^(['\"])on\1:", re.MULTILINE)


@dataclass
class WorkflowTrigger:
    branches: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.branches:
            data["branches"] = list(self.branches)
        if self.types:
            data["types"] = list(self.types)
        if self.paths:
            data["paths"] = list(self.paths)
        return data


@dataclass
class WorkflowOn:
    workflow_dispatch: bool = False
    pull_request: WorkflowTrigger | None = None
    push: WorkflowTrigger | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.workflow_dispatch:
            data["workflow_dispatch"] = {}
        if self.pull_request is not None:
            data["pull_request"] = self.pull_request.to_dict()
        if self.push is not None:
            data["push"] = self.push.to_dict()
        return data


@dataclass
class WorkflowPermissions:
    contents: str = ""
    issues: str = ""
    pull_requests: str = ""

    def to_dict(self) -> dict[str, str]:
        data: dict[str, str] = {}
        if self.contents:
            data["contents"] = self.contents
        if self.issues:
            data["issues"] = self.issues
        if self.pull_requests:
            data["pull-requests"] = self.pull_requests
        return data


@dataclass
class WorkflowStep:
    name: str = ""
    uses: str = ""
    id: str = ""
    run: str = ""
    env: dict[str, str] = field(default_factory=dict)
    with_: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        if self.uses:
            data["uses"] = self.uses
        if self.id:
            data["id"] = self.id
        if self.run:
            data["run"] = self.run
        if self.env:
            data["env"] = dict(self.env)
        if self.with_:
            data["with"] = dict(self.with_)
        return data


@dataclass
class WorkflowJob:
    runs_on: str
    steps: list[WorkflowStep] = field(default_factory=list)
    name: str = ""
    outputs: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        data["runs-on"] = self.runs_on
        if self.outputs:
            data["outputs"] = dict(self.outputs)
        data["steps"] = [step.to_dict() for step in self.steps]
        return data


@dataclass
class Workflow:
    """A ``.github/workflows/*.yml`` document."""

    name: str
    on: WorkflowOn
    jobs: dict[str, WorkflowJob] = field(default_factory=dict)
    permissions: WorkflowPermissions = field(default_factory=WorkflowPermissions)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "on": self.on.to_dict()}
        permissions = self.permissions.to_dict()
        if permissions:
            data["permissions"] = permissions
        data["jobs"] = {job_id: job.to_dict() for job_id, job in self.jobs.items()}
        return data

    def marshal(self) -> str:
        """Render as YAML with an unquoted ``on`` key."""
        return _QUOTED_ON_KEY.sub("on:", dump_yaml(self.to_dict()), count=1)
