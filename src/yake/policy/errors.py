"""Exceptions raised by the policy engine.

Policy violations are data, not exceptions; these classes cover the I/O and
runner failures that stop a check from producing a verdict at all.
"""

from __future__ import annotations


class PolicyError(Exception):
    """Base class for failures that abort a policy check."""


class WalkError(PolicyError):
    """A directory entry could not be read during the tree walk."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"failed to walk directory: {path}: {cause}")
        self.path = path
        self.cause = cause


class ManifestError(PolicyError):
    """``go.mod`` exists but could not be read."""


class ProfileError(PolicyError):
    """The temporary coverage profile could not be created or read."""


class RunnerError(PolicyError):
    """The external test runner exited unsuccessfully."""


class PolicyCheckError(PolicyError):
    """Aggregated report of every failed check, one section per check."""
