"""Policy engine: test-file naming and coverage enforcement for Go projects."""

from yake.policy.errors import (
    ManifestError,
    PolicyCheckError,
    PolicyError,
    ProfileError,
    RunnerError,
    WalkError,
)
from yake.policy.models import (
    CoverageBlock,
    FunctionRecord,
    PackageCoverage,
    Violation,
    ViolationKind,
)

__all__ = [
    "CoverageBlock",
    "FunctionRecord",
    "ManifestError",
    "PackageCoverage",
    "PolicyCheckError",
    "PolicyError",
    "ProfileError",
    "RunnerError",
    "Violation",
    "ViolationKind",
    "WalkError",
]
