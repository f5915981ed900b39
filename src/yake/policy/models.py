"""Data models shared by the policy checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ViolationKind(Enum):
    """Which rule a violation breaks."""

    MISSING_SOURCE_FILE = "missing_source_file"
    INVALID_NAMING_PATTERN = "invalid_naming_pattern"
    MISSING_TESTING_IMPORT = "missing_testing_import"
    TESTING_IMPORT_IN_SOURCE = "testing_import_in_source"
    MISSING_TEST_FILE = "missing_test_file"
    LOW_COVERAGE = "low_coverage"
    NO_TEST_FILES = "no_test_files"
    UNCOVERED_FUNCTION = "uncovered_function"


@dataclass(frozen=True)
class Violation:
    """One broken rule, keyed by a file path or package identifier."""

    kind: ViolationKind
    subject: str
    message: str

    def __str__(self) -> str:
        return f"{self.subject}: {self.message}"


@dataclass(frozen=True)
class FunctionRecord:
    """A top-level function or method with its body brace lines."""

    name: str
    start_line: int
    end_line: int

    @property
    def lines(self) -> int:
        """Lines strictly between the opening and closing brace."""
        return self.end_line - self.start_line - 1


@dataclass(frozen=True)
class CoverageBlock:
    """A line range from a cover profile with its hit count."""

    start_line: int
    end_line: int
    count: int

    @property
    def is_covered(self) -> bool:
        """Return True if this block was executed at least once."""
        return self.count > 0


@dataclass(frozen=True)
class PackageCoverage:
    """Per-package summary line from ``go test -cover``.

    ``percent`` is None when the runner reported ``[no test files]``.
    """

    package: str
    percent: float | None = None

    @property
    def has_tests(self) -> bool:
        return self.percent is not None


def format_violations(header: str, violations: list[Violation]) -> str:
    """Render a violation block with a stable header, one ``  - `` line each."""
    lines = [header]
    lines.extend(f"  - {violation}" for violation in violations)
    return "\n".join(lines)
