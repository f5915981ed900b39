"""Tests for policy data models and errors (policy/models.py, policy/errors.py)."""

from __future__ import annotations

from yake.policy.errors import PolicyError, WalkError
from yake.policy.models import (
    CoverageBlock,
    FunctionRecord,
    PackageCoverage,
    Violation,
    ViolationKind,
    format_violations,
)


class TestViolation:
    def test_str(self) -> None:
        violation = Violation(
            kind=ViolationKind.MISSING_TEST_FILE,
            subject="pkg/a.go",
            message="missing test file 'pkg/a_test.go'",
        )
        assert str(violation) == "pkg/a.go: missing test file 'pkg/a_test.go'"

    def test_equality_supports_multiset_comparison(self) -> None:
        a = Violation(ViolationKind.NO_TEST_FILES, "p", "no test files")
        b = Violation(ViolationKind.NO_TEST_FILES, "p", "no test files")
        assert a == b
        assert len({a, b}) == 1


class TestFormatViolations:
    def test_block(self) -> None:
        violations = [
            Violation(ViolationKind.NO_TEST_FILES, "p", "no test files"),
            Violation(ViolationKind.LOW_COVERAGE, "q", "50.0% coverage (minimum 80%)"),
        ]
        assert format_violations("coverage violations (minimum 80%):", violations) == (
            "coverage violations (minimum 80%):\n"
            "  - p: no test files\n"
            "  - q: 50.0% coverage (minimum 80%)"
        )


class TestRecords:
    def test_function_length_excludes_braces(self) -> None:
        assert FunctionRecord(name="F", start_line=4, end_line=35).lines == 30

    def test_block_coverage(self) -> None:
        assert CoverageBlock(start_line=1, end_line=2, count=1).is_covered is True
        assert CoverageBlock(start_line=1, end_line=2, count=0).is_covered is False

    def test_package_without_tests(self) -> None:
        assert PackageCoverage("p").has_tests is False
        assert PackageCoverage("p", 0.0).has_tests is True


class TestErrors:
    def test_walk_error_message(self) -> None:
        error = WalkError("/src/x", PermissionError("denied"))
        assert str(error) == "failed to walk directory: /src/x: denied"
        assert isinstance(error, PolicyError)
