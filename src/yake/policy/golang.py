"""Go project policy checks: test-file naming discipline and coverage floors.

Both checks walk the project tree independently, collect every violation
they find and hand the full list back; neither stops at the first problem.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from yake.config import PolicyConfig
from yake.policy.coverage import collect_coverage, is_function_covered, read_module_path
from yake.policy.directive import DEFAULT_NAMESPACE, has_skip_directive
from yake.policy.errors import PolicyCheckError, PolicyError
from yake.policy.inspector import SourceInspector
from yake.policy.models import (
    CoverageBlock,
    PackageCoverage,
    Violation,
    ViolationKind,
    format_violations,
)
from yake.policy.walker import (
    GO_SUFFIX,
    TEST_SUFFIX,
    is_test_file,
    walk_go_files,
    walk_go_sources,
)

logger = logging.getLogger(__name__)

E2E_TEST_SUFFIX = "_e2e_test.go"

INVALID_TEST_SUFFIXES = (
    "_unit_test.go",
    "_bench_test.go",
    "_integration_test.go",
)

NAMING_HEADER = "test file naming violations:"

_NAMING_HINT = "'{origin}_test.go' or '{origin}_e2e_test.go'"


def _inspector_for(config: PolicyConfig) -> SourceInspector:
    return SourceInspector(
        significant_lines=config.significant_function_lines,
        large_lines=config.large_function_lines,
    )


def coverage_header(config: PolicyConfig) -> str:
    return f"coverage violations (minimum {config.min_coverage:.0f}%):"


# ── Naming ───────────────────────────────────────────────────────


def validate_test_file_name(
    root: Path,
    test_path: str,
    inspector: SourceInspector,
) -> list[Violation]:
    """Check one ``*_test.go`` file against the naming rules.

    Test files without any function declaration are tolerated.
    """
    if not inspector.has_any_function(root / test_path):
        return []

    violations: list[Violation] = []
    rel = PurePosixPath(test_path)
    filename = rel.name

    if filename.endswith(E2E_TEST_SUFFIX):
        base_name = filename.removesuffix(E2E_TEST_SUFFIX)
    else:
        base_name = filename.removesuffix(TEST_SUFFIX)
        violations.extend(
            Violation(
                kind=ViolationKind.INVALID_NAMING_PATTERN,
                subject=test_path,
                message=f"invalid naming pattern '{pattern}', use {_NAMING_HINT}",
            )
            for pattern in INVALID_TEST_SUFFIXES
            if filename.endswith(pattern)
        )

    source_path = (rel.parent / f"{base_name}{GO_SUFFIX}").as_posix()
    if not (root / source_path).exists():
        violations.append(
            Violation(
                kind=ViolationKind.MISSING_SOURCE_FILE,
                subject=test_path,
                message=f"missing source file '{source_path}'",
            )
        )

    if not inspector.imports_test_package(root / test_path):
        violations.append(
            Violation(
                kind=ViolationKind.MISSING_TESTING_IMPORT,
                subject=test_path,
                message="missing 'testing' package import",
            )
        )

    return violations


def validate_source_file(
    root: Path,
    source_path: str,
    *,
    directive_namespace: str = DEFAULT_NAMESPACE,
) -> list[Violation]:
    """Require ``<name>_test.go`` next to ``<name>.go`` unless the file opts out."""
    if has_skip_directive(root / source_path, directive_namespace):
        return []

    rel = PurePosixPath(source_path)
    test_path = (rel.parent / f"{rel.name.removesuffix(GO_SUFFIX)}{TEST_SUFFIX}").as_posix()
    if (root / test_path).exists():
        return []
    return [
        Violation(
            kind=ViolationKind.MISSING_TEST_FILE,
            subject=source_path,
            message=f"missing test file '{test_path}'",
        )
    ]


def check_test_file_naming(
    root: str | Path,
    config: PolicyConfig | None = None,
    *,
    inspector: SourceInspector | None = None,
) -> list[Violation]:
    """Walk *root* and report every test-file naming violation.

    Raises:
        WalkError: The tree could not be walked.
    """
    logger.info("Checking test file naming conventions...")
    root_path = Path(root)
    config = config or PolicyConfig()
    inspector = inspector or _inspector_for(config)

    violations: list[Violation] = []
    for rel in walk_go_files(root_path):
        if is_test_file(rel):
            violations.extend(validate_test_file_name(root_path, rel, inspector))
            continue

        if inspector.imports_test_package(root_path / rel):
            violations.append(
                Violation(
                    kind=ViolationKind.TESTING_IMPORT_IN_SOURCE,
                    subject=rel,
                    message=f"file imports 'testing' but is not named {_NAMING_HINT}",
                )
            )

        if inspector.has_significant_function(root_path / rel):
            violations.extend(
                validate_source_file(
                    root_path, rel, directive_namespace=config.directive_namespace
                )
            )

    return violations


# ── Coverage ─────────────────────────────────────────────────────


def coverage_summary_violations(
    packages: list[PackageCoverage],
    min_coverage: float,
) -> list[Violation]:
    """Packages below *min_coverage* or without any test files."""
    violations: list[Violation] = []
    for summary in packages:
        if not summary.has_tests:
            violations.append(
                Violation(
                    kind=ViolationKind.NO_TEST_FILES,
                    subject=summary.package,
                    message="no test files",
                )
            )
        elif summary.percent < min_coverage:
            violations.append(
                Violation(
                    kind=ViolationKind.LOW_COVERAGE,
                    subject=summary.package,
                    message=(
                        f"{summary.percent:.1f}% coverage (minimum {min_coverage:.0f}%)"
                    ),
                )
            )
    return violations


def find_uncovered_large_functions(
    root: str | Path,
    blocks: dict[str, list[CoverageBlock]],
    config: PolicyConfig | None = None,
    *,
    inspector: SourceInspector | None = None,
) -> list[Violation]:
    """Large functions that no executed coverage block starts inside.

    Test files, generated files and files carrying the skip directive are
    not considered.
    """
    root_path = Path(root)
    config = config or PolicyConfig()
    inspector = inspector or _inspector_for(config)

    violations: list[Violation] = []
    for rel in walk_go_sources(root_path):
        if has_skip_directive(root_path / rel, config.directive_namespace):
            continue
        file_blocks = blocks.get(rel, [])
        violations.extend(
            Violation(
                kind=ViolationKind.UNCOVERED_FUNCTION,
                subject=rel,
                message=f"function '{fn.name}' ({fn.lines} lines) has no test coverage",
            )
            for fn in inspector.large_functions(root_path / rel)
            if not is_function_covered(file_blocks, fn)
        )
    return violations


def check_coverage(
    root: str | Path,
    config: PolicyConfig | None = None,
    *,
    inspector: SourceInspector | None = None,
) -> list[Violation]:
    """Run the test suite once and report package and function coverage gaps.

    Raises:
        ManifestError: go.mod exists but cannot be read.
        RunnerError: The test runner failed.
        ProfileError: The coverage profile could not be handled.
        WalkError: The tree could not be walked.
    """
    config = config or PolicyConfig()
    logger.info(
        "Checking code coverage (minimum %.0f%% per package)...", config.min_coverage
    )
    root_path = Path(root)

    module_path = read_module_path(root_path)
    data = collect_coverage(root_path, runner=config.runner, module_path=module_path)

    violations = coverage_summary_violations(data.packages, config.min_coverage)
    violations.extend(
        find_uncovered_large_functions(root_path, data.blocks, config, inspector=inspector)
    )
    return violations


# ── Orchestration ────────────────────────────────────────────────


def run_checks(root: str | Path, config: PolicyConfig | None = None) -> list[Violation]:
    """Naming violations followed by coverage violations; empty means success.

    Errors from either check propagate.
    """
    config = config or PolicyConfig()
    inspector = _inspector_for(config)
    violations = check_test_file_naming(root, config, inspector=inspector)
    violations.extend(check_coverage(root, config, inspector=inspector))
    return violations


def run_golang_checks(root: str | Path, config: PolicyConfig | None = None) -> None:
    """Run both checks and raise one aggregated ``PolicyCheckError`` on failure.

    A failing check (for example a test runner error) is reported in place of
    its section; it does not prevent the other check from running.
    """
    logger.info("Running Go policy checks...")
    config = config or PolicyConfig()
    inspector = _inspector_for(config)

    sections: list[str] = []

    try:
        naming = check_test_file_naming(root, config, inspector=inspector)
    except PolicyError as exc:
        sections.append(str(exc))
    else:
        if naming:
            sections.append(format_violations(NAMING_HEADER, naming))

    try:
        coverage = check_coverage(root, config, inspector=inspector)
    except PolicyError as exc:
        sections.append(str(exc))
    else:
        if coverage:
            sections.append(format_violations(coverage_header(config), coverage))

    if sections:
        raise PolicyCheckError("\n".join(sections))
