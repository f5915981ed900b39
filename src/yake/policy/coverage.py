"""Go coverage collection — run ``go test -cover`` once and parse both outputs.

The runner's stdout carries one summary line per package; the cover profile
(``mode: ...`` followed by ``file:startLine.startCol,endLine.endCol numStmts count``
lines) carries per-block hit counts.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from yake.policy.errors import ManifestError, ProfileError, RunnerError
from yake.policy.models import CoverageBlock, FunctionRecord, PackageCoverage
from yake.utils.subprocess_runner import SubprocessError, run_subprocess

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────

GO_MOD = "go.mod"
DEFAULT_RUNNER = "go"
MIN_COVERAGE = 80.0

_MODULE_PREFIX = "module "
_LINE_COMMENT = "//"

_COVERAGE_LINE_REGEX = re.compile(
    r"ok\s+(\S+)\s+(?:[\d.]+s|\(cached\))\s+coverage:\s+(\S+?)%\s+of\s+statements"
)
_NO_TEST_FILES_REGEX = re.compile(r"\?\s+(\S+)\s+\[no test files\]")

# Cover profile: "file:startLine.startCol,endLine.endCol numStmts count"
_COVER_LINE_REGEX = re.compile(r"^(.+):(\d+)\.(\d+),(\d+)\.(\d+) (\d+) (\d+)$")


@dataclass
class CoverageData:
    """Everything one runner invocation produced."""

    packages: list[PackageCoverage] = field(default_factory=list)
    blocks: dict[str, list[CoverageBlock]] = field(default_factory=dict)


# ── Parsing ──────────────────────────────────────────────────────


def parse_coverage_output(output: str) -> list[PackageCoverage]:
    """Parse ``go test -cover`` stdout into per-package summaries.

    Unrecognised lines and non-numeric percentages are skipped.
    """
    summaries: list[PackageCoverage] = []
    for line in output.splitlines():
        match = _COVERAGE_LINE_REGEX.search(line)
        if match:
            try:
                percent = float(match.group(2))
            except ValueError:
                logger.debug("Ignoring unparseable coverage line: %s", line)
                continue
            summaries.append(PackageCoverage(package=match.group(1), percent=percent))
            continue

        match = _NO_TEST_FILES_REGEX.search(line)
        if match:
            summaries.append(PackageCoverage(package=match.group(1)))
    return summaries


def parse_cover_profile(content: str, module_path: str) -> dict[str, list[CoverageBlock]]:
    """Parse a cover profile into repo-relative path -> blocks in file order.

    When *module_path* is non-empty, a leading ``module_path + "/"`` is
    stripped from each file name so lookups match the tree walker's paths.
    """
    blocks: dict[str, list[CoverageBlock]] = {}
    prefix = f"{module_path}/" if module_path else ""

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("mode:"):
            continue
        match = _COVER_LINE_REGEX.match(line)
        if not match:
            continue
        file_path, start_s, _start_col, end_s, _end_col, _stmts, count_s = match.groups()
        try:
            block = CoverageBlock(start_line=int(start_s), end_line=int(end_s), count=int(count_s))
        except ValueError:
            continue
        if prefix and file_path.startswith(prefix):
            file_path = file_path[len(prefix) :]
        blocks.setdefault(file_path, []).append(block)

    return blocks


def parse_module_path(content: str) -> str:
    """Return the identifier of the first ``module`` line of a go.mod, or ''.

    A trailing ``//`` comment on that line is not part of the identifier.
    """
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if line.startswith(_MODULE_PREFIX):
            identifier = line[len(_MODULE_PREFIX) :].split(_LINE_COMMENT, 1)[0]
            return identifier.strip().strip('"')
    return ""


def read_module_path(root: Path) -> str:
    """Read the module identifier from ``root/go.mod``; '' when there is none."""
    go_mod = root / GO_MOD
    if not go_mod.is_file():
        return ""
    try:
        return parse_module_path(go_mod.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestError(f"failed to read go.mod: {exc}") from exc


def is_function_covered(blocks: list[CoverageBlock], fn: FunctionRecord) -> bool:
    """True iff an executed block starts inside the function's brace lines."""
    return any(
        block.is_covered and fn.start_line <= block.start_line <= fn.end_line for block in blocks
    )


# ── Collection ───────────────────────────────────────────────────


def collect_coverage(
    root: Path,
    *,
    runner: str = DEFAULT_RUNNER,
    module_path: str = "",
) -> CoverageData:
    """Run ``<runner> test -cover -coverprofile=<tmp> ./...`` in *root* once.

    The temporary profile is removed on every exit path.

    Raises:
        ProfileError: The temp file cannot be created or read back.
        RunnerError: The runner is missing or exits non-zero.
    """
    try:
        fd, profile_name = tempfile.mkstemp(prefix="yake-cover-", suffix=".out")
    except OSError as exc:
        raise ProfileError(f"failed to create temp file: {exc}") from exc
    os.close(fd)
    profile_path = Path(profile_name)

    try:
        command = [runner, "test", "-cover", f"-coverprofile={profile_path}", "./..."]
        try:
            result = run_subprocess(command, cwd=root, capture_stdout=True, check=True)
        except SubprocessError as exc:
            raise RunnerError(f"failed to run coverage check: {exc}") from exc

        try:
            profile_text = profile_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ProfileError(f"failed to read coverage profile: {exc}") from exc

        return CoverageData(
            packages=parse_coverage_output(result.stdout),
            blocks=parse_cover_profile(profile_text, module_path),
        )
    finally:
        with contextlib.suppress(OSError):
            profile_path.unlink()
