"""Syntactic predicates over single Go source files.

Each file is parsed at most once per ``SourceInspector``; unreadable or
syntactically invalid files answer every question negatively. The Go
toolchain, not this module, reports syntax errors to the user.
"""

from __future__ import annotations

import logging
from pathlib import Path

from yake.parsing import extract_from_file
from yake.parsing.treesitter import ParseResult
from yake.policy.models import FunctionRecord

logger = logging.getLogger(__name__)

SIGNIFICANT_FN_LINES = 5
LARGE_FN_LINES = 25

TESTING_PACKAGE = "testing"


class SourceInspector:
    """Answers the policy checks' questions about Go files."""

    def __init__(
        self,
        *,
        significant_lines: int = SIGNIFICANT_FN_LINES,
        large_lines: int = LARGE_FN_LINES,
    ) -> None:
        self.significant_lines = significant_lines
        self.large_lines = large_lines
        self._parsed: dict[Path, ParseResult | None] = {}

    def _parse(self, path: str | Path) -> ParseResult | None:
        key = Path(path)
        if key in self._parsed:
            return self._parsed[key]
        try:
            result: ParseResult | None = extract_from_file(key)
        except OSError as exc:
            logger.debug("Cannot read %s: %s", key, exc)
            result = None
        self._parsed[key] = result
        return result

    def _parse_complete(self, path: str | Path) -> ParseResult | None:
        result = self._parse(path)
        if result is None or result.has_errors or not result.package:
            if result is not None:
                logger.debug("Skipping %s: syntax errors at %s", path, result.error_ranges)
            return None
        return result

    def imports_test_package(self, path: str | Path) -> bool:
        """True iff the file imports the standard ``testing`` package.

        Only the package clause and import block need to parse.
        """
        result = self._parse(path)
        if result is None or result.header_has_errors:
            return False
        return any(imp.module == TESTING_PACKAGE for imp in result.imports)

    def has_any_function(self, path: str | Path) -> bool:
        result = self._parse_complete(path)
        return bool(result and result.functions)

    def has_significant_function(self, path: str | Path) -> bool:
        """True iff some function body has more than ``significant_lines`` lines."""
        result = self._parse_complete(path)
        if result is None:
            return False
        return any(
            fn.has_body and fn.body_lines > self.significant_lines for fn in result.functions
        )

    def large_functions(self, path: str | Path) -> list[FunctionRecord]:
        """Functions and methods whose body exceeds ``large_lines`` lines.

        Methods are named ``Receiver_Method``; bodiless declarations are skipped.
        """
        result = self._parse_complete(path)
        if result is None:
            return []
        return [
            FunctionRecord(
                name=fn.qualified_name,
                start_line=fn.body_start,
                end_line=fn.body_end,
            )
            for fn in result.functions
            if fn.has_body and fn.body_lines > self.large_lines
        ]
