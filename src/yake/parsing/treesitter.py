"""Tree-sitter wrapper for parsing Go source files and extracting code structures."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, cast

import tree_sitter
import tree_sitter_language_pack as tslp

if TYPE_CHECKING:
    from tree_sitter_language_pack import SupportedLanguage

logger = logging.getLogger(__name__)

# Map file extensions to tree-sitter language names
EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".go": "go",
}

SUPPORTED_LANGUAGES = frozenset({"go"})


@dataclass
class FunctionInfo:
    """Extracted top-level function or method.

    ``start_line``/``end_line`` span the whole declaration, while
    ``body_start``/``body_end`` are the lines holding the opening and
    closing braces of the body (0 when the declaration has no body).
    """

    name: str
    start_line: int
    end_line: int
    body_start: int = 0
    body_end: int = 0
    receiver: str | None = None

    @property
    def has_body(self) -> bool:
        """Return True when the declaration carries a ``{ ... }`` body."""
        return self.body_start > 0

    @property
    def body_lines(self) -> int:
        """Number of lines strictly between the body braces."""
        if not self.has_body:
            return 0
        return max(self.body_end - self.body_start - 1, 0)

    @property
    def qualified_name(self) -> str:
        """``Type_Method`` for methods, the bare name for functions."""
        if self.receiver:
            return f"{self.receiver}_{self.name}"
        return self.name


@dataclass
class ImportInfo:
    """Extracted import spec."""

    module: str
    alias: str | None = None
    start_line: int = 0


@dataclass
class ParseResult:
    """Complete parse result for a source file."""

    language: str
    package: str = ""
    functions: list[FunctionInfo] = field(default_factory=list)
    imports: list[ImportInfo] = field(default_factory=list)
    has_errors: bool = False
    header_has_errors: bool = False
    error_ranges: list[tuple[int, int]] = field(default_factory=list)


# ── Module-level caches ──────────────────────────────────────────
_parser_cache: dict[str, tree_sitter.Parser] = {}


def detect_language(file_path: str | Path) -> str | None:
    """Detect language from file extension.

    Returns the tree-sitter language name, or None if unsupported.
    """
    ext = Path(file_path).suffix.lower()
    return EXTENSION_TO_LANGUAGE.get(ext)


def get_parser(language: str) -> tree_sitter.Parser:
    """Get a (cached) tree-sitter parser for the given language."""
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {language}")
    cached = _parser_cache.get(language)
    if cached is not None:
        return cached
    parser = tslp.get_parser(cast("SupportedLanguage", language))
    _parser_cache[language] = parser
    return parser


def has_parse_errors(root: tree_sitter.Node) -> bool:
    """Check if the AST contains any parse errors."""
    return root.has_error


def collect_error_ranges(root: tree_sitter.Node) -> list[tuple[int, int]]:
    """Collect line ranges of parse error nodes."""
    errors: list[tuple[int, int]] = []
    _walk_errors(root, errors)
    return errors


def _walk_errors(node: tree_sitter.Node, errors: list[tuple[int, int]]) -> None:
    if node.is_error or node.is_missing:
        errors.append((node.start_point.row + 1, node.end_point.row + 1))
    for child in node.children:
        _walk_errors(child, errors)


def node_text(node: tree_sitter.Node | None) -> str:
    """Decode node text from bytes, returning empty string for None."""
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def node_line(node: tree_sitter.Node) -> int:
    """1-based line of the node's first byte."""
    return node.start_point.row + 1


def node_end_line(node: tree_sitter.Node) -> int:
    """1-based line of the node's last byte."""
    return node.end_point.row + 1
