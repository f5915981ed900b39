"""Code parsing and AST extraction."""

from __future__ import annotations

from pathlib import Path

from yake.parsing.go import GoExtractor
from yake.parsing.treesitter import (
    FunctionInfo,
    ImportInfo,
    ParseResult,
    detect_language,
)


def extract_from_source(source: bytes, language: str = "go") -> ParseResult:
    """Parse source code and extract all code structures."""
    if language != GoExtractor.language:
        raise ValueError(f"No extractor for language: {language}")
    return GoExtractor().extract(source)


def extract_from_file(file_path: str | Path) -> ParseResult:
    """Parse a file and extract all code structures.

    Detects language from file extension.
    """
    path = Path(file_path)
    language = detect_language(path)
    if language is None:
        raise ValueError(f"Cannot detect language for: {path}")
    return extract_from_source(path.read_bytes(), language)


__all__ = [
    "FunctionInfo",
    "GoExtractor",
    "ImportInfo",
    "ParseResult",
    "detect_language",
    "extract_from_file",
    "extract_from_source",
]
