"""Recursive enumeration of Go source files below a project root."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from yake.policy.errors import WalkError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

PRUNED_DIRS = frozenset({"vendor", ".git", "test", "tests", "examples"})

GO_SUFFIX = ".go"
GENERATED_SUFFIX = ".pb.go"
TEST_SUFFIX = "_test.go"


def _raise_walk_error(exc: OSError) -> None:
    raise WalkError(exc.filename or "", exc) from exc


def _stat_entry(path: str) -> None:
    # os.walk treats entries it cannot stat as plain files
    try:
        os.lstat(path)
    except OSError as exc:
        raise WalkError(path, exc) from exc


def walk_go_files(root: str | Path) -> Iterator[str]:
    """Yield root-relative, forward-slash paths of every non-generated ``.go`` file.

    Directories named in ``PRUNED_DIRS`` are not descended into. The root
    itself is never pruned. Unreadable entries raise ``WalkError``.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        try:
            root_path.stat()
        except OSError as exc:
            raise WalkError(str(root_path), exc) from exc
        raise WalkError(str(root_path), NotADirectoryError(str(root_path)))

    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_walk_error):
        dirnames[:] = [name for name in dirnames if name not in PRUNED_DIRS]
        for name in dirnames:
            _stat_entry(os.path.join(dirpath, name))
        rel_dir = Path(dirpath).relative_to(root_path)
        for filename in filenames:
            _stat_entry(os.path.join(dirpath, filename))
            rel = (rel_dir / filename).as_posix()
            if not rel.endswith(GO_SUFFIX) or rel.endswith(GENERATED_SUFFIX):
                continue
            yield rel


def is_test_file(rel_path: str) -> bool:
    """Return True for ``*_test.go`` files."""
    return rel_path.endswith(TEST_SUFFIX)


def walk_go_sources(root: str | Path) -> Iterator[str]:
    """Like ``walk_go_files`` but without ``*_test.go`` files."""
    for rel in walk_go_files(root):
        if not is_test_file(rel):
            yield rel
