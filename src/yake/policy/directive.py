"""Detection of the ``//<namespace>:skip-test`` opt-out directive."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "yake"

_PACKAGE_PREFIX = "package "
_COMMENT_PREFIX = "//"


def skip_directive(namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"//{namespace}:skip-test"


def has_skip_directive(path: str | Path, namespace: str = DEFAULT_NAMESPACE) -> bool:
    """Return True if the directive appears in the header comments of *path*.

    Only line comments before the ``package`` clause count; scanning stops at
    the package clause or at the first other non-blank line.
    """
    token = skip_directive(namespace)
    try:
        with Path(path).open(encoding="utf-8", errors="replace") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line:
                    continue
                if line.startswith(_PACKAGE_PREFIX):
                    return False
                if not line.startswith(_COMMENT_PREFIX):
                    return False
                if line.startswith(token):
                    return True
    except OSError as exc:
        logger.debug("Cannot read %s for directives: %s", path, exc)
    return False
