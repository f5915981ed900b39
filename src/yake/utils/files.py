"""Writers for generated configuration files."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_YAML_INDENT = 2
_JSON_INDENT = 4


def dump_yaml(data: Any) -> str:
    """Serialise *data* as block-style YAML, preserving key order."""
    return yaml.safe_dump(
        data,
        sort_keys=False,
        default_flow_style=False,
        indent=_YAML_INDENT,
    )


def write_text_file(path: Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug("Wrote %d bytes to %s", len(content), path)


def write_yaml_file(path: Path, data: Any) -> None:
    write_text_file(path, dump_yaml(data))


def write_json_file(path: Path, data: Any) -> None:
    """Write *data* as 4-space indented JSON with a trailing newline."""
    write_text_file(path, json.dumps(data, indent=_JSON_INDENT) + "\n")
