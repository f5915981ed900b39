"""Default golangci-lint configuration."""

from __future__ import annotations

from typing import Any

GOLANGCI_FILE = ".golangci.yml"

ENABLED_LINTERS = (
    "dogsled",
    "dupl",
    "exportloopref",
    "gocritic",
    "gocyclo",
    "gosimple",
    "govet",
    "ineffassign",
    "misspell",
    "nakedret",
    "prealloc",
    "revive",
    "staticcheck",
    "stylecheck",
    "typecheck",
    "unconvert",
    "unused",
)

GOSEC_EXCLUDES = ("G402",)


def golangci_config() -> dict[str, Any]:
    """Return the ``.golangci.yml`` document: an explicit, sorted linter allow-list."""
    return {
        "linters": {
            "enable": sorted(ENABLED_LINTERS),
            "fast": False,
            "disable-all": True,
        },
        "linters-settings": {
            "gosec": {
                "excludes": list(GOSEC_EXCLUDES),
            },
        },
    }
