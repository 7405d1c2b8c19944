"""Locate the Go module root for a start path."""

from __future__ import annotations

from pathlib import Path

from ..exceptions import ModuleRootNotFoundError

MANIFEST_NAME = "go.mod"


def find_module_root(start_path: str | Path) -> Path:
    """Walk upward from start_path to the first directory holding go.mod.

    Raises:
        ModuleRootNotFoundError: If the filesystem root is reached first
    """
    start = Path(start_path).expanduser().resolve()
    current = start if start.is_dir() else start.parent

    for candidate in (current, *current.parents):
        if (candidate / MANIFEST_NAME).is_file():
            return candidate

    raise ModuleRootNotFoundError(start)
