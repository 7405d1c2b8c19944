"""Workspace resolution errors: the only failures that abort an analysis."""

from pathlib import Path

from .base import WorkspaceInsightError


class WorkspaceError(WorkspaceInsightError):
    """Base class for errors that prevent a workspace from being resolved."""

    pass


class ModuleRootNotFoundError(WorkspaceError):
    """Raised when no go.mod exists at or above the start path."""

    def __init__(self, start_path: Path):
        super().__init__(
            f"No go.mod found in {start_path} or any parent directory",
            details={"start_path": str(start_path)},
        )
        self.start_path = start_path


class ManifestReadError(WorkspaceError):
    """Raised when go.mod exists but cannot be read at all."""

    def __init__(self, manifest_path: Path, reason: str):
        super().__init__(
            f"Cannot read module manifest: {manifest_path}",
            details={"manifest": str(manifest_path), "reason": reason},
        )
        self.manifest_path = manifest_path
        self.reason = reason
