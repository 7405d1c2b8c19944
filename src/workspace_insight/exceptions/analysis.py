"""Analysis-related exceptions: file access, parsing, external commands."""

from pathlib import Path
from typing import List

from .base import WorkspaceInsightError


class AnalysisError(WorkspaceInsightError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Failed to parse Go file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class CommandError(AnalysisError):
    """Raised when an external command (git, go) fails or cannot be started."""

    def __init__(self, args: List[str], reason: str):
        super().__init__(
            f"Command failed: {' '.join(args)}",
            details={"reason": reason},
        )
        self.args_list = args
        self.reason = reason
