"""Exception hierarchy for Workspace Insight."""

from .analysis import (
    AnalysisError,
    CommandError,
    FileAccessError,
    ParsingError,
)
from .base import WorkspaceInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
)
from .workspace import (
    ManifestReadError,
    ModuleRootNotFoundError,
    WorkspaceError,
)

__all__ = [
    "WorkspaceInsightError",
    "WorkspaceError",
    "ModuleRootNotFoundError",
    "ManifestReadError",
    "AnalysisError",
    "CommandError",
    "FileAccessError",
    "ParsingError",
    "ConfigurationError",
    "InvalidConfigError",
]
