"""
Workspace Insight - static analysis of Go modules

Locates the module root, parses go.mod, walks and parses every Go file into
a package model, computes complexity metrics and reports issues and
improvement suggestions. Optionally adds dependency usage, git metadata,
test coverage and toolchain information.
"""

__version__ = "1.0.0"

from .api import analyze
from .config import AnalysisOptions, load_options
from .detector import WorkspaceDetector, detect_workspace
from .models import AnalysisResult, ProjectType, WorkspaceInfo

__all__ = [
    "analyze",  # Main entry point
    "detect_workspace",
    "WorkspaceDetector",
    "AnalysisOptions",
    "AnalysisResult",
    "ProjectType",
    "WorkspaceInfo",
    "load_options",
]
