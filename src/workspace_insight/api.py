"""Public API for Workspace Insight.

Example:
    >>> from workspace_insight import analyze
    >>>
    >>> result = analyze("/path/to/module")
    >>> result.workspace.module_path
    'example.com/m'
    >>>
    >>> # With overrides
    >>> result = analyze("/path/to/module", include_coverage=True, max_depth=4)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from .config import load_options
from .detector import WorkspaceDetector
from .models import AnalysisResult


def analyze(
    path: str | Path = ".",
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> AnalysisResult:
    """Analyze the Go module containing path.

    Args:
        path: Any path inside the module (default: current directory)
        config_file: Optional explicit config file path
        **overrides: AnalysisOptions overrides (e.g. include_git_info=False)

    Raises:
        ConfigurationError: If configuration is invalid
        WorkspaceError: If no module root is found or go.mod is unreadable
    """
    options = load_options(config_file=config_file, **overrides)
    return WorkspaceDetector(options).detect_workspace(path)
