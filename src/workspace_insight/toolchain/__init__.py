"""Best-effort phases backed by external tools (git, go)."""

from .build import BuildInspector, parse_version_output
from .coverage import CoverageAnalyzer, parse_profile, percentage
from .git import GitInspector
from .process import run_command

__all__ = [
    "BuildInspector",
    "CoverageAnalyzer",
    "GitInspector",
    "parse_profile",
    "parse_version_output",
    "percentage",
    "run_command",
]
