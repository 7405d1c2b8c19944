"""Improvement suggestions from presence checks at the module root."""

from __future__ import annotations

import re
from pathlib import Path

from ..config import AnalysisOptions
from ..models import Suggestion, WorkspaceInfo

DOC_FILES: tuple[str, ...] = ("README.md", "README", "README.rst", "README.txt")

CI_PATHS: tuple[str, ...] = (
    ".github/workflows",
    ".gitlab-ci.yml",
    ".travis.yml",
    "Jenkinsfile",
    ".circleci",
    "azure-pipelines.yml",
    "bitbucket-pipelines.yml",
)

_NUMERIC_PREFIX = re.compile(r"^\d+(?:\.\d+)*")


def version_tuple(version: str) -> tuple[int, ...]:
    """Numeric prefix of a Go version: "1.21rc2" -> (1, 21); "" -> ()."""
    match = _NUMERIC_PREFIX.match(version.strip())
    if match is None:
        return ()
    return tuple(int(part) for part in match.group(0).split("."))


def version_below(version: str, minimum: str) -> bool:
    current, floor = version_tuple(version), version_tuple(minimum)
    if not current:
        return False
    width = max(len(current), len(floor))
    return current + (0,) * (width - len(current)) < floor + (0,) * (width - len(floor))


def upgrade_suggestions(workspace: WorkspaceInfo, options: AnalysisOptions) -> list[Suggestion]:
    if not version_below(workspace.go_version, options.min_go_version):
        return []
    return [
        Suggestion(
            type="upgrade",
            priority="medium",
            title="Consider upgrading Go version",
            description=(
                f"Current Go version is {workspace.go_version}. Consider upgrading to "
                f"Go {options.recommended_go_version}+ for better performance and features."
            ),
            file="go.mod",
            example=f"go mod edit -go={options.recommended_go_version}",
        )
    ]


def documentation_suggestions(root: Path) -> list[Suggestion]:
    if any((root / name).is_file() for name in DOC_FILES):
        return []
    return [
        Suggestion(
            type="documentation",
            priority="medium",
            title="Add README.md",
            description="Consider adding a README.md file to document your project",
            file="README.md",
        )
    ]


def automation_suggestions(root: Path) -> list[Suggestion]:
    if any((root / path).exists() for path in CI_PATHS):
        return []
    return [
        Suggestion(
            type="automation",
            priority="low",
            title="Set up CI/CD pipeline",
            description="Consider setting up continuous integration and deployment",
            example=".github/workflows/ci.yml",
        )
    ]


def generate_suggestions(workspace: WorkspaceInfo, options: AnalysisOptions) -> list[Suggestion]:
    root = Path(workspace.root_path)
    return [
        *upgrade_suggestions(workspace, options),
        *documentation_suggestions(root),
        *automation_suggestions(root),
    ]
