"""Rule-based issue detection.

Rules:
    max-complexity: function complexity above the configured threshold
    missing-tests: non-main package without any *_test.go file (only when
        test files are walked)
    unused-dependency: direct requirement no package imports (only when the
        dependency phase succeeded and every file, tests included, was parsed)
"""

from __future__ import annotations

from pathlib import Path

from ..config import AnalysisOptions
from ..models import Issue, PhaseStatus, WorkspaceInfo
from ..workspace import MANIFEST_NAME

REFACTOR_HINT = "Consider breaking this function into smaller functions"
TESTS_HINT = "Add test files to improve code quality and reliability"
TIDY_HINT = "Run `go mod tidy` or drop the requirement if it is no longer needed"


def complexity_issues(workspace: WorkspaceInfo, threshold: int) -> list[Issue]:
    issues: list[Issue] = []
    for pkg in workspace.packages:
        for fn in pkg.functions:
            if fn.complexity <= threshold:
                continue
            issues.append(
                Issue(
                    type="complexity",
                    severity="warning",
                    file=fn.file or pkg.path,
                    line=fn.line_start,
                    message=f"Function {fn.name} has high complexity ({fn.complexity})",
                    rule="max-complexity",
                    suggestion=REFACTOR_HINT,
                )
            )
    return issues


def missing_test_issues(workspace: WorkspaceInfo) -> list[Issue]:
    return [
        Issue(
            type="testing",
            severity="info",
            file=pkg.path,
            message=f"Package {pkg.name} has no test files",
            rule="missing-tests",
            suggestion=TESTS_HINT,
        )
        for pkg in workspace.packages
        if not pkg.is_main and not pkg.test_files
    ]


def walk_complete(workspace: WorkspaceInfo, options: AnalysisOptions) -> bool:
    """Every .go file, tests included, made it into the package model."""
    if not options.include_test_files:
        return False
    return not any(d.phase == "packages" for d in workspace.diagnostics)


def unused_dependency_issues(workspace: WorkspaceInfo, options: AnalysisOptions) -> list[Issue]:
    # Imports from files that were never parsed would read as unused
    if workspace.phases.get("dependencies") is not PhaseStatus.OK:
        return []
    if not walk_complete(workspace, options):
        return []
    manifest = str(Path(workspace.root_path) / MANIFEST_NAME)
    return [
        Issue(
            type="dependency",
            severity="info",
            file=manifest,
            message=f"Requirement {dep.module_path} is not imported by any package",
            rule="unused-dependency",
            suggestion=TIDY_HINT,
        )
        for dep in workspace.dependencies
        if dep.is_direct and not dep.used_by
    ]


def analyze_issues(workspace: WorkspaceInfo, options: AnalysisOptions) -> list[Issue]:
    issues = complexity_issues(workspace, options.complexity_threshold)
    # Without test files, test_files is empty for every package
    if options.include_test_files:
        issues.extend(missing_test_issues(workspace))
    issues.extend(unused_dependency_issues(workspace, options))
    return issues
