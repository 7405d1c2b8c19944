"""Aggregate metrics rolled up from the package model."""

from __future__ import annotations

from ..models import Metrics, WorkspaceInfo


def calculate_metrics(workspace: WorkspaceInfo) -> Metrics:
    metrics = Metrics(total_packages=len(workspace.packages))
    total_complexity = 0

    for pkg in workspace.packages:
        metrics.total_lines += pkg.line_count
        metrics.comment_lines += pkg.comment_lines
        metrics.blank_lines += pkg.blank_lines
        metrics.total_files += pkg.file_count
        metrics.total_functions += len(pkg.functions)
        metrics.total_structs += len(pkg.structs)
        metrics.total_interfaces += len(pkg.interfaces)

        for fn in pkg.functions:
            total_complexity += fn.complexity
            metrics.max_complexity = max(metrics.max_complexity, fn.complexity)

    metrics.code_lines = max(0, metrics.total_lines - metrics.comment_lines - metrics.blank_lines)
    if metrics.total_functions > 0:
        metrics.avg_complexity = total_complexity / metrics.total_functions
    if workspace.test_coverage is not None:
        metrics.test_coverage = workspace.test_coverage.percentage

    return metrics
