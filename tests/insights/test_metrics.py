"""Tests for metric aggregation."""

import pytest

from workspace_insight.insights import calculate_metrics
from workspace_insight.models import FunctionInfo, PackageInfo, TestCoverageInfo, WorkspaceInfo


def fn(name, complexity):
    return FunctionInfo(
        name=name, package="p", is_exported=False, line_start=1, line_end=2, complexity=complexity
    )


class TestCalculateMetrics:
    def test_empty_workspace(self):
        metrics = calculate_metrics(WorkspaceInfo(root_path="/tmp/m"))
        assert metrics.total_packages == 0
        assert metrics.avg_complexity == 0.0
        assert metrics.max_complexity == 0
        assert metrics.test_coverage == 0.0

    def test_rollup(self):
        workspace = WorkspaceInfo(
            root_path="/tmp/m",
            packages=[
                PackageInfo(
                    name="a",
                    path="/tmp/m/a",
                    import_path="m/a",
                    line_count=100,
                    comment_lines=10,
                    blank_lines=15,
                    file_count=2,
                    functions=[fn("f", 1), fn("g", 4)],
                ),
                PackageInfo(
                    name="b",
                    path="/tmp/m/b",
                    import_path="m/b",
                    line_count=50,
                    comment_lines=5,
                    blank_lines=5,
                    file_count=1,
                    functions=[fn("h", 10)],
                ),
            ],
            test_coverage=TestCoverageInfo(total_lines=4, covered_lines=3, percentage=75.0),
        )

        metrics = calculate_metrics(workspace)

        assert metrics.total_packages == 2
        assert metrics.total_files == 3
        assert metrics.total_lines == 150
        assert metrics.comment_lines == 15
        assert metrics.blank_lines == 20
        assert metrics.code_lines == 115
        assert metrics.total_functions == 3
        assert metrics.avg_complexity == pytest.approx(5.0)
        assert metrics.max_complexity == 10
        assert metrics.test_coverage == 75.0
