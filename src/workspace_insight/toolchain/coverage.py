"""Test coverage via `go test -coverprofile`.

The profile lives in a temporary directory owned by a context manager, so
it is removed on success, on test failure and on timeout alike.

Profile format (after a `mode:` header), one block per line:
    example.com/m/pkg/file.go:12.34,15.2 3 1
    <file>:<start>,<end> <statements> <count>
Each block counts once toward the totals; it is covered when count > 0.
"""

from __future__ import annotations

import tempfile
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from ..exceptions import FileAccessError
from ..logging_config import get_logger
from ..models import TestCoverageInfo
from .process import run_command

logger = get_logger(__name__)

PROFILE_NAME = "coverage.out"


def percentage(covered: int, total: int) -> float:
    """covered/total as a percentage; 0.0 when total is 0."""
    if total <= 0:
        return 0.0
    return covered / total * 100


def parse_profile(lines: Iterable[str]) -> TestCoverageInfo:
    """Aggregate a coverage profile into totals and per-package percentages."""
    totals: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    coverage = TestCoverageInfo(last_run=datetime.now(timezone.utc))

    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("mode:"):
            continue
        parts = line.split()
        if len(parts) < 3:
            continue
        try:
            count = int(parts[2])
        except ValueError:
            continue

        package = parts[0].rsplit(":", 1)[0].rsplit("/", 1)[0]
        coverage.total_lines += 1
        totals[package][0] += 1
        if count > 0:
            coverage.covered_lines += 1
            totals[package][1] += 1

    coverage.percentage = percentage(coverage.covered_lines, coverage.total_lines)
    coverage.package_coverage = {
        package: percentage(covered, total)
        for package, (total, covered) in sorted(totals.items())
    }
    return coverage


class CoverageAnalyzer:
    """Run the module's tests with coverage instrumentation."""

    def __init__(self, root: Path, timeout: float = 300):
        self.root = Path(root)
        self.timeout = timeout

    def run(self) -> TestCoverageInfo:
        """Run `go test` across all packages and parse the profile.

        Raises:
            CommandError: go missing, tests failing, or timeout
            FileAccessError: The profile was not written
        """
        with tempfile.TemporaryDirectory(prefix="workspace-insight-") as tmp:
            profile = Path(tmp) / PROFILE_NAME
            run_command(
                ["go", "test", f"-coverprofile={profile}", "./..."],
                self.root,
                self.timeout,
            )
            try:
                with open(profile, encoding="utf-8") as f:
                    coverage = parse_profile(f)
            except OSError as e:
                raise FileAccessError(profile, str(e))

        logger.info(
            "Coverage: %d/%d blocks (%.1f%%)",
            coverage.covered_lines,
            coverage.total_lines,
            coverage.percentage,
        )
        return coverage
