"""WorkspaceDetector: runs every analysis phase in order.

    locate root -> parse go.mod -> classify project -> walk packages
      -> dependencies / git / coverage / build (each optional, best-effort)
      -> metrics, issues, suggestions

Only locating the root and reading go.mod can fail the analysis. Each
optional phase records disabled/ok/failed in WorkspaceInfo.phases and its
problems in WorkspaceInfo.diagnostics, leaving its own section empty on
failure. Unparsable files are skipped and recorded the same way.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .classifier import classify_project
from .config import DEFAULT_OPTIONS, AnalysisOptions
from .dependencies import cross_reference
from .exceptions import AnalysisError
from .insights import analyze_issues, calculate_metrics, generate_suggestions
from .logging_config import get_logger
from .models import AnalysisResult, DependencyInfo, PhaseStatus, ProjectType, WorkspaceInfo
from .scanning import GoAnalyzer, analyze_packages
from .toolchain import BuildInspector, CoverageAnalyzer, GitInspector
from .workspace import find_module_root, read_manifest

logger = get_logger(__name__)


class WorkspaceDetector:
    """Analyze the Go module containing a path.

    Usage:
        detector = WorkspaceDetector(load_options(include_coverage=True))
        result = detector.detect_workspace("./internal/server")
    """

    def __init__(
        self,
        options: Optional[AnalysisOptions] = None,
        analyzer: Optional[GoAnalyzer] = None,
    ) -> None:
        self.options = options or DEFAULT_OPTIONS
        self._analyzer = analyzer

    def detect_workspace(self, start_path: str | Path) -> AnalysisResult:
        """Run a full analysis.

        Raises:
            ModuleRootNotFoundError: No go.mod at or above start_path
            ManifestReadError: go.mod exists but cannot be read
        """
        options = self.options
        root = find_module_root(start_path)
        manifest = read_manifest(root)
        logger.info("Analyzing module %s at %s", manifest.module_path or "<unnamed>", root)

        workspace = WorkspaceInfo(
            root_path=str(root),
            module_path=manifest.module_path,
            go_version=manifest.go_version,
            toolchain=manifest.toolchain,
            analyzed_at=datetime.now(timezone.utc),
        )

        workspace.project_type = classify_project(root, options)
        if workspace.project_type is ProjectType.UNKNOWN:
            workspace.record("project_type", "project tree could not be walked")

        analyze_packages(workspace, options, self._get_analyzer())

        self._run_dependencies(workspace, manifest.requirements)
        self._run_git(workspace, root)
        self._run_coverage(workspace, root)
        self._run_build(workspace, root)

        return AnalysisResult(
            workspace=workspace,
            issues=analyze_issues(workspace, options),
            suggestions=generate_suggestions(workspace, options),
            metrics=calculate_metrics(workspace),
        )

    def _get_analyzer(self) -> GoAnalyzer:
        if self._analyzer is None:
            self._analyzer = GoAnalyzer()
        return self._analyzer

    def _run_dependencies(
        self, workspace: WorkspaceInfo, requirements: list[DependencyInfo]
    ) -> None:
        if not self.options.include_dependencies:
            workspace.phases["dependencies"] = PhaseStatus.DISABLED
            return

        workspace.dependencies = requirements
        try:
            cross_reference(workspace.dependencies, workspace.packages)
        except (KeyError, ValueError) as e:
            logger.warning("Dependency analysis failed: %s", e)
            workspace.record("dependencies", str(e))
            workspace.phases["dependencies"] = PhaseStatus.FAILED
            return
        workspace.phases["dependencies"] = PhaseStatus.OK

    def _run_git(self, workspace: WorkspaceInfo, root: Path) -> None:
        if not self.options.include_git_info:
            workspace.phases["git"] = PhaseStatus.DISABLED
            return

        inspector = GitInspector(root, timeout=self.options.command_timeout_seconds)
        workspace.git_info = inspector.inspect()
        for failure in inspector.failures:
            workspace.record("git", failure)
        workspace.phases["git"] = PhaseStatus.OK

    def _run_coverage(self, workspace: WorkspaceInfo, root: Path) -> None:
        if not self.options.include_coverage:
            workspace.phases["coverage"] = PhaseStatus.DISABLED
            return

        analyzer = CoverageAnalyzer(root, timeout=self.options.coverage_timeout_seconds)
        try:
            workspace.test_coverage = analyzer.run()
        except AnalysisError as e:
            logger.warning("Coverage run failed: %s", e)
            workspace.record("coverage", str(e))
            workspace.phases["coverage"] = PhaseStatus.FAILED
            return
        workspace.phases["coverage"] = PhaseStatus.OK

    def _run_build(self, workspace: WorkspaceInfo, root: Path) -> None:
        if not self.options.include_build_info:
            workspace.phases["build"] = PhaseStatus.DISABLED
            return

        inspector = BuildInspector(root, timeout=self.options.command_timeout_seconds)
        try:
            workspace.build_info = inspector.inspect()
        except AnalysisError as e:
            logger.warning("Build info unavailable: %s", e)
            workspace.record("build", str(e))
            workspace.phases["build"] = PhaseStatus.FAILED
            return
        workspace.phases["build"] = PhaseStatus.OK


def detect_workspace(
    start_path: str | Path, options: Optional[AnalysisOptions] = None
) -> AnalysisResult:
    """Convenience wrapper around WorkspaceDetector.detect_workspace."""
    return WorkspaceDetector(options).detect_workspace(start_path)
