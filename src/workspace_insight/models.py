"""Data models for workspace analysis.

One analysis produces one AnalysisResult:
    - WorkspaceInfo: root, module path, project type, packages, dependencies,
      and the optional coverage / build / git sections
    - Issues and Suggestions derived from the workspace
    - Metrics rolled up from every package and function

Optional sections are None when their phase was disabled or failed;
WorkspaceInfo.phases tells the two apart.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any

ENGINE_VERSION = "1.0.0"


class ProjectType(str, Enum):
    CLI = "cli"
    WEB_SERVICE = "web_service"
    MICROSERVICE = "microservice"
    LIBRARY = "library"
    MONOREPO = "monorepo"
    UNKNOWN = "unknown"


class PhaseStatus(str, Enum):
    """Outcome of an optional analysis phase."""

    DISABLED = "disabled"
    OK = "ok"
    FAILED = "failed"


def _serialize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(_serialize(k)): _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    if hasattr(value, "__dataclass_fields__"):
        return {f.name: _serialize(getattr(value, f.name)) for f in fields(value)}
    return value


class _Serializable:
    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dict (enums as values, datetimes as ISO-8601)."""
        result: dict[str, Any] = _serialize(self)
        return result


@dataclass
class FieldInfo(_Serializable):
    name: str  # empty for embedded fields
    type: str
    tag: str = ""
    is_exported: bool = False


@dataclass
class MethodInfo(_Serializable):
    name: str
    receiver: str = ""  # empty for interface methods
    is_exported: bool = False
    parameters: list[str] = field(default_factory=list)
    returns: list[str] = field(default_factory=list)


@dataclass
class FunctionInfo(_Serializable):
    """A function or method declaration.

    Attributes:
        name: Declared identifier
        package: Owning package name
        is_exported: Identifier starts with an upper-case letter
        line_start: First line (1-indexed)
        line_end: Last line (1-indexed)
        complexity: 1 + branching statements and case clauses in the body
        parameters: "name type" per declared parameter ("type" when unnamed)
        returns: One type string per result
        receiver: Receiver type for methods, empty for plain functions
        file: Path of the declaring file
    """

    name: str
    package: str
    is_exported: bool
    line_start: int
    line_end: int
    complexity: int = 1
    parameters: list[str] = field(default_factory=list)
    returns: list[str] = field(default_factory=list)
    is_test: bool = False
    is_bench: bool = False
    receiver: str = ""
    file: str = ""


@dataclass
class StructInfo(_Serializable):
    name: str
    package: str
    is_exported: bool
    fields: list[FieldInfo] = field(default_factory=list)
    methods: list[MethodInfo] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass
class InterfaceInfo(_Serializable):
    name: str
    package: str
    is_exported: bool
    methods: list[MethodInfo] = field(default_factory=list)


@dataclass
class PackageInfo(_Serializable):
    """One directory of Go files. `path` is unique within a workspace."""

    name: str
    path: str
    import_path: str
    is_main: bool = False
    line_count: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    file_count: int = 0
    test_files: list[str] = field(default_factory=list)
    functions: list[FunctionInfo] = field(default_factory=list)
    structs: list[StructInfo] = field(default_factory=list)
    interfaces: list[InterfaceInfo] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    external_deps: list[str] = field(default_factory=list)


@dataclass
class DependencyInfo(_Serializable):
    module_path: str
    version: str
    is_indirect: bool = False
    used_by: list[str] = field(default_factory=list)  # importing packages
    size: int = 0
    license: str = ""
    last_updated: datetime | None = None

    @property
    def is_direct(self) -> bool:
        return not self.is_indirect


@dataclass
class TestCoverageInfo(_Serializable):
    __test__ = False  # not a pytest test class

    total_lines: int = 0
    covered_lines: int = 0
    percentage: float = 0.0
    package_coverage: dict[str, float] = field(default_factory=dict)
    last_run: datetime | None = None


@dataclass
class BuildInfo(_Serializable):
    go_version: str = "unknown"
    platform: str = "unknown"
    environment: dict[str, str] = field(default_factory=dict)
    last_built: datetime | None = None


@dataclass
class GitInfo(_Serializable):
    is_repo: bool = False
    branch: str = ""
    commit_hash: str = ""
    commit_message: str = ""
    commit_author: str = ""
    commit_date: datetime | None = None
    is_dirty: bool = False
    remote_url: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class Diagnostic(_Serializable):
    """A non-fatal problem recorded by a best-effort phase."""

    phase: str
    message: str
    path: str = ""


@dataclass
class WorkspaceInfo(_Serializable):
    root_path: str
    module_path: str = ""
    project_type: ProjectType = ProjectType.UNKNOWN
    go_version: str = ""
    toolchain: str = ""
    packages: list[PackageInfo] = field(default_factory=list)
    dependencies: list[DependencyInfo] = field(default_factory=list)
    test_coverage: TestCoverageInfo | None = None
    build_info: BuildInfo | None = None
    git_info: GitInfo | None = None
    phases: dict[str, PhaseStatus] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    analyzed_at: datetime | None = None
    version: str = ENGINE_VERSION

    def package_for(self, path: str) -> PackageInfo | None:
        for pkg in self.packages:
            if pkg.path == path:
                return pkg
        return None

    def record(self, phase: str, message: str, path: str = "") -> None:
        self.diagnostics.append(Diagnostic(phase=phase, message=message, path=path))


@dataclass
class Issue(_Serializable):
    type: str
    severity: str  # "info" | "warning" | "error"
    file: str
    message: str
    rule: str
    line: int = 0
    column: int = 0
    suggestion: str = ""


@dataclass
class Suggestion(_Serializable):
    type: str
    priority: str  # "low" | "medium" | "high"
    title: str
    description: str
    file: str = ""
    example: str = ""


@dataclass
class Metrics(_Serializable):
    total_lines: int = 0
    code_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    total_files: int = 0
    total_packages: int = 0
    total_functions: int = 0
    total_structs: int = 0
    total_interfaces: int = 0
    avg_complexity: float = 0.0
    max_complexity: int = 0
    test_coverage: float = 0.0


@dataclass
class AnalysisResult(_Serializable):
    workspace: WorkspaceInfo
    issues: list[Issue] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    metrics: Metrics = field(default_factory=Metrics)
