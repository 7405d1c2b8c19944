"""Project type classification.

An ordered decision table over facts gathered from the tree. The first rule
whose predicate holds wins; rules can be tested and extended on their own.

Facts:
    - entry points: non-test .go files declaring `package main`
    - server signature: the single entry point mentions a known HTTP/RPC
      server API
    - service layout: the root holds conventional service directories/files
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .config import AnalysisOptions
from .logging_config import get_logger
from .models import ProjectType
from .scanning import iter_go_files

logger = get_logger(__name__)

_MAIN_PACKAGE_RE = re.compile(r"^\s*package\s+main\b", re.MULTILINE)

SERVER_SIGNATURES: tuple[str, ...] = (
    "http.ListenAndServe",
    "http.Server{",
    "gin.Engine",
    "gin.Default(",
    "fiber.App",
    "fiber.New(",
    "echo.Echo",
    "echo.New(",
    "mux.Router",
    "chi.NewRouter(",
    "grpc.NewServer(",
)

# (name, must be a directory)
SERVICE_LAYOUT: tuple[tuple[str, bool], ...] = (
    ("cmd", True),
    ("internal", True),
    ("pkg", True),
    ("Dockerfile", False),
    ("docker-compose.yml", False),
    ("k8s", True),
    ("kubernetes", True),
    ("helm", True),
    ("api", True),
    ("proto", True),
    ("grpc", True),
)


@dataclass(frozen=True)
class ProjectFacts:
    entry_points: int
    has_server: bool
    has_service_layout: bool


@dataclass(frozen=True)
class ClassificationRule:
    project_type: ProjectType
    applies: Callable[[ProjectFacts], bool]


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(ProjectType.MONOREPO, lambda f: f.entry_points > 1),
    ClassificationRule(
        ProjectType.MICROSERVICE,
        lambda f: f.entry_points == 1 and f.has_server and f.has_service_layout,
    ),
    ClassificationRule(
        ProjectType.WEB_SERVICE, lambda f: f.entry_points == 1 and f.has_server
    ),
    ClassificationRule(ProjectType.CLI, lambda f: f.entry_points == 1),
    ClassificationRule(ProjectType.LIBRARY, lambda f: f.entry_points == 0),
)


def decide(facts: ProjectFacts, rules: tuple[ClassificationRule, ...] = RULES) -> ProjectType:
    for rule in rules:
        if rule.applies(facts):
            return rule.project_type
    return ProjectType.UNKNOWN


def is_entry_point(content: str) -> bool:
    return _MAIN_PACKAGE_RE.search(content) is not None


def has_server_signature(content: str) -> bool:
    return any(signature in content for signature in SERVER_SIGNATURES)


def has_service_layout(root: Path) -> bool:
    for name, must_be_dir in SERVICE_LAYOUT:
        candidate = root / name
        if candidate.is_dir() if must_be_dir else candidate.exists():
            return True
    return False


def gather_facts(root: Path, options: AnalysisOptions) -> ProjectFacts:
    """Scan the tree for entry points.

    Raises:
        OSError: If a directory cannot be walked
    """
    entry_contents: list[str] = []
    for path in iter_go_files(root, options, include_tests=False, strict=True):
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            continue
        if is_entry_point(content):
            entry_contents.append(content)

    has_server = len(entry_contents) == 1 and has_server_signature(entry_contents[0])
    return ProjectFacts(
        entry_points=len(entry_contents),
        has_server=has_server,
        has_service_layout=has_server and has_service_layout(root),
    )


def classify_project(root: Path, options: AnalysisOptions) -> ProjectType:
    """Classify the project rooted at root; UNKNOWN if the tree cannot be walked."""
    try:
        facts = gather_facts(root, options)
    except OSError as e:
        logger.warning("Project type detection failed: %s", e)
        return ProjectType.UNKNOWN
    project_type = decide(facts)
    logger.debug("Classified %s as %s (%s)", root, project_type.value, facts)
    return project_type
