"""Configuration loading and management for Workspace Insight.

Analysis options are merged in priority order:
    1. Defaults (defined in AnalysisOptions)
    2. Global config (~/.workspace-insight.toml)
    3. Project config (./workspace-insight.toml)
    4. Explicit config file
    5. Environment variables (WSI_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> options = load_options(include_coverage=True, max_depth=4)
    >>> options.include_coverage
    True
    >>> options.max_depth
    4
"""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

_VERSION_RE = re.compile(r"^\d+(\.\d+)*$")


@dataclass(frozen=True)
class AnalysisOptions:
    """Switches and thresholds for one workspace analysis.

    Attributes:
        Phase switches:
            include_test_files: Parse *_test.go files into the package model
            include_dependencies: Keep go.mod requirements and cross-reference imports
            include_git_info: Query git for branch, HEAD commit and dirty state
            include_coverage: Run `go test -coverprofile` (slow on large trees)
            include_build_info: Query `go version` / `go env`

        Traversal:
            max_depth: Deepest directory level walked below the root (root = 0,
                negative = unbounded)
            exclude_vendor: Skip vendor/ subtrees entirely

        Rule thresholds:
            complexity_threshold: Functions above this complexity raise an issue
            min_go_version: go.mod versions below this trigger an upgrade suggestion
            recommended_go_version: Version named in the upgrade suggestion

        External commands:
            command_timeout_seconds: Timeout for git and short go queries
            coverage_timeout_seconds: Timeout for the coverage test run
    """

    # Phase switches
    include_test_files: bool = True
    include_dependencies: bool = True
    include_git_info: bool = True
    include_coverage: bool = False  # Can be slow
    include_build_info: bool = False

    # Traversal
    max_depth: int = 10
    exclude_vendor: bool = True

    # Rule thresholds
    complexity_threshold: int = 10
    min_go_version: str = "1.23"
    recommended_go_version: str = "1.24"

    # External commands
    command_timeout_seconds: int = 30
    coverage_timeout_seconds: int = 300

    def __post_init__(self) -> None:
        """Validate options after initialization."""
        if self.complexity_threshold < 1:
            raise InvalidConfigError(
                "complexity_threshold", self.complexity_threshold, "must be at least 1"
            )
        for name in ("min_go_version", "recommended_go_version"):
            value = getattr(self, name)
            if not _VERSION_RE.match(value):
                raise InvalidConfigError(name, value, "expected a dotted version like 1.23")
        for name in ("command_timeout_seconds", "coverage_timeout_seconds"):
            if getattr(self, name) < 1:
                raise InvalidConfigError(name, getattr(self, name), "must be at least 1")

    @property
    def unbounded_depth(self) -> bool:
        return self.max_depth < 0


DEFAULT_OPTIONS = AnalysisOptions()


def load_options(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisOptions:
    """Load analysis options with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so callers can forward unset flags.

    Returns:
        Validated AnalysisOptions instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".workspace-insight.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "workspace-insight.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalysisOptions(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load options from WSI_* environment variables.

    Every AnalysisOptions field can be set, e.g. WSI_MAX_DEPTH=4 or
    WSI_INCLUDE_COVERAGE=true.
    """
    type_hints = get_type_hints(AnalysisOptions)
    result: dict[str, Any] = {}

    for field_name in AnalysisOptions.__dataclass_fields__:
        env_key = f"WSI_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")
    if type_hint is int:
        return int(value)
    return value


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
