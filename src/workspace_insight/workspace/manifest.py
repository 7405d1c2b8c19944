"""go.mod parsing.

Extracts the module path, the `go` and `toolchain` directives, and the
requirement list. Parsing is line oriented and tolerant: anything it does
not understand is skipped, so a malformed manifest still yields whatever
fields could be read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import ManifestReadError
from ..logging_config import get_logger
from ..models import DependencyInfo
from .locator import MANIFEST_NAME

logger = get_logger(__name__)

INDIRECT_MARKER = "// indirect"

# Directives whose blocks never hold requirements
_SKIPPED_BLOCKS = frozenset({"replace", "exclude", "retract", "godebug", "tool", "ignore"})


@dataclass
class Manifest:
    module_path: str = ""
    go_version: str = ""
    toolchain: str = ""
    requirements: list[DependencyInfo] = field(default_factory=list)


def read_manifest(root: Path) -> Manifest:
    """Read and parse go.mod under root.

    Raises:
        ManifestReadError: If the file cannot be read at all
    """
    path = root / MANIFEST_NAME
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ManifestReadError(path, str(e))
    return parse_manifest(content)


def parse_manifest(content: str) -> Manifest:
    manifest = Manifest()
    block: str | None = None

    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("//"):
            continue

        if block is not None:
            if line == ")":
                block = None
            elif block == "require":
                dep = parse_requirement(line)
                if dep is not None:
                    manifest.requirements.append(dep)
            continue

        keyword, *tail = line.split(None, 1)
        rest = tail[0] if tail else ""

        if _strip_comment(rest) == "(":
            block = keyword
            continue

        if keyword == "module" and not manifest.module_path:
            manifest.module_path = _unquote(_strip_comment(rest))
        elif keyword == "go":
            manifest.go_version = _strip_comment(rest)
        elif keyword == "toolchain":
            manifest.toolchain = _strip_comment(rest)
        elif keyword == "require":
            dep = parse_requirement(rest)
            if dep is not None:
                manifest.requirements.append(dep)
        elif keyword not in _SKIPPED_BLOCKS:
            logger.debug("Ignoring unrecognized go.mod line: %s", line)

    return manifest


def parse_requirement(line: str) -> DependencyInfo | None:
    """Parse `path version [// indirect]`; None for anything else."""
    line = line.strip()
    if not line or line.startswith("//"):
        return None

    is_indirect = INDIRECT_MARKER in line
    parts = _strip_comment(line).split()
    if len(parts) < 2:
        return None

    return DependencyInfo(
        module_path=_unquote(parts[0]),
        version=parts[1],
        is_indirect=is_indirect,
    )


def _strip_comment(text: str) -> str:
    return text.split("//", 1)[0].strip()


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"`":
        return text[1:-1]
    return text
