"""Walk a module tree and build the package model.

The walk is sequential, visits directories in sorted order and is bounded
by AnalysisOptions.max_depth. Directories the go tool ignores (hidden ones
and testdata) are never entered; vendor/ is skipped when exclude_vendor is
set.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from ..config import AnalysisOptions
from ..exceptions import FileAccessError, ParsingError
from ..logging_config import get_logger
from ..models import MethodInfo, PackageInfo, WorkspaceInfo
from .go_analyzer import GoAnalyzer, is_test_file
from .syntax import FileSyntax
from .types import base_type_name

logger = get_logger(__name__)

VENDOR_DIR = "vendor"
GO_SUFFIX = ".go"


def _skip_dir(name: str, exclude_vendor: bool) -> bool:
    if name.startswith((".", "_")) or name == "testdata":
        return True
    return exclude_vendor and name == VENDOR_DIR


def iter_go_files(
    root: Path,
    options: AnalysisOptions,
    include_tests: bool = True,
    strict: bool = False,
    truncated: list[Path] | None = None,
) -> Iterator[Path]:
    """Yield .go files under root in a deterministic order.

    Args:
        root: Module root
        options: Supplies max_depth and exclude_vendor
        include_tests: Yield *_test.go files
        strict: Raise OSError on unreadable directories instead of
            logging and continuing
        truncated: Receives directories that were not fully walked, either
            unreadable or with subdirectories cut off by max_depth
    """

    def _on_error(error: OSError) -> None:
        if strict:
            raise error
        logger.warning("Cannot read directory %s: %s", error.filename, error.strerror)
        if truncated is not None and error.filename:
            truncated.append(Path(error.filename))

    root_depth = len(root.parts)
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        current = Path(dirpath)
        depth = len(current.parts) - root_depth

        dirnames[:] = sorted(
            d for d in dirnames if not _skip_dir(d, options.exclude_vendor)
        )
        if not options.unbounded_depth and depth >= options.max_depth:
            if dirnames and truncated is not None:
                truncated.append(current)
            dirnames[:] = []

        for filename in sorted(filenames):
            if not filename.endswith(GO_SUFFIX):
                continue
            if not include_tests and is_test_file(filename):
                continue
            yield current / filename


class PackageBuilder:
    """Merge parsed files into the workspace's PackageInfo list.

    Packages are keyed by directory path and kept in first-seen order. The
    package name and is_main come from a non-test file when the directory
    has one, so an external `foo_test` package never names the package.
    """

    def __init__(self, workspace: WorkspaceInfo) -> None:
        self._workspace = workspace
        self._by_path: dict[str, PackageInfo] = {
            pkg.path: pkg for pkg in workspace.packages
        }
        self._named_by_source: set[str] = set()

    def add(self, syntax: FileSyntax) -> PackageInfo:
        directory = Path(syntax.path).parent
        pkg = self._by_path.get(str(directory))
        if pkg is None:
            pkg = PackageInfo(
                name=syntax.package_name,
                path=str(directory),
                import_path=self._import_path(directory),
                is_main=syntax.is_main,
            )
            self._by_path[pkg.path] = pkg
            self._workspace.packages.append(pkg)

        if not syntax.is_test and pkg.path not in self._named_by_source:
            pkg.name = syntax.package_name
            pkg.is_main = syntax.is_main
            self._named_by_source.add(pkg.path)

        pkg.line_count += syntax.line_count
        pkg.comment_lines += syntax.comment_lines
        pkg.blank_lines += syntax.blank_lines
        pkg.file_count += 1
        if syntax.is_test:
            pkg.test_files.append(syntax.path)

        for imp in syntax.imports:
            pkg.imports.append(imp)
            if self.is_external(imp) and imp not in pkg.external_deps:
                pkg.external_deps.append(imp)

        pkg.functions.extend(syntax.functions)
        pkg.structs.extend(syntax.structs)
        pkg.interfaces.extend(syntax.interfaces)
        return pkg

    def link_methods(self) -> None:
        """Attach methods to the structs of their receiver type.

        Runs after the walk because a method may live in a different file
        from its struct.
        """
        for pkg in self._workspace.packages:
            structs = {s.name: s for s in pkg.structs}
            for fn in pkg.functions:
                if not fn.receiver:
                    continue
                target = structs.get(base_type_name(fn.receiver))
                if target is None:
                    continue
                target.methods.append(
                    MethodInfo(
                        name=fn.name,
                        receiver=fn.receiver,
                        is_exported=fn.is_exported,
                        parameters=list(fn.parameters),
                        returns=list(fn.returns),
                    )
                )

    def is_external(self, import_path: str) -> bool:
        """Imports outside the module whose first element looks like a host."""
        module = self._workspace.module_path
        if module and (import_path == module or import_path.startswith(module + "/")):
            return False
        return "." in import_path.split("/", 1)[0]

    def _import_path(self, directory: Path) -> str:
        rel = directory.relative_to(self._workspace.root_path).as_posix()
        module = self._workspace.module_path
        if rel == ".":
            return module
        return f"{module}/{rel}" if module else rel


def analyze_packages(
    workspace: WorkspaceInfo,
    options: AnalysisOptions,
    analyzer: GoAnalyzer | None = None,
) -> None:
    """Populate workspace.packages from every eligible .go file.

    Unreadable or unparsable files are recorded as diagnostics and skipped,
    as are directories the walk could not fully enter.
    """
    analyzer = analyzer or GoAnalyzer()
    builder = PackageBuilder(workspace)
    root = Path(workspace.root_path)
    truncated: list[Path] = []

    files = iter_go_files(
        root, options, include_tests=options.include_test_files, truncated=truncated
    )
    for file_path in files:
        try:
            syntax = analyzer.parse_file(_read_source(file_path), str(file_path))
        except (FileAccessError, ParsingError) as e:
            logger.warning("Skipping %s: %s", file_path, e)
            workspace.record("packages", str(e), str(file_path))
            continue
        builder.add(syntax)

    for directory in truncated:
        logger.info("Walk stopped at %s", directory)
        workspace.record("packages", "directory not fully walked", str(directory))

    builder.link_methods()


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(path, str(e))
