"""Cross-reference go.mod requirements with the imports actually seen.

Each requirement's `used_by` lists the import paths of packages that import
it (or one of its subpackages). An import is credited to the longest
matching module path, so nested modules are told apart.
"""

from __future__ import annotations

from .logging_config import get_logger
from .models import DependencyInfo, PackageInfo

logger = get_logger(__name__)


def owning_module(import_path: str, module_paths: list[str]) -> str | None:
    """Longest module path that import_path equals or lies under."""
    best: str | None = None
    for module in module_paths:
        if import_path == module or import_path.startswith(module + "/"):
            if best is None or len(module) > len(best):
                best = module
    return best


def cross_reference(
    dependencies: list[DependencyInfo], packages: list[PackageInfo]
) -> list[DependencyInfo]:
    """Fill used_by on every dependency.

    The mapping is computed before any dependency is touched, so a failure
    leaves the manifest-only list unchanged.
    """
    module_paths = [dep.module_path for dep in dependencies]
    usage: dict[str, list[str]] = {path: [] for path in module_paths}

    for pkg in packages:
        for imp in pkg.external_deps:
            module = owning_module(imp, module_paths)
            if module is not None and pkg.import_path not in usage[module]:
                usage[module].append(pkg.import_path)

    for dep in dependencies:
        dep.used_by = usage[dep.module_path]

    unused = [d.module_path for d in dependencies if d.is_direct and not d.used_by]
    if unused:
        logger.debug("Direct requirements with no importing package: %s", ", ".join(unused))
    return dependencies
