"""Tests for requirement/import cross-referencing."""

from workspace_insight.dependencies import cross_reference, owning_module
from workspace_insight.models import DependencyInfo, PackageInfo


def package(import_path, *external):
    return PackageInfo(
        name=import_path.rsplit("/", 1)[-1],
        path=import_path,
        import_path=import_path,
        external_deps=list(external),
    )


class TestOwningModule:
    def test_exact_and_subpackage(self):
        modules = ["github.com/a/b"]
        assert owning_module("github.com/a/b", modules) == "github.com/a/b"
        assert owning_module("github.com/a/b/sub", modules) == "github.com/a/b"

    def test_prefix_must_end_at_element(self):
        assert owning_module("github.com/a/bc", ["github.com/a/b"]) is None

    def test_longest_match(self):
        modules = ["github.com/a/b", "github.com/a/b/v2"]
        assert owning_module("github.com/a/b/v2/x", modules) == "github.com/a/b/v2"


class TestCrossReference:
    def test_used_by(self):
        deps = [
            DependencyInfo("github.com/spf13/cobra", "v1.8.0"),
            DependencyInfo("golang.org/x/sys", "v0.1.0", is_indirect=True),
            DependencyInfo("github.com/unused/mod", "v1.0.0"),
        ]
        packages = [
            package("example.com/m", "github.com/spf13/cobra"),
            package("example.com/m/cmd", "github.com/spf13/cobra/doc", "github.com/other/x"),
        ]

        cross_reference(deps, packages)

        cobra, sys_dep, unused = deps
        assert cobra.used_by == ["example.com/m", "example.com/m/cmd"]
        assert sys_dep.used_by == []
        assert sys_dep.is_indirect is True
        assert unused.used_by == []
        assert unused.is_direct is True

    def test_empty(self):
        assert cross_reference([], [package("example.com/m", "github.com/x/y")]) == []
