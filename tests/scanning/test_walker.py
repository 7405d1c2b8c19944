"""Tests for the file walk and package builder."""

from pathlib import Path

from workspace_insight.config import AnalysisOptions
from workspace_insight.models import WorkspaceInfo
from workspace_insight.scanning import analyze_packages, iter_go_files


def relative(paths, root: Path) -> list[str]:
    return [p.relative_to(root).as_posix() for p in paths]


def workspace_for(root: Path, module: str = "example.com/m") -> WorkspaceInfo:
    return WorkspaceInfo(root_path=str(root), module_path=module)


class TestIterGoFiles:
    """Which files the walk yields, and in what order."""

    def test_sorted_and_filtered(self, make_workspace):
        root = make_workspace(
            {
                "b.go": "package m\n",
                "a.go": "package m\n",
                "notes.txt": "hello\n",
                "util/x.go": "package util\n",
            }
        )
        files = relative(iter_go_files(root, AnalysisOptions()), root)
        assert files == ["a.go", "b.go", "util/x.go"]

    def test_skips_hidden_underscore_and_testdata(self, make_workspace):
        root = make_workspace(
            {
                "main.go": "package main\n",
                ".cache/x.go": "package x\n",
                "_old/x.go": "package x\n",
                "testdata/x.go": "package x\n",
            }
        )
        assert relative(iter_go_files(root, AnalysisOptions()), root) == ["main.go"]

    def test_vendor_excluded_by_default(self, make_workspace):
        root = make_workspace(
            {"main.go": "package main\n", "vendor/github.com/a/b/b.go": "package b\n"}
        )
        assert relative(iter_go_files(root, AnalysisOptions()), root) == ["main.go"]

        files = relative(iter_go_files(root, AnalysisOptions(exclude_vendor=False)), root)
        assert "vendor/github.com/a/b/b.go" in files

    def test_max_depth(self, make_workspace):
        root = make_workspace(
            {
                "root.go": "package m\n",
                "a/a.go": "package a\n",
                "a/b/b.go": "package b\n",
            }
        )
        assert relative(iter_go_files(root, AnalysisOptions(max_depth=0)), root) == ["root.go"]
        assert relative(iter_go_files(root, AnalysisOptions(max_depth=1)), root) == [
            "root.go",
            "a/a.go",
        ]
        assert len(list(iter_go_files(root, AnalysisOptions(max_depth=-1)))) == 3

    def test_exclude_tests(self, make_workspace):
        root = make_workspace({"x.go": "package m\n", "x_test.go": "package m\n"})
        files = relative(iter_go_files(root, AnalysisOptions(), include_tests=False), root)
        assert files == ["x.go"]


class TestAnalyzePackages:
    """Package model built from a small module."""

    FILES = {
        "main.go": """
            package main

            import (
            	"fmt"

            	"example.com/m/store"
            	"github.com/spf13/cobra"
            )

            func main() {
            	fmt.Println(cobra.Command{}, store.New())
            }
        """,
        "store/store.go": """
            package store

            import "golang.org/x/sync/errgroup"

            type Store struct {
            	items map[string]string
            }

            func New() *Store { return &Store{} }

            var _ = errgroup.Group{}
        """,
        "store/methods.go": """
            package store

            func (s *Store) Get(key string) (string, bool) {
            	v, ok := s.items[key]
            	return v, ok
            }
        """,
        "store/store_test.go": """
            package store

            import "testing"

            func TestNew(t *testing.T) {}
        """,
    }

    def build(self, make_workspace, options=None):
        root = make_workspace(self.FILES)
        workspace = workspace_for(root)
        analyze_packages(workspace, options or AnalysisOptions())
        return root, workspace

    def test_packages_by_directory(self, make_workspace):
        root, workspace = self.build(make_workspace)
        assert [p.name for p in workspace.packages] == ["main", "store"]
        main, store = workspace.packages
        assert main.import_path == "example.com/m"
        assert main.is_main is True
        assert store.import_path == "example.com/m/store"
        assert store.path == str(root / "store")
        assert store.file_count == 3
        assert store.test_files == [str(root / "store" / "store_test.go")]

    def test_external_deps(self, make_workspace):
        _, workspace = self.build(make_workspace)
        main, store = workspace.packages
        assert main.imports == ["fmt", "example.com/m/store", "github.com/spf13/cobra"]
        assert main.external_deps == ["github.com/spf13/cobra"]
        assert store.external_deps == ["golang.org/x/sync/errgroup"]

    def test_methods_linked_across_files(self, make_workspace):
        _, workspace = self.build(make_workspace)
        (store_struct,) = workspace.packages[1].structs
        assert [m.name for m in store_struct.methods] == ["Get"]
        assert store_struct.methods[0].receiver == "*Store"
        assert store_struct.methods[0].returns == ["string", "bool"]

    def test_without_test_files(self, make_workspace):
        _, workspace = self.build(make_workspace, AnalysisOptions(include_test_files=False))
        store = workspace.packages[1]
        assert store.file_count == 2
        assert store.test_files == []
        assert all(not fn.is_test for fn in store.functions)

    def test_unparsable_file_recorded(self, make_workspace):
        root = make_workspace(
            {"ok.go": "package m\n", "broken.go": "package m\n\nfunc ( {\n"}
        )
        workspace = workspace_for(root)
        analyze_packages(workspace, AnalysisOptions())

        assert workspace.packages[0].file_count == 1
        (diag,) = workspace.diagnostics
        assert diag.phase == "packages"
        assert diag.path == str(root / "broken.go")

    def test_external_test_package_does_not_name_package(self, make_workspace):
        root = make_workspace(
            {
                "calc/bench_test.go": "package calc_test\n\nfunc BenchmarkAdd() {}\n",
                "calc/calc.go": "package calc\n\nfunc Add(a, b int) int { return a + b }\n",
            }
        )
        workspace = workspace_for(root)
        analyze_packages(workspace, AnalysisOptions())

        (calc,) = workspace.packages
        assert calc.name == "calc"
        assert calc.file_count == 2

    def test_main_with_external_test_package(self, make_workspace):
        root = make_workspace(
            {
                "a_test.go": "package main_test\n",
                "main.go": "package main\n\nfunc main() {}\n",
            }
        )
        workspace = workspace_for(root)
        analyze_packages(workspace, AnalysisOptions())
        assert workspace.packages[0].name == "main"
        assert workspace.packages[0].is_main is True

    def test_test_only_directory_keeps_test_name(self, make_workspace):
        root = make_workspace({"e2e/e2e_test.go": "package e2e_test\n"})
        workspace = workspace_for(root)
        analyze_packages(workspace, AnalysisOptions())
        assert workspace.packages[0].name == "e2e_test"

    def test_depth_cut_recorded(self, make_workspace):
        root = make_workspace({"root.go": "package m\n", "a/b/b.go": "package b\n"})
        workspace = workspace_for(root)
        analyze_packages(workspace, AnalysisOptions(max_depth=1))

        assert [p.name for p in workspace.packages] == ["m"]
        (diag,) = workspace.diagnostics
        assert diag.phase == "packages"
        assert diag.path == str(root / "a")

    def test_leaf_at_max_depth_not_recorded(self, make_workspace):
        root = make_workspace({"root.go": "package m\n", "a/a.go": "package a\n"})
        workspace = workspace_for(root)
        analyze_packages(workspace, AnalysisOptions(max_depth=1))
        assert workspace.diagnostics == []
