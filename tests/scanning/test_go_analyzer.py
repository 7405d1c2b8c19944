"""Tests for the tree-sitter Go analyzer."""

import textwrap

import pytest

from workspace_insight.exceptions import ParsingError
from workspace_insight.scanning import GoAnalyzer, is_exported


def parse(source: str, path: str = "pkg/file.go"):
    return GoAnalyzer().parse_file(textwrap.dedent(source).lstrip(), path)


SERVER_GO = """
// Package api serves HTTP.
package api

import (
	"context"
	"fmt"

	"github.com/acme/lib/log"
)

/*
Server handles requests.
*/
type Server struct {
	*Base
	io.Reader
	Name string `json:"name"`
	port, host int
}

type Store interface {
	io.Closer
	Get(key string) ([]byte, error)
	Put(string, []byte) error
}

type ID string

func (s *Server) Start(ctx context.Context) error {
	fmt.Println("start") // trailing comment
	return nil
}

func helper() {}
"""


class TestDeclarations:
    """Declarations and package facts."""

    def test_package_name(self):
        assert parse(SERVER_GO).package_name == "api"

    def test_imports(self):
        assert parse(SERVER_GO).imports == ["context", "fmt", "github.com/acme/lib/log"]

    def test_functions_and_methods(self):
        functions = {fn.name: fn for fn in parse(SERVER_GO).functions}
        assert set(functions) == {"Start", "helper"}
        assert functions["Start"].receiver == "*Server"
        assert functions["Start"].is_exported is True
        assert functions["helper"].receiver == ""
        assert functions["helper"].is_exported is False
        assert functions["Start"].package == "api"

    def test_function_lines(self):
        start = next(fn for fn in parse(SERVER_GO).functions if fn.name == "Start")
        assert start.line_start == 29
        assert start.line_end == 32

    def test_struct_fields(self):
        (server,) = parse(SERVER_GO).structs
        assert server.name == "Server"
        assert server.is_exported is True
        fields = [(f.name, f.type) for f in server.fields]
        assert fields == [
            ("", "*Base"),
            ("", "io.Reader"),
            ("Name", "string"),
            ("port", "int"),
            ("host", "int"),
        ]
        name_field = server.fields[2]
        assert name_field.tag == '`json:"name"`'
        assert name_field.is_exported is True
        assert server.fields[3].is_exported is False
        assert server.tags == ['`json:"name"`']

    def test_interface_methods(self):
        (store,) = parse(SERVER_GO).interfaces
        methods = {m.name: m for m in store.methods}
        assert set(methods) == {"Get", "Put"}
        assert methods["Get"].parameters == ["string"]
        assert methods["Get"].returns == ["[]byte", "error"]
        assert methods["Put"].parameters == ["string", "[]byte"]
        assert methods["Put"].returns == ["error"]

    def test_non_struct_types_ignored(self):
        syntax = parse(SERVER_GO)
        names = [s.name for s in syntax.structs] + [i.name for i in syntax.interfaces]
        assert "ID" not in names

    def test_line_counts(self):
        syntax = parse(SERVER_GO)
        assert syntax.line_count == SERVER_GO.lstrip().count("\n") + 1
        # "// Package api", and the three lines of the block comment
        assert syntax.comment_lines == 4
        assert syntax.blank_lines > 0
        assert syntax.code_lines == syntax.line_count - syntax.comment_lines - syntax.blank_lines


class TestSignatures:
    """Parameter and result rendering."""

    def test_rich_signature(self):
        syntax = parse(
            """
            package p

            func Handle(ctx context.Context, ch <-chan int, out chan<- string, m map[string][]*Item, fn func(int) error, opts ...Option) (*Result, error) {
            	return nil, nil
            }
            """
        )
        (fn,) = syntax.functions
        assert fn.parameters == [
            "ctx context.Context",
            "ch <-chan int",
            "out chan<- string",
            "m map[string][]*Item",
            "fn func",
            "opts ...Option",
        ]
        assert fn.returns == ["*Result", "error"]

    def test_grouped_names(self):
        (fn,) = parse("package p\n\nfunc Add(a, b int) int { return a + b }\n").functions
        assert fn.parameters == ["a int", "b int"]
        assert fn.returns == ["int"]

    def test_unnamed_parameters(self):
        (fn,) = parse("package p\n\nfunc f(int, string) {}\n").functions
        assert fn.parameters == ["int", "string"]
        assert fn.returns == []

    def test_generic_types(self):
        (fn,) = parse("package p\n\nfunc f(m Map[string, int]) []T {\n\treturn nil\n}\n").functions
        assert fn.parameters == ["m Map[string, int]"]
        assert fn.returns == ["[]T"]


class TestComplexity:
    """Cyclomatic complexity: 1 + branches + case clauses."""

    def test_straight_line(self):
        (fn,) = parse("package p\n\nfunc f() int { return 1 }\n").functions
        assert fn.complexity == 1

    def test_three_ifs_and_a_loop(self):
        (fn,) = parse(
            """
            package p

            func Decide(xs []int) int {
            	total := 0
            	if len(xs) == 0 {
            		return 0
            	}
            	for _, x := range xs {
            		if x > 10 {
            			total += x
            		}
            	}
            	if total > 100 {
            		return 100
            	}
            	return total
            }
            """
        ).functions
        assert fn.complexity == 5

    def test_else_if_counts(self):
        (fn,) = parse(
            """
            package p

            func sign(x int) int {
            	if x > 0 {
            		return 1
            	} else if x < 0 {
            		return -1
            	}
            	return 0
            }
            """
        ).functions
        assert fn.complexity == 3

    def test_type_switch_cases(self):
        (fn,) = parse(
            """
            package p

            func Kind(v interface{}) string {
            	switch v.(type) {
            	case int:
            		return "int"
            	case string:
            		return "string"
            	default:
            		return "other"
            	}
            }
            """
        ).functions
        assert fn.complexity == 5

    def test_expression_switch(self):
        (fn,) = parse(
            """
            package p

            func f(x int) int {
            	switch x {
            	case 1:
            		return 10
            	case 2, 3:
            		return 20
            	}
            	return 0
            }
            """
        ).functions
        assert fn.complexity == 4

    def test_boolean_operators_ignored(self):
        (fn,) = parse(
            "package p\n\nfunc f(a, b bool) bool {\n\tif a && b || !a {\n\t\treturn true\n\t}\n\treturn false\n}\n"
        ).functions
        assert fn.complexity == 2

    def test_select_not_counted(self):
        (fn,) = parse(
            """
            package p

            func f(a, b chan int) {
            	select {
            	case <-a:
            	case <-b:
            	}
            }
            """
        ).functions
        assert fn.complexity == 1

    def test_closure_branches_count(self):
        (fn,) = parse(
            """
            package p

            func f() func(int) bool {
            	return func(x int) bool {
            		if x > 0 {
            			return true
            		}
            		return false
            	}
            }
            """
        ).functions
        assert fn.complexity == 2


class TestTestFiles:
    def test_test_and_bench_flags(self):
        syntax = parse(
            """
            package p

            func TestAdd(t *testing.T) {}
            func BenchmarkAdd(b *testing.B) {}
            func helper() {}
            """,
            path="pkg/add_test.go",
        )
        flags = {fn.name: (fn.is_test, fn.is_bench) for fn in syntax.functions}
        assert syntax.is_test is True
        assert flags == {
            "TestAdd": (True, False),
            "BenchmarkAdd": (False, True),
            "helper": (False, False),
        }

    def test_test_prefix_outside_test_file(self):
        (fn,) = parse("package p\n\nfunc TestLike() {}\n").functions
        assert fn.is_test is False


class TestParseFailures:
    def test_syntax_error(self):
        with pytest.raises(ParsingError):
            parse("package p\n\nfunc broken( {\n")

    def test_missing_package_clause(self):
        with pytest.raises(ParsingError):
            parse("func f() {}\n")

    def test_empty_file(self):
        with pytest.raises(ParsingError):
            GoAnalyzer().parse_file("", "empty.go")


class TestIsExported:
    @pytest.mark.parametrize(
        "name,expected",
        [("Server", True), ("server", False), ("_x", False), ("", False), ("Ünicode", True)],
    )
    def test_capitalization(self, name, expected):
        assert is_exported(name) is expected
