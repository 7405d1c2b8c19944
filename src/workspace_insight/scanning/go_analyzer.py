"""GoAnalyzer: converts tree-sitter parse trees of Go files to FileSyntax.

Declarations are read from the top level of `source_file`; imports and
comments come from queries. Cyclomatic complexity is a simplified McCabe
count: 1 plus every if/for/switch/type-switch statement and every case
clause inside the function body. Boolean operators are not counted.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import ParsingError
from ..logging_config import get_logger
from ..models import FieldInfo, FunctionInfo, InterfaceInfo, MethodInfo, StructInfo
from .queries import IMPORT_QUERY, PACKAGE_QUERY
from .syntax import FileSyntax
from .treesitter_parser import TreeSitterParser
from .types import type_string

logger = get_logger(__name__)

COMMENT_QUERY = "(comment) @comment"

# Node types that add one branch each. for_statement covers range loops too.
BRANCH_NODES = frozenset(
    {
        "if_statement",
        "for_statement",
        "expression_switch_statement",
        "type_switch_statement",
        "expression_case",
        "type_case",
        "default_case",
    }
)

_INTERFACE_METHOD_NODES = frozenset({"method_elem", "method_spec"})


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


def is_test_file(path: str) -> bool:
    return path.endswith("_test.go")


class GoAnalyzer:
    """Parse Go source into FileSyntax.

    Usage:
        analyzer = GoAnalyzer()
        syntax = analyzer.parse_file(content, "pkg/server.go")
    """

    def __init__(self, parser: TreeSitterParser | None = None) -> None:
        self._parser = parser or TreeSitterParser()

    def parse_file(self, content: str, path: str) -> FileSyntax:
        """Parse one file.

        Raises:
            ParsingError: On syntax errors or a missing package clause
        """
        code = content.encode("utf-8")
        tree = self._parser.parse(code)
        root = tree.root_node

        if root.has_error:
            raise ParsingError(path, _describe_error(root))

        package_name = ""
        for node, _name in self._parser.query(tree, PACKAGE_QUERY):
            package_name = _text(node)
            break
        if not package_name:
            raise ParsingError(path, "missing package clause")

        lines = content.split("\n") if content else []
        is_test = is_test_file(path)
        syntax = FileSyntax(
            path=path,
            package_name=package_name,
            imports=self._extract_imports(tree),
            line_count=content.count("\n") + 1 if content else 0,
            blank_lines=sum(1 for line in lines if not line.strip()),
            comment_lines=self._count_comment_lines(tree, lines),
            is_test=is_test,
        )

        for decl in root.named_children:
            if decl.type in ("function_declaration", "method_declaration"):
                syntax.functions.append(
                    self._function_info(decl, package_name, path, is_test)
                )
            elif decl.type == "type_declaration":
                self._collect_types(decl, package_name, syntax)

        return syntax

    def _extract_imports(self, tree: Any) -> list[str]:
        imports: list[str] = []
        for node, _name in self._parser.query(tree, IMPORT_QUERY):
            imports.append(_text(node).strip("\"`"))
        return imports

    def _count_comment_lines(self, tree: Any, lines: list[str]) -> int:
        rows: set[int] = set()
        for node, _name in self._parser.query(tree, COMMENT_QUERY):
            first, last = node.start_point[0], node.end_point[0]
            # Trailing comments after code do not make a comment line
            if first < len(lines) and lines[first].strip().startswith(("//", "/*")):
                rows.add(first)
            rows.update(range(first + 1, last + 1))
        return len(rows)

    def _function_info(
        self, node: Any, package_name: str, path: str, in_test_file: bool
    ) -> FunctionInfo:
        name = _text(node.child_by_field_name("name"))
        receiver = ""
        if node.type == "method_declaration":
            receiver = self._receiver_type(node.child_by_field_name("receiver"))

        return FunctionInfo(
            name=name,
            package=package_name,
            is_exported=is_exported(name),
            line_start=node.start_point[0] + 1,
            line_end=node.end_point[0] + 1,
            complexity=compute_complexity(node.child_by_field_name("body")),
            parameters=_parameters(node.child_by_field_name("parameters"), named=True),
            returns=_results(node.child_by_field_name("result")),
            is_test=in_test_file and name.startswith("Test"),
            is_bench=in_test_file and name.startswith("Benchmark"),
            receiver=receiver,
            file=path,
        )

    def _receiver_type(self, receiver: Any) -> str:
        if receiver is None:
            return ""
        for param in receiver.named_children:
            if param.type == "parameter_declaration":
                return type_string(param.child_by_field_name("type"))
        return ""

    def _collect_types(self, decl: Any, package_name: str, syntax: FileSyntax) -> None:
        for spec in decl.named_children:
            if spec.type != "type_spec":
                continue
            name = _text(spec.child_by_field_name("name"))
            type_node = spec.child_by_field_name("type")
            if type_node is None:
                continue
            if type_node.type == "struct_type":
                syntax.structs.append(_struct_info(name, package_name, type_node))
            elif type_node.type == "interface_type":
                syntax.interfaces.append(_interface_info(name, package_name, type_node))


def compute_complexity(body: Any) -> int:
    """1 + branching statements and case clauses anywhere under body."""
    complexity = 1
    if body is None:
        return complexity

    stack = [body]
    while stack:
        node = stack.pop()
        if node.type in BRANCH_NODES:
            complexity += 1
        stack.extend(node.named_children)
    return complexity


def _struct_info(name: str, package_name: str, node: Any) -> StructInfo:
    info = StructInfo(name=name, package=package_name, is_exported=is_exported(name))

    field_list = next(
        (c for c in node.named_children if c.type == "field_declaration_list"), None
    )
    if field_list is None:
        return info

    for decl in field_list.named_children:
        if decl.type != "field_declaration":
            continue
        field_type = type_string(decl.child_by_field_name("type"))
        tag_node = decl.child_by_field_name("tag")
        tag = _text(tag_node) if tag_node is not None else ""
        if tag:
            info.tags.append(tag)

        names = decl.children_by_field_name("name")
        if not names:
            # Embedded field; the grammar keeps a leading `*` outside the type node
            if any(child.type == "*" for child in decl.children):
                field_type = "*" + field_type
            info.fields.append(FieldInfo(name="", type=field_type, tag=tag, is_exported=True))
            continue
        for name_node in names:
            field_name = _text(name_node)
            info.fields.append(
                FieldInfo(
                    name=field_name,
                    type=field_type,
                    tag=tag,
                    is_exported=is_exported(field_name),
                )
            )
    return info


def _interface_info(name: str, package_name: str, node: Any) -> InterfaceInfo:
    info = InterfaceInfo(name=name, package=package_name, is_exported=is_exported(name))
    for elem in node.named_children:
        if elem.type not in _INTERFACE_METHOD_NODES:
            continue  # embedded interfaces and type constraints
        method_name = _text(elem.child_by_field_name("name"))
        info.methods.append(
            MethodInfo(
                name=method_name,
                is_exported=is_exported(method_name),
                parameters=_parameters(elem.child_by_field_name("parameters"), named=False),
                returns=_results(elem.child_by_field_name("result")),
            )
        )
    return info


def _parameters(param_list: Any, named: bool) -> list[str]:
    """Render a parameter_list.

    With named=True each declared name yields "name type"; otherwise (and
    for unnamed parameters) one bare type string per declaration.
    """
    rendered: list[str] = []
    if param_list is None:
        return rendered

    for param in param_list.named_children:
        if param.type not in ("parameter_declaration", "variadic_parameter_declaration"):
            continue
        param_type = type_string(param.child_by_field_name("type"))
        if param.type == "variadic_parameter_declaration":
            param_type = "..." + param_type
        names = param.children_by_field_name("name")
        if named and names:
            rendered.extend(f"{_text(n)} {param_type}" for n in names)
        else:
            rendered.append(param_type)
    return rendered


def _results(result: Any) -> list[str]:
    """One type string per result field; a bare result type is one entry."""
    if result is None:
        return []
    if result.type == "parameter_list":
        return _parameters(result, named=False)
    return [type_string(result)]


def _describe_error(root: Any) -> str:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point[0] + 1, node.start_point[1] + 1
            return f"syntax error at {row}:{column}"
        stack.extend(reversed(node.children))
    return "syntax error"


def _text(node: Any) -> str:
    if node is None or node.text is None:
        return ""
    return str(node.text.decode("utf-8", errors="replace"))
