"""Render tree-sitter Go type expressions as strings.

Mirrors the shape of Go source: `*T`, `[]T`, `map[K]V`, `chan<- T`,
`pkg.T`, `T[A, B]`. Function, interface and struct literals collapse to
`func`, `interface{}` and `struct{}`. Anything unrecognized is `unknown`.
"""

from __future__ import annotations

from typing import Any

UNKNOWN = "unknown"

_NAME_NODES = frozenset(
    {"type_identifier", "identifier", "package_identifier", "field_identifier"}
)


def type_string(node: Any) -> str:
    """Return the string form of a type expression node."""
    if node is None:
        return UNKNOWN

    kind = node.type

    if kind in _NAME_NODES:
        return _text(node)
    if kind == "qualified_type":
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        return f"{_text(package)}.{_text(name)}"
    if kind == "pointer_type":
        return "*" + type_string(_first_named(node))
    if kind in ("slice_type", "implicit_length_array_type"):
        return "[]" + type_string(node.child_by_field_name("element"))
    if kind == "array_type":
        return "[...]" + type_string(node.child_by_field_name("element"))
    if kind == "map_type":
        key = type_string(node.child_by_field_name("key"))
        value = type_string(node.child_by_field_name("value"))
        return f"map[{key}]{value}"
    if kind == "channel_type":
        return _channel_prefix(node) + type_string(node.child_by_field_name("value"))
    if kind == "function_type":
        return "func"
    if kind == "interface_type":
        return "interface{}"
    if kind == "struct_type":
        return "struct{}"
    if kind == "generic_type":
        base = type_string(node.child_by_field_name("type"))
        args = node.child_by_field_name("type_arguments")
        if args is None:
            return base
        rendered = ", ".join(type_string(arg) for arg in args.named_children)
        return f"{base}[{rendered}]"
    if kind == "type_elem":
        return " | ".join(type_string(child) for child in node.named_children)
    if kind == "negated_type":
        return "~" + type_string(_first_named(node))
    if kind == "parenthesized_type":
        return type_string(_first_named(node))

    return UNKNOWN


def base_type_name(rendered: str) -> str:
    """`*Box[T]` -> `Box`; used to attach methods to their receiver type."""
    return rendered.lstrip("*").split("[", 1)[0]


def _channel_prefix(node: Any) -> str:
    tokens = [child.type for child in node.children if not child.is_named]
    if tokens[:2] == ["<-", "chan"]:
        return "<-chan "
    if tokens[:2] == ["chan", "<-"]:
        return "chan<- "
    return "chan "


def _first_named(node: Any) -> Any:
    named = node.named_children
    return named[0] if named else None


def _text(node: Any) -> str:
    if node is None or node.text is None:
        return UNKNOWN
    return str(node.text.decode("utf-8", errors="replace"))
