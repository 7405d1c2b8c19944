"""Tree-sitter parser wrapper for Go.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes)
    captures = parser.query(tree, IMPORT_QUERY)
"""

from __future__ import annotations

from typing import Any

import tree_sitter
import tree_sitter_go

Capture = tuple[Any, str]


class TreeSitterParser:
    """One Go Parser/Language pair plus a compiled-query cache."""

    def __init__(self) -> None:
        self._language = tree_sitter.Language(tree_sitter_go.language())
        self._parser = tree_sitter.Parser(self._language)
        self._queries: dict[str, Any] = {}

    def parse(self, code: bytes) -> Any:
        """Parse Go source and return the syntax tree.

        Tree-sitter always produces a tree; callers check
        ``tree.root_node.has_error`` to detect syntax errors.
        """
        return self._parser.parse(code)

    def query(self, tree: Any, query_str: str) -> list[Capture]:
        """Run a query on a syntax tree.

        Returns:
            List of (node, capture_name) tuples in document order
        """
        query = self._queries.get(query_str)
        if query is None:
            query = tree_sitter.Query(self._language, query_str)
            self._queries[query_str] = query

        # tree-sitter 0.25+: use QueryCursor for execution
        cursor = tree_sitter.QueryCursor(query)
        result: list[Capture] = []
        for _pattern_id, captures_dict in cursor.matches(tree.root_node):
            for capture_name, nodes in captures_dict.items():
                for node in nodes:
                    result.append((node, capture_name))
        result.sort(key=lambda capture: capture[0].start_byte)
        return result
