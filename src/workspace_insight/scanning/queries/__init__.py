"""Tree-sitter query strings."""

from .go import IMPORT_QUERY, PACKAGE_QUERY

__all__ = ["IMPORT_QUERY", "PACKAGE_QUERY"]
