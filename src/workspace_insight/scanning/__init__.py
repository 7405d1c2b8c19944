"""Go source scanning: tree-sitter parsing, file syntax, package model."""

from .go_analyzer import GoAnalyzer, compute_complexity, is_exported, is_test_file
from .syntax import FileSyntax
from .treesitter_parser import TreeSitterParser
from .types import type_string
from .walker import PackageBuilder, analyze_packages, iter_go_files

__all__ = [
    "FileSyntax",
    "GoAnalyzer",
    "PackageBuilder",
    "TreeSitterParser",
    "analyze_packages",
    "compute_complexity",
    "is_exported",
    "is_test_file",
    "iter_go_files",
    "type_string",
]
