"""Per-file syntax model produced by the Go analyzer.

FileSyntax is what one parsed .go file contributes to its package:
declarations, imports and line counts. The package builder merges
FileSyntax objects that share a directory into a PackageInfo.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..models import FunctionInfo, InterfaceInfo, StructInfo


@dataclass
class FileSyntax:
    """A parsed Go source file.

    Attributes:
        path: File path as walked
        package_name: Name from the package clause
        imports: Import paths in declaration order
        functions: Functions and methods (methods carry a receiver)
        structs: Named struct types
        interfaces: Named interface types
        line_count: Newline count + 1 (0 for an empty file)
        comment_lines: Lines that hold only comment text
        blank_lines: Whitespace-only lines
        is_test: File name ends in _test.go
    """

    path: str
    package_name: str
    imports: list[str] = field(default_factory=list)
    functions: list[FunctionInfo] = field(default_factory=list)
    structs: list[StructInfo] = field(default_factory=list)
    interfaces: list[InterfaceInfo] = field(default_factory=list)
    line_count: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    is_test: bool = False

    @property
    def is_main(self) -> bool:
        return self.package_name == "main"

    @property
    def code_lines(self) -> int:
        return max(0, self.line_count - self.comment_lines - self.blank_lines)
