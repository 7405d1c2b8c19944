"""Tree-sitter queries for Go.

Extracts:
    - Import paths (single and grouped import declarations)
    - The package clause
"""

IMPORT_QUERY = """
(import_spec
    path: (_) @import.path
)
"""

PACKAGE_QUERY = """
(package_clause
    (package_identifier) @package.name
)
"""
