"""Module root location and go.mod parsing."""

from .locator import MANIFEST_NAME, find_module_root
from .manifest import Manifest, parse_manifest, parse_requirement, read_manifest

__all__ = [
    "MANIFEST_NAME",
    "Manifest",
    "find_module_root",
    "parse_manifest",
    "parse_requirement",
    "read_manifest",
]
