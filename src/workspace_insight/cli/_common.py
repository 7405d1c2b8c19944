"""Shared CLI helpers."""

from types import MappingProxyType

from rich.console import Console

console = Console()

SEVERITY_STYLES = MappingProxyType(
    {
        "error": "bold red",
        "warning": "yellow",
        "info": "cyan",
    }
)

PRIORITY_STYLES = MappingProxyType(
    {
        "high": "bold red",
        "medium": "yellow",
        "low": "dim",
    }
)
