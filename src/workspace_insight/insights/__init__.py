"""Metrics, issues and suggestions derived from a populated workspace."""

from .issues import analyze_issues
from .metrics import calculate_metrics
from .suggestions import generate_suggestions, version_below

__all__ = [
    "analyze_issues",
    "calculate_metrics",
    "generate_suggestions",
    "version_below",
]
