"""Analyze command: runs the workspace detector and renders the result."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..config import load_options
from ..detector import WorkspaceDetector
from ..exceptions import WorkspaceInsightError
from ..logging_config import setup_logging
from ..models import AnalysisResult, PhaseStatus
from . import app
from ._common import PRIORITY_STYLES, SEVERITY_STYLES, console


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Any path inside the Go module",
    ),
    no_tests: bool = typer.Option(False, "--no-tests", help="Skip *_test.go files"),
    no_deps: bool = typer.Option(False, "--no-deps", help="Skip dependency analysis"),
    no_git: bool = typer.Option(False, "--no-git", help="Skip git metadata"),
    coverage: bool = typer.Option(False, "--coverage", help="Run go test with coverage (slow)"),
    build_info: bool = typer.Option(False, "--build-info", help="Query the go toolchain"),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", help="Deepest directory level to walk (negative = unbounded)"
    ),
    include_vendor: bool = typer.Option(False, "--include-vendor", help="Walk vendor/ too"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Explicit workspace-insight.toml", exists=True
    ),
    json_output: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also append logs to this file"
    ),
):
    """
    Analyze the Go module containing PATH.

    [bold cyan]Examples:[/bold cyan]

      workspace-insight analyze .

      workspace-insight analyze ./internal --coverage --build-info

      workspace-insight analyze . --json --no-git
    """
    setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)

    # Only forward flags that were actually given so config files still apply
    overrides = {
        "include_test_files": False if no_tests else None,
        "include_dependencies": False if no_deps else None,
        "include_git_info": False if no_git else None,
        "include_coverage": True if coverage else None,
        "include_build_info": True if build_info else None,
        "exclude_vendor": False if include_vendor else None,
        "max_depth": max_depth,
    }

    try:
        options = load_options(config_file=config, **overrides)
        result = WorkspaceDetector(options).detect_workspace(path)
    except WorkspaceInsightError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps(result.to_dict(), indent=2))
        return

    _render(result)


def _render(result: AnalysisResult) -> None:
    ws = result.workspace
    metrics = result.metrics

    console.print()
    title = escape(ws.module_path or ws.root_path)
    console.print(f"[bold]{title}[/bold]  ({ws.project_type.value})")
    console.print(f"[dim]root: {escape(ws.root_path)}  go: {ws.go_version or '?'}[/dim]")

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_row("Packages", str(metrics.total_packages))
    table.add_row("Files", str(metrics.total_files))
    table.add_row("Lines", f"{metrics.total_lines} ({metrics.code_lines} code)")
    table.add_row("Functions", str(metrics.total_functions))
    table.add_row("Structs / Interfaces", f"{metrics.total_structs} / {metrics.total_interfaces}")
    table.add_row(
        "Complexity", f"avg {metrics.avg_complexity:.2f}, max {metrics.max_complexity}"
    )
    if ws.test_coverage is not None:
        table.add_row("Coverage", f"{metrics.test_coverage:.1f}%")
    if ws.git_info is not None and ws.git_info.is_repo:
        dirty = " (dirty)" if ws.git_info.is_dirty else ""
        table.add_row("Git", f"{ws.git_info.branch} @ {ws.git_info.commit_hash[:8]}{dirty}")
    if ws.build_info is not None:
        table.add_row("Toolchain", f"go{ws.build_info.go_version} {ws.build_info.platform}")
    console.print(table)

    failed = [name for name, status in ws.phases.items() if status is PhaseStatus.FAILED]
    if failed:
        console.print(f"[yellow]Phases failed:[/yellow] {', '.join(failed)}")

    if result.issues:
        console.print()
        console.print(f"[bold]Issues ({len(result.issues)})[/bold]")
        for issue in result.issues:
            style = SEVERITY_STYLES.get(issue.severity, "white")
            location = f"{issue.file}:{issue.line}" if issue.line else issue.file
            console.print(f"  [{style}]{issue.severity:<7}[/{style}] {escape(issue.message)}")
            console.print(f"          [dim]{escape(location)}  ({issue.rule})[/dim]")

    if result.suggestions:
        console.print()
        console.print(f"[bold]Suggestions ({len(result.suggestions)})[/bold]")
        for suggestion in result.suggestions:
            style = PRIORITY_STYLES.get(suggestion.priority, "white")
            console.print(f"  [{style}]{suggestion.priority:<7}[/{style}] {suggestion.title}")
            console.print(f"          [dim]{escape(suggestion.description)}[/dim]")
