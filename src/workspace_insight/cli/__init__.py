"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="workspace-insight",
    help="Workspace Insight - Go module analyzer",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback()
def _root() -> None:
    """Analyze Go modules: structure, complexity, dependencies, coverage."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402


def main() -> None:
    app()
