"""Logging setup for Workspace Insight.

Every module logs through `get_logger(__name__)`, which places it under the
"workspace_insight" namespace. The CLI calls `setup_logging` once; library
callers that never do inherit whatever the host application configured.

Terminal output goes to stderr through rich, so `--json` output on stdout
stays machine-readable. An optional log file gets plain timestamped lines.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "workspace_insight"

FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    # quiet wins over verbose
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install rich terminal logging (and optionally a log file).

    Args:
        verbose: DEBUG level; also shows source paths and locals in tracebacks
        quiet: ERROR level only
        log_file: Append plain-text records to this file as well

    Returns:
        The workspace_insight logger
    """
    level = _level(verbose, quiet)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # Paths and import paths may contain [brackets]
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    # Replaces handlers installed by an earlier call
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger for a module, namespaced under workspace_insight.

    Args:
        name: Usually __name__; bare names such as "detector" are prefixed
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
