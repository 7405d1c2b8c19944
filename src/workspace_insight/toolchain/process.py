"""Run external commands (git, go) with a timeout."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from ..exceptions import CommandError
from ..logging_config import get_logger

logger = get_logger(__name__)


def run_command(
    args: list[str],
    cwd: Path,
    timeout: float,
    env: Optional[dict[str, str]] = None,
) -> str:
    """Run a command and return its stdout.

    On timeout the child is killed before CommandError is raised.

    Raises:
        CommandError: Binary missing, timeout, or non-zero exit status
    """
    logger.debug("Running %s in %s", " ".join(args), cwd)
    try:
        result = subprocess.run(
            args,
            cwd=str(cwd),
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            env=env,
        )
    except FileNotFoundError:
        raise CommandError(args, f"{args[0]} not found on PATH")
    except subprocess.TimeoutExpired:
        raise CommandError(args, f"timed out after {timeout}s")
    except OSError as e:
        raise CommandError(args, str(e))

    if result.returncode != 0:
        stderr = result.stderr.strip().splitlines()
        reason = stderr[-1] if stderr else f"exit status {result.returncode}"
        raise CommandError(args, reason)
    return result.stdout
