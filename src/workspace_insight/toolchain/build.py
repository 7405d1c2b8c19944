"""Toolchain facts from `go version` and `go env`."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path

from ..exceptions import CommandError
from ..logging_config import get_logger
from ..models import BuildInfo
from .process import run_command

logger = get_logger(__name__)

_VERSION_RE = re.compile(r"go(\d+\.\d+(?:\.\d+)?)")
_PLATFORM_RE = re.compile(r"(\S+/\S+)\s*$")

ENV_KEYS: tuple[str, ...] = ("GOOS", "GOARCH", "GOPATH", "GOMODCACHE", "GOFLAGS", "CGO_ENABLED")


def parse_version_output(output: str) -> tuple[str, str]:
    """`go version go1.22.1 linux/amd64` -> ("1.22.1", "linux/amd64")."""
    version = _VERSION_RE.search(output)
    platform = _PLATFORM_RE.search(output.strip())
    return (
        version.group(1) if version else "unknown",
        platform.group(1) if platform else "unknown",
    )


class BuildInspector:
    def __init__(self, root: Path, timeout: float = 30):
        self.root = Path(root)
        self.timeout = timeout

    def inspect(self) -> BuildInfo:
        """Query the toolchain.

        `go version` is required; `go env` only fills the environment and
        a missing platform.

        Raises:
            CommandError: If `go version` fails
        """
        output = run_command(["go", "version"], self.root, self.timeout)
        go_version, platform = parse_version_output(output)
        info = BuildInfo(
            go_version=go_version,
            platform=platform,
            last_built=datetime.now(timezone.utc),
        )

        try:
            env_output = run_command(["go", "env", "-json", *ENV_KEYS], self.root, self.timeout)
            info.environment = {k: str(v) for k, v in json.loads(env_output).items()}
        except (CommandError, ValueError) as e:
            logger.debug("go env unavailable: %s", e)
            return info

        if info.platform == "unknown" and info.environment.get("GOOS"):
            info.platform = f"{info.environment['GOOS']}/{info.environment.get('GOARCH', '')}"
        return info
