"""Read repository metadata via the git CLI.

Every query is independent: a failing query leaves its field empty and the
rest still run. A root without a .git entry is simply not a repository.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from ..exceptions import CommandError
from ..logging_config import get_logger
from ..models import GitInfo
from .process import run_command

logger = get_logger(__name__)


class GitInspector:
    """Collect branch, HEAD commit, dirty state, remote and tags."""

    def __init__(self, repo_path: Path, timeout: float = 30):
        self.repo_path = Path(repo_path)
        self.timeout = timeout
        self.failures: list[str] = []

    def inspect(self) -> GitInfo:
        info = GitInfo()
        # .git is a directory in clones and a file in worktrees/submodules
        if not (self.repo_path / ".git").exists():
            logger.info("Not a git repository: %s", self.repo_path)
            return info
        info.is_repo = True

        info.branch = self._git("rev-parse", "--abbrev-ref", "HEAD") or ""
        info.commit_hash = self._git("rev-parse", "HEAD") or ""
        info.commit_message = self._git("log", "-1", "--pretty=format:%s") or ""
        info.commit_author = self._git("log", "-1", "--pretty=format:%an") or ""
        info.commit_date = _parse_date(self._git("log", "-1", "--pretty=format:%cI"))

        status = self._git("status", "--porcelain")
        info.is_dirty = bool(status)

        info.remote_url = self._git("remote", "get-url", "origin") or ""

        tags = self._git("tag", "--points-at", "HEAD")
        info.tags = tags.splitlines() if tags else []
        return info

    def _git(self, *args: str) -> Optional[str]:
        cmd = ["git", *args]
        try:
            return run_command(cmd, self.repo_path, self.timeout).strip()
        except CommandError as e:
            logger.debug("git query failed: %s", e)
            self.failures.append(str(e))
            return None


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
