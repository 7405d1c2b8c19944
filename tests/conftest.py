"""Shared test fixtures for Workspace Insight."""

import os
import textwrap
from pathlib import Path

import pytest

from workspace_insight.config import AnalysisOptions


def write_go_mod(root: Path, module: str = "example.com/m", go: str = "1.22", extra: str = ""):
    lines = [f"module {module}", ""]
    if go:
        lines += [f"go {go}", ""]
    (root / "go.mod").write_text("\n".join(lines) + textwrap.dedent(extra))


@pytest.fixture
def make_workspace(tmp_path):
    """Factory: write go.mod plus {relative path: source} under tmp_path."""

    def _make(files=None, module="example.com/m", go="1.22", go_mod_extra=""):
        write_go_mod(tmp_path, module=module, go=go, extra=go_mod_extra)
        for rel, source in (files or {}).items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(source).lstrip())
        return tmp_path

    return _make


@pytest.fixture
def offline_options():
    """Options with every external-process phase disabled."""
    return AnalysisOptions(
        include_git_info=False,
        include_coverage=False,
        include_build_info=False,
    )


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Hide user/project config files and WSI_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    for key in list(os.environ):
        if key.startswith("WSI_"):
            monkeypatch.delenv(key)
    return home
