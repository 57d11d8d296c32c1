"""Shared test fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from expcat_skills.context import AppContext
from expcat_skills.filesystem import RealFileSystem
from expcat_skills.host import PosixHost
from expcat_skills.tui import TUI


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


def make_tui(*answers: str) -> TUI:
    """Create a TUI that reads the given answers, one per prompt."""
    console = Console(file=io.StringIO(), width=400, highlight=False)
    stream = io.StringIO("".join(f"{answer}\n" for answer in answers))
    return TUI(console=console, stream=stream)


def console_output(tui: TUI) -> str:
    """Return everything a scripted TUI printed."""
    return tui.console.file.getvalue()


# ============================================================================
# Context Fixtures
# ============================================================================


@pytest.fixture
def mock_gitops() -> MagicMock:
    """Create a mock SourceRepository."""
    gitops = MagicMock()
    gitops.default_branch.return_value = "main"
    return gitops


@pytest.fixture
def mock_host() -> MagicMock:
    """Create a host that restricts symlinks; tests set the outcomes."""
    host = MagicMock()
    host.restricts_symlinks = True
    host.can_create_symlink.return_value = True
    host.request_elevated_relaunch.return_value = True
    return host


@pytest.fixture
def make_context(temp_home: Path, mock_gitops: MagicMock) -> Callable[..., AppContext]:
    """Factory for contexts rooted in the temporary home directory."""

    def _make(*answers: str, **overrides: Any) -> AppContext:
        options: dict[str, Any] = {
            "tui": make_tui(*answers),
            "gitops": mock_gitops,
            "host": PosixHost(),
            "filesystem": RealFileSystem(),
        }
        options.update(overrides)
        return AppContext(**options)

    return _make


# ============================================================================
# Sample Content Fixtures
# ============================================================================


SAMPLE_SKILL_MD = """---
name: tigercat
description: Tigercat UI component guidance
---

# Tigercat

Use the Tigercat components.
"""


@pytest.fixture
def sample_skill_content() -> str:
    """Sample skill SKILL.md content."""
    return SAMPLE_SKILL_MD


@pytest.fixture
def skill_tree(tmp_path: Path) -> Path:
    """Create a fetched repository layout.

    repo/
      README.md
      skills/
        tigercat/   (SKILL.md, references/guide.md)
        vue/        (SKILL.md)
    """
    repo = tmp_path / "repo"
    (repo / "skills" / "tigercat" / "references").mkdir(parents=True)
    (repo / "skills" / "vue").mkdir(parents=True)
    (repo / "README.md").write_text("# Repo\n")
    (repo / "skills" / "tigercat" / "SKILL.md").write_text(SAMPLE_SKILL_MD)
    (repo / "skills" / "tigercat" / "references" / "guide.md").write_text("guide\n")
    (repo / "skills" / "vue" / "SKILL.md").write_text("---\nname: vue\n---\n")
    return repo
