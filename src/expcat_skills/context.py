"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

Run configuration (dry-run, elevation state, the log session) travels in the
context instead of process-wide globals, so each component can be tested
with an injected configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from expcat_skills.protocols import FileSystem, HostPlatform, SourceRepository
from expcat_skills.targets import shared_skills_root

if TYPE_CHECKING:
    from rich.console import Console

    from expcat_skills.logsession import LogSession
    from expcat_skills.tui import TUI


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from expcat_skills.filesystem import RealFileSystem

    return RealFileSystem()


@dataclass
class AppContext:
    """Container for services and run configuration.

    Provides a single injection point for everything the install and
    uninstall flows use.

    Attributes:
        tui: Console output and prompts.
        gitops: Repository operations.
        host: Symlink capability and elevation for the running OS.
        filesystem: Filesystem access.
        dry_run: Report mutations instead of performing them.
        elevated: This process is an elevated relaunch.
        argv: Original arguments, replayed on an elevated relaunch.
        shared_root: Canonical shared skill store.
        log_session: Active log session, if any.
    """

    tui: TUI
    gitops: SourceRepository
    host: HostPlatform
    filesystem: FileSystem = field(default_factory=_default_filesystem)
    dry_run: bool = False
    elevated: bool = False
    argv: list[str] = field(default_factory=list)
    shared_root: Path = field(default_factory=shared_skills_root)
    log_session: LogSession | None = None


def create_context(
    dry_run: bool = False,
    elevated: bool = False,
    argv: list[str] | None = None,
    console: Console | None = None,
    stream: TextIO | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        dry_run: Report mutations instead of performing them.
        elevated: This process is an elevated relaunch.
        argv: Original arguments for an elevated relaunch.
        console: Console override (for testing).
        stream: Prompt input override (for testing).

    Returns:
        Configured AppContext with all dependencies.
    """
    from expcat_skills.filesystem import RealFileSystem
    from expcat_skills.gitops import GitOps
    from expcat_skills.host import get_host
    from expcat_skills.tui import TUI

    return AppContext(
        tui=TUI(console=console, stream=stream),
        gitops=GitOps.create_default(),
        host=get_host(),
        filesystem=RealFileSystem(),
        dry_run=dry_run,
        elevated=elevated,
        argv=list(argv or []),
    )
