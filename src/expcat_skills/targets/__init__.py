"""Supported AI coding tools and their skills directories."""

from __future__ import annotations

from pathlib import Path

from expcat_skills.protocols import InstallTarget

from .base import BaseTarget
from .claude import ClaudeTarget
from .codex import CodexTarget
from .copilot import CopilotTarget
from .gemini import GeminiTarget
from .opencode import OpenCodeTarget

__all__ = [
    "BaseTarget",
    "ClaudeTarget",
    "CodexTarget",
    "CopilotTarget",
    "GeminiTarget",
    "InstallTarget",
    "OpenCodeTarget",
    "TARGETS",
    "all_targets",
    "shared_skills_root",
]


# Order is the order targets are offered and scanned in.
TARGETS: dict[str, type[BaseTarget]] = {
    "copilot": CopilotTarget,
    "claude": ClaudeTarget,
    "codex": CodexTarget,
    "opencode": OpenCodeTarget,
    "gemini": GeminiTarget,
}


def all_targets() -> list[InstallTarget]:
    """Get every supported install target in offer order."""
    return [target_class() for target_class in TARGETS.values()]


def shared_skills_root() -> Path:
    """Get the canonical shared skill store.

    Returns:
        Path to ~/.agents/skills/
    """
    return Path.home() / ".agents" / "skills"
