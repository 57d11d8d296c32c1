"""OpenAI Codex CLI install target."""

from __future__ import annotations

from expcat_skills.targets.base import BaseTarget


class CodexTarget(BaseTarget):
    """Codex CLI skills in ~/.codex/skills."""

    name = "codex"
    display_name = "Codex CLI"
