"""Gemini CLI install target."""

from __future__ import annotations

from expcat_skills.targets.base import BaseTarget


class GeminiTarget(BaseTarget):
    """Gemini CLI skills in ~/.gemini/skills."""

    name = "gemini"
    display_name = "Gemini CLI"
