"""GitHub Copilot install target."""

from __future__ import annotations

from expcat_skills.targets.base import BaseTarget


class CopilotTarget(BaseTarget):
    """GitHub Copilot skills in ~/.copilot/skills."""

    name = "copilot"
    display_name = "GitHub Copilot"
