"""OpenCode install target."""

from __future__ import annotations

from expcat_skills.targets.base import BaseTarget


class OpenCodeTarget(BaseTarget):
    """OpenCode skills in ~/.opencode/skills."""

    name = "opencode"
    display_name = "OpenCode"
