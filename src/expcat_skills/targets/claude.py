"""Claude Code install target."""

from __future__ import annotations

import sys
from pathlib import Path

from expcat_skills.targets.base import BaseTarget


class ClaudeTarget(BaseTarget):
    """Claude Code skills in ~/.claude/skills."""

    name = "claude"
    display_name = "Claude Code"

    def is_available(self) -> bool:
        """Check if Claude Code is available on this system.

        Returns:
            True if Claude Code appears to be installed.
        """
        if sys.platform == "win32":
            claude_path = Path.home() / "AppData" / "Local" / "Programs" / "claude"
            return claude_path.exists() or self.base_dir.exists()
        return self.base_dir.exists()
