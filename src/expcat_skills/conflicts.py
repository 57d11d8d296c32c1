"""Overwrite-or-rename policy for existing copy destinations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from expcat_skills.errors import InputError

if TYPE_CHECKING:
    from expcat_skills.context import AppContext


OVERWRITE = "o"
RENAME = "r"


def validate_skill_name(name: str) -> str:
    """Check a rename target is a single, non-empty path component.

    Args:
        name: Name entered by the operator.

    Returns:
        The name unchanged.

    Raises:
        InputError: If the name is empty or not a plain directory name.
    """
    if not name:
        raise InputError("Name cannot be empty")
    if name in (".", "..") or "/" in name or "\\" in name:
        raise InputError(f"Invalid name: {name}")
    return name


class ConflictResolver:
    """Asks whether to overwrite or rename when a destination exists."""

    def __init__(self, ctx: AppContext) -> None:
        """Initialize resolver.

        Args:
            ctx: Application context (prompts, filesystem, dry-run flag).
        """
        self.ctx = ctx

    def resolve(self, dest: Path) -> Path:
        """Return the destination a copy should go to.

        Overwrite removes the existing destination (logged only under
        dry-run). Rename picks a sibling name and is resolved again if that
        name is taken too. Invalid answers re-prompt.

        Args:
            dest: Intended destination.

        Returns:
            Destination that is free to copy into (or will be under dry-run).

        Raises:
            InputError: If a rename target is empty or invalid.
        """
        tui = self.ctx.tui
        fs = self.ctx.filesystem

        while fs.exists(dest):
            tui.show_warning(f"Target exists: {dest}")
            action = tui.ask("Overwrite (o) / Rename (r) ? [r]").lower()

            if action in ("", RENAME):
                name = validate_skill_name(tui.ask("New name"))
                dest = dest.parent / name
                continue

            if action == OVERWRITE:
                if self.ctx.dry_run:
                    tui.show_info(f"[dry-run] Would remove {dest}")
                else:
                    fs.remove(dest)
                    tui.show_info(f"Removed {dest}")
                return dest

            tui.show_warning("Invalid choice")

        return dest
