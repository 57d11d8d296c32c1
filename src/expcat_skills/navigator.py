"""Interactive selection of the skill directory inside a fetched tree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from expcat_skills.errors import SkillsError, UserCancelled
from expcat_skills.types import SkillSelection

if TYPE_CHECKING:
    from expcat_skills.tui import TUI

logger = logging.getLogger(__name__)

SELECT_CURRENT = "."
GO_UP = ".."
SKIP_LEVEL = "s"
QUIT = "q"

CONTROLS = (
    "  [.] select current",
    "  [..] up",
    "  [s] skip level (auto-enter if only one)",
    "  [q] quit",
)


def list_subdirectories(path: Path) -> list[str]:
    """List direct subdirectory names, sorted.

    Args:
        path: Directory to list.

    Returns:
        Sorted subdirectory names; files and symlinks are ignored.
    """
    return sorted(
        entry.name for entry in path.iterdir() if entry.is_dir() and not entry.is_symlink()
    )


class TreeNavigator:
    """Walks a directory tree one level at a time on operator input.

    The walk never leaves the tree rooted at the starting directory.
    """

    def __init__(self, tui: TUI) -> None:
        """Initialize navigator.

        Args:
            tui: Console and prompt source.
        """
        self.tui = tui

    def select(self, base_path: Path) -> SkillSelection:
        """Run the navigation loop until a directory is chosen.

        Args:
            base_path: Root of the navigable tree.

        Returns:
            The chosen directory.

        Raises:
            SkillsError: If the current directory vanished.
            UserCancelled: If the operator quits.
        """
        root = base_path.resolve()
        current = root

        while True:
            if not current.is_dir():
                raise SkillsError(f"Path not found: {current}")

            dirs = list_subdirectories(current)
            self.tui.show_info(f"Current: {current}")

            if not dirs:
                self.tui.show_info("No subdirectories. Use this directory.")
                return SkillSelection(path=current)

            self._show_choices(dirs)
            choice = self.tui.ask(">")
            logger.debug("Navigator input %r at %s", choice, current)

            if choice in (SELECT_CURRENT, ""):
                return SkillSelection(path=current)

            if choice == GO_UP:
                if current == root:
                    self.tui.show_warning("Already at base")
                else:
                    current = current.parent
                continue

            if choice.lower() == SKIP_LEVEL:
                if len(dirs) == 1:
                    current = current / dirs[0]
                else:
                    self.tui.show_warning("Cannot skip: multiple directories")
                continue

            if choice.lower() == QUIT:
                raise UserCancelled()

            index = _parse_index(choice)
            if index is not None and 1 <= index <= len(dirs):
                current = current / dirs[index - 1]
            else:
                self.tui.show_warning("Invalid choice")

    def _show_choices(self, dirs: list[str]) -> None:
        """Print the numbered subdirectories and control keys."""
        self.tui.show_plain("Select a directory to enter:")
        for i, name in enumerate(dirs, 1):
            self.tui.show_plain(f"  [{i}] {name}")
        for line in CONTROLS:
            self.tui.show_plain(line)


def _parse_index(choice: str) -> int | None:
    # Plain ASCII digits only; int() would also take "+1" and "1_0".
    if choice.isascii() and choice.isdigit():
        return int(choice)
    return None
