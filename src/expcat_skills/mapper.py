"""Mapping of tool skills directories onto the shared skill store."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from expcat_skills.errors import ElevatedRelaunch, ElevationError
from expcat_skills.types import LinkState

if TYPE_CHECKING:
    from collections.abc import Sequence

    from expcat_skills.context import AppContext
    from expcat_skills.protocols import InstallTarget

logger = logging.getLogger(__name__)


def display_path(path: Path) -> str:
    """Shorten the home directory to ``~`` for messages."""
    home = str(Path.home())
    text = str(path)
    if text == home or text.startswith(home + os.sep):
        return "~" + text[len(home) :]
    return text


def _absolute(path: Path) -> str:
    return os.path.normcase(os.path.abspath(path))


class TargetMapper:
    """Links tool skills directories to the shared store.

    A tool directory is ``mapped`` when it is a link resolving to the shared
    root; mapping a mapped target is a no-op.
    """

    def __init__(self, ctx: AppContext) -> None:
        """Initialize mapper.

        Args:
            ctx: Application context.
        """
        self.ctx = ctx

    @property
    def shared_root(self) -> Path:
        """Canonical shared skill store."""
        return self.ctx.shared_root

    def resolve_link(self, link: Path) -> Path:
        """Resolve a link's stored target to an absolute path.

        Args:
            link: Path of an existing link.

        Returns:
            Absolute target; relative targets are taken from the link's parent.
        """
        target = self.ctx.filesystem.readlink(link)
        if not target.is_absolute():
            target = link.parent / target
        return Path(os.path.abspath(target))

    def link_state(self, target: InstallTarget) -> LinkState:
        """Classify a target's skills directory.

        Args:
            target: Install target to inspect.

        Returns:
            LinkState for the target's skills directory.
        """
        fs = self.ctx.filesystem
        path = target.skills_dir
        if fs.is_symlink(path):
            try:
                resolved = self.resolve_link(path)
            except OSError as e:
                logger.debug("Cannot read link %s: %s", path, e)
                return LinkState.CONFLICTING
            if _absolute(resolved) == _absolute(self.shared_root):
                return LinkState.MAPPED
            return LinkState.CONFLICTING
        if fs.exists(path):
            return LinkState.CONFLICTING
        return LinkState.UNMAPPED

    def available_targets(self, targets: Sequence[InstallTarget]) -> list[InstallTarget]:
        """Filter out targets that are already mapped.

        Args:
            targets: Candidate targets.

        Returns:
            Targets whose state is not ``mapped``.
        """
        return [t for t in targets if self.link_state(t) is not LinkState.MAPPED]

    def ensure_link_capability(self, targets: Sequence[InstallTarget]) -> None:
        """Make sure links can be created before any target is touched.

        Runs once per install, ahead of conflict prompts. Skipped for an
        empty target set, under dry-run, and on hosts without restrictions.

        Args:
            targets: Targets about to be mapped.

        Raises:
            ElevationError: If links are denied and elevation cannot help.
            ElevatedRelaunch: If an elevated copy of this process took over.
        """
        host = self.ctx.host
        if not targets or self.ctx.dry_run or not host.restricts_symlinks:
            return
        if host.can_create_symlink():
            return

        if self.ctx.elevated:
            raise ElevationError(
                "Unable to create symlink. Please enable Developer Mode "
                "or run as Administrator and retry."
            )

        self.ctx.tui.show_warning("Symlink permission required. Requesting elevation...")
        if not host.request_elevated_relaunch(self.ctx.argv):
            raise ElevationError(
                "Elevation was cancelled or failed. Please run as Administrator and retry."
            )
        raise ElevatedRelaunch()

    def map_target(self, target: InstallTarget) -> bool:
        """Link one target's skills directory to the shared root.

        Args:
            target: Target to map.

        Returns:
            True if the target is mapped (or would be under dry-run), False
            if the operator declined replacing an existing directory.
        """
        ctx = self.ctx
        tui = ctx.tui
        fs = ctx.filesystem
        path = target.skills_dir
        root = self.shared_root

        state = self.link_state(target)
        if state is LinkState.MAPPED:
            tui.show_info(f"{target.name} already mapped to {display_path(root)}")
            return True

        if state is LinkState.CONFLICTING:
            replace = tui.confirm(
                f"{target.name} skills directory exists. Replace with symlink?",
                default=False,
            )
            if not replace:
                tui.show_warning(f"Skipped mapping for {target.name}.")
                return False
            if ctx.dry_run:
                tui.show_info(f"[dry-run] Would remove {path}")
            else:
                fs.remove(path)
                tui.show_info(f"Removed {path}")

        if ctx.dry_run:
            tui.show_info(f"[dry-run] Would link {path} -> {root}")
            return True

        fs.mkdir(root, parents=True, exist_ok=True)
        fs.mkdir(path.parent, parents=True, exist_ok=True)
        fs.symlink_dir(root, path)
        tui.show_success(f"Linked {path} -> {root}")
        return True

    def map_targets(self, targets: Sequence[InstallTarget]) -> list[str]:
        """Map several targets; one failure does not stop the rest.

        Args:
            targets: Targets to map.

        Returns:
            Names of targets that ended up mapped.
        """
        mapped: list[str] = []
        for target in targets:
            try:
                if self.map_target(target):
                    mapped.append(target.name)
            except OSError as e:
                logger.exception("Mapping failed for %s", target.name)
                self.ctx.tui.show_error(f"Failed to map {target.name}: {e}")
        return mapped
