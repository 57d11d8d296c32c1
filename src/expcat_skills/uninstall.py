"""Discovery and removal of installed skills."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from expcat_skills.filesystem import is_effectively_empty
from expcat_skills.mapper import display_path
from expcat_skills.targets import all_targets
from expcat_skills.types import UninstallCandidate

if TYPE_CHECKING:
    from expcat_skills.context import AppContext
    from expcat_skills.protocols import InstallTarget

logger = logging.getLogger(__name__)

# Label of the shared store in scan results
SHARED_STORE_LABEL = "agents"


class UninstallScanner:
    """Finds installed skills and deletes the ones the operator picks."""

    def __init__(self, ctx: AppContext, targets: list[InstallTarget] | None = None) -> None:
        """Initialize scanner.

        Args:
            ctx: Application context.
            targets: Tools to scan. Defaults to every supported tool.
        """
        self.ctx = ctx
        self.targets = targets if targets is not None else all_targets()

    def _roots(self) -> list[tuple[str, Path]]:
        roots = [(SHARED_STORE_LABEL, self.ctx.shared_root)]
        roots.extend((t.name, t.skills_dir) for t in self.targets)
        return roots

    def scan(self) -> list[UninstallCandidate]:
        """List installed skills.

        Scans the shared store, then each tool directory. Hidden and empty
        directories are skipped, and a directory reachable through several
        roots (a tool linked to the store) is reported once.

        Returns:
            Candidates in scan order.
        """
        fs = self.ctx.filesystem
        seen: set[str] = set()
        results: list[UninstallCandidate] = []

        for tool, root in self._roots():
            if not fs.is_dir(root):
                continue
            for name in sorted(fs.list_dir(root)):
                path = root / name
                if name.startswith(".") or not fs.is_dir(path):
                    continue
                try:
                    if is_effectively_empty(fs, path):
                        continue
                except OSError as e:
                    logger.debug("Cannot list %s: %s", path, e)
                    continue
                real = os.path.normcase(os.path.realpath(path))
                if real in seen:
                    continue
                seen.add(real)
                results.append(UninstallCandidate(tool=tool, name=name, path=path))

        return results

    def delete(self, candidates: list[UninstallCandidate]) -> list[UninstallCandidate]:
        """Delete candidates independently of one another.

        Args:
            candidates: Skills to delete.

        Returns:
            Candidates that were deleted (or would be under dry-run).
        """
        ctx = self.ctx
        deleted: list[UninstallCandidate] = []
        for candidate in candidates:
            if ctx.dry_run:
                ctx.tui.show_info(f"[dry-run] Would delete {candidate.path}")
                deleted.append(candidate)
                continue
            try:
                if ctx.filesystem.exists(candidate.path):
                    ctx.filesystem.remove(candidate.path)
            except OSError as e:
                logger.exception("Deletion failed for %s", candidate.path)
                ctx.tui.show_error(f"Failed to delete {candidate.path}: {e}")
                continue
            ctx.tui.show_success(f"Deleted {candidate.path}")
            deleted.append(candidate)
        return deleted

    def run(self) -> list[UninstallCandidate]:
        """Interactive uninstall: scan, select, confirm, delete.

        Returns:
            Candidates that were deleted; empty if nothing was selected,
            nothing was found, or the operator declined.
        """
        tui = self.ctx.tui
        tui.show_info("Scanning installed skills...")
        candidates = self.scan()
        if not candidates:
            tui.show_warning("No installed skills found.")
            return []

        selected = tui.select_many(
            "Select skills to uninstall:",
            candidates,
            label=lambda c: f"{c.tool} / {c.name} ({display_path(c.path)})",
        )
        if not selected:
            tui.show_warning("No skills selected.")
            return []

        tui.show_plain("\nSelected for removal:")
        for candidate in selected:
            tui.show_plain(f"  - {display_path(candidate.path)}")

        if not tui.confirm(f"Confirm deletion of {len(selected)} skill(s)?", default=False):
            tui.show_warning("Cancelled by user.")
            return []

        deleted = self.delete(selected)
        tui.show_info("Uninstall complete.")
        return deleted

    def clean_empty_dirs(self) -> list[Path]:
        """Remove tool skills directories that are empty.

        Links are removed as links; their targets are never touched.

        Returns:
            Directories removed (or that would be under dry-run).
        """
        ctx = self.ctx
        fs = ctx.filesystem
        removed: list[Path] = []

        for target in self.targets:
            path = target.skills_dir
            if not fs.is_dir(path):
                continue
            try:
                if not is_effectively_empty(fs, path):
                    continue
                if ctx.dry_run:
                    ctx.tui.show_info(f"[dry-run] Would remove empty dir: {path}")
                else:
                    fs.remove(path)
                    ctx.tui.show_success(f"Removed empty dir: {path}")
                removed.append(path)
            except OSError as e:
                ctx.tui.show_warning(f"Failed to check {path}: {e}")

        if not removed:
            ctx.tui.show_info("No empty tool skills directories found.")
        return removed
