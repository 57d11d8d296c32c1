"""End-to-end installation of a skill from a GitHub location."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from expcat_skills.conflicts import ConflictResolver
from expcat_skills.errors import SkillsError, UserCancelled
from expcat_skills.location import parse_location
from expcat_skills.mapper import TargetMapper, display_path
from expcat_skills.navigator import TreeNavigator
from expcat_skills.targets import all_targets
from expcat_skills.types import LinkState
from expcat_skills.validation import read_skill_metadata

if TYPE_CHECKING:
    from collections.abc import Sequence

    from expcat_skills.context import AppContext
    from expcat_skills.protocols import InstallTarget
    from expcat_skills.types import SkillSelection

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "expcat-skills-"

# Never copied out of a checkout
COPY_IGNORE = (".git",)


class Installer:
    """Sequences fetch, navigation, preview, copy and mapping.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.
    """

    def __init__(
        self,
        ctx: AppContext,
        navigator: TreeNavigator,
        resolver: ConflictResolver,
        mapper: TargetMapper,
    ) -> None:
        """Initialize installer with required dependencies.

        Args:
            ctx: Application context.
            navigator: Skill directory picker.
            resolver: Destination conflict policy.
            mapper: Tool directory linker.
        """
        self.ctx = ctx
        self.navigator = navigator
        self.resolver = resolver
        self.mapper = mapper

    @classmethod
    def create(cls, ctx: AppContext) -> Installer:
        """Factory method for production instantiation.

        Args:
            ctx: Application context.

        Returns:
            Configured Installer instance.
        """
        return cls(
            ctx=ctx,
            navigator=TreeNavigator(ctx.tui),
            resolver=ConflictResolver(ctx),
            mapper=TargetMapper(ctx),
        )

    def run(self, raw_location: str, legacy: bool = False) -> None:
        """Install a skill from a GitHub path or URL.

        The scratch checkout is removed on every exit path, including
        cancellation and errors.

        Args:
            raw_location: GitHub path or URL.
            legacy: Copy into each tool directory instead of linking.

        Raises:
            SkillsError: On any fatal condition (see errors module).
        """
        ctx = self.ctx
        tui = ctx.tui

        ctx.gitops.require_git()
        location = parse_location(raw_location, ctx.gitops)
        tui.show_info(f"Repo: {location.slug} (ref: {location.ref})")
        if location.subpath:
            tui.show_info(f"Path: {location.subpath}")

        with tempfile.TemporaryDirectory(
            prefix=SCRATCH_PREFIX, ignore_cleanup_errors=True
        ) as scratch:
            tui.show_info("Downloading repository...")
            fetched = ctx.gitops.fetch(location, Path(scratch) / "checkout")
            logger.debug("Fetched %s using %s strategy", location, fetched.strategy)

            selection = self.navigator.select(fetched.base_path)
            if legacy:
                self._install_legacy(selection)
            else:
                self._install_unified(selection)

        tui.show_info("Temporary files cleaned up.")
        if ctx.log_session is not None:
            tui.show_info(f"Done. Log saved: {ctx.log_session.log_file}")
        else:
            tui.show_info("Done.")

    def select_targets(self, candidates: Sequence[InstallTarget]) -> list[InstallTarget]:
        """Let the operator pick install targets.

        Args:
            candidates: Targets on offer.

        Returns:
            Chosen targets (possibly empty).
        """
        return self.ctx.tui.select_many(
            "Select install targets:",
            candidates,
            label=_target_label,
        )

    def copy_skill(self, src: Path, dest_root: Path, skill_name: str) -> Path:
        """Copy a skill directory into ``dest_root`` after conflict resolution.

        Args:
            src: Selected skill directory.
            dest_root: Directory that receives the copy.
            skill_name: Name of the copied directory.

        Returns:
            Final destination path.
        """
        ctx = self.ctx
        dest = self.resolver.resolve(dest_root / skill_name)

        if ctx.dry_run:
            ctx.tui.show_info(f"[dry-run] Would copy {src} -> {dest}")
            return dest

        ctx.filesystem.mkdir(dest_root, parents=True, exist_ok=True)
        ctx.filesystem.copytree(src, dest, ignore=COPY_IGNORE)
        ctx.tui.show_success(f"Copied {src} -> {dest}")
        return dest

    def _check_selection(self, selection: SkillSelection) -> None:
        """Validate the chosen directory and report its metadata."""
        tui = self.ctx.tui
        if not selection.path.is_dir():
            raise SkillsError(f"Selected path not found: {selection.path}")

        metadata = read_skill_metadata(selection.path)
        for error in metadata.errors:
            tui.show_warning(error)
        if metadata.name:
            summary = metadata.name
            if metadata.description:
                summary = f"{summary}: {metadata.description}"
            tui.show_info(f"Skill: {summary}")

    def _confirm(self, preview: list[str]) -> None:
        """Show the preview and require confirmation.

        Raises:
            UserCancelled: If the operator declines.
        """
        self.ctx.tui.show_preview(preview)
        if not self.ctx.tui.confirm("Proceed?", default=False):
            raise UserCancelled()

    def _install_unified(self, selection: SkillSelection) -> None:
        """Copy into the shared store and link the chosen tools to it."""
        ctx = self.ctx
        fs = ctx.filesystem
        self._check_selection(selection)

        available = self.mapper.available_targets(all_targets())
        if available:
            targets = self.select_targets(available)
        else:
            ctx.tui.show_info("All targets already mapped. Skip target selection.")
            targets = []

        # Capability is settled once, before any per-target conflict prompt.
        self.mapper.ensure_link_capability(targets)

        root = ctx.shared_root
        store_dest = root / selection.name
        conflict = " (conflict)" if fs.exists(store_dest) else ""
        preview = [f"- agents -> {store_dest}{conflict}"]
        if not targets:
            preview.append("- mapping -> (none)")
        for target in targets:
            conflict = (
                " (conflict)"
                if self.mapper.link_state(target) is LinkState.CONFLICTING
                else ""
            )
            preview.append(f"- {target.name} -> {target.skills_dir} -> {root}{conflict}")
        self._confirm(preview)

        self.copy_skill(selection.path, root, selection.name)
        self.mapper.map_targets(targets)

    def _install_legacy(self, selection: SkillSelection) -> None:
        """Copy the skill physically into each chosen tool directory."""
        ctx = self.ctx
        fs = ctx.filesystem
        self._check_selection(selection)

        targets = self.select_targets(all_targets())
        if not targets:
            raise UserCancelled("No install targets selected")

        preview = []
        for target in targets:
            dest = target.skills_dir / selection.name
            conflict = " (conflict)" if fs.exists(dest) else ""
            preview.append(f"- {target.name} -> {dest}{conflict}")
        self._confirm(preview)

        for target in targets:
            try:
                self.copy_skill(selection.path, target.skills_dir, selection.name)
            except OSError as e:
                logger.exception("Copy failed for %s", target.name)
                ctx.tui.show_error(f"Failed to install to {target.name}: {e}")


def _target_label(target: InstallTarget) -> str:
    label = f"{target.name} ({display_path(target.skills_dir)})"
    if target.is_available():
        label = f"{label} - {target.display_name} detected"
    return label
