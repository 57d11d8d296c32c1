"""Git operations for fetching skill repositories."""

from __future__ import annotations

import logging
import os
import re
import shutil
from pathlib import Path

# Let a missing git binary surface as GitCommandNotFound instead of an
# ImportError raised while importing GitPython.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

from git import Git, Repo  # noqa: E402
from git.exc import GitCommandError, GitCommandNotFound  # noqa: E402

from expcat_skills.errors import EXIT_FETCH, SkillsError, ToolingError  # noqa: E402
from expcat_skills.types import FetchResult, GithubLocation  # noqa: E402

logger = logging.getLogger(__name__)

# Fallback when the remote's HEAD cannot be queried
DEFAULT_BRANCH = "main"

# `git sparse-checkout` with cone mode exists since Git 2.25
SPARSE_CHECKOUT_MIN_VERSION = (2, 25)

_SYMREF_RE = re.compile(r"ref: refs/heads/(\S+)")
_VERSION_RE = re.compile(r"git version (\d+)\.(\d+)")

STRATEGY_SPARSE = "sparse"
STRATEGY_FULL = "full"


class GitOpsError(SkillsError):
    """Error during git operations."""

    exit_code = EXIT_FETCH


class GitOps:
    """Runs the local git binary to resolve and fetch repositories."""

    def __init__(self, git: Git | None = None) -> None:
        """Initialize git operations.

        Args:
            git: Command wrapper used for repository-independent commands.

        Note:
            Prefer using factory method `create_default()` for construction.
        """
        self.git = git or Git()

    @classmethod
    def create_default(cls) -> GitOps:
        """Create git operations bound to the git found on PATH.

        Returns:
            Configured GitOps instance.
        """
        return cls()

    def require_git(self) -> None:
        """Fail if git cannot be executed.

        Raises:
            ToolingError: If git is missing or broken.
        """
        try:
            self.git.version()
        except (GitCommandNotFound, GitCommandError, OSError) as e:
            raise ToolingError("Missing required command: git") from e

    def get_version(self) -> tuple[int, int]:
        """Get the local git version.

        Returns:
            ``(major, minor)``, or ``(0, 0)`` if it cannot be determined.
        """
        try:
            output = self.git.version()
        except (GitCommandNotFound, GitCommandError, OSError) as e:
            logger.debug("git --version failed: %s", e)
            return (0, 0)
        match = _VERSION_RE.search(output)
        if not match:
            return (0, 0)
        return (int(match.group(1)), int(match.group(2)))

    def supports_sparse_checkout(self) -> bool:
        """Check whether cone-mode sparse checkout is available.

        Returns:
            True if git is at least 2.25.
        """
        return self.get_version() >= SPARSE_CHECKOUT_MIN_VERSION

    def default_branch(self, owner: str, repo: str) -> str:
        """Query the remote's symbolic HEAD for its default branch.

        Args:
            owner: Repository owner.
            repo: Repository name.

        Returns:
            Default branch name, or ``main`` on any failure.
        """
        url = f"https://github.com/{owner}/{repo}.git"
        try:
            output = self.git.ls_remote("--symref", url, "HEAD")
        except (GitCommandNotFound, GitCommandError, OSError) as e:
            logger.debug("ls-remote failed for %s: %s", url, e)
            return DEFAULT_BRANCH

        match = _SYMREF_RE.search(output)
        if not match:
            logger.debug("No symbolic HEAD in ls-remote output for %s", url)
            return DEFAULT_BRANCH
        return match.group(1)

    def fetch(self, location: GithubLocation, dest: Path) -> FetchResult:
        """Fetch a repository, sparse when possible, full otherwise.

        A failed sparse checkout is removed and followed by exactly one
        full clone attempt.

        Args:
            location: Parsed fetch coordinates.
            dest: Directory to check out into (created if missing).

        Returns:
            FetchResult describing the checkout.

        Raises:
            GitOpsError: If the full clone fails.
        """
        if location.subpath and self.supports_sparse_checkout():
            logger.info("Using sparse-checkout to minimize download...")
            if self.sparse_checkout(location, dest):
                return FetchResult(tmp_root=dest, subpath=location.subpath, strategy=STRATEGY_SPARSE)
            logger.warning("Sparse-checkout failed, falling back to full clone...")
            self._cleanup_failed_clone(dest)

        self.full_clone(location, dest)
        return FetchResult(tmp_root=dest, subpath=location.subpath, strategy=STRATEGY_FULL)

    def sparse_checkout(self, location: GithubLocation, dest: Path) -> bool:
        """Check out only ``location.subpath`` with a depth-1 pull.

        Args:
            location: Parsed fetch coordinates with a non-empty subpath.
            dest: Directory to initialize.

        Returns:
            True on success, False if any step failed.
        """
        try:
            repo = Repo.init(dest)
            repo.create_remote("origin", location.clone_url)
            repo.git.sparse_checkout("init", "--cone")
            repo.git.sparse_checkout("set", location.subpath)
            repo.git.pull("--depth=1", "origin", location.ref)
        except (GitCommandError, OSError, ValueError) as e:
            logger.debug("Sparse checkout of %s failed: %s", location, e)
            return False
        logger.debug("Sparse checkout of %s succeeded", location)
        return True

    def full_clone(self, location: GithubLocation, dest: Path) -> Path:
        """Clone a single branch with depth 1 and no blobs up front.

        Args:
            location: Parsed fetch coordinates.
            dest: Directory to clone into.

        Returns:
            Path to the clone.

        Raises:
            GitOpsError: If the clone fails.
        """
        try:
            Repo.clone_from(
                location.clone_url,
                dest,
                depth=1,
                filter="blob:none",
                single_branch=True,
                branch=location.ref,
            )
        except (GitCommandError, OSError) as e:
            raise GitOpsError(f"Failed to clone repository {location.slug}: {e}") from e
        logger.debug("Cloned %s at %s", location.slug, location.ref)
        return dest

    def _cleanup_failed_clone(self, path: Path) -> None:
        """Remove a partial checkout after a failed attempt.

        Args:
            path: Path to clean up.
        """
        if path.exists():
            shutil.rmtree(path, ignore_errors=True)
