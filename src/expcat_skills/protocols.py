"""Protocol definitions for core abstractions.

This module defines abstract interfaces (Protocols) for the services the
install and uninstall flows depend on. Designing to interfaces enables:
- Loose coupling between components
- Easy substitution of test doubles
- Clear contracts for implementations

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from expcat_skills.types import FetchResult, GithubLocation


@runtime_checkable
class SourceRepository(Protocol):
    """Protocol for git operations against the remote repository.

    Implementations probe the local git binary, resolve default branches and
    materialize repository content into a scratch directory.
    """

    def require_git(self) -> None:
        """Fail if the git executable is unavailable.

        Raises:
            ToolingError: If git cannot be run.
        """
        ...

    def default_branch(self, owner: str, repo: str) -> str:
        """Resolve the remote's default branch.

        Args:
            owner: Repository owner.
            repo: Repository name.

        Returns:
            Branch name, ``main`` when the remote cannot be queried.
        """
        ...

    def fetch(self, location: GithubLocation, dest: Path) -> FetchResult:
        """Materialize the repository (or its subpath) into ``dest``.

        Args:
            location: Parsed fetch coordinates.
            dest: Scratch directory for the checkout.

        Returns:
            Description of the checkout.

        Raises:
            GitOpsError: If every strategy failed.
        """
        ...


@runtime_checkable
class HostPlatform(Protocol):
    """Protocol for operating-system capabilities around symlinks.

    Hosts that allow unprivileged symlink creation implement both methods
    as no-ops; hosts that gate it probe and relaunch elevated.
    """

    restricts_symlinks: bool

    def can_create_symlink(self) -> bool:
        """Check whether this process may create directory symlinks.

        Returns:
            True if a throwaway link could be created.
        """
        ...

    def request_elevated_relaunch(self, args: list[str]) -> bool:
        """Start this program again with elevated privileges.

        Args:
            args: Command-line arguments for the relaunched process.

        Returns:
            True if the elevated process was started and succeeded.
        """
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts filesystem access to enable testing without real I/O.
    Implementations handle inspection, copying, removal and linking.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists (dangling links count as existing).

        Args:
            path: Path to check.

        Returns:
            True if something occupies the path, False otherwise.
        """
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory (following links).

        Args:
            path: Path to check.

        Returns:
            True if path is a directory, False otherwise.
        """
        ...

    def is_symlink(self, path: Path) -> bool:
        """Check if a path is a symbolic link or junction.

        Args:
            path: Path to check.

        Returns:
            True if path is a link, False otherwise.
        """
        ...

    def readlink(self, path: Path) -> Path:
        """Return the raw target of a link.

        Args:
            path: Link path.

        Returns:
            Link target as stored (may be relative).
        """
        ...

    def list_dir(self, path: Path) -> list[str]:
        """List entry names of a directory.

        Args:
            path: Directory to list.

        Returns:
            Entry names in arbitrary order.
        """
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory.

        Args:
            path: Path to create.
            parents: Create parent directories if needed.
            exist_ok: Don't raise if directory exists.
        """
        ...

    def remove(self, path: Path) -> None:
        """Remove a file, link or directory tree without following links.

        Args:
            path: Path to remove.
        """
        ...

    def copytree(self, src: Path, dst: Path, ignore: Sequence[str] = ()) -> None:
        """Copy a directory tree.

        Args:
            src: Source directory.
            dst: Destination directory.
            ignore: Glob patterns of entries to leave out.
        """
        ...

    def symlink_dir(self, target: Path, link: Path) -> None:
        """Create a directory link at ``link`` pointing to ``target``.

        Args:
            target: Existing directory the link resolves to.
            link: Path of the new link.
        """
        ...


@runtime_checkable
class InstallTarget(Protocol):
    """Protocol for a supported AI coding tool."""

    name: str
    display_name: str

    @property
    def base_dir(self) -> Path:
        """Get the tool's configuration directory."""
        ...

    @property
    def skills_dir(self) -> Path:
        """Get the directory the tool loads skills from."""
        ...

    def is_available(self) -> bool:
        """Check if the tool appears to be installed."""
        ...
