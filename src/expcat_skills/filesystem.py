"""Filesystem abstraction for testability.

This module provides a filesystem abstraction that enables testing
without real I/O operations. The RealFileSystem implementation
wraps standard library operations.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from expcat_skills.protocols import FileSystem


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path, os and shutil operations.
    Satisfies the FileSystem protocol structurally.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists, counting dangling links."""
        return os.path.lexists(path)

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return path.is_dir()

    def is_symlink(self, path: Path) -> bool:
        """Check if a path is a symbolic link or a Windows junction."""
        if path.is_symlink():
            return True
        isjunction = getattr(os.path, "isjunction", None)
        return bool(isjunction and isjunction(path))

    def readlink(self, path: Path) -> Path:
        """Return the raw target of a link."""
        return Path(os.readlink(path))

    def list_dir(self, path: Path) -> list[str]:
        """List entry names of a directory."""
        return os.listdir(path)

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def remove(self, path: Path) -> None:
        """Remove a path without following links."""
        if self.is_symlink(path):
            # Junctions are removed with rmdir, symlinks with unlink.
            if path.is_symlink():
                path.unlink()
            else:
                os.rmdir(path)
        elif path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink()

    def copytree(self, src: Path, dst: Path, ignore: Sequence[str] = ()) -> None:
        """Copy a directory tree, merging into an existing destination."""
        shutil.copytree(
            src,
            dst,
            symlinks=True,
            dirs_exist_ok=True,
            ignore=shutil.ignore_patterns(*ignore) if ignore else None,
        )

    def symlink_dir(self, target: Path, link: Path) -> None:
        """Create a directory symlink."""
        os.symlink(target, link, target_is_directory=True)


def is_effectively_empty(fs: FileSystem, path: Path) -> bool:
    """Check whether a directory holds nothing but hidden entries.

    Args:
        fs: Filesystem to inspect with.
        path: Directory to check.

    Returns:
        True if every entry name starts with ``.`` (e.g. ``.DS_Store``).
    """
    return all(name.startswith(".") for name in fs.list_dir(path))
