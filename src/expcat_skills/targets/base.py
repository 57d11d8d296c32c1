"""Base install target with the shared home-relative layout.

Every supported tool keeps its skills in ``~/.<tool>/skills``. Subclasses
only name the tool; the directory layout is the template.
"""

from __future__ import annotations

from abc import ABC
from pathlib import Path


class BaseTarget(ABC):
    """Base class for install targets.

    Paths are computed on access so that a changed home directory is
    picked up.
    """

    name: str
    display_name: str

    @property
    def base_dir(self) -> Path:
        """Get the tool's configuration directory.

        Returns:
            Path to ~/.<name>/
        """
        return Path.home() / f".{self.name}"

    @property
    def skills_dir(self) -> Path:
        """Get the skills directory.

        Returns:
            Path to ~/.<name>/skills/
        """
        return self.base_dir / "skills"

    def is_available(self) -> bool:
        """Check if the tool appears to be installed.

        Returns:
            True if the tool's configuration directory exists.
        """
        return self.base_dir.exists()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(skills_dir={self.skills_dir!s})"
