"""Shared data types for expcat-skills."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

__all__ = [
    "FetchResult",
    "GithubLocation",
    "LinkState",
    "SkillSelection",
    "UninstallCandidate",
]

GITHUB_URL = "https://github.com"


@dataclass(frozen=True)
class GithubLocation:
    """Fetch coordinates parsed from a GitHub path or URL.

    Attributes:
        owner: Repository owner.
        repo: Repository name (without ``.git``).
        ref: Branch, tag or commit to fetch.
        subpath: Directory inside the repository ("" for the root).
    """

    owner: str
    repo: str
    ref: str
    subpath: str = ""

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.owner or not self.repo:
            raise ValueError("owner and repo cannot be empty")

    @property
    def slug(self) -> str:
        """Return ``owner/repo``."""
        return f"{self.owner}/{self.repo}"

    @property
    def clone_url(self) -> str:
        """Return the HTTPS clone URL."""
        return f"{GITHUB_URL}/{self.owner}/{self.repo}.git"

    def __str__(self) -> str:
        text = f"{self.slug}/tree/{self.ref}"
        if self.subpath:
            text = f"{text}/{self.subpath}"
        return text


@dataclass(frozen=True)
class FetchResult:
    """A fetched repository checkout in a scratch directory.

    Attributes:
        tmp_root: Root of the checkout.
        subpath: Requested subdirectory ("" for the root).
        strategy: ``sparse`` or ``full``.
    """

    tmp_root: Path
    subpath: str = ""
    strategy: str = "full"

    @property
    def base_path(self) -> Path:
        """Directory navigation starts from."""
        if self.subpath:
            return self.tmp_root / self.subpath
        return self.tmp_root


@dataclass(frozen=True)
class SkillSelection:
    """Skill directory chosen by the navigator."""

    path: Path

    @property
    def name(self) -> str:
        """Skill name, the selected directory's basename."""
        return self.path.name


class LinkState(str, Enum):
    """Mapping state of a tool skills directory."""

    UNMAPPED = "unmapped"
    MAPPED = "mapped"
    CONFLICTING = "conflicting"


@dataclass(frozen=True)
class UninstallCandidate:
    """An installed skill found by the uninstall scan."""

    tool: str
    name: str
    path: Path
