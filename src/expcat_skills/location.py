"""Parsing of GitHub paths and URLs into fetch coordinates."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from expcat_skills.errors import InputError
from expcat_skills.types import GithubLocation

if TYPE_CHECKING:
    from expcat_skills.protocols import SourceRepository

logger = logging.getLogger(__name__)

_HOST_PREFIX_RE = re.compile(r"^(?:https?://)?(?:www\.)?github\.com/", re.IGNORECASE)
_GIT_SUFFIX_RE = re.compile(r"\.git$")

TREE_MARKER = "tree"


def normalize_location(raw: str) -> str:
    """Strip scheme, host, surrounding slashes and a trailing ``.git``.

    Args:
        raw: User-supplied path or URL.

    Returns:
        ``owner/repo[/...]`` remainder.
    """
    text = _HOST_PREFIX_RE.sub("", raw.strip())
    text = text.strip("/")
    return _GIT_SUFFIX_RE.sub("", text)


def split_location(raw: str) -> tuple[str, str, str, str]:
    """Split a location string without touching the network.

    Args:
        raw: User-supplied path or URL.

    Returns:
        Tuple of (owner, repo, ref, subpath); ref is "" when unspecified.

    Raises:
        InputError: If owner or repo is missing.
    """
    pieces = normalize_location(raw).split("/")
    owner = pieces[0] if pieces else ""
    repo = pieces[1] if len(pieces) > 1 else ""
    if not owner or not repo:
        raise InputError(f"Invalid GitHub path: {raw}")

    rest = pieces[2:]
    ref = ""
    if TREE_MARKER in rest:
        tree_idx = rest.index(TREE_MARKER)
        if tree_idx + 1 < len(rest):
            ref = rest[tree_idx + 1]
            subpath_parts = rest[tree_idx + 2 :]
        else:
            subpath_parts = rest
    else:
        subpath_parts = rest

    subpath = "/".join(part for part in subpath_parts if part)
    return owner, repo, ref, subpath


def parse_location(raw: str, gitops: SourceRepository) -> GithubLocation:
    """Parse a location and resolve an unspecified ref.

    An unspecified ref is resolved by querying the remote's default branch;
    that query blocks and falls back to ``main``.

    Args:
        raw: User-supplied path or URL.
        gitops: Repository operations used for the default-branch query.

    Returns:
        Fully resolved GithubLocation.

    Raises:
        InputError: If owner or repo is missing.
    """
    owner, repo, ref, subpath = split_location(raw)
    if not ref:
        ref = gitops.default_branch(owner, repo)
        logger.debug("Resolved default branch of %s/%s: %s", owner, repo, ref)
    return GithubLocation(owner=owner, repo=repo, ref=ref, subpath=subpath)
