"""SKILL.md frontmatter parsing for the install preview."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

SKILL_FILE = "SKILL.md"


class FrontmatterResult:
    """Result of parsing frontmatter from content."""

    __slots__ = ("data", "errors", "success")

    def __init__(self, data: str = "", errors: list[str] | None = None) -> None:
        """Initialize frontmatter result.

        Args:
            data: The parsed frontmatter content (raw YAML string).
            errors: List of parsing errors encountered.
        """
        self.data = data
        self.errors = errors or []
        self.success = len(self.errors) == 0


def parse_frontmatter(content: str) -> FrontmatterResult:
    """Extract the YAML frontmatter block from markdown content.

    Args:
        content: The full markdown content with optional frontmatter.

    Returns:
        FrontmatterResult with data (raw YAML string) and any errors.

    Example:
        >>> result = parse_frontmatter("---\\nname: test\\n---\\nBody")
        >>> result.success
        True
        >>> result.data
        'name: test'
    """
    if not content.startswith("---"):
        return FrontmatterResult(errors=["Content must have YAML frontmatter"])

    try:
        end_idx = content.index("---", 3)
        frontmatter = content[3:end_idx].strip()
        return FrontmatterResult(data=frontmatter)
    except ValueError:
        return FrontmatterResult(errors=["Invalid frontmatter: missing closing ---"])


@dataclass
class SkillMetadata:
    """What the preview shows about a selected skill directory."""

    name: str = ""
    description: str = ""
    errors: list[str] = field(default_factory=list)


def read_skill_metadata(skill_dir: Path) -> SkillMetadata:
    """Read name and description from a skill's SKILL.md.

    Problems are reported in ``errors`` rather than raised, since a skill
    without valid metadata can still be installed.

    Args:
        skill_dir: Selected skill directory.

    Returns:
        SkillMetadata; ``errors`` is non-empty if SKILL.md is missing or bad.
    """
    skill_file = skill_dir / SKILL_FILE
    if not skill_file.is_file():
        return SkillMetadata(errors=[f"No {SKILL_FILE} in {skill_dir.name}"])

    content = skill_file.read_text(encoding="utf-8", errors="replace")
    result = parse_frontmatter(content)
    if not result.success:
        return SkillMetadata(errors=result.errors)

    try:
        data = yaml.safe_load(result.data) or {}
    except yaml.YAMLError as e:
        return SkillMetadata(errors=[f"Invalid frontmatter YAML: {e}"])
    if not isinstance(data, dict):
        return SkillMetadata(errors=["Frontmatter must be a mapping"])

    errors = []
    if "name" not in data:
        errors.append("Frontmatter must include 'name' field")
    return SkillMetadata(
        name=str(data.get("name", "")),
        description=str(data.get("description", "") or ""),
        errors=errors,
    )
