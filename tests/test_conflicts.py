"""Tests for conflict resolution."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from expcat_skills.conflicts import ConflictResolver, validate_skill_name
from expcat_skills.context import AppContext
from expcat_skills.errors import InputError

from conftest import console_output


@pytest.fixture
def existing(tmp_path: Path) -> Path:
    """An occupied destination with one file inside."""
    dest = tmp_path / "store" / "tigercat"
    dest.mkdir(parents=True)
    (dest / "old.md").write_text("old\n")
    return dest


class TestValidateSkillName:
    """Tests for validate_skill_name."""

    def test_valid(self) -> None:
        """Test a plain name passes through."""
        assert validate_skill_name("tigercat-2") == "tigercat-2"

    def test_empty(self) -> None:
        """Test an empty name is rejected."""
        with pytest.raises(InputError, match="Name cannot be empty"):
            validate_skill_name("")

    @pytest.mark.parametrize("name", [".", "..", "a/b", "a\\b"])
    def test_path_like(self, name: str) -> None:
        """Test names that are not a single component are rejected."""
        with pytest.raises(InputError, match="Invalid name"):
            validate_skill_name(name)


class TestConflictResolver:
    """Tests for ConflictResolver.resolve."""

    def test_free_destination_is_unchanged(
        self, make_context: Callable[..., AppContext], tmp_path: Path
    ) -> None:
        """Test no prompt when the destination is free."""
        ctx = make_context()
        dest = tmp_path / "free"

        assert ConflictResolver(ctx).resolve(dest) == dest
        assert "Target exists" not in console_output(ctx.tui)

    def test_overwrite_removes(
        self, make_context: Callable[..., AppContext], existing: Path
    ) -> None:
        """Test overwrite deletes the existing destination."""
        ctx = make_context("o")

        result = ConflictResolver(ctx).resolve(existing)

        assert result == existing
        assert not existing.exists()
        assert f"Removed {existing}" in console_output(ctx.tui)

    def test_overwrite_dry_run_keeps_destination(
        self, make_context: Callable[..., AppContext], existing: Path
    ) -> None:
        """Test overwrite under dry-run only reports."""
        ctx = make_context("O", dry_run=True)

        result = ConflictResolver(ctx).resolve(existing)

        assert result == existing
        assert (existing / "old.md").exists()
        assert f"[dry-run] Would remove {existing}" in console_output(ctx.tui)

    def test_rename(self, make_context: Callable[..., AppContext], existing: Path) -> None:
        """Test rename returns a sibling path and leaves the original alone."""
        ctx = make_context("r", "tigercat-2")

        result = ConflictResolver(ctx).resolve(existing)

        assert result == existing.parent / "tigercat-2"
        assert (existing / "old.md").exists()

    def test_default_is_rename(
        self, make_context: Callable[..., AppContext], existing: Path
    ) -> None:
        """Test an empty answer chooses rename."""
        ctx = make_context("", "other")
        assert ConflictResolver(ctx).resolve(existing) == existing.parent / "other"

    def test_rename_into_conflict_prompts_again(
        self, make_context: Callable[..., AppContext], existing: Path
    ) -> None:
        """Test a rename onto an occupied name is resolved again."""
        taken = existing.parent / "taken"
        taken.mkdir()
        ctx = make_context("r", "taken", "r", "free")

        result = ConflictResolver(ctx).resolve(existing)

        assert result == existing.parent / "free"
        assert console_output(ctx.tui).count("Target exists") == 2

    def test_invalid_answer_reprompts(
        self, make_context: Callable[..., AppContext], existing: Path
    ) -> None:
        """Test an unknown action re-prompts."""
        ctx = make_context("x", "r", "fresh")

        result = ConflictResolver(ctx).resolve(existing)

        assert result == existing.parent / "fresh"
        assert "Invalid choice" in console_output(ctx.tui)

    def test_empty_rename_is_input_error(
        self, make_context: Callable[..., AppContext], existing: Path
    ) -> None:
        """Test an empty new name aborts with an input error."""
        ctx = make_context("r", "")

        with pytest.raises(InputError):
            ConflictResolver(ctx).resolve(existing)
        assert existing.exists()
