"""Tests for console output and prompts."""

from __future__ import annotations

import logging

import pytest

from expcat_skills.tui import _parse_indexes

from conftest import console_output, make_tui


class TestOutput:
    """Tests for status messages."""

    def test_markers(self) -> None:
        """Each message kind has its own marker."""
        tui = make_tui()
        tui.show_success("copied")
        tui.show_error("failed")
        tui.show_warning("careful")
        tui.show_info("note")

        output = console_output(tui)
        assert "✓ copied" in output
        assert "✗ failed" in output
        assert "! careful" in output
        assert "i note" in output

    def test_markup_is_not_interpreted(self) -> None:
        """Bracketed text such as [dry-run] is printed literally."""
        tui = make_tui()
        tui.show_info("[dry-run] Would copy [bold]a[/bold]")
        assert "[dry-run] Would copy [bold]a[/bold]" in console_output(tui)

    def test_messages_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Shown messages are mirrored to the log."""
        tui = make_tui()
        with caplog.at_level(logging.INFO, logger="expcat_skills"):
            tui.show_warning("Target exists: /x")
        assert "Target exists: /x" in caplog.text

    def test_preview_panel(self) -> None:
        """The preview lists every line in a titled panel."""
        tui = make_tui()
        tui.show_preview(["- agents -> /store/vue", "- mapping -> (none)"])

        output = console_output(tui)
        assert "Preview" in output
        assert "- agents -> /store/vue" in output
        assert "- mapping -> (none)" in output


class TestPrompts:
    """Tests for prompts reading scripted input."""

    def test_ask_strips(self) -> None:
        """Answers are stripped."""
        assert make_tui("  tigercat  ").ask("New name") == "tigercat"

    def test_ask_end_of_input(self) -> None:
        """End of input reads as an empty answer."""
        assert make_tui().ask("New name") == ""

    @pytest.mark.parametrize(("answer", "expected"), [("y", True), ("n", False), ("Y", True)])
    def test_confirm(self, answer: str, expected: bool) -> None:
        """Yes and no answers are recognised."""
        assert make_tui(answer).confirm("Proceed?") is expected

    def test_confirm_default_on_end_of_input(self) -> None:
        """End of input takes the default."""
        assert make_tui().confirm("Proceed?", default=False) is False


class TestSelectMany:
    """Tests for TUI.select_many."""

    def test_numbers(self) -> None:
        """Comma separated numbers select in list order."""
        assert make_tui("3, 1").select_many("Pick:", ["a", "b", "c"]) == ["a", "c"]

    def test_all(self) -> None:
        """'a' selects everything."""
        assert make_tui("A").select_many("Pick:", ["a", "b"]) == ["a", "b"]

    def test_empty_is_none(self) -> None:
        """An empty answer selects nothing."""
        assert make_tui("").select_many("Pick:", ["a", "b"]) == []

    def test_invalid_reprompts(self) -> None:
        """Invalid answers warn and ask again."""
        tui = make_tui("7", "x", "2")
        assert tui.select_many("Pick:", ["a", "b"]) == ["b"]
        assert console_output(tui).count("Invalid choice") == 2

    def test_labels(self) -> None:
        """Items are listed with their labels."""
        tui = make_tui("")
        tui.select_many("Pick:", [1, 2], label=lambda n: f"item-{n}")
        output = console_output(tui)
        assert "[1] item-1" in output
        assert "[2] item-2" in output

    def test_no_items(self) -> None:
        """Nothing to choose returns at once."""
        assert make_tui().select_many("Pick:", []) == []


class TestParseIndexes:
    """Tests for _parse_indexes."""

    @pytest.mark.parametrize(
        ("answer", "expected"),
        [
            ("1", [1]),
            ("2,1", [1, 2]),
            ("1 1 2", [1, 2]),
            ("0", None),
            ("4", None),
            ("1,x", None),
            ("+1", None),
            ("1_0", None),
        ],
    )
    def test_parse(self, answer: str, expected: list[int] | None) -> None:
        """Indexes are 1-based, unique and bounded."""
        assert _parse_indexes(answer, 3) == expected
