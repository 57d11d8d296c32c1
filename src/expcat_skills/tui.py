"""Rich console output and prompts for the interactive flows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TextIO, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TUI:
    """Text User Interface for expcat-skills.

    Every message shown is mirrored to the session log. Prompts read from
    ``stream`` when one is given, which lets tests script operator input.
    """

    def __init__(self, console: Console | None = None, stream: TextIO | None = None) -> None:
        """Initialize TUI.

        Args:
            console: Console to render to. Defaults to stdout.
            stream: Input stream for prompts. Defaults to stdin.
        """
        self.console = console or Console(highlight=False)
        self.stream = stream

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        logger.info("[success] %s", message)
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        logger.error("%s", message)
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        logger.warning("%s", message)
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def show_info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        logger.info("%s", message)
        self.console.print(f"[blue]i[/blue] {escape(message)}")

    def show_plain(self, message: str) -> None:
        """Print a line without a status marker or log entry."""
        self.console.print(escape(message))

    def show_preview(self, lines: Sequence[str]) -> None:
        """Display the planned actions before confirmation.

        Args:
            lines: One line per planned action.
        """
        for line in lines:
            logger.info("preview %s", line)
        self.console.print(
            Panel(escape("\n".join(lines)), title="Preview", border_style="blue", expand=False)
        )

    def ask(self, message: str) -> str:
        """Read one line of input.

        Args:
            message: Prompt text.

        Returns:
            The stripped answer ("" for an empty line or end of input).
        """
        answer = Prompt.ask(
            escape(message),
            console=self.console,
            default="",
            show_default=False,
            stream=self.stream,
        )
        return answer.strip()

    def confirm(self, message: str, default: bool = False) -> bool:
        """Show confirmation prompt.

        Args:
            message: Confirmation message.
            default: Default response.

        Returns:
            User's response.
        """
        return Confirm.ask(
            escape(message), console=self.console, default=default, stream=self.stream
        )

    def select_many(
        self,
        message: str,
        items: Sequence[T],
        label: Callable[[T], str] = str,
    ) -> list[T]:
        """Prompt for a subset of items by number.

        Accepts comma or space separated numbers, ``a`` for all and an empty
        answer for none. Invalid answers re-prompt.

        Args:
            message: Prompt title.
            items: Items to choose from.
            label: Renders an item for display.

        Returns:
            Selected items in list order, without duplicates.
        """
        if not items:
            return []

        self.console.print(f"\n[bold]{escape(message)}[/bold]")
        for i, item in enumerate(items, 1):
            self.console.print(f"  [{i}] {escape(label(item))}")

        while True:
            answer = self.ask("Numbers (comma-separated, 'a' for all, empty for none)")
            if not answer:
                return []
            if answer.lower() == "a":
                return list(items)
            indexes = _parse_indexes(answer, len(items))
            if indexes is None:
                self.show_warning("Invalid choice")
                continue
            return [items[i - 1] for i in indexes]


def _parse_indexes(answer: str, count: int) -> list[int] | None:
    """Parse a 1-based index list.

    Args:
        answer: Raw answer such as ``"1, 3 4"``.
        count: Number of selectable items.

    Returns:
        Sorted unique indexes, or None if any token is invalid.
    """
    tokens = answer.replace(",", " ").split()
    indexes: set[int] = set()
    for token in tokens:
        if not (token.isascii() and token.isdigit()):
            return None
        index = int(token)
        if not 1 <= index <= count:
            return None
        indexes.add(index)
    return sorted(indexes)
