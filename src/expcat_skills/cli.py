"""CLI command using Typer."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console

from expcat_skills import __version__
from expcat_skills.context import create_context
from expcat_skills.errors import EXIT_CANCELLED, ElevatedRelaunch, InputError, SkillsError
from expcat_skills.install import Installer
from expcat_skills.logsession import LogSession, default_log_dir, purge_logs
from expcat_skills.uninstall import UninstallScanner

if TYPE_CHECKING:
    from expcat_skills.context import AppContext

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="expcat-skills",
    help="Install agent skills from GitHub into AI coding tools.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console(highlight=False)

EPILOG = """Examples:

  expcat-skills https://github.com/expcat/Tigercat/tree/main/skills/tigercat

  expcat-skills --uninstall

  expcat-skills --uninstall --dry-run
"""


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"expcat-skills v{__version__}")
        raise typer.Exit()


def clean_logs() -> None:
    """Delete every retained log file."""
    log_dir = default_log_dir()
    removed = purge_logs(log_dir)
    logger.debug("Removed %d log file(s)", len(removed))
    console.print(f"Logs cleaned: {log_dir}")


def execute(
    ctx: AppContext,
    location: str | None,
    uninstall: bool = False,
    clean_skills: bool = False,
    legacy: bool = False,
) -> None:
    """Run the selected flow inside a log session.

    Args:
        ctx: Application context.
        location: GitHub path or URL (required for installs).
        uninstall: Run the interactive uninstall instead.
        clean_skills: Remove empty tool skills directories instead.
        legacy: Copy into each tool directory instead of linking.

    Raises:
        typer.Exit: With the exit code of the fatal condition, if any.
    """
    try:
        session = LogSession.start()
    except OSError as e:
        ctx.tui.show_error(f"Cannot create log file: {e}")
        raise typer.Exit(1) from e

    with session:
        ctx.log_session = session
        logger.debug(
            "expcat-skills v%s dry_run=%s elevated=%s", __version__, ctx.dry_run, ctx.elevated
        )
        try:
            if clean_skills:
                UninstallScanner(ctx).clean_empty_dirs()
            elif uninstall:
                UninstallScanner(ctx).run()
            elif location:
                Installer.create(ctx).run(location, legacy=legacy)
            else:
                raise InputError("Missing GitHub path or URL")
        except ElevatedRelaunch as e:
            logger.info("%s", e)
            raise typer.Exit(e.exit_code) from e
        except SkillsError as e:
            if e.exit_code == EXIT_CANCELLED:
                ctx.tui.show_warning(str(e))
            else:
                ctx.tui.show_error(str(e))
            raise typer.Exit(e.exit_code) from e
        except OSError as e:
            logger.exception("Unexpected filesystem error")
            ctx.tui.show_error(str(e))
            raise typer.Exit(1) from e
        except (KeyboardInterrupt, EOFError) as e:
            ctx.tui.show_warning("Cancelled by user")
            raise typer.Exit(EXIT_CANCELLED) from e


@app.command(epilog=EPILOG)
def main(
    location: Annotated[
        str | None,
        typer.Argument(help="GitHub path (owner/repo/...) or URL", show_default=False),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-d", help="Preview only, no changes")
    ] = False,
    uninstall: Annotated[
        bool, typer.Option("--uninstall", "-u", help="Interactively uninstall installed skills")
    ] = False,
    clean_logs_flag: Annotated[
        bool, typer.Option("--clean-logs", help="Remove all installer logs")
    ] = False,
    clean_skills: Annotated[
        bool, typer.Option("--clean-skills", help="Remove empty tool skills directories")
    ] = False,
    legacy: Annotated[
        bool,
        typer.Option("--legacy", help="Copy into each tool directory instead of linking"),
    ] = False,
    elevated: Annotated[
        bool, typer.Option("--elevated", hidden=True, envvar="EXPCAT_SKILLS_ELEVATED")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version number",
        ),
    ] = False,
) -> None:
    """Install a skill directory from a GitHub repository."""
    if clean_logs_flag:
        clean_logs()
        return

    ctx = create_context(dry_run=dry_run, elevated=elevated, argv=sys.argv[1:])
    execute(
        ctx,
        location,
        uninstall=uninstall,
        clean_skills=clean_skills,
        legacy=legacy,
    )


if __name__ == "__main__":
    app()
