"""Exception hierarchy and exit codes.

Components raise these; only the CLI turns them into process exit codes.
"""

from __future__ import annotations

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INPUT = 2
EXIT_TOOLING = 3
EXIT_FETCH = 4
EXIT_ELEVATION = 5
EXIT_CANCELLED = 130


class SkillsError(Exception):
    """Base error for fatal installer conditions."""

    exit_code = EXIT_FAILURE


class InputError(SkillsError):
    """Malformed user input (location string, rename target, ...)."""

    exit_code = EXIT_INPUT


class ToolingError(SkillsError):
    """A required external executable is unavailable."""

    exit_code = EXIT_TOOLING


class ElevationError(SkillsError):
    """Symlink creation is not permitted and elevation cannot fix it."""

    exit_code = EXIT_ELEVATION


class UserCancelled(SkillsError):
    """The operator aborted the flow."""

    exit_code = EXIT_CANCELLED

    def __init__(self, message: str = "Cancelled by user") -> None:
        super().__init__(message)


class ElevatedRelaunch(SkillsError):
    """The work continues in an elevated child process; this one stops."""

    exit_code = EXIT_OK

    def __init__(self, message: str = "Continuing in elevated process") -> None:
        super().__init__(message)
