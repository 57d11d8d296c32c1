"""Operating-system capabilities for symlink creation and elevation.

Windows only lets privileged processes (or Developer Mode) create symlinks,
so that host probes and relaunches itself elevated. Other hosts need
neither and use the no-op implementation.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

ELEVATED_FLAG = "--elevated"

# Windows reports a missing SeCreateSymbolicLinkPrivilege as winerror 1314.
_ERROR_PRIVILEGE_NOT_HELD = 1314


def is_permission_error(error: OSError) -> bool:
    """Check whether an OSError means "not allowed" rather than "broken".

    Args:
        error: Error raised by a link attempt.

    Returns:
        True for EPERM/EACCES class failures.
    """
    if isinstance(error, PermissionError):
        return True
    if getattr(error, "winerror", None) == _ERROR_PRIVILEGE_NOT_HELD:
        return True
    return error.errno in (errno.EPERM, errno.EACCES)


def probe_symlink(scratch_root: Path | None = None) -> bool:
    """Create and delete a throwaway directory link.

    Args:
        scratch_root: Parent for the probe directory. Defaults to the
            system temp dir.

    Returns:
        True if the link could be created.

    Raises:
        OSError: For failures that are not permission-related.
    """
    tmp_dir = Path(tempfile.mkdtemp(prefix="expcat-skills-link-", dir=scratch_root))
    target_dir = tmp_dir / "target"
    link_path = tmp_dir / "link"
    target_dir.mkdir()
    try:
        os.symlink(target_dir, link_path, target_is_directory=True)
        return True
    except OSError as e:
        if is_permission_error(e):
            logger.debug("Symlink probe denied: %s", e)
            return False
        raise
    finally:
        # rmtree removes the link itself and never follows it.
        shutil.rmtree(tmp_dir, ignore_errors=True)


def _ps_quote(value: str) -> str:
    return "'" + str(value).replace("'", "''") + "'"


def _ps_array(values: list[str]) -> str:
    return "@(" + ",".join(_ps_quote(v) for v in values) + ")"


class PosixHost:
    """Host without symlink restrictions (Linux, macOS)."""

    restricts_symlinks = False

    def can_create_symlink(self) -> bool:
        """Symlinks are always allowed."""
        return True

    def request_elevated_relaunch(self, args: list[str]) -> bool:
        """Elevation is never needed; nothing is relaunched."""
        return False


class WindowsHost:
    """Windows host, where symlink creation may require elevation."""

    restricts_symlinks = True

    def can_create_symlink(self) -> bool:
        """Probe symlink capability with a throwaway link.

        Returns:
            True if this process may create directory symlinks.
        """
        return probe_symlink()

    def request_elevated_relaunch(self, args: list[str]) -> bool:
        """Relaunch ``python -m expcat_skills <args> --elevated`` via UAC.

        Args:
            args: Original command-line arguments (without program name).

        Returns:
            True if PowerShell reported success.
        """
        argv = ["-m", "expcat_skills", *args]
        if ELEVATED_FLAG not in argv:
            argv.append(ELEVATED_FLAG)
        command = (
            f"Start-Process -FilePath {_ps_quote(sys.executable)} "
            f"-ArgumentList {_ps_array(argv)} "
            f"-WorkingDirectory {_ps_quote(os.getcwd())} -Verb RunAs"
        )
        logger.debug("Elevation command: %s", command)
        try:
            result = subprocess.run(
                ["powershell", "-NoProfile", "-Command", command],
                check=False,
            )
        except OSError as e:
            logger.debug("Could not start PowerShell: %s", e)
            return False
        return result.returncode == 0


def get_host() -> PosixHost | WindowsHost:
    """Get the host implementation for the running platform."""
    if sys.platform == "win32":
        return WindowsHost()
    return PosixHost()
