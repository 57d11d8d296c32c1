"""Per-run log file with last-run-only retention."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

LOG_PREFIX = "install-"
LOG_SUFFIX = ".log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Package logger every module logs under.
PACKAGE_LOGGER = "expcat_skills"


def default_log_dir() -> Path:
    """Get the per-user log directory.

    Returns:
        Path to ~/.expcat-skills/logs
    """
    return Path.home() / ".expcat-skills" / "logs"


def _is_log_file(path: Path) -> bool:
    return path.is_file() and path.name.startswith(LOG_PREFIX) and path.name.endswith(LOG_SUFFIX)


class LogSession:
    """One append-only log file for the current invocation.

    Creating a session deletes every other log file in the directory, so at
    most one log is retained.
    """

    def __init__(self, log_dir: Path, log_file: Path, handler: logging.Handler) -> None:
        """Initialize a started session.

        Note:
            Use `start()` for construction.
        """
        self.log_dir = log_dir
        self.log_file = log_file
        self._handler = handler

    @classmethod
    def start(cls, log_dir: Path | None = None, now: datetime | None = None) -> LogSession:
        """Create the log file, purge older ones and attach a file handler.

        Args:
            log_dir: Directory for logs. Defaults to ~/.expcat-skills/logs.
            now: Timestamp for the file name (UTC). Defaults to now.

        Returns:
            Started LogSession.
        """
        log_dir = log_dir or default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d-%H%M%SZ")
        log_file = log_dir / f"{LOG_PREFIX}{stamp}{LOG_SUFFIX}"
        log_file.touch()

        for path in log_dir.iterdir():
            if path != log_file and _is_log_file(path):
                try:
                    path.unlink(missing_ok=True)
                except OSError as e:
                    logger.debug("Could not remove old log %s: %s", path, e)

        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.addHandler(handler)
        if package_logger.level == logging.NOTSET or package_logger.level > logging.DEBUG:
            package_logger.setLevel(logging.DEBUG)

        logger.debug("Log session started: %s", log_file)
        return cls(log_dir=log_dir, log_file=log_file, handler=handler)

    def close(self) -> None:
        """Detach and close the file handler."""
        logging.getLogger(PACKAGE_LOGGER).removeHandler(self._handler)
        self._handler.close()

    def __enter__(self) -> LogSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def purge_logs(log_dir: Path | None = None) -> list[Path]:
    """Delete every retained log file.

    Args:
        log_dir: Directory for logs. Defaults to ~/.expcat-skills/logs.

    Returns:
        Paths that were deleted.
    """
    log_dir = log_dir or default_log_dir()
    removed: list[Path] = []
    if not log_dir.is_dir():
        return removed
    for path in sorted(log_dir.iterdir()):
        if _is_log_file(path):
            path.unlink(missing_ok=True)
            removed.append(path)
    return removed
