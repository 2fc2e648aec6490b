# ffexplorer/utils/logger.py

import logging
import os
import time
from pathlib import Path
from platformdirs import user_log_dir

from ffexplorer.config import APP_NAME, APP_AUTHOR, DEBUG_ENV_VAR

_SECONDS_PER_DAY = 24 * 60 * 60


def default_log_dir() -> Path:
    return Path(user_log_dir(appname=APP_NAME, appauthor=APP_AUTHOR))


def setup_logger():
    logger = logging.getLogger(APP_NAME)

    # Default: silence everything unless FFEXPLORER_DEBUG is set
    if not os.environ.get(DEBUG_ENV_VAR):
        logger.setLevel(logging.CRITICAL)
        if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
            logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return logger

    # Debug mode: write to user logs
    logger.setLevel(logging.INFO)
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        log_dir = default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "app.debug.log", encoding="utf-8")
        fh.setLevel(logging.INFO)
        fh.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        logger.addHandler(fh)
    return logger


def prune_old_logs(log_dir, days_limit: int, now: float | None = None) -> list[Path]:
    """
    Delete ``*.log`` files older than ``days_limit`` days.

    Args:
        log_dir: Folder holding the log files
        days_limit: Retention window in days; zero or less keeps everything
        now: Reference timestamp (defaults to the current time)

    Returns:
        list[Path]: The files that were removed
    """
    folder = Path(log_dir)
    if days_limit <= 0 or not folder.is_dir():
        return []

    cutoff = (time.time() if now is None else now) - days_limit * _SECONDS_PER_DAY
    removed: list[Path] = []
    for p in sorted(folder.glob("*.log")):
        try:
            if p.stat().st_mtime < cutoff:
                p.unlink()
                removed.append(p)
        except OSError as e:
            logger.error("Failed to remove old log %s: %s", p, e)
    if removed:
        logger.info("Removed %d log file(s) older than %d day(s)", len(removed), days_limit)
    return removed


logger = setup_logger()
