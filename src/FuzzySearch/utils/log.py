"""FuzzySearch logging utilities.

A single package logger with a short timestamp and a four-letter level tag.
The compiler core only ever logs at DEBUG; the host layers (storage,
services, CLI) log their progress at INFO.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final


_LEVEL_TAGS: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}

_FORMAT: Final[str] = "%(asctime)s [%(leveltag)s] %(message)s"
_DATE_FORMAT: Final[str] = "%m-%d %H:%M:%S"


class _LevelTagFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - stdlib name
        record.leveltag = _LEVEL_TAGS.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("FuzzySearch")


def log_file_path(log_dir: str, action: str, *, now: datetime | None = None) -> Path:
    """Return the log file path for one CLI action.

    Args:
        log_dir: Base directory for log files.
        action: CLI action name, used as sub-directory and file prefix.
        now: Timestamp override.

    Returns:
        ``<log_dir>/<action>/<action>_<mmddHHMMSS>.log``
    """
    stamp = (now or datetime.now()).strftime("%m%d%H%M%S")
    return Path(log_dir or "log") / action / f"{action}_{stamp}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> None:
    """Configure the FuzzySearch logger.

    Console output honours ``level``; the optional file mirror always
    records DEBUG so compiled predicates can be inspected after a run.

    Args:
        level: Logging level name (e.g. INFO, DEBUG).
        action: CLI action name; required for file logging.
        log_to_file: Whether to mirror logs to a file.
        log_dir: Base directory for log files.
    """
    console_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _LevelTagFormatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    log.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(formatter)
    log.addHandler(console)

    if log_to_file and action:
        path = log_file_path(log_dir, action)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

    log.setLevel(min(logging.DEBUG, console_level))
    log.propagate = False
