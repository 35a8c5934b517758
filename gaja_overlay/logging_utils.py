"""Logging for the overlay: console plus a rotating file devtools can read."""

import logging
import sys
from collections import deque
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

from .config import LOG_DIR, APP_NAME

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# status payloads arrive every second when polling, keep the file small
MAX_LOG_SIZE = 2 * 1024 * 1024
BACKUP_COUNT = 2


def setup_logging(debug: bool = False) -> logging.Logger:
    """
    Configure the `gaja-overlay` logger tree.

    Payloads from the assistant client are logged at DEBUG, so DEBUG=1
    traces the whole event stream.

    Returns:
        The root overlay logger
    """
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger(APP_NAME)
    root.setLevel(level)
    root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    log_file = get_log_file_path()
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=MAX_LOG_SIZE, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
    except OSError as e:
        root.warning(f"Could not create log file {log_file}: {e}")
    else:
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger named `gaja-overlay.<name>`."""
    return logging.getLogger(f"{APP_NAME}.{name}")


def get_log_file_path() -> Path:
    return LOG_DIR / f"{APP_NAME}.log"


def read_log_tail(max_lines: int = 200, path: Path = None) -> List[str]:
    """Last `max_lines` lines of the current log file, empty if unreadable."""
    log_file = path or get_log_file_path()
    try:
        with open(log_file, "r", encoding="utf-8", errors="replace") as f:
            return [line.rstrip("\n") for line in deque(f, maxlen=max_lines)]
    except OSError:
        return []
