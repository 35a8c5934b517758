"""Single instance lock helpers."""

import fcntl
import os
from pathlib import Path
from typing import IO, Optional

from ..logging_utils import get_logger

logger = get_logger("system.lock")


def acquire_lock(lock_file: Path) -> Optional[IO[str]]:
    """Take an exclusive non-blocking lock; None if another overlay holds it."""
    lock_file.parent.mkdir(parents=True, exist_ok=True)
    lock = open(lock_file, "a+")
    try:
        fcntl.flock(lock.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except OSError:
        lock.close()
        logger.info(f"Another instance holds {lock_file}")
        return None
    lock.seek(0)
    lock.truncate()
    lock.write(str(os.getpid()))
    lock.flush()
    return lock


def release_lock(lock: Optional[IO[str]], lock_file: Path) -> None:
    if lock is None:
        return
    try:
        fcntl.flock(lock.fileno(), fcntl.LOCK_UN)
        lock.close()
        lock_file.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Failed to release lock {lock_file}: {e}")
