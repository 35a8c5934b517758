"""System helpers."""

from .lock import acquire_lock, release_lock

__all__ = ["acquire_lock", "release_lock"]
