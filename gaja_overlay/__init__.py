"""Gaja assistant status overlay."""

from .meta import APP_NAME, APP_VERSION

__all__ = ["APP_NAME", "APP_VERSION"]
