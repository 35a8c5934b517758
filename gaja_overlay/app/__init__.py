"""Application shell."""

from .runtime import OverlayApp, run_app

__all__ = ["OverlayApp", "run_app"]
