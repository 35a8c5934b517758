"""Host side: client bridge, visibility and commands."""

from .overlay_host import OverlayHost, HostState
from .sse import SseDecoder

__all__ = ["OverlayHost", "HostState", "SseDecoder", "StatusBridge", "StatusClient"]


def __getattr__(name: str):
    """Lazy import the requests-backed bridge."""
    if name in ("StatusBridge", "StatusClient"):
        from . import bridge

        return getattr(bridge, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
