"""UI layer exports."""

__all__ = [
    "OverlayWidget",
    "DevtoolsWindow",
]


def __getattr__(name: str):
    """Lazy import PyQt6 widget modules."""
    if name == "OverlayWidget":
        from .overlay_widget import OverlayWidget

        return OverlayWidget
    if name == "DevtoolsWindow":
        from .devtools import DevtoolsWindow

        return DevtoolsWindow
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
