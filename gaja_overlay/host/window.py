"""Window-level placement for the overlay, owned by the host."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication, QWidget

from ..logging_utils import get_logger

logger = get_logger("host.window")


def configure_overlay_window(widget: QWidget, click_through: bool = True, opacity: float = 1.0):
    flags = (
        Qt.WindowType.FramelessWindowHint
        | Qt.WindowType.WindowStaysOnTopHint
        | Qt.WindowType.Tool
        | Qt.WindowType.WindowDoesNotAcceptFocus
    )
    if click_through:
        flags |= Qt.WindowType.WindowTransparentForInput
    widget.setWindowFlags(flags)
    widget.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
    widget.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)
    widget.setWindowOpacity(max(0.1, min(1.0, opacity)))
    fit_to_primary_screen(widget)


def fit_to_primary_screen(widget: QWidget) -> bool:
    screen = QApplication.primaryScreen()
    if screen is None:
        logger.error("Could not get primary monitor info")
        return False
    widget.setGeometry(screen.geometry())
    logger.info(f"Overlay set to primary monitor: {screen.name()}")
    return True
