"""Overlay widget rendering the surface's display state."""

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QPainter, QLinearGradient, QFont, QBrush
from PyQt6.QtWidgets import QWidget

from ..hotkeys import matches_devtools_shortcut
from ..logging_utils import get_logger
from ..state import DisplayState
from .overlay_ui import setup_overlay_ui
from .themes import get_overlay_palette, get_text_point_size

logger = get_logger("ui.overlay")

_KEY_NAMES = {
    Qt.Key.Key_F12.value: "F12",
    Qt.Key.Key_I.value: "I",
}


class OverlayWidget(QWidget):
    devtools_shortcut = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._display: Optional[DisplayState] = None
        self._setup_ui()
        self.set_theme("dark")

    def _setup_ui(self):
        widgets = setup_overlay_ui(self)
        self._ball = widgets["ball"]
        self._status_label = widgets["status_label"]
        self._response_label = widgets["response_label"]

    def set_theme(self, theme: str):
        if theme not in ("dark", "light"):
            theme = "dark"
        c = get_overlay_palette(theme)
        self._colors = c
        self._status_label.setStyleSheet(f"color: {c['muted']};")
        self._response_label.setStyleSheet(
            f"color: {c['text']}; background: {c['panel']}; border-radius: 12px; padding: 14px;"
        )
        self.update()

    def render_state(self, display: DisplayState):
        self._display = display

        self._ball.set_animation(display.animation_class)
        self._ball.set_active(display.show_ball)

        if display.show_status_text:
            self._status_label.setText(f"{display.icon} {display.status_text}".strip())
        self._status_label.setVisible(display.show_status_text)

        if display.text:
            font = QFont(self._response_label.font())
            font.setPointSize(get_text_point_size(display.text_size_class))
            self._response_label.setFont(font)
            self._response_label.setText(display.text)
        self._response_label.setVisible(bool(display.text))

        self.update()

    @property
    def display_state(self) -> Optional[DisplayState]:
        return self._display

    def paintEvent(self, event):
        if self._display is None or not self._display.is_active:
            return
        painter = QPainter(self)
        gradient = QLinearGradient(0, 0, 0, self.height())
        gradient.setColorAt(0.0, self._colors["bg_top"])
        gradient.setColorAt(1.0, self._colors["bg_bottom"])
        painter.fillRect(self.rect(), QBrush(gradient))
        painter.end()

    def keyPressEvent(self, event):
        modifiers = event.modifiers()
        key_name = _KEY_NAMES.get(event.key(), event.text())
        if matches_devtools_shortcut(
            key_name,
            ctrl=bool(modifiers & Qt.KeyboardModifier.ControlModifier),
            shift=bool(modifiers & Qt.KeyboardModifier.ShiftModifier),
        ):
            logger.debug("Devtools shortcut pressed")
            self.devtools_shortcut.emit()
            event.accept()
            return
        super().keyPressEvent(event)
