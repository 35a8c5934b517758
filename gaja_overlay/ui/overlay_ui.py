"""UI setup for overlay widget."""

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QWidget, QLabel, QVBoxLayout

from .ball import GajaBall

RESPONSE_MAX_WIDTH = 900


def setup_overlay_ui(widget: QWidget) -> dict:
    """Setup overlay UI and return widget references."""
    layout = QVBoxLayout(widget)
    layout.setContentsMargins(40, 40, 40, 60)
    layout.setSpacing(12)
    layout.addStretch()

    ball = GajaBall(parent=widget)
    layout.addWidget(ball, alignment=Qt.AlignmentFlag.AlignHCenter)

    status_label = QLabel()
    status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
    status_label.setFont(QFont("Sans", 16, QFont.Weight.DemiBold))
    status_label.hide()
    layout.addWidget(status_label, alignment=Qt.AlignmentFlag.AlignHCenter)

    response_label = QLabel()
    response_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
    response_label.setWordWrap(True)
    response_label.setMaximumWidth(RESPONSE_MAX_WIDTH)
    response_label.setTextFormat(Qt.TextFormat.PlainText)
    response_label.hide()
    layout.addWidget(response_label, alignment=Qt.AlignmentFlag.AlignHCenter)

    layout.addStretch()

    return {
        "ball": ball,
        "status_label": status_label,
        "response_label": response_label,
    }
