"""Devtools inspector for host state and the event stream."""

import json
import time
from typing import Callable, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QWidget,
    QLabel,
    QVBoxLayout,
    QHBoxLayout,
    QPlainTextEdit,
    QPushButton,
)

from ..config import APP_NAME
from ..host import OverlayHost
from ..logging_utils import get_logger, get_log_file_path, read_log_tail
from ..surface import STATUS_UPDATE_EVENT

logger = get_logger("ui.devtools")

MAX_EVENT_LINES = 500
LOG_TAIL_LINES = 100


class DevtoolsWindow(QWidget):
    def __init__(self, host: OverlayHost, parent=None):
        super().__init__(parent)
        self._host = host
        self.setWindowTitle(f"{APP_NAME} devtools")
        self.resize(560, 480)

        layout = QVBoxLayout(self)
        mono = QFont("Monospace", 9)

        self._state_label = QLabel()
        self._state_label.setFont(mono)
        self._state_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(self._state_label)

        log_label = QLabel(f"Log file: {get_log_file_path()}")
        log_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(log_label)

        self._events = QPlainTextEdit()
        self._events.setReadOnly(True)
        self._events.setFont(mono)
        self._events.setMaximumBlockCount(MAX_EVENT_LINES)
        layout.addWidget(self._events)

        buttons = QHBoxLayout()
        buttons.addStretch()
        log_btn = QPushButton("Show log tail")
        log_btn.clicked.connect(self._show_log_tail)
        buttons.addWidget(log_btn)
        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self._events.clear)
        buttons.addWidget(clear_btn)
        layout.addLayout(buttons)

        self._unlisten: Optional[Callable[[], None]] = host.listen(
            STATUS_UPDATE_EVENT, self._on_status_update
        )
        host.connection_changed.connect(self._on_connection_changed)
        self.refresh()

    def refresh(self):
        self._state_label.setText(
            json.dumps(self._host.get_state(), indent=2, ensure_ascii=False)
        )

    def open(self):
        logger.info("Opening devtools")
        self.refresh()
        self.show()
        self.raise_()
        self.activateWindow()

    def _append(self, line: str):
        self._events.appendPlainText(f"{time.strftime('%H:%M:%S')} {line}")

    def _show_log_tail(self):
        lines = read_log_tail(LOG_TAIL_LINES)
        if not lines:
            self._append("log file is empty or unreadable")
            return
        for line in lines:
            self._events.appendPlainText(line)

    def _on_status_update(self, payload: dict):
        self._append(f"{STATUS_UPDATE_EVENT} {json.dumps(payload, ensure_ascii=False)}")
        if self.isVisible():
            self.refresh()

    def _on_connection_changed(self, status: str):
        self._append(f"connection {status}")
        if self.isVisible():
            self.refresh()

    def dispose(self):
        if self._unlisten is not None:
            self._unlisten()
            self._unlisten = None
        try:
            self._host.connection_changed.disconnect(self._on_connection_changed)
        except (TypeError, RuntimeError) as e:
            logger.debug(f"connection_changed already disconnected: {e}")
        self.close()
