"""In-process host: owns overlay visibility and feeds the surface."""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from ..logging_utils import get_logger
from ..state import StatusSnapshot
from ..surface.adapter import STATUS_UPDATE_EVENT, OPEN_DEVTOOLS_COMMAND

logger = get_logger("host")

CLIENT_MISSING_STATUS = "Waiting for client to start..."
CLIENT_MISSING_TEXT = "Start the Gaja client first"


class OverlayWindowHandle(Protocol):
    def show(self) -> None: ...

    def hide(self) -> None: ...

    def isVisible(self) -> bool: ...


@dataclass
class HostState:
    visible: bool = False
    status: str = "Offline"
    text: str = ""
    is_listening: bool = False
    is_speaking: bool = False
    wake_word_detected: bool = False
    last_activity: float = field(default_factory=time.monotonic)

    def to_payload(self) -> dict:
        return {
            "visible": self.visible,
            "status": self.status,
            "text": self.text,
            "is_listening": self.is_listening,
            "is_speaking": self.is_speaking,
            "wake_word_detected": self.wake_word_detected,
        }

    def status_update(self) -> dict:
        payload = self.to_payload()
        del payload["visible"]
        return payload


class OverlayHost(QObject):
    """Decides window visibility and publishes `status-update` events.

    Lives on the Qt main thread; the bridge reaches it through queued
    signals so payloads are handled one at a time in arrival order.
    """

    status_update = pyqtSignal(dict)
    devtools_requested = pyqtSignal()
    connection_changed = pyqtSignal(str)

    def __init__(
        self,
        auto_hide_sec: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._auto_hide_sec = auto_hide_sec
        self._clock = clock
        self._state = HostState(last_activity=clock())
        self._window: Optional[OverlayWindowHandle] = None
        self._events = {STATUS_UPDATE_EVENT: self.status_update}

    @property
    def state(self) -> HostState:
        return self._state

    def attach_window(self, window: OverlayWindowHandle) -> None:
        self._window = window

    # HostChannel

    def get_state(self) -> dict:
        return self._state.to_payload()

    def listen(self, event: str, handler: Callable[[Any], None]) -> Callable[[], None]:
        signal = self._events.get(event)
        if signal is None:
            raise ValueError(f"Unknown host event: {event}")
        signal.connect(handler)
        connected = [True]

        def _unlisten() -> None:
            if not connected[0]:
                return
            connected[0] = False
            try:
                signal.disconnect(handler)
            except (TypeError, RuntimeError):
                pass

        return _unlisten

    def invoke(self, command: str) -> None:
        if command == OPEN_DEVTOOLS_COMMAND:
            self.open_devtools()
        elif command == "show_overlay":
            self.show_overlay()
        elif command == "hide_overlay":
            self.hide_overlay()
        else:
            raise ValueError(f"Unknown host command: {command}")

    # Commands

    def show_overlay(self) -> None:
        if self._window is not None:
            self._window.show()
        self._state.visible = True
        self._state.last_activity = self._clock()

    def hide_overlay(self) -> None:
        if self._window is not None:
            self._window.hide()
        self._state.visible = False

    def open_devtools(self) -> None:
        self.devtools_requested.emit()

    def update_status(
        self,
        status: str,
        text: str,
        is_listening: bool,
        is_speaking: bool,
        wake_word_detected: bool,
    ) -> None:
        """Store a status pushed by a command and forward it unconditionally."""
        self._state.status = status
        self._state.text = text
        self._state.is_listening = is_listening
        self._state.is_speaking = is_speaking
        self._state.wake_word_detected = wake_word_detected
        self.status_update.emit(self._state.status_update())

    def set_connection_status(self, status: str) -> None:
        if status != self._state.status:
            logger.info(f"Connection: {status}")
        self._state.status = status
        self.connection_changed.emit(status)

    def client_missing(self) -> None:
        self._state.status = CLIENT_MISSING_STATUS
        self._state.text = CLIENT_MISSING_TEXT
        self.connection_changed.emit(CLIENT_MISSING_STATUS)

    def process_status_data(self, data: Any) -> None:
        logger.debug(f"Processing status data: {data}")
        snapshot = StatusSnapshot.from_payload(data)
        status = data.get("status") if isinstance(data, dict) else None
        if not isinstance(status, str):
            status = "Unknown"

        state = self._state
        should_be_visible = snapshot.has_activity or snapshot.text != ""
        changed = (
            state.text != snapshot.text
            or state.is_listening != snapshot.is_listening
            or state.is_speaking != snapshot.is_speaking
            or state.wake_word_detected != snapshot.wake_word_detected
        )

        if changed:
            logger.info(
                f"Status update: listening={snapshot.is_listening}, "
                f"speaking={snapshot.is_speaking}, wake_word={snapshot.wake_word_detected}, "
                f"text='{snapshot.text}', visible={should_be_visible}"
            )
            state.status = status
            state.text = snapshot.text
            state.is_listening = snapshot.is_listening
            state.is_speaking = snapshot.is_speaking
            state.wake_word_detected = snapshot.wake_word_detected
            self.status_update.emit(state.status_update())

        if should_be_visible:
            state.last_activity = self._clock()
            if not state.visible:
                self.show_overlay()
        else:
            self.check_idle()

    def has_content(self) -> bool:
        state = self._state
        return (
            state.is_listening
            or state.is_speaking
            or state.wake_word_detected
            or state.text != ""
        )

    def check_idle(self) -> None:
        """Hide after a long quiet period with nothing to show.

        Called on every payload and from a timer, since the stream only
        sends changes.
        """
        state = self._state
        if not state.visible or self.has_content():
            return
        if self._clock() - state.last_activity > self._auto_hide_sec:
            logger.info("Auto-hiding overlay after prolonged inactivity")
            self.hide_overlay()

    def handle_ipc_command(self, raw: str) -> str:
        """Local socket protocol used by trigger.py."""
        command = raw.strip()
        if command == "show":
            self.show_overlay()
            return "ok"
        if command == "hide":
            self.hide_overlay()
            return "ok"
        if command == "status":
            return json.dumps(self.get_state(), ensure_ascii=False)
        if command == "devtools":
            self.open_devtools()
            return "ok"
        if command.startswith("{"):
            try:
                data = json.loads(command)
            except json.JSONDecodeError as e:
                return f"error: {e}"
            if not isinstance(data, dict) or data.get("command") != "update_status":
                return "unknown command"
            snapshot = StatusSnapshot.from_payload(data)
            status = data.get("status")
            self.update_status(
                status=status if isinstance(status, str) else "Unknown",
                text=snapshot.text,
                is_listening=snapshot.is_listening,
                is_speaking=snapshot.is_speaking,
                wake_word_detected=snapshot.wake_word_detected,
            )
            return "ok"
        return "unknown command"
