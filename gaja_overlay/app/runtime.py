"""Application bootstrap and event loop."""

import os
import signal
import sys
from typing import Optional

from PyQt6.QtCore import pyqtSignal, QObject, QTimer
from PyQt6.QtNetwork import QLocalSocket
from PyQt6.QtWidgets import QApplication

from ..config import (
    APP_NAME,
    APP_VERSION,
    LOCK_FILE,
    IPC_SOCKET_NAME,
    Settings,
    config,
    get_display_server,
    is_wayland,
)
from ..host import OverlayHost
from ..host.bridge import StatusBridge
from ..host.window import configure_overlay_window
from ..hotkeys import hotkey_manager
from ..ipc_server import IpcServer
from ..logging_utils import setup_logging, get_logger
from ..surface import EventIngestionAdapter, OverlaySurface
from ..system import acquire_lock, release_lock
from ..ui import OverlayWidget, DevtoolsWindow

logger = get_logger("app")

IDLE_CHECK_MS = 1000
BRIDGE_STOP_TIMEOUT_MS = 3000


class OverlayApp(QObject):
    devtools_signal = pyqtSignal()
    quit_signal = pyqtSignal()

    def __init__(self):
        super().__init__()
        self._app: Optional[QApplication] = None
        self._host: Optional[OverlayHost] = None
        self._widget: Optional[OverlayWidget] = None
        self._surface: Optional[OverlaySurface] = None
        self._bridge: Optional[StatusBridge] = None
        self._ipc: Optional[IpcServer] = None
        self._devtools: Optional[DevtoolsWindow] = None
        self._idle_timer: Optional[QTimer] = None
        self._signal_timer: Optional[QTimer] = None
        self._lock_handle = None
        self._shut_down = False

        self.quit_signal.connect(self._quit)

    def _handle_ipc_command(self, command: str) -> str:
        if command.strip() == "quit":
            QTimer.singleShot(0, self._quit)
            return "ok"
        if self._host is None:
            return "not ready"
        return self._host.handle_ipc_command(command)

    def _notify_running_instance(self) -> bool:
        socket = QLocalSocket()
        socket.connectToServer(IPC_SOCKET_NAME)
        if socket.waitForConnected(1000):
            socket.write(b"show")
            socket.flush()
            socket.waitForBytesWritten(1000)
            socket.disconnectFromServer()
            logger.info("Asked running instance to show its overlay")
            return True
        return False

    def _setup_overlay(self, settings: Settings):
        self._host = OverlayHost(auto_hide_sec=settings.auto_hide_sec, parent=self)
        self._host.devtools_requested.connect(self._show_devtools)

        self._widget = OverlayWidget()
        self._widget.set_theme(settings.overlay_theme)
        configure_overlay_window(
            self._widget,
            click_through=settings.click_through,
            opacity=settings.overlay_opacity,
        )
        self._host.attach_window(self._widget)

        self._surface = OverlaySurface(EventIngestionAdapter(self._host))
        self._surface.add_listener(self._widget.render_state)
        self._widget.devtools_shortcut.connect(self._surface.open_devtools)
        self.devtools_signal.connect(self._surface.open_devtools)
        # first paint waits for the initial state
        self._surface.start()

        self._idle_timer = QTimer(self)
        self._idle_timer.setInterval(IDLE_CHECK_MS)
        self._idle_timer.timeout.connect(self._host.check_idle)
        self._idle_timer.start()

    def _start_bridge(self, settings: Settings):
        self._bridge = StatusBridge(settings, parent=self)
        self._bridge.payload_received.connect(self._host.process_status_data)
        self._bridge.connection_changed.connect(self._host.set_connection_status)
        self._bridge.client_missing.connect(self._host.client_missing)
        self._bridge.start()

    def _start_ipc(self):
        self._ipc = IpcServer(IPC_SOCKET_NAME, self._handle_ipc_command, parent=self)
        self._ipc.start()

    def _setup_hotkeys(self, settings: Settings):
        if not settings.global_hotkeys:
            return
        hotkey_manager.set_callbacks(on_devtools=lambda: self.devtools_signal.emit())
        hotkey_manager.start()

    def _install_signal_handlers(self):
        def _request_quit(signum, frame):
            logger.info(f"Received signal {signum}")
            self.quit_signal.emit()

        signal.signal(signal.SIGINT, _request_quit)
        signal.signal(signal.SIGTERM, _request_quit)
        # let the interpreter run signal handlers while Qt owns the loop
        self._signal_timer = QTimer(self)
        self._signal_timer.start(500)
        self._signal_timer.timeout.connect(lambda: None)

    def _show_devtools(self):
        if self._host is None:
            return
        if self._devtools is None:
            self._devtools = DevtoolsWindow(self._host)
        self._devtools.open()

    def _shutdown(self):
        if self._shut_down:
            return
        self._shut_down = True
        logger.info("Shutting down...")
        hotkey_manager.stop()
        if self._idle_timer is not None:
            self._idle_timer.stop()
        if self._surface is not None:
            self._surface.close()
        if self._bridge is not None:
            self._bridge.stop()
            if not self._bridge.wait(BRIDGE_STOP_TIMEOUT_MS):
                logger.warning("Status bridge did not stop in time")
        if self._devtools is not None:
            self._devtools.dispose()
            self._devtools = None
        if self._ipc is not None:
            self._ipc.close()
        release_lock(self._lock_handle, LOCK_FILE)
        self._lock_handle = None

    def _quit(self):
        logger.info("Quitting...")
        self._shutdown()
        if self._app:
            self._app.quit()

    def run(self) -> int:
        setup_logging(debug=os.environ.get("DEBUG") == "1")
        logger.info(f"Starting {APP_NAME} v{APP_VERSION}")
        logger.info(
            "Environment: desktop=%s session=%s display=%s wayland=%s",
            os.environ.get("XDG_CURRENT_DESKTOP", ""),
            os.environ.get("DESKTOP_SESSION", ""),
            get_display_server(),
            is_wayland(),
        )

        self._lock_handle = acquire_lock(LOCK_FILE)
        if not self._lock_handle:
            return 0 if self._notify_running_instance() else 1

        self._app = QApplication(sys.argv)
        self._app.setApplicationName(APP_NAME)
        self._app.setQuitOnLastWindowClosed(False)
        self._app.aboutToQuit.connect(self._shutdown)

        settings = config.settings
        self._setup_overlay(settings)
        self._start_bridge(settings)
        self._start_ipc()
        self._setup_hotkeys(settings)
        self._install_signal_handlers()

        logger.info("Overlay ready")
        return self._app.exec()


def run_app() -> int:
    app = OverlayApp()
    return app.run()
