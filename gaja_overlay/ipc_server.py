"""Local socket server for overlay commands (show/hide/status/update)."""

from typing import Callable, Optional

from PyQt6.QtCore import QObject
from PyQt6.QtNetwork import QLocalServer, QLocalSocket

from .logging_utils import get_logger

logger = get_logger("ipc")

READ_TIMEOUT_MS = 1000
MAX_COMMAND_BYTES = 64 * 1024


class IpcServer(QObject):
    """One request per connection: read a command, write a reply, disconnect."""

    def __init__(self, socket_name: str, handler: Callable[[str], str], parent=None):
        super().__init__(parent)
        self._socket_name = socket_name
        self._handler = handler
        self._server: Optional[QLocalServer] = None

    def start(self) -> bool:
        QLocalServer.removeServer(self._socket_name)
        self._server = QLocalServer(self)
        self._server.newConnection.connect(self._handle_connection)

        if not self._server.listen(self._socket_name):
            logger.error(f"Failed to start IPC server: {self._server.errorString()}")
            return False

        logger.info(f"IPC server listening on: {self._socket_name}")
        return True

    def _read_command(self, socket: QLocalSocket) -> str:
        data = b""
        while socket.waitForReadyRead(READ_TIMEOUT_MS if not data else 50):
            data += socket.readAll().data()
            if len(data) > MAX_COMMAND_BYTES:
                logger.warning("IPC command too large, truncating")
                break
        return data.decode("utf-8", errors="replace").strip()

    def _handle_connection(self):
        if not self._server:
            return
        socket = self._server.nextPendingConnection()
        if not socket:
            return
        command = self._read_command(socket)
        logger.debug(f"IPC received: {command}")
        try:
            response = self._handler(command)
        except Exception as e:
            logger.error(f"IPC command failed: {e}", exc_info=True)
            response = f"error: {e}"
        socket.write(response.encode("utf-8"))
        socket.flush()
        socket.waitForBytesWritten(READ_TIMEOUT_MS)
        socket.disconnectFromServer()

    def close(self):
        if self._server:
            self._server.close()
            self._server = None
