"""Background bridge that follows the assistant client's status."""

import socket
import threading
import time
from typing import Iterable, Optional

import requests
from PyQt6.QtCore import QThread, pyqtSignal, QObject

from ..config import STATUS_PATH, STREAM_PATH, Settings
from ..logging_utils import get_logger
from .sse import SseDecoder

logger = get_logger("host.bridge")

WAITING_STATUS = "Waiting for client..."

# events are a few hundred bytes; small reads never wait for a full buffer
STREAM_CHUNK_SIZE = 1


def connected_status(port: int) -> str:
    return f"Connected to CLIENT port {port}"


class StatusClient:
    """Thin HTTP client for the assistant client's status endpoints."""

    def __init__(self, host: str = "localhost", session: Optional[requests.Session] = None):
        self._host = host
        self._session = session or requests.Session()

    def url(self, port: int, path: str) -> str:
        return f"http://{self._host}:{port}{path}"

    def probe(self, port: int, timeout: float) -> bool:
        logger.debug(f"Testing connection to CLIENT port {port}")
        try:
            response = self._session.get(self.url(port, STATUS_PATH), timeout=timeout)
        except requests.RequestException as e:
            logger.info(f"Client port {port} connection failed: {e}")
            return False
        if 200 <= response.status_code < 300:
            return True
        logger.info(f"Client port {port} returned status: {response.status_code}")
        return False

    def discover_port(self, ports: Iterable[int], timeout: float) -> Optional[int]:
        for port in ports:
            if self.probe(port, timeout):
                logger.info(f"Found working CLIENT port: {port}")
                return port
        return None

    def fetch_status(self, port: int, timeout: float) -> dict:
        """GET /api/status.

        Raises:
            requests.HTTPError: non-2xx answer
            ValueError: body is not a JSON object
            requests.RequestException: transport failure
        """
        response = self._session.get(self.url(port, STATUS_PATH), timeout=timeout)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"status response is not an object: {data!r}")
        return data

    def open_stream(
        self, port: int, connect_timeout: float, read_timeout: float
    ) -> Optional[requests.Response]:
        """Open the SSE stream; None when the client does not offer one.

        `read_timeout` bounds the silence between two reads, so it has to
        outlast the client's idle periods.
        """
        response = self._session.get(
            self.url(port, STREAM_PATH),
            timeout=(connect_timeout, read_timeout),
            stream=True,
            headers={"Accept": "text/event-stream"},
        )
        if 200 <= response.status_code < 300:
            return response
        logger.info(f"SSE not available (status: {response.status_code})")
        response.close()
        return None

    def close(self) -> None:
        self._session.close()


class StatusBridge(QThread):
    """Connects to the client, streams or polls, and re-emits payloads.

    Runs until `stop()`; every wait is interruptible so shutdown never
    hangs on a retry delay.
    """

    payload_received = pyqtSignal(dict)
    connection_changed = pyqtSignal(str)
    client_missing = pyqtSignal()

    def __init__(
        self,
        settings: Settings,
        client: Optional[StatusClient] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._settings = settings
        self._client = client or StatusClient(settings.client_host)
        self._stop_event = threading.Event()
        self._stream: Optional[requests.Response] = None

    def stop(self) -> None:
        self._stop_event.set()
        stream = self._stream
        if stream is not None:
            _interrupt_stream(stream)

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def _wait(self, seconds: float) -> bool:
        return self._stop_event.wait(seconds)

    def run(self):
        logger.info("Status bridge started")
        try:
            while not self.stopped:
                port = self._connect()
                if self.stopped:
                    break
                if self._follow_stream(port):
                    logger.info("SSE stream ended, attempting to reconnect...")
                    self._wait(self._settings.reconnect_delay)
                    continue
                self._poll_updates(port)
        except Exception as e:
            logger.error(f"Status bridge crashed: {e}", exc_info=True)
        finally:
            self._client.close()
            logger.info("Status bridge stopped")

    def _connect(self) -> int:
        port = self._client.discover_port(
            self._settings.client_ports, self._settings.probe_timeout
        )
        if port is None:
            port = self._settings.resolve_fallback_port()
            logger.info(f"No CLIENT connection found, using fallback port {port}")
            self.connection_changed.emit(WAITING_STATUS)
        else:
            self.connection_changed.emit(connected_status(port))
        return port

    def _follow_stream(self, port: int) -> bool:
        """Keep the stream open on `port`; False when it never opened.

        A stream that lived longer than `reconnect_delay` is reopened right
        away, the resync in `_stream_updates` covers the gap.
        """
        opened = False
        while not self.stopped:
            started = time.monotonic()
            if not self._stream_updates(port):
                return opened
            opened = True
            if time.monotonic() - started < self._settings.reconnect_delay:
                return True
            logger.info("SSE stream closed, reopening")
        return opened

    def _stream_updates(self, port: int) -> bool:
        """Follow the SSE stream; False when it could not be opened."""
        logger.info(f"Attempting to connect to SSE stream: {self._client.url(port, STREAM_PATH)}")
        try:
            response = self._client.open_stream(
                port, self._settings.stream_timeout, self._settings.stream_read_timeout
            )
        except requests.RequestException as e:
            logger.info(f"Failed to connect to SSE: {e}, falling back to polling")
            return False
        if response is None:
            logger.info("Falling back to polling")
            return False

        logger.info("Successfully connected to SSE stream")
        self._stream = response
        self._resync(port)
        decoder = SseDecoder()
        try:
            for chunk in response.iter_content(chunk_size=STREAM_CHUNK_SIZE):
                if self.stopped:
                    break
                for payload in decoder.feed(chunk):
                    logger.debug(f"Received SSE data: {payload}")
                    self.payload_received.emit(payload)
        except (requests.RequestException, AttributeError, OSError) as e:
            # closing the response from stop() surfaces as one of these
            if not self.stopped:
                logger.error(f"SSE stream error: {e}")
        finally:
            self._stream = None
            response.close()
        return True

    def _resync(self, port: int) -> None:
        """Emit the current status once, for changes missed while reconnecting."""
        try:
            data = self._client.fetch_status(port, self._settings.poll_timeout)
        except (requests.RequestException, ValueError) as e:
            logger.info(f"Status resync on CLIENT port {port} failed: {e}")
            return
        self.payload_received.emit(data)

    def _poll_updates(self, port: int) -> None:
        current = port
        logger.info(f"Using polling mode on CLIENT port {current}")
        while not self._wait(self._settings.poll_interval):
            try:
                data = self._client.fetch_status(current, self._settings.poll_timeout)
            except requests.HTTPError as e:
                logger.error(f"CLIENT status endpoint returned error: {e}")
                continue
            except ValueError as e:
                logger.error(f"Failed to parse JSON response: {e}")
                continue
            except requests.RequestException as e:
                logger.info(f"Failed to connect to CLIENT port {current}: {e}")
                self.client_missing.emit()
                current = self._switch_port(current)
                self._wait(self._settings.offline_retry_delay)
                continue
            self.connection_changed.emit(connected_status(current))
            self.payload_received.emit(data)

    def _switch_port(self, current: int) -> int:
        for candidate in self._settings.client_ports:
            if candidate == current:
                continue
            if self._client.probe(candidate, self._settings.probe_timeout):
                logger.info(f"Reconnected to CLIENT port {candidate}, switching...")
                return candidate
        return current


def _interrupt_stream(response: requests.Response) -> None:
    """Wake a worker blocked reading `response`, then close it.

    Closing alone does not interrupt a pending recv; shutting the socket
    down does.
    """
    raw = getattr(response, "raw", None)
    conn = getattr(raw, "connection", None) or getattr(raw, "_connection", None)
    sock = getattr(conn, "sock", None)
    if sock is not None:
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            logger.debug(f"Stream socket shutdown failed: {e}")
    try:
        response.close()
    except Exception as e:
        logger.debug(f"Closing stream failed: {e}")
