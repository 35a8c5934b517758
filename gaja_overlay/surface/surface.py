"""Overlay surface state owner."""

from typing import Callable, List, Optional

from ..logging_utils import get_logger
from ..state import DisplayState, StatusSnapshot, derive_display_state
from .adapter import EventIngestionAdapter, Subscription

logger = get_logger("surface")

DisplayListener = Callable[[DisplayState], None]


class OverlaySurface:
    """Holds the live snapshot and its DisplayState for one overlay instance.

    Created per process, filled by `start()` and torn down by `close()`.
    All calls are expected on the Qt main thread, so there is exactly one
    writer (the subscription callback) and no locking.
    """

    def __init__(self, adapter: EventIngestionAdapter):
        self._adapter = adapter
        self._snapshot = StatusSnapshot.empty()
        self._display = derive_display_state(self._snapshot)
        self._listeners: List[DisplayListener] = []
        self._subscription: Optional[Subscription] = None
        self._started = False
        self._closed = False

    @property
    def snapshot(self) -> StatusSnapshot:
        return self._snapshot

    @property
    def display_state(self) -> DisplayState:
        return self._display

    @property
    def started(self) -> bool:
        return self._started

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        if self._started or self._closed:
            return
        self._started = True
        self.apply(self._adapter.fetch_initial_snapshot())
        self._subscription = self._adapter.subscribe(self.apply)
        logger.info("Overlay surface started")

    def apply(self, snapshot: StatusSnapshot) -> None:
        if self._closed:
            logger.debug("Dropping snapshot for closed surface")
            return
        self._snapshot = snapshot
        self._display = derive_display_state(snapshot)
        logger.debug(
            f"Display: mode={self._display.mode.name} visible={self._display.is_visible} "
            f"tier={self._display.text_size_tier.name}"
        )
        for listener in list(self._listeners):
            try:
                listener(self._display)
            except Exception as e:
                logger.error(f"Display listener failed: {e}", exc_info=True)

    def add_listener(self, listener: DisplayListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def open_devtools(self) -> None:
        self._adapter.open_devtools()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._subscription is not None:
            self._subscription()
            self._subscription = None
        self._listeners.clear()
        logger.info("Overlay surface closed")
