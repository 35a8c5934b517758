"""Event ingestion from the overlay host."""

from typing import Any, Callable, Mapping, Optional, Protocol

from ..logging_utils import get_logger
from ..state import StatusSnapshot

logger = get_logger("surface.adapter")

STATUS_UPDATE_EVENT = "status-update"
OPEN_DEVTOOLS_COMMAND = "open_devtools"


class HostChannel(Protocol):
    """Communication boundary to the host process."""

    def get_state(self) -> Mapping[str, Any]: ...

    def listen(
        self, event: str, handler: Callable[[Any], None]
    ) -> Callable[[], None]: ...

    def invoke(self, command: str) -> None: ...


class Subscription:
    """Cancellation handle returned by `EventIngestionAdapter.subscribe`.

    Calling it stops delivery first and then releases the host listener.
    Safe to call any number of times.
    """

    def __init__(self, unlisten: Optional[Callable[[], None]] = None):
        self._unlisten = unlisten
        self._active = unlisten is not None

    @property
    def active(self) -> bool:
        return self._active

    def __call__(self) -> None:
        self._active = False
        unlisten, self._unlisten = self._unlisten, None
        if unlisten is None:
            return
        try:
            unlisten()
        except Exception as e:
            logger.error(f"Failed to release status listener: {e}")


class EventIngestionAdapter:
    def __init__(self, channel: HostChannel):
        self._channel = channel

    def fetch_initial_snapshot(self) -> StatusSnapshot:
        """Ask the host for its current state; a single attempt.

        The host's own ``visible`` value is dropped, the surface works it
        out again from the flags and text.
        """
        try:
            state = self._channel.get_state()
        except Exception as e:
            logger.error(f"Initial state request failed: {e}")
            return StatusSnapshot.empty()
        if not isinstance(state, Mapping):
            logger.error(f"Initial state response is not an object: {state!r}")
            return StatusSnapshot.empty()
        logger.debug(f"Initial state received: {dict(state)}")
        return StatusSnapshot.from_payload(state)

    def subscribe(self, on_snapshot: Callable[[StatusSnapshot], None]) -> Subscription:
        subscription: Optional[Subscription] = None

        def _deliver(payload: Any) -> None:
            if subscription is not None and not subscription.active:
                return
            logger.debug(f"Status update received: {payload}")
            on_snapshot(StatusSnapshot.from_payload(payload))

        try:
            unlisten = self._channel.listen(STATUS_UPDATE_EVENT, _deliver)
        except Exception as e:
            logger.error(f"Could not subscribe to {STATUS_UPDATE_EVENT}: {e}")
            return Subscription()
        subscription = Subscription(unlisten)
        return subscription

    def open_devtools(self) -> None:
        logger.info("Opening devtools")
        try:
            self._channel.invoke(OPEN_DEVTOOLS_COMMAND)
        except Exception as e:
            logger.error(f"open_devtools failed: {e}")
