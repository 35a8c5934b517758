"""Host event ingestion and surface state."""

from .adapter import (
    EventIngestionAdapter,
    HostChannel,
    Subscription,
    STATUS_UPDATE_EVENT,
    OPEN_DEVTOOLS_COMMAND,
)
from .surface import OverlaySurface

__all__ = [
    "EventIngestionAdapter",
    "HostChannel",
    "Subscription",
    "OverlaySurface",
    "STATUS_UPDATE_EVENT",
    "OPEN_DEVTOOLS_COMMAND",
]
