"""Status model and display derivation."""

from .snapshot import StatusSnapshot
from .display import (
    DisplayMode,
    DisplayState,
    TextSizeTier,
    MODE_LABELS,
    MODE_ICONS,
    MODE_ANIMATIONS,
    TEXT_SIZE_CLASSES,
    derive_display_state,
    resolve_mode,
    text_size_tier,
)

__all__ = [
    "StatusSnapshot",
    "DisplayMode",
    "DisplayState",
    "TextSizeTier",
    "MODE_LABELS",
    "MODE_ICONS",
    "MODE_ANIMATIONS",
    "TEXT_SIZE_CLASSES",
    "derive_display_state",
    "resolve_mode",
    "text_size_tier",
]
