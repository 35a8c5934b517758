"""Display state derived from a status snapshot."""

from dataclasses import dataclass
from enum import Enum, auto

from .snapshot import StatusSnapshot


class DisplayMode(Enum):
    SPEAKING = auto()
    LISTENING = auto()
    WAKE_WORD = auto()
    IDLE = auto()


class TextSizeTier(Enum):
    NONE = auto()
    SHORT = auto()
    MEDIUM = auto()
    LONG = auto()
    VERY_LONG = auto()


MODE_LABELS = {
    DisplayMode.SPEAKING: "Mówię...",
    DisplayMode.LISTENING: "Słucham...",
    DisplayMode.WAKE_WORD: "Słucham po wake word...",
    DisplayMode.IDLE: "",
}

MODE_ICONS = {
    DisplayMode.SPEAKING: "🔊",
    DisplayMode.LISTENING: "🎤",
    DisplayMode.WAKE_WORD: "👂",
    DisplayMode.IDLE: "",
}

MODE_ANIMATIONS = {
    DisplayMode.SPEAKING: "speaking-animation",
    DisplayMode.LISTENING: "listening-animation",
    DisplayMode.WAKE_WORD: "wakeword-animation",
    DisplayMode.IDLE: "",
}

TEXT_SIZE_CLASSES = {
    TextSizeTier.NONE: "",
    TextSizeTier.SHORT: "short-text",
    TextSizeTier.MEDIUM: "medium-text",
    TextSizeTier.LONG: "long-text",
    TextSizeTier.VERY_LONG: "very-long-text",
}

# Inclusive upper bounds on len(text), checked in order
TEXT_SIZE_LIMITS = (
    (50, TextSizeTier.SHORT),
    (150, TextSizeTier.MEDIUM),
    (300, TextSizeTier.LONG),
)


def resolve_mode(snapshot: StatusSnapshot) -> DisplayMode:
    """Pick a single mode; speaking beats listening beats wake word."""
    if snapshot.is_speaking:
        return DisplayMode.SPEAKING
    if snapshot.is_listening:
        return DisplayMode.LISTENING
    if snapshot.wake_word_detected:
        return DisplayMode.WAKE_WORD
    return DisplayMode.IDLE


def text_size_tier(text: str) -> TextSizeTier:
    if not text:
        return TextSizeTier.NONE
    length = len(text)
    for limit, tier in TEXT_SIZE_LIMITS:
        if length <= limit:
            return tier
    return TextSizeTier.VERY_LONG


@dataclass(frozen=True)
class DisplayState:
    mode: DisplayMode
    status_text: str
    icon: str
    animation_class: str
    text: str
    text_size_tier: TextSizeTier
    is_active: bool
    show_ball: bool
    is_visible: bool

    @property
    def show_status_text(self) -> bool:
        return self.is_active and bool(self.status_text)

    @property
    def text_size_class(self) -> str:
        return TEXT_SIZE_CLASSES[self.text_size_tier]


def derive_display_state(snapshot: StatusSnapshot) -> DisplayState:
    """Map a snapshot to everything the render layer needs.

    Total over any snapshot: no lookups can miss and nothing raises.
    """
    mode = resolve_mode(snapshot)
    active = snapshot.has_activity
    return DisplayState(
        mode=mode,
        status_text=MODE_LABELS[mode],
        icon=MODE_ICONS[mode],
        animation_class=MODE_ANIMATIONS[mode],
        text=snapshot.text,
        text_size_tier=text_size_tier(snapshot.text),
        is_active=active,
        # the ball is owned separately from the background chrome
        show_ball=active,
        is_visible=active or snapshot.text != "",
    )
