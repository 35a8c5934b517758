"""Assistant status snapshot received from the host."""

from dataclasses import dataclass
from typing import Any, Mapping

from ..logging_utils import get_logger

logger = get_logger("state.snapshot")

FLAG_FIELDS = ("is_listening", "is_speaking", "wake_word_detected")


@dataclass(frozen=True)
class StatusSnapshot:
    """One complete statement of assistant activity at a point in time.

    The host does not keep the flags mutually exclusive; any combination
    may arrive and display derivation decides what wins.
    """

    text: str = ""
    is_listening: bool = False
    is_speaking: bool = False
    wake_word_detected: bool = False

    @classmethod
    def empty(cls) -> "StatusSnapshot":
        return cls()

    @classmethod
    def from_payload(cls, payload: Any) -> "StatusSnapshot":
        """Build a snapshot from a host payload.

        Missing or wrongly typed fields fall back to their defaults one by
        one, so a single bad field never discards the whole update. Extra
        keys such as ``visible`` and ``status`` are ignored.
        """
        if not isinstance(payload, Mapping):
            logger.warning(f"Ignoring non-object status payload: {payload!r}")
            return cls.empty()

        if "text" not in payload:
            logger.warning("Status field 'text' is missing, using ''")
        text = payload.get("text", "")
        if text is None:
            text = ""
        elif not isinstance(text, str):
            logger.warning(f"Status field 'text' has type {type(text).__name__}, using ''")
            text = ""

        flags = {}
        for name in FLAG_FIELDS:
            if name not in payload:
                logger.warning(f"Status field '{name}' is missing, using False")
                flags[name] = False
                continue
            value = payload[name]
            # bool only: 1/0 or "true" are treated as malformed
            if not isinstance(value, bool):
                logger.warning(
                    f"Status field '{name}' has type {type(value).__name__}, using False"
                )
                value = False
            flags[name] = value

        return cls(text=text, **flags)

    def to_payload(self) -> dict:
        return {
            "text": self.text,
            "is_listening": self.is_listening,
            "is_speaking": self.is_speaking,
            "wake_word_detected": self.wake_word_detected,
        }

    @property
    def has_activity(self) -> bool:
        return self.is_listening or self.is_speaking or self.wake_word_detected
