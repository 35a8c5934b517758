"""Devtools shortcut handling, local and global."""

import threading
from typing import Optional, Callable

from .config import get_display_server
from .logging_utils import get_logger

logger = get_logger("hotkeys")

# pynput GlobalHotKeys syntax for F12 and Ctrl+Shift+I
DEVTOOLS_HOTKEYS = ("<f12>", "<ctrl>+<shift>+i")


def matches_devtools_shortcut(key: str, ctrl: bool = False, shift: bool = False) -> bool:
    """True for F12, or for Ctrl+Shift+I.

    `key` is a key name as reported by the window ("F12", "I", "i").
    """
    if not key:
        return False
    if key.upper() == "F12":
        return True
    return ctrl and shift and key.upper() == "I"


class HotkeyManager:
    """Global devtools hotkeys.

    The overlay is click-through and never takes focus, so window key
    events alone can't reach it; on X11 pynput listens system-wide.
    """

    def __init__(self):
        self._display_server = get_display_server()
        self._hotkey_listener = None
        self._running = False
        self._lock = threading.Lock()
        self._on_devtools: Optional[Callable[[], None]] = None

    def set_callbacks(self, on_devtools: Optional[Callable[[], None]] = None):
        """Set callback functions for hotkey events."""
        self._on_devtools = on_devtools

    def start(self) -> bool:
        """
        Start listening for global hotkeys.

        Returns:
            True if started successfully
        """
        with self._lock:
            if self._running:
                return True

            if self._display_server != "x11":
                logger.warning(
                    f"Global hotkeys not supported on {self._display_server}. "
                    "Use `gaja-overlay-trigger devtools` from a system shortcut"
                )
                return False

            if not self._on_devtools:
                return False

            try:
                from pynput import keyboard

                hotkeys = {combo: self._on_devtools for combo in DEVTOOLS_HOTKEYS}
                self._hotkey_listener = keyboard.GlobalHotKeys(hotkeys)
                self._hotkey_listener.start()
                self._running = True
                logger.info(f"Hotkeys registered: {', '.join(hotkeys.keys())}")
                return True

            except Exception as e:
                logger.error(f"Failed to start hotkey listener: {e}")
                return False

    def stop(self) -> None:
        """Stop listening for hotkeys."""
        with self._lock:
            if not self._running:
                return

            if self._hotkey_listener is not None:
                try:
                    self._hotkey_listener.stop()
                except Exception as e:
                    logger.debug(f"Hotkey listener stop failed: {e}")
                self._hotkey_listener = None

            self._running = False
            logger.info("Hotkey listener stopped")

    @property
    def is_running(self) -> bool:
        """Check if hotkey listener is running."""
        return self._running

    @property
    def display_server(self) -> str:
        """Get detected display server."""
        return self._display_server

    @staticmethod
    def is_supported() -> bool:
        """Check if global hotkeys are supported."""
        return get_display_server() == "x11"


# Global hotkey manager instance
hotkey_manager = HotkeyManager()
