"""Configuration management for Gaja Overlay."""

import json
import os
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import List, Optional

# Application constants (single source of truth in meta.py)
from .meta import APP_NAME, APP_VERSION

# Paths
CONFIG_DIR = Path.home() / ".config" / APP_NAME
CONFIG_FILE = CONFIG_DIR / "config.json"
LOG_DIR = CONFIG_DIR / "logs"
LOCK_FILE = CONFIG_DIR / "app.lock"
IPC_SOCKET_NAME = f"{APP_NAME}-ipc"

# Assistant client endpoints
DEFAULT_CLIENT_PORTS = [5001, 5000]
DEFAULT_FALLBACK_PORT = 5001
SERVER_PORT = 8001  # main assistant server, never polled by the overlay
PORT_ENV_VAR = "GAJA_PORT"
STATUS_PATH = "/api/status"
STREAM_PATH = "/status/stream"

OVERLAY_THEMES = ("dark", "light")


@dataclass
class Settings:
    """User settings with defaults."""

    client_host: str = "localhost"
    client_ports: List[int] = field(default_factory=lambda: list(DEFAULT_CLIENT_PORTS))
    fallback_port: int = DEFAULT_FALLBACK_PORT
    probe_timeout: float = 2.0  # seconds
    stream_timeout: float = 5.0  # connect
    stream_read_timeout: float = 60.0  # longest silence tolerated on an open stream
    poll_timeout: float = 3.0
    poll_interval: float = 1.0
    reconnect_delay: float = 5.0
    offline_retry_delay: float = 10.0
    auto_hide_sec: float = 30.0
    click_through: bool = True
    overlay_theme: str = "dark"  # dark/light
    overlay_opacity: float = 1.0
    global_hotkeys: bool = True

    def validate(self) -> None:
        """Validate and clamp settings to valid ranges."""
        if not isinstance(self.client_host, str) or not self.client_host.strip():
            self.client_host = "localhost"
        ports = []
        for port in self.client_ports or []:
            try:
                port = int(port)
            except (TypeError, ValueError):
                continue
            if 0 < port < 65536 and port != SERVER_PORT and port not in ports:
                ports.append(port)
        self.client_ports = ports or list(DEFAULT_CLIENT_PORTS)
        try:
            self.fallback_port = int(self.fallback_port)
        except (TypeError, ValueError):
            self.fallback_port = DEFAULT_FALLBACK_PORT
        if not 0 < self.fallback_port < 65536 or self.fallback_port == SERVER_PORT:
            self.fallback_port = DEFAULT_FALLBACK_PORT
        self.probe_timeout = max(0.5, min(30.0, float(self.probe_timeout)))
        self.stream_timeout = max(0.5, min(60.0, float(self.stream_timeout)))
        self.stream_read_timeout = max(5.0, min(600.0, float(self.stream_read_timeout)))
        self.poll_timeout = max(0.5, min(30.0, float(self.poll_timeout)))
        self.poll_interval = max(0.2, min(10.0, float(self.poll_interval)))
        self.reconnect_delay = max(0.5, min(120.0, float(self.reconnect_delay)))
        self.offline_retry_delay = max(1.0, min(300.0, float(self.offline_retry_delay)))
        self.auto_hide_sec = max(1.0, float(self.auto_hide_sec))
        self.click_through = bool(self.click_through)
        if self.overlay_theme not in OVERLAY_THEMES:
            self.overlay_theme = "dark"
        self.overlay_opacity = max(0.1, min(1.0, float(self.overlay_opacity)))
        self.global_hotkeys = bool(self.global_hotkeys)

    def resolve_fallback_port(self) -> int:
        """Port used when no client answers; GAJA_PORT wins over settings."""
        raw = os.environ.get(PORT_ENV_VAR, "").strip()
        if raw:
            try:
                port = int(raw)
            except ValueError:
                port = 0
            if 0 < port < 65536 and port != SERVER_PORT:
                return port
        return self.fallback_port


class ConfigManager:
    """Manages loading and saving configuration."""

    def __init__(self):
        self._settings: Optional[Settings] = None
        self._ensure_dirs()

    def _ensure_dirs(self) -> None:
        """Create necessary directories."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        LOG_DIR.mkdir(parents=True, exist_ok=True)

    @property
    def settings(self) -> Settings:
        """Get current settings, loading from file if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> Settings:
        """Load settings from config file."""
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE, "r", encoding="utf-8") as f:
                    data = json.load(f)
                settings = Settings(
                    **{
                        k: v
                        for k, v in data.items()
                        if k in Settings.__dataclass_fields__
                    }
                )
                settings.validate()
                return settings
            except (json.JSONDecodeError, TypeError, ValueError, AttributeError):
                pass
        return Settings()

    def save(self, settings: Optional[Settings] = None) -> None:
        """Save settings to config file."""
        if settings is not None:
            self._settings = settings
        if self._settings is not None:
            self._settings.validate()
            CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
            with open(CONFIG_FILE, "w", encoding="utf-8") as f:
                json.dump(asdict(self._settings), f, indent=2, ensure_ascii=False)

    def update(self, **kwargs) -> None:
        """Update specific settings."""
        for key, value in kwargs.items():
            if hasattr(self.settings, key):
                setattr(self.settings, key, value)
        self.save()


# Global config instance
config = ConfigManager()


def is_wayland() -> bool:
    """Check if running under Wayland."""
    return os.environ.get("XDG_SESSION_TYPE") == "wayland"


def get_display_server() -> str:
    """Get current display server type."""
    session_type = os.environ.get("XDG_SESSION_TYPE", "").lower()
    if session_type == "wayland":
        return "wayland"
    elif session_type == "x11":
        return "x11"
    # Fallback detection
    if os.environ.get("WAYLAND_DISPLAY"):
        return "wayland"
    if os.environ.get("DISPLAY"):
        return "x11"
    return "unknown"
