"""Application metadata."""

APP_NAME = "gaja-overlay"
APP_VERSION = "0.3.0"
