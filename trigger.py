#!/usr/bin/env python3
"""
IPC client for the running Gaja overlay.

Usage:
    trigger.py <command> [options]

Commands:
    show      - Show the overlay window
    hide      - Hide the overlay window
    status    - Print the host state as JSON
    devtools  - Open the devtools inspector
    quit      - Stop the overlay
    update    - Push a status: update [--text TEXT] [--listening] [--speaking] [--wake-word]
                [--status STATUS]

Useful for binding system shortcuts on Wayland and for testing the overlay
without a running assistant client.
"""

import argparse
import json
import sys
import time

from PyQt6.QtCore import QCoreApplication
from PyQt6.QtNetwork import QLocalSocket

# IPC socket name (must match gaja_overlay.config.IPC_SOCKET_NAME)
IPC_SOCKET_NAME = "gaja-overlay-ipc"

SIMPLE_COMMANDS = ("show", "hide", "status", "devtools", "quit")


def build_update_command(
    text: str = "",
    listening: bool = False,
    speaking: bool = False,
    wake_word: bool = False,
    status: str = "Manual",
) -> str:
    return json.dumps(
        {
            "command": "update_status",
            "status": status,
            "text": text,
            "is_listening": listening,
            "is_speaking": speaking,
            "wake_word_detected": wake_word,
        },
        ensure_ascii=False,
    )


def send_command(command: str, retries: int = 3) -> tuple[bool, str]:
    """
    Send command to the running overlay via IPC.

    Args:
        command: Raw command text (simple word or JSON object)
        retries: Number of retry attempts

    Returns:
        Tuple of (success, response)
    """
    # Qt networking needs a core application
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv)

    for attempt in range(retries):
        socket = QLocalSocket()
        socket.connectToServer(IPC_SOCKET_NAME)

        if socket.waitForConnected(1000):
            socket.write(command.encode("utf-8"))
            socket.flush()

            if socket.waitForReadyRead(2000):
                response = socket.readAll().data().decode("utf-8")
                socket.disconnectFromServer()
                return True, response

            socket.disconnectFromServer()
            return True, "ok"

        # Retry with backoff
        if attempt < retries - 1:
            time.sleep(0.1 * (attempt + 1))

    return False, "Could not connect to Gaja overlay"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Control a running Gaja overlay.",
    )
    parser.add_argument("command", choices=SIMPLE_COMMANDS + ("update",))
    parser.add_argument("--text", default="")
    parser.add_argument("--status", default="Manual")
    parser.add_argument("--listening", action="store_true")
    parser.add_argument("--speaking", action="store_true")
    parser.add_argument("--wake-word", dest="wake_word", action="store_true")
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.command == "update":
        command = build_update_command(
            text=args.text,
            listening=args.listening,
            speaking=args.speaking,
            wake_word=args.wake_word,
            status=args.status,
        )
    else:
        command = args.command

    success, response = send_command(command)

    if success:
        if args.command == "status" or response not in ("ok", ""):
            print(response)
        return 0
    print(f"Error: {response}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
