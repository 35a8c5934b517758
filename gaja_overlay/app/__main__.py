"""Module entrypoint for `python -m gaja_overlay.app`."""

import sys

from gaja_overlay.app import run_app


def main():
    sys.exit(run_app())


if __name__ == "__main__":
    main()
