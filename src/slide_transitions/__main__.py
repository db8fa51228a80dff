"""Entry point: `python -m slide_transitions` or the `slide-transitions` console script."""

from __future__ import annotations

import logging
import sys

from slide_transitions import startup
from slide_transitions.cli import run as run_cli


def main() -> None:
    """Application entry point."""
    log: logging.Logger = startup.initialize_application()

    try:
        exit_code = run_cli()
    except Exception:
        log.exception("Unhandled exception - program crashed.")  # Logs full traceback
        raise  # Still crash, but now it's logged

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
