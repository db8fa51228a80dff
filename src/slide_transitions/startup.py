"""Startup logic that has to happen before anything else: console encoding and logging."""

import argparse
import logging
import sys
from typing import Optional

from slide_transitions.internals.constants import SENTINEL
from slide_transitions.internals.logger import setup_logger
from slide_transitions.utils import get_debug_mode, setup_console_encoding, str_to_bool


# region initialize_application
def initialize_application() -> logging.Logger:
    """Common startup tasks. Exits with status 1 if the log folder can't be created."""

    # Must happen before any console output, including the logger's
    setup_console_encoding()

    try:
        log = setup_logger(enable_trace=_should_enable_trace_on_startup())
    except PermissionError as e:
        print(
            f"Cannot create log files: {e}. Check permissions on your Documents folder.",
            file=sys.stderr,
        )
        sys.exit(1)
    except OSError as e:
        print(
            f"Cannot create log files (disk full or I/O error): {e}",
            file=sys.stderr,
        )
        sys.exit(1)

    log.info("Starting slide_transitions Log.")
    return log


# endregion


# region _should_enable_trace_on_startup
def _should_enable_trace_on_startup() -> bool:
    """
    Decide whether the trace log starts enabled.

    Priority: --debug BOOL on the command line > SLIDE_TRANSITIONS_DEBUG env var >
    DEBUG_MODE_DEFAULT in constants.py
    """
    cli_flag = _check_for_cli_debug_arg()
    if cli_flag is not None:
        return cli_flag
    return get_debug_mode()


# endregion


# region _check_for_cli_debug_arg
def _check_for_cli_debug_arg() -> Optional[bool]:
    """
    Pull just the --debug value out of sys.argv, ignoring every other argument.
    Returns None if the flag wasn't given (or its value isn't a boolean).
    """
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--debug",
        dest="debug_mode",
        type=str_to_bool,
        metavar="BOOL",
        default=SENTINEL,
    )

    try:
        args, _ = parser.parse_known_args(sys.argv[1:])
    except SystemExit:
        # Bad value; the main parser will report it properly
        return None

    if args.debug_mode is SENTINEL:
        return None
    return args.debug_mode


# endregion
