"""Utilities for use across the entire program."""

import io
import logging
import os
import platform
import sys

from slide_transitions.internals import constants

log = logging.getLogger("slide_transitions")

DEBUG_ENV_VAR = "SLIDE_TRANSITIONS_DEBUG"


# region setup_console_encoding
def setup_console_encoding() -> None:
    """Configure UTF-8 encoding for the Windows console so non-ASCII file names print."""
    if platform.system() == "Windows":
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")


# endregion


# region get_debug_mode
def get_debug_mode() -> bool:
    """Determine debug mode from the SLIDE_TRANSITIONS_DEBUG env variable, else the constant default."""
    env_debug_str = os.environ.get(DEBUG_ENV_VAR)
    if env_debug_str is not None:
        try:
            return str_to_bool(env_debug_str)
        except ValueError:
            log.warning(
                f"Warning: Invalid value for {DEBUG_ENV_VAR} env var: '{env_debug_str}'. Using default."
            )

    return constants.DEBUG_MODE_DEFAULT


# endregion


# region str_to_bool
def str_to_bool(value: str) -> bool:
    """Convert strings like "True"/"no"/"1" to booleans"""
    normalized = value.lower().strip()
    if normalized in {"false", "f", "0", "no", "n"}:
        return False
    elif normalized in {"true", "t", "1", "yes", "y"}:
        return True
    else:
        log.warning(f"{value} is not a valid boolean value.")
        raise ValueError(f"{value} is not a valid boolean value.")


# endregion
