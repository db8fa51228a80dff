# io.py
"""File I/O for pptx decks: validate inputs, read bytes, write results."""

import logging
from datetime import datetime
from pathlib import Path

from slide_transitions.internals import constants
from slide_transitions.internals.define_config import UserConfig
from slide_transitions.internals.run_context import get_pipeline_run_id

log = logging.getLogger("slide_transitions")

# Anything bigger than this is almost certainly not what the user meant to pass in
_LARGE_FILE_BYTES = 500 * 1024 * 1024


# region Path Helpers
def validate_path(user_path: str | Path) -> Path:
    """Ensure filepath exists and is a file."""
    path = Path(user_path)
    pipeline_id = get_pipeline_run_id()
    if not path.exists():
        log.error(f"File not found: {user_path} [pipeline:{pipeline_id}]")
        raise FileNotFoundError(f"File not found: {user_path}")
    if not path.is_file():
        log.error(
            f"Path is not a file (might be a directory): {user_path} [pipeline:{pipeline_id}]"
        )
        raise ValueError(f"Path is not a file: {user_path}")
    return path


def validate_pptx_path(user_path: str | Path) -> Path:
    """Validates the filepath exists and is actually a pptx file."""
    path = validate_path(user_path)
    pipeline_id = get_pipeline_run_id()

    if path.suffix.lower() == ".ppt":
        log.error(f"Unsupported .ppt file: {path} [pipeline:{pipeline_id}]")
        raise ValueError(
            "This tool only supports .pptx files right now. Please convert your .ppt file to .pptx format first."
        )
    if path.suffix.lower() != ".pptx":
        log.error(
            f"Wrong file extension: expected .pptx, got {path.suffix} [pipeline:{pipeline_id}]"
        )
        raise ValueError(f"Expected a .pptx file, but got: {path.suffix}")
    return path


def build_output_path(cfg: UserConfig, input_path: Path) -> Path:
    """Where to write the result: cfg.output_pptx if set, otherwise
    <output folder>/<input stem>_transitions_<timestamp>.pptx."""
    explicit = cfg.get_output_pptx_file()
    if explicit is not None:
        return explicit

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    filename = f"{input_path.stem}{constants.OUTPUT_FILENAME_SUFFIX}_{timestamp}.pptx"
    return cfg.get_output_folder() / filename


# endregion


# region Disk I/O - Read
def read_pptx_bytes(pptx_path: Path) -> bytes:
    """Read the whole deck into memory."""
    pipeline_id = get_pipeline_run_id()
    path = validate_pptx_path(pptx_path)

    try:
        data = path.read_bytes()
    except PermissionError as e:
        log.error(f"Permission denied reading {path} [pipeline:{pipeline_id}]: {e}")
        raise PermissionError(
            f"Could not read {path}: file may be open in another program"
        ) from e

    if not data:
        log.error(f"Input file is empty: {path} [pipeline:{pipeline_id}]")
        raise ValueError(f"Input file is empty: {path}")
    if len(data) > _LARGE_FILE_BYTES:
        log.warning(
            f"{path} is {len(data) // (1024 * 1024)} MB ... that seems a bit large! [pipeline:{pipeline_id}]"
        )

    log.info(f"Read {len(data)} bytes from {path} [pipeline:{pipeline_id}]")
    return data


# endregion


# region Disk I/O - Write
def save_output(data: bytes, output_path: Path) -> Path:
    """Write the result bytes to disk, creating the parent folder if needed."""
    pipeline_id = get_pipeline_run_id()
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        output_path.write_bytes(data)
        log.info(f"Successfully saved to {output_path}. [pipeline:{pipeline_id}]")
    except PermissionError as e:
        log.error(f"Save failed due to permission error [pipeline:{pipeline_id}]: {e}")
        raise PermissionError(
            "Save failed: File may be open in another program"
        ) from e
    except OSError as e:
        log.error(f"Save failed in [pipeline:{pipeline_id}]: {e}")
        raise OSError(f"Save failed (disk space or IO issue): {e}") from e

    return output_path


# endregion
