"""Run the transitions pipeline for a config: read the file, patch it, save it, record the run."""

import logging
from pathlib import Path

from slide_transitions import io
from slide_transitions.internals.define_config import UserConfig
from slide_transitions.internals.manifest import RunManifest
from slide_transitions.internals.paths import user_log_dir_path
from slide_transitions.internals.run_context import (
    get_pipeline_run_id,
    get_session_id,
    start_pipeline_run,
)
from slide_transitions.models import TransitionResult
from slide_transitions.pipelines.apply_transitions import apply_transitions

log = logging.getLogger("slide_transitions")


# region run_pipeline
def run_pipeline(cfg: UserConfig) -> tuple[Path, TransitionResult]:
    """Validate the config, then patch the input deck and write the output file.

    If the deck can't be patched (corrupt archive, failed re-pack) the original
    bytes are still written to the output path, so there is always a usable file;
    check `result.ok` to tell the two apart.

    Returns:
        (output path, TransitionResult)

    Raises:
        ValueError / FileNotFoundError / PermissionError / OSError: for problems
        with the input or output files themselves.
    """
    cfg.pre_run_check()

    pipeline_id = start_pipeline_run()
    log.info(f"Initializing pipeline run. [pipeline:{pipeline_id}]")

    run_manifest = RunManifest(cfg, run_id=pipeline_id)
    run_manifest.start()

    log_pipeline_info(cfg)

    try:
        input_path = cfg.get_input_pptx_file()
        if input_path is None:
            raise ValueError("No input pptx file specified.")

        data = io.read_pptx_bytes(input_path)
        result = apply_transitions(data, cfg.to_transition_options())

        output_path = io.save_output(result.data, io.build_output_path(cfg, input_path))
    except Exception as e:
        run_manifest.fail(e)
        raise  # Re-raise so the CLI still sees the error

    if result.ok:
        run_manifest.complete(output_path, result.report)
        log.info(f"Pipeline complete [pipeline:{pipeline_id}]")
    else:
        run_manifest.fail(
            result.error or "unknown error", output_path=output_path, report=result.report
        )
        log.error(
            f"Pipeline failed; the original deck was copied to the output unchanged. [pipeline:{pipeline_id}]"
        )

    log.info(f"  Original: {input_path}")
    log.info(f"  -> Final:  {output_path}")
    log.info(f"See log: {user_log_dir_path()}")
    return output_path, result


# endregion


# region log_pipeline_info
def log_pipeline_info(cfg: UserConfig) -> None:
    """Print this pipeline run's run ID, session ID, and general config info to the log."""
    log.info("=== Pipeline Run Started ===")
    log.info(f"Run ID: {get_pipeline_run_id()}")
    log.info(f"Session ID: {get_session_id()}")
    log.info(f"Input: {cfg.input_pptx}")
    log.info(f"Sequence: {', '.join(cfg.sequence)}")
    log.info(f"Configuration: {cfg}")


# endregion
