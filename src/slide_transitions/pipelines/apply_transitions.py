"""Bytes-to-bytes pipeline: load the archive, find slides, inject transitions, re-pack.

The caller always gets a usable archive back. If the archive can't be opened or
can't be written back out, the result carries the original bytes untouched plus
the reason, rather than raising or handing back something half-patched.
"""

# mypy: disable-error-code="import-untyped"
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field

import pptx

from slide_transitions.archive import SerializeOptions, load_package, serialize_package
from slide_transitions.errors import CorruptArchiveError, SerializationError
from slide_transitions.internals.run_context import get_pipeline_run_id
from slide_transitions.models import PipelineState, TransitionReport, TransitionResult
from slide_transitions.processing.inject_transitions import inject_transitions
from slide_transitions.processing.slide_locator import find_slide_entries
from slide_transitions.processing.transition_catalog import (
    DEFAULT_SEQUENCE,
    TransitionSequence,
)

log = logging.getLogger("slide_transitions")


# region TransitionOptions
@dataclass(frozen=True)
class TransitionOptions:
    """Knobs for a single `apply_transitions()` call."""

    sequence: TransitionSequence = DEFAULT_SEQUENCE
    serialize: SerializeOptions = field(default_factory=SerializeOptions)
    # Parse each patched slide and leave it alone if the result isn't well-formed
    verify_slide_xml: bool = False
    # Re-open the finished archive with python-pptx before handing it back
    verify_output: bool = False


# endregion


# region apply_transitions
def apply_transitions(
    data: bytes, options: TransitionOptions | None = None
) -> TransitionResult:
    """Add transitions to every slide after the first in a .pptx archive.

    Args:
        data: The .pptx file contents
        options: Sequence, compression and verification settings; defaults if omitted

    Returns:
        TransitionResult. `result.ok` tells you whether `result.data` is the patched
        archive or, on failure, the input returned as-is (see `result.error`).
    """
    options = options or TransitionOptions()
    pipeline_id = get_pipeline_run_id()
    report = TransitionReport()
    state: PipelineState | None = None

    try:
        package = load_package(data)
        state = PipelineState.LOADED
        log.debug(f"Archive loaded: {len(package)} entries [pipeline:{pipeline_id}]")

        slide_paths = find_slide_entries(package)
        state = PipelineState.LOCATED

        state = PipelineState.INJECTING
        report = inject_transitions(
            package,
            slide_paths,
            sequence=options.sequence,
            verify_xml=options.verify_slide_xml,
        )

        output = serialize_package(package, options.serialize)
        if options.verify_output:
            _verify_presentation(output)
    except (CorruptArchiveError, SerializationError) as e:
        error = f"{type(e).__name__}: {e}"
        stage = state.value if state else "none"
        log.error(
            f"Transitions not applied (last stage reached: {stage}); returning the original file unchanged. "
            f"{error} [pipeline:{pipeline_id}]"
        )
        return TransitionResult(
            data=data, state=PipelineState.FAILED, report=report, error=error
        )

    log.info(
        f"All transitions applied: {len(report.transitioned)} of {report.slide_count} slides "
        f"({len(report.skipped)} skipped) [pipeline:{pipeline_id}]"
    )
    return TransitionResult(data=output, state=PipelineState.SERIALIZED, report=report)


# endregion


# region _verify_presentation
def _verify_presentation(data: bytes) -> None:
    """Make sure python-pptx can still open the re-packed archive."""
    try:
        prs = pptx.Presentation(io.BytesIO(data))
    except Exception as e:
        raise SerializationError(
            f"Re-packed archive can't be opened as a presentation: {e}"
        ) from e
    log.debug(f"Output verified: opens as a presentation with {len(prs.slides)} slides.")


# endregion
