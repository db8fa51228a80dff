"""Insert transition markup into each slide after the first."""

import logging
from typing import Mapping, Sequence

from slide_transitions.archive import Package
from slide_transitions.errors import SlideMutationWarning
from slide_transitions.internals.run_context import get_pipeline_run_id
from slide_transitions.models import SlideOutcome, SlideStatus, TransitionReport
from slide_transitions.processing.slide_xml import (
    has_transition,
    insert_transition,
    parse_xml_blob,
)
from slide_transitions.processing.transition_catalog import (
    DEFAULT_SEQUENCE,
    TRANSITIONS,
    TransitionDefinition,
    TransitionSequence,
)

log = logging.getLogger("slide_transitions")


# region assign_transitions
def assign_transitions(
    slide_paths: Sequence[str], sequence: TransitionSequence = DEFAULT_SEQUENCE
) -> list[tuple[int, str, str]]:
    """Work out which transition each slide gets, as (position, path, transition_id).

    The first slide (position 0) never gets one: there's nothing to transition from.
    The choice only depends on position, so the same deck always gets the same result.
    """
    return [
        (position, path, sequence.for_position(position))
        for position, path in enumerate(slide_paths)
        if position >= 1
    ]


# endregion


# region inject_transitions
def inject_transitions(
    package: Package,
    slide_paths: Sequence[str],
    sequence: TransitionSequence = DEFAULT_SEQUENCE,
    catalog: Mapping[str, TransitionDefinition] = TRANSITIONS,
    verify_xml: bool = False,
) -> TransitionReport:
    """Add a transition to every slide but the first, mutating `package` in place.

    A slide that already has a transition, has no closing root tag, or fails for any
    other reason is left exactly as it was; the reason is logged and recorded in the
    returned report, and the loop moves on to the next slide.

    Args:
        package: The opened archive
        slide_paths: Slide part paths in display order (see slide_locator.find_slide_entries)
        sequence: Which transition goes to which position
        catalog: Transition id -> definition
        verify_xml: Parse each patched slide and keep the original if it isn't well-formed

    Returns:
        TransitionReport with one outcome per slide, in display order
    """
    pipeline_id = get_pipeline_run_id()
    report = TransitionReport()

    if slide_paths:
        report.add(SlideOutcome(0, slide_paths[0], SlideStatus.FIRST_SLIDE))

    for position, path, transition_id in assign_transitions(slide_paths, sequence):
        try:
            outcome = _inject_one(
                package, position, path, transition_id, catalog, verify_xml
            )
        except SlideMutationWarning as w:
            log.warning(
                f"Slide {position + 1} left unchanged: {w} [pipeline:{pipeline_id}]"
            )
            outcome = SlideOutcome(
                position, path, SlideStatus.FAILED, transition_id, detail=w.reason
            )
        except Exception as e:
            # One bad slide mustn't take the rest of the deck down with it.
            log.exception(
                f"Unexpected error on slide {position + 1} ({path}); leaving it unchanged. [pipeline:{pipeline_id}]"
            )
            outcome = SlideOutcome(
                position, path, SlideStatus.FAILED, transition_id, detail=str(e)
            )
        report.add(outcome)

    log.debug(f"Injection summary: {report.summary()} [pipeline:{pipeline_id}]")
    return report


# endregion


# region _inject_one
def _inject_one(
    package: Package,
    position: int,
    path: str,
    transition_id: str,
    catalog: Mapping[str, TransitionDefinition],
    verify_xml: bool,
) -> SlideOutcome:
    """Patch a single slide. Raises SlideMutationWarning when the patched XML doesn't parse."""
    xml = package.read_text(path)

    if has_transition(xml):
        log.info(f"Slide {position + 1}: already has a transition, skipping")
        return SlideOutcome(
            position,
            path,
            SlideStatus.ALREADY_PRESENT,
            detail="slide already has a transition",
        )

    definition = catalog[transition_id]

    try:
        patched = insert_transition(xml, definition.markup, path)
    except SlideMutationWarning as w:
        log.warning(f"Slide {position + 1} left unchanged: {w}")
        return SlideOutcome(
            position,
            path,
            SlideStatus.NO_CLOSING_TAG,
            transition_id,
            detail=w.reason,
        )

    if verify_xml:
        try:
            parse_xml_blob(patched.encode(package.text_encoding(path)))
        except ValueError as e:
            raise SlideMutationWarning(
                path, f"patched XML is not well-formed ({e})"
            ) from e

    package.write_text(path, patched)
    log.info(f"Slide {position + 1}: {transition_id}")
    return SlideOutcome(position, path, SlideStatus.TRANSITIONED, transition_id)


# endregion
