"""Tests for assigning and injecting transitions slide by slide."""

import logging
from unittest.mock import patch

import pytest

from slide_transitions.archive import load_package
from slide_transitions.models import SlideStatus
from slide_transitions.processing import slide_xml
from slide_transitions.processing.inject_transitions import (
    assign_transitions,
    inject_transitions,
)
from slide_transitions.processing.slide_locator import find_slide_entries
from slide_transitions.processing.transition_catalog import (
    TRANSITIONS,
    TransitionDefinition,
    TransitionSequence,
)
from tests.helpers import deck_with_slides, make_slide_xml

PUSH = TRANSITIONS["push"].markup
MORPH = TRANSITIONS["morph"].markup


def _slides(n: int) -> list[str]:
    return [f"ppt/slides/slide{i}.xml" for i in range(1, n + 1)]


# region assign_transitions
def test_assignment_skips_first_slide_and_cycles() -> None:
    """Positions 1, 2, 3, 4 get sequence[1], sequence[0], sequence[1], sequence[0]."""
    assigned = assign_transitions(_slides(5))
    assert assigned == [
        (1, "ppt/slides/slide2.xml", "push"),
        (2, "ppt/slides/slide3.xml", "morph"),
        (3, "ppt/slides/slide4.xml", "push"),
        (4, "ppt/slides/slide5.xml", "morph"),
    ]


def test_assignment_with_custom_sequence() -> None:
    sequence = TransitionSequence(["fade", "wipe", "cover"])
    assigned = assign_transitions(_slides(4), sequence)
    assert [t for _, _, t in assigned] == ["wipe", "cover", "fade"]


@pytest.mark.parametrize("count", [0, 1])
def test_assignment_for_tiny_decks_is_empty(count: int) -> None:
    assert assign_transitions(_slides(count)) == []


def test_assignment_is_deterministic() -> None:
    assert assign_transitions(_slides(9)) == assign_transitions(_slides(9))


# endregion


# region inject_transitions
def test_every_slide_but_the_first_gets_its_transition() -> None:
    package = load_package(deck_with_slides(*(make_slide_xml() for _ in range(3))))
    original_first = package.read_bytes("ppt/slides/slide1.xml")

    report = inject_transitions(package, find_slide_entries(package))

    assert package.read_bytes("ppt/slides/slide1.xml") == original_first
    assert package.read_text("ppt/slides/slide2.xml").endswith(PUSH + "</p:sld>")
    assert package.read_text("ppt/slides/slide3.xml").endswith(MORPH + "</p:sld>")
    assert [o.status for o in report.outcomes] == [
        SlideStatus.FIRST_SLIDE,
        SlideStatus.TRANSITIONED,
        SlideStatus.TRANSITIONED,
    ]
    assert [o.transition_id for o in report.transitioned] == ["push", "morph"]
    assert package.modified_entries() == [
        "ppt/slides/slide2.xml",
        "ppt/slides/slide3.xml",
    ]


def test_injection_is_idempotent() -> None:
    package = load_package(deck_with_slides(*(make_slide_xml() for _ in range(4))))
    slides = find_slide_entries(package)
    inject_transitions(package, slides)
    after_first = {path: package.read_bytes(path) for path in slides}

    report = inject_transitions(package, slides)

    assert {path: package.read_bytes(path) for path in slides} == after_first
    assert report.summary()["already_present"] == 3
    assert report.transitioned == []


def test_existing_transition_is_kept_even_if_sequence_differs(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="slide_transitions")
    existing = make_slide_xml(body='<p:transition spd="fast"><p:wipe/></p:transition>')
    package = load_package(deck_with_slides(make_slide_xml(), existing))

    report = inject_transitions(package, find_slide_entries(package))

    assert package.read_text("ppt/slides/slide2.xml") == existing
    assert report.outcomes[1].status is SlideStatus.ALREADY_PRESENT
    assert "Slide 2: already has a transition" in caplog.text


def test_first_slide_is_never_touched_even_without_a_transition() -> None:
    package = load_package(deck_with_slides(make_slide_xml()))
    report = inject_transitions(package, find_slide_entries(package))

    assert package.modified_entries() == []
    assert [o.status for o in report.outcomes] == [SlideStatus.FIRST_SLIDE]


def test_empty_slide_list_gives_empty_report() -> None:
    package = load_package(deck_with_slides())
    report = inject_transitions(package, [])
    assert report.outcomes == []
    assert package.modified_entries() == []


def test_slide_without_closing_tag_is_skipped_and_run_continues(
    caplog: pytest.LogCaptureFixture,
) -> None:
    broken = "<p:sld><p:cSld/>"
    package = load_package(
        deck_with_slides(make_slide_xml(), broken, make_slide_xml())
    )

    report = inject_transitions(package, find_slide_entries(package))

    assert package.read_text("ppt/slides/slide2.xml") == broken
    assert package.read_text("ppt/slides/slide3.xml").endswith(MORPH + "</p:sld>")
    assert report.outcomes[1].status is SlideStatus.NO_CLOSING_TAG
    assert "Slide 2 left unchanged" in caplog.text


def test_unexpected_error_on_one_slide_does_not_stop_the_others(
    caplog: pytest.LogCaptureFixture,
) -> None:
    package = load_package(deck_with_slides(*(make_slide_xml() for _ in range(4))))
    real_insert = slide_xml.insert_transition

    def flaky_insert(xml: str, markup: str, path: str = "<slide>") -> str:
        if path == "ppt/slides/slide3.xml":
            raise RuntimeError("boom")
        return real_insert(xml, markup, path)

    with patch(
        "slide_transitions.processing.inject_transitions.insert_transition",
        side_effect=flaky_insert,
    ):
        report = inject_transitions(package, find_slide_entries(package))

    statuses = [o.status for o in report.outcomes]
    assert statuses == [
        SlideStatus.FIRST_SLIDE,
        SlideStatus.TRANSITIONED,
        SlideStatus.FAILED,
        SlideStatus.TRANSITIONED,
    ]
    assert report.outcomes[2].detail == "boom"
    assert "ppt/slides/slide3.xml" not in package.modified_entries()
    assert "Unexpected error on slide 3" in caplog.text


def test_verify_xml_keeps_original_when_result_is_malformed(
    caplog: pytest.LogCaptureFixture,
) -> None:
    # An undeclared prefix makes the patched slide unparseable
    bad_catalog = dict(TRANSITIONS)
    bad_catalog["push"] = TransitionDefinition(
        transition_id="push", primary="<x:transition/>"
    )
    package = load_package(deck_with_slides(make_slide_xml(), make_slide_xml()))
    original = package.read_bytes("ppt/slides/slide2.xml")

    report = inject_transitions(
        package, find_slide_entries(package), catalog=bad_catalog, verify_xml=True
    )

    assert package.read_bytes("ppt/slides/slide2.xml") == original
    assert report.outcomes[1].status is SlideStatus.FAILED
    assert "not well-formed" in (report.outcomes[1].detail or "")
    assert "Slide 2 left unchanged" in caplog.text


def test_verify_xml_passes_good_markup_through() -> None:
    package = load_package(deck_with_slides(make_slide_xml(), make_slide_xml()))
    report = inject_transitions(
        package, find_slide_entries(package), verify_xml=True
    )
    assert report.outcomes[1].status is SlideStatus.TRANSITIONED


def test_utf16_slide_is_patched_in_its_own_encoding() -> None:
    xml = "\ufeff" + make_slide_xml().replace("UTF-8", "UTF-16")
    data = deck_with_slides(make_slide_xml(), xml.encode("utf-16-le"))
    package = load_package(data)

    inject_transitions(package, find_slide_entries(package))

    raw = package.read_bytes("ppt/slides/slide2.xml")
    assert raw.decode("utf-16-le").endswith(PUSH + "</p:sld>")
    assert raw.startswith(b"\xff\xfe")


# endregion
