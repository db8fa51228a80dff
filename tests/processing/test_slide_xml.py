"""Tests for the text-level slide XML helpers."""

import pytest

from slide_transitions.errors import SlideMutationWarning
from slide_transitions.processing.slide_xml import (
    find_closing_root_tag,
    has_transition,
    insert_transition,
    parse_xml_blob,
)
from tests.helpers import make_slide_xml

MARKUP = '<p:transition spd="med"><p:push dir="l"/></p:transition>'


# region has_transition
@pytest.mark.parametrize(
    "body,expected",
    [
        ("", False),
        ('<p:transition spd="slow"><p:fade/></p:transition>', True),
        ("<p:transition/>", True),
        ("<p:transition\n  spd='fast'/>", True),
        ("<mc:AlternateContent><mc:Choice><p:transition/></mc:Choice></mc:AlternateContent>", True),
        # Similar names and commented-out markup don't count
        ("<p:transitionFoo/>", False),
        ("<!-- <p:transition/> -->", False),
        ("<p:timing/>", False),
    ],
)
def test_has_transition(body: str, expected: bool) -> None:
    assert has_transition(make_slide_xml(body=body)) is expected


# endregion


# region find_closing_root_tag
def test_finds_the_last_closing_tag() -> None:
    xml = make_slide_xml()
    assert find_closing_root_tag(xml) == xml.rindex("</p:sld>")


@pytest.mark.parametrize(
    "trailer",
    [
        "\n",
        "  \r\n\t",
        "<!-- </p:sld> -->",
        "\n<!-- a --><?pi data?>\n<!-- </p:sld> -->\n",
    ],
)
def test_trailing_misc_is_skipped(trailer: str) -> None:
    """A '</p:sld>' inside a trailing comment must not be picked."""
    xml = make_slide_xml(trailer=trailer)
    index = find_closing_root_tag(xml)
    assert index == make_slide_xml().rindex("</p:sld>")


def test_closing_tag_with_whitespace_is_found() -> None:
    xml = make_slide_xml().replace("</p:sld>", "</p:sld  >")
    assert find_closing_root_tag(xml) == xml.rindex("</p:sld")


@pytest.mark.parametrize(
    "xml",
    [
        "",
        "<p:sld>",
        "<p:sld><p:cSld/>",
        "<p:sld/>",
        "<p:sldLayout></p:sldLayout>",
        "<p:sld></p:sld>trailing text",
        "<p:sld></p:sld><!-- unterminated",
    ],
)
def test_no_closing_tag_returns_none(xml: str) -> None:
    assert find_closing_root_tag(xml) is None


# endregion


# region insert_transition
def test_insert_places_markup_right_before_closing_tag() -> None:
    xml = make_slide_xml(body="<p:clrMapOvr/>", trailer="\n")
    result = insert_transition(xml, MARKUP)

    assert result == xml.replace("</p:sld>", MARKUP + "</p:sld>")
    assert result.endswith(MARKUP + "</p:sld>\n")


def test_insert_leaves_everything_else_byte_identical() -> None:
    xml = make_slide_xml(body="<p:clrMapOvr/>")
    result = insert_transition(xml, MARKUP)
    assert result.replace(MARKUP, "", 1) == xml


def test_insert_ignores_closing_tag_in_trailing_comment() -> None:
    xml = make_slide_xml(trailer="<!-- </p:sld> -->")
    result = insert_transition(xml, MARKUP)
    assert result.endswith(MARKUP + "</p:sld><!-- </p:sld> -->")
    assert result.count(MARKUP) == 1


def test_insert_without_closing_tag_raises() -> None:
    with pytest.raises(SlideMutationWarning) as exc_info:
        insert_transition("<p:sld><p:cSld/>", MARKUP, path="ppt/slides/slide2.xml")

    assert exc_info.value.path == "ppt/slides/slide2.xml"
    assert "no closing" in exc_info.value.reason


# endregion


# region parse_xml_blob
def test_parse_xml_blob_accepts_slide_with_markup() -> None:
    xml = insert_transition(make_slide_xml(), MARKUP)
    root = parse_xml_blob(xml.encode("utf-8"))
    assert root.tag.endswith("}sld")


def test_parse_xml_blob_malformed_raises_value_error() -> None:
    with pytest.raises(ValueError, match="XML is malformed"):
        parse_xml_blob(b"<p:sld><unclosed></p:sld>")


# endregion
