"""Text-level helpers for slide XML.

We edit slide parts as strings rather than round-tripping them through a parser,
so the markup we don't touch stays byte-for-byte what the generator wrote.
A parser is only used, optionally, to check the result is still well-formed.
"""

import logging
import re
import xml.etree.ElementTree as ET

from slide_transitions.errors import SlideMutationWarning
from slide_transitions.internals.constants import SLIDE_ROOT_TAG, TRANSITION_TAG

log = logging.getLogger("slide_transitions")

_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)

# "<p:transition" followed by whitespace, "/" or ">", so <p:transitionFoo> doesn't count
_TRANSITION_START_RE = re.compile(rf"<{re.escape(TRANSITION_TAG)}[\s/>]")

_CLOSING_ROOT_RE = re.compile(rf"</{re.escape(SLIDE_ROOT_TAG)}\s*>\Z")


# region has_transition
def has_transition(xml: str) -> bool:
    """True if the slide already carries a transition element (comments are ignored)."""
    return _TRANSITION_START_RE.search(_COMMENT_RE.sub("", xml)) is not None


# endregion


# region find_closing_root_tag
def find_closing_root_tag(xml: str) -> int | None:
    """Offset of the slide's closing root tag, or None if the document doesn't end with one.

    In a well-formed document the root's closing tag is the last piece of markup;
    only whitespace, comments and processing instructions may follow it. We peel
    those off the end and then require the closing tag, so a stray "</p:sld>"
    inside a trailing comment is never picked. ("<" can't appear unescaped in an
    attribute value, so attributes can't fake it either.)
    """
    text = xml.rstrip()
    while True:
        if text.endswith("-->"):
            start = text.rfind("<!--")
        elif text.endswith("?>"):
            start = text.rfind("<?")
        else:
            break
        if start == -1:
            return None
        text = text[:start].rstrip()

    match = _CLOSING_ROOT_RE.search(text)
    if match is None:
        return None
    return match.start()


# endregion


# region insert_transition
def insert_transition(xml: str, markup: str, path: str = "<slide>") -> str:
    """Return `xml` with `markup` placed immediately before the closing root tag.

    Raises:
        SlideMutationWarning: If there's no closing root tag to insert before.
    """
    index = find_closing_root_tag(xml)
    if index is None:
        raise SlideMutationWarning(path, f"no closing </{SLIDE_ROOT_TAG}> tag found")
    return xml[:index] + markup + xml[index:]


# endregion


# region parse_xml_blob
def parse_xml_blob(xml_blob: bytes) -> ET.Element:
    """Parse encoded slide XML, honouring its XML declaration."""
    try:
        return ET.fromstring(xml_blob)
    except ET.ParseError as e:
        log.debug(f"Malformed XML: {e}")
        raise ValueError(f"XML is malformed: {e}") from e


# endregion
