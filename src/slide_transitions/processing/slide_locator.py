"""Find the slide parts of a package and put them in display order."""

import logging
import re

from slide_transitions.archive import Package
from slide_transitions.internals.constants import SLIDE_PATH_PATTERN
from slide_transitions.models import SlideEntry

log = logging.getLogger("slide_transitions")

_SLIDE_PATH_RE = re.compile(SLIDE_PATH_PATTERN)


# region slide_ordinal
def slide_ordinal(path: str) -> int | None:
    """Return the number embedded in a slide part's name, or None if the path isn't a slide part.

    >>> slide_ordinal("ppt/slides/slide12.xml")
    12
    >>> slide_ordinal("ppt/slideLayouts/slideLayout1.xml") is None
    True
    """
    match = _SLIDE_PATH_RE.match(path)
    if match is None:
        return None
    return int(match.group(1))


# endregion


# region locate_slides
def locate_slides(package: Package) -> list[SlideEntry]:
    """Collect every slide part, sorted by ordinal as a number (slide10 comes after slide2).

    Sorting doesn't depend on the order entries happen to sit in the archive.
    Two names with the same ordinal (slide1.xml and slide01.xml) fall back to path
    order, which is logged because a generator shouldn't produce that.
    """
    slides: list[SlideEntry] = []
    for path in package.list_entries():
        ordinal = slide_ordinal(path)
        if ordinal is not None:
            slides.append(SlideEntry(path=path, ordinal=ordinal))

    slides.sort(key=lambda s: (s.ordinal, s.path))

    seen: set[int] = set()
    for slide in slides:
        if slide.ordinal in seen:
            log.warning(
                f"More than one slide part has ordinal {slide.ordinal} ({slide.path}); ordering these by name."
            )
        seen.add(slide.ordinal)

    log.info(f"Found {len(slides)} slides")
    return slides


# endregion


# region find_slide_entries
def find_slide_entries(package: Package) -> list[str]:
    """Slide part paths in display order. Empty if the package has no slides."""
    return [slide.path for slide in locate_slides(package)]


# endregion
