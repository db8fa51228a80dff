# models.py
"""Data models for located slides and the outcome of a transitions run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# region SlideEntry
@dataclass(frozen=True)
class SlideEntry:
    """A slide part inside a package, with the ordinal parsed out of its name."""

    path: str  # e.g. "ppt/slides/slide3.xml"
    ordinal: int  # e.g. 3


# endregion


# region SlideStatus
class SlideStatus(Enum):
    """What happened to a single slide during injection."""

    FIRST_SLIDE = "first_slide"  # Position 0 is never touched
    TRANSITIONED = "transitioned"
    ALREADY_PRESENT = "already_present"
    NO_CLOSING_TAG = "no_closing_tag"
    FAILED = "failed"


# endregion


# region SlideOutcome
@dataclass(frozen=True)
class SlideOutcome:
    """Per-slide record kept in the run report."""

    position: int
    path: str
    status: SlideStatus
    transition_id: str | None = None
    detail: str | None = None


# endregion


# region TransitionReport
@dataclass
class TransitionReport:
    """Collected slide outcomes for one run, in processing order."""

    outcomes: list[SlideOutcome] = field(default_factory=list)

    def add(self, outcome: SlideOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def slide_count(self) -> int:
        return len(self.outcomes)

    def with_status(self, status: SlideStatus) -> list[SlideOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def transitioned(self) -> list[SlideOutcome]:
        return self.with_status(SlideStatus.TRANSITIONED)

    @property
    def skipped(self) -> list[SlideOutcome]:
        """Slides after the first that didn't get a transition, for whatever reason."""
        return [
            o
            for o in self.outcomes
            if o.status not in (SlideStatus.FIRST_SLIDE, SlideStatus.TRANSITIONED)
        ]

    def summary(self) -> dict[str, int]:
        """Count of slides per status, for logs and the run manifest."""
        return {
            status.value: len(self.with_status(status)) for status in SlideStatus
        }


# endregion


# region PipelineState
class PipelineState(Enum):
    """Where a transitions run ended up."""

    LOADED = "loaded"
    LOCATED = "located"
    INJECTING = "injecting"
    SERIALIZED = "serialized"
    FAILED = "failed"


# endregion


# region TransitionResult
@dataclass
class TransitionResult:
    """Output of `apply_transitions()`.

    `data` is always usable: the patched archive when `ok` is True, the
    untouched input when it's False (with `error` explaining why).
    """

    data: bytes
    state: PipelineState
    report: TransitionReport = field(default_factory=TransitionReport)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.state == PipelineState.SERIALIZED


# endregion
