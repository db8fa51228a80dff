"""Add slide transitions to generated PowerPoint (.pptx) files.

Library use::

    from slide_transitions import apply_transitions

    result = apply_transitions(pptx_bytes)
    if not result.ok:
        print(result.error)  # result.data is the input, unchanged
    patched = result.data
"""

from slide_transitions.errors import (
    CorruptArchiveError,
    EntryNotFoundError,
    SerializationError,
    SlideMutationWarning,
    TransitionsError,
)
from slide_transitions.models import PipelineState, SlideStatus, TransitionResult
from slide_transitions.pipelines.apply_transitions import (
    TransitionOptions,
    apply_transitions,
)
from slide_transitions.processing.transition_catalog import (
    DEFAULT_SEQUENCE,
    TRANSITIONS,
    TransitionSequence,
)

__version__ = "0.1.0"

__all__ = [
    "CorruptArchiveError",
    "DEFAULT_SEQUENCE",
    "EntryNotFoundError",
    "PipelineState",
    "SerializationError",
    "SlideMutationWarning",
    "SlideStatus",
    "TRANSITIONS",
    "TransitionOptions",
    "TransitionResult",
    "TransitionSequence",
    "TransitionsError",
    "apply_transitions",
    "__version__",
]
