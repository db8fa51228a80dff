"""Exception types raised while patching a presentation archive.

Two of these are fatal for a whole run (the archive can't be opened, or can't be
written back out). The rest are local to a single entry or slide, and the pipeline
catches them, logs them, and keeps going.
"""


class TransitionsError(Exception):
    """Base class for every error raised by slide_transitions."""


class CorruptArchiveError(TransitionsError):
    """The input bytes could not be read as a ZIP container."""


class SerializationError(TransitionsError):
    """Re-packing the (possibly mutated) entries into a ZIP container failed."""


class EntryNotFoundError(TransitionsError, KeyError):
    """An entry path was requested that the package doesn't contain."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"No entry named '{self.path}' in package"


class SlideMutationWarning(TransitionsError, UserWarning):
    """A single slide couldn't be given a transition. Never fatal for the run."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
