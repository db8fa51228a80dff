"""The fixed set of transitions we know how to inject, and the order they're handed out in.

Everything here is built once at import time and is read-only afterwards, so it can
be shared between runs (and threads) freely.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

# Markup Compatibility namespace, used to wrap a transition that needs a fallback
MC_NAMESPACE = "http://schemas.openxmlformats.org/markup-compatibility/2006"

# PowerPoint 2015 extensions namespace, which is where Morph lives
P159_NAMESPACE = "http://schemas.microsoft.com/office/powerpoint/2015/09/main"


# region TransitionDefinition
@dataclass(frozen=True)
class TransitionDefinition:
    """One catalog entry: the markup for a single transition effect.

    If `fallback` is set, `requires` names the namespace prefix a player must
    understand to use `primary`; older players get `fallback` instead.
    """

    transition_id: str
    primary: str
    description: str = ""
    requires: str | None = None
    requires_namespace: str | None = None
    fallback: str | None = None

    def __post_init__(self) -> None:
        if self.fallback is not None and not (
            self.requires and self.requires_namespace
        ):
            raise ValueError(
                f"Transition '{self.transition_id}' has a fallback but doesn't say which feature it requires."
            )

    @property
    def has_fallback(self) -> bool:
        return self.fallback is not None

    @property
    def markup(self) -> str:
        """The fragment that goes into a slide's XML."""
        if self.fallback is None:
            return self.primary

        return (
            f'<mc:AlternateContent xmlns:mc="{MC_NAMESPACE}">'
            f'<mc:Choice xmlns:{self.requires}="{self.requires_namespace}" Requires="{self.requires}">'
            f"{self.primary}"
            f"</mc:Choice>"
            f"<mc:Fallback>{self.fallback}</mc:Fallback>"
            f"</mc:AlternateContent>"
        )


# endregion


# region catalog
_FADE = '<p:transition spd="slow"><p:fade/></p:transition>'

_DEFINITIONS = (
    TransitionDefinition(
        transition_id="morph",
        primary='<p:transition spd="slow"><p159:morph option="byObject"/></p:transition>',
        description="Morph (PowerPoint 2019 / Microsoft 365); falls back to fade",
        requires="p159",
        requires_namespace=P159_NAMESPACE,
        fallback=_FADE,
    ),
    TransitionDefinition(
        transition_id="push",
        primary='<p:transition spd="med"><p:push dir="l"/></p:transition>',
        description="Push from the right",
    ),
    TransitionDefinition(
        transition_id="cover",
        primary='<p:transition spd="med"><p:cover dir="l"/></p:transition>',
        description="Cover from the right",
    ),
    TransitionDefinition(
        transition_id="fade",
        primary=_FADE,
        description="Fade",
    ),
    TransitionDefinition(
        transition_id="wipe",
        primary='<p:transition spd="med"><p:wipe dir="d"/></p:transition>',
        description="Wipe downwards",
    ),
)

TRANSITIONS: Mapping[str, TransitionDefinition] = MappingProxyType(
    {d.transition_id: d for d in _DEFINITIONS}
)


def get_transition(transition_id: str) -> TransitionDefinition:
    """Look up a catalog entry, with a helpful error for unknown ids."""
    try:
        return TRANSITIONS[transition_id]
    except KeyError:
        raise ValueError(
            f"Unknown transition '{transition_id}'. Valid options: {', '.join(TRANSITIONS)}"
        ) from None


# endregion


# region TransitionSequence
@dataclass(frozen=True, init=False)
class TransitionSequence:
    """Repeating list of transition ids; slide position i gets ids[i % len(ids)]."""

    ids: tuple[str, ...]

    def __init__(self, ids: Iterable[str]) -> None:
        ids = tuple(ids)
        if not ids:
            raise ValueError("A transition sequence needs at least one transition.")
        for transition_id in ids:
            get_transition(transition_id)  # raises on unknown ids
        object.__setattr__(self, "ids", ids)

    def __len__(self) -> int:
        return len(self.ids)

    def for_position(self, position: int) -> str:
        return self.ids[position % len(self.ids)]


# Slide 2 gets push, slide 3 morph, slide 4 push, ...
DEFAULT_SEQUENCE = TransitionSequence(("morph", "push"))

# endregion
