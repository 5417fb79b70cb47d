"""Visual state classification.

Picks the active visual state from a caller request and three already
classified interaction booleans. Pure function, re-evaluated on every signal
change; there are no hidden transitions beyond the priority table:

    active > hovered > focused > default

The "auto" request is modelled as its own variant (module-level ``AUTO``)
rather than a magic string mixed into the state names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .errors import ShadowConfigError

__all__ = [
    "VisualState",
    "BUILTIN_STATES",
    "InteractionFlags",
    "StateRequest",
    "AUTO",
    "resolve_state",
]

AUTO_LABEL = "auto"


class VisualState:
    """Built-in state names. Custom string labels are equally valid states."""

    DEFAULT = "default"
    HOVER = "hover"
    ACTIVE = "active"
    FOCUS = "focus"
    DISABLED = "disabled"
    ENTERING = "entering"
    EXITING = "exiting"
    ANIMATING = "animating"


BUILTIN_STATES = frozenset(
    {
        VisualState.DEFAULT,
        VisualState.HOVER,
        VisualState.ACTIVE,
        VisualState.FOCUS,
        VisualState.DISABLED,
        VisualState.ENTERING,
        VisualState.EXITING,
        VisualState.ANIMATING,
    }
)


@dataclass(frozen=True)
class InteractionFlags:
    active: bool = False
    hovered: bool = False
    focused: bool = False


@dataclass(frozen=True)
class StateRequest:
    """Either an explicit state (``state`` set) or auto-detection (``state`` None)."""

    state: Optional[str] = None

    @property
    def is_auto(self) -> bool:
        return self.state is None

    @classmethod
    def explicit(cls, state: str) -> "StateRequest":
        if not isinstance(state, str) or not state or state == AUTO_LABEL:
            raise ShadowConfigError(f"Invalid explicit state: {state!r}", context={"state": state})
        return cls(state)

    @classmethod
    def parse(cls, value: Union["StateRequest", str, None]) -> "StateRequest":
        """Map caller input onto the two variants.

        ``"auto"`` -> AUTO, ``None`` -> explicit default, other strings -> explicit.
        """
        if isinstance(value, StateRequest):
            return value
        if value is None:
            return cls.explicit(VisualState.DEFAULT)
        if value == AUTO_LABEL:
            return AUTO
        return cls.explicit(value)


AUTO = StateRequest()


def resolve_state(
    auto_detect: bool,
    requested: Union[StateRequest, str, None],
    flags: InteractionFlags = InteractionFlags(),
) -> str:
    request = StateRequest.parse(requested)
    if not request.is_auto:
        return request.state  # type: ignore[return-value]
    if not auto_detect:
        return VisualState.DEFAULT
    if flags.active:
        return VisualState.ACTIVE
    if flags.hovered:
        return VisualState.HOVER
    if flags.focused:
        return VisualState.FOCUS
    return VisualState.DEFAULT
