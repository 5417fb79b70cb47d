"""Transition timing for shadow state changes.

The engine does not animate anything; it only hands the view layer a
duration + easing pair. This module owns that pair (``TransitionSpec``),
validates easing strings and applies the reduced-motion preference.

Reduced motion:
- Bootstrapped from ``APP_PREFER_REDUCED_MOTION`` (see ``settings``).
- When enabled, resolved transitions keep their easing but collapse to a
  0 ms duration so state changes apply instantly.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Tuple

from . import settings
from .errors import ShadowConfigError

__all__ = [
    "TransitionSpec",
    "DEFAULT_TRANSITION",
    "parse_cubic_bezier",
    "validate_easing",
    "resolve_transition",
    "set_reduced_motion",
    "is_reduced_motion",
    "temporarily_reduced_motion",
]

CubicBezier = Tuple[float, float, float, float]

EASING_KEYWORDS = frozenset({"linear", "ease", "ease-in", "ease-out", "ease-in-out"})


def parse_cubic_bezier(spec: str) -> CubicBezier:
    """Parse ``'cubic-bezier(x1, y1, x2, y2)'`` into floats.

    x1 and x2 must lie in [0, 1] (CSS constraint); y values are free.
    """
    s = spec.strip().lower()
    if not (s.startswith("cubic-bezier(") and s.endswith(")")):
        raise ValueError(f"Invalid cubic-bezier format: {spec}")
    parts = [p.strip() for p in s[len("cubic-bezier(") : -1].split(",")]
    if len(parts) != 4:
        raise ValueError(f"cubic-bezier requires 4 components, got {len(parts)}: {spec}")
    try:
        x1, y1, x2, y2 = (float(p) for p in parts)
    except ValueError as e:
        raise ValueError(f"Non-numeric cubic-bezier value in {spec}") from e
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        raise ValueError(f"cubic-bezier x components must be within [0, 1]: {spec}")
    return x1, y1, x2, y2


def validate_easing(easing: str) -> str:
    normalized = easing.strip()
    if normalized.lower() in EASING_KEYWORDS:
        return normalized.lower()
    try:
        parse_cubic_bezier(normalized)
    except ValueError as e:
        raise ShadowConfigError(f"Unsupported easing: {easing!r}", context={"easing": easing}) from e
    return normalized


@dataclass(frozen=True)
class TransitionSpec:
    duration_ms: int = settings.DEFAULT_TRANSITION_MS
    easing: str = settings.DEFAULT_EASING

    def __post_init__(self) -> None:
        if isinstance(self.duration_ms, bool) or not isinstance(self.duration_ms, int):
            raise ShadowConfigError(
                f"duration_ms must be an int, got {self.duration_ms!r}",
                context={"duration_ms": self.duration_ms},
            )
        if self.duration_ms < 0:
            raise ShadowConfigError(
                f"duration_ms must be >= 0, got {self.duration_ms}",
                context={"duration_ms": self.duration_ms},
            )
        object.__setattr__(self, "easing", validate_easing(self.easing))


DEFAULT_TRANSITION = TransitionSpec()


# Reduced motion preference --------------------------------------------------
_reduced_motion: bool = settings.PREFER_REDUCED_MOTION


def set_reduced_motion(enabled: bool) -> None:
    global _reduced_motion
    _reduced_motion = bool(enabled)


def is_reduced_motion() -> bool:
    return _reduced_motion


@contextlib.contextmanager
def temporarily_reduced_motion(force: bool = True) -> Iterator[None]:
    """Override the reduced motion preference within a block (restored on exit)."""
    previous = _reduced_motion
    try:
        set_reduced_motion(force)
        yield
    finally:
        set_reduced_motion(previous)


def resolve_transition(*candidates: Optional[TransitionSpec]) -> TransitionSpec:
    """Return the first defined transition, else the default.

    Candidates are given highest priority first. The result honours the
    reduced motion preference.
    """
    spec = next((c for c in candidates if c is not None), DEFAULT_TRANSITION)
    if _reduced_motion and spec.duration_ms:
        return replace(spec, duration_ms=0)
    return spec
