"""Shadow configuration records and boundary validation.

``StateParameters`` is a partial record: every field is optional and an
absent field (``None``) falls through the merge chain instead of meaning
zero. ``EffectiveConfig`` maps visual state names to parameters and carries
an optional transition and auto-detect flag.

Validation happens at construction time: size/color strings are coerced to
their enums (unknown values raise ``InvalidEnumError``), negative elevation
raises ``OutOfRangeElevationError`` and opacity/blur are range checked.

Plain mappings (e.g. loaded from JSON) are accepted via ``from_mapping``:

    EffectiveConfig.from_mapping({
        "states": {"default": {"elevation": 2}, "hover": {"elevation": 4}},
        "transition": {"duration_ms": 200, "easing": "ease-out"},
        "auto_detect": True,
    })
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
import math
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from .errors import OutOfRangeElevationError, ShadowConfigError
from .layers import BLACK, ColorClass, ShadowColor, ShadowLayer, SizeClass
from .motion import TransitionSpec

__all__ = [
    "StateParameters",
    "EffectiveConfig",
    "InnerShadow",
    "parse_states",
]

InnerShadow = Union[bool, ShadowLayer]

_STATE_KEYS = frozenset({"elevation", "color", "size", "opacity", "blur", "inner_shadow"})
_LAYER_KEYS = frozenset({"y_offset", "blur", "alpha", "spread", "x_offset", "color", "inset"})


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_layer(raw: Mapping[str, Any]) -> ShadowLayer:
    unknown = set(raw) - _LAYER_KEYS
    if unknown:
        raise ShadowConfigError(
            f"Unknown inner shadow keys: {sorted(unknown)}", context={"keys": sorted(unknown)}
        )
    data = dict(raw)
    color = data.get("color", BLACK)
    if not isinstance(color, ShadowColor):
        try:
            data["color"] = ShadowColor(*color)
        except (TypeError, ValueError) as e:
            raise ShadowConfigError(f"Invalid inner shadow color: {color!r}") from e
    data.setdefault("inset", True)
    try:
        return ShadowLayer(**data)
    except TypeError as e:
        raise ShadowConfigError(f"Incomplete inner shadow layer: {dict(raw)!r}") from e


@dataclass(frozen=True)
class StateParameters:
    elevation: Optional[float] = None
    color: Optional[ColorClass] = None
    size: Optional[SizeClass] = None
    opacity: Optional[float] = None
    blur: Optional[float] = None
    inner_shadow: Optional[InnerShadow] = None

    def __post_init__(self) -> None:
        if self.elevation is not None:
            if not _is_number(self.elevation) or not math.isfinite(self.elevation):
                raise OutOfRangeElevationError(
                    f"elevation must be a finite number, got {self.elevation!r}",
                    context={"elevation": self.elevation},
                )
            if self.elevation < 0:
                raise OutOfRangeElevationError(
                    f"elevation must be >= 0, got {self.elevation}",
                    context={"elevation": self.elevation},
                )
        if self.color is not None:
            object.__setattr__(self, "color", ColorClass.parse(self.color))
        if self.size is not None:
            object.__setattr__(self, "size", SizeClass.parse(self.size))
        if self.opacity is not None and not (_is_number(self.opacity) and 0.0 <= self.opacity <= 1.0):
            raise ShadowConfigError(
                f"opacity must be between 0 and 1, got {self.opacity!r}",
                context={"opacity": self.opacity},
            )
        if self.blur is not None and not (
            _is_number(self.blur) and math.isfinite(self.blur) and self.blur > 0
        ):
            raise ShadowConfigError(
                f"blur multiplier must be finite and > 0, got {self.blur!r}", context={"blur": self.blur}
            )
        if isinstance(self.inner_shadow, Mapping):
            object.__setattr__(self, "inner_shadow", _parse_layer(self.inner_shadow))
        elif self.inner_shadow is not None and not isinstance(self.inner_shadow, (bool, ShadowLayer)):
            raise ShadowConfigError(
                f"inner_shadow must be a bool or a layer, got {self.inner_shadow!r}",
                context={"inner_shadow": self.inner_shadow},
            )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "StateParameters":
        unknown = set(raw) - _STATE_KEYS
        if unknown:
            raise ShadowConfigError(
                f"Unknown state parameter keys: {sorted(unknown)}",
                context={"keys": sorted(unknown)},
            )
        return cls(**raw)

    @classmethod
    def coerce(cls, value: Union["StateParameters", Mapping[str, Any]]) -> "StateParameters":
        if isinstance(value, StateParameters):
            return value
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        raise ShadowConfigError(f"Cannot build state parameters from {type(value).__name__}")

    def defined(self) -> Dict[str, Any]:
        """Return only the fields that carry a value."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    @property
    def is_empty(self) -> bool:
        return not self.defined()


def parse_states(
    raw: Optional[Mapping[str, Union[StateParameters, Mapping[str, Any]]]],
) -> Mapping[str, StateParameters]:
    """Validate a state-name -> parameters mapping (read-only result)."""
    if not raw:
        return MappingProxyType({})
    parsed: Dict[str, StateParameters] = {}
    for name, params in raw.items():
        if not isinstance(name, str) or not name:
            raise ShadowConfigError(f"State names must be non-empty strings, got {name!r}")
        parsed[name] = StateParameters.coerce(params)
    return MappingProxyType(parsed)


@dataclass(frozen=True)
class EffectiveConfig:
    states: Mapping[str, StateParameters] = field(default_factory=lambda: MappingProxyType({}))
    transition: Optional[TransitionSpec] = None
    auto_detect: Optional[bool] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "states", parse_states(self.states))
        if isinstance(self.transition, Mapping):
            try:
                spec = TransitionSpec(**self.transition)
            except TypeError as e:
                raise ShadowConfigError(f"Invalid transition: {dict(self.transition)!r}") from e
            object.__setattr__(self, "transition", spec)

    def state(self, name: str) -> Optional[StateParameters]:
        return self.states.get(name)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "EffectiveConfig":
        unknown = set(raw) - {"states", "transition", "auto_detect"}
        if unknown:
            raise ShadowConfigError(
                f"Unknown configuration keys: {sorted(unknown)}",
                context={"keys": sorted(unknown)},
            )
        return cls(
            states=raw.get("states") or {},
            transition=raw.get("transition"),
            auto_detect=raw.get("auto_detect"),
        )
