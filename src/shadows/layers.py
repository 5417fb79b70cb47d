"""Shadow data model: size/color classes, layers and descriptors.

Everything here is immutable. A ``ShadowLayer`` is one composited shadow
primitive; a ``ShadowDescriptor`` is the terminal output of resolution and
groups the base stack, the emphasized (hover/interactive) stack and an
optional inner layer.

Layer order inside a stack is significant: layers are composited
back-to-front with the tightest (smallest offset) layer first.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from .errors import InvalidEnumError

__all__ = [
    "SizeClass",
    "ColorClass",
    "ShadowColor",
    "ShadowLayer",
    "ShadowDescriptor",
    "LayerStack",
    "BLACK",
    "WHITE",
]


class _ParsableEnum(Enum):
    """Enum base with strict string coercion for the configuration boundary."""

    @classmethod
    def parse(cls, value: Union[str, "_ParsableEnum"]):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise InvalidEnumError(
                f"Unknown {cls.__name__} {value!r} (expected one of: {allowed})",
                context={"enum": cls.__name__, "value": value},
            ) from None


class SizeClass(_ParsableEnum):
    SMALL = "sm"
    MEDIUM = "md"
    LARGE = "lg"
    EXTRA_LARGE = "xl"


class ColorClass(_ParsableEnum):
    """Shadow tint class. ``NEUTRAL`` defers to elevation or size."""

    NEUTRAL = "default"
    PURPLE = "purple"  # accent A
    BLUE = "blue"  # accent B
    WHITE = "white"  # outline


@dataclass(frozen=True)
class ShadowColor:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not (0 <= channel <= 255):
                raise ValueError(f"Color channel out of range: {channel}")


BLACK = ShadowColor(0, 0, 0)
WHITE = ShadowColor(255, 255, 255)


@dataclass(frozen=True)
class ShadowLayer:
    """One shadow primitive.

    Attributes
    ----------
    y_offset: int
        Vertical offset in px.
    blur: int
        Blur radius in px.
    alpha: float
        Opacity of the shadow color (0..1).
    spread: int | None
        Optional spread radius in px; ``None`` means "not specified".
    x_offset: int
        Horizontal offset in px (always 0 for generated layers).
    color: ShadowColor
        Base RGB of the shadow.
    inset: bool
        True when the layer represents an inner shadow.
    """

    y_offset: int
    blur: int
    alpha: float
    spread: Optional[int] = None
    x_offset: int = 0
    color: ShadowColor = BLACK
    inset: bool = False

    def attenuated(self, factor: float) -> "ShadowLayer":
        """Return a copy whose alpha is multiplied by ``factor``."""
        return replace(self, alpha=self.alpha * factor)


LayerStack = Tuple[ShadowLayer, ...]


@dataclass(frozen=True)
class ShadowDescriptor:
    base_layers: LayerStack = ()
    emphasized_layers: LayerStack = ()
    inner_layer: Optional[ShadowLayer] = None
    # base/emphasized layers come from the fixed size/color tables
    tabulated: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.base_layers and not self.emphasized_layers and self.inner_layer is None

    def attenuated(self, factor: float) -> "ShadowDescriptor":
        """Scale every layer's alpha (inner layer included) by ``factor``."""
        inner = self.inner_layer.attenuated(factor) if self.inner_layer is not None else None
        return replace(
            self,
            base_layers=tuple(layer.attenuated(factor) for layer in self.base_layers),
            emphasized_layers=tuple(layer.attenuated(factor) for layer in self.emphasized_layers),
            inner_layer=inner,
        )

    def with_inner(self, layer: Optional[ShadowLayer]) -> "ShadowDescriptor":
        return replace(self, inner_layer=layer)
