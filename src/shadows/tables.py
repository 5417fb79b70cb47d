"""Static (legacy) shadow tables.

Fixed layer stacks per size class (base + emphasized), per color class and
inner shadow layers per size class. Used when no elevation is in effect.

Lookups are strict: a value outside the enumeration raises
``InvalidEnumError`` instead of being silently defaulted.
"""

from __future__ import annotations

from typing import Dict, Tuple, Union

from .layers import (
    BLACK,
    WHITE,
    ColorClass,
    LayerStack,
    ShadowColor,
    ShadowLayer,
    SizeClass,
)

__all__ = ["size_layers", "color_layers", "inner_layer"]

_PURPLE = ShadowColor(147, 51, 234)
_BLUE = ShadowColor(59, 130, 246)

_SIZE_TABLE: Dict[SizeClass, Tuple[LayerStack, LayerStack]] = {
    SizeClass.SMALL: (
        (ShadowLayer(y_offset=1, blur=2, alpha=0.05),),
        (ShadowLayer(y_offset=2, blur=4, alpha=0.08),),
    ),
    SizeClass.MEDIUM: (
        (ShadowLayer(y_offset=4, blur=6, alpha=0.07), ShadowLayer(y_offset=2, blur=4, alpha=0.06)),
        (ShadowLayer(y_offset=6, blur=8, alpha=0.1), ShadowLayer(y_offset=3, blur=5, alpha=0.08)),
    ),
    SizeClass.LARGE: (
        (ShadowLayer(y_offset=10, blur=15, alpha=0.1), ShadowLayer(y_offset=4, blur=6, alpha=0.05)),
        (ShadowLayer(y_offset=12, blur=20, alpha=0.15), ShadowLayer(y_offset=6, blur=8, alpha=0.08)),
    ),
    SizeClass.EXTRA_LARGE: (
        (ShadowLayer(y_offset=20, blur=25, alpha=0.1), ShadowLayer(y_offset=10, blur=10, alpha=0.04)),
        (ShadowLayer(y_offset=25, blur=30, alpha=0.15), ShadowLayer(y_offset=12, blur=12, alpha=0.06)),
    ),
}

# NEUTRAL has no table entry of its own: it defers to elevation or size.
_COLOR_TABLE: Dict[ColorClass, LayerStack] = {
    ColorClass.NEUTRAL: (),
    ColorClass.PURPLE: (
        ShadowLayer(y_offset=10, blur=15, alpha=0.25, color=_PURPLE),
        ShadowLayer(y_offset=4, blur=6, alpha=0.1, color=_PURPLE),
    ),
    ColorClass.BLUE: (
        ShadowLayer(y_offset=10, blur=15, alpha=0.25, color=_BLUE),
        ShadowLayer(y_offset=4, blur=6, alpha=0.1, color=_BLUE),
    ),
    ColorClass.WHITE: (ShadowLayer(y_offset=0, blur=0, spread=2, alpha=0.8, color=WHITE),),
}

_INNER_TABLE: Dict[SizeClass, ShadowLayer] = {
    SizeClass.SMALL: ShadowLayer(y_offset=1, blur=0, alpha=0.5, color=WHITE, inset=True),
    SizeClass.MEDIUM: ShadowLayer(y_offset=1, blur=2, alpha=0.05, color=BLACK, inset=True),
    SizeClass.LARGE: ShadowLayer(y_offset=2, blur=4, alpha=0.06, color=BLACK, inset=True),
    SizeClass.EXTRA_LARGE: ShadowLayer(y_offset=3, blur=6, alpha=0.08, color=BLACK, inset=True),
}


def size_layers(size: Union[SizeClass, str]) -> Tuple[LayerStack, LayerStack]:
    """Return ``(base, emphasized)`` stacks for a size class."""
    return _SIZE_TABLE[SizeClass.parse(size)]


def color_layers(color: Union[ColorClass, str]) -> LayerStack:
    return _COLOR_TABLE[ColorClass.parse(color)]


def inner_layer(size: Union[SizeClass, str]) -> ShadowLayer:
    return _INNER_TABLE[SizeClass.parse(size)]
