"""CSS syntax rendering for resolved shadows.

Pure string builders for targets that need literal CSS:

- ``filter_css`` joins per-layer ``drop-shadow(...)`` functions with single
  spaces in stack order (``none`` for an empty stack).
- ``box_shadow_css`` renders one layer as a box-shadow value, prefixed with
  ``inset`` for inner layers.

Number formatting mirrors JavaScript's: integral values print without a
trailing ``.0`` and other floats use the shortest round-trip form, so output
matches strings produced by web front ends for the same layers.
"""

from __future__ import annotations

from typing import Dict, Iterable

from .engine import ResolvedShadow
from .layers import ShadowColor, ShadowLayer
from .motion import TransitionSpec

__all__ = [
    "format_number",
    "rgba",
    "drop_shadow",
    "filter_css",
    "box_shadow_css",
    "transition_css",
    "style_properties",
]


def format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def rgba(color: ShadowColor, alpha: float) -> str:
    return f"rgba({color.red}, {color.green}, {color.blue}, {format_number(alpha)})"


def _length(value: float, unitless_zero: bool) -> str:
    if value == 0 and unitless_zero:
        return "0"
    return f"{format_number(value)}px"


def _offsets(layer: ShadowLayer, unitless_zero: bool = False) -> str:
    # x is always written bare when zero
    parts = [_length(layer.x_offset, True), _length(layer.y_offset, unitless_zero)]
    parts.append(_length(layer.blur, unitless_zero))
    if layer.spread is not None:
        parts.append(_length(layer.spread, unitless_zero))
    return " ".join(parts)


def drop_shadow(layer: ShadowLayer, *, unitless_zero: bool = False) -> str:
    return f"drop-shadow({_offsets(layer, unitless_zero)} {rgba(layer.color, layer.alpha)})"


def filter_css(layers: Iterable[ShadowLayer], *, unitless_zero: bool = False) -> str:
    """Join ``drop-shadow`` functions in stack order, ``none`` for no layers.

    Generated stacks keep ``0px`` for zero lengths; fixed table layers are
    written with bare ``0`` (``unitless_zero=True``).
    """
    rendered = [drop_shadow(layer, unitless_zero=unitless_zero) for layer in layers]
    return " ".join(rendered) if rendered else "none"


def box_shadow_css(layer: ShadowLayer | None, *, unitless_zero: bool = False) -> str:
    if layer is None:
        return "none"
    value = f"{_offsets(layer, unitless_zero)} {rgba(layer.color, layer.alpha)}"
    return f"inset {value}" if layer.inset else value


def transition_css(spec: TransitionSpec, properties: Iterable[str] = ("filter", "box-shadow")) -> str:
    return ", ".join(f"{prop} {spec.duration_ms}ms {spec.easing}" for prop in properties)


def style_properties(resolved: ResolvedShadow, *, emphasized: bool = False) -> Dict[str, str]:
    """Map a resolved shadow onto CSS property -> value pairs.

    The lightweight single-layer path (no merged parameters) renders as
    ``box-shadow``; everything else renders as a ``filter`` with the inner
    layer, if any, as ``box-shadow``.
    """
    descriptor = resolved.descriptor
    layers = descriptor.emphasized_layers if emphasized else descriptor.base_layers
    if resolved.parameters is None:
        return {
            "box-shadow": box_shadow_css(layers[0] if layers else None),
            "transition": transition_css(resolved.transition, ("box-shadow",)),
        }
    style = {"filter": filter_css(layers, unitless_zero=descriptor.tabulated)}
    if descriptor.inner_layer is not None:
        style["box-shadow"] = box_shadow_css(descriptor.inner_layer, unitless_zero=True)
    style["transition"] = transition_css(resolved.transition)
    return style
