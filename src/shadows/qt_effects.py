"""Qt widget adapter for resolved shadow descriptors.

Qt Widgets have no native CSS ``box-shadow`` and accept only one graphics
effect per widget, so a descriptor is emulated with a single
QGraphicsDropShadowEffect built from the outermost (widest) layer of the
chosen stack. An empty stack clears any existing effect rather than
attaching an invisible one.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QGraphicsDropShadowEffect, QWidget

from .engine import ResolvedShadow
from .layers import ShadowDescriptor, ShadowLayer

__all__ = [
    "layer_color",
    "build_drop_shadow_effect",
    "apply_descriptor",
    "apply_resolved",
]


def layer_color(layer: ShadowLayer) -> QColor:
    alpha = max(0, min(255, int(round(layer.alpha * 255))))
    return QColor(layer.color.red, layer.color.green, layer.color.blue, alpha)


def build_drop_shadow_effect(layer: ShadowLayer) -> QGraphicsDropShadowEffect:
    effect = QGraphicsDropShadowEffect()
    effect.setBlurRadius(layer.blur)
    effect.setOffset(layer.x_offset, layer.y_offset)
    effect.setColor(layer_color(layer))
    return effect


def _dominant_layer(descriptor: ShadowDescriptor, emphasized: bool) -> Optional[ShadowLayer]:
    stack = descriptor.emphasized_layers if emphasized else descriptor.base_layers
    if not stack:
        return None
    return max(stack, key=lambda layer: (layer.blur, layer.y_offset))


def apply_descriptor(
    widget: QWidget, descriptor: ShadowDescriptor, *, emphasized: bool = False
) -> Optional[QGraphicsDropShadowEffect]:
    """Attach the descriptor's dominant layer as a drop shadow effect.

    Returns the attached effect, or None when the widget was cleared.
    """
    layer = _dominant_layer(descriptor, emphasized)
    if layer is None:
        widget.setGraphicsEffect(None)  # type: ignore[arg-type]
        return None
    effect = build_drop_shadow_effect(layer)
    widget.setGraphicsEffect(effect)
    return effect


def apply_resolved(
    widget: QWidget, resolved: ResolvedShadow, *, emphasized: bool = False
) -> Optional[QGraphicsDropShadowEffect]:
    return apply_descriptor(widget, resolved.descriptor, emphasized=emphasized)
