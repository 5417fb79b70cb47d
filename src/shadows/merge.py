"""Layered configuration merge.

For a given visual state, every parameter is taken from the first layer that
defines it, in this order (highest priority first):

    1. per-call inline state override      (request.states[state])
    2. resolved named/inline configuration (resolved.states[state])
    3. ambient configuration               (ambient.states[state])
    4. per-call flat default               (request.defaults)
    5. built-in default                    (settings.DEFAULT_*)

A field defined at a higher layer replaces the same field below it; fields
it does not define survive from lower layers. The order is an explicit list
(``merge_layers``), never dict-update order.

Named configuration lookups degrade gracefully: an unknown preset name falls
back to the ambient configuration with a logged warning.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from . import settings
from .config import EffectiveConfig, InnerShadow, StateParameters, parse_states
from .layers import ColorClass, SizeClass
from .presets import PresetRegistry

__all__ = [
    "ConfigRef",
    "ResolvedParameters",
    "resolve_config",
    "resolve_auto_detect",
    "merge_layers",
    "merge_state",
    "apply_fallbacks",
]

_logger = logging.getLogger(__name__)

ConfigRef = Union[EffectiveConfig, Mapping[str, Any], str, None]


@dataclass(frozen=True)
class ResolvedParameters:
    """Fully resolved state parameters (only ``elevation`` may stay None)."""

    elevation: Optional[float]
    color: ColorClass
    size: SizeClass
    opacity: float
    blur: float
    inner_shadow: InnerShadow


def resolve_config(
    ref: ConfigRef,
    presets: PresetRegistry,
    ambient: Optional[EffectiveConfig] = None,
) -> Optional[EffectiveConfig]:
    """Resolve a configuration reference to a concrete config.

    Inline records are returned as-is (mappings are validated first), names
    are looked up in ``presets``. ``None`` and unknown names resolve to
    ``ambient``.
    """
    if ref is None:
        return ambient
    if isinstance(ref, EffectiveConfig):
        return ref
    if isinstance(ref, str):
        found = presets.get(ref)
        if found is None:
            _logger.warning("unknown shadow preset %r; falling back to ambient configuration", ref)
            return ambient
        return found
    return EffectiveConfig.from_mapping(ref)


def resolve_auto_detect(resolved: Optional[EffectiveConfig]) -> bool:
    """Auto-detect flag of the resolved configuration, ``True`` when unset.

    The ambient configuration only contributes when it is itself the resolved
    one (no reference, or an unknown preset name).
    """
    if resolved is not None and resolved.auto_detect is not None:
        return resolved.auto_detect
    return True


def merge_layers(layers: Sequence[Optional[StateParameters]]) -> StateParameters:
    """Merge parameter layers given highest priority first.

    Per field the first defined value wins; ``None`` layers are skipped.
    """
    merged = {}
    for layer in layers:
        if layer is None:
            continue
        for name, value in layer.defined().items():
            merged.setdefault(name, value)
    return StateParameters(**merged)


def merge_state(
    state: str,
    *,
    ambient: Optional[EffectiveConfig] = None,
    resolved: Optional[EffectiveConfig] = None,
    overrides: Optional[Mapping[str, Union[StateParameters, Mapping[str, Any]]]] = None,
) -> StateParameters:
    """Merge the per-state entries of all configuration sources for ``state``.

    Returns an empty record when no source has an entry for the state.
    """
    inline = parse_states(overrides).get(state)
    return merge_layers(
        [
            inline,
            resolved.state(state) if resolved is not None else None,
            ambient.state(state) if ambient is not None else None,
        ]
    )


_BUILTIN_DEFAULTS = StateParameters(
    color=settings.DEFAULT_COLOR,
    size=settings.DEFAULT_SIZE,
    opacity=settings.DEFAULT_OPACITY,
    blur=settings.DEFAULT_BLUR,
    inner_shadow=False,
)


def apply_fallbacks(
    params: StateParameters, defaults: Optional[StateParameters] = None
) -> ResolvedParameters:
    """Fill absent fields from flat per-call defaults, then built-in defaults."""
    complete = merge_layers([params, defaults, _BUILTIN_DEFAULTS])
    return ResolvedParameters(**{f.name: getattr(complete, f.name) for f in fields(ResolvedParameters)})
