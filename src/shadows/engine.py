"""Shadow resolution engine (composition root).

``ShadowResolutionEngine.resolve`` turns one ``ShadowRequest`` into a
``ResolvedShadow`` in fixed steps:

1. classify the active visual state (``state.resolve_state``);
2. merge configuration sources for that state (``merge``);
3. select layers with strict precedence: elevation > color > size.
   Elevation wins whenever it is defined, even when a color or size class is
   also set; a non-neutral color beats the size table;
4. attach the inner layer when requested (size table entry, or an explicit
   layer passed through verbatim);
5. attenuate every layer's alpha by ``opacity`` when it is below 1
   (multiplicative, existing per-layer alpha is kept as the base);
6. assemble the descriptor and the effective transition.

The engine is stateless apart from the generator cache it delegates to, so a
single instance can be shared and re-invoked on every input change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Mapping, Optional, Union

from . import generator as _generator
from .config import EffectiveConfig, StateParameters, parse_states
from .layers import ColorClass, ShadowDescriptor, ShadowLayer
from .merge import (
    ConfigRef,
    ResolvedParameters,
    apply_fallbacks,
    merge_state,
    resolve_auto_detect,
    resolve_config,
)
from .motion import TransitionSpec, resolve_transition
from .presets import PresetRegistry, default_registry
from .state import AUTO, InteractionFlags, StateRequest, resolve_state
from .tables import color_layers, inner_layer, size_layers

__all__ = [
    "ShadowRequest",
    "ResolvedShadow",
    "ShadowResolutionEngine",
    "resolve_shadow",
]

_logger = logging.getLogger(__name__)

StateOverrides = Mapping[str, Union[StateParameters, Mapping[str, Any]]]


@dataclass(frozen=True)
class ShadowRequest:
    """Input surface consumed from the view binding.

    Attributes
    ----------
    state: StateRequest | str | None
        Requested state; ``"auto"`` (default) enables interaction detection.
    flags: InteractionFlags
        Already classified hovered/active/focused booleans.
    config: EffectiveConfig | Mapping | str | None
        Inline configuration or preset name.
    states: Mapping[str, StateParameters | Mapping]
        Inline per-state overrides (highest merge priority).
    defaults: StateParameters
        Flat fallback values used when no state entry defines a field.
    transition: TransitionSpec | None
        Per-instance transition override.
    use_box_shadow: bool
        Lightweight single-layer path, used when ``defaults.elevation`` is set.
    """

    state: Union[StateRequest, str, None] = AUTO
    flags: InteractionFlags = InteractionFlags()
    config: ConfigRef = None
    states: Optional[StateOverrides] = None
    defaults: StateParameters = field(default_factory=StateParameters)
    transition: Optional[TransitionSpec] = None
    use_box_shadow: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "state", StateRequest.parse(self.state))
        object.__setattr__(self, "states", parse_states(self.states))
        if isinstance(self.defaults, Mapping):
            object.__setattr__(self, "defaults", StateParameters.from_mapping(self.defaults))


@dataclass(frozen=True)
class ResolvedShadow:
    """Output surface handed to the view binding."""

    state: str
    descriptor: ShadowDescriptor
    transition: TransitionSpec
    parameters: Optional[ResolvedParameters] = None


class ShadowResolutionEngine:
    def __init__(
        self,
        presets: Optional[PresetRegistry] = None,
        ambient: Optional[EffectiveConfig] = None,
        generator: Optional[_generator.ShadowLayerGenerator] = None,
    ) -> None:
        self.presets = presets if presets is not None else default_registry()
        self.ambient = ambient
        self.generator = generator if generator is not None else _generator.default_generator()

    def with_ambient(self, ambient: Optional[EffectiveConfig]) -> "ShadowResolutionEngine":
        """Return an engine sharing presets/cache but with another ambient config."""
        return ShadowResolutionEngine(presets=self.presets, ambient=ambient, generator=self.generator)

    def resolve(self, request: ShadowRequest = ShadowRequest()) -> ResolvedShadow:
        resolved_config = resolve_config(request.config, self.presets, self.ambient)
        auto_detect = resolve_auto_detect(resolved_config)
        state = resolve_state(auto_detect, request.state, request.flags)
        transition = resolve_transition(
            request.transition,
            resolved_config.transition if resolved_config is not None else None,
            self.ambient.transition if self.ambient is not None else None,
        )

        if request.use_box_shadow and request.defaults.elevation is not None:
            layer = _generator.single_layer(request.defaults.elevation)
            stack = (layer,) if layer is not None else ()
            return ResolvedShadow(
                state=state,
                descriptor=ShadowDescriptor(base_layers=stack, emphasized_layers=stack),
                transition=transition,
            )

        merged = merge_state(
            state, ambient=self.ambient, resolved=resolved_config, overrides=request.states
        )
        params = apply_fallbacks(merged, request.defaults)
        _logger.debug("resolving shadow state=%s params=%s", state, params)
        descriptor = self._select_layers(params)
        descriptor = descriptor.with_inner(self._inner_layer(params))
        if params.opacity < 1:
            descriptor = descriptor.attenuated(params.opacity)
        return ResolvedShadow(
            state=state, descriptor=descriptor, transition=transition, parameters=params
        )

    def _select_layers(self, params: ResolvedParameters) -> ShadowDescriptor:
        if params.elevation is not None:
            generated = self.generator.generate(params.elevation, params.blur)
            return ShadowDescriptor(base_layers=generated.base, emphasized_layers=generated.emphasized)
        if params.color is not ColorClass.NEUTRAL:
            layers = color_layers(params.color)
            return ShadowDescriptor(base_layers=layers, emphasized_layers=layers, tabulated=True)
        base, emphasized = size_layers(params.size)
        return ShadowDescriptor(base_layers=base, emphasized_layers=emphasized, tabulated=True)

    @staticmethod
    def _inner_layer(params: ResolvedParameters) -> Optional[ShadowLayer]:
        if isinstance(params.inner_shadow, ShadowLayer):
            return params.inner_shadow
        if params.inner_shadow:
            return inner_layer(params.size)
        return None


_default_engine: Optional[ShadowResolutionEngine] = None


def resolve_shadow(request: ShadowRequest = ShadowRequest(), **kwargs: Any) -> ResolvedShadow:
    """Resolve with a process-wide engine over the default preset registry.

    Keyword arguments build a ``ShadowRequest`` when ``request`` is omitted,
    e.g. ``resolve_shadow(config="card", state="hover")``.
    """
    global _default_engine
    if _default_engine is None:
        _default_engine = ShadowResolutionEngine()
    if kwargs:
        request = ShadowRequest(**kwargs)
    return _default_engine.resolve(request)
