"""Layered shadow resolution package.

Contains the elevation shadow generator, static shadow tables, configuration
merge, state classification and the resolution engine. The Qt adapter lives
in ``shadows.qt_effects`` and is not imported here so the core stays free of
PyQt imports.
"""

from .errors import ShadowConfigError, InvalidEnumError, OutOfRangeElevationError  # noqa: F401
from .layers import (  # noqa: F401
    SizeClass,
    ColorClass,
    ShadowColor,
    ShadowLayer,
    ShadowDescriptor,
)
from .generator import (  # noqa: F401
    ShadowLayerGenerator,
    GeneratedShadow,
    generate,
    single_layer,
    layer_count,
    cache_info,
    clear_cache,
)
from .tables import size_layers, color_layers, inner_layer  # noqa: F401
from .motion import TransitionSpec, resolve_transition, set_reduced_motion  # noqa: F401
from .config import StateParameters, EffectiveConfig  # noqa: F401
from .state import VisualState, InteractionFlags, StateRequest, AUTO, resolve_state  # noqa: F401
from .presets import (  # noqa: F401
    PresetRegistry,
    BUILTIN_PRESETS,
    register_preset,
    get_preset,
    list_presets,
)
from .merge import merge_state, apply_fallbacks, resolve_config  # noqa: F401
from .engine import (  # noqa: F401
    ShadowRequest,
    ResolvedShadow,
    ShadowResolutionEngine,
    resolve_shadow,
)
from .css import filter_css, box_shadow_css, style_properties  # noqa: F401
