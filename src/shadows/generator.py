"""Elevation shadow generator.

Turns a scalar elevation (plus a blur multiplier) into an ordered stack of
shadow layers approximating realistic depth: several layers with growing
offset and blur and shrinking alpha, tightest layer first.

Rules:
- ``layer_count = clamp(floor(elevation / 2) + 1, 2, 6)``.
- Layer ``i`` uses ``progress = i / (layer_count - 1)`` and
    y_offset = round(e * (0.15 + progress * 0.85))
    blur     = round(e * blur_multiplier * (0.3 + progress * 1.2))
    alpha    = 0.14 - progress * 0.09
- The emphasized stack (hover/interactive affordance) either scales each
  base layer (two layers or fewer) or collapses to two wide, soft layers.
  These constants are a fixed legacy table; they are not derived.
- Elevation 0 means "no shadow": both stacks are empty.

Results are memoized per exact ``(elevation, blur_multiplier)`` key. The cache
has no eviction; callers draw elevations from a small design scale. Access is
guarded by an RLock so concurrent misses only duplicate work.

Rounding is half-away-from-zero, not Python's banker's rounding.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import sys
from threading import RLock
from typing import Dict, Optional, Tuple

from .errors import OutOfRangeElevationError, ShadowConfigError
from .layers import LayerStack, ShadowLayer

__all__ = [
    "GeneratedShadow",
    "CacheInfo",
    "ShadowLayerGenerator",
    "layer_count",
    "generate",
    "single_layer",
    "default_generator",
    "cache_info",
    "clear_cache",
    "round_half_away",
    "max_elevation",
]

_logger = logging.getLogger(__name__)

MIN_LAYERS = 2
MAX_LAYERS = 6

# Emphasized stack for layer_count > 2: (offset factor, blur factor, alpha)
_COLLAPSED_EMPHASIS: Tuple[Tuple[float, float, float], ...] = (
    (0.6, 1.3, 0.16),
    (1.2, 2.0, 0.08),
)

# Largest factor any layer formula applies to elevation * blur
_MAX_SCALE = 2.0


def round_half_away(value: float) -> int:
    """Round to nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = math.floor(abs(value) + 0.5)
    return int(-magnitude if value < 0 else magnitude)


def _check_elevation(elevation: float) -> None:
    if isinstance(elevation, bool) or not isinstance(elevation, (int, float)):
        raise OutOfRangeElevationError(
            f"Elevation must be a number, got {type(elevation).__name__}",
            context={"elevation": elevation},
        )
    if elevation < 0 or elevation > sys.float_info.max or not math.isfinite(elevation):
        raise OutOfRangeElevationError(
            f"Elevation must be a finite value >= 0, got {elevation}",
            context={"elevation": elevation},
        )


def max_elevation(blur: float = 1) -> float:
    """Largest elevation whose layer products stay finite for ``blur``."""
    return sys.float_info.max / (_MAX_SCALE * max(1.0, blur))


def _check_magnitude(elevation: float, blur: float) -> None:
    # products must stay finite or rounding hits int(inf)
    if not math.isfinite(elevation * _MAX_SCALE * max(1.0, blur)):
        limit = max_elevation(blur)
        raise OutOfRangeElevationError(
            f"Elevation {elevation} exceeds the supported maximum {limit:g} for blur {blur}",
            context={"elevation": elevation, "blur": blur, "max_elevation": limit},
        )


def layer_count(elevation: float) -> int:
    _check_elevation(elevation)
    return min(MAX_LAYERS, max(MIN_LAYERS, math.floor(elevation / 2) + 1))


@dataclass(frozen=True)
class GeneratedShadow:
    base: LayerStack
    emphasized: LayerStack


@dataclass(frozen=True)
class CacheInfo:
    hits: int
    misses: int
    size: int


def _base_layers(elevation: float, blur: float, count: int) -> LayerStack:
    layers = []
    for i in range(count):
        progress = i / (count - 1)
        layers.append(
            ShadowLayer(
                y_offset=round_half_away(elevation * (0.15 + progress * 0.85)),
                blur=round_half_away(elevation * blur * (0.3 + progress * 1.2)),
                alpha=0.14 - progress * 0.09,
            )
        )
    return tuple(layers)


def _emphasized_layers(elevation: float, blur: float, base: LayerStack) -> LayerStack:
    if len(base) <= MIN_LAYERS:
        scaled = []
        for i, layer in enumerate(base):
            factor = 1.2 + i * 0.1
            scaled.append(
                ShadowLayer(
                    y_offset=round_half_away(layer.y_offset * factor),
                    blur=round_half_away(layer.blur * factor),
                    alpha=layer.alpha,
                )
            )
        return tuple(scaled)
    return tuple(
        ShadowLayer(
            y_offset=round_half_away(elevation * offset_factor),
            blur=round_half_away(elevation * blur * blur_factor),
            alpha=alpha,
        )
        for offset_factor, blur_factor, alpha in _COLLAPSED_EMPHASIS
    )


class ShadowLayerGenerator:
    """Memoizing elevation -> layer stack generator."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._cache: Dict[Tuple[float, float], GeneratedShadow] = {}
        self._hits = 0
        self._misses = 0

    def generate(self, elevation: float, blur: float = 1) -> GeneratedShadow:
        _check_elevation(elevation)
        if (
            isinstance(blur, bool)
            or not isinstance(blur, (int, float))
            or not math.isfinite(blur)
            or not blur > 0
        ):
            raise ShadowConfigError(
                f"Blur multiplier must be finite and > 0, got {blur!r}", context={"blur": blur}
            )
        _check_magnitude(elevation, blur)
        key = (elevation, blur)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._hits += 1
                return cached
            self._misses += 1
            result = self._compute(elevation, blur)
            self._cache[key] = result
        _logger.debug("generated shadow stack elevation=%s blur=%s", elevation, blur)
        return result

    @staticmethod
    def _compute(elevation: float, blur: float) -> GeneratedShadow:
        if elevation == 0:
            return GeneratedShadow(base=(), emphasized=())
        base = _base_layers(elevation, blur, layer_count(elevation))
        return GeneratedShadow(base=base, emphasized=_emphasized_layers(elevation, blur, base))

    def cache_info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(hits=self._hits, misses=self._misses, size=len(self._cache))

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0


def single_layer(elevation: float) -> Optional[ShadowLayer]:
    """Lightweight one-layer shadow for performance-sensitive callers.

    Returns ``None`` ("no shadow") for elevation 0.
    """
    _check_elevation(elevation)
    _check_magnitude(elevation, 1)
    if elevation == 0:
        return None
    return ShadowLayer(
        y_offset=round_half_away(elevation * 0.5),
        blur=round_half_away(elevation * 1.5),
        spread=round_half_away(elevation * -0.1),
        alpha=0.15 - elevation * 0.003,
    )


# Process-wide default instance (stateless wrappers below)
_default_generator = ShadowLayerGenerator()


def default_generator() -> ShadowLayerGenerator:
    return _default_generator


def generate(elevation: float, blur: float = 1) -> GeneratedShadow:
    return _default_generator.generate(elevation, blur)


def cache_info() -> CacheInfo:
    return _default_generator.cache_info()


def clear_cache() -> None:
    _default_generator.clear()
