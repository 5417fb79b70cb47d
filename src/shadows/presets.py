"""Named shadow configuration presets.

A preset is a reusable ``EffectiveConfig`` referenced by name. The default
registry is seeded with ``card``, ``button``, ``modal`` and ``floating``;
callers may register more or shadow a built-in by registering the same
name again (later registrations win).

``PresetRegistry.derive`` builds a child registry layered over its parent,
the way nested configuration scopes stack: child entries shadow the
parent's, the parent itself is left untouched.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .config import EffectiveConfig
from .motion import TransitionSpec

__all__ = [
    "PresetRegistry",
    "BUILTIN_PRESETS",
    "default_registry",
    "register_preset",
    "get_preset",
    "list_presets",
]

_logger = logging.getLogger(__name__)

PresetSource = Union[EffectiveConfig, Mapping[str, Any]]


def _coerce(config: PresetSource) -> EffectiveConfig:
    if isinstance(config, EffectiveConfig):
        return config
    return EffectiveConfig.from_mapping(config)


class PresetRegistry:
    def __init__(self, presets: Optional[Mapping[str, PresetSource]] = None) -> None:
        self._lock = RLock()
        self._presets: Dict[str, EffectiveConfig] = {}
        if presets:
            self.extend(presets)

    def register(self, name: str, config: PresetSource) -> None:
        """Register (or shadow) a preset by name."""
        if not name or not name.strip():
            raise ValueError("Preset name cannot be empty")
        parsed = _coerce(config)
        with self._lock:
            if name in self._presets:
                _logger.debug("preset %r shadowed by a later registration", name)
            self._presets[name] = parsed

    def extend(self, presets: Mapping[str, PresetSource]) -> None:
        for name, config in presets.items():
            self.register(name, config)

    def get(self, name: str) -> Optional[EffectiveConfig]:
        with self._lock:
            return self._presets.get(name)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._presets

    def names(self) -> Iterable[str]:
        with self._lock:
            return sorted(self._presets)

    def copy(self) -> "PresetRegistry":
        with self._lock:
            return PresetRegistry(dict(self._presets))

    def derive(self, presets: Optional[Mapping[str, PresetSource]] = None) -> "PresetRegistry":
        child = self.copy()
        if presets:
            child.extend(presets)
        return child


BUILTIN_PRESETS: Dict[str, EffectiveConfig] = {
    "card": EffectiveConfig(
        states={
            "default": {"elevation": 2},
            "hover": {"elevation": 4},
            "active": {"elevation": 1},
            "disabled": {"elevation": 0, "opacity": 0.5},
        },
        transition=TransitionSpec(duration_ms=200, easing="ease-out"),
        auto_detect=True,
    ),
    "button": EffectiveConfig(
        states={
            "default": {"elevation": 1},
            "hover": {"elevation": 3},
            "active": {"elevation": 0},
            "focus": {"elevation": 2, "color": "blue"},
            "disabled": {"elevation": 0, "opacity": 0.3},
        },
        transition=TransitionSpec(duration_ms=150, easing="ease-out"),
        auto_detect=True,
    ),
    "modal": EffectiveConfig(
        states={
            "default": {"elevation": 12},
            "entering": {"elevation": 8},
            "exiting": {"elevation": 16},
        },
        transition=TransitionSpec(duration_ms=300, easing="ease-in-out"),
    ),
    "floating": EffectiveConfig(
        states={
            "default": {"elevation": 6},
            "hover": {"elevation": 8},
            "animating": {"elevation": 10, "blur": 1.2},
        },
        transition=TransitionSpec(duration_ms=250, easing="ease-out"),
        auto_detect=True,
    ),
}

_default_registry = PresetRegistry(BUILTIN_PRESETS)


def default_registry() -> PresetRegistry:
    return _default_registry


def register_preset(name: str, config: PresetSource) -> None:
    _default_registry.register(name, config)


def get_preset(name: str) -> Optional[EffectiveConfig]:
    return _default_registry.get(name)


def list_presets() -> Iterable[str]:
    return _default_registry.names()
