"""Global configuration and constants for shadow resolution."""

from __future__ import annotations

import os
from typing import Final


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


# Transition applied when neither the request nor any configuration supplies one
DEFAULT_TRANSITION_MS: Final = _env_int("SHADOWS_TRANSITION_MS", 300)
DEFAULT_EASING: Final = os.environ.get("SHADOWS_EASING", "").strip() or "ease-out"

# Reduced motion bootstrap (shared variable name with the rest of the app)
PREFER_REDUCED_MOTION: Final = _env_flag("APP_PREFER_REDUCED_MOTION")

# Built-in fallbacks used after per-call flat defaults
DEFAULT_SIZE: Final = "md"
DEFAULT_COLOR: Final = "default"
DEFAULT_OPACITY: Final = 1.0
DEFAULT_BLUR: Final = 1.0
