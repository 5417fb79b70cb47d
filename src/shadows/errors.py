"""Structured configuration errors for shadow resolution."""

from __future__ import annotations
from typing import Any


class ShadowConfigError(ValueError):
    """Base class for rejected shadow configuration input."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class InvalidEnumError(ShadowConfigError):
    """Raised when a size or color class is outside its fixed enumeration."""


class OutOfRangeElevationError(ShadowConfigError):
    """Raised for negative, non-finite or overflowing elevation values."""
