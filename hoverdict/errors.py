"""Common hoverdict exceptions."""

from __future__ import annotations


class DescriptionStoreError(RuntimeError):
    """Raised when a description store backend cannot serve a request."""


class SettingsError(ValueError):
    """Raised when lookup settings fail validation."""


__all__ = ["DescriptionStoreError", "SettingsError"]
