"""Configuration helpers for lookup components."""

from .settings import LookupSettings, get_settings, load_settings

__all__ = [
    "LookupSettings",
    "get_settings",
    "load_settings",
]
