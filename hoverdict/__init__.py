"""Hover dictionary lookup: text windows, candidate headwords and cached lookups."""

from .candidates import EntryBuilder, build_entry_builder, detect_language
from .config import LookupSettings, get_settings, load_settings
from .lookup import InMemoryDescriptionStore, JsonDescriptionStore, Lookuper, ShortCache
from .text import TextWindow, extract_window

__version__ = "0.1.0"

__all__ = [
    "EntryBuilder",
    "InMemoryDescriptionStore",
    "JsonDescriptionStore",
    "LookupSettings",
    "Lookuper",
    "ShortCache",
    "TextWindow",
    "__version__",
    "build_entry_builder",
    "detect_language",
    "extract_window",
    "get_settings",
    "load_settings",
]
