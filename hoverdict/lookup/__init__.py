"""Lookup orchestration, result cache and store adapters."""

from .cache import CacheEntry, ShortCache
from .lookuper import KEY_SEPARATOR, Lookuper, fetch_descriptions
from .render import HtmlGenerator, RenderResult
from .state import OrchestratorState
from .store import DescriptionStore, InMemoryDescriptionStore, JsonDescriptionStore

__all__ = [
    "CacheEntry",
    "DescriptionStore",
    "HtmlGenerator",
    "InMemoryDescriptionStore",
    "JsonDescriptionStore",
    "KEY_SEPARATOR",
    "Lookuper",
    "OrchestratorState",
    "RenderResult",
    "ShortCache",
    "fetch_descriptions",
]
