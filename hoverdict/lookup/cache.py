"""Bounded insertion-order cache of rendered lookup results."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class CacheEntry:
    key: str
    rendered: Any
    hit_count: int


class ShortCache:
    """FIFO cache holding at most ``capacity`` entries.

    Reads never reorder entries and overwriting an existing key keeps its
    original slot, so the oldest first-seen key is always evicted first. A
    capacity of ``0`` disables the cache: ``get`` always misses and ``put``
    does nothing.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._capacity = capacity
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: str) -> Optional[CacheEntry]:
        if self._capacity == 0:
            return None
        return self._entries.get(key)

    def put(self, key: str, entry: CacheEntry) -> None:
        if self._capacity == 0:
            return
        if key in self._entries:
            self._entries[key] = entry
            return
        while len(self._entries) >= self._capacity:
            self._entries.popitem(last=False)
        self._entries[key] = entry

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = ["CacheEntry", "ShortCache"]
