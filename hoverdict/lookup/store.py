"""Headword to description stores consumed by the lookup pipeline."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from hoverdict import logging_manager as log_mgr
from hoverdict.errors import DescriptionStoreError

logger = log_mgr.get_logger().getChild("store")


class DescriptionStore(Protocol):
    async def get_many(self, headwords: Sequence[str]) -> Dict[str, str]:
        """Return descriptions for the known ``headwords``; unknown keys are omitted."""


def _select(entries: Mapping[str, str], headwords: Iterable[str]) -> Dict[str, str]:
    found: Dict[str, str] = {}
    for headword in headwords:
        description = entries.get(headword)
        if description:
            found[headword] = description
    return found


class InMemoryDescriptionStore:
    """Dictionary backed store that records every ``get_many`` request."""

    def __init__(self, entries: Optional[Mapping[str, str]] = None) -> None:
        self._entries: Dict[str, str] = dict(entries or {})
        self.calls: List[List[str]] = []

    def add(self, headword: str, description: str) -> None:
        self._entries[headword] = description

    async def get_many(self, headwords: Sequence[str]) -> Dict[str, str]:
        self.calls.append(list(headwords))
        return _select(self._entries, headwords)

    def __len__(self) -> int:
        return len(self._entries)


class JsonDescriptionStore:
    """Read-only store over a JSON object file mapping headwords to descriptions.

    The file is parsed on first use in the default executor; concurrent first
    calls share that single load. Unreadable or malformed files raise
    :class:`DescriptionStoreError`.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._entries: Optional[Dict[str, str]] = None
        self._pending: Optional[asyncio.Future[Dict[str, str]]] = None

    def _load(self) -> Dict[str, str]:
        if self._entries is not None:
            return self._entries
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except OSError as exc:
            raise DescriptionStoreError(f"Unable to read dictionary file {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise DescriptionStoreError(f"Dictionary file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise DescriptionStoreError(f"Dictionary file {self.path} must contain a JSON object")

        entries = {str(key): str(value) for key, value in payload.items() if value is not None}
        logger.debug(
            "Loaded dictionary file",
            extra={"event": "store.loaded", "path": str(self.path), "entries": len(entries)},
        )
        self._entries = entries
        return entries

    async def _ensure_loaded(self) -> Dict[str, str]:
        if self._entries is not None:
            return self._entries
        pending = self._pending
        if pending is None:
            pending = asyncio.get_running_loop().run_in_executor(None, self._load)
            self._pending = pending
        try:
            return await asyncio.shield(pending)
        finally:
            if pending.done() and self._pending is pending:
                self._pending = None

    async def get_many(self, headwords: Sequence[str]) -> Dict[str, str]:
        return _select(await self._ensure_loaded(), headwords)


__all__ = ["DescriptionStore", "InMemoryDescriptionStore", "JsonDescriptionStore"]
