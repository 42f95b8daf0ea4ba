"""Hover lookup orchestration: entries, store fetch, render and UI update."""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from hoverdict import logging_manager as log_mgr
from hoverdict.candidates.entries import SINGLE_BYTE_LANGUAGES, EntryBuilder, build_entry_builder
from hoverdict.config.settings import LookupSettings
from hoverdict.errors import DescriptionStoreError
from hoverdict.observability import lookup_stage, record_metric
from hoverdict.text.references import collect_reference_headwords

from .cache import CacheEntry, ShortCache
from .render import HtmlGenerator, RenderResult, Renderer
from .state import OrchestratorState
from .store import DescriptionStore

logger = log_mgr.get_logger().getChild("lookup")

KEY_SEPARATOR = "\u0001"

UpdateCallback = Callable[[Any, int], Any]
SelectionProbe = Callable[[], bool]


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def fetch_descriptions(
    store: DescriptionStore, entries: Sequence[str]
) -> Tuple[List[str], Dict[str, str]]:
    """Fetch ``entries`` plus one round of the headwords their descriptions reference.

    Returns the ordered headwords (hits of the first round followed by the
    referenced headwords) and the merged description map. References found
    in the second round are not followed.
    """

    primary = await store.get_many(list(entries))
    heads = [entry for entry in entries if primary.get(entry)]

    references = collect_reference_headwords(primary)
    if not references:
        return heads, dict(primary)

    secondary = await store.get_many(references)
    descriptions = dict(primary)
    descriptions.update(secondary)
    return heads + references, descriptions


class Lookuper:
    """Run hover lookups for one dialog session.

    ``on_update(content, hit_count)`` is called whenever the panel should
    change; it and ``renderer.render`` may be plain callables or coroutines.
    ``selection_probe`` reports whether the page currently holds a text
    selection that hover lookups must not disturb.
    """

    def __init__(
        self,
        settings: LookupSettings,
        *,
        store: DescriptionStore,
        entry_builder: EntryBuilder,
        renderer: Renderer,
        on_update: UpdateCallback,
        selection_probe: Optional[SelectionProbe] = None,
        state: Optional[OrchestratorState] = None,
        cache: Optional[ShortCache] = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.entry_builder = entry_builder
        self.renderer = renderer
        self.on_update = on_update
        self.selection_probe = selection_probe
        self.state = state or OrchestratorState()
        self.cache = cache if cache is not None else ShortCache(settings.effective_cache_size)

    @classmethod
    def from_settings(
        cls,
        settings: LookupSettings,
        *,
        store: DescriptionStore,
        on_update: UpdateCallback,
        selection_probe: Optional[SelectionProbe] = None,
    ) -> "Lookuper":
        entry_builder = build_entry_builder(
            min_phrase_length=settings.min_phrase_length,
            enable_phrasing=settings.enable_phrasing,
            min_identifier_length=settings.min_identifier_length,
            fixed_script_limit=settings.fixed_script_limit,
        )
        return cls(
            settings,
            store=store,
            entry_builder=entry_builder,
            renderer=HtmlGenerator(settings.short_word_length),
            on_update=on_update,
            selection_probe=selection_probe,
        )

    # Session controls -------------------------------------------------
    def suspend(self) -> None:
        self.state.suspended = True

    def resume(self) -> None:
        self.state.suspended = False

    def start_selection(self) -> None:
        self.state.half_locked = True

    def end_selection(self) -> None:
        self.state.half_locked = False

    def _selection_active(self) -> bool:
        return bool(self.selection_probe and self.selection_probe())

    def _can_update(self, aimed_request: bool = False) -> bool:
        state = self.state
        if state.suspended:
            return False
        if aimed_request:
            return True
        if state.half_locked and state.aimed:
            return False
        if not state.half_locked and self._selection_active():
            return False
        return True

    def _build_key_texts(self, texts: Sequence[str]) -> List[str]:
        limit = self.settings.text_length_limit
        trimmed = (text[:limit].strip() for text in texts if text)
        return [text for text in trimmed if text]

    # Entry points -----------------------------------------------------
    async def hover(self, text: str) -> bool:
        return await self.hover_all([text])

    async def hover_all(self, texts: Sequence[str]) -> bool:
        return await self.lookup(
            texts,
            self.settings.lookup_with_capitalized,
            include_original_text=False,
            allow_short_word_hits=True,
            min_hit_threshold=0,
        )

    async def aimed_lookup(self, text: str) -> bool:
        """Pin the panel to ``text``; an empty ``text`` releases the pin."""

        if not text:
            self.state.aimed = False
            return False
        if self.state.last_key == KEY_SEPARATOR.join(self._build_key_texts([text])):
            return False

        self.state.aimed = True
        updated = await self.update(text, True, True, False, 1, aimed_request=True)
        if not updated:
            self.state.aimed = False
        return updated

    async def update(
        self,
        text: str,
        with_case_variants: bool,
        include_original_text: bool,
        allow_short_word_hits: bool,
        threshold: int = 0,
        *,
        aimed_request: bool = False,
    ) -> bool:
        if not text:
            return False
        return await self.lookup(
            [text],
            with_case_variants,
            include_original_text,
            allow_short_word_hits,
            threshold,
            aimed_request=aimed_request,
        )

    async def lookup(
        self,
        texts: Sequence[str],
        with_case_variants: bool,
        include_original_text: bool,
        allow_short_word_hits: bool,
        min_hit_threshold: int,
        *,
        aimed_request: bool = False,
    ) -> bool:
        """Look ``texts`` up and push the result to ``on_update``.

        Returns ``True`` only when the panel was updated.
        """

        if not self._can_update(aimed_request):
            return False

        key_texts = self._build_key_texts(texts)
        if not key_texts:
            return False
        key = KEY_SEPARATOR.join(key_texts)

        if not include_original_text:
            if key == self.state.last_key:
                return False
            cached = self.cache.get(key)
            if cached is not None:
                self.state.next_generation()
                await _resolve(self.on_update(cached.rendered, cached.hit_count))
                self.state.last_key = key
                logger.debug(
                    "Served lookup from cache",
                    extra={"event": "lookup.cache_hit", "hit_count": cached.hit_count},
                )
                record_metric("lookup.cache_hit", 1)
                return True

        generation = self.state.next_generation()
        with log_mgr.log_context(generation=generation):
            try:
                result = await self.run_all(
                    key_texts, with_case_variants, include_original_text, allow_short_word_hits
                )
            except DescriptionStoreError as exc:
                logger.error(
                    "Description store failed",
                    extra={"event": "lookup.store_error", "status": "error", "error": str(exc)},
                )
                return False

            if result is None or result.hit_count < min_hit_threshold:
                return False

            if not self.state.is_current(generation):
                logger.debug(
                    "Discarded stale lookup result",
                    extra={
                        "event": "lookup.stale_result",
                        "latest_generation": self.state.latest_generation,
                        "suspended": self.state.suspended,
                    },
                )
                return False

            await _resolve(self.on_update(result.content, result.hit_count))
            self.state.last_key = key
            if not include_original_text:
                self.cache.put(key, CacheEntry(key, result.content, result.hit_count))
            return True

    async def run_all(
        self,
        texts: Sequence[str],
        with_case_variants: bool,
        include_original_text: bool,
        allow_short_word_hits: bool,
    ) -> Optional[RenderResult]:
        """Build entries for ``texts``, fetch and render them.

        Returns ``None`` without touching the store when no entry could be
        built. The session gate and the cache are not consulted.
        """

        entries: List[str] = []
        langs: List[str] = []
        with lookup_stage("candidates", {"texts": len(texts)}):
            for text in texts:
                built = self.entry_builder.build(text, with_case_variants, include_original_text)
                entries.extend(built.entries)
                langs.append(built.lang)

        if not entries:
            return None

        with lookup_stage("fetch", {"entries": len(entries)}):
            heads, descriptions = await fetch_descriptions(self.store, entries)

        allow_short = allow_short_word_hits and langs[0] in SINGLE_BYTE_LANGUAGES
        with lookup_stage("render", {"heads": len(heads)}):
            result = await _resolve(self.renderer.render(heads, descriptions, allow_short))
        return result


__all__ = ["KEY_SEPARATOR", "Lookuper", "fetch_descriptions"]
