import asyncio
import json
import threading

import pytest

from hoverdict.config.settings import LookupSettings
from hoverdict.errors import DescriptionStoreError
from hoverdict.lookup.lookuper import KEY_SEPARATOR, Lookuper, fetch_descriptions
from hoverdict.lookup.render import RenderResult
from hoverdict.lookup.store import InMemoryDescriptionStore, JsonDescriptionStore


def test_repeated_hover_skips_store(make_lookuper, store, updates):
    lookuper = make_lookuper()

    assert asyncio.run(lookuper.hover("apple")) is True
    assert asyncio.run(lookuper.hover("apple")) is False

    assert store.calls == [["apple"]]
    assert len(updates) == 1
    assert updates[0][1] == 1
    assert "A round fruit." in updates[0][0]


def test_cache_returns_notified_result(make_lookuper, store, updates):
    lookuper = make_lookuper()

    asyncio.run(lookuper.hover("apple"))
    asyncio.run(lookuper.hover("banana"))
    assert asyncio.run(lookuper.hover("apple")) is True

    assert len(store.calls) == 2
    cached = lookuper.cache.get("apple")
    assert cached is not None
    assert (cached.rendered, cached.hit_count) == updates[0]
    assert updates[-1] == updates[0]
    assert lookuper.state.last_key == "apple"


def test_cache_hit_is_logged(make_lookuper, hoverdict_events):
    lookuper = make_lookuper()

    asyncio.run(lookuper.hover("apple"))
    asyncio.run(lookuper.hover("banana"))
    asyncio.run(lookuper.hover("apple"))

    events = [getattr(record, "event", None) for record in hoverdict_events]
    assert "lookup.cache_hit" in events


def test_debug_settings_disable_cache(make_lookuper, store):
    lookuper = make_lookuper(LookupSettings(debug=True))

    for text in ("apple", "banana", "apple"):
        asyncio.run(lookuper.hover(text))

    assert lookuper.cache.capacity == 0
    assert len(store.calls) == 3


def test_references_are_fetched_once(make_lookuper, store, updates):
    lookuper = make_lookuper()

    assert asyncio.run(lookuper.hover("run")) is True

    assert store.calls == [["run"], ["sprint"]]
    content, hits = updates[0]
    assert hits == 2
    assert "a short fast race" in content
    assert "a quick movement" not in content


def test_fetch_descriptions_merges_reference_round(store):
    heads, descriptions = asyncio.run(fetch_descriptions(store, ["missing", "run"]))

    assert heads == ["run", "sprint"]
    assert set(descriptions) == {"run", "sprint"}


def test_aimed_lookup_below_threshold_leaves_panel(make_lookuper, store, updates):
    lookuper = make_lookuper()

    assert asyncio.run(lookuper.aimed_lookup("zzz")) is False

    assert updates == []
    assert len(lookuper.cache) == 0
    assert lookuper.state.aimed is False
    assert lookuper.state.last_key is None


def test_aimed_lookup_pins_without_caching(make_lookuper, updates):
    lookuper = make_lookuper()

    assert asyncio.run(lookuper.aimed_lookup("apple")) is True

    assert lookuper.state.aimed is True
    assert lookuper.state.last_key == "apple"
    assert len(lookuper.cache) == 0
    assert asyncio.run(lookuper.aimed_lookup("apple")) is False
    assert len(updates) == 1


def test_empty_aimed_lookup_releases_pin(make_lookuper):
    lookuper = make_lookuper()
    lookuper.state.aimed = True

    assert asyncio.run(lookuper.aimed_lookup("")) is False
    assert lookuper.state.aimed is False


def test_short_words_only_hit_on_plain_hover(make_lookuper, updates):
    lookuper = make_lookuper()

    assert asyncio.run(lookuper.aimed_lookup("ox")) is False
    assert asyncio.run(lookuper.hover("ox")) is True
    assert updates[-1][1] == 1


def test_blank_and_wordless_input_never_reach_store(make_lookuper, store, updates):
    lookuper = make_lookuper()

    assert asyncio.run(lookuper.hover("   ")) is False
    assert asyncio.run(lookuper.hover_all(["", ""])) is False
    assert asyncio.run(lookuper.hover("%%%")) is False

    assert store.calls == []
    assert updates == []


def test_texts_are_truncated_and_joined_into_key(make_lookuper):
    lookuper = make_lookuper(LookupSettings(text_length_limit=5))

    asyncio.run(lookuper.hover_all(["apple pie", "", "  sprint  "]))

    assert lookuper.state.last_key == f"apple{KEY_SEPARATOR}spr"


def test_suspended_session_refuses_lookups(make_lookuper, store):
    lookuper = make_lookuper()
    lookuper.suspend()

    assert asyncio.run(lookuper.hover("apple")) is False
    assert asyncio.run(lookuper.aimed_lookup("apple")) is False
    assert store.calls == []

    lookuper.resume()
    assert asyncio.run(lookuper.hover("apple")) is True


def test_hover_blocked_while_pinned_during_selection(make_lookuper, store):
    lookuper = make_lookuper()
    lookuper.state.aimed = True
    lookuper.start_selection()

    assert asyncio.run(lookuper.hover("apple")) is False
    assert store.calls == []

    lookuper.end_selection()
    assert asyncio.run(lookuper.hover("apple")) is True


def test_page_selection_blocks_plain_hover(make_lookuper, store):
    selection = {"active": True}
    lookuper = make_lookuper(selection_probe=lambda: selection["active"])

    assert asyncio.run(lookuper.hover("apple")) is False

    lookuper.start_selection()
    assert asyncio.run(lookuper.hover("apple")) is True
    assert store.calls == [["apple"]]


def test_stale_result_is_discarded(make_lookuper, updates, hoverdict_events):
    class GatedStore(InMemoryDescriptionStore):
        gate: asyncio.Event

        async def get_many(self, headwords):
            if "apple" in headwords:
                await self.gate.wait()
            return await super().get_many(headwords)

    gated = GatedStore({"apple": "A fruit", "ox": "a bovine animal"})
    lookuper = make_lookuper(store=gated)

    async def scenario():
        gated.gate = asyncio.Event()
        first = asyncio.create_task(lookuper.hover("apple"))
        await asyncio.sleep(0)
        second = await lookuper.hover("ox")
        gated.gate.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert (first, second) == (False, True)
    assert len(updates) == 1
    assert "bovine" in updates[0][0]
    assert lookuper.cache.get("apple") is None
    assert lookuper.state.last_key == "ox"
    events = [getattr(record, "event", None) for record in hoverdict_events]
    assert "lookup.stale_result" in events


def test_store_error_is_reported_as_no_update(make_lookuper, updates, tmp_path, hoverdict_events):
    lookuper = make_lookuper(store=JsonDescriptionStore(tmp_path / "missing.json"))

    assert asyncio.run(lookuper.hover("apple")) is False

    assert updates == []
    events = [getattr(record, "event", None) for record in hoverdict_events]
    assert "lookup.store_error" in events


def test_async_renderer_and_callback_are_awaited(store):
    seen = []

    class AsyncRenderer:
        async def render(self, headwords, descriptions, allow_short_word_hits):
            return RenderResult(content=list(headwords), hit_count=len(headwords))

    async def on_update(content, hits):
        seen.append((content, hits))

    lookuper = Lookuper.from_settings(LookupSettings(), store=store, on_update=on_update)
    lookuper.renderer = AsyncRenderer()

    assert asyncio.run(lookuper.hover("apple")) is True
    assert seen == [(["apple"], 1)]


def test_run_all_bypasses_gate_and_cache(make_lookuper, store):
    lookuper = make_lookuper()
    lookuper.suspend()

    result = asyncio.run(lookuper.run_all(["apple"], False, False, True))

    assert result is not None
    assert result.hit_count == 1
    assert len(lookuper.cache) == 0
    assert store.calls == [["apple"]]


def test_store_failure_propagates_from_fetch(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(DescriptionStoreError, match="not valid JSON"):
        asyncio.run(fetch_descriptions(JsonDescriptionStore(broken), ["apple"]))


def test_hovers_proceed_while_dictionary_file_loads(tmp_path, updates):
    path = tmp_path / "words.json"
    path.write_text(json.dumps({"apple": "A fruit", "ox": "a bovine animal"}), encoding="utf-8")
    loading = threading.Event()
    release = threading.Event()

    class SlowJsonStore(JsonDescriptionStore):
        def _load(self):
            loading.set()
            release.wait(5)
            return super()._load()

    lookuper = Lookuper.from_settings(
        LookupSettings(),
        store=SlowJsonStore(path),
        on_update=lambda content, hits: updates.append((content, hits)),
    )

    async def scenario():
        loop = asyncio.get_running_loop()
        first = asyncio.create_task(lookuper.hover("apple"))
        await loop.run_in_executor(None, loading.wait, 5)
        second = asyncio.create_task(lookuper.hover("ox"))
        await asyncio.sleep(0.01)
        in_flight = (first.done(), second.done())
        release.set()
        return in_flight, await first, await second

    in_flight, first, second = asyncio.run(scenario())

    assert in_flight == (False, False)
    assert (first, second) == (False, True)
    assert len(updates) == 1
    assert "bovine" in updates[0][0]


def test_suspend_during_fetch_discards_result(make_lookuper, updates):
    class GatedStore(InMemoryDescriptionStore):
        gate: asyncio.Event

        async def get_many(self, headwords):
            await self.gate.wait()
            return await super().get_many(headwords)

    gated = GatedStore({"apple": "A fruit"})
    lookuper = make_lookuper(store=gated)

    async def scenario():
        gated.gate = asyncio.Event()
        pending = asyncio.create_task(lookuper.hover("apple"))
        await asyncio.sleep(0)
        lookuper.suspend()
        gated.gate.set()
        return await pending

    assert asyncio.run(scenario()) is False
    assert updates == []
    assert lookuper.cache.get("apple") is None
    assert lookuper.state.last_key is None
