import pytest

from hoverdict.candidates.entries import (
    EntryBuilder,
    PrefixEntryGenerator,
    build_entry_builder,
    detect_language,
)


@pytest.mark.parametrize(
    "text, lang",
    [
        ("hello world", "en"),
        ("non‑breaking", "en"),
        ("smörgåsbord", "sv"),
        ("日本語", "ja"),
        ("naïve", "ja"),
    ],
)
def test_detect_language(text, lang):
    assert detect_language(text) == lang


def test_english_entries_start_with_longest_phrase():
    result = build_entry_builder().build("running away", False, False)

    assert result.lang == "en"
    assert result.entries[:4] == ["running away", "running", "run away", "run"]


def test_english_entries_add_case_variants():
    builder = build_entry_builder()

    assert builder.build("run away", True, False).entries == ["run away", "run", "Run away", "Run"]
    entries = builder.build("Running", False, False).entries
    assert entries[0] == "Running"
    assert "running" in entries


def test_original_text_comes_first_when_requested():
    entries = build_entry_builder().build("  Look-\n up. ", False, True).entries

    assert entries[0] == "Look-\n up."
    assert "Lookup" in entries
    assert len(entries) == len(set(entries))


def test_identifier_segments_are_appended():
    entries = build_entry_builder().build("getElementById", False, False).entries

    assert entries[0] == "getElementById"
    assert "element" in entries
    assert "Element" in entries


def test_swedish_entries_keep_letters():
    result = build_entry_builder().build("Åka hem", False, False)

    assert result.lang == "sv"
    assert result.entries[:2] == ["Åka hem", "Åka"]
    assert "åka" in result.entries


def test_japanese_entries_are_prefixes():
    builder = build_entry_builder()

    assert builder.build("日本語", False, False).entries == ["日本語", "日本", "日"]
    assert builder.build(" 日本 語 ", True, True).entries == ["日本 語", "日本語", "日本", "日"]


def test_prefix_generator_respects_limit():
    assert PrefixEntryGenerator(2).generate("日本語", False, False) == ["日本", "日"]


def test_unknown_language_uses_default_generator():
    builder = EntryBuilder({"en": PrefixEntryGenerator(3)}, detector=lambda text: "xx")

    result = builder.build("abcd", False, False)

    assert result.lang == "xx"
    assert result.entries == ["abc", "ab", "a"]


def test_builder_requires_default_generator():
    with pytest.raises(ValueError):
        EntryBuilder({"ja": PrefixEntryGenerator()})
