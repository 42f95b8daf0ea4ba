import pytest

from hoverdict.text.classifier import (
    EXTENDED_LATIN_CLASSIFIER,
    LATIN_CLASSIFIER,
    WORD_CLASSIFIER,
    Extent,
)
from hoverdict.text.window import (
    concatenate_following_text,
    extend_window_text,
    extract_window,
    search_end_index,
    search_start_index,
)


class FixedTokens:
    def __init__(self, tokens):
        self.tokens = tokens
        self.calls = []

    def tokenize(self, text, locale):
        self.calls.append((text, locale))
        return self.tokens


class NoTokens:
    def tokenize(self, text, locale):
        return None


@pytest.mark.parametrize("offset", [0, 3, 7, 14])
def test_latin_window_contains_cursor(offset):
    buffer = "日本hello world foo"
    window = extract_window(buffer, offset + 2)

    assert window.text == "hello world foo"
    assert window.sub_text is None
    assert window.is_script_single_byte is True
    assert window.truncated_at_end is True


def test_latin_window_stops_at_boundaries():
    window = extract_window("漢字look up here。続き", 5)

    assert window.text == "look up here"
    assert window.truncated_at_end is False


def test_forward_search_counts_word_gaps_once():
    assert search_end_index("a  b c d", 0, 2, LATIN_CLASSIFIER) == 4
    window = extract_window("one two three four", 0, max_word_count=2)
    assert window.text == "one two"


def test_backward_search_respects_left_extent():
    class RightOnly:
        def classify(self, code):
            return Extent.RIGHT if code is not None else Extent.NONE

    assert search_start_index("abcdef", 3, RightOnly()) == 4
    assert search_start_index("abcdef", 3, LATIN_CLASSIFIER) == 0


def test_non_latin_window_without_resolver_starts_at_cursor():
    window = extract_window("日本語の文章です", 2)

    assert window.text == "語の文章です"
    assert window.sub_text is None
    assert window.is_script_single_byte is False
    assert window.texts() == ["語の文章です"]


def test_non_latin_window_aligns_to_token_start():
    resolver = FixedTokens(["日本語", "の", "文章", "です"])
    window = extract_window("日本語の文章です", 2, resolver=resolver, locale="ja-JP")

    assert window.text == "日本語の文章です"
    assert window.sub_text == "語の文章です"
    assert window.texts() == ["日本語の文章です", "語の文章です"]
    assert resolver.calls == [("日本語の文章です", "ja-JP")]


def test_resolver_returning_nothing_falls_back_to_cursor():
    window = extract_window("日本語の文章です", 2, resolver=NoTokens())

    assert window.text == "語の文章です"
    assert window.sub_text is None


def test_non_latin_window_is_capped():
    buffer = "あ" * 60
    window = extract_window(buffer, 0, fixed_script_limit=40)

    assert len(window.text) == 40
    assert window.truncated_at_end is False


def test_empty_buffer_has_no_window():
    assert extract_window("", 0) is None


def test_following_text_joining():
    assert concatenate_following_text("pre", "-fix", True) == "pre-fix"
    assert concatenate_following_text("look", "up", True) == "look up"
    assert concatenate_following_text("日本", "語", False) == "日本語"
    assert concatenate_following_text("look", "", True) == "look"


def test_extended_window_is_cut_back():
    text = extend_window_text("one two", "three four five", True, max_word_count=3)
    assert text == "one two three"

    text = extend_window_text("あ" * 30, "い" * 30, False, fixed_script_limit=40)
    assert text == "あ" * 30 + "い" * 10


def test_extended_latin_classifier_spans_central_european_text():
    assert extract_window("Łódź pąk", 5, classifier=EXTENDED_LATIN_CLASSIFIER).text == "Łódź pąk"
    assert extract_window("Łódź pąk", 5, classifier=LATIN_CLASSIFIER).text == " p"


def test_word_classifier_starts_at_hovered_word():
    window = extract_window("I like apple pie, really", 9, classifier=WORD_CLASSIFIER)

    assert window.text == "apple pie"
    assert window.truncated_at_end is False


@pytest.mark.parametrize(
    "buffer, offset",
    [("hello, world", 5), ("stop.go", 4), ("(word)", 0)],
)
def test_word_classifier_window_keeps_cursor_on_separator(buffer, offset):
    window = extract_window(buffer, offset, classifier=WORD_CLASSIFIER)

    assert window.text == buffer


def test_word_classifier_on_space_starts_at_next_word():
    window = extract_window("hello world", 5, classifier=WORD_CLASSIFIER)

    assert window.text == "world"
