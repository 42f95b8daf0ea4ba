"""Extract the bounded text window a cursor offset points into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .classifier import LATIN_CLASSIFIER, CharacterClassifier, Extent, is_single_byte_script
from .segmentation import TokenBoundaryResolver, token_spans

FIXED_SCRIPT_LIMIT = 40
DEFAULT_MAX_WORDS = 8
DEFAULT_SEGMENTER_LOCALE = "ja-JP"

_SPACE = 0x20


@dataclass(frozen=True, slots=True)
class TextWindow:
    """Text around the cursor plus the metadata needed to extend it."""

    text: str
    sub_text: Optional[str] = None
    is_script_single_byte: bool = True
    truncated_at_end: bool = False

    def texts(self) -> List[str]:
        """Return the lookup attempts, token-aligned first."""

        if self.sub_text:
            return [self.text, self.sub_text]
        return [self.text]


def _code_at(text: str, index: int) -> Optional[int]:
    if 0 <= index < len(text):
        return ord(text[index])
    return None


def search_start_index(text: str, index: int, classifier: CharacterClassifier) -> int:
    """Walk left from ``index`` while characters allow leftward extension."""

    i = index
    while True:
        if not classifier.classify(_code_at(text, i)) & Extent.LEFT:
            return i + 1
        if i <= 0:
            return 0
        i -= 1


def search_end_index(
    text: str,
    index: int,
    max_words: int,
    classifier: CharacterClassifier,
) -> int:
    """Walk right from ``index + 1`` until a boundary or ``max_words`` gaps."""

    i = index + 1
    space_count = 0
    last_is_space = False
    while True:
        code = _code_at(text, i)
        if code == _SPACE:
            if not last_is_space:
                space_count += 1
            last_is_space = True
            if space_count >= max_words:
                return i
        else:
            if not classifier.classify(code) & Extent.RIGHT:
                return min(i, len(text))
            last_is_space = False
        if i >= len(text):
            return len(text)
        i += 1


def retrieve_proper_start_index(
    text: str,
    offset: int,
    resolver: Optional[TokenBoundaryResolver],
    locale: str = DEFAULT_SEGMENTER_LOCALE,
) -> int:
    """Return the start of the token covering ``offset``, or ``offset`` itself."""

    if resolver is None:
        return offset
    tokens = resolver.tokenize(text, locale)
    if tokens is None:
        return offset
    cursor_index = offset + 1
    for start, end in token_spans(text, tokens):
        if cursor_index <= end:
            return min(start, offset)
    return 0


def extract_window(
    buffer: str,
    offset: int,
    max_word_count: int = DEFAULT_MAX_WORDS,
    resolver: Optional[TokenBoundaryResolver] = None,
    *,
    classifier: CharacterClassifier = LATIN_CLASSIFIER,
    fixed_script_limit: int = FIXED_SCRIPT_LIMIT,
    locale: str = DEFAULT_SEGMENTER_LOCALE,
) -> Optional[TextWindow]:
    """Return the window of ``buffer`` around ``offset``.

    Single-byte script text grows in both directions until the classifier
    reports a boundary or ``max_word_count`` word gaps have been crossed.
    Other scripts take a fixed run starting at the cursor; when a resolver is
    given, the window is realigned to the start of the covering token and the
    cursor-exact run is kept as ``sub_text``.
    """

    if not buffer:
        return None

    cursor_code = _code_at(buffer, offset)
    if is_single_byte_script(cursor_code):
        if not classifier.classify(cursor_code):
            # The window must contain a boundary character under the cursor.
            classifier = LATIN_CLASSIFIER
        start_index = search_start_index(buffer, offset, classifier)
        end_index = search_end_index(buffer, offset, max_word_count, classifier)
        return TextWindow(
            text=buffer[start_index:end_index],
            is_script_single_byte=True,
            truncated_at_end=end_index >= len(buffer),
        )

    end_index = offset + fixed_script_limit
    proper_start_index = retrieve_proper_start_index(buffer, offset, resolver, locale)
    sub_text = buffer[offset:end_index] if proper_start_index != offset else None
    return TextWindow(
        text=buffer[proper_start_index:end_index],
        sub_text=sub_text,
        is_script_single_byte=False,
        truncated_at_end=end_index >= len(buffer),
    )


def concatenate_following_text(text: str, following_text: str, is_single_byte: bool) -> str:
    """Append text from the next node, keeping hyphenated line breaks joined."""

    if not following_text:
        return text
    if not is_single_byte:
        return text + following_text
    if following_text.startswith("-"):
        return text + following_text
    return text + " " + following_text


def extend_window_text(
    text: str,
    following_text: str,
    is_single_byte: bool,
    *,
    max_word_count: int = DEFAULT_MAX_WORDS,
    classifier: CharacterClassifier = LATIN_CLASSIFIER,
    fixed_script_limit: int = FIXED_SCRIPT_LIMIT,
) -> str:
    """Join ``following_text`` onto a window and cut it back to size."""

    concatenated = concatenate_following_text(text, following_text, is_single_byte)
    if is_single_byte:
        end_index = search_end_index(concatenated, 0, max_word_count, classifier)
    else:
        end_index = fixed_script_limit
    return concatenated[:end_index]


__all__ = [
    "DEFAULT_MAX_WORDS",
    "FIXED_SCRIPT_LIMIT",
    "TextWindow",
    "concatenate_following_text",
    "extend_window_text",
    "extract_window",
    "retrieve_proper_start_index",
    "search_end_index",
    "search_start_index",
]
