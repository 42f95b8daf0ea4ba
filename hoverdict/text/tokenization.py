"""Word splitting helpers for hover windows.

    repair_hyphenation("aaa-bbb")    -> "aaa-bbb"
    repair_hyphenation("aaa-\\nbbb")  -> "aaabbb"
    split_into_words("American.English") -> ["American", "English"]
    split_identifier("camelCase", 3)      -> ["camel", "Case", "case"]
"""

from __future__ import annotations

from typing import Callable, List

CharacterPredicate = Callable[[int], bool]

NON_BREAKING_HYPHEN = "‑"
_IDENTIFIER_SEPARATORS = frozenset("#-._")
_SWEDISH_LETTERS = frozenset(ord(ch) for ch in "ÄÅÉÖäåéö")


def is_valid_token_character(code: int) -> bool:
    """ASCII letters and digits plus the joiners that stay inside a word."""

    return (
        0x30 <= code <= 0x39
        or 0x41 <= code <= 0x5A
        or 0x61 <= code <= 0x7A
        or code in (0x27, 0x2D, 0x5F)
    )


def is_swedish_token_character(code: int) -> bool:
    return is_valid_token_character(code) or code in _SWEDISH_LETTERS


def is_printable_ascii(code: int) -> bool:
    return 0x21 <= code <= 0x7E


def repair_hyphenation(
    source: str,
    is_valid: CharacterPredicate = is_valid_token_character,
) -> str:
    """Undo hyphens that only exist because a word was wrapped across lines.

    A hyphen directly followed by a word character is part of a compound and
    kept. Otherwise the hyphen and the noise up to the next word character are
    dropped, splicing the word back together; with no word character left the
    text is cut at the hyphen.
    """

    text = source.replace(NON_BREAKING_HYPHEN, "-")
    length = len(text)
    parts: List[str] = []
    current = 0

    while current < length:
        hyphen_index = text.find("-", current)
        if hyphen_index == -1:
            parts.append(text[current:])
            break

        parts.append(text[current:hyphen_index])
        for i in range(hyphen_index + 1, length):
            if is_valid(ord(text[i])):
                if i == hyphen_index + 1:
                    parts.append("-")
                current = i
                break
        else:
            current = length

    return "".join(parts)


def split_into_words(
    text: str,
    is_valid: CharacterPredicate = is_valid_token_character,
) -> List[str]:
    """Return the maximal runs of word characters in ``text``."""

    words: List[str] = []
    start_index = None
    for index, char in enumerate(text):
        if is_valid(ord(char)):
            if start_index is None:
                start_index = index
        elif start_index is not None:
            words.append(text[start_index:index])
            start_index = None
    if start_index is not None:
        words.append(text[start_index:])
    return words


def _with_lowered(word: str) -> List[str]:
    lowered = word.lower()
    if lowered != word:
        return [word, lowered]
    return [word]


def split_identifier(text: str, min_word_length: int) -> List[str]:
    """Split program identifiers on ``# - . _`` and camelCase humps.

    Each segment is followed by its lowercase form when that differs.
    Segments shorter than ``min_word_length`` are skipped, except the final
    one. Strings without any split point yield nothing.
    """

    segments: List[str] = []
    start_index = 0
    prev_is_capital = True
    for index, char in enumerate(text):
        is_capital = "A" <= char <= "Z"
        word = None
        if char in _IDENTIFIER_SEPARATORS:
            word = text[start_index:index]
            start_index = index + 1
            prev_is_capital = False
        elif is_capital and not prev_is_capital and start_index != index:
            word = text[start_index:index]
            start_index = index
            prev_is_capital = False
        else:
            prev_is_capital = is_capital
        if word and len(word) >= min_word_length:
            segments.extend(_with_lowered(word))

    if start_index > 0:
        last_word = text[start_index:]
        if last_word:
            segments.extend(_with_lowered(last_word))
    return segments


__all__ = [
    "CharacterPredicate",
    "NON_BREAKING_HYPHEN",
    "is_printable_ascii",
    "is_swedish_token_character",
    "is_valid_token_character",
    "repair_hyphenation",
    "split_identifier",
    "split_into_words",
]
