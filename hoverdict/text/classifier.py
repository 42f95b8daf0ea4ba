"""Character classification used by the window boundary search.

A classifier maps a code point to a two-bit mask: bit 0 allows the window
to grow leftward over the character, bit 1 allows it to grow rightward.
Classifiers are swappable per locale; the extractor only depends on the
:class:`CharacterClassifier` protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Optional, Protocol, Sequence, Tuple


class Extent(IntFlag):
    """Directions a window may extend over a character."""

    NONE = 0
    LEFT = 1
    RIGHT = 2
    BOTH = 3


class CharacterClassifier(Protocol):
    def classify(self, code: Optional[int]) -> int:
        """Return the :class:`Extent` bitmask for ``code`` (``None`` is out of range)."""


def is_single_byte_script(code: Optional[int]) -> bool:
    """Return ``True`` for printable ASCII and the Latin-1 supplement."""

    if code is None:
        return False
    return 0x20 <= code <= 0x7E or 0xA0 <= code <= 0xFF


@dataclass(frozen=True, slots=True)
class RangeClassifier:
    """Classifier backed by inclusive code point ranges.

    Characters inside any range extend in both directions, everything else
    is a hard boundary.
    """

    ranges: Tuple[Tuple[int, int], ...]

    def classify(self, code: Optional[int]) -> int:
        if code is None:
            return Extent.NONE
        for low, high in self.ranges:
            if low <= code <= high:
                return Extent.BOTH
        return Extent.NONE

    def extend(self, extra: Sequence[Tuple[int, int]]) -> "RangeClassifier":
        return RangeClassifier(self.ranges + tuple(extra))


LATIN_CLASSIFIER = RangeClassifier(((0x20, 0x7E), (0xA0, 0xFF)))

# Latin Extended-A/B on top of Latin-1 for Central European text.
EXTENDED_LATIN_CLASSIFIER = LATIN_CLASSIFIER.extend(((0x0100, 0x024F),))


@dataclass(frozen=True, slots=True)
class WordClassifier:
    """Classifier that starts windows at the beginning of the hovered word.

    Word characters extend both ways. A space only lets the window grow to
    the right, so the backward search stops at the previous word gap while
    the forward search can still collect the following words.
    """

    words: RangeClassifier = RangeClassifier(
        ((0x30, 0x39), (0x41, 0x5A), (0x61, 0x7A), (0xC0, 0xD6), (0xD8, 0xF6), (0xF8, 0xFF))
    )
    joiners: frozenset = frozenset({0x27, 0x2D, 0x5F, 0x2011})

    def classify(self, code: Optional[int]) -> int:
        if code is None:
            return Extent.NONE
        if code == 0x20:
            return Extent.RIGHT
        if code in self.joiners:
            return Extent.BOTH
        return self.words.classify(code)


WORD_CLASSIFIER = WordClassifier()

_CLASSIFIERS = {
    "latin": LATIN_CLASSIFIER,
    "extended-latin": EXTENDED_LATIN_CLASSIFIER,
    "word": WORD_CLASSIFIER,
}

CLASSIFIER_NAMES: Tuple[str, ...] = tuple(_CLASSIFIERS)


def get_classifier(name: str = "latin") -> CharacterClassifier:
    """Return the classifier registered under ``name``."""

    try:
        return _CLASSIFIERS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown character classifier: {name!r}") from None


__all__ = [
    "CLASSIFIER_NAMES",
    "CharacterClassifier",
    "EXTENDED_LATIN_CLASSIFIER",
    "Extent",
    "LATIN_CLASSIFIER",
    "RangeClassifier",
    "WORD_CLASSIFIER",
    "WordClassifier",
    "get_classifier",
    "is_single_byte_script",
]
