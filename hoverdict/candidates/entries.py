"""Turn a hover window into dictionary lookup entries, per detected language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Protocol

from hoverdict.text.tokenization import (
    CharacterPredicate,
    is_swedish_token_character,
    is_valid_token_character,
    repair_hyphenation,
    split_identifier,
    split_into_words,
)

from .linker import CandidateGenerator
from .rules import RuleBook

ENGLISH = "en"
SWEDISH = "sv"
JAPANESE = "ja"
SINGLE_BYTE_LANGUAGES = frozenset({ENGLISH, SWEDISH})

_ENGLISH_EXTRA_CODES = frozenset({0x09, 0x0A, 0x0D, 0x2011, 0x200C})
_SWEDISH_CODES = frozenset(ord(ch) for ch in "ÄÅÉÖäåéö")


@dataclass(frozen=True, slots=True)
class EntryResult:
    """Lookup entries for one window plus the language they were built for."""

    entries: List[str]
    lang: str


class EntryGenerator(Protocol):
    def generate(self, text: str, with_capitalized: bool, include_original_text: bool) -> List[str]:
        ...


def _is_english_like(code: int) -> bool:
    return 0x20 <= code <= 0x7E or code in _ENGLISH_EXTRA_CODES


def is_english_text(text: str) -> bool:
    return all(_is_english_like(ord(char)) for char in text)


def is_swedish_text(text: str) -> bool:
    return all(_is_english_like(ord(char)) or ord(char) in _SWEDISH_CODES for char in text)


def detect_language(text: str) -> str:
    """Classify ``text`` as ``en``, ``sv`` or ``ja`` by its characters."""

    if is_english_text(text):
        return ENGLISH
    if is_swedish_text(text):
        return SWEDISH
    return JAPANESE


def _capitalize_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def unique_entries(entries: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for entry in entries:
        if entry and entry not in seen:
            seen[entry] = None
    return list(seen)


class SpacedTextEntryGenerator:
    """Entries for languages that separate words with spaces."""

    def __init__(
        self,
        candidates: CandidateGenerator,
        *,
        is_valid: CharacterPredicate = is_valid_token_character,
        min_phrase_length: int = 1,
        enable_phrasing: bool = True,
        min_identifier_length: int = 3,
    ) -> None:
        self.candidates = candidates
        self.is_valid = is_valid
        self.min_phrase_length = min_phrase_length
        self.enable_phrasing = enable_phrasing
        self.min_identifier_length = min_identifier_length

    def generate(self, text: str, with_capitalized: bool, include_original_text: bool) -> List[str]:
        repaired = repair_hyphenation(text, self.is_valid)
        words = split_into_words(repaired, self.is_valid)

        linked = self.candidates.generate(words, self.min_phrase_length, self.enable_phrasing)
        if words:
            linked.extend(split_identifier(words[0], self.min_identifier_length))

        entries: List[str] = []
        if include_original_text:
            entries.append(text.strip())
        entries.extend(linked)
        entries.extend(entry.lower() for entry in linked)
        if with_capitalized:
            entries.extend(_capitalize_first(entry) for entry in linked)
        return unique_entries(entries)


class PrefixEntryGenerator:
    """Entries for scripts without spaces: every prefix, longest first."""

    def __init__(self, max_length: int = 40) -> None:
        self.max_length = max_length

    def generate(self, text: str, with_capitalized: bool, include_original_text: bool) -> List[str]:
        compact = "".join(text.split())[: self.max_length]
        entries: List[str] = []
        if include_original_text:
            entries.append(text.strip())
        entries.extend(compact[:length] for length in range(len(compact), 0, -1))
        return unique_entries(entries)


class EntryBuilder:
    """Detect the window language and delegate to its generator."""

    def __init__(
        self,
        generators: Mapping[str, EntryGenerator],
        *,
        detector: Callable[[str], str] = detect_language,
        default_language: str = ENGLISH,
    ) -> None:
        if default_language not in generators:
            raise ValueError(f"No entry generator registered for {default_language!r}")
        self.generators = dict(generators)
        self.detector = detector
        self.default_language = default_language

    def build(self, text: str, with_capitalized: bool, include_original_text: bool) -> EntryResult:
        lang = self.detector(text)
        generator = self.generators.get(lang) or self.generators[self.default_language]
        return EntryResult(
            entries=generator.generate(text, with_capitalized, include_original_text),
            lang=lang,
        )


def build_entry_builder(
    *,
    min_phrase_length: int = 1,
    enable_phrasing: bool = True,
    min_identifier_length: int = 3,
    fixed_script_limit: int = 40,
    rule_book: Optional[RuleBook] = None,
) -> EntryBuilder:
    """Wire the default English, Swedish and Japanese generators."""

    rules = rule_book or RuleBook()
    english = SpacedTextEntryGenerator(
        CandidateGenerator(morphology=rules, phrasing=rules),
        min_phrase_length=min_phrase_length,
        enable_phrasing=enable_phrasing,
        min_identifier_length=min_identifier_length,
    )
    swedish = SpacedTextEntryGenerator(
        CandidateGenerator(),
        is_valid=is_swedish_token_character,
        min_phrase_length=min_phrase_length,
        enable_phrasing=False,
        min_identifier_length=min_identifier_length,
    )
    return EntryBuilder(
        {
            ENGLISH: english,
            SWEDISH: swedish,
            JAPANESE: PrefixEntryGenerator(fixed_script_limit),
        }
    )


__all__ = [
    "ENGLISH",
    "EntryBuilder",
    "EntryResult",
    "JAPANESE",
    "PrefixEntryGenerator",
    "SINGLE_BYTE_LANGUAGES",
    "SWEDISH",
    "SpacedTextEntryGenerator",
    "build_entry_builder",
    "detect_language",
    "is_english_text",
    "is_swedish_text",
    "unique_entries",
]
