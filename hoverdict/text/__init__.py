"""Text helpers for hover windows."""

from .classifier import LATIN_CLASSIFIER, CharacterClassifier, Extent, is_single_byte_script
from .references import collect_reference_headwords, extract_ref_patterns
from .tokenization import repair_hyphenation, split_identifier, split_into_words
from .window import TextWindow, extract_window, extend_window_text

__all__ = [
    "CharacterClassifier",
    "Extent",
    "LATIN_CLASSIFIER",
    "TextWindow",
    "collect_reference_headwords",
    "extend_window_text",
    "extract_ref_patterns",
    "extract_window",
    "is_single_byte_script",
    "repair_hyphenation",
    "split_identifier",
    "split_into_words",
]
