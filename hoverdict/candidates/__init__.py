"""Candidate headword generation for hover windows."""

from .entries import EntryBuilder, EntryResult, build_entry_builder, detect_language
from .linker import CandidateGenerator, link_words
from .rules import MorphologyProvider, PhrasingProvider, RuleBook

__all__ = [
    "CandidateGenerator",
    "EntryBuilder",
    "EntryResult",
    "MorphologyProvider",
    "PhrasingProvider",
    "RuleBook",
    "build_entry_builder",
    "detect_language",
    "link_words",
]
