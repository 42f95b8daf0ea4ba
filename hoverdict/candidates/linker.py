"""Build ordered phrase candidates from a tokenized window.

    ["running", "away"]
    -> ["running away", "running", "run away", "run"]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .rules import MorphologyProvider, PhrasingProvider


def _first_words_list(first_word: str, morphology: Optional[MorphologyProvider]) -> List[List[str]]:
    branches = [[first_word]]
    if morphology is not None:
        branches.extend([base] for base in morphology.base_forms_of(first_word))
    return branches


def _linked_words(
    words: Sequence[str],
    min_phrase_length: int,
    phrasing: Optional[PhrasingProvider],
) -> Tuple[List[str], List[str]]:
    linked: List[str] = []
    phrased: List[str] = []
    current: List[str] = []
    for index, word in enumerate(words):
        current.append(word)
        if index < min_phrase_length - 1:
            continue
        linked.append(" ".join(current))
        if phrasing is not None:
            phrased.extend(" ".join(variant) for variant in phrasing.phrase_variants_of(list(current)))
    return linked, phrased


def link_words(
    words: Sequence[str],
    min_phrase_length: int = 1,
    enable_phrasing: bool = True,
    *,
    morphology: Optional[MorphologyProvider] = None,
    phrasing: Optional[PhrasingProvider] = None,
) -> List[str]:
    """Return phrase candidates for ``words`` in lookup priority order.

    One branch is built per starting form of the first word (the word itself,
    then each base form). Within a branch the longest phrase comes first;
    phrasing-rule variants of every branch follow all direct joins.
    """

    if not words:
        return []

    rest = list(words[1:])
    direct: List[str] = []
    variants: List[str] = []
    for branch in _first_words_list(words[0], morphology):
        branch.extend(rest)
        linked, phrased = _linked_words(
            branch,
            min_phrase_length,
            phrasing if enable_phrasing else None,
        )
        linked.reverse()
        direct.extend(linked)
        variants.extend(phrased)
    direct.extend(variants)
    return direct


@dataclass(frozen=True)
class CandidateGenerator:
    """``link_words`` bound to a pair of providers."""

    morphology: Optional[MorphologyProvider] = None
    phrasing: Optional[PhrasingProvider] = None

    def generate(
        self,
        words: Sequence[str],
        min_phrase_length: int = 1,
        enable_phrasing: bool = True,
    ) -> List[str]:
        return link_words(
            words,
            min_phrase_length,
            enable_phrasing,
            morphology=self.morphology,
            phrasing=self.phrasing,
        )


__all__ = ["CandidateGenerator", "link_words"]
