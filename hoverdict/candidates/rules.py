"""Morphology and phrasing rules used to widen the candidate set.

The lookup pipeline only depends on two capabilities:

* :class:`MorphologyProvider` - ``base_forms_of(word)`` returns alternate base
  forms of an inflected word ("running" -> "run").
* :class:`PhrasingProvider` - ``phrase_variants_of(words)`` returns rewritten
  word sequences for idiom lookup ("take him away" -> "take someone away").

:class:`RuleBook` implements both from small English rule tables.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Sequence, Tuple

TrailingRule = Tuple[str, str]

# Each group yields at most one candidate: the first rule whose suffix matches
# and leaves a long enough stem.
ENGLISH_TRAILING_RULES: Tuple[Tuple[TrailingRule, ...], ...] = (
    (("ies", "y"), ("ches", "ch"), ("shes", "sh"), ("sses", "ss"), ("xes", "x"), ("oes", "o"), ("s", "")),
    (
        ("ied", "y"),
        ("bbed", "b"),
        ("dded", "d"),
        ("gged", "g"),
        ("mmed", "m"),
        ("nned", "n"),
        ("pped", "p"),
        ("rred", "r"),
        ("tted", "t"),
        ("ed", ""),
    ),
    (("ed", "e"),),
    (
        ("bbing", "b"),
        ("dding", "d"),
        ("gging", "g"),
        ("mming", "m"),
        ("nning", "n"),
        ("pping", "p"),
        ("rring", "r"),
        ("tting", "t"),
        ("ing", ""),
    ),
    (("ing", "e"),),
    (("ier", "y"), ("er", "")),
    (("iest", "y"), ("est", "")),
    (("ily", "y"), ("ly", "")),
    (("'s", ""), ("s'", "s")),
)

ENGLISH_IRREGULAR_FORMS: Dict[str, Tuple[str, ...]] = {
    "am": ("be",),
    "are": ("be",),
    "is": ("be",),
    "was": ("be",),
    "were": ("be",),
    "been": ("be",),
    "did": ("do",),
    "done": ("do",),
    "does": ("do",),
    "had": ("have",),
    "has": ("have",),
    "went": ("go",),
    "gone": ("go",),
    "ran": ("run",),
    "took": ("take",),
    "taken": ("take",),
    "made": ("make",),
    "got": ("get",),
    "gotten": ("get",),
    "came": ("come",),
    "saw": ("see",),
    "seen": ("see",),
    "dealt": ("deal",),
    "thought": ("think",),
    "brought": ("bring",),
    "bought": ("buy",),
    "caught": ("catch",),
    "taught": ("teach",),
    "left": ("leave",),
    "felt": ("feel",),
    "kept": ("keep",),
    "held": ("hold",),
    "told": ("tell",),
    "said": ("say",),
    "paid": ("pay",),
    "found": ("find",),
    "gave": ("give",),
    "given": ("give",),
    "knew": ("know",),
    "known": ("know",),
    "wrote": ("write",),
    "written": ("write",),
    "broke": ("break",),
    "broken": ("break",),
    "spoke": ("speak",),
    "spoken": ("speak",),
    "better": ("good", "well"),
    "best": ("good", "well"),
    "worse": ("bad", "badly"),
    "worst": ("bad", "badly"),
    "children": ("child",),
    "men": ("man",),
    "women": ("woman",),
    "feet": ("foot",),
    "teeth": ("tooth",),
    "mice": ("mouse",),
    "people": ("person",),
}

OBJECT_PRONOUNS = frozenset({"me", "you", "him", "her", "us", "them"})
THING_PRONOUNS = frozenset({"it", "this", "that"})
POSSESSIVE_PRONOUNS = frozenset({"my", "your", "his", "its", "our", "their"})
REFLEXIVE_PRONOUNS = frozenset(
    {"myself", "yourself", "himself", "herself", "itself", "ourselves", "yourselves", "themselves"}
)


class MorphologyProvider(Protocol):
    def base_forms_of(self, word: str) -> Sequence[str]:
        """Return alternate base forms of ``word`` (possibly empty)."""


class PhrasingProvider(Protocol):
    def phrase_variants_of(self, words: Sequence[str]) -> Sequence[Sequence[str]]:
        """Return rewritten word sequences for ``words`` (possibly empty)."""


def replace_trailing(word: str, search: str, new: str) -> Optional[str]:
    """Swap the ``search`` suffix of ``word`` for ``new``; ``None`` if absent."""

    if not word.endswith(search):
        return None
    return word[: len(word) - len(search)] + new


def try_to_replace_trailing_strings(
    word: str,
    trailing_rules: Sequence[Sequence[TrailingRule]],
    min_length: int = 3,
) -> List[str]:
    results: List[str] = []
    for group in trailing_rules:
        for search, new in group:
            candidate = replace_trailing(word, search, new)
            if candidate is not None and len(candidate) >= min_length:
                results.append(candidate)
                break
    return results


def _unique(values: Sequence[str], exclude: str) -> List[str]:
    seen = {exclude}
    unique: List[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


class RuleBook:
    """Rule table backed morphology and phrasing provider."""

    def __init__(
        self,
        *,
        trailing_rules: Sequence[Sequence[TrailingRule]] = ENGLISH_TRAILING_RULES,
        irregular_forms: Optional[Dict[str, Tuple[str, ...]]] = None,
        min_length: int = 3,
    ) -> None:
        self.trailing_rules = trailing_rules
        self.irregular_forms = dict(
            ENGLISH_IRREGULAR_FORMS if irregular_forms is None else irregular_forms
        )
        self.min_length = min_length

    def base_forms_of(self, word: str) -> List[str]:
        lowered = word.lower()
        forms: List[str] = list(self.irregular_forms.get(lowered, ()))
        forms.extend(try_to_replace_trailing_strings(lowered, self.trailing_rules, self.min_length))
        return _unique(forms, exclude=word)

    def _generalize(self, word: str) -> str:
        lowered = word.lower()
        if lowered in OBJECT_PRONOUNS:
            return "someone"
        if lowered in THING_PRONOUNS:
            return "something"
        if lowered in POSSESSIVE_PRONOUNS:
            return "one's"
        if lowered in REFLEXIVE_PRONOUNS:
            return "oneself"
        return word

    def phrase_variants_of(self, words: Sequence[str]) -> List[List[str]]:
        if len(words) < 2:
            return []
        rest = [self._generalize(word) for word in words[1:]]
        if rest == list(words[1:]):
            return []
        variants: List[List[str]] = [[words[0], *rest]]
        for base in self.base_forms_of(words[0]):
            variants.append([base, *rest])
        return variants


__all__ = [
    "ENGLISH_IRREGULAR_FORMS",
    "ENGLISH_TRAILING_RULES",
    "MorphologyProvider",
    "PhrasingProvider",
    "RuleBook",
    "replace_trailing",
    "try_to_replace_trailing_strings",
]
