"""Cross-reference markers embedded in dictionary descriptions.

Two marker forms point at other headwords:

* ``<→headword>``: anything between the arrow and the closing bracket.
* ``＝headword``: a full-width equals sign followed by ASCII letters,
  digits and spaces.
"""

from __future__ import annotations

from typing import Dict, List, Mapping

ARROW_MARKER = "<→"
EQUALS_MARKER = "＝"


def _is_ref_character(char: str) -> bool:
    return "A" <= char <= "Z" or "a" <= char <= "z" or "0" <= char <= "9" or char == " "


def extract_ref_patterns(description: str) -> List[str]:
    """Return the headwords referenced by ``description`` in order of appearance."""

    results: List[str] = []
    length = len(description)
    i = 0
    while i < length:
        if description.startswith(ARROW_MARKER, i):
            start = i + len(ARROW_MARKER)
            end = description.find(">", start)
            if end != -1:
                results.append(description[start:end].strip())
                i = end + 1
                continue

        if description[i] == EQUALS_MARKER:
            end = i + 1
            while end < length and _is_ref_character(description[end]):
                end += 1
            word = description[i + 1 : end].strip()
            if word:
                results.append(word)
            i = end
            continue

        i += 1
    return results


def collect_reference_headwords(descriptions: Mapping[str, str]) -> List[str]:
    """Return referenced headwords not already in ``descriptions``, de-duplicated."""

    found: Dict[str, None] = {}
    for description in descriptions.values():
        if not description:
            continue
        for ref in extract_ref_patterns(description):
            if not ref or ref in descriptions:
                continue
            found.setdefault(ref, None)
    return list(found)


__all__ = [
    "ARROW_MARKER",
    "EQUALS_MARKER",
    "collect_reference_headwords",
    "extract_ref_patterns",
]
