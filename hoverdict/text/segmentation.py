"""Script-aware token boundary resolvers for scripts written without spaces."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Tuple

import regex

from hoverdict import logging_manager as log_mgr

try:
    # Optional lightweight Japanese tokenizer.
    from tinysegmenter import TinySegmenter
except Exception:  # pragma: no cover - optional dependency
    TinySegmenter = None

logger = log_mgr.get_logger().getChild("segmentation")

_SCRIPT_RUN_PATTERN = regex.compile(
    r"\p{Han}+|\p{Hiragana}+|[\p{Katakana}ー]+|\p{Hangul}+|[\p{Latin}0-9]+|\s+|.",
    regex.DOTALL,
)


class TokenBoundaryResolver(Protocol):
    def tokenize(self, text: str, locale: str) -> Optional[Sequence[str]]:
        """Split ``text`` into word tokens, or return ``None`` when unable to."""


class TinySegmenterResolver:
    """Word segmentation for Japanese via TinySegmenter."""

    def __init__(self, segmenter=None) -> None:
        self._segmenter = segmenter

    def tokenize(self, text: str, locale: str) -> Optional[Sequence[str]]:
        if not text:
            return []
        try:
            return list(self._segmenter.tokenize(text))
        except Exception as exc:  # pragma: no cover - optional helper
            logger.debug(
                "TinySegmenter failed to tokenize text",
                extra={"event": "segmentation.tokenize_failed", "error": str(exc)},
            )
            return None


class ScriptRunResolver:
    """Split text wherever the Unicode script changes.

    Coarser than a dictionary segmenter but dependency free beyond ``regex``.
    """

    def tokenize(self, text: str, locale: str) -> Optional[Sequence[str]]:
        return [match.group() for match in _SCRIPT_RUN_PATTERN.finditer(text)]


def build_resolver(name: str) -> Optional[TokenBoundaryResolver]:
    """Return the resolver configured as ``name`` or ``None`` when unavailable."""

    normalized = (name or "none").strip().lower()
    if normalized == "none":
        return None
    if normalized == "script-runs":
        return ScriptRunResolver()
    if normalized == "tinysegmenter":
        if TinySegmenter is None:
            logger.info(
                "TinySegmenter is not installed; windows will start at the cursor",
                extra={"event": "segmentation.unavailable", "segmenter": normalized},
            )
            return None
        return TinySegmenterResolver(TinySegmenter())
    raise ValueError(f"Unknown segmenter: {name!r}")


def token_spans(text: str, tokens: Sequence[str]) -> List[Tuple[int, int]]:
    """Return the ``(start, end)`` span of each token within ``text``.

    Tokens are matched in order, so segmenters that drop whitespace still
    map back onto the original buffer. Tokens that cannot be located are
    skipped.
    """

    spans: List[Tuple[int, int]] = []
    position = 0
    for token in tokens:
        if not token:
            continue
        start = text.find(token, position)
        if start < 0:
            continue
        position = start + len(token)
        spans.append((start, position))
    return spans


__all__ = [
    "ScriptRunResolver",
    "TinySegmenterResolver",
    "TokenBoundaryResolver",
    "build_resolver",
    "token_spans",
]
