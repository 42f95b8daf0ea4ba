"""Turn fetched descriptions into a renderable payload."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Awaitable, Mapping, Protocol, Sequence, Union


@dataclass(frozen=True, slots=True)
class RenderResult:
    content: Any
    hit_count: int


class Renderer(Protocol):
    def render(
        self,
        headwords: Sequence[str],
        descriptions: Mapping[str, str],
        allow_short_word_hits: bool,
    ) -> Union[RenderResult, Awaitable[RenderResult]]:
        ...


class HtmlGenerator:
    """Render each described headword as a small HTML block."""

    def __init__(self, short_word_length: int = 3) -> None:
        self.short_word_length = short_word_length

    def _render_entry(self, headword: str, description: str) -> str:
        lines = "".join(
            f'<div class="desc">{html.escape(line)}</div>'
            for line in description.splitlines()
            if line.strip()
        )
        return f'<div class="entry"><span class="head">{html.escape(headword)}</span>{lines}</div>'

    def render(
        self,
        headwords: Sequence[str],
        descriptions: Mapping[str, str],
        allow_short_word_hits: bool,
    ) -> RenderResult:
        blocks = []
        seen = set()
        for headword in headwords:
            if headword in seen:
                continue
            seen.add(headword)
            description = descriptions.get(headword)
            if not description:
                continue
            if not allow_short_word_hits and len(headword) < self.short_word_length:
                continue
            blocks.append(self._render_entry(headword, description))
        return RenderResult(content="".join(blocks), hit_count=len(blocks))


__all__ = ["HtmlGenerator", "RenderResult", "Renderer"]
