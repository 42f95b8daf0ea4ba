"""Resolve a screen point to the hover window texts around the caret."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol

from hoverdict import logging_manager as log_mgr
from hoverdict.config.settings import LookupSettings
from hoverdict.text.classifier import LATIN_CLASSIFIER, CharacterClassifier, get_classifier
from hoverdict.text.segmentation import TokenBoundaryResolver, build_resolver
from hoverdict.text.window import (
    DEFAULT_MAX_WORDS,
    DEFAULT_SEGMENTER_LOCALE,
    FIXED_SCRIPT_LIMIT,
    extend_window_text,
    extract_window,
)

logger = log_mgr.get_logger().getChild("caret")


class NodeType(Enum):
    TEXT = "text"
    ELEMENT = "element"
    OTHER = "other"


class TextNode(Protocol):
    node_type: NodeType
    data: str

    def following_text(self) -> str:
        """Text of the nodes after this one, in document order."""


@dataclass(frozen=True, slots=True)
class CaretPosition:
    node: Any
    offset: int


class CaretLocator(Protocol):
    def locate(self, root: Any, x: float, y: float) -> Optional[CaretPosition]:
        ...


class ElementTextExposer(Protocol):
    """Temporarily makes an element's text reachable by the caret locator."""

    def activate(self, element: Any) -> None:
        ...

    def deactivate(self) -> None:
        ...


TextFetcher = Callable[[Any, float, float], List[str]]


class Traverser:
    def __init__(
        self,
        locator: CaretLocator,
        *,
        classifier: CharacterClassifier = LATIN_CLASSIFIER,
        max_words: int = DEFAULT_MAX_WORDS,
        resolver: Optional[TokenBoundaryResolver] = None,
        fixed_script_limit: int = FIXED_SCRIPT_LIMIT,
        locale: str = DEFAULT_SEGMENTER_LOCALE,
        exposer: Optional[ElementTextExposer] = None,
    ) -> None:
        self.locator = locator
        self.classifier = classifier
        self.max_words = max_words
        self.resolver = resolver
        self.fixed_script_limit = fixed_script_limit
        self.locale = locale
        self.exposer = exposer

    @classmethod
    def from_settings(
        cls,
        locator: CaretLocator,
        settings: LookupSettings,
        *,
        classifier: Optional[CharacterClassifier] = None,
        exposer: Optional[ElementTextExposer] = None,
    ) -> "Traverser":
        return cls(
            locator,
            classifier=classifier or get_classifier(settings.classifier),
            max_words=settings.max_words,
            resolver=build_resolver(settings.segmenter),
            fixed_script_limit=settings.fixed_script_limit,
            locale=settings.segmenter_locale,
            exposer=exposer,
        )

    def fetch_text_under_cursor(self, root: Any, x: float, y: float) -> List[str]:
        position = self.locator.locate(root, x, y)
        if position is None:
            return []

        node_type = getattr(position.node, "node_type", NodeType.OTHER)
        if node_type is NodeType.TEXT:
            return self.fetch_text_from_text_node(position.node, position.offset)
        if node_type is NodeType.ELEMENT:
            return self._fetch_text_from_element_node(root, x, y)
        return []

    def fetch_text_from_text_node(self, node: TextNode, offset: int) -> List[str]:
        """Return ``[text]`` or ``[text, sub_text]`` for the caret inside ``node``."""

        window = extract_window(
            node.data,
            offset,
            self.max_words,
            self.resolver,
            classifier=self.classifier,
            fixed_script_limit=self.fixed_script_limit,
            locale=self.locale,
        )
        if window is None:
            return []

        texts = window.texts()
        if not window.truncated_at_end:
            return texts

        following = node.following_text()
        return [
            extend_window_text(
                text,
                following,
                window.is_script_single_byte,
                max_word_count=self.max_words,
                classifier=self.classifier,
                fixed_script_limit=self.fixed_script_limit,
            )
            for text in texts
        ]

    def _fetch_text_from_element_node(self, root: Any, x: float, y: float) -> List[str]:
        if self.exposer is None:
            return []
        self.exposer.activate(root)
        try:
            position = self.locator.locate(root, x, y)
            if position is None:
                return []
            if getattr(position.node, "node_type", NodeType.OTHER) is not NodeType.TEXT:
                return []
            return self.fetch_text_from_text_node(position.node, position.offset)
        finally:
            self.exposer.deactivate()


def build_text_fetcher(locator: CaretLocator, **options: Any) -> TextFetcher:
    """Return a fetcher that maps any caret failure to an empty list."""

    traverser = Traverser(locator, **options)

    def fetch(root: Any, x: float, y: float) -> List[str]:
        try:
            return traverser.fetch_text_under_cursor(root, x, y)
        except Exception:
            logger.exception(
                "Unable to read text under cursor",
                extra={"event": "caret.locate_failed", "x": x, "y": y},
            )
            return []

    return fetch


__all__ = [
    "CaretLocator",
    "CaretPosition",
    "ElementTextExposer",
    "NodeType",
    "TextNode",
    "Traverser",
    "build_text_fetcher",
]
