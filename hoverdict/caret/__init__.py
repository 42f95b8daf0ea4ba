"""Caret to text traversal."""

from .traverser import (
    CaretLocator,
    CaretPosition,
    ElementTextExposer,
    NodeType,
    TextNode,
    Traverser,
    build_text_fetcher,
)

__all__ = [
    "CaretLocator",
    "CaretPosition",
    "ElementTextExposer",
    "NodeType",
    "TextNode",
    "Traverser",
    "build_text_fetcher",
]
