from __future__ import annotations

# Public API of the tree package:
#  • parse_source: text → SyntaxTree with attached comments
#  • traverse / print_tree: mutation-tolerant walk and re-serialization
from .builder import build_syntax_tree
from .comments import ALL_SLOTS, CommentToken, Slot
from .nodes import SyntaxNode, SyntaxTree
from .printer import print_tree
from .registry import create_document, get_document_class, is_supported, supported_extensions
from .traverse import traverse


def parse_source(text: str, ext: str) -> SyntaxTree:
    """Parse text with the grammar for ``ext`` and attach comments."""
    return build_syntax_tree(create_document(text, ext))


__all__ = [
    "ALL_SLOTS",
    "CommentToken",
    "Slot",
    "SyntaxNode",
    "SyntaxTree",
    "build_syntax_tree",
    "create_document",
    "get_document_class",
    "is_supported",
    "parse_source",
    "print_tree",
    "supported_extensions",
    "traverse",
]
