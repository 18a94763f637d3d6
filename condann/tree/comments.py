"""
Comment tokens and attachment slots.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Tree-sitter node types that carry comments in JS/TS grammars
COMMENT_NODE_TYPES = frozenset({"comment", "html_comment"})


class Slot(Enum):
    """Comment attachment buckets of a syntax node."""
    LEADING = "leading"
    TRAILING = "trailing"
    INNER = "inner"


ALL_SLOTS = (Slot.INNER, Slot.LEADING, Slot.TRAILING)


@dataclass(eq=False)
class CommentToken:
    """
    One source comment.

    Tokens compare by identity: the same token may be shared by the
    trailing slot of one node and the leading slot of its next sibling.
    """
    text: str
    """Comment value without delimiters."""
    raw: str
    """Comment text as written in the source."""
    start_char: int
    end_char: int
    line: int
    """1-based line of the comment start."""
    column: int
    """0-based column of the comment start."""
    ignore: bool = False
    """Deferred deletion marker; ignored tokens are dropped by the cleanup sweep."""

    @property
    def is_block(self) -> bool:
        return self.raw.startswith("/*")

    def __repr__(self) -> str:
        flag = " ignored" if self.ignore else ""
        return f"CommentToken({self.raw!r} @{self.line}:{self.column}{flag})"


def strip_comment_delimiters(raw: str) -> str:
    """Returns the comment value: the text without ``//``, ``/* */`` or ``<!-- -->``."""
    if raw.startswith("//"):
        return raw[2:]
    if raw.startswith("/*"):
        return raw[2:-2] if raw.endswith("*/") and len(raw) >= 4 else raw[2:]
    if raw.startswith("<!--"):
        return raw[4:-3] if raw.endswith("-->") else raw[4:]
    return raw


__all__ = ["COMMENT_NODE_TYPES", "Slot", "ALL_SLOTS", "CommentToken", "strip_comment_delimiters"]
