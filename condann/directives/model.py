"""
Chain items of a conditional annotation block.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from ..tree import CommentToken, Slot, SyntaxNode


class DirectiveKind(Enum):
    """Directive markers, in recognition priority order."""
    IF = "#if"
    ELSEIF = "#elseif"
    ELSE = "#else"
    ENDIF = "#endif"


@dataclass(eq=False)
class DirectiveItem:
    """
    A directive comment found in one slot of one node.

    ``index`` is the position of the token at scan time; the token itself
    is kept as well, so the current position can be recovered after
    comments were shared into the slot by a sibling removal.
    """
    kind: DirectiveKind
    condition: str
    node: SyntaxNode
    slot: Slot
    index: int
    token: CommentToken

    def current_index(self) -> int:
        for i, comment in enumerate(self.node.slot(self.slot)):
            if comment is self.token:
                return i
        return self.index

    def __repr__(self) -> str:
        cond = f" {self.condition}" if self.condition else ""
        return f"DirectiveItem({self.kind.value}{cond} @{self.slot.value}[{self.index}] of {self.node.type})"


@dataclass(eq=False)
class NormalItem:
    """Placeholder for a whole sibling node caught between two directives."""
    node: SyntaxNode

    def __repr__(self) -> str:
        return f"NormalItem({self.node.type})"


ChainItem = Union[DirectiveItem, NormalItem]
Chain = List[ChainItem]


def is_directive(item: ChainItem, kind: Optional[DirectiveKind] = None) -> bool:
    if not isinstance(item, DirectiveItem):
        return False
    return kind is None or item.kind is kind


__all__ = ["DirectiveKind", "DirectiveItem", "NormalItem", "ChainItem", "Chain", "is_directive"]
