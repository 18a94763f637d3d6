"""
Chain builder.

Collects the directives and the content nodes of one conditional block,
walking forward through the siblings of the starting node.
"""

from __future__ import annotations

from ..tree import Slot, SyntaxNode
from .model import Chain, NormalItem, is_directive, DirectiveKind
from .scanner import scan


def build_chain(start: SyntaxNode) -> Chain:
    """
    Build the chain that begins in the leading comments of ``start``.

    An empty chain means there is nothing to resolve. The chain always
    ends either with an ``#endif`` or at the end of the sibling sequence.
    """
    chain: Chain = []
    current = start
    while True:
        chain.extend(scan(current, Slot.LEADING))
        if not chain or is_directive(chain[-1], DirectiveKind.ENDIF):
            break

        chain.append(NormalItem(current))

        nxt = current.next_sibling()
        if nxt is None:
            # "#endif" of the last element sits in its trailing comments
            chain.extend(scan(current, Slot.TRAILING))
            break

        # Same tokens are the leading comments of the next sibling
        current.clear_slot(Slot.TRAILING)
        current = nxt

    if chain:
        prev = start.prev_sibling()
        if prev is not None:
            prev.clear_slot(Slot.TRAILING)

    return chain


__all__ = ["build_chain"]
