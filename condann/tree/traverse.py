"""
Depth-first traversal tolerant to in-place mutation.
"""

from __future__ import annotations

from typing import Callable

from .nodes import SyntaxNode

Visitor = Callable[[SyntaxNode], None]


def traverse(root: SyntaxNode, enter: Visitor, exit: Visitor) -> None:
    """
    Visit every live node: ``enter`` before its children, ``exit`` after.

    The children list is re-read at every step. A visitor may remove the
    node it is visiting and any of its following siblings; removed nodes
    are neither descended into nor exited.
    """
    enter(root)
    if root.removed:
        return

    i = 0
    while i < len(root.children):
        child = root.children[i]
        traverse(child, enter, exit)
        # A removed child shifts its successors into slot i
        if i < len(root.children) and root.children[i] is child:
            i += 1

    exit(root)


__all__ = ["traverse", "Visitor"]
