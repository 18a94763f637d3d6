"""
Removal engine.

Deletes a contiguous range of chain items: content nodes structurally,
directive markers by flagging their comment tokens for the cleanup sweep.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..tree import Slot, SyntaxNode
from .model import ChainItem, DirectiveItem, NormalItem


def mark_comments_removed(node: SyntaxNode, slot: Slot, start: int, end: Optional[int] = None) -> None:
    """Flag tokens ``[start:end]`` of a slot as ignored."""
    for comment in node.slot(slot)[start:end]:
        comment.ignore = True


def remove_range(items: Sequence[ChainItem]) -> None:
    """
    Delete everything a range of chain items stands for.

    Boundary directives only trim their slot (a suffix for the first item,
    a prefix for the last one) so comments of neighbouring code survive.
    """
    if not items:
        return

    if len(items) == 1:
        _remove_single(items[0])
        return

    if all(isinstance(item, DirectiveItem) for item in items):
        # Consecutive markers of a single slot
        first, last = items[0], items[-1]
        mark_comments_removed(first.node, first.slot, first.current_index(), last.current_index() + 1)
        return

    span = (_start_of(items[0]), _end_of(items[-1]))

    first = items[0]
    if isinstance(first, NormalItem):
        first.node.remove()
    else:
        mark_comments_removed(first.node, first.slot, first.current_index())

    last = items[-1]
    if isinstance(last, NormalItem):
        last.node.remove()
    else:
        mark_comments_removed(last.node, last.slot, 0, last.current_index() + 1)

    for item in items[1:-1]:
        if isinstance(item, NormalItem):
            item.node.remove()
        else:
            _drop_enclosed(item, span)


def _remove_single(item: ChainItem) -> None:
    if isinstance(item, NormalItem):
        item.node.remove()
    else:
        index = item.current_index()
        mark_comments_removed(item.node, item.slot, index, index + 1)


def _start_of(item: ChainItem) -> int:
    return item.token.start_char if isinstance(item, DirectiveItem) else item.node.start_char


def _end_of(item: ChainItem) -> int:
    return item.token.end_char if isinstance(item, DirectiveItem) else item.node.end_char


def _drop_enclosed(item: DirectiveItem, span: Tuple[int, int]) -> None:
    # Comments shared into the slot from outside the range stay attached
    start, end = span
    for comment in item.node.slot(item.slot):
        if start <= comment.start_char and comment.end_char <= end:
            comment.ignore = True


__all__ = ["remove_range", "mark_comments_removed"]
