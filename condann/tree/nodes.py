"""
Mutable syntax tree with comment attachment slots.

Tree-sitter trees are immutable, so every named node of the parsed
document is wrapped into a SyntaxNode that can lose children and have
its comment slots rewritten. The original text is never modified here;
the printer turns the final state of the tree into range deletions.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from tree_sitter import Node

from .comments import ALL_SLOTS, CommentToken, Slot
from .tree_sitter_support import TreeSitterDocument


class SyntaxNode:
    """
    One named, non-comment node of the document.

    Siblings are always resolved from the parent's current children list,
    so they stay correct while the tree is being mutated.
    """

    def __init__(self, tree: SyntaxTree, ts_node: Node, parent: Optional[SyntaxNode]):
        self.tree = tree
        self.ts_node = ts_node
        self.type = ts_node.type
        self.parent = parent
        self.children: List[SyntaxNode] = []
        self.start_char, self.end_char = tree.doc.get_node_range(ts_node)
        self.removed = False
        self._slots: dict[Slot, List[CommentToken]] = {slot: [] for slot in ALL_SLOTS}

    def __repr__(self) -> str:
        state = " removed" if self.removed else ""
        return f"SyntaxNode({self.type} [{self.start_char}:{self.end_char}]{state})"

    @property
    def text(self) -> str:
        return self.tree.doc.text[self.start_char:self.end_char]

    # --- comment slots ---

    @property
    def leading(self) -> List[CommentToken]:
        return self._slots[Slot.LEADING]

    @property
    def trailing(self) -> List[CommentToken]:
        return self._slots[Slot.TRAILING]

    @property
    def inner(self) -> List[CommentToken]:
        return self._slots[Slot.INNER]

    def slot(self, kind: Slot) -> List[CommentToken]:
        return self._slots[kind]

    def set_slot(self, kind: Slot, comments: Iterable[CommentToken]) -> None:
        self._slots[kind] = list(comments)

    def clear_slot(self, kind: Slot) -> None:
        self._slots[kind] = []

    def add_comments(self, kind: Slot, comments: Iterable[CommentToken]) -> None:
        """
        Attach comments to a slot, skipping tokens the slot already holds.
        Leading comments are prepended, trailing and inner ones appended.
        """
        current = self._slots[kind]
        fresh = [c for c in comments if not any(c is existing for existing in current)]
        if not fresh:
            return
        if kind is Slot.LEADING:
            self._slots[kind] = fresh + current
        else:
            current.extend(fresh)

    def iter_comments(self) -> Iterator[CommentToken]:
        for kind in ALL_SLOTS:
            yield from self._slots[kind]

    # --- siblings ---

    def index_in_parent(self) -> int:
        if self.parent is None:
            return -1
        for i, child in enumerate(self.parent.children):
            if child is self:
                return i
        return -1

    def next_sibling(self) -> Optional[SyntaxNode]:
        idx = self.index_in_parent()
        if idx < 0 or idx + 1 >= len(self.parent.children):
            return None
        return self.parent.children[idx + 1]

    def prev_sibling(self) -> Optional[SyntaxNode]:
        idx = self.index_in_parent()
        if idx <= 0:
            return None
        return self.parent.children[idx - 1]

    # --- structural deletion ---

    def remove(self) -> None:
        """
        Detach this node from its parent.

        Comments of the node are first handed over to the neighbours so that
        shared or unrelated comments survive; directive tokens marked as
        ignored travel along and are dropped by the cleanup sweep.
        """
        if self.removed:
            return
        if self.parent is None:
            raise ValueError("Cannot remove the root node")

        self._share_comments_with_siblings()

        idx = self.index_in_parent()
        if idx >= 0:
            del self.parent.children[idx]
        self.removed = True
        self.tree.removed_nodes.append(self)

    def _share_comments_with_siblings(self) -> None:
        leading = self.leading
        trailing = self.trailing
        if not leading and not trailing:
            return

        prev = self.prev_sibling()
        nxt = self.next_sibling()

        if prev is not None:
            if leading:
                prev.add_comments(Slot.TRAILING, leading)
            if trailing and nxt is None:
                prev.add_comments(Slot.TRAILING, trailing)

        if nxt is not None:
            if trailing:
                nxt.add_comments(Slot.LEADING, trailing)
            if leading and prev is None:
                nxt.add_comments(Slot.LEADING, leading)

    def walk(self) -> Iterator[SyntaxNode]:
        """Depth-first iteration over the live subtree."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class SyntaxTree:
    """
    Owner of the wrapped nodes and of every comment of the document.
    """

    def __init__(self, doc: TreeSitterDocument):
        self.doc = doc
        self.root: Optional[SyntaxNode] = None
        self.comments: List[CommentToken] = []
        self.removed_nodes: List[SyntaxNode] = []

    def live_comments(self) -> set[int]:
        """Ids of the non-ignored comments still referenced by a live node."""
        live: set[int] = set()
        if self.root is None:
            return live
        for node in self.root.walk():
            for comment in node.iter_comments():
                if not comment.ignore:
                    live.add(id(comment))
        return live


__all__ = ["SyntaxNode", "SyntaxTree"]
