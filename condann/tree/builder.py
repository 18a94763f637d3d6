"""
Builds the mutable syntax tree and attaches comments to nodes.

Attachment rules, for the comments that are direct children of a node:
- before the first named child → leading comments of that child;
- between children i and i+1 → trailing of i and leading of i+1
  (one shared token object);
- after the last named child → trailing comments of that child;
- a node without named children keeps them as inner comments.
"""

from __future__ import annotations

import logging
from typing import List

from tree_sitter import Node

from .comments import COMMENT_NODE_TYPES, CommentToken, Slot, strip_comment_delimiters
from .nodes import SyntaxNode, SyntaxTree
from .tree_sitter_support import TreeSitterDocument

logger = logging.getLogger(__name__)


def is_comment(ts_node: Node) -> bool:
    return ts_node.type in COMMENT_NODE_TYPES


def build_syntax_tree(doc: TreeSitterDocument) -> SyntaxTree:
    """
    Wrap the parsed document into a SyntaxTree with attached comments.

    Args:
        doc: Parsed document

    Returns:
        SyntaxTree whose root wraps the document root node
    """
    tree = SyntaxTree(doc)
    root = SyntaxNode(tree, doc.root_node, None)
    tree.root = root

    if doc.has_error():
        logger.debug("Syntax errors in %s document, %d error node(s)", doc.ext, len(doc.get_errors()))

    # Iterative walk: deep expressions must not hit the recursion limit
    stack: List[SyntaxNode] = [root]
    while stack:
        node = stack.pop()
        _attach_children(tree, node)
        stack.extend(node.children)

    return tree


def _attach_children(tree: SyntaxTree, node: SyntaxNode) -> None:
    pending: List[CommentToken] = []
    last_child: SyntaxNode | None = None

    for ts_child in node.ts_node.children:
        if is_comment(ts_child):
            pending.append(_make_comment(tree, ts_child))
            continue
        if not ts_child.is_named:
            continue

        child = SyntaxNode(tree, ts_child, node)
        node.children.append(child)
        if pending:
            if last_child is not None:
                last_child.add_comments(Slot.TRAILING, pending)
            child.set_slot(Slot.LEADING, pending)
            pending = []
        last_child = child

    if pending:
        if last_child is not None:
            last_child.add_comments(Slot.TRAILING, pending)
        else:
            node.add_comments(Slot.INNER, pending)


def _make_comment(tree: SyntaxTree, ts_node: Node) -> CommentToken:
    doc = tree.doc
    start_char, end_char = doc.get_node_range(ts_node)
    raw = doc.text[start_char:end_char]
    line, column = doc.get_position(start_char)
    token = CommentToken(
        text=strip_comment_delimiters(raw),
        raw=raw,
        start_char=start_char,
        end_char=end_char,
        line=line,
        column=column,
    )
    tree.comments.append(token)
    return token


__all__ = ["build_syntax_tree", "is_comment"]
