"""
Re-serialization of a mutated SyntaxTree.

The output is the original text with deletions applied: removed nodes
(together with the list separator they own) and every comment that no
live node references any more. Everything else is kept verbatim.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Tuple

from tree_sitter import Node

from .builder import is_comment
from .nodes import SyntaxNode, SyntaxTree
from .range_edits import RangeEditor

Range = Tuple[int, int]

_SEPARATORS = (",", ";")
_HSPACE = " \t"
_PAIRS = {"[": "]", "{": "}", "(": ")"}


def print_tree(tree: SyntaxTree) -> Tuple[str, Dict[str, Any]]:
    """
    Render the tree back to text.

    Returns:
        Tuple of (text, statistics)
    """
    doc = tree.doc
    text = doc.text

    removed = _top_level_removed(tree.removed_nodes)
    removed_keys = {_key(node.ts_node) for node in tree.removed_nodes}

    ranges: List[Range] = []
    for node in removed:
        ranges.append((node.start_char, node.end_char))
        ranges.extend(_separator_ranges(tree, node.ts_node, removed_keys))

    live = tree.live_comments()
    dead_comments = [c for c in tree.comments if id(c) not in live]
    ranges.extend((c.start_char, c.end_char) for c in dead_comments)

    editor = RangeEditor(text)
    for start, end, replacement in _normalize(text, _merge(text, ranges)):
        editor.add_replacement(start, end, replacement, edit_type="deletion")

    result, stats = editor.apply_edits()
    stats["nodes_removed"] = len(removed)
    stats["comments_removed"] = len(dead_comments)
    return result, stats


def _key(ts_node: Node) -> Tuple[int, int, str]:
    return ts_node.start_byte, ts_node.end_byte, ts_node.type


def _top_level_removed(nodes: List[SyntaxNode]) -> List[SyntaxNode]:
    """Removed nodes that are not inside another removed node."""
    result = []
    for node in nodes:
        ancestor = node.parent
        nested = False
        while ancestor is not None:
            if ancestor.removed:
                nested = True
                break
            ancestor = ancestor.parent
        if not nested:
            result.append(node)
    return result


def _next_significant(ts_node: Node) -> Optional[Node]:
    sib = ts_node.next_sibling
    while sib is not None and is_comment(sib):
        sib = sib.next_sibling
    return sib


def _prev_significant(ts_node: Node) -> Optional[Node]:
    sib = ts_node.prev_sibling
    while sib is not None and is_comment(sib):
        sib = sib.prev_sibling
    return sib


def _separator_ranges(tree: SyntaxTree, ts_node: Node, removed_keys: Set[Tuple[int, int, str]]) -> List[Range]:
    """
    Separator owned by a removed list element.

    An element owns the separator that follows it. The last element of a
    list without a trailing comma owns the comma after the closest
    surviving element before it.
    """
    doc = tree.doc
    nxt = _next_significant(ts_node)
    if nxt is not None and not nxt.is_named and nxt.type in _SEPARATORS:
        return [doc.get_node_range(nxt)]
    if nxt is not None and nxt.is_named:
        return []

    comma: Optional[Node] = None
    sib = _prev_significant(ts_node)
    while sib is not None:
        if sib.type == ",":
            comma = sib
        elif sib.is_named:
            if _key(sib) in removed_keys:
                comma = None
            else:
                return [doc.get_node_range(comma)] if comma is not None else []
        else:
            return []
        sib = _prev_significant(sib)
    return []


def _merge(text: str, ranges: List[Range]) -> List[Range]:
    """Union of ranges; ranges separated only by whitespace are joined."""
    merged: List[Range] = []
    for start, end in sorted(ranges):
        if start >= end:
            continue
        if merged and (start <= merged[-1][1] or not text[merged[-1][1]:start].strip()):
            merged[-1] = (merged[-1][0], max(end, merged[-1][1]))
        else:
            merged.append((start, end))
    return merged


def _normalize(text: str, ranges: List[Range]) -> List[Tuple[int, int, str]]:
    """
    Extend deletions so that no blank residue is left behind:
    whole-line deletions take the line break, mid-line deletions take
    the horizontal whitespace they leave dangling.
    """
    edits: List[Tuple[int, int, str]] = []
    for start, end in ranges:
        line_start = text.rfind("\n", 0, start) + 1
        line_end = text.find("\n", end)
        if line_end < 0:
            line_end = len(text)
        before = text[line_start:start]
        after = text[end:line_end]

        if not before.strip() and not after.strip():
            start = line_start
            end = line_end + 1 if line_end < len(text) else line_end
            if end == len(text) and start > 0 and line_end == len(text):
                # Last line without a final newline: eat the preceding break instead
                start -= 1
                if start > 0 and text[start - 1] == "\r":
                    start -= 1
            edits.append(_collapse_brackets(text, start, end))
        elif not after.strip():
            # Keep the CR of a CRLF line break
            tail = line_end - 1 if text[line_end - 1:line_end] == "\r" else line_end
            edits.append((line_start + len(before.rstrip()), tail, ""))
        elif not before.strip():
            edits.append((start, end + len(after) - len(after.lstrip(_HSPACE)), ""))
        else:
            replacement = "\n" if "\n" in text[start:end] else ""
            if before.endswith(tuple(_HSPACE)):
                end += len(after) - len(after.lstrip(_HSPACE))
            edits.append((start, end, replacement))
    return edits


def _collapse_brackets(text: str, start: int, end: int) -> Tuple[int, int, str]:
    """
    Widen a whole-line deletion that empties a bracketed list so the
    brackets close up: `[\\n  // gone\\n]` becomes `[]`.
    """
    head = text[:start].rstrip()
    rest = text[end:].lstrip()
    if head and rest and _PAIRS.get(head[-1]) == rest[0]:
        return len(head), len(text) - len(rest), ""
    return start, end, ""


__all__ = ["print_tree"]
