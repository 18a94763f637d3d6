from __future__ import annotations

from ..tree import ALL_SLOTS, SyntaxNode


def sweep(node: SyntaxNode) -> int:
    """
    Physically drop comment tokens flagged as ignored from the three slots.

    Returns:
        Number of dropped slot entries
    """
    dropped = 0
    for kind in ALL_SLOTS:
        comments = node.slot(kind)
        if not comments:
            continue
        kept = [c for c in comments if not c.ignore]
        if len(kept) != len(comments):
            dropped += len(comments) - len(kept)
            node.set_slot(kind, kept)
    return dropped


def sweep_tree(root: SyntaxNode) -> int:
    """Sweep every live node; catches tokens shared into already exited nodes."""
    return sum(sweep(node) for node in root.walk())


__all__ = ["sweep", "sweep_tree"]
