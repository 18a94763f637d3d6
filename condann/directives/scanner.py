from __future__ import annotations

from typing import Optional, Tuple

from ..tree import Slot, SyntaxNode
from .model import Chain, DirectiveItem, DirectiveKind

# (prefix, kind, takes_condition); order matters: "#elseif " before "#else"
_PREFIXES = (
    ("#if ", DirectiveKind.IF, True),
    ("#elseif ", DirectiveKind.ELSEIF, True),
    ("#else", DirectiveKind.ELSE, False),
    ("#endif", DirectiveKind.ENDIF, False),
)


def classify(text: str) -> Tuple[Optional[DirectiveKind], str]:
    """
    Recognize a directive in comment text.

    Returns:
        (kind, condition) or (None, "") for an ordinary comment
    """
    value = text.strip()
    for prefix, kind, takes_condition in _PREFIXES:
        if not value.startswith(prefix):
            continue
        rest = value[len(prefix):]
        if takes_condition:
            return kind, rest.strip()
        # "#else"/"#endif" must end the word: "#elsewhere" is not a directive
        if not rest or rest[0].isspace():
            return kind, ""
    return None, ""


def scan(node: SyntaxNode, slot: Slot) -> Chain:
    """
    Collect directive items from one comment slot of a node.

    Ignored tokens are skipped; scanning stops right after an ``#endif``.
    """
    items: Chain = []
    for index, token in enumerate(node.slot(slot)):
        if token.ignore:
            continue
        kind, condition = classify(token.text)
        if kind is None:
            continue
        items.append(DirectiveItem(kind, condition, node, slot, index, token))
        if kind is DirectiveKind.ENDIF:
            break
    return items


__all__ = ["classify", "scan"]
