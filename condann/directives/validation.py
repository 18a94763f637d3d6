from __future__ import annotations

from .model import Chain, DirectiveItem, DirectiveKind, is_directive


def validate(chain: Chain) -> bool:
    """
    A chain is valid when its only ``#if`` opens it and its first ``#endif`` closes it.
    """
    if not chain:
        return False
    last_if = max((i for i, item in enumerate(chain) if is_directive(item, DirectiveKind.IF)), default=-1)
    first_endif = next((i for i, item in enumerate(chain) if is_directive(item, DirectiveKind.ENDIF)), -1)
    return last_if == 0 and first_endif == len(chain) - 1


def mark_directives_removed(chain: Chain) -> None:
    """Drop only the directive markers of a chain; content nodes stay."""
    for item in chain:
        if isinstance(item, DirectiveItem):
            item.token.ignore = True


__all__ = ["validate", "mark_directives_removed"]
