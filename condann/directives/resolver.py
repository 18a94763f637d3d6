"""
Conditional annotation resolver.

Drives the directive engine over a syntax tree:

- on enter, directives in the node's inner comments are stripped, then every
  chain starting in its leading comments is built, validated, evaluated and
  resolved;
- on exit, comment tokens flagged for deletion are swept from the node.

Supported directives (in comments of arrays, objects, blocks, class bodies,
argument lists, ...), nestable, related directives must live on one level:

    // #if TOP_LEVEL
    console.log('top level');
    // #endif
    function func() {
      // #if DEBUG
      console.log('debug');
      // #endif
      return {
        // #if MODE === 'development'
        development: true,
        // #elseif MODE === 'production'
        production: true,
        // #else
        mode: 'unknown',
        // #endif
      };
    }
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..diagnostics import DiagnosticCollector
from ..tree import Slot, SyntaxNode, traverse
from .chain import build_chain
from .model import Chain
from .removal import remove_range
from .scanner import scan
from .selection import BranchSelector, next_directive_index
from .sweep import sweep
from .validation import mark_directives_removed, validate

logger = logging.getLogger(__name__)


@dataclass
class ResolveStats:
    chains_resolved: int = 0
    chains_invalid: int = 0
    chains_with_errors: int = 0
    inner_runs_removed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "chains_resolved": self.chains_resolved,
            "chains_invalid": self.chains_invalid,
            "chains_with_errors": self.chains_with_errors,
            "inner_runs_removed": self.inner_runs_removed,
        }


class ConditionalAnnotationResolver:
    """
    Resolves ``#if`` / ``#elseif`` / ``#else`` / ``#endif`` comment directives.

    The context is read-only for the whole pass. Failures are isolated per
    chain: an invalid or unevaluable chain only loses its directive markers.
    """

    def __init__(self, context: Mapping[str, Any], diagnostics: Optional[DiagnosticCollector] = None):
        self.context = context
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        self.selector = BranchSelector(context, self.diagnostics)
        self.stats = ResolveStats()

    def resolve(self, root: SyntaxNode) -> ResolveStats:
        traverse(root, self.enter, self.exit)
        return self.stats

    def enter(self, node: SyntaxNode) -> None:
        if node.inner:
            self._strip_inner(node)

        # Each round consumes at least the first directive of the leading slot
        while node.leading and not node.removed:
            chain = build_chain(node)
            if not chain:
                return
            self.resolve_chain(chain)

    def exit(self, node: SyntaxNode) -> None:
        sweep(node)

    def _strip_inner(self, node: SyntaxNode) -> None:
        # Inner comments have no content to keep: every directive run goes
        while True:
            items = scan(node, Slot.INNER)
            if not items:
                return
            remove_range(items)
            self.stats.inner_runs_removed += 1

    def resolve_chain(self, chain: Chain) -> None:
        if not validate(chain):
            logger.debug("Invalid directive chain %r, dropping its markers", chain)
            mark_directives_removed(chain)
            self.stats.chains_invalid += 1
            return

        selection = self.selector.select(chain)
        if selection.had_errors:
            # Outcome is unreliable: keep all content
            mark_directives_removed(chain)
            self.stats.chains_with_errors += 1
            return

        self.stats.chains_resolved += 1
        if selection.index == -1:
            remove_range(chain)
            return

        remove_range(chain[:selection.index + 1])
        remove_range(chain[next_directive_index(chain, selection.index):])


def resolve_tree(root: SyntaxNode, context: Mapping[str, Any],
                 diagnostics: Optional[DiagnosticCollector] = None) -> ResolveStats:
    """Resolve every directive chain of the tree in place."""
    return ConditionalAnnotationResolver(context, diagnostics).resolve(root)


__all__ = ["ConditionalAnnotationResolver", "ResolveStats", "resolve_tree"]
