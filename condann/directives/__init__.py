"""
Directive engine: scanner, chain builder, validator, branch selection,
removal engine and cleanup sweep.
"""

from .chain import build_chain
from .model import Chain, ChainItem, DirectiveItem, DirectiveKind, NormalItem
from .removal import remove_range
from .resolver import ConditionalAnnotationResolver, ResolveStats, resolve_tree
from .scanner import classify, scan
from .selection import BranchSelection, BranchSelector, next_directive_index
from .sweep import sweep, sweep_tree
from .validation import mark_directives_removed, validate

__all__ = [
    "BranchSelection",
    "BranchSelector",
    "Chain",
    "ChainItem",
    "ConditionalAnnotationResolver",
    "DirectiveItem",
    "DirectiveKind",
    "NormalItem",
    "ResolveStats",
    "build_chain",
    "classify",
    "mark_directives_removed",
    "next_directive_index",
    "remove_range",
    "resolve_tree",
    "scan",
    "sweep",
    "sweep_tree",
    "validate",
]
