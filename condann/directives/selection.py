"""
Branch selection.

Evaluates the directives of a validated chain in source order and picks
the first branch whose condition holds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from ..conditions import ConditionEvaluator, ConditionParser, EvaluationError, ParseError
from ..diagnostics import Diagnostic, DiagnosticCollector
from .model import Chain, DirectiveItem, DirectiveKind


@dataclass
class BranchSelection:
    index: int
    """Index of the selected directive, -1 when no branch is selected."""
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def had_errors(self) -> bool:
        return bool(self.diagnostics)


class BranchSelector:
    """
    Decides which branch of a chain survives.

    ``#else`` always holds, ``#endif`` never does. A condition that fails to
    parse or evaluate counts as false and is reported; the scan goes on.
    """

    def __init__(self, context: Mapping[str, Any], diagnostics: Optional[DiagnosticCollector] = None):
        self.evaluator = ConditionEvaluator(context)
        self.parser = ConditionParser()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()

    def select(self, chain: Chain) -> BranchSelection:
        selection = BranchSelection(index=-1)
        for i, item in enumerate(chain):
            if not isinstance(item, DirectiveItem):
                continue
            try:
                if self._holds(item):
                    selection.index = i
                    break
            except (ParseError, EvaluationError) as e:
                message = e.message if isinstance(e, ParseError) else str(e)
                diag = self.diagnostics.warn(message, item.token.line, item.token.column)
                selection.diagnostics.append(diag)
        return selection

    def _holds(self, item: DirectiveItem) -> bool:
        if item.kind is DirectiveKind.ELSE:
            return True
        if item.kind is DirectiveKind.ENDIF:
            return False
        return self.evaluator.evaluate(self.parser.parse(item.condition))


def next_directive_index(chain: Chain, after: int) -> int:
    """Index of the first directive following position ``after``."""
    for i in range(after + 1, len(chain)):
        if isinstance(chain[i], DirectiveItem):
            return i
    return len(chain)


__all__ = ["BranchSelection", "BranchSelector", "next_directive_index"]
