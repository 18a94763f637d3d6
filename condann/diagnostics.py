"""
Diagnostics reported while resolving directives.

A diagnostic never aborts processing: it is logged and collected so the
caller can inspect or print it after the pass.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    message: str
    filename: Optional[str]
    line: int
    column: int
    severity: str = "warning"

    @property
    def location(self) -> str:
        return f"{self.filename or '<unknown>'}:{self.line}:{self.column}"

    def format(self) -> str:
        tag = "WARN" if self.severity == "warning" else self.severity.upper()
        return f"[{tag}] {self.message} at {self.location}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DiagnosticCollector:
    """Logs diagnostics as they arrive and keeps them for the result."""

    def __init__(self, filename: Optional[str] = None):
        self.filename = filename
        self._items: List[Diagnostic] = []

    def warn(self, message: str, line: int, column: int) -> Diagnostic:
        diag = Diagnostic(message=message, filename=self.filename, line=line, column=column)
        self.report(diag)
        return diag

    def report(self, diag: Diagnostic) -> None:
        level = logging.ERROR if diag.severity == "error" else logging.WARNING
        logger.log(level, diag.format())
        self._items.append(diag)

    @property
    def items(self) -> List[Diagnostic]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)


__all__ = ["Diagnostic", "DiagnosticCollector"]
