"""
Range-based text editing.
Applies deletions and replacements to the original text while keeping
everything outside the edited ranges byte-identical.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class TextRange:
    """Character span [start_char, end_char) of the original text."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: start_char ({self.start_char}) > end_char ({self.end_char})")

    def overlaps(self, other: TextRange) -> bool:
        return not (self.end_char <= other.start_char or other.end_char <= self.start_char)


@dataclass
class Edit:
    range: TextRange
    replacement: str
    type: Optional[str]  # counter key in the statistics


class RangeEditor:
    """
    Collects edits against one text and applies them in a single pass.
    Edits must not overlap; the printer merges its ranges beforehand.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.edits: List[Edit] = []

    def add_replacement(self, start_char: int, end_char: int, replacement: str, edit_type: Optional[str]) -> None:
        self.edits.append(Edit(TextRange(start_char, end_char), replacement, edit_type))

    def validate_edits(self) -> List[str]:
        """Bounds and overlap problems of the collected edits."""
        errors = []
        text_len = len(self.original_text)
        for i, edit in enumerate(self.edits):
            if edit.range.start_char < 0:
                errors.append(f"Edit {i}: start_char ({edit.range.start_char}) is negative")
            if edit.range.end_char > text_len:
                errors.append(f"Edit {i}: end_char ({edit.range.end_char}) exceeds text length ({text_len})")

        ordered = sorted(self.edits, key=lambda e: e.range.start_char)
        for prev, cur in zip(ordered, ordered[1:]):
            if prev.range.overlaps(cur.range):
                errors.append(
                    f"Edits overlap: [{prev.range.start_char}, {prev.range.end_char}) "
                    f"and [{cur.range.start_char}, {cur.range.end_char})"
                )
        return errors

    def apply_edits(self) -> Tuple[str, Dict[str, Any]]:
        """
        Apply all edits.

        Returns:
            Tuple of (modified_text, statistics)
        """
        validation_errors = self.validate_edits()
        if validation_errors:
            raise ValueError(f"Edit validation failed: {'; '.join(validation_errors)}")

        stats: Dict[str, Any] = {"edits_applied": len(self.edits), "chars_removed": 0, "lines_removed": 0}
        if not self.edits:
            return self.original_text, stats

        # Join the untouched pieces in order instead of re-slicing per edit
        parts: List[str] = []
        cursor = 0
        for edit in sorted(self.edits, key=lambda e: e.range.start_char):
            chunk = self.original_text[edit.range.start_char:edit.range.end_char]
            parts.append(self.original_text[cursor:edit.range.start_char])
            parts.append(edit.replacement)
            cursor = edit.range.end_char

            stats["chars_removed"] += len(chunk) - len(edit.replacement)
            stats["lines_removed"] += chunk.count('\n') - edit.replacement.count('\n')
            if edit.type:
                stats[edit.type] = stats.get(edit.type, 0) + 1
        parts.append(self.original_text[cursor:])

        return "".join(parts), stats
