"""
Public entry points: transform a source text, a file or a directory tree.
"""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pathspec

from .diagnostics import Diagnostic, DiagnosticCollector
from .directives import resolve_tree, sweep_tree
from .errors import CondAnnUserError
from .tree import is_supported, parse_source, print_tree

logger = logging.getLogger(__name__)

# Cheap pre-check: files without any marker are returned untouched
_DIRECTIVE_HINT = re.compile(r"#(?:if|elseif|else|endif)\b")


@dataclass
class TransformResult:
    text: str
    diagnostics: List[Diagnostic] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)
    changed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "changed": self.changed,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "stats": dict(self.stats),
        }


def transform_source(
        text: str,
        ext: str,
        options: Mapping[str, Any],
        *,
        filename: Optional[str] = None,
) -> TransformResult:
    """
    Resolve conditional annotations in a source text.

    Args:
        text: Source code
        ext: File extension selecting the grammar ("js", ".ts", ...)
        options: Option name → value mapping bound in conditions
        filename: Name used in diagnostics

    Returns:
        TransformResult with the new text, diagnostics and statistics

    Raises:
        UnsupportedLanguageError: No grammar for the extension
    """
    if not _DIRECTIVE_HINT.search(text):
        return TransformResult(text=text)

    tree = parse_source(text, ext)
    collector = DiagnosticCollector(filename)

    resolve_stats = resolve_tree(tree.root, dict(options), collector)
    sweep_tree(tree.root)
    result_text, edit_stats = print_tree(tree)

    stats: Dict[str, Any] = resolve_stats.to_dict()
    stats.update(edit_stats)

    logger.debug("%s: %s", filename or "<source>", stats)
    return TransformResult(
        text=result_text,
        diagnostics=collector.items,
        stats=stats,
        changed=result_text != text,
    )


def transform_file(path: Path, options: Mapping[str, Any]) -> TransformResult:
    """Resolve conditional annotations in one file (the file is not rewritten)."""
    if not path.is_file():
        raise CondAnnUserError(f"File not found: {path}")
    text = path.read_text(encoding="utf-8")
    return transform_source(text, path.suffix, options, filename=str(path))


def build_exclude_spec(patterns: Iterable[str]) -> Optional[pathspec.PathSpec]:
    patterns = [p for p in patterns if p and p.strip()]
    if not patterns:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def transform_tree(
        src: Path,
        out: Path,
        options: Mapping[str, Any],
        *,
        exclude: Iterable[str] = (),
) -> Dict[Path, TransformResult]:
    """
    Transform a file or every supported file below a directory into ``out``.

    Unsupported files are copied unchanged; paths matched by the
    gitignore-style ``exclude`` patterns are skipped entirely.

    Returns:
        Output path → result for every transformed file
    """
    if not src.exists():
        raise CondAnnUserError(f"Path not found: {src}")

    if src.is_file():
        target = out / src.name if out.is_dir() else out
        result = transform_file(src, options)
        _write(target, result.text)
        return {target: result}

    spec = build_exclude_spec(exclude)
    results: Dict[Path, TransformResult] = {}
    for path in sorted(p for p in src.rglob("*") if p.is_file()):
        rel = path.relative_to(src).as_posix()
        if spec is not None and spec.match_file(rel):
            logger.debug("Excluded %s", rel)
            continue

        target = out / rel
        if not is_supported(path.suffix):
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(path, target)
            continue

        result = transform_file(path, options)
        _write(target, result.text)
        results[target] = result

    return results


def _write(target: Path, text: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")


__all__ = ["TransformResult", "transform_source", "transform_file", "transform_tree", "build_exclude_spec"]
