from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Dict, List, Tuple, Type

from ..errors import UnsupportedLanguageError
from .tree_sitter_support import TreeSitterDocument

__all__ = [
    "register_lazy",
    "get_document_class",
    "is_supported",
    "supported_extensions",
    "create_document",
]


@dataclass(frozen=True)
class _LazySpec:
    module: str
    class_name: str
    extensions: Tuple[str, ...]


# Lazy specs: ext → where the document class lives
_LAZY_BY_EXT: Dict[str, _LazySpec] = {}

# Resolved classes by extension
_CLASS_BY_EXT: Dict[str, Type[TreeSitterDocument]] = {}


def _norm_ext(ext: str) -> str:
    return ext.lower().lstrip(".")


def register_lazy(*, module: str, class_name: str, extensions: List[str] | Tuple[str, ...]) -> None:
    """
    Register a document class by name without importing its module.
    One class may be declared for several extensions.
    """
    spec = _LazySpec(module=module, class_name=class_name, extensions=tuple(_norm_ext(e) for e in extensions))
    for ext in spec.extensions:
        _LAZY_BY_EXT[ext] = spec


def _load_from_spec(spec: _LazySpec) -> Type[TreeSitterDocument]:
    mod = importlib.import_module(spec.module, package=__package__)
    cls = getattr(mod, spec.class_name, None)
    if cls is None:
        raise RuntimeError(f"Document class '{spec.class_name}' not found in {spec.module}")
    if not issubclass(cls, TreeSitterDocument):
        raise TypeError(f"{spec.module}.{spec.class_name} is not a subclass of TreeSitterDocument")

    for ext in spec.extensions:
        _CLASS_BY_EXT[ext] = cls
    return cls


def is_supported(ext: str) -> bool:
    ext = _norm_ext(ext)
    return ext in _CLASS_BY_EXT or ext in _LAZY_BY_EXT


def supported_extensions() -> List[str]:
    return sorted(set(_LAZY_BY_EXT) | set(_CLASS_BY_EXT))


def get_document_class(ext: str) -> Type[TreeSitterDocument]:
    """
    Return the document CLASS for a file extension (with or without the dot).

    Raises:
        UnsupportedLanguageError: No grammar is registered for the extension
    """
    ext = _norm_ext(ext)
    cls = _CLASS_BY_EXT.get(ext)
    if cls:
        return cls
    spec = _LAZY_BY_EXT.get(ext)
    if spec:
        return _load_from_spec(spec)
    raise UnsupportedLanguageError(
        f"No grammar for '.{ext}' files. Supported: {', '.join('.' + e for e in supported_extensions())}"
    )


def create_document(text: str, ext: str) -> TreeSitterDocument:
    """Parse text with the grammar registered for the extension."""
    return get_document_class(ext)(text, _norm_ext(ext))


# ---- Built-in grammars (module:class strings, imported on first use) ----

register_lazy(module=".langs.javascript", class_name="JavaScriptDocument", extensions=[".js", ".jsx", ".mjs", ".cjs"])
register_lazy(module=".langs.typescript", class_name="TypeScriptDocument", extensions=[".ts", ".tsx", ".mts", ".cts"])
