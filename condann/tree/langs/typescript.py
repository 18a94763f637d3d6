"""
TypeScript and TSX documents.
"""

from __future__ import annotations

from tree_sitter import Language

from ..tree_sitter_support import TreeSitterDocument


class TypeScriptDocument(TreeSitterDocument):

    def get_language(self) -> Language:
        import tree_sitter_typescript as tsts
        # TS and TSX have two different grammars in one package
        if self.ext == "tsx":
            return Language(tsts.language_tsx())
        return Language(tsts.language_typescript())
