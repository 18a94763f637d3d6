"""
Tree-sitter infrastructure for source documents.
Provides grammar loading, parsing and position utilities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from tree_sitter import Language, Node, Parser, Tree


class TreeSitterDocument(ABC):
    """
    Wrapper for a Tree-sitter parsed document.
    """

    def __init__(self, text: str, ext: str):
        self.text = text
        self.ext = ext
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode('utf-8')
        self._char_offsets: Optional[List[int]] = None
        self._parse()

    @abstractmethod
    def get_language(self) -> Language:
        """
        Get Language instance for the document grammar.

        Returns:
            Language instance
        """
        pass

    def get_parser(self) -> Parser:
        return Parser(self.get_language())

    def _parse(self):
        """Parse the document with Tree-sitter."""
        parser = self.get_parser()
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        """Get the root node of the parsed tree."""
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def find_nodes_by_type(self, node_type: str, start_node: Optional[Node] = None) -> List[Node]:
        """
        Find all nodes of a specific type.

        Args:
            node_type: Type of nodes to find
            start_node: Node to start search from (default: root)

        Returns:
            List of matching nodes
        """
        if start_node is None:
            start_node = self.root_node

        results = []

        def visit(node: Node):
            if node.type == node_type:
                results.append(node)
            for child in node.children:
                visit(child)

        visit(start_node)
        return results

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """Get char range for a node."""
        return self.byte_to_char_position(node.start_byte), self.byte_to_char_position(node.end_byte)

    def get_position(self, char_offset: int) -> Tuple[int, int]:
        """
        Get (line, column) for a char offset.
        Line is 1-based, column is 0-based and counted in characters.
        """
        line = self.text.count('\n', 0, char_offset) + 1
        line_start = self.text.rfind('\n', 0, char_offset) + 1
        return line, char_offset - line_start

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors."""
        if not self.tree:
            return True
        return self.root_node.has_error

    def get_errors(self) -> List[Node]:
        """Get all error nodes in the tree."""
        return self.find_nodes_by_type("ERROR")

    def byte_to_char_position(self, byte_pos: int) -> int:
        """
        Convert a byte position to a character position in Unicode text.
        A position inside a multi-byte character maps to the start of that character.
        """
        if byte_pos <= 0:
            return 0
        if byte_pos >= len(self._text_bytes):
            return len(self.text)
        # Pure ASCII: bytes and chars coincide
        if len(self._text_bytes) == len(self.text):
            return byte_pos
        return self._byte_offsets_table()[byte_pos]

    def _byte_offsets_table(self) -> List[int]:
        if self._char_offsets is None:
            table: List[int] = []
            for char_index, ch in enumerate(self.text):
                width = len(ch.encode('utf-8'))
                table.extend([char_index] * width)
            table.append(len(self.text))
            self._char_offsets = table
        return self._char_offsets
