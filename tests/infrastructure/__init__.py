"""
Shared test infrastructure for the conditional annotations tool.

Modules:
- file_utils: Utilities for creating files and directories
- source_utils: Parsing and transforming inline source snippets
"""

from .file_utils import write
from .source_utils import find_node, find_nodes, parse, run, squash, transform

__all__ = [
    "write",
    "find_node",
    "find_nodes",
    "parse",
    "run",
    "squash",
    "transform",
]
