"""
Conditional annotations: compile-time ``#if`` / ``#elseif`` / ``#else`` /
``#endif`` directives written in JavaScript and TypeScript comments.
"""

from .engine import TransformResult, transform_file, transform_source, transform_tree

__all__ = ["TransformResult", "transform_file", "transform_source", "transform_tree"]
