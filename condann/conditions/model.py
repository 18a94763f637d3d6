"""
Data model for condition expressions.

Contains the node classes of the expression AST produced by the parser
and consumed by the evaluator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ExpressionType(Enum):
    """Node kinds of a condition expression."""
    LITERAL = "literal"
    IDENTIFIER = "identifier"
    GROUP = "group"  # explicit parentheses
    NOT = "not"
    NEGATE = "negate"
    AND = "and"
    OR = "or"
    COMPARE = "compare"


# Comparison operators accepted by CompareExpression
EQUALITY_OPERATORS = ("===", "!==", "==", "!=")
RELATIONAL_OPERATORS = ("<", "<=", ">", ">=")


class Undefined:
    """Singleton standing for JavaScript ``undefined``."""

    _instance: Undefined | None = None

    def __new__(cls) -> Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = Undefined()


@dataclass
class Expression(ABC):
    """Base class for all expression nodes."""

    @abstractmethod
    def get_type(self) -> ExpressionType:
        """Returns the node kind."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass
class LiteralExpression(Expression):
    """
    Literal value: ``true``, ``false``, ``null``, ``undefined``, a number or a string.
    """
    value: Any

    def get_type(self) -> ExpressionType:
        return ExpressionType.LITERAL

    def _to_string(self) -> str:
        if self.value is True:
            return "true"
        if self.value is False:
            return "false"
        if self.value is None:
            return "null"
        if isinstance(self.value, str):
            return repr(self.value)
        return str(self.value)


@dataclass
class IdentifierExpression(Expression):
    """
    Free variable looked up in the evaluation context.
    """
    name: str

    def get_type(self) -> ExpressionType:
        return ExpressionType.IDENTIFIER

    def _to_string(self) -> str:
        return self.name


@dataclass
class GroupExpression(Expression):
    """Parenthesized expression: (expr)"""
    expression: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.GROUP

    def _to_string(self) -> str:
        return f"({self.expression})"


@dataclass
class NotExpression(Expression):
    """Logical negation: !expr"""
    expression: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.NOT

    def _to_string(self) -> str:
        return f"!{self.expression}"


@dataclass
class NegateExpression(Expression):
    """Arithmetic negation: -expr"""
    expression: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.NEGATE

    def _to_string(self) -> str:
        return f"-{self.expression}"


@dataclass
class LogicalExpression(Expression):
    """
    Short-circuit logical operation: left && right, left || right.

    Like in JavaScript, the result is one of the operands, not a coerced boolean.
    """
    left: Expression
    right: Expression
    operator: ExpressionType  # AND or OR

    def get_type(self) -> ExpressionType:
        return self.operator

    def _to_string(self) -> str:
        op_str = "&&" if self.operator == ExpressionType.AND else "||"
        return f"{self.left} {op_str} {self.right}"


@dataclass
class CompareExpression(Expression):
    """
    Equality or relational comparison: left op right.
    """
    left: Expression
    right: Expression
    operator: str

    def get_type(self) -> ExpressionType:
        return ExpressionType.COMPARE

    def _to_string(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


AnyExpression = Union[
    LiteralExpression,
    IdentifierExpression,
    GroupExpression,
    NotExpression,
    NegateExpression,
    LogicalExpression,
    CompareExpression,
]

__all__ = [
    "Expression",
    "ExpressionType",
    "LiteralExpression",
    "IdentifierExpression",
    "GroupExpression",
    "NotExpression",
    "NegateExpression",
    "LogicalExpression",
    "CompareExpression",
    "EQUALITY_OPERATORS",
    "RELATIONAL_OPERATORS",
    "UNDEFINED",
    "Undefined",
]
