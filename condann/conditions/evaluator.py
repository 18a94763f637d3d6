"""
Evaluator for condition expressions.

Walks the expression AST and computes its value against a read-only
mapping of option names to values. Semantics follow JavaScript, the
language the directives are written in: short-circuit operators return
operands, comparisons coerce the way ``==``/``<`` do in JS.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, cast

from .model import (
    UNDEFINED,
    CompareExpression,
    Expression,
    ExpressionType,
    GroupExpression,
    IdentifierExpression,
    LiteralExpression,
    LogicalExpression,
    NegateExpression,
    NotExpression,
)


class EvaluationError(Exception):
    """Error while computing a condition value (e.g. an unbound name)."""
    pass


def js_type(value: Any) -> str:
    """Returns the JavaScript type name of a context value."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def is_truthy(value: Any) -> bool:
    """JavaScript truthiness."""
    kind = js_type(value)
    if kind in ("undefined", "null"):
        return False
    if kind == "number":
        return value != 0 and not math.isnan(value)
    return bool(value)


def to_number(value: Any) -> float:
    """JavaScript ToNumber conversion."""
    kind = js_type(value)
    if kind == "boolean":
        return 1 if value else 0
    if kind == "number":
        return value
    if kind == "null":
        return 0
    if kind == "string":
        stripped = value.strip()
        if not stripped:
            return 0
        try:
            return float(stripped)
        except ValueError:
            return math.nan
    return math.nan


def strict_equals(left: Any, right: Any) -> bool:
    if js_type(left) != js_type(right):
        return False
    return left == right


def loose_equals(left: Any, right: Any) -> bool:
    left_type, right_type = js_type(left), js_type(right)
    if left_type == right_type:
        return strict_equals(left, right)

    nullish = ("null", "undefined")
    if left_type in nullish or right_type in nullish:
        return left_type in nullish and right_type in nullish

    if left_type == "boolean":
        return loose_equals(to_number(left), right)
    if right_type == "boolean":
        return loose_equals(left, to_number(right))

    if {left_type, right_type} == {"number", "string"}:
        return to_number(left) == to_number(right)

    return False


def compare(left: Any, right: Any, operator: str) -> bool:
    if operator == "===":
        return strict_equals(left, right)
    if operator == "!==":
        return not strict_equals(left, right)
    if operator == "==":
        return loose_equals(left, right)
    if operator == "!=":
        return not loose_equals(left, right)

    if js_type(left) == "string" and js_type(right) == "string":
        a, b = left, right
    else:
        a, b = to_number(left), to_number(right)
        if math.isnan(a) or math.isnan(b):
            return False

    if operator == "<":
        return a < b
    if operator == "<=":
        return a <= b
    if operator == ">":
        return a > b
    if operator == ">=":
        return a >= b
    raise EvaluationError(f"Unknown comparison operator: {operator}")


class ConditionEvaluator:
    """
    Computes the value of a condition expression.

    Context entries are bound as read-only free variables.
    """

    def __init__(self, context: Mapping[str, Any]):
        """
        Args:
            context: Option name → value mapping (bool, str, number or None)
        """
        self.context = context

    def evaluate(self, expression: Expression) -> bool:
        """
        Computes the condition and coerces it to a boolean.

        Raises:
            EvaluationError: When a name is not bound in the context
        """
        return is_truthy(self.evaluate_value(expression))

    def evaluate_value(self, expression: Expression) -> Any:
        """Computes the raw (uncoerced) value of an expression."""
        expr_type = expression.get_type()

        if expr_type == ExpressionType.LITERAL:
            return cast(LiteralExpression, expression).value
        elif expr_type == ExpressionType.IDENTIFIER:
            return self._evaluate_identifier(cast(IdentifierExpression, expression))
        elif expr_type == ExpressionType.GROUP:
            return self.evaluate_value(cast(GroupExpression, expression).expression)
        elif expr_type == ExpressionType.NOT:
            return not self.evaluate(cast(NotExpression, expression).expression)
        elif expr_type == ExpressionType.NEGATE:
            return -to_number(self.evaluate_value(cast(NegateExpression, expression).expression))
        elif expr_type == ExpressionType.AND:
            return self._evaluate_and(cast(LogicalExpression, expression))
        elif expr_type == ExpressionType.OR:
            return self._evaluate_or(cast(LogicalExpression, expression))
        elif expr_type == ExpressionType.COMPARE:
            expr = cast(CompareExpression, expression)
            left = self.evaluate_value(expr.left)
            right = self.evaluate_value(expr.right)
            return compare(left, right, expr.operator)
        else:
            raise EvaluationError(f"Unknown expression type: {expr_type}")

    def _evaluate_identifier(self, expression: IdentifierExpression) -> Any:
        if expression.name not in self.context:
            raise EvaluationError(f"{expression.name} is not defined")
        return self.context[expression.name]

    def _evaluate_and(self, expression: LogicalExpression) -> Any:
        left = self.evaluate_value(expression.left)
        if not is_truthy(left):
            return left  # short-circuit
        return self.evaluate_value(expression.right)

    def _evaluate_or(self, expression: LogicalExpression) -> Any:
        left = self.evaluate_value(expression.left)
        if is_truthy(left):
            return left  # short-circuit
        return self.evaluate_value(expression.right)


def evaluate_condition_string(condition_str: str, context: Mapping[str, Any]) -> bool:
    """
    Parses and evaluates a condition in one step.

    Args:
        condition_str: Condition source
        context: Option name → value mapping

    Returns:
        Truthiness of the condition value

    Raises:
        ParseError: On a syntax error
        EvaluationError: On an evaluation error
    """
    from .parser import ConditionParser

    parser = ConditionParser()
    ast = parser.parse(condition_str)

    evaluator = ConditionEvaluator(context)
    return evaluator.evaluate(ast)
