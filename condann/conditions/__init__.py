"""
Condition expressions used by ``#if`` / ``#elseif`` directives.
"""

from .evaluator import ConditionEvaluator, EvaluationError, evaluate_condition_string
from .lexer import ConditionLexer, ParseError
from .parser import ConditionParser

__all__ = [
    "ConditionEvaluator",
    "ConditionLexer",
    "ConditionParser",
    "EvaluationError",
    "ParseError",
    "evaluate_condition_string",
]
