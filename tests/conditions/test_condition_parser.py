"""
Tests for the condition parser.
"""

import pytest

from condann.conditions.lexer import ParseError
from condann.conditions.model import (
    UNDEFINED,
    CompareExpression,
    ExpressionType,
    GroupExpression,
    IdentifierExpression,
    LiteralExpression,
    LogicalExpression,
    NegateExpression,
    NotExpression,
)
from condann.conditions.parser import ConditionParser


class TestConditionParser:

    def setup_method(self):
        self.parser = ConditionParser()

    def test_identifier(self):
        ast = self.parser.parse("DEBUG")
        assert isinstance(ast, IdentifierExpression)
        assert ast.name == "DEBUG"

    def test_literals(self):
        cases = {
            "true": True,
            "false": False,
            "null": None,
            "42": 42,
            "1.5": 1.5,
            "1e3": 1000.0,
            "'prod'": "prod",
            '"dev"': "dev",
        }
        for source, expected in cases.items():
            ast = self.parser.parse(source)
            assert isinstance(ast, LiteralExpression)
            assert ast.value == expected
            assert type(ast.value) is type(expected)

    def test_undefined_keyword(self):
        ast = self.parser.parse("undefined")
        assert isinstance(ast, LiteralExpression)
        assert ast.value is UNDEFINED

    def test_comparison(self):
        ast = self.parser.parse("MODE === 'production'")
        assert isinstance(ast, CompareExpression)
        assert ast.operator == "==="
        assert isinstance(ast.left, IdentifierExpression)
        assert isinstance(ast.right, LiteralExpression)

    def test_and_binds_tighter_than_or(self):
        ast = self.parser.parse("A || B && C")
        assert isinstance(ast, LogicalExpression)
        assert ast.get_type() == ExpressionType.OR
        assert isinstance(ast.right, LogicalExpression)
        assert ast.right.get_type() == ExpressionType.AND

    def test_equality_below_relational(self):
        ast = self.parser.parse("A < 2 === true")
        assert isinstance(ast, CompareExpression)
        assert ast.operator == "==="
        assert isinstance(ast.left, CompareExpression)
        assert ast.left.operator == "<"

    def test_left_associative(self):
        ast = self.parser.parse("A && B && C")
        assert isinstance(ast.left, LogicalExpression)
        assert isinstance(ast.right, IdentifierExpression)
        assert ast.right.name == "C"

    def test_unary(self):
        ast = self.parser.parse("!!DEBUG")
        assert isinstance(ast, NotExpression)
        assert isinstance(ast.expression, NotExpression)

        ast = self.parser.parse("-LEVEL")
        assert isinstance(ast, NegateExpression)

    def test_grouping(self):
        ast = self.parser.parse("(A || B) && C")
        assert ast.get_type() == ExpressionType.AND
        assert isinstance(ast.left, GroupExpression)
        assert ast.left.expression.get_type() == ExpressionType.OR

    @pytest.mark.parametrize("source, message", [
        ("", "Empty condition"),
        ("   ", "Empty condition"),
        ("A &&", "Unexpected end of expression"),
        ("(A", "Expected ')' after grouped expression"),
        ("A B", "Unexpected token 'B'"),
        ("A )", "Unexpected token ')'"),
        ("=== A", "Unexpected token '==='"),
    ])
    def test_syntax_errors(self, source, message):
        with pytest.raises(ParseError) as exc_info:
            self.parser.parse(source)
        assert exc_info.value.message == message

    def test_parser_is_reusable(self):
        self.parser.parse("A && B")
        ast = self.parser.parse("C")
        assert isinstance(ast, IdentifierExpression)
        assert ast.name == "C"
