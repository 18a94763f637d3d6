"""
Recursive descent parser for condition expressions.

Builds an expression AST from the token stream, honouring operator
precedence and explicit grouping.

Grammar:
expression → or_expression
or_expression  → and_expression ("||" and_expression)*
and_expression → equality ("&&" equality)*
equality       → relational (("===" | "!==" | "==" | "!=") relational)*
relational     → unary (("<" | "<=" | ">" | ">=") unary)*
unary          → ("!" | "-") unary | primary
primary        → NUMBER | STRING | KEYWORD | IDENTIFIER | "(" expression ")"
"""

from __future__ import annotations

from typing import List

from .lexer import ConditionLexer, ParseError, Token, unquote
from .model import (
    EQUALITY_OPERATORS,
    RELATIONAL_OPERATORS,
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

_KEYWORD_VALUES = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": UNDEFINED,
}


class ConditionParser:
    """
    Recursive descent parser for condition expressions.
    """

    def __init__(self):
        self.lexer = ConditionLexer()
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, condition_str: str) -> Expression:
        """
        Parses a condition string into an AST.

        Args:
            condition_str: Condition source

        Returns:
            Root node of the AST

        Raises:
            ParseError: On a syntax error
        """
        self._tokens = self.lexer.tokenize(condition_str)
        self._position = 0

        if len(self._tokens) == 1 and self._tokens[0].type == 'EOF':
            raise ParseError("Empty condition", 0)

        result = self._parse_or_expression()

        if not self._is_at_end():
            current = self._current_token()
            raise ParseError(f"Unexpected token '{current.value}'", current.position)

        return result

    def _parse_or_expression(self) -> Expression:
        left = self._parse_and_expression()

        while self._match_operator("||"):
            right = self._parse_and_expression()
            left = LogicalExpression(left=left, right=right, operator=ExpressionType.OR)

        return left

    def _parse_and_expression(self) -> Expression:
        left = self._parse_equality()

        while self._match_operator("&&"):
            right = self._parse_equality()
            left = LogicalExpression(left=left, right=right, operator=ExpressionType.AND)

        return left

    def _parse_equality(self) -> Expression:
        left = self._parse_relational()

        while True:
            op = self._match_any_operator(EQUALITY_OPERATORS)
            if op is None:
                return left
            right = self._parse_relational()
            left = CompareExpression(left=left, right=right, operator=op)

    def _parse_relational(self) -> Expression:
        left = self._parse_unary()

        while True:
            op = self._match_any_operator(RELATIONAL_OPERATORS)
            if op is None:
                return left
            right = self._parse_unary()
            left = CompareExpression(left=left, right=right, operator=op)

    def _parse_unary(self) -> Expression:
        # Right associative: !!x, -(-1)
        if self._match_operator("!"):
            return NotExpression(expression=self._parse_unary())
        if self._match_operator("-"):
            return NegateExpression(expression=self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        if self._match_symbol("("):
            expr = self._parse_or_expression()
            if not self._match_symbol(")"):
                raise ParseError("Expected ')' after grouped expression", self._current_position())
            return GroupExpression(expression=expr)

        current = self._current_token()

        if current.type == 'NUMBER':
            self._advance()
            return LiteralExpression(value=_parse_number(current.value))

        if current.type == 'STRING':
            self._advance()
            return LiteralExpression(value=unquote(current.value))

        if current.type == 'KEYWORD':
            self._advance()
            return LiteralExpression(value=_KEYWORD_VALUES[current.value])

        if current.type == 'IDENTIFIER':
            self._advance()
            return IdentifierExpression(name=current.value)

        if current.type == 'EOF':
            raise ParseError("Unexpected end of expression", current.position)
        raise ParseError(f"Unexpected token '{current.value}'", current.position)

    # Token helpers

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return Token(type='EOF', value='', position=len(self._tokens))
        return self._tokens[self._position]

    def _current_position(self) -> int:
        return self._current_token().position

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _match_operator(self, operator: str) -> bool:
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value == operator:
            self._advance()
            return True
        return False

    def _match_any_operator(self, operators: tuple[str, ...]) -> str | None:
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value in operators:
            self._advance()
            return current.value
        return None

    def _match_symbol(self, symbol: str) -> bool:
        current = self._current_token()
        if current.type == 'SYMBOL' and current.value == symbol:
            self._advance()
            return True
        return False


def _parse_number(raw: str) -> int | float:
    if any(ch in raw for ch in ".eE"):
        return float(raw)
    return int(raw)


__all__ = ["ConditionParser", "ParseError"]
