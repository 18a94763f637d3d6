"""
Lexer for condition expressions.

Splits a condition string into meaningful elements:
- Literals (numbers, quoted strings)
- Keywords (true, false, null, undefined)
- Identifiers (names bound in the evaluation context)
- Operators and parentheses
- Whitespace (ignored)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


class ParseError(Exception):
    """Syntax error in a condition expression."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


@dataclass
class Token:
    """
    Token of a condition expression.

    Attributes:
        type: Token type (NUMBER, STRING, KEYWORD, IDENTIFIER, OPERATOR, SYMBOL, EOF)
        value: Raw token text
        position: Offset in the source string
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}


def unquote(raw: str) -> str:
    """Strips the quotes of a string token and resolves backslash escapes."""
    body = raw[1:-1]
    out: List[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


class ConditionLexer:
    """
    Turns a condition string into a list of tokens.

    Supported tokens:
    - NUMBER: 42, 3.14, .5, 1e3
    - STRING: 'text', "text"
    - KEYWORD: true, false, null, undefined
    - IDENTIFIER: DEBUG, mode, $flag, _x
    - OPERATOR: === !== == != <= >= < > && || ! -
    - SYMBOL: ( )
    - EOF: end of input
    """

    # Token specs: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),

        (r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?', 'NUMBER', False),
        (r"'(?:[^'\\\n]|\\.)*'", 'STRING', False),
        (r'"(?:[^"\\\n]|\\.)*"', 'STRING', False),

        # Longest operators first
        (r'===|!==|==|!=|<=|>=|&&|\|\||<|>|!|-', 'OPERATOR', False),
        (r'[()]', 'SYMBOL', False),

        # Keywords are recognized after capture
        (r'[A-Za-z_$][\w$]*', 'IDENTIFIER', False),

        (r'.', 'UNKNOWN', False),
    ]

    KEYWORDS = {
        'true', 'false', 'null', 'undefined'
    }

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Splits the string into tokens.

        Args:
            text: Condition source

        Returns:
            List of tokens terminated by EOF

        Raises:
            ParseError: On an unexpected character or an unterminated string
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)
                if not ignore:
                    if token_type == 'UNKNOWN':
                        if value in ("'", '"'):
                            raise ParseError("Unterminated string literal", position)
                        raise ParseError(f"Unexpected character '{value}'", position)

                    final_type = token_type
                    if token_type == 'IDENTIFIER' and value in self.KEYWORDS:
                        final_type = 'KEYWORD'

                    tokens.append(Token(type=final_type, value=value, position=position))

                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=position))
        return tokens
