"""
Tokenizer for placeholder-annotated expressions.

Interpolated values appear in the text as ``${<index>}`` markers; a marker
directly followed by ``.name`` yields a value token then a property token.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .errors import InvalidTokenError
from .registry import (
    ARGUMENT_SEPARATOR,
    CALL_PRECEDENCE,
    DEFAULT_REGISTRY,
    PROPERTY_PRECEDENCE,
    SEPARATOR_PRECEDENCE,
    ExpressionRegistry,
)


class TokenType(str, Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    PAREN = "paren"
    VALUE = "value"
    PROPERTY = "property"
    CONSTANT = "constant"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    precedence: Optional[int] = None
    position: int = 0
    index: Optional[int] = None

    @property
    def end(self) -> int:
        """Source offset just past this token's text."""
        width = len(self.value)
        if self.type is TokenType.PROPERTY:
            width += 1
        return self.position + width


def placeholder(index: int) -> str:
    return f"${{{index}}}"


_SCAN_RE = re.compile(
    r"""
    (?P<space>\s+)
    | (?P<placeholder>\$\{(?P<index>\d+)\})
    | (?P<property>\.(?P<field>[A-Za-z_][A-Za-z0-9_]*))
    | (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<paren>[()])
    | (?P<comma>,)
    """,
    re.VERBOSE,
)


def _operator_pattern(registry: ExpressionRegistry) -> Optional["re.Pattern[str]"]:
    symbols = sorted(registry.operators, key=len, reverse=True)
    if not symbols:
        return None
    return re.compile("|".join(re.escape(symbol) for symbol in symbols))


def tokenize(text: str, registry: Optional[ExpressionRegistry] = None) -> List[Token]:
    """Convert ``text`` into an ordered token list."""
    reg = registry or DEFAULT_REGISTRY
    operator_re = _operator_pattern(reg)
    tokens: List[Token] = []
    pos = 0
    length = len(text)

    while pos < length:
        match = _SCAN_RE.match(text, pos)
        kind = match.lastgroup if match else None
        if kind is None:
            op_match = operator_re.match(text, pos) if operator_re else None
            if op_match is None:
                raise InvalidTokenError(text[pos], position=pos)
            symbol = op_match.group(0)
            tokens.append(
                Token(
                    TokenType.OPERATOR,
                    symbol,
                    precedence=reg.operators[symbol].precedence,
                    position=pos,
                )
            )
            pos = op_match.end()
            continue

        lexeme = match.group(0)
        if kind == "space":
            pass
        elif kind == "placeholder":
            tokens.append(
                Token(
                    TokenType.VALUE,
                    lexeme,
                    precedence=SEPARATOR_PRECEDENCE,
                    position=pos,
                    index=int(match.group("index")),
                )
            )
        elif kind == "property":
            if not _accepts_property(tokens, pos):
                raise InvalidTokenError(lexeme, position=pos)
            tokens.append(
                Token(
                    TokenType.PROPERTY,
                    match.group("field"),
                    precedence=PROPERTY_PRECEDENCE,
                    position=pos,
                )
            )
        elif kind == "number":
            tokens.append(Token(TokenType.NUMBER, lexeme, position=pos))
        elif kind == "name":
            tokens.append(_name_token(lexeme, pos, reg))
        elif kind == "paren":
            tokens.append(Token(TokenType.PAREN, lexeme, position=pos))
        elif kind == "comma":
            tokens.append(
                Token(
                    TokenType.OPERATOR,
                    ARGUMENT_SEPARATOR,
                    precedence=SEPARATOR_PRECEDENCE,
                    position=pos,
                )
            )
        pos = match.end()

    return tokens


def _name_token(name: str, pos: int, registry: ExpressionRegistry) -> Token:
    entry = registry.function(name)
    if entry is None:
        raise InvalidTokenError(name, position=pos)
    if entry.is_constant:
        return Token(TokenType.CONSTANT, name, position=pos)
    return Token(TokenType.FUNCTION, name, precedence=CALL_PRECEDENCE, position=pos)


def _accepts_property(tokens: List[Token], pos: int) -> bool:
    # The dotted name must directly follow its owner.
    if not tokens or tokens[-1].end != pos:
        return False
    previous = tokens[-1]
    if previous.type in (TokenType.VALUE, TokenType.PROPERTY):
        return True
    return previous.type is TokenType.PAREN and previous.value == ")"


__all__ = ["TokenType", "Token", "placeholder", "tokenize"]
