"""
Precedence-climbing parser that lowers tokens straight into dyno nodes.

There is no intermediate AST: each prefix term, infix operator, property
access and call is compiled as soon as it is recognised.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from ..dbg import debug_log
from ..dyno.types import DynoTypeError
from .errors import (
    ExpressionDepthError,
    FunctionArityError,
    InvalidInterpolatedValueError,
    InvalidPropertyAccessError,
    UnclosedParenthesisError,
    UnexpectedTokenError,
)
from .registry import (
    ARGUMENT_SEPARATOR,
    DEFAULT_REGISTRY,
    MAX_CALL_ARITY,
    ExpressionRegistry,
)
from .tokenizer import Token, TokenType
from .validate import is_valid_node

DEFAULT_MAX_DEPTH = 128


class PrattParser:
    """Single-use parser over one token stream and its interpolated values."""

    def __init__(
        self,
        tokens: Sequence[Token],
        values: Sequence[Any],
        *,
        registry: Optional[ExpressionRegistry] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        if max_depth < 1:
            raise ValueError("max_depth must be positive")
        self.tokens: List[Token] = list(tokens)
        self.values: List[Any] = list(values)
        self.registry = registry or DEFAULT_REGISTRY
        self.max_depth = max_depth
        self.index = 0
        self._depth = 0

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def peek(self) -> Optional[Token]:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise UnexpectedTokenError("Unexpected end of expression", position=self._end())
        self.index += 1
        return token

    def match(self, token_type: TokenType, value: Optional[str] = None) -> bool:
        token = self.peek()
        if token is None or token.type is not token_type:
            return False
        return value is None or token.value == value

    def _end(self) -> int:
        return self.tokens[-1].end if self.tokens else 0

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse(self) -> Any:
        """Parse the whole stream; leftover tokens are an error."""
        if not self.tokens:
            debug_log("Empty expression, returning default value")
            return self.registry.zero()
        result = self.parse_expression(0)
        trailing = self.peek()
        if trailing is not None:
            raise UnexpectedTokenError(
                f"Unexpected token: {trailing.value}",
                lexeme=trailing.value,
                position=trailing.position,
            )
        return result

    def parse_expression(self, precedence: int = 0) -> Any:
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise ExpressionDepthError(
                    f"Expression nesting exceeds {self.max_depth} levels",
                    position=self._position(),
                )
            debug_log("parse_expression(precedence=%s) at token %s", precedence, self.index)

            left = self.parse_prefix()
            while True:
                token = self.peek()
                if token is None:
                    break
                # Property access binds tighter than any pending operator.
                if token.type is TokenType.PROPERTY:
                    self.advance()
                    left = self.parse_property_access(left, token)
                    continue
                if (
                    token.type is not TokenType.OPERATOR
                    or token.precedence is None
                    or token.precedence <= precedence
                ):
                    break
                self.advance()
                left = self.parse_infix(left, token)
            return left
        finally:
            self._depth -= 1

    def parse_prefix(self) -> Any:
        token = self.advance()
        debug_log("parse_prefix %s %r", token.type.value, token.value)

        if token.type is TokenType.NUMBER:
            return self.registry.number(float(token.value))

        if token.type is TokenType.VALUE:
            return self._resolve_value(token)

        if token.type is TokenType.FUNCTION:
            return self.parse_function_call(token)

        if token.type is TokenType.CONSTANT:
            entry = self.registry.function(token.value)
            if entry is None or not entry.is_constant:
                raise UnexpectedTokenError(
                    f"Unknown constant: {token.value}",
                    lexeme=token.value,
                    position=token.position,
                )
            return entry.compile()

        if token.type is TokenType.PAREN and token.value == "(":
            expr = self.parse_expression(0)
            self._expect_close(token, "Expected closing parenthesis")
            return expr

        raise UnexpectedTokenError(
            f"Unexpected token: {token.value}",
            lexeme=token.value,
            position=token.position,
        )

    def parse_infix(self, left: Any, operator: Token) -> Any:
        entry = self.registry.operator(operator.value)
        if entry is None:
            raise UnexpectedTokenError(
                f"Unknown operator: {operator.value}",
                lexeme=operator.value,
                position=operator.position,
            )
        right = self.parse_expression(entry.precedence)
        debug_log("parse_infix %r", operator.value)
        return entry.compile(left, right)

    def parse_function_call(self, func: Token) -> Any:
        entry = self.registry.function(func.value)
        if entry is None or entry.is_constant:
            raise UnexpectedTokenError(
                f"Unknown function: {func.value}",
                lexeme=func.value,
                position=func.position,
            )
        if not self.match(TokenType.PAREN, "("):
            raise UnexpectedTokenError(
                f"Expected opening parenthesis after function {func.value}",
                lexeme=func.value,
                position=func.position,
            )
        self.advance()

        args = [self.parse_expression(0)]
        # At most MAX_CALL_ARITY arguments are consumed; a further comma is
        # left for the closing-parenthesis check below.
        while len(args) < MAX_CALL_ARITY and self.match(TokenType.OPERATOR, ARGUMENT_SEPARATOR):
            self.advance()
            args.append(self.parse_expression(0))

        self._expect_close(func, f"Expected closing parenthesis after function {func.value}")
        if len(args) != entry.arity:
            raise FunctionArityError(func.value, entry.arity, len(args))
        debug_log("parse_function_call %s with %d argument(s)", func.value, len(args))
        return entry.compile(*args)

    def parse_property_access(self, left: Any, prop: Token) -> Any:
        debug_log("parse_property_access %r", prop.value)
        if not is_valid_node(left):
            raise InvalidPropertyAccessError(
                prop.value,
                f"Invalid value for property access: {left!r}",
                position=prop.position,
            )
        try:
            return self.registry.component(left, prop.value)
        except DynoTypeError as exc:
            raise InvalidPropertyAccessError(
                prop.value,
                f"Cannot read property '{prop.value}': {exc}",
                position=prop.position,
            ) from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_value(self, token: Token) -> Any:
        index = token.index if token.index is not None else -1
        if not 0 <= index < len(self.values):
            raise InvalidInterpolatedValueError(index, None)
        value = self.values[index]
        if not is_valid_node(value):
            raise InvalidInterpolatedValueError(index, value)
        return value

    def _expect_close(self, opener: Token, message: str) -> None:
        if self.match(TokenType.PAREN, ")"):
            self.advance()
            return
        found = self.peek()
        detail = f"found '{found.value}'" if found is not None else "reached end of expression"
        raise UnclosedParenthesisError(
            f"{message}; {detail}",
            position=found.position if found is not None else opener.position,
        )

    def _position(self) -> Optional[int]:
        token = self.peek()
        return token.position if token is not None else None


__all__ = ["DEFAULT_MAX_DEPTH", "PrattParser"]
