"""Exceptions raised while compiling expressions."""

from __future__ import annotations

from typing import Any, Optional


class ExpressionError(Exception):
    """Base class for expression compilation failures."""

    def __init__(self, message: str, *, position: Optional[int] = None):
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position


class InvalidTokenError(ExpressionError):
    """Raised when the tokenizer meets text it does not recognise."""

    def __init__(self, lexeme: str, *, position: Optional[int] = None):
        super().__init__(f"Invalid token: {lexeme}", position=position)
        self.lexeme = lexeme


class UnexpectedTokenError(ExpressionError):
    """Raised when a token cannot appear where the parser found it."""

    def __init__(
        self,
        message: str,
        *,
        lexeme: Optional[str] = None,
        position: Optional[int] = None,
    ):
        super().__init__(message, position=position)
        self.lexeme = lexeme


class UnclosedParenthesisError(ExpressionError):
    """Raised when a grouping or call parenthesis is never closed."""


class InvalidInterpolatedValueError(ExpressionError, TypeError):
    """Raised when an interpolated argument is not a dyno node."""

    def __init__(self, index: int, value: Any):
        super().__init__(
            f"Invalid interpolated value at index {index}: {type(value).__name__}"
        )
        self.index = index
        self.value = value


class InvalidPropertyAccessError(ExpressionError):
    """Raised when a component is read from a value that does not expose it."""

    def __init__(self, prop: str, message: str, *, position: Optional[int] = None):
        super().__init__(message, position=position)
        self.property = prop


class FunctionArityError(ExpressionError):
    """Raised when a call passes the wrong number of arguments."""

    def __init__(self, name: str, expected: int, received: int):
        super().__init__(
            f"Function '{name}' expects {expected} argument(s), received {received}"
        )
        self.name = name
        self.expected = expected
        self.received = received


class ExpressionDepthError(ExpressionError, RecursionError):
    """Raised when an expression nests deeper than the configured limit."""


__all__ = [
    "ExpressionError",
    "InvalidTokenError",
    "UnexpectedTokenError",
    "UnclosedParenthesisError",
    "InvalidInterpolatedValueError",
    "InvalidPropertyAccessError",
    "FunctionArityError",
    "ExpressionDepthError",
]
