"""Public entrypoints for the expression compiler."""

from __future__ import annotations

from .errors import (
    ExpressionDepthError,
    ExpressionError,
    FunctionArityError,
    InvalidInterpolatedValueError,
    InvalidPropertyAccessError,
    InvalidTokenError,
    UnclosedParenthesisError,
    UnexpectedTokenError,
)
from .parser import DEFAULT_MAX_DEPTH, PrattParser
from .registry import DEFAULT_REGISTRY, ExpressionRegistry, FunctionEntry, OperatorEntry
from .tag import ExpressionCompiler, compile_expression, d, default_compiler, dyno_tag
from .tokenizer import Token, TokenType, tokenize
from .validate import NodeShape, classify_node, is_valid_node

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_REGISTRY",
    "ExpressionCompiler",
    "ExpressionRegistry",
    "FunctionEntry",
    "OperatorEntry",
    "PrattParser",
    "Token",
    "TokenType",
    "NodeShape",
    "classify_node",
    "is_valid_node",
    "compile_expression",
    "default_compiler",
    "dyno_tag",
    "d",
    "tokenize",
    "ExpressionError",
    "InvalidTokenError",
    "UnexpectedTokenError",
    "UnclosedParenthesisError",
    "InvalidInterpolatedValueError",
    "InvalidPropertyAccessError",
    "FunctionArityError",
    "ExpressionDepthError",
]
