"""Convenience exports for the dynoexpr package."""

from .dyno import evaluate
from .expr import (
    ExpressionCompiler,
    ExpressionError,
    ExpressionRegistry,
    FunctionEntry,
    OperatorEntry,
    compile_expression,
    d,
    dyno_tag,
)
from .inspect import node_signature, print_tree, render_tree

__all__ = [
    "ExpressionCompiler",
    "ExpressionError",
    "ExpressionRegistry",
    "FunctionEntry",
    "OperatorEntry",
    "compile_expression",
    "d",
    "dyno_tag",
    "evaluate",
    "node_signature",
    "print_tree",
    "render_tree",
]
