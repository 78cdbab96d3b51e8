"""
Entry points turning literal segments plus interpolated values into a node.

Three call forms are accepted by :func:`dyno_tag` (alias :data:`d`)::

    d(["", " * 2 + ", ""], a, b)      # literal segments, then values
    d("{} * 2 + {}", a, b)            # '{}' marks each interpolation
    d(t"{a} * 2 + {b}")               # template strings (Python 3.14+)
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from ..dbg import Debug, debug_log, get_debug_state
from .parser import DEFAULT_MAX_DEPTH, PrattParser
from .registry import DEFAULT_REGISTRY, ExpressionRegistry
from .tokenizer import placeholder, tokenize
from .validate import ensure_node, wrap_number

FORMAT_MARKER = "{}"


def assemble(strings: Sequence[str]) -> str:
    """Join literal segments with ``${i}`` placeholders between them."""
    parts: List[str] = []
    for index, segment in enumerate(strings):
        parts.append(segment)
        if index < len(strings) - 1:
            parts.append(placeholder(index))
    return "".join(parts)


def compile_expression(
    strings: Sequence[str],
    values: Sequence[Any],
    *,
    registry: Optional[ExpressionRegistry] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Any:
    strings = list(strings)
    values = list(values)
    if len(strings) != len(values) + 1:
        raise ValueError(
            f"Expected {len(values) + 1} literal segment(s) for {len(values)} value(s), "
            f"received {len(strings)}"
        )
    reg = registry or DEFAULT_REGISTRY

    processed = [wrap_number(value, reg.number) for value in values]
    for index, value in enumerate(processed):
        ensure_node(value, index)

    expr = assemble(strings)
    debug_log("compiling %r with %d value(s)", expr, len(processed))
    tokens = tokenize(expr, reg)
    parser = PrattParser(tokens, processed, registry=reg, max_depth=max_depth)
    return parser.parse()


def split_source(source: Any, values: Sequence[Any]) -> Tuple[List[str], List[Any]]:
    """Normalise the accepted call forms into (segments, values)."""
    if isinstance(source, str):
        return source.split(FORMAT_MARKER), list(values)
    template_strings = getattr(source, "strings", None)
    template_values = getattr(source, "values", None)
    if template_strings is not None and template_values is not None:
        if values:
            raise TypeError("Template sources carry their own values")
        return list(template_strings), list(template_values)
    if isinstance(source, Sequence) and all(isinstance(part, str) for part in source):
        return list(source), list(values)
    raise TypeError(
        "Expected literal segments, a '{}' format string, or a template, "
        f"got {type(source).__name__}"
    )


class ExpressionCompiler(Debug):
    """Reusable compiler bound to one registry and depth limit."""

    def __init__(
        self,
        registry: Optional[ExpressionRegistry] = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        super().__init__()
        if max_depth < 1:
            raise ValueError("max_depth must be positive")
        self.registry = registry or DEFAULT_REGISTRY
        self.max_depth = max_depth

    def compile(self, strings: Sequence[str], values: Sequence[Any]) -> Any:
        if not get_debug_state():
            return compile_expression(
                strings, values, registry=self.registry, max_depth=self.max_depth
            )
        with self.timed():
            return compile_expression(
                strings, values, registry=self.registry, max_depth=self.max_depth
            )

    def __call__(self, source: Any, *values: Any) -> Any:
        strings, args = split_source(source, values)
        return self.compile(strings, args)


default_compiler = ExpressionCompiler()


def dyno_tag(source: Any, *values: Any) -> Any:
    """Compile one expression with the default compiler."""
    return default_compiler(source, *values)


d = dyno_tag


__all__ = [
    "FORMAT_MARKER",
    "assemble",
    "compile_expression",
    "split_source",
    "ExpressionCompiler",
    "default_compiler",
    "dyno_tag",
    "d",
]
