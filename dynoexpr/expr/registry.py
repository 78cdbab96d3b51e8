"""
Operator and function tables for the expression language.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .. import dyno

# Binding powers. Property access and calls never compete in the infix loop;
# their levels are carried on tokens for completeness.
SEPARATOR_PRECEDENCE = 0
ADDITIVE_PRECEDENCE = 1
MULTIPLICATIVE_PRECEDENCE = 2
PROPERTY_PRECEDENCE = 4
CALL_PRECEDENCE = 5

MAX_CALL_ARITY = 3

ARGUMENT_SEPARATOR = ","

# Leading characters already claimed by the tokenizer's fixed scanner.
_SCANNER_START_RE = re.compile(r"[A-Za-z0-9_()$.,]")


@dataclass(frozen=True)
class OperatorEntry:
    symbol: str
    precedence: int
    compile: Callable[[Any, Any], Any]


@dataclass(frozen=True)
class FunctionEntry:
    """Named callable; arity 0 marks a named constant such as ``PI``."""

    name: str
    arity: int
    compile: Callable[..., Any]

    @property
    def is_constant(self) -> bool:
        return self.arity == 0


def _component(value: Any, name: str) -> Any:
    return dyno.component(value, name)


def _zero() -> Any:
    return dyno.dyno_const("float", 0)


def _number(value: float) -> Any:
    return dyno.dyno_const("float", value)


class ExpressionRegistry:
    """Immutable lookup tables consulted by the tokenizer and parser."""

    def __init__(
        self,
        operators: Iterable[OperatorEntry],
        functions: Iterable[FunctionEntry],
        *,
        component: Callable[[Any, str], Any] = _component,
        number: Callable[[float], Any] = _number,
        zero: Callable[[], Any] = _zero,
    ):
        operator_map: Dict[str, OperatorEntry] = {}
        for entry in operators:
            if entry.symbol == ARGUMENT_SEPARATOR:
                raise ValueError("',' is reserved as the argument separator")
            if (
                not entry.symbol
                or any(char.isspace() for char in entry.symbol)
                or _SCANNER_START_RE.match(entry.symbol)
            ):
                raise ValueError(f"Invalid operator symbol {entry.symbol!r}")
            if entry.precedence <= SEPARATOR_PRECEDENCE:
                raise ValueError(
                    f"Operator '{entry.symbol}' needs a precedence above {SEPARATOR_PRECEDENCE}"
                )
            operator_map[entry.symbol] = entry
        function_map: Dict[str, FunctionEntry] = {}
        for entry in functions:
            if not 0 <= entry.arity <= MAX_CALL_ARITY:
                raise ValueError(
                    f"Function '{entry.name}' arity must be between 0 and {MAX_CALL_ARITY}"
                )
            if not entry.name.isidentifier():
                raise ValueError(f"Invalid function name '{entry.name}'")
            function_map[entry.name] = entry
        self._operators = MappingProxyType(operator_map)
        self._functions = MappingProxyType(function_map)
        self.component = component
        self.number = number
        self.zero = zero

    @property
    def operators(self) -> Mapping[str, OperatorEntry]:
        return self._operators

    @property
    def functions(self) -> Mapping[str, FunctionEntry]:
        return self._functions

    def operator(self, symbol: str) -> Optional[OperatorEntry]:
        return self._operators.get(symbol)

    def function(self, name: str) -> Optional[FunctionEntry]:
        return self._functions.get(name)

    def extend(
        self,
        *,
        operators: Iterable[OperatorEntry] = (),
        functions: Iterable[FunctionEntry] = (),
    ) -> "ExpressionRegistry":
        """Return a new registry with extra (or overriding) entries."""
        return ExpressionRegistry(
            [*self._operators.values(), *operators],
            [*self._functions.values(), *functions],
            component=self.component,
            number=self.number,
            zero=self.zero,
        )


DEFAULT_REGISTRY = ExpressionRegistry(
    operators=[
        OperatorEntry("+", ADDITIVE_PRECEDENCE, dyno.add),
        OperatorEntry("-", ADDITIVE_PRECEDENCE, dyno.sub),
        OperatorEntry("*", MULTIPLICATIVE_PRECEDENCE, dyno.mul),
        OperatorEntry("/", MULTIPLICATIVE_PRECEDENCE, dyno.div),
        OperatorEntry("%", MULTIPLICATIVE_PRECEDENCE, dyno.mod),
    ],
    functions=[
        FunctionEntry("mix", 3, dyno.mix),
        FunctionEntry("max", 2, dyno.max),
        FunctionEntry("min", 2, dyno.min),
        FunctionEntry("sin", 1, dyno.sin),
        FunctionEntry("cos", 1, dyno.cos),
        FunctionEntry("fract", 1, dyno.fract),
        FunctionEntry("sqrt", 1, dyno.sqrt),
        FunctionEntry("step", 2, dyno.step),
        FunctionEntry("pow", 2, dyno.pow),
        FunctionEntry("PI", 0, lambda: dyno.dyno_literal("float", "PI")),
    ],
)


__all__ = [
    "SEPARATOR_PRECEDENCE",
    "ADDITIVE_PRECEDENCE",
    "MULTIPLICATIVE_PRECEDENCE",
    "PROPERTY_PRECEDENCE",
    "CALL_PRECEDENCE",
    "MAX_CALL_ARITY",
    "ARGUMENT_SEPARATOR",
    "OperatorEntry",
    "FunctionEntry",
    "ExpressionRegistry",
    "DEFAULT_REGISTRY",
]
