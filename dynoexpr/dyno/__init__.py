"""Typed dataflow nodes consumed and produced by the expression compiler."""

from .evaluate import LITERALS, EvaluationError, evaluate
from .graph import evaluation_order, to_networkx
from .nodes import DynoBlock, DynoConst, DynoLiteral, DynoOutput, DynoUniform, DynoValue
from .ops import (
    add,
    apply,
    as_operand,
    combine,
    component,
    cos,
    div,
    dyno_const,
    dyno_float,
    dyno_int,
    dyno_literal,
    dyno_vec2,
    dyno_vec3,
    dyno_vec4,
    fract,
    max,
    min,
    mix,
    mod,
    mul,
    pow,
    sin,
    split,
    sqrt,
    step,
    sub,
)
from .registry import Primitive, PrimitiveRegistry, RegistrationError, primitives_default
from .types import DynoError, DynoTypeError, VALUE_TYPES

__all__ = [
    "DynoValue",
    "DynoConst",
    "DynoUniform",
    "DynoLiteral",
    "DynoBlock",
    "DynoOutput",
    "DynoError",
    "DynoTypeError",
    "EvaluationError",
    "RegistrationError",
    "Primitive",
    "PrimitiveRegistry",
    "primitives_default",
    "VALUE_TYPES",
    "LITERALS",
    "evaluate",
    "evaluation_order",
    "to_networkx",
    "apply",
    "as_operand",
    "dyno_const",
    "dyno_literal",
    "dyno_float",
    "dyno_int",
    "dyno_vec2",
    "dyno_vec3",
    "dyno_vec4",
    "add",
    "sub",
    "mul",
    "div",
    "mod",
    "sin",
    "cos",
    "sqrt",
    "fract",
    "max",
    "min",
    "pow",
    "step",
    "mix",
    "split",
    "combine",
    "component",
]
