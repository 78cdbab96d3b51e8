"""
Built-in dyno primitives and leaf constructors.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import numpy as np

from .nodes import DynoBlock, DynoConst, DynoLiteral, DynoOutput, DynoUniform, DynoValue
from .registry import PrimitiveRegistry, primitives_default
from .types import (
    FLOAT,
    INT,
    VEC2,
    VEC3,
    VEC4,
    VECTOR_TYPES,
    DynoTypeError,
    component_names,
    is_vector,
    result_type,
    vector_type,
)

Operand = DynoValue


# ---------------------------------------------------------------------------
# Leaf constructors
# ---------------------------------------------------------------------------


def dyno_const(type: str, value: Any) -> DynoConst:
    return DynoConst(type, value)


def dyno_literal(type: str, literal: str) -> DynoLiteral:
    return DynoLiteral(type, literal)


def dyno_float(value: float = 0.0, *, name: Optional[str] = None) -> DynoUniform:
    return DynoUniform(FLOAT, value, name=name)


def dyno_int(value: int = 0, *, name: Optional[str] = None) -> DynoUniform:
    return DynoUniform(INT, value, name=name)


def dyno_vec2(value: Any = (0.0, 0.0), *, name: Optional[str] = None) -> DynoUniform:
    return DynoUniform(VEC2, value, name=name)


def dyno_vec3(value: Any = (0.0, 0.0, 0.0), *, name: Optional[str] = None) -> DynoUniform:
    return DynoUniform(VEC3, value, name=name)


def dyno_vec4(value: Any = (0.0, 0.0, 0.0, 0.0), *, name: Optional[str] = None) -> DynoUniform:
    return DynoUniform(VEC4, value, name=name)


# ---------------------------------------------------------------------------
# Typing rules
# ---------------------------------------------------------------------------


def _broadcast(a: str, b: str) -> Mapping[str, str]:
    return {"result": result_type(a, b)}


def _same_as_input(a: str) -> Mapping[str, str]:
    return {"result": a if a == FLOAT or is_vector(a) else FLOAT}


def _step_type(edge: str, x: str) -> Mapping[str, str]:
    return {"result": result_type(edge, x)}


def _mix_type(a: str, b: str, t: str) -> Mapping[str, str]:
    blended = result_type(a, b)
    if result_type(blended, t) != blended:
        raise DynoTypeError(f"mix weight of type {t} does not fit {blended} operands")
    return {"result": blended}


def _split_type(value: str) -> Mapping[str, str]:
    names = component_names(value)
    if not names:
        raise DynoTypeError(f"Cannot split scalar value of type {value}")
    return {name: FLOAT for name in names}


def _combine_type(vector_type: str, **components: str) -> Mapping[str, str]:
    if vector_type not in VECTOR_TYPES:
        raise DynoTypeError(f"combine() requires a vector type, got {vector_type!r}")
    expected = component_names(vector_type)
    if set(components) != set(expected):
        raise DynoTypeError(
            f"combine() for {vector_type} needs components {', '.join(expected)}"
        )
    for name, type_tag in components.items():
        if is_vector(type_tag):
            raise DynoTypeError(f"Component '{name}' must be scalar, got {type_tag}")
    return {"result": vector_type}


# ---------------------------------------------------------------------------
# Kernels
# ---------------------------------------------------------------------------


@primitives_default.primitive("add", inputs=("a", "b"), typer=_broadcast, symbol="+")
def _add(a, b):
    return {"result": np.add(a, b)}


@primitives_default.primitive("sub", inputs=("a", "b"), typer=_broadcast, symbol="-")
def _sub(a, b):
    return {"result": np.subtract(a, b)}


@primitives_default.primitive("mul", inputs=("a", "b"), typer=_broadcast, symbol="*")
def _mul(a, b):
    return {"result": np.multiply(a, b)}


@primitives_default.primitive("div", inputs=("a", "b"), typer=_broadcast, symbol="/")
def _div(a, b):
    return {"result": np.true_divide(a, b)}


@primitives_default.primitive("mod", inputs=("a", "b"), typer=_broadcast, symbol="%")
def _mod(a, b):
    # GLSL mod(): x - y * floor(x / y)
    return {"result": np.subtract(a, np.multiply(b, np.floor(np.true_divide(a, b))))}


@primitives_default.primitive("sin", inputs=("a",), typer=_same_as_input)
def _sin(a):
    return {"result": np.sin(a)}


@primitives_default.primitive("cos", inputs=("a",), typer=_same_as_input)
def _cos(a):
    return {"result": np.cos(a)}


@primitives_default.primitive("sqrt", inputs=("a",), typer=_same_as_input)
def _sqrt(a):
    return {"result": np.sqrt(a)}


@primitives_default.primitive("fract", inputs=("a",), typer=_same_as_input)
def _fract(a):
    return {"result": np.subtract(a, np.floor(a))}


@primitives_default.primitive("max", inputs=("a", "b"), typer=_broadcast)
def _max(a, b):
    return {"result": np.maximum(a, b)}


@primitives_default.primitive("min", inputs=("a", "b"), typer=_broadcast)
def _min(a, b):
    return {"result": np.minimum(a, b)}


@primitives_default.primitive("pow", inputs=("a", "b"), typer=_broadcast)
def _pow(a, b):
    return {"result": np.power(np.asarray(a, dtype=np.float64), b)}


@primitives_default.primitive("step", inputs=("edge", "x"), typer=_step_type)
def _step(edge, x):
    return {"result": np.where(np.less(x, edge), 0.0, 1.0)}


@primitives_default.primitive("mix", inputs=("a", "b", "t"), typer=_mix_type)
def _mix(a, b, t):
    return {"result": np.add(np.multiply(a, np.subtract(1.0, t)), np.multiply(b, t))}


@primitives_default.primitive("split", inputs=("value",), typer=_split_type)
def _split(value):
    array = np.asarray(value, dtype=np.float64)
    return {name: float(array[idx]) for idx, name in enumerate(("x", "y", "z", "w")[: array.shape[0]])}


@primitives_default.primitive(
    "combine", inputs=("x", "y", "z", "w"), typer=_combine_type
)
def _combine(vector_type, **components):
    names = component_names(vector_type)
    return {"result": np.array([components[name] for name in names], dtype=np.float64)}


# ---------------------------------------------------------------------------
# Block construction
# ---------------------------------------------------------------------------


def as_operand(value: Any) -> Operand:
    """Return ``value`` as something usable as a single-typed block input."""
    if isinstance(value, (DynoConst, DynoLiteral, DynoOutput)):
        return value
    if isinstance(value, DynoBlock):
        if len(value.out_types) == 1:
            (only,) = value.outputs.values()
            return only
        raise DynoTypeError(
            f"Block '{value.op}' has outputs {', '.join(value.out_types)}; select one explicitly"
        )
    raise DynoTypeError(f"Expected a dyno node, got {type(value).__name__}")


def apply(
    name: str,
    *,
    registry: Optional[PrimitiveRegistry] = None,
    params: Optional[Mapping[str, Any]] = None,
    **inputs: Any,
) -> DynoBlock:
    """Create a block applying primitive ``name`` to ``inputs``."""
    reg = registry or primitives_default
    primitive = reg.get(name)
    unknown = [port for port in inputs if port not in primitive.inputs]
    if unknown:
        raise DynoTypeError(f"Primitive '{name}' has no input(s) {', '.join(unknown)}")
    operands: Dict[str, Operand] = {
        port: as_operand(value) for port, value in inputs.items()
    }
    out_types = primitive.typer(
        **{port: operand.type for port, operand in operands.items()},
        **dict(params or {}),
    )
    return DynoBlock(name, operands, out_types, params=params)


def _single(name: str, **inputs: Any) -> DynoOutput:
    return apply(name, **inputs).outputs["result"]


def add(a: Any, b: Any) -> DynoOutput:
    return _single("add", a=a, b=b)


def sub(a: Any, b: Any) -> DynoOutput:
    return _single("sub", a=a, b=b)


def mul(a: Any, b: Any) -> DynoOutput:
    return _single("mul", a=a, b=b)


def div(a: Any, b: Any) -> DynoOutput:
    return _single("div", a=a, b=b)


def mod(a: Any, b: Any) -> DynoOutput:
    return _single("mod", a=a, b=b)


def sin(a: Any) -> DynoOutput:
    return _single("sin", a=a)


def cos(a: Any) -> DynoOutput:
    return _single("cos", a=a)


def sqrt(a: Any) -> DynoOutput:
    return _single("sqrt", a=a)


def fract(a: Any) -> DynoOutput:
    return _single("fract", a=a)


def max(a: Any, b: Any) -> DynoOutput:  # pylint: disable=redefined-builtin
    return _single("max", a=a, b=b)


def min(a: Any, b: Any) -> DynoOutput:  # pylint: disable=redefined-builtin
    return _single("min", a=a, b=b)


def pow(a: Any, b: Any) -> DynoOutput:  # pylint: disable=redefined-builtin
    return _single("pow", a=a, b=b)


def step(edge: Any, x: Any) -> DynoOutput:
    return _single("step", edge=edge, x=x)


def mix(a: Any, b: Any, t: Any) -> DynoOutput:
    return _single("mix", a=a, b=b, t=t)


def split(value: Any) -> DynoBlock:
    return apply("split", value=value)


def combine(
    vector_type_tag: Optional[str] = None,
    *,
    x: Any,
    y: Any,
    z: Any = None,
    w: Any = None,
) -> DynoOutput:
    components = {name: value for name, value in (("x", x), ("y", y), ("z", z), ("w", w)) if value is not None}
    target = vector_type_tag or vector_type(len(components))
    return apply("combine", params={"vector_type": target}, **components).outputs["result"]


def component(value: Any, name: str) -> DynoOutput:
    """Select channel ``name``: a block output, or a vector component."""
    if isinstance(value, DynoBlock) and len(value.out_types) > 1:
        if name not in value.out_types:
            raise DynoTypeError(f"Block '{value.op}' has no output '{name}'")
        return value.outputs[name]
    operand = as_operand(value)
    if name not in component_names(operand.type):
        raise DynoTypeError(f"Value of type {operand.type} has no component '{name}'")
    return split(operand).outputs[name]


__all__ = [
    "dyno_const",
    "dyno_literal",
    "dyno_float",
    "dyno_int",
    "dyno_vec2",
    "dyno_vec3",
    "dyno_vec4",
    "as_operand",
    "apply",
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
