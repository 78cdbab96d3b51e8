"""
Value type tags shared by dyno nodes.
"""

from __future__ import annotations

from typing import Any, Dict, Sequence, Tuple, Union

import numpy as np


class DynoError(Exception):
    """Base class for node library failures."""


class DynoTypeError(DynoError, TypeError):
    """Raised when a value or operand does not fit the expected type tag."""


FLOAT = "float"
INT = "int"
UINT = "uint"
BOOL = "bool"
VEC2 = "vec2"
VEC3 = "vec3"
VEC4 = "vec4"

SCALAR_TYPES = frozenset({FLOAT, INT, UINT, BOOL})

_VECTOR_COMPONENTS: Dict[str, Tuple[str, ...]] = {
    VEC2: ("x", "y"),
    VEC3: ("x", "y", "z"),
    VEC4: ("x", "y", "z", "w"),
}

VECTOR_TYPES = frozenset(_VECTOR_COMPONENTS)
VALUE_TYPES = SCALAR_TYPES | VECTOR_TYPES

Payload = Union[float, int, bool, np.ndarray]


def ensure_type(type_tag: Any) -> str:
    if not isinstance(type_tag, str) or type_tag not in VALUE_TYPES:
        raise DynoTypeError(f"Unknown value type {type_tag!r}")
    return type_tag


def is_vector(type_tag: str) -> bool:
    return type_tag in VECTOR_TYPES


def component_names(type_tag: str) -> Tuple[str, ...]:
    return _VECTOR_COMPONENTS.get(ensure_type(type_tag), ())


def dimension(type_tag: str) -> int:
    return len(component_names(type_tag)) or 1


def vector_type(size: int) -> str:
    for type_tag, names in _VECTOR_COMPONENTS.items():
        if len(names) == size:
            return type_tag
    raise DynoTypeError(f"No vector type with {size} components")


def coerce_value(type_tag: str, value: Any) -> Payload:
    """Normalise a raw payload for ``type_tag``.

    Vectors accept sequences, numpy arrays, or objects exposing ``x``/``y``/
    ``z``/``w`` attributes (for example ``Vector3``-like classes).
    """
    ensure_type(type_tag)
    if type_tag in VECTOR_TYPES:
        names = _VECTOR_COMPONENTS[type_tag]
        if all(hasattr(value, name) for name in names) and not isinstance(
            value, (np.ndarray, Sequence)
        ):
            items = [getattr(value, name) for name in names]
        else:
            items = value
        try:
            array = np.asarray(items, dtype=np.float64).reshape(-1)
        except (TypeError, ValueError) as exc:
            raise DynoTypeError(f"Cannot build {type_tag} from {value!r}") from exc
        if array.shape[0] != len(names):
            raise DynoTypeError(
                f"Expected {len(names)} components for {type_tag}, received {array.shape[0]}"
            )
        return array

    if isinstance(value, np.ndarray) and value.ndim == 0:
        value = value.item()
    if isinstance(value, (np.ndarray, Sequence)) and not isinstance(value, str):
        raise DynoTypeError(f"Expected scalar payload for {type_tag}, received {value!r}")
    try:
        if type_tag == BOOL:
            return bool(value)
        if type_tag in (INT, UINT):
            result = int(value)
            if type_tag == UINT and result < 0:
                raise DynoTypeError(f"uint payload cannot be negative: {value!r}")
            return result
        return float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise DynoTypeError(f"Cannot build {type_tag} from {value!r}") from exc


def result_type(left: str, right: str) -> str:
    """Broadcast two operand types the way GLSL arithmetic does."""
    ensure_type(left)
    ensure_type(right)
    if left == right:
        return left
    if left in VECTOR_TYPES and right in VECTOR_TYPES:
        raise DynoTypeError(f"Incompatible vector operands: {left} and {right}")
    if left in VECTOR_TYPES:
        return left
    if right in VECTOR_TYPES:
        return right
    return FLOAT


__all__ = [
    "DynoError",
    "DynoTypeError",
    "FLOAT",
    "INT",
    "UINT",
    "BOOL",
    "VEC2",
    "VEC3",
    "VEC4",
    "SCALAR_TYPES",
    "VECTOR_TYPES",
    "VALUE_TYPES",
    "Payload",
    "ensure_type",
    "is_vector",
    "component_names",
    "dimension",
    "vector_type",
    "coerce_value",
    "result_type",
]
