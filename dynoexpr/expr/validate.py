"""
Structural validation of interpolated values.
"""

from __future__ import annotations

from enum import Enum
from numbers import Real
from typing import Any, Callable, Mapping, Optional

from ..dyno.types import VALUE_TYPES
from .errors import InvalidInterpolatedValueError


class NodeShape(str, Enum):
    LEAF = "leaf"
    COMPOSITE = "composite"


def classify_node(value: Any) -> Optional[NodeShape]:
    """Return the shape ``value`` conforms to, or ``None``.

    A leaf carries a known type tag plus a payload; a composite exposes a
    non-empty mapping of named output channels. Plain numbers are neither.
    """
    if value is None or isinstance(value, (Real, str, bytes)):
        return None
    type_tag = getattr(value, "type", None)
    if isinstance(type_tag, str) and type_tag in VALUE_TYPES and hasattr(value, "value"):
        return NodeShape.LEAF
    out_types = getattr(value, "out_types", None)
    if isinstance(out_types, Mapping) and out_types and all(
        isinstance(key, str) and isinstance(tag, str) for key, tag in out_types.items()
    ):
        return NodeShape.COMPOSITE
    return None


def is_valid_node(value: Any) -> bool:
    return classify_node(value) is not None


def wrap_number(value: Any, number: Callable[[float], Any]) -> Any:
    """Wrap plain real numbers (not bools) into constant nodes."""
    if isinstance(value, Real) and not isinstance(value, bool):
        return number(float(value))
    return value


def ensure_node(value: Any, index: int) -> Any:
    if classify_node(value) is None:
        raise InvalidInterpolatedValueError(index, value)
    return value


__all__ = [
    "NodeShape",
    "classify_node",
    "is_valid_node",
    "wrap_number",
    "ensure_node",
]
