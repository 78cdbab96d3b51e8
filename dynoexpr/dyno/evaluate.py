"""
Reference CPU evaluation of dyno node graphs.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

import numpy as np

from ..dbg import debug_log
from .graph import evaluation_order
from .nodes import DynoBlock, DynoConst, DynoLiteral, DynoOutput, DynoValue
from .registry import PrimitiveRegistry, primitives_default
from .types import INT, UINT, DynoError, Payload, coerce_value


class EvaluationError(DynoError, RuntimeError):
    """Raised when a node graph cannot be evaluated."""


LITERALS: Mapping[str, float] = {
    "PI": math.pi,
    "TWO_PI": 2.0 * math.pi,
    "HALF_PI": 0.5 * math.pi,
    "E": math.e,
}


def evaluate(
    node: DynoValue,
    *,
    registry: Optional[PrimitiveRegistry] = None,
    literals: Optional[Mapping[str, Any]] = None,
) -> Payload:
    """Compute the value of ``node``.

    Blocks run once each in topological order. Float division by zero and
    similar domain errors yield ``inf``/``nan`` like the GPU would, rather
    than raising. An ``int`` or ``uint`` result that is not finite (integer
    division or ``mod`` by zero) raises :class:`EvaluationError`.
    """
    reg = registry or primitives_default
    known_literals = dict(LITERALS)
    if literals:
        known_literals.update(literals)

    results: Dict[int, Dict[str, Payload]] = {}
    for current in evaluation_order(node):
        if isinstance(current, DynoBlock):
            results[current.id] = _run_block(current, results, reg)
        elif isinstance(current, DynoLiteral):
            if current.value not in known_literals:
                raise EvaluationError(f"Unknown literal '{current.value}'")
            results[current.id] = {
                "value": coerce_value(current.type, known_literals[current.value])
            }
        elif isinstance(current, DynoConst):
            results[current.id] = {"value": current.value}
        else:
            raise EvaluationError(f"Cannot evaluate {type(current).__name__}")

    return _lookup(node, results)


def _lookup(node: DynoValue, results: Mapping[int, Mapping[str, Payload]]) -> Payload:
    if isinstance(node, DynoOutput):
        return results[node.block.id][node.key]
    outputs = results[node.id]
    if isinstance(node, DynoBlock):
        if len(outputs) != 1:
            raise EvaluationError(
                f"Block '{node.op}' has several outputs; evaluate one of its outputs"
            )
        (value,) = outputs.values()
        return value
    return outputs["value"]


def _run_block(
    block: DynoBlock,
    results: Mapping[int, Mapping[str, Payload]],
    registry: PrimitiveRegistry,
) -> Dict[str, Payload]:
    primitive = registry.get(block.op)
    arguments = {port: _lookup(source, results) for port, source in block.inputs.items()}
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        raw = primitive.kernel(**arguments, **dict(block.params))
    missing = [key for key in block.out_types if key not in raw]
    if missing:
        raise EvaluationError(
            f"Primitive '{block.op}' result missing keys: {', '.join(missing)}"
        )
    for key, type_tag in block.out_types.items():
        if type_tag in (INT, UINT) and not np.all(np.isfinite(raw[key])):
            raise EvaluationError(
                f"Primitive '{block.op}' produced a non-finite {type_tag} result"
            )
    outputs = {key: coerce_value(type_tag, raw[key]) for key, type_tag in block.out_types.items()}
    debug_log("evaluated block %s -> %s", block.op, outputs)
    return outputs


__all__ = ["EvaluationError", "LITERALS", "evaluate"]
