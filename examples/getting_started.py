"""Walkthrough of the dynoexpr expression compiler.

1. Compile a few expressions over uniforms and constants, inspect the
   resulting node graphs and evaluate them on the CPU.
2. Extend the default vocabulary with a custom operator and constant and
   compile through a dedicated ``ExpressionCompiler``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

if __package__ in (None, ""):
    PROJECT_ROOT = Path(__file__).resolve().parents[1]
    if str(PROJECT_ROOT) not in sys.path:
        sys.path.insert(0, str(PROJECT_ROOT))

from dynoexpr import (
    ExpressionCompiler,
    ExpressionError,
    FunctionEntry,
    OperatorEntry,
    d,
    evaluate,
    print_tree,
)
from dynoexpr import dyno
from dynoexpr.dbg import DebuggingContext
from dynoexpr.expr import DEFAULT_REGISTRY


# ---------------------------------------------------------------------------
# Basic expressions
# ---------------------------------------------------------------------------


def run_basic_demo() -> None:
    speed = dyno.dyno_float(1.5, name="speed")
    position = dyno.dyno_vec3((0.25, 2.0, -1.0), name="position")

    wave = d("sin({}.x * {}) + {}.y * 0.5", position, speed, position)
    print("Graph for sin(position.x * speed) + position.y * 0.5:")
    print_tree(wave)
    print(f"value = {evaluate(wave):.6f}")

    speed.value = 3.0
    print(f"value after speed=3.0 -> {evaluate(wave):.6f}")

    blended = d("mix({}, {} * 2, 0.25)", position, position)
    print(f"\nmix(position, position * 2, 0.25) = {evaluate(blended)}")

    for source in ("sin(1, 2)", "mix(1, 2, 3, 4)", "1 + ", "tan(1)"):
        try:
            d(source)
        except ExpressionError as exc:
            print(f"{source!r:>20} -> {type(exc).__name__}: {exc}")


# ---------------------------------------------------------------------------
# Custom vocabulary
# ---------------------------------------------------------------------------


def run_custom_registry_demo() -> None:
    registry = DEFAULT_REGISTRY.extend(
        operators=[OperatorEntry("^", 3, dyno.pow)],
        functions=[FunctionEntry("TAU", 0, lambda: dyno.dyno_literal("float", "TWO_PI"))],
    )
    compiler = ExpressionCompiler(registry, max_depth=32)

    radius = dyno.dyno_float(2.0, name="radius")
    with DebuggingContext(True):
        area = compiler("TAU / 2 * {} ^ 2", radius)
    print("\nArea of a circle with radius 2:")
    print_tree(area)
    print(f"value = {evaluate(area):.6f}")
    print(f"compile stats: {compiler.get_stats()}")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    run_basic_demo()
    run_custom_registry_demo()


if __name__ == "__main__":
    main()
