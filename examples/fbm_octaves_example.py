"""Layered sine "fBm" height field built from compiled expressions.

Each splat gets a random vec4; its x/z drift over time and the y height is
the sum of up to five octaves of sin * sin, gated by ``step`` against the
``octaves`` uniform. Heights are evaluated for a small batch of splats at a
few time steps.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

if __package__ in (None, ""):
    PROJECT_ROOT = Path(__file__).resolve().parents[1]
    if str(PROJECT_ROOT) not in sys.path:
        sys.path.insert(0, str(PROJECT_ROOT))

from dynoexpr import d, evaluate, render_tree
from dynoexpr import dyno

MAX_OCTAVES = 5

speed = dyno.dyno_float(1.5, name="speed")
frequency = dyno.dyno_float(0.2, name="frequency")
amplitude = dyno.dyno_float(1.0, name="amplitude")
phase = dyno.dyno_float(0.5, name="phase")
octaves = dyno.dyno_float(5, name="octaves")
lacunarity = dyno.dyno_float(2.0, name="lacunarity")
persistence = dyno.dyno_float(0.5, name="persistence")

color_low = dyno.dyno_const("vec3", (0.16, 0.16, 0.32))
color_high = dyno.dyno_const("vec3", (0.36, 0.36, 0.64))


def splat_height(random, time):
    x_pos = d("({}.x * {} * {}) % 15", random, time, speed)
    z_pos = d("{}.z * 15", random)

    height = d("0.0")
    for octave in range(1, MAX_OCTAVES + 1):
        octave_amp = d("{} * pow({}, {})", amplitude, persistence, octave)
        octave_freq = d("{} * pow({}, {})", frequency, lacunarity, octave)
        time_offset = d("{} * {} * ({} + 1)", time, phase, octave)
        value = d(
            "{} * sin({} * {} + {}) * sin({} * {} + {})",
            octave_amp,
            x_pos,
            octave_freq,
            time_offset,
            z_pos,
            octave_freq,
            time_offset,
        )
        if octave == 1:
            height = d("{} + {}", height, value)
        else:
            height = d("{} + step({}, {}) * {}", height, octave, octaves, value)
    return height


def splat_color(height):
    return d("mix({}, {}, sin({} + .5))", color_low, color_high, height)


def main() -> None:
    rng = np.random.default_rng(7)
    time = dyno.dyno_float(0.0, name="time")
    splats = [dyno.dyno_vec4(rng.random(4), name=f"splat{index}") for index in range(4)]
    heights = [splat_height(random, time) for random in splats]
    colors = [splat_color(height) for height in heights]

    print("Color graph for the first splat (abridged):")
    print("\n".join(render_tree(colors[0]).splitlines()[:12]))

    for step_time in (0.0, 0.5, 1.0):
        time.value = step_time
        values = ", ".join(f"{evaluate(height):+.4f}" for height in heights)
        print(f"t={step_time:.1f}: heights [{values}]")

    octaves.value = 2
    print(f"octaves=2: first splat height {evaluate(heights[0]):+.4f}")
    print(f"first splat color {evaluate(colors[0])}")


if __name__ == "__main__":
    main()
