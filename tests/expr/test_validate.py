"""
Tests for structural node validation.
"""

from types import SimpleNamespace

import numpy as np
import pytest

from dynoexpr import dyno
from dynoexpr.expr import InvalidInterpolatedValueError, NodeShape, classify_node, is_valid_node
from dynoexpr.expr.validate import ensure_node, wrap_number


class TestClassifyNode:
    def test_leaves(self, scalar, constant, vec3):
        for node in (scalar, constant, vec3, dyno.dyno_literal("float", "PI")):
            assert classify_node(node) is NodeShape.LEAF

    def test_outputs_and_blocks_are_composite(self, vec3):
        block = dyno.split(vec3)
        assert classify_node(block) is NodeShape.COMPOSITE
        assert classify_node(block.outputs["x"]) is NodeShape.COMPOSITE

    def test_plain_values_rejected(self):
        for value in (None, 1, 2.5, True, "x", b"x", [1, 2], {"type": "float"}):
            assert classify_node(value) is None
            assert not is_valid_node(value)

    def test_duck_typed_leaf(self):
        assert classify_node(SimpleNamespace(type="vec2", value=(0, 0))) is NodeShape.LEAF

    def test_unknown_type_tag(self):
        assert classify_node(SimpleNamespace(type="mat3", value=0)) is None

    def test_duck_typed_composite(self):
        assert classify_node(SimpleNamespace(out_types={"r": "float"})) is NodeShape.COMPOSITE

    def test_empty_composite_rejected(self):
        assert classify_node(SimpleNamespace(out_types={})) is None


class TestWrapNumber:
    def test_wraps_reals(self):
        node = wrap_number(3, lambda v: dyno.dyno_const("float", v))
        assert node.type == "float"
        assert node.value == 3.0

    def test_numpy_scalars_wrap(self):
        node = wrap_number(np.float32(0.5), lambda v: dyno.dyno_const("float", v))
        assert node.value == 0.5

    def test_bool_is_not_wrapped(self):
        assert wrap_number(True, lambda v: dyno.dyno_const("float", v)) is True

    def test_nodes_pass_through(self, vec3):
        assert wrap_number(vec3, lambda v: dyno.dyno_const("float", v)) is vec3


class TestEnsureNode:
    def test_returns_value(self, scalar):
        assert ensure_node(scalar, 0) is scalar

    def test_reports_index(self):
        with pytest.raises(InvalidInterpolatedValueError) as excinfo:
            ensure_node("oops", 3)
        assert excinfo.value.index == 3
        assert excinfo.value.value == "oops"
        assert isinstance(excinfo.value, TypeError)
