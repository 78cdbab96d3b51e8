"""
Tests for dyno leaf constructors and block construction.
"""

import pytest

from dynoexpr import dyno
from dynoexpr.dyno import (
    DynoBlock,
    DynoConst,
    DynoLiteral,
    DynoOutput,
    DynoTypeError,
    DynoUniform,
    RegistrationError,
)

# =============================================================================
# Leaves
# =============================================================================


class TestLeaves:
    def test_const(self):
        node = dyno.dyno_const("float", 2)
        assert isinstance(node, DynoConst)
        assert node.type == "float"
        assert node.value == 2.0

    def test_const_is_read_only(self):
        node = dyno.dyno_const("int", 1)
        with pytest.raises(AttributeError):
            node.value = 2

    def test_uniform_can_be_updated(self, scalar):
        assert isinstance(scalar, DynoUniform)
        scalar.value = 7
        assert scalar.value == 7.0

    def test_vector_constructors(self):
        assert dyno.dyno_vec2().type == "vec2"
        assert dyno.dyno_vec3((1, 2, 3)).value.tolist() == [1.0, 2.0, 3.0]
        assert dyno.dyno_vec4().value.shape == (4,)

    def test_literal(self):
        node = dyno.dyno_literal("float", "PI")
        assert isinstance(node, DynoLiteral)
        assert node.value == "PI"

    def test_literal_requires_name(self):
        with pytest.raises(DynoTypeError):
            dyno.dyno_literal("float", "")

    def test_ids_are_unique(self):
        assert dyno.dyno_float().id != dyno.dyno_float().id


# =============================================================================
# Blocks
# =============================================================================


class TestBlocks:
    """Block construction and output typing."""

    def test_binary_returns_output(self, scalar, constant):
        result = dyno.add(scalar, constant)
        assert isinstance(result, DynoOutput)
        assert result.type == "float"
        assert result.block.op == "add"
        assert set(result.block.inputs) == {"a", "b"}

    def test_scalar_vector_broadcast(self, scalar, vec3):
        assert dyno.mul(scalar, vec3).type == "vec3"

    def test_mismatched_vectors(self, vec2, vec3):
        with pytest.raises(DynoTypeError):
            dyno.add(vec2, vec3)

    def test_int_operands_stay_int(self):
        assert dyno.add(dyno.dyno_int(1), dyno.dyno_int(2)).type == "int"

    def test_unary_of_int_is_float(self):
        assert dyno.sin(dyno.dyno_int(1)).type == "float"

    def test_mix_weight_must_fit(self, vec2, vec3, scalar):
        assert dyno.mix(vec3, vec3, scalar).type == "vec3"
        with pytest.raises(DynoTypeError):
            dyno.mix(vec3, vec3, vec2)

    def test_split_outputs(self, vec3):
        block = dyno.split(vec3)
        assert isinstance(block, DynoBlock)
        assert dict(block.out_types) == {"x": "float", "y": "float", "z": "float"}

    def test_split_scalar_rejected(self, scalar):
        with pytest.raises(DynoTypeError):
            dyno.split(scalar)

    def test_outputs_are_cached(self, vec3):
        block = dyno.split(vec3)
        assert block.outputs["x"] is block.outputs["x"]

    def test_multi_output_block_is_not_an_operand(self, vec3, scalar):
        with pytest.raises(DynoTypeError, match="select one explicitly"):
            dyno.add(dyno.split(vec3), scalar)

    def test_single_output_block_is_an_operand(self, scalar):
        block = dyno.apply("sin", a=scalar)
        assert dyno.as_operand(block) is block.outputs["result"]

    def test_foreign_operand_rejected(self, scalar):
        with pytest.raises(DynoTypeError):
            dyno.add(scalar, 1.0)

    def test_unknown_port(self, scalar):
        with pytest.raises(DynoTypeError):
            dyno.apply("sin", x=scalar)

    def test_unknown_primitive(self, scalar):
        with pytest.raises(RegistrationError):
            dyno.apply("tan", a=scalar)


class TestCombineAndComponent:
    def test_combine_infers_vector_type(self, scalar, constant):
        assert dyno.combine(x=scalar, y=constant).type == "vec2"

    def test_combine_explicit_type(self, scalar):
        result = dyno.combine("vec3", x=scalar, y=scalar, z=scalar)
        assert result.type == "vec3"
        assert result.block.params["vector_type"] == "vec3"

    def test_combine_missing_component(self, scalar):
        with pytest.raises(DynoTypeError):
            dyno.combine("vec3", x=scalar, y=scalar)

    def test_combine_rejects_vector_component(self, scalar, vec2):
        with pytest.raises(DynoTypeError):
            dyno.combine(x=vec2, y=scalar)

    def test_component_of_vector(self, vec3):
        y = dyno.component(vec3, "y")
        assert y.type == "float"
        assert y.key == "y"
        assert y.block.op == "split"

    def test_component_of_multi_output_block(self, vec3):
        block = dyno.split(vec3)
        assert dyno.component(block, "z") is block.outputs["z"]

    def test_component_missing(self, vec2):
        with pytest.raises(DynoTypeError):
            dyno.component(vec2, "z")

    def test_component_of_scalar(self, scalar):
        with pytest.raises(DynoTypeError):
            dyno.component(scalar, "x")
