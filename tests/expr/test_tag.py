"""
Tests for the compile entry points and the reusable compiler.
"""

import logging
import math
from types import SimpleNamespace

import pytest

from dynoexpr import dyno, evaluate
from dynoexpr.dbg import DebuggingContext
from dynoexpr.expr import (
    DEFAULT_REGISTRY,
    ExpressionCompiler,
    ExpressionRegistry,
    FunctionEntry,
    InvalidInterpolatedValueError,
    InvalidTokenError,
    OperatorEntry,
    compile_expression,
    d,
    dyno_tag,
)
from dynoexpr.expr.tag import assemble, split_source


class TestAssemble:
    def test_placeholders_between_segments(self):
        assert assemble(["", " * 2 + ", ""]) == "${0} * 2 + ${1}"

    def test_single_segment(self):
        assert assemble(["1 + 2"]) == "1 + 2"


class TestCompileExpression:
    def test_segments_and_values(self, scalar, constant):
        result = compile_expression(["", " * 2 + ", ""], [scalar, constant])
        assert evaluate(result) == 20.0

    def test_segment_count_mismatch(self, scalar):
        with pytest.raises(ValueError):
            compile_expression(["", ""], [scalar, scalar])

    def test_invalid_value_fails_fast(self, scalar):
        with pytest.raises(InvalidInterpolatedValueError) as excinfo:
            compile_expression(["", " + ", " + ", ""], [scalar, "nope", None])
        assert excinfo.value.index == 1

    def test_bool_is_rejected(self):
        with pytest.raises(InvalidInterpolatedValueError):
            compile_expression(["", " + 1"], [True])

    def test_validation_precedes_tokenizing(self):
        # The bad value is reported even though the text is also invalid.
        with pytest.raises(InvalidInterpolatedValueError):
            compile_expression(["", " ^ 2"], [object()])

    def test_custom_registry(self, scalar):
        registry = DEFAULT_REGISTRY.extend(operators=[OperatorEntry("^", 3, dyno.pow)])
        result = compile_expression(["", " ^ 2"], [scalar], registry=registry)
        assert evaluate(result) == 25.0


class TestEntryForms:
    """dyno_tag accepts segments, '{}' strings and templates."""

    def test_alias(self):
        assert d is dyno_tag

    def test_segment_form(self, scalar):
        assert evaluate(d(["", " + 1"], scalar)) == 6.0

    def test_format_string_form(self, scalar, vec3):
        assert evaluate(d("{} * {}.y", scalar, vec3)) == 10.0

    def test_template_form(self, scalar):
        template = SimpleNamespace(strings=("", " - 1"), values=(scalar,))
        assert evaluate(d(template)) == 4.0

    def test_template_with_extra_values(self, scalar):
        template = SimpleNamespace(strings=("", ""), values=(scalar,))
        with pytest.raises(TypeError):
            d(template, scalar)

    def test_unsupported_source(self):
        with pytest.raises(TypeError):
            d(42)

    def test_split_source(self, scalar):
        assert split_source("{} + {}", (scalar, 1)) == (["", " + ", ""], [scalar, 1])

    def test_marker_count_mismatch(self, scalar):
        with pytest.raises(ValueError):
            d("{} + {}", scalar)


class TestExpressionCompiler:
    def test_default_registry(self):
        assert ExpressionCompiler().registry is DEFAULT_REGISTRY

    def test_extended_vocabulary(self, scalar):
        registry = DEFAULT_REGISTRY.extend(
            functions=[
                FunctionEntry("tau", 0, lambda: dyno.dyno_literal("float", "TWO_PI")),
                FunctionEntry("half", 1, lambda a: dyno.mul(a, dyno.dyno_const("float", 0.5))),
            ]
        )
        compile_ = ExpressionCompiler(registry)
        assert evaluate(compile_("tau / 2")) == pytest.approx(math.pi)
        assert evaluate(compile_("half({})", scalar)) == 2.5
        with pytest.raises(InvalidTokenError):
            d("half(1)")

    def test_custom_number_wrapping(self):
        registry = ExpressionRegistry(
            DEFAULT_REGISTRY.operators.values(),
            DEFAULT_REGISTRY.functions.values(),
            number=lambda value: dyno.dyno_const("int", value),
        )
        result = ExpressionCompiler(registry)("{} + 2", 3)
        assert result.type == "int"
        assert evaluate(result) == 5

    def test_invalid_depth(self):
        with pytest.raises(ValueError):
            ExpressionCompiler(max_depth=0)

    def test_stats_recorded_while_debugging(self):
        compiler = ExpressionCompiler()
        compiler("1 + 1")
        assert compiler.get_stats()["call_count"] == 0
        with DebuggingContext(True):
            compiler("1 + 1")
            compiler("2 * 2")
        stats = compiler.get_stats()
        assert stats["call_count"] == 2
        assert stats["avg_time"] >= 0.0
        compiler.reset_stats()
        assert compiler.get_stats()["call_count"] == 0


class TestDebugLogging:
    def test_silent_by_default(self, caplog):
        caplog.set_level(logging.DEBUG, logger="dynoexpr")
        d("1 + 2")
        assert caplog.records == []

    def test_traces_while_debugging(self, caplog):
        caplog.set_level(logging.DEBUG, logger="dynoexpr")
        with DebuggingContext(True):
            d("sin(1) + 2")
        messages = [record.getMessage() for record in caplog.records]
        assert any(message.startswith("compiling") for message in messages)
        assert any("parse_function_call sin" in message for message in messages)
        assert any("parse_infix '+'" in message for message in messages)

    def test_traces_property_access(self, caplog, vec3):
        caplog.set_level(logging.DEBUG, logger="dynoexpr")
        with DebuggingContext(True):
            d("{}.y * 2", vec3)
        messages = [record.getMessage() for record in caplog.records]
        assert "parse_property_access 'y'" in messages
