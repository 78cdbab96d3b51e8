"""
Shared fixtures for dynoexpr tests.
"""

import pytest

from dynoexpr import dyno
from dynoexpr.dbg import set_debug_state


@pytest.fixture
def scalar():
    return dyno.dyno_float(5.0, name="scalar")


@pytest.fixture
def constant():
    return dyno.dyno_const("float", 10)


@pytest.fixture
def vec3():
    return dyno.dyno_vec3((1.0, 2.0, 3.0), name="position")


@pytest.fixture
def vec2():
    return dyno.dyno_vec2((0.5, -1.5))


@pytest.fixture(autouse=True)
def reset_debug_state():
    yield
    set_debug_state(False)
