import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from symbolicmath import (
    Environment,
    EnvironmentConfig,
    MixedEnvironmentError,
    Monomial,
    StructuralError,
    VariableConfig,
    VarType,
)


def test_ids_are_consecutive_from_zero():
    env = Environment("ids")
    variables = [env.new_continuous_variable() for _ in range(3)]

    assert [v.id for v in variables] == [0, 1, 2]
    assert [v.name for v in variables] == ["x_0", "x_1", "x_2"]
    assert len(env) == 3
    assert list(env) == variables


def test_variables_from_different_environments_cannot_be_combined():
    a = Environment("a")
    b = Environment("b")
    x = a.new_continuous_variable()
    y = b.new_continuous_variable()

    assert x.id == y.id == 0
    assert x != y
    with pytest.raises(MixedEnvironmentError):
        x + y
    with pytest.raises(MixedEnvironmentError):
        x * y
    with pytest.raises(MixedEnvironmentError):
        x <= y
    with pytest.raises(MixedEnvironmentError):
        a.new_variable_vector(2) + b.new_variable_vector(2)
    with pytest.raises(StructuralError):
        Monomial(1.0, [x, y], [1, 1]).check()


def test_variable_kinds_and_bounds():
    env = Environment()

    continuous = env.new_continuous_variable(lower=-1.0, upper=2.0, name="c")
    assert continuous.var_type == VarType.CONTINUOUS
    assert (continuous.lower, continuous.upper) == (-1.0, 2.0)
    assert continuous.name == "c"

    binary = env.new_binary_variable()
    assert binary.var_type == VarType.BINARY
    assert (binary.lower, binary.upper) == (0.0, 1.0)

    integer = env.new_integer_variable(lower=0)
    assert integer.var_type == VarType.INTEGER
    assert integer.lower == 0.0
    assert math.isinf(integer.upper)


def test_config_defaults_apply():
    config = EnvironmentConfig(variables=VariableConfig(lower=0.0, name_prefix="z"))
    env = Environment("configured", config=config)
    v = env.new_continuous_variable()

    assert v.name == "z_0"
    assert v.lower == 0.0
    assert math.isinf(v.upper)


def test_inconsistent_config_is_rejected():
    with pytest.raises(ValueError):
        VariableConfig(lower=1.0, upper=0.0)


def test_invalid_bounds_do_not_consume_an_id():
    env = Environment()
    with pytest.raises(StructuralError):
        env.new_continuous_variable(lower=1.0, upper=0.0)

    assert len(env) == 0
    assert env.new_continuous_variable().id == 0


def test_vector_and_matrix_allocation():
    env = Environment()
    v = env.new_variable_vector(3, lower=0.0)
    m = env.new_variable_matrix(2, 2, var_type=VarType.BINARY)

    assert [x.id for x in v] == [0, 1, 2]
    assert all(x.lower == 0.0 for x in v)
    assert [[x.id for x in row] for row in m.rows] == [[3, 4], [5, 6]]

    with pytest.raises(ValueError):
        env.new_variable_vector(0)


def test_find():
    env = Environment()
    x = env.new_continuous_variable()

    assert env.find(0) is x
    assert env.find(5) is None
    assert x in env


def test_concurrent_allocation_yields_unique_ids():
    env = Environment("threads")

    def allocate(_):
        return [env.new_continuous_variable().id for _ in range(50)]

    with ThreadPoolExecutor(max_workers=4) as pool:
        ids = [i for batch in pool.map(allocate, range(8)) for i in batch]

    assert sorted(ids) == list(range(400))


def test_concurrent_vector_allocation_keeps_ids_contiguous():
    env = Environment("threads")

    def allocate(_):
        return [[v.id for v in env.new_variable_vector(20)] for _ in range(50)]

    with ThreadPoolExecutor(max_workers=4) as pool:
        batches = [ids for chunk in pool.map(allocate, range(8)) for ids in chunk]

    for ids in batches:
        assert ids == list(range(ids[0], ids[0] + 20))
    assert sorted(i for ids in batches for i in ids) == list(range(8 * 50 * 20))


def test_concurrent_matrix_allocation_keeps_ids_contiguous():
    env = Environment("threads")

    def allocate(_):
        return [env.new_variable_matrix(3, 4) for _ in range(25)]

    with ThreadPoolExecutor(max_workers=4) as pool:
        matrices = [m for chunk in pool.map(allocate, range(8)) for m in chunk]

    for m in matrices:
        ids = [v.id for row in m.rows for v in row]
        assert ids == list(range(ids[0], ids[0] + 12))


def test_failed_vector_allocation_consumes_no_ids():
    env = Environment()
    with pytest.raises(StructuralError):
        env.new_variable_vector(3, lower=1.0, upper=0.0)

    assert len(env) == 0
    assert [v.id for v in env.new_variable_vector(2)] == [0, 1]
