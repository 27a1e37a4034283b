"""Tests for constraints: construction, simplification, linear forms and implication."""

import numpy as np
import pytest

from symbolicmath import (
    ConstrSense,
    DimensionError,
    EmptyLinearCoeffsError,
    Environment,
    EqualityConstraintRequiredError,
    InequalityConstraintRequiredError,
    InvalidSenseError,
    K,
    KMatrix,
    KVector,
    LinearExpressionRequiredError,
    MatrixConstraint,
    Monomial,
    Polynomial,
    ScalarConstraint,
    VariableNotInOrderingError,
    VectorConstraint,
)


@pytest.fixture
def env():
    return Environment("test")


@pytest.fixture
def xyz(env):
    return (
        env.new_continuous_variable(),
        env.new_continuous_variable(),
        env.new_continuous_variable(),
    )


# =============================================================================
# Construction
# =============================================================================


def test_operators_build_constraints(xyz):
    x, y, _ = xyz

    le = x + y <= 1
    assert isinstance(le, ScalarConstraint)
    assert le.sense == ConstrSense.LESS_THAN_EQUAL

    ge = x >= 2
    assert ge.sense == ConstrSense.GREATER_THAN_EQUAL

    eq = (x - y).eq(0)
    assert eq.sense == ConstrSense.EQUAL

    reflected = 1 <= x
    assert reflected.sense == ConstrSense.GREATER_THAN_EQUAL
    assert reflected.lhs == x


def test_vector_and_matrix_constraints(env):
    v = env.new_variable_vector(2)
    m = env.new_variable_matrix(2, 2)

    assert isinstance(v <= 1, VectorConstraint)
    assert isinstance(0 <= v, VectorConstraint)
    assert isinstance(m >= 0, MatrixConstraint)
    assert (v <= 1).dims() == (2, 1)


def test_comparison_dimension_mismatch(env):
    v = env.new_variable_vector(2)
    with pytest.raises(DimensionError, match="Comparison"):
        v <= KVector(np.ones(3))


def test_invalid_sense(xyz):
    x, _, _ = xyz
    with pytest.raises(InvalidSenseError):
        x.comparison(1, "<=")


def test_constraint_string(xyz):
    x, _, _ = xyz
    assert str(x <= 1) == "x_0 <= 1"
    assert str(x.eq(2)) == "x_0 = 2"


# =============================================================================
# Simplification and substitution
# =============================================================================


def test_as_simplified_constraint_moves_constants_right(xyz):
    x, y, _ = xyz
    simplified = (x + 3 <= y + 5).as_simplified_constraint()

    assert simplified.lhs == Polynomial([Monomial(1.0, [x], [1]), Monomial(-1.0, [y], [1])])
    assert simplified.rhs == K(2.0)
    assert simplified.sense == ConstrSense.LESS_THAN_EQUAL


def test_substitute_in_constraint(xyz):
    x, y, _ = xyz
    constraint = (x + y <= 1).substitute(y, 2)

    assert constraint.variables() == [x]
    assert constraint.lhs.constant() == 2.0


# =============================================================================
# Linear forms
# =============================================================================


def test_linear_inequality_representation(xyz):
    x, y, _ = xyz
    A, b = (2 * x + 3 * y + 1 <= 10).linear_inequality_constraint_representation([x, y])

    np.testing.assert_array_equal(A, [2.0, 3.0])
    assert b == 9.0


def test_greater_equal_is_negated(xyz):
    x, _, _ = xyz
    A, b = (2 * x >= 4).linear_inequality_constraint_representation()

    np.testing.assert_array_equal(A, [-2.0])
    assert b == -4.0


def test_variables_on_both_sides(xyz):
    x, y, _ = xyz
    A, b = (x + 1 <= 2 * y - 3).linear_inequality_constraint_representation([x, y])

    np.testing.assert_array_equal(A, [1.0, -2.0])
    assert b == -4.0


def test_linear_equality_representation(xyz):
    x, y, z = xyz
    C, d = (x + y).eq(1).linear_equality_constraint_representation([x, y, z])

    np.testing.assert_array_equal(C, [1.0, 1.0, 0.0])
    assert d == 1.0


def test_representation_requires_matching_sense(xyz):
    x, y, _ = xyz
    with pytest.raises(InequalityConstraintRequiredError):
        (x + y).eq(1).linear_inequality_constraint_representation()
    with pytest.raises(EqualityConstraintRequiredError):
        (x + y <= 1).linear_equality_constraint_representation()


def test_representation_requires_linear_constraint(xyz):
    x, y, _ = xyz
    with pytest.raises(LinearExpressionRequiredError):
        (x * y <= 1).linear_inequality_constraint_representation()


def test_representation_requires_complete_ordering(xyz):
    x, y, _ = xyz
    with pytest.raises(VariableNotInOrderingError):
        (x + y <= 1).linear_inequality_constraint_representation([x])


def test_representation_of_constant_constraint(xyz):
    with pytest.raises(EmptyLinearCoeffsError):
        (K(1.0) <= 2).linear_inequality_constraint_representation()


def test_vector_constraint_representation(env):
    v = env.new_variable_vector(2)
    constraint = KMatrix([[1.0, 2.0], [3.0, 4.0]]) @ v <= np.array([5.0, 6.0])

    A, b = constraint.linear_inequality_constraint_representation(list(v))
    np.testing.assert_array_equal(A, [[1.0, 2.0], [3.0, 4.0]])
    np.testing.assert_array_equal(b, [5.0, 6.0])


def test_vector_constraint_with_scalar_bound(env):
    v = env.new_variable_vector(2)
    A, b = (v <= 1).linear_inequality_constraint_representation()

    np.testing.assert_array_equal(A, np.eye(2))
    np.testing.assert_array_equal(b, [1.0, 1.0])


def test_matrix_constraint_rows_are_row_major(env):
    m = env.new_variable_matrix(2, 2)
    A, b = (m >= 0).linear_inequality_constraint_representation()

    np.testing.assert_array_equal(A, -np.eye(4))
    np.testing.assert_array_equal(b, np.zeros(4))


def test_vector_constraint_entries(env):
    v = env.new_variable_vector(2)
    entry = (v <= 1).at_vec(1)

    assert isinstance(entry, ScalarConstraint)
    assert entry.lhs == v[1]
    assert entry.rhs == K(1.0)


# =============================================================================
# Implication
# =============================================================================


def test_scaled_inequality_is_implied(xyz):
    x, y, _ = xyz
    tight = x + y <= 1
    loose = 2 * x + 2 * y <= 5

    assert tight.implies_this_is_also_satisfied(loose)
    assert not loose.implies_this_is_also_satisfied(tight)


def test_opposite_direction_is_not_implied(xyz):
    x, y, _ = xyz
    assert not (x + y <= 1).implies_this_is_also_satisfied(x + y >= 0)


def test_equality_implies_both_directions(xyz):
    x, y, _ = xyz
    equality = (x + y).eq(1)

    assert equality.implies_this_is_also_satisfied(x + y <= 2)
    assert equality.implies_this_is_also_satisfied(-x - y <= 0)
    assert equality.implies_this_is_also_satisfied((2 * x + 2 * y).eq(2))
    assert not equality.implies_this_is_also_satisfied((x + y).eq(2))


def test_trivially_true_constraint_is_implied(xyz):
    x, _, _ = xyz
    assert (x <= 1).implies_this_is_also_satisfied(K(0.0) <= 1)
    assert not (x <= 1).implies_this_is_also_satisfied(K(2.0) <= 1)


def test_nonlinear_implication_is_structural(xyz):
    x, y, _ = xyz
    assert (x * y <= 1).implies_this_is_also_satisfied(x * y <= 1)
    assert not (x * y <= 1).implies_this_is_also_satisfied(x * y <= 2)


def test_collection_implication(env):
    v = env.new_variable_vector(2)

    assert (v <= 1).implies_this_is_also_satisfied(v[0] <= 2)
    assert (v <= 1).implies_this_is_also_satisfied(v <= 2)
    assert not (v <= 2).implies_this_is_also_satisfied(v <= 1)
