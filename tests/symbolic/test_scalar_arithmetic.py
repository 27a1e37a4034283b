"""Tests for the scalar kinds K, Variable, Monomial and Polynomial.

Tests cover:
- Promotion through the lattice K < Variable < Monomial < Polynomial
- Degree, constant part and linearity
- Powers, simplification and derivatives
- Substitution
- Linear coefficients
- Validation of malformed input
"""

import numpy as np
import pytest

from symbolicmath import (
    Environment,
    K,
    KMatrix,
    KVector,
    Monomial,
    NegativeExponentError,
    NonlinearTermsIgnoredWarning,
    Polynomial,
    PolynomialVector,
    StructuralError,
    UnsupportedInputError,
    Variable,
    to_expression,
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


def as_terms(expression):
    """Map each like-term form to its coefficient, ignoring term order."""
    return {m.form(): m.coefficient for m in expression.to_polynomial().simplify().monomials}


# =============================================================================
# Promotion
# =============================================================================


def test_constant_arithmetic_stays_constant():
    assert K(2) + K(3) == K(5)
    assert K(2) * K(3) == K(6)
    assert K(2) - K(3) == K(-1)
    assert isinstance(K(2) + 3, K)


def test_constant_plus_variable_is_polynomial(xyz):
    x, _, _ = xyz
    result = K(2) + x

    assert isinstance(result, Polynomial)
    assert result == Polynomial([Monomial(1.0, [x], [1]), Monomial(2.0)])


def test_variable_plus_same_variable_is_monomial(xyz):
    x, _, _ = xyz
    result = x + x

    assert isinstance(result, Monomial)
    assert result.coefficient == 2.0
    assert result.variable_factors == (x,)


def test_variable_plus_other_variable_is_polynomial(xyz):
    x, y, _ = xyz
    result = x + y

    assert isinstance(result, Polynomial)
    assert len(result.monomials) == 2
    assert result.variables() == [x, y]


def test_variable_products(xyz):
    x, y, _ = xyz

    square = x * x
    assert isinstance(square, Monomial)
    assert square.exponents == (2,)

    scaled = 3 * x
    assert scaled == Monomial(3.0, [x], [1])

    mixed = x * y * x
    assert mixed == Monomial(1.0, [x, y], [2, 1])


def test_like_monomials_merge(xyz):
    x, y, _ = xyz
    result = Monomial(2.0, [x, y], [1, 2]) + Monomial(5.0, [y, x], [2, 1])

    assert isinstance(result, Monomial)
    assert result.coefficient == 7.0


def test_constant_monomial_plus_constant_stays_monomial():
    result = Monomial(2.0) + K(3.0)
    assert isinstance(result, Monomial)
    assert result.coefficient == 5.0


def test_difference_of_equal_variables_has_zero_coefficient(xyz):
    x, _, _ = xyz
    result = x - x
    assert isinstance(result, Monomial)
    assert result.coefficient == 0.0


def test_polynomial_plus_constant_merges_into_constant_term(xyz):
    x, _, _ = xyz
    p = x + 1
    result = p + 4

    assert result == Polynomial([Monomial(1.0, [x], [1]), Monomial(5.0)])


def test_numpy_array_on_the_left_defers_to_expression(xyz):
    x, _, _ = xyz
    result = np.array([1.0, 2.0]) + x

    assert isinstance(result, PolynomialVector)
    assert len(result) == 2
    assert result[1].constant() == 2.0


def test_reflected_subtraction(xyz):
    x, _, _ = xyz
    result = 5 - x
    assert as_terms(result) == {frozenset({(x.id, 1)}): -1.0, frozenset(): 5.0}


def test_unsupported_operand_raises(xyz):
    x, _, _ = xyz
    with pytest.raises(UnsupportedInputError):
        x + "a"


# =============================================================================
# Degree, constant part, linearity
# =============================================================================


def test_degree_and_constant(xyz):
    x, y, _ = xyz
    assert K(4).degree() == 0
    assert x.degree() == 1
    assert Monomial(3.0, [x, y], [2, 1]).degree() == 3
    assert (x * y + x + 7).degree() == 2
    assert (x + 3).constant() == 3.0
    assert (x * y).constant() == 0.0


def test_is_linear_uses_total_degree(xyz):
    x, y, _ = xyz
    assert (2 * x + 1).is_linear()
    assert K(3).is_linear()
    assert not (x * y).is_linear()
    assert not (x**2 + y).is_linear()


# =============================================================================
# Powers
# =============================================================================


def test_power_of_binomial(xyz):
    x, _, _ = xyz
    result = (x + 1) ** 2

    assert isinstance(result, Polynomial)
    assert result.monomials == (
        Monomial(1.0, [x], [2]),
        Monomial(2.0, [x], [1]),
        Monomial(1.0),
    )


def test_power_zero_is_one(xyz):
    x, _, _ = xyz
    assert x**0 == K(1.0)


def test_negative_exponent_raises(xyz):
    x, _, _ = xyz
    with pytest.raises(NegativeExponentError):
        x**-1


def test_non_integer_exponent_raises(xyz):
    x, _, _ = xyz
    with pytest.raises(UnsupportedInputError):
        x**1.5


# =============================================================================
# Simplification
# =============================================================================


def test_simplify_merges_and_drops_zero_terms(xyz):
    x, y, _ = xyz
    p = Polynomial(
        [
            Monomial(1.0, [x], [1]),
            Monomial(0.0),
            Monomial(2.0, [x], [1]),
            Monomial(3.0, [y], [1]),
            Monomial(-3.0, [y], [1]),
        ]
    )
    simplified = p.simplify()

    assert simplified == Polynomial([Monomial(3.0, [x], [1])])
    assert simplified.simplify() == simplified


def test_simplify_of_cancelling_terms_is_zero(xyz):
    x, _, _ = xyz
    p = Polynomial([Monomial(1.0, [x], [1]), Monomial(-1.0, [x], [1])])
    assert p.simplify() == Polynomial([Monomial(0.0)])


def test_addition_and_multiplication_commute_after_simplify(xyz):
    x, y, _ = xyz
    p = x * y + 2 * x + 1
    q = 3 * y * y + x

    assert as_terms(p + q) == as_terms(q + p)
    assert as_terms(p * q) == as_terms(q * p)


# =============================================================================
# Derivatives
# =============================================================================


def test_polynomial_derivative_uses_power_rule(xyz):
    x, y, _ = xyz
    p = 3 * x**2 * y + 2 * y + 1

    assert p.derivative_wrt(x) == Polynomial([Monomial(6.0, [x, y], [1, 1])])
    assert as_terms(p.derivative_wrt(y)) == {frozenset({(x.id, 2)}): 3.0, frozenset(): 2.0}


def test_derivative_wrt_absent_variable_is_zero(xyz):
    x, y, z = xyz
    assert (x * y + 1).derivative_wrt(z) == K(0.0)
    assert Monomial(2.0, [x], [3]).derivative_wrt(z) == K(0.0)


def test_scalar_derivatives(xyz):
    x, y, _ = xyz
    assert K(3).derivative_wrt(x) == K(0.0)
    assert x.derivative_wrt(x) == K(1.0)
    assert x.derivative_wrt(y) == K(0.0)
    assert Monomial(4.0, [x], [1]).derivative_wrt(x) == Monomial(4.0)


# =============================================================================
# Substitution
# =============================================================================


def test_substitute_constant_into_polynomial(xyz):
    x, y, _ = xyz
    result = (x + y).substitute(x, 3)

    assert result == Polynomial([Monomial(1.0, [y], [1]), Monomial(3.0)])


def test_substitute_polynomial_into_power(xyz):
    x, y, _ = xyz
    result = (x**2).substitute(x, y + 1)

    assert as_terms(result) == {
        frozenset({(y.id, 2)}): 1.0,
        frozenset({(y.id, 1)}): 2.0,
        frozenset(): 1.0,
    }


def test_simultaneous_substitution_does_not_depend_on_order(xyz):
    x, y, _ = xyz
    p = x + 2 * y

    forward = p.substitute_according_to({x: y, y: x})
    backward = p.substitute_according_to({y: x, x: y})

    assert forward == backward
    assert as_terms(forward) == {frozenset({(y.id, 1)}): 1.0, frozenset({(x.id, 1)}): 2.0}


def test_substitute_rejects_non_variable_keys(xyz):
    x, _, _ = xyz
    with pytest.raises(UnsupportedInputError):
        (x + 1).substitute_according_to({"x": 1.0})


# =============================================================================
# Linear coefficients
# =============================================================================


def test_linear_coeff(xyz):
    x, y, z = xyz
    p = 2 * x + 3 * y + 1

    np.testing.assert_array_equal(p.linear_coeff([x, y]), [2.0, 3.0])
    np.testing.assert_array_equal(p.linear_coeff([y, z, x]), [3.0, 0.0, 2.0])
    np.testing.assert_array_equal(x.linear_coeff([y, x]), [0.0, 1.0])


def test_linear_coeff_warns_about_nonlinear_terms(xyz):
    x, _, _ = xyz
    with pytest.warns(NonlinearTermsIgnoredWarning):
        coeffs = (x**2 + x).linear_coeff([x])
    np.testing.assert_array_equal(coeffs, [1.0])


# =============================================================================
# Validation and formatting
# =============================================================================


def test_malformed_monomials_are_rejected(xyz):
    x, _, _ = xyz
    with pytest.raises(StructuralError):
        Monomial(1.0, [x, x], [1, 1]).check()
    with pytest.raises(StructuralError):
        Monomial(1.0, [x], [1, 2]).check()
    with pytest.raises(StructuralError):
        Monomial(1.0, [x], [0]).check()


def test_arithmetic_validates_operands(xyz):
    x, _, _ = xyz
    with pytest.raises(StructuralError):
        Monomial(1.0, [x, x], [1, 1]) + x
    with pytest.raises(StructuralError):
        x * Polynomial([])


def test_variable_with_inverted_bounds_is_rejected():
    with pytest.raises(StructuralError):
        Variable(0, lower=1.0, upper=0.0).check()


def test_string_formats(xyz):
    x, y, _ = xyz
    assert str(K(3)) == "3"
    assert str(x) == "x_0"
    assert str(Monomial(2.0, [x, y], [2, 1])) == "2 x_0^2 x_1"
    assert str(x - 3) == "x_0 - 3"
    assert repr(x + y) == "Polynomial(x_0 + x_1)"


def test_variables_hash_by_id_and_environment(xyz):
    x, _, _ = xyz
    same = Variable(x.id, name="alias", environment=x.environment)
    assert same == x
    assert {x: 1}[same] == 1

    other = Environment("other").new_continuous_variable()
    assert other.id == x.id
    assert other != x
    assert other not in {x: 1}


@pytest.mark.parametrize(
    "value, expected_type",
    [
        (3, K),
        (2.5, K),
        (np.float64(1.0), K),
        ([1.0, 2.0], KVector),
        (np.array([1, 2]), KVector),
        (np.array([[1.0, 0.0]]), KMatrix),
    ],
)
def test_to_expression(value, expected_type):
    assert isinstance(to_expression(value), expected_type)


@pytest.mark.parametrize("value", [True, "x", None, np.array(["a"])])
def test_to_expression_rejects_unsupported_input(value):
    with pytest.raises(UnsupportedInputError):
        to_expression(value)


# =============================================================================
# Promotion closure over all kind pairs
# =============================================================================

KINDS = ["K", "Variable", "Monomial", "Polynomial"]


@pytest.fixture
def operands(xyz):
    x, y, z = xyz
    return {
        "K": K(2.0),
        "Variable": x,
        "Monomial": Monomial(3.0, [y], [2]),
        "Polynomial": Polynomial([Monomial(1.0, [z], [3]), Monomial(1.0)]),
    }


def expected_sum_kind(left, right):
    if left == right == "K":
        return K
    if left == right and left in ("Variable", "Monomial"):
        # like terms accumulate into a single monomial
        return Monomial
    return Polynomial


def expected_product_kind(left, right):
    if left == right == "K":
        return K
    if "Polynomial" in (left, right):
        return Polynomial
    return Monomial


@pytest.mark.parametrize("left", KINDS)
@pytest.mark.parametrize("right", KINDS)
def test_plus_closure(operands, left, right):
    a, b = operands[left], operands[right]
    result = a.plus(b)

    assert type(result) is expected_sum_kind(left, right)
    assert result.degree() == max(a.degree(), b.degree())


@pytest.mark.parametrize("left", KINDS)
@pytest.mark.parametrize("right", KINDS)
def test_multiply_closure(operands, left, right):
    a, b = operands[left], operands[right]
    result = a.multiply(b)

    assert type(result) is expected_product_kind(left, right)
    assert result.degree() == a.degree() + b.degree()
