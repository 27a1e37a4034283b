import jax
import jax.numpy as jnp
import numpy as np
import pytest

from symbolicmath import Environment, K, KVector
from symbolicmath.lowerers.jax import JaxLowerer, lower_to_jax


@pytest.fixture
def xy():
    env = Environment("jax")
    return env.new_continuous_variable(), env.new_continuous_variable()


def test_constant(xy):
    x, y = xy
    f = lower_to_jax(K(2.5), [x, y])
    assert float(f(jnp.zeros(2))) == 2.5


def test_polynomial_value(xy):
    x, y = xy
    p = 3 * x**2 * y + 2 * y + 1
    f = lower_to_jax(p, [x, y])

    # 3 * 2^2 * 3 + 2 * 3 + 1
    np.testing.assert_allclose(f(jnp.array([2.0, 3.0])), 43.0, rtol=1e-6)


def test_gradient_matches_symbolic_derivative(xy):
    x, y = xy
    p = 3 * x**2 * y + 2 * y + 1
    point = jnp.array([1.5, -2.0])

    grad = jax.grad(lower_to_jax(p, [x, y]))(point)
    dfdx = lower_to_jax(p.derivative_wrt(x), [x, y])(point)
    dfdy = lower_to_jax(p.derivative_wrt(y), [x, y])(point)

    np.testing.assert_allclose(grad, [dfdx, dfdy], rtol=1e-5)


def test_vector_expression(xy):
    x, y = xy
    f = lower_to_jax(KVector([1.0, 2.0]) * x + y, [x, y])

    np.testing.assert_allclose(f(jnp.array([2.0, 1.0])), [3.0, 5.0])


def test_constraint_residuals(xy):
    x, y = xy
    point = jnp.array([0.2, 0.3])

    le = lower_to_jax(x + y <= 1, [x, y])
    np.testing.assert_allclose(le(point), -0.5, rtol=1e-6)

    ge = lower_to_jax(x >= 1, [x, y])
    np.testing.assert_allclose(ge(point), 0.8, rtol=1e-6)


def test_variable_outside_ordering(xy):
    x, y = xy
    lowerer = JaxLowerer([x])
    with pytest.raises(ValueError, match="not part of the lowering ordering"):
        lowerer.lower(x + y)
