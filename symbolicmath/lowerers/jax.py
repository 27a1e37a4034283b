from typing import Any, Callable, Dict, Sequence, Type

import jax.numpy as jnp

from symbolicmath.symbolic import (
    K,
    KMatrix,
    KVector,
    MatrixConstraint,
    Monomial,
    MonomialMatrix,
    MonomialVector,
    Polynomial,
    PolynomialMatrix,
    PolynomialVector,
    ScalarConstraint,
    Variable,
    VariableMatrix,
    VariableVector,
    VectorConstraint,
)
from symbolicmath.symbolic.expression import unique_vars
from symbolicmath.symbolic.sense import ConstrSense

_JAX_VISITORS: Dict[Type, Callable] = {}


def visitor(expr_cls: Type):
    def register(fn: Callable[[Any, Any], Callable]):
        _JAX_VISITORS[expr_cls] = fn
        return fn

    return register


def dispatch(lowerer: Any, expr):
    fn = _JAX_VISITORS.get(type(expr))
    if fn is None:
        raise NotImplementedError(
            f"{lowerer.__class__.__name__!r} has no visitor for {type(expr).__name__}"
        )
    return fn(lowerer, expr)


class JaxLowerer:
    """Lowers symbolic expressions to JAX functions of a flat decision vector.

    Every lowered function takes a single array ``x`` whose entries follow the
    variable ordering ``wrt``. Constraints lower to residual functions that are
    non-positive (inequalities) or zero (equalities) when the constraint holds,
    which makes them usable with ``jax.grad``/``jax.jacfwd`` in nonlinear solvers.

    Args:
        wrt: Variable ordering of the entries of ``x``
    """

    def __init__(self, wrt: Sequence[Variable]):
        self.wrt = unique_vars(wrt)
        self._positions = {v: ii for ii, v in enumerate(self.wrt)}

    def lower(self, expr) -> Callable:
        return dispatch(self, expr)

    @visitor(K)
    def visit_constant(self, node: K):
        # capture the constant value once
        value = jnp.array(node.value)
        return lambda x: value

    @visitor(Variable)
    def visit_variable(self, node: Variable):
        if node not in self._positions:
            raise ValueError(f"Variable '{node.name}' is not part of the lowering ordering.")
        index = self._positions[node]
        return lambda x: x[index]

    @visitor(Monomial)
    def visit_monomial(self, node: Monomial):
        coefficient = node.coefficient
        factors = [(self.lower(v), exponent) for v, exponent in zip(node.variable_factors, node.exponents)]

        def monomial(x):
            result = jnp.asarray(coefficient)
            for fn, exponent in factors:
                result = result * fn(x) ** exponent
            return result

        return monomial

    @visitor(Polynomial)
    def visit_polynomial(self, node: Polynomial):
        terms = [self.lower(m) for m in node.monomials]

        def polynomial(x):
            result = terms[0](x)
            for term in terms[1:]:
                result = result + term(x)
            return result

        return polynomial

    @visitor(KVector)
    @visitor(KMatrix)
    def visit_constant_array(self, node):
        value = jnp.array(node.values)
        return lambda x: value

    @visitor(VariableVector)
    @visitor(MonomialVector)
    @visitor(PolynomialVector)
    def visit_vector(self, node):
        fns = [self.lower(element) for element in node.elements]
        return lambda x: jnp.stack([fn(x) for fn in fns])

    @visitor(VariableMatrix)
    @visitor(MonomialMatrix)
    @visitor(PolynomialMatrix)
    def visit_matrix(self, node):
        fns = [[self.lower(element) for element in row] for row in node.rows]
        return lambda x: jnp.stack([jnp.stack([fn(x) for fn in row]) for row in fns])

    @visitor(ScalarConstraint)
    @visitor(VectorConstraint)
    @visitor(MatrixConstraint)
    def visit_constraint(self, node):
        lhs = self.lower(node.lhs)
        rhs = self.lower(node.rhs)
        if node.sense == ConstrSense.GREATER_THAN_EQUAL:
            return lambda x: rhs(x) - lhs(x)
        return lambda x: lhs(x) - rhs(x)


def lower_to_jax(expr, wrt: Sequence[Variable]) -> Callable:
    """Lower an expression or constraint to a function of the vector ``x`` ordered by ``wrt``."""
    return JaxLowerer(wrt).lower(expr)
