import math
import warnings
from typing import Any, Callable, Dict, Iterable, List, Sequence, Type

import cvxpy as cp
import numpy as np

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
    VarType,
    VectorConstraint,
)
from symbolicmath.symbolic.constraint import Constraint
from symbolicmath.symbolic.expression import unique_vars
from symbolicmath.symbolic.sense import ConstrSense

_CVXPY_VISITORS: Dict[Type, Callable] = {}


def visitor(expr_cls: Type):
    def register(fn: Callable[[Any, Any], cp.Expression]):
        _CVXPY_VISITORS[expr_cls] = fn
        return fn

    return register


def dispatch(lowerer: Any, expr):
    fn = _CVXPY_VISITORS.get(type(expr))
    if fn is None:
        raise NotImplementedError(
            f"{lowerer.__class__.__name__!r} has no visitor for {type(expr).__name__}"
        )
    return fn(lowerer, expr)


def _as_1d(expr: cp.Expression) -> cp.Expression:
    if expr.ndim == 0:
        return cp.reshape(expr, (1,), order="C")
    return expr


def _as_block(expr: cp.Expression) -> cp.Expression:
    if expr.ndim == 0:
        return cp.reshape(expr, (1, 1), order="C")
    return expr


class CvxpyLowerer:
    """
    Lowers symbolic expressions and constraints to CVXPy.

    CVXPy variables must be created externally (see :func:`make_variable_map`) and
    passed in during initialization, keyed by the symbolic :class:`Variable`.
    """

    def __init__(self, variable_map: Dict[Variable, cp.Expression] = None):
        """
        Initialize the CVXPy lowerer.

        Args:
            variable_map: Dictionary mapping symbolic variables to scalar CVXPy
                expressions.
        """
        self.variable_map = variable_map or {}

    def lower(self, expr) -> cp.Expression:
        """Lower a symbolic expression or constraint to CVXPy."""
        return dispatch(self, expr)

    def register_variable(self, variable: Variable, cvx_expr: cp.Expression):
        """Register a CVXPy variable/expression for use in lowering."""
        self.variable_map[variable] = cvx_expr

    @visitor(K)
    def visit_constant(self, node: K) -> cp.Expression:
        return cp.Constant(node.value)

    @visitor(Variable)
    def visit_variable(self, node: Variable) -> cp.Expression:
        if node not in self.variable_map:
            raise ValueError(f"Variable '{node.name}' not found in variable_map.")
        return self.variable_map[node]

    @visitor(Monomial)
    def visit_monomial(self, node: Monomial) -> cp.Expression:
        if node.is_constant():
            return cp.Constant(node.coefficient)
        if len(node.variable_factors) > 1:
            raise NotImplementedError(
                "Products of distinct variables are not DCP-compliant in CVXPy. "
                f"Cannot lower the monomial {node}; linearize it or handle it in the "
                "JAX layer instead."
            )
        base = self.lower(node.variable_factors[0])
        exponent = node.exponents[0]
        term = base if exponent == 1 else cp.power(base, exponent)
        return node.coefficient * term

    @visitor(Polynomial)
    def visit_polynomial(self, node: Polynomial) -> cp.Expression:
        terms = [self.lower(m) for m in node.monomials]
        result = terms[0]
        for term in terms[1:]:
            result = result + term
        return result

    @visitor(KVector)
    def visit_kvector(self, node: KVector) -> cp.Expression:
        return cp.Constant(node.values)

    @visitor(KMatrix)
    def visit_kmatrix(self, node: KMatrix) -> cp.Expression:
        return cp.Constant(node.values)

    @visitor(VariableVector)
    @visitor(MonomialVector)
    @visitor(PolynomialVector)
    def visit_vector(self, node) -> cp.Expression:
        return cp.hstack([_as_1d(self.lower(element)) for element in node.elements])

    @visitor(VariableMatrix)
    @visitor(MonomialMatrix)
    @visitor(PolynomialMatrix)
    def visit_matrix(self, node) -> cp.Expression:
        return cp.bmat([[_as_block(self.lower(element)) for element in row] for row in node.rows])

    @visitor(ScalarConstraint)
    @visitor(VectorConstraint)
    @visitor(MatrixConstraint)
    def visit_constraint(self, node: Constraint) -> cp.Constraint:
        left = self.lower(node.lhs)
        right = self.lower(node.rhs)
        if node.sense == ConstrSense.EQUAL:
            return left == right
        if node.sense == ConstrSense.LESS_THAN_EQUAL:
            return left <= right
        return left >= right


def make_variable_map(variables: Iterable[Variable]) -> Dict[Variable, cp.Variable]:
    """Create one scalar CVXPy variable per symbolic variable.

    Binary variables become boolean CVXPy variables and integer variables become
    integer ones. Bounds are not attached; see :func:`bound_constraints`.
    """
    variable_map = {}
    for v in unique_vars(variables):
        variable_map[v] = cp.Variable(
            name=v.name,
            integer=v.var_type == VarType.INTEGER,
            boolean=v.var_type == VarType.BINARY,
        )
    return variable_map


def bound_constraints(variable_map: Dict[Variable, cp.Expression]) -> List[cp.Constraint]:
    """Return ``lower <= x`` and ``x <= upper`` constraints for every finite bound."""
    constraints = []
    for v, cvx_var in variable_map.items():
        if v.var_type == VarType.BINARY:
            continue
        if math.isfinite(v.lower):
            constraints.append(cvx_var >= v.lower)
        if math.isfinite(v.upper):
            constraints.append(cvx_var <= v.upper)
    return constraints


def lower_linear_constraint(
    constraint: Constraint, x: cp.Expression, wrt: Sequence[Variable]
) -> cp.Constraint:
    """Lower a linear constraint through its matrix form.

    Inequalities become ``A @ x <= b`` and equalities ``C @ x == d``, where ``x`` is a
    CVXPy vector whose entries follow the ordering ``wrt``.
    """
    if constraint.sense == ConstrSense.EQUAL:
        A, b = constraint.linear_equality_constraint_representation(wrt)
    else:
        A, b = constraint.linear_inequality_constraint_representation(wrt)

    A = np.atleast_2d(A)
    b = np.atleast_1d(b)
    zero_rows = np.flatnonzero(~A.any(axis=1))
    if zero_rows.size > 0:
        warnings.warn(
            f"constraint {constraint} has {zero_rows.size} row(s) without variables "
            f"(rows {zero_rows.tolist()}); they reduce to constant comparisons",
            RuntimeWarning,
        )

    if constraint.sense == ConstrSense.EQUAL:
        return A @ x == b
    return A @ x <= b


def lower_to_cvxpy(expr, variable_map: Dict[Variable, cp.Expression] = None) -> cp.Expression:
    """
    Convenience function to lower a single expression or constraint to CVXPy.

    Args:
        expr: Expression or constraint to lower
        variable_map: Dictionary mapping symbolic variables to CVXPy expressions

    Returns:
        CVXPy expression or constraint

    Example:
        >>> import cvxpy as cp
        >>> from symbolicmath import Environment
        >>>
        >>> env = Environment()
        >>> x = env.new_continuous_variable()
        >>> x_var = cp.Variable(name="x")
        >>>
        >>> cvx_expr = lower_to_cvxpy(3 * x + 1, {x: x_var})
    """
    lowerer = CvxpyLowerer(variable_map)
    return lowerer.lower(expr)
