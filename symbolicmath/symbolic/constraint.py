"""Relational constraints between expressions.

A constraint stores a left-hand side, a right-hand side and a
:class:`ConstrSense`. Constraints are usually built from expressions::

    x + y <= 10
    A @ z >= b
    (x - y).eq(0)

Linear constraints can be compiled to the matrix forms solvers consume:

- ``linear_inequality_constraint_representation(wrt)`` -> ``(A, b)`` with
  ``A @ x <= b`` (``>=`` constraints are negated into this form)
- ``linear_equality_constraint_representation(wrt)`` -> ``(C, d)`` with
  ``C @ x == d``

For vector and matrix constraints every entry contributes one row, matrix
entries in row-major order.
"""

from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np

from symbolicmath.errors import (
    EmptyLinearCoeffsError,
    EqualityConstraintRequiredError,
    InequalityConstraintRequiredError,
    InvalidMatrixIndexError,
    InvalidVectorIndexError,
    LinearExpressionRequiredError,
    UnsupportedInputError,
    VariableNotInOrderingError,
)

from .expression import (
    Expression,
    ScalarExpression,
    VectorExpression,
    check_dimensions_in_comparison,
    check_shared_environment,
    to_expression,
    unique_vars,
)
from .sense import ConstrSense
from .variable import Variable


class Constraint:
    """Base class of scalar, vector and matrix constraints.

    Attributes:
        lhs: Left-hand side expression
        rhs: Right-hand side expression
        sense: Relation between the sides
    """

    def __init__(self, lhs: Expression, rhs: Expression, sense: ConstrSense):
        self.lhs = lhs
        self.rhs = rhs
        self.sense = sense

    def check(self) -> None:
        self.lhs.check()
        self.rhs.check()
        ConstrSense.validate(self.sense)
        check_dimensions_in_comparison(self.lhs, self.rhs, self.sense)
        check_shared_environment("Constraint", self.lhs, self.rhs)

    def dims(self) -> Tuple[int, int]:
        if isinstance(self.lhs, ScalarExpression):
            return self.rhs.dims()
        return self.lhs.dims()

    def variables(self) -> List[Variable]:
        self.check()
        return unique_vars(self.lhs.variables() + self.rhs.variables())

    def is_linear(self) -> bool:
        self.check()
        return self.lhs.is_linear() and self.rhs.is_linear()

    def scalar_constraints(self) -> List["ScalarConstraint"]:
        """Return the entrywise scalar constraints, row-major."""
        raise NotImplementedError(
            f"scalar_constraints() not implemented for {self.__class__.__name__}"
        )

    def substitute(self, variable: Variable, expression) -> "Constraint":
        return self.substitute_according_to({variable: expression})

    def substitute_according_to(self, mapping: Mapping) -> "Constraint":
        self.check()
        return self.__class__(
            self.lhs.substitute_according_to(mapping),
            self.rhs.substitute_according_to(mapping),
            self.sense,
        )

    def as_simplified_constraint(self) -> "Constraint":
        """Move every constant to the right-hand side and every variable term to the left.

        The left-hand side becomes ``lhs - c_lhs - (rhs - c_rhs)`` and the right-hand
        side ``c_rhs - c_lhs``, where ``c_*`` are the constant parts of each side.
        Polynomial sides are simplified.
        """
        self.check()
        lhs_constant = self.lhs.constant()
        rhs_constant = self.rhs.constant()

        new_lhs = self.lhs.minus(lhs_constant).minus(self.rhs.minus(rhs_constant))
        if hasattr(new_lhs, "simplify"):
            new_lhs = new_lhs.simplify()
        new_rhs = to_expression(np.asarray(rhs_constant) - np.asarray(lhs_constant))
        return self.__class__(new_lhs, new_rhs, self.sense)

    simplify = as_simplified_constraint

    # ==================== LINEAR FORMS ====================

    def _require_linear(self, operation: str):
        self.check()
        for side in (self.lhs, self.rhs):
            if not side.is_linear():
                raise LinearExpressionRequiredError(operation, side)

    def _ordering(self, wrt: Optional[Sequence[Variable]], operation: str) -> List[Variable]:
        variables = self.variables()
        wrt = variables if wrt is None else list(wrt)
        for v in wrt:
            if not isinstance(v, Variable):
                raise UnsupportedInputError(operation, v)
        if len(wrt) == 0:
            raise EmptyLinearCoeffsError(self)

        positions = set(wrt)
        for v in variables:
            if v not in positions:
                raise VariableNotInOrderingError(v, operation)
        return wrt

    def _linear_rows(self, wrt, operation: str):
        self._require_linear(operation)
        wrt = self._ordering(wrt, operation)
        rows = [constraint._affine_row(wrt) for constraint in self.scalar_constraints()]
        return self._assemble(rows)

    def _assemble(self, rows):
        A = np.vstack([a for a, _ in rows])
        b = np.array([b for _, b in rows], dtype=float)
        return A, b

    def linear_inequality_constraint_representation(
        self, wrt: Optional[Sequence[Variable]] = None
    ):
        """Return ``(A, b)`` such that the constraint reads ``A @ x <= b``.

        Args:
            wrt: Variable ordering of the columns of ``A``. Defaults to
                ``self.variables()``.

        Raises:
            LinearExpressionRequiredError: If either side is nonlinear
            InequalityConstraintRequiredError: If the constraint is an equality
            VariableNotInOrderingError: If the constraint uses a variable missing from ``wrt``
        """
        operation = "LinearInequalityConstraintRepresentation"
        self._require_linear(operation)
        if self.sense == ConstrSense.EQUAL:
            raise InequalityConstraintRequiredError(operation)
        return self._linear_rows(wrt, operation)

    def linear_equality_constraint_representation(
        self, wrt: Optional[Sequence[Variable]] = None
    ):
        """Return ``(C, d)`` such that the constraint reads ``C @ x == d``.

        Raises:
            LinearExpressionRequiredError: If either side is nonlinear
            EqualityConstraintRequiredError: If the constraint is an inequality
            VariableNotInOrderingError: If the constraint uses a variable missing from ``wrt``
        """
        operation = "LinearEqualityConstraintRepresentation"
        self._require_linear(operation)
        if self.sense != ConstrSense.EQUAL:
            raise EqualityConstraintRequiredError(operation)
        return self._linear_rows(wrt, operation)

    # ==================== IMPLICATION ====================

    def implies_this_is_also_satisfied(self, other: "Constraint") -> bool:
        """Return True if every point satisfying this constraint also satisfies ``other``.

        Each entry of ``other`` must be implied by some entry of this constraint.
        Linear entries are compared through their normalized ``(a, b)`` rows;
        nonlinear entries only imply a constraint that simplifies to the same form.
        The check is sound but incomplete: False means "not shown", not "false".
        """
        self.check()
        if not isinstance(other, Constraint):
            raise UnsupportedInputError("implies_this_is_also_satisfied", other)
        other.check()

        mine = self.scalar_constraints()
        return all(
            any(_scalar_implies(premise, target) for premise in mine)
            for target in other.scalar_constraints()
        )

    def __eq__(self, other):
        if not isinstance(other, Constraint):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.sense == other.sense
            and self.lhs == other.lhs
            and self.rhs == other.rhs
        )

    __hash__ = None

    def __str__(self):
        return f"{self.lhs} {self.sense} {self.rhs}"

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"


class ScalarConstraint(Constraint):
    """A constraint between two scalar expressions."""

    def scalar_constraints(self) -> List["ScalarConstraint"]:
        return [self]

    def _assemble(self, rows):
        a, b = rows[0]
        return a, b

    def _affine_row(self, wrt: Sequence[Variable]) -> Tuple[np.ndarray, float]:
        return _normalized_row(self, list(wrt))


def _entry(expression: Expression, row: int, column: int) -> ScalarExpression:
    if isinstance(expression, ScalarExpression):
        return expression
    if isinstance(expression, VectorExpression):
        return expression.elements[row]
    return expression.rows[row][column]


class VectorConstraint(Constraint):
    """An entrywise constraint between vectors, or a vector and a broadcast scalar."""

    def __len__(self):
        return self.dims()[0]

    def at_vec(self, index: int) -> ScalarConstraint:
        self.check()
        if not 0 <= index < len(self):
            raise InvalidVectorIndexError(index, self)
        return ScalarConstraint(_entry(self.lhs, index, 0), _entry(self.rhs, index, 0), self.sense)

    def scalar_constraints(self) -> List[ScalarConstraint]:
        self.check()
        return [self.at_vec(ii) for ii in range(len(self))]


class MatrixConstraint(Constraint):
    """An entrywise constraint between matrices, or a matrix and a broadcast scalar."""

    def at(self, row: int, column: int) -> ScalarConstraint:
        self.check()
        n_rows, n_cols = self.dims()
        if not (0 <= row < n_rows and 0 <= column < n_cols):
            raise InvalidMatrixIndexError(row, column, self)
        return ScalarConstraint(
            _entry(self.lhs, row, column), _entry(self.rhs, row, column), self.sense
        )

    def scalar_constraints(self) -> List[ScalarConstraint]:
        self.check()
        n_rows, n_cols = self.dims()
        return [self.at(ii, jj) for ii in range(n_rows) for jj in range(n_cols)]


def _normalized_row(constraint: ScalarConstraint, wrt: List[Variable]):
    """Return ``(a, b)`` with the constraint written as ``a @ x <= b`` (or ``== b``)."""
    if wrt:
        a = constraint.lhs.minus(constraint.rhs).linear_coeff(wrt)
    else:
        a = np.zeros(0)
    b = float(constraint.rhs.constant() - constraint.lhs.constant())
    if constraint.sense == ConstrSense.GREATER_THAN_EQUAL:
        return -a, -b
    return a, b


def _scalar_implies(premise: ScalarConstraint, target: ScalarConstraint) -> bool:
    if not (premise.is_linear() and target.is_linear()):
        return premise.sense == target.sense and (
            premise.as_simplified_constraint() == target.as_simplified_constraint()
        )

    wrt = unique_vars(premise.variables() + target.variables())
    a1, b1 = _normalized_row(premise, wrt)
    a2, b2 = _normalized_row(target, wrt)
    premise_is_equality = premise.sense == ConstrSense.EQUAL
    target_is_equality = target.sense == ConstrSense.EQUAL

    # A target without variables holds everywhere or nowhere.
    if not np.any(a2):
        if target_is_equality:
            return bool(np.isclose(b2, 0.0))
        return b2 >= 0.0 or bool(np.isclose(b2, 0.0))
    if not np.any(a1):
        return False

    pivot = int(np.argmax(np.abs(a1)))
    scale = a2[pivot] / a1[pivot]
    if not np.allclose(a2, scale * a1):
        return False

    if premise_is_equality:
        if target_is_equality:
            return bool(np.isclose(scale * b1, b2))
        return scale * b1 <= b2 or bool(np.isclose(scale * b1, b2))
    if target_is_equality:
        return False
    return scale > 0 and (scale * b1 <= b2 or bool(np.isclose(scale * b1, b2)))
