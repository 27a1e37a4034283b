"""Choose the tightest concrete container for a collection of scalar expressions.

Collection arithmetic works entrywise on plain lists of scalars and then hands
the result to :func:`concretize_vector`, :func:`concretize_matrix` or
:func:`concretize_grid`, which pick the narrowest kind able to hold every entry:

- all constants -> ``KVector`` / ``KMatrix``
- all variables -> ``VariableVector`` / ``VariableMatrix``
- any polynomial -> ``PolynomialVector`` / ``PolynomialMatrix``
- anything else (monomials, or a mix of constants, variables and monomials)
  -> ``MonomialVector`` / ``MonomialMatrix``
"""

from enum import IntEnum
from typing import Iterable, List, Sequence

from symbolicmath.errors import (
    EmptyMatrixError,
    EmptyVectorError,
    MatrixColumnMismatchError,
    UnsupportedInputError,
)

from .constant import K
from .constant_matrix import KMatrix
from .constant_vector import KVector
from .expression import Expression, MatrixExpression, ScalarExpression, VectorExpression
from .monomial import Monomial
from .monomial_matrix import MonomialMatrix
from .monomial_vector import MonomialVector
from .polynomial import Polynomial
from .polynomial_matrix import PolynomialMatrix
from .polynomial_vector import PolynomialVector
from .variable import Variable
from .variable_matrix import VariableMatrix
from .variable_vector import VariableVector


class ExpressionKind(IntEnum):
    """Position of a scalar kind in the lattice K < Variable < Monomial < Polynomial."""

    CONSTANT = 0
    VARIABLE = 1
    MONOMIAL = 2
    POLYNOMIAL = 3


def classify(expression: ScalarExpression) -> ExpressionKind:
    if isinstance(expression, K):
        return ExpressionKind.CONSTANT
    if isinstance(expression, Variable):
        return ExpressionKind.VARIABLE
    if isinstance(expression, Monomial):
        return ExpressionKind.MONOMIAL
    if isinstance(expression, Polynomial):
        return ExpressionKind.POLYNOMIAL
    raise UnsupportedInputError("classify", expression)


def tightest_kind(elements: Iterable[ScalarExpression]) -> ExpressionKind:
    kinds = {classify(element) for element in elements}
    if ExpressionKind.POLYNOMIAL in kinds:
        return ExpressionKind.POLYNOMIAL
    if kinds == {ExpressionKind.CONSTANT}:
        return ExpressionKind.CONSTANT
    if kinds == {ExpressionKind.VARIABLE}:
        return ExpressionKind.VARIABLE
    return ExpressionKind.MONOMIAL


def concretize_vector(elements: Sequence[ScalarExpression]) -> VectorExpression:
    """Wrap scalar entries in the tightest vector kind."""
    elements = list(elements)
    if not elements:
        raise EmptyVectorError(elements)

    kind = tightest_kind(elements)
    if kind == ExpressionKind.CONSTANT:
        return KVector([element.value for element in elements])
    if kind == ExpressionKind.VARIABLE:
        return VariableVector(elements)
    if kind == ExpressionKind.MONOMIAL:
        return MonomialVector([element.to_monomial() for element in elements])
    return PolynomialVector([element.to_polynomial() for element in elements])


def concretize_matrix(rows: Sequence[Sequence[ScalarExpression]]) -> MatrixExpression:
    """Wrap a rectangular grid of scalar entries in the tightest matrix kind."""
    rows = [list(row) for row in rows]
    if not rows or not rows[0]:
        raise EmptyMatrixError(rows)
    for ii, row in enumerate(rows):
        if len(row) != len(rows[0]):
            raise MatrixColumnMismatchError(len(rows[0]), len(row), ii)

    kind = tightest_kind(element for row in rows for element in row)
    if kind == ExpressionKind.CONSTANT:
        return KMatrix([[element.value for element in row] for row in rows])
    if kind == ExpressionKind.VARIABLE:
        return VariableMatrix(rows)
    if kind == ExpressionKind.MONOMIAL:
        return MonomialMatrix([[element.to_monomial() for element in row] for row in rows])
    return PolynomialMatrix([[element.to_polynomial() for element in row] for row in rows])


def concretize_grid(grid: Sequence[Sequence[ScalarExpression]]) -> Expression:
    """Wrap a grid in a scalar (1x1), a vector (one column) or a matrix."""
    if len(grid) == 1 and len(grid[0]) == 1:
        return grid[0][0]
    if all(len(row) == 1 for row in grid):
        return concretize_vector([row[0] for row in grid])
    return concretize_matrix(grid)


def grid_of(expression: Expression) -> List[List[ScalarExpression]]:
    """View any expression as a row-major grid of scalars."""
    if isinstance(expression, ScalarExpression):
        return [[expression]]
    if isinstance(expression, VectorExpression):
        return [[element] for element in expression.elements]
    if isinstance(expression, MatrixExpression):
        return [list(row) for row in expression.rows]
    raise UnsupportedInputError("grid_of", expression)


def multiply_grids(
    left: Sequence[Sequence[ScalarExpression]], right: Sequence[Sequence[ScalarExpression]]
) -> List[List[ScalarExpression]]:
    """Matrix product of two grids whose inner dimensions agree.

    Each entry is accumulated from its first product term, so a single term
    keeps its kind (e.g. a monomial) and longer sums become polynomials.
    """
    n_inner = len(right)
    product = []
    for left_row in left:
        row = []
        for jj in range(len(right[0])):
            entry = left_row[0].multiply(right[0][jj])
            for kk in range(1, n_inner):
                entry = entry.plus(left_row[kk].multiply(right[kk][jj]))
            row.append(entry)
        product.append(row)
    return product
