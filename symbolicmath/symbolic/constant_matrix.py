from typing import List, Tuple

import numpy as np

from symbolicmath.errors import EmptyMatrixError, StructuralError

from .constant import K
from .constant_vector import KVector
from .expression import (
    MatrixExpression,
    check_dimensions_in_addition,
    check_dimensions_in_multiplication,
)


def _from_dense(values: np.ndarray):
    """Wrap a dense product in the tightest constant kind."""
    n_rows, n_cols = values.shape
    if (n_rows, n_cols) == (1, 1):
        return K(values[0, 0])
    if n_cols == 1:
        return KVector(values[:, 0])
    return KMatrix(values)


class KMatrix(MatrixExpression):
    """A matrix of constants backed by a 2-D numpy array.

    Products of two constant operands are evaluated with numpy directly.

    Args:
        values: Anything ``np.asarray`` turns into a 2-D float array
    """

    _element_type = K

    def __init__(self, values):
        self.values = np.asarray(values, dtype=float)

    @property
    def rows(self) -> Tuple[Tuple[K, ...], ...]:
        return tuple(tuple(K(value) for value in row) for row in np.atleast_2d(self.values))

    def check(self) -> None:
        if self.values.ndim != 2:
            raise StructuralError(
                f"KMatrix values must be two-dimensional; received shape {self.values.shape}"
            )
        if self.values.size == 0:
            raise EmptyMatrixError(self)

    def dims(self) -> Tuple[int, int]:
        n_rows, n_cols = np.atleast_2d(self.values).shape
        return (int(n_rows), int(n_cols))

    def variables(self) -> List:
        return []

    def constant(self) -> np.ndarray:
        return self.values.copy()

    def degree(self) -> int:
        return 0

    def plus(self, other):
        other = self._prepare_operand(other)
        check_dimensions_in_addition(self, other)
        if isinstance(other, K):
            return KMatrix(self.values + other.value)
        if isinstance(other, KMatrix):
            return KMatrix(self.values + other.values)
        return super().plus(other)

    def multiply(self, other):
        other = self._prepare_operand(other)
        if isinstance(other, K):
            return KMatrix(self.values * other.value)
        if isinstance(other, (KMatrix, KVector)):
            check_dimensions_in_multiplication(self, other)
            right = other.values if isinstance(other, KMatrix) else other.values.reshape(-1, 1)
            return _from_dense(self.values @ right)
        return super().multiply(other)

    def transpose(self) -> "KMatrix":
        self.check()
        return KMatrix(self.values.T)

    def to_dense(self) -> np.ndarray:
        return self.values.copy()

    def to_monomial_matrix(self):
        from .monomial_matrix import MonomialMatrix

        self.check()
        return MonomialMatrix([[K(value).to_monomial() for value in row] for row in self.values])

    def __eq__(self, other):
        if not isinstance(other, MatrixExpression):
            return NotImplemented
        return isinstance(other, KMatrix) and np.array_equal(self.values, other.values)

    __hash__ = None
