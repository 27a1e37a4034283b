from typing import List, Tuple

import numpy as np

from symbolicmath.errors import EmptyVectorError, StructuralError

from .constant import K
from .expression import VectorExpression, check_dimensions_in_addition


class KVector(VectorExpression):
    """A column vector of constants backed by a 1-D numpy array.

    Args:
        values: Anything ``np.asarray`` turns into a 1-D float array
    """

    _element_type = K

    def __init__(self, values):
        self.values = np.asarray(values, dtype=float)

    @property
    def elements(self) -> Tuple[K, ...]:
        return tuple(K(value) for value in self.values.reshape(-1))

    def check(self) -> None:
        if self.values.ndim != 1:
            raise StructuralError(
                f"KVector values must be one-dimensional; received shape {self.values.shape}"
            )
        if self.values.size == 0:
            raise EmptyVectorError(self)

    def __len__(self):
        return int(self.values.size)

    def dims(self) -> Tuple[int, int]:
        return (int(self.values.size), 1)

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
            return KVector(self.values + other.value)
        if isinstance(other, KVector):
            return KVector(self.values + other.values)
        return super().plus(other)

    def multiply(self, other):
        other = self._prepare_operand(other)
        if isinstance(other, K):
            return KVector(self.values * other.value)
        return super().multiply(other)

    def to_dense(self) -> np.ndarray:
        return self.values.copy()

    def to_monomial_vector(self):
        from .monomial_vector import MonomialVector

        self.check()
        return MonomialVector([K(value).to_monomial() for value in self.values])

    def __eq__(self, other):
        if not isinstance(other, VectorExpression):
            return NotImplemented
        return isinstance(other, KVector) and np.array_equal(self.values, other.values)

    __hash__ = None
