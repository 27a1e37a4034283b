from typing import Sequence, Tuple

from .expression import MatrixExpression
from .monomial import Monomial


class MonomialMatrix(MatrixExpression):
    """A matrix of monomials stored row by row."""

    _element_type = Monomial

    def __init__(self, rows: Sequence[Sequence[Monomial]] = ()):
        self._rows = tuple(tuple(row) for row in rows)

    @property
    def rows(self) -> Tuple[Tuple[Monomial, ...], ...]:
        return self._rows

    def to_monomial_matrix(self) -> "MonomialMatrix":
        return self
