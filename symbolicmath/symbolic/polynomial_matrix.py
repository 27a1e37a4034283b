from typing import Sequence, Tuple

from .expression import MatrixExpression
from .polynomial import Polynomial


class PolynomialMatrix(MatrixExpression):
    """A matrix of polynomials stored row by row."""

    _element_type = Polynomial

    def __init__(self, rows: Sequence[Sequence[Polynomial]] = ()):
        self._rows = tuple(tuple(row) for row in rows)

    @property
    def rows(self) -> Tuple[Tuple[Polynomial, ...], ...]:
        return self._rows

    def simplify(self) -> "PolynomialMatrix":
        """Simplify every entry; the result is still a PolynomialMatrix."""
        self.check()
        return PolynomialMatrix([[p.simplify() for p in row] for row in self._rows])

    def to_polynomial_matrix(self) -> "PolynomialMatrix":
        return self
