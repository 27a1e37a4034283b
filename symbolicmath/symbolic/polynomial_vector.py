from typing import Sequence, Tuple

from .expression import VectorExpression
from .polynomial import Polynomial


class PolynomialVector(VectorExpression):
    """A column vector of polynomials."""

    _element_type = Polynomial

    def __init__(self, polynomials: Sequence[Polynomial] = ()):
        self._elements = tuple(polynomials)

    @property
    def elements(self) -> Tuple[Polynomial, ...]:
        return self._elements

    def simplify(self) -> "PolynomialVector":
        """Simplify every entry; the result is still a PolynomialVector."""
        self.check()
        return PolynomialVector([p.simplify() for p in self._elements])

    def to_polynomial_vector(self) -> "PolynomialVector":
        return self
