from typing import Sequence, Tuple

from .expression import VectorExpression
from .monomial import Monomial


class MonomialVector(VectorExpression):
    """A column vector of monomials."""

    _element_type = Monomial

    def __init__(self, monomials: Sequence[Monomial] = ()):
        self._elements = tuple(monomials)

    @property
    def elements(self) -> Tuple[Monomial, ...]:
        return self._elements

    def to_monomial_vector(self) -> "MonomialVector":
        return self
