from typing import Sequence, Tuple

from .expression import MatrixExpression
from .variable import Variable


class VariableMatrix(MatrixExpression):
    """A matrix of variables stored row by row."""

    _element_type = Variable

    def __init__(self, rows: Sequence[Sequence[Variable]] = ()):
        self._rows = tuple(tuple(row) for row in rows)

    @property
    def rows(self) -> Tuple[Tuple[Variable, ...], ...]:
        return self._rows

    def to_monomial_matrix(self):
        from .monomial_matrix import MonomialMatrix

        self.check()
        return MonomialMatrix([[v.to_monomial() for v in row] for row in self._rows])
