from typing import Sequence, Tuple

from .expression import VectorExpression
from .variable import Variable


class VariableVector(VectorExpression):
    """A column vector of variables.

    Usually obtained from :meth:`Environment.new_variable_vector`.
    """

    _element_type = Variable

    def __init__(self, variables: Sequence[Variable] = ()):
        self._elements = tuple(variables)

    @property
    def elements(self) -> Tuple[Variable, ...]:
        return self._elements

    def ids(self):
        return [v.id for v in self._elements]

    def to_monomial_vector(self):
        from .monomial_vector import MonomialVector

        self.check()
        return MonomialVector([v.to_monomial() for v in self._elements])
