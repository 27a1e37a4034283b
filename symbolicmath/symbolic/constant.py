import numbers
from typing import List

import numpy as np

from symbolicmath.errors import EmptyLinearCoeffsError, UnsupportedInputError

from .expression import ScalarExpression, prepare_substitution_map


class K(ScalarExpression):
    """A real constant.

    ``K`` is the bottom of the scalar lattice: K + K and K * K stay constant, any
    other scalar operand is handled by that operand (``K(2) + x`` is evaluated as
    ``x + K(2)``), and vector or matrix operands are broadcast entrywise.

    Example:
        K(2.0) + K(3.0)  # K(5)
        K(2.0) * x       # Monomial 2 x
    """

    def __init__(self, value: float = 0.0):
        if isinstance(value, K):
            value = value.value
        self.value = float(value)

    def check(self) -> None:
        return None

    def variables(self) -> List:
        return []

    def constant(self) -> float:
        return self.value

    def degree(self) -> int:
        return 0

    def plus(self, other):
        other = self._prepare_operand(other)
        if isinstance(other, K):
            return K(self.value + other.value)
        if isinstance(other, ScalarExpression):
            return other.plus(self)
        return self._broadcast(other, K.plus)

    def multiply(self, other):
        other = self._prepare_operand(other)
        if isinstance(other, K):
            return K(self.value * other.value)
        if isinstance(other, ScalarExpression):
            return other.multiply(self)
        return self._broadcast(other, K.multiply)

    def derivative_wrt(self, variable) -> "K":
        from .variable import Variable

        if not isinstance(variable, Variable):
            raise UnsupportedInputError("K.derivative_wrt", variable)
        return K(0.0)

    def substitute_according_to(self, mapping) -> "K":
        prepare_substitution_map(mapping, "K.substitute")
        return self

    def linear_coeff(self, wrt=None) -> np.ndarray:
        wrt = [] if wrt is None else list(wrt)
        if len(wrt) == 0:
            raise EmptyLinearCoeffsError(self)
        return np.zeros(len(wrt))

    def to_monomial(self):
        from .monomial import Monomial

        return Monomial(self.value)

    def to_polynomial(self):
        from .polynomial import Polynomial

        return Polynomial([self.to_monomial()])

    def __float__(self):
        return self.value

    def __eq__(self, other):
        if isinstance(other, K):
            return self.value == other.value
        if isinstance(other, numbers.Real) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return f"{self.value:g}"
