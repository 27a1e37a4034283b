import math
from enum import Enum
from typing import List, Optional

import numpy as np

from symbolicmath.errors import StructuralError, UnsupportedInputError

from .expression import ScalarExpression, prepare_substitution_map


class VarType(Enum):
    """Domain of a decision variable."""

    CONTINUOUS = "C"
    BINARY = "B"
    INTEGER = "I"


class Variable(ScalarExpression):
    """A decision variable identified by its ID.

    Variables are normally created through an :class:`~symbolicmath.Environment`,
    which allocates consecutive IDs. Two variables are equal (and hash equally)
    exactly when they share an ID and an owning environment, so variables can key dictionaries such as
    substitution maps or solver variable maps.

    Args:
        id: Unique identifier within the owning environment
        lower: Lower bound. Defaults to -inf.
        upper: Upper bound. Defaults to +inf.
        var_type: Domain of the variable. Defaults to ``VarType.CONTINUOUS``.
        name: Display name. Defaults to ``"x_<id>"``.
        environment: Environment that allocated the variable, or None for a free
            standing variable
    """

    def __init__(
        self,
        id: int,
        lower: float = -math.inf,
        upper: float = math.inf,
        var_type: VarType = VarType.CONTINUOUS,
        name: Optional[str] = None,
        environment=None,
    ):
        self.id = int(id)
        self.environment = environment
        self.lower = float(lower)
        self.upper = float(upper)
        self.var_type = var_type
        self.name = name if name is not None else f"x_{self.id}"

    def check(self) -> None:
        if not isinstance(self.var_type, VarType):
            raise StructuralError(f"variable {self.name} has unexpected type {self.var_type!r}")
        if math.isnan(self.lower) or math.isnan(self.upper):
            raise StructuralError(f"variable {self.name} has a NaN bound")
        if self.lower > self.upper:
            raise StructuralError(
                f"lower bound ({self.lower}) of variable {self.name} exceeds its upper bound "
                f"({self.upper})"
            )

    def variables(self) -> List["Variable"]:
        return [self]

    def constant(self) -> float:
        return 0.0

    def degree(self) -> int:
        return 1

    def plus(self, other):
        from .constant import K
        from .monomial import Monomial

        other = self._prepare_operand(other)
        if not isinstance(other, ScalarExpression):
            return self._broadcast(other, Variable.plus)

        if isinstance(other, K):
            return self.to_polynomial().plus(other)
        if isinstance(other, Variable):
            if other == self:
                return Monomial(2.0, [self], [1])
            return self.to_polynomial().plus(other)
        return self.to_monomial().plus(other)

    def multiply(self, other):
        from .constant import K
        from .monomial import Monomial

        other = self._prepare_operand(other)
        if not isinstance(other, ScalarExpression):
            return self._broadcast(other, Variable.multiply)

        if isinstance(other, K):
            return Monomial(other.value, [self], [1])
        return self.to_monomial().multiply(other)

    def derivative_wrt(self, variable):
        from .constant import K

        if not isinstance(variable, Variable):
            raise UnsupportedInputError("Variable.derivative_wrt", variable)
        return K(1.0) if variable == self else K(0.0)

    def substitute_according_to(self, mapping) -> ScalarExpression:
        mapping = prepare_substitution_map(mapping, "Variable.substitute")
        return mapping.get(self, self)

    def linear_coeff(self, wrt=None) -> np.ndarray:
        wrt = [self] if wrt is None else list(wrt)
        coeffs = np.zeros(len(wrt))
        for ii, v in enumerate(wrt):
            if v == self:
                coeffs[ii] = 1.0
        return coeffs

    def to_monomial(self):
        from .monomial import Monomial

        return Monomial(1.0, [self], [1])

    def to_polynomial(self):
        from .polynomial import Polynomial

        return Polynomial([self.to_monomial()])

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return self.id == other.id and self.environment is other.environment

    def __hash__(self):
        return hash(("Variable", self.id))

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Variable({self.name!r}, id={self.id})"
