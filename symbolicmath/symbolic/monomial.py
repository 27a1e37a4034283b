import numbers
import warnings
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from symbolicmath.errors import (
    EmptyLinearCoeffsError,
    MixedEnvironmentError,
    NonlinearTermsIgnoredWarning,
    StructuralError,
    UnsupportedInputError,
)

from .expression import ScalarExpression, prepare_substitution_map, unique_vars


class Monomial(ScalarExpression):
    """A product ``coefficient * v1^e1 * ... * vk^ek`` of distinct variables.

    The factors are kept as an ordered sequence of ``(variable, exponent)`` pairs
    in which every variable appears at most once and every exponent is a positive
    integer. A monomial without factors is a constant.

    Args:
        coefficient: Scalar multiplier. Defaults to 1.0.
        variable_factors: The variables of the product
        exponents: Exponent of each variable. Defaults to 1 for every variable.

    Example:
        Monomial(3.0, [x, y], [2, 1])  # 3 x^2 y
        Monomial(5.0)                  # the constant 5
    """

    def __init__(
        self,
        coefficient: float = 1.0,
        variable_factors: Sequence = (),
        exponents: Optional[Sequence[int]] = None,
    ):
        self.coefficient = float(coefficient)
        self._variable_factors = tuple(variable_factors)
        if exponents is None:
            exponents = (1,) * len(self._variable_factors)
        self._exponents = tuple(exponents)

    @classmethod
    def from_factors(cls, coefficient: float, factors: Mapping) -> "Monomial":
        """Build a monomial from an ordered ``{variable: exponent}`` mapping."""
        return cls(coefficient, list(factors.keys()), list(factors.values()))

    @property
    def variable_factors(self) -> Tuple:
        return self._variable_factors

    @property
    def exponents(self) -> Tuple[int, ...]:
        return self._exponents

    @property
    def factors(self) -> Dict:
        """Ordered ``{variable: exponent}`` view of the factors."""
        return dict(zip(self._variable_factors, self._exponents))

    def check(self) -> None:
        from .variable import Variable

        if len(self._variable_factors) != len(self._exponents):
            raise StructuralError(
                f"the number of exponents ({len(self._exponents)}) does not match the number "
                f"of variables ({len(self._variable_factors)}) in the monomial"
            )

        seen = set()
        for v, exponent in zip(self._variable_factors, self._exponents):
            if not isinstance(v, Variable):
                raise StructuralError(
                    f"monomial factor has type {type(v).__name__}; expected Variable"
                )
            v.check()
            if v.environment is not self._variable_factors[0].environment:
                raise MixedEnvironmentError("Monomial", self._variable_factors[0], v)
            if v.id in seen:
                raise StructuralError(f"variable {v} appears more than once in the monomial")
            seen.add(v.id)
            if not isinstance(exponent, numbers.Integral) or exponent < 1:
                raise StructuralError(
                    f"exponent of {v} must be a positive integer; received {exponent!r}"
                )

    def variables(self) -> List:
        return unique_vars(self._variable_factors)

    def constant(self) -> float:
        return self.coefficient if self.is_constant() else 0.0

    def degree(self) -> int:
        return int(sum(self._exponents))

    def is_constant(self) -> bool:
        return len(self._variable_factors) == 0

    def is_variable(self, variable) -> bool:
        """Return True if the monomial is a multiple of ``variable`` to the first power."""
        return (
            len(self._variable_factors) == 1
            and self._variable_factors[0] == variable
            and self._exponents[0] == 1
        )

    def form(self) -> FrozenSet[Tuple[int, int]]:
        """Set of ``(variable ID, exponent)`` pairs; equal for like terms."""
        return frozenset((v.id, exponent) for v, exponent in zip(self._variable_factors, self._exponents))

    def matches_form_of(self, other: "Monomial") -> bool:
        return self.form() == other.form()

    def with_coefficient(self, coefficient: float) -> "Monomial":
        return Monomial(coefficient, self._variable_factors, self._exponents)

    def plus(self, other):
        from .constant import K
        from .polynomial import Polynomial
        from .variable import Variable

        other = self._prepare_operand(other)
        if not isinstance(other, ScalarExpression):
            return self._broadcast(other, Monomial.plus)

        if isinstance(other, K):
            if self.is_constant():
                return Monomial(self.coefficient + other.value)
            return Polynomial([self, other.to_monomial()])
        if isinstance(other, Variable):
            return self.plus(other.to_monomial())
        if isinstance(other, Monomial):
            if self.matches_form_of(other):
                return self.with_coefficient(self.coefficient + other.coefficient)
            return Polynomial([self, other])
        return self.to_polynomial().plus(other)

    def multiply(self, other):
        from .constant import K
        from .polynomial import Polynomial
        from .variable import Variable

        other = self._prepare_operand(other)
        if not isinstance(other, ScalarExpression):
            return self._broadcast(other, Monomial.multiply)

        if isinstance(other, K):
            return self.with_coefficient(self.coefficient * other.value)
        if isinstance(other, Variable):
            return self.multiply(other.to_monomial())
        if isinstance(other, Monomial):
            factors = self.factors
            for v, exponent in zip(other.variable_factors, other.exponents):
                factors[v] = factors.get(v, 0) + exponent
            return Monomial.from_factors(self.coefficient * other.coefficient, factors)
        if isinstance(other, Polynomial):
            return Polynomial([self.multiply(m) for m in other.monomials])
        raise UnsupportedInputError("Monomial.multiply", other)

    def derivative_wrt(self, variable):
        """Differentiate with the power rule.

        ``d/dv (c v^e w) = c e v^(e-1) w``; the derivative is ``K(0)`` when ``v``
        does not appear in the monomial.
        """
        from .constant import K
        from .variable import Variable

        self.check()
        if not isinstance(variable, Variable):
            raise UnsupportedInputError("Monomial.derivative_wrt", variable)

        factors = self.factors
        if variable not in factors:
            return K(0.0)

        exponent = factors[variable]
        if exponent == 1:
            del factors[variable]
        else:
            factors[variable] = exponent - 1
        return Monomial.from_factors(self.coefficient * exponent, factors)

    def substitute_according_to(self, mapping) -> ScalarExpression:
        from .constant import K

        self.check()
        mapping = prepare_substitution_map(mapping, "Monomial.substitute")
        if not any(v in mapping for v in self._variable_factors):
            return self

        # Each factor is replaced from the original mapping, so replacements are
        # never themselves substituted.
        result = K(self.coefficient)
        for v, exponent in zip(self._variable_factors, self._exponents):
            result = result.multiply(mapping.get(v, v).power(exponent))
        return result

    def linear_coeff(self, wrt=None) -> np.ndarray:
        self.check()
        wrt = self.variables() if wrt is None else list(wrt)
        if len(wrt) == 0:
            raise EmptyLinearCoeffsError(self)

        coeffs = np.zeros(len(wrt))
        if self.degree() == 1:
            for ii, v in enumerate(wrt):
                if v == self._variable_factors[0]:
                    coeffs[ii] += self.coefficient
        elif self.degree() > 1:
            warnings.warn(
                f"linear coefficients of the nonlinear monomial {self} are zero",
                NonlinearTermsIgnoredWarning,
            )
        return coeffs

    def to_monomial(self) -> "Monomial":
        return self

    def to_polynomial(self):
        from .polynomial import Polynomial

        return Polynomial([self])

    def __eq__(self, other):
        if not isinstance(other, Monomial):
            return NotImplemented
        return (
            self.coefficient == other.coefficient
            and self._variable_factors == other._variable_factors
            and self._exponents == other._exponents
        )

    def __hash__(self):
        return hash((self.coefficient, tuple(v.id for v in self._variable_factors), self._exponents))

    def __str__(self):
        parts = [
            str(v) if exponent == 1 else f"{v}^{exponent}"
            for v, exponent in zip(self._variable_factors, self._exponents)
        ]
        if not parts:
            return f"{self.coefficient:g}"
        if self.coefficient == 1.0:
            return " ".join(parts)
        if self.coefficient == -1.0:
            return "-" + " ".join(parts)
        return f"{self.coefficient:g} " + " ".join(parts)
