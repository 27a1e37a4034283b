import warnings
from typing import List, Sequence

import numpy as np

from symbolicmath.errors import (
    EmptyLinearCoeffsError,
    NonlinearTermsIgnoredWarning,
    StructuralError,
    UnsupportedInputError,
)

from .expression import (
    ScalarExpression,
    check_shared_environment,
    prepare_substitution_map,
    unique_vars,
)
from .monomial import Monomial


class Polynomial(ScalarExpression):
    """A sum of monomials.

    Polynomials are the top of the scalar lattice: every scalar operation with a
    polynomial operand produces a polynomial. Sums of two polynomials and
    products of two polynomials are simplified (like terms merged, zero terms
    dropped); sums with a constant, variable or monomial merge the new term into
    its like term, or append it.

    Args:
        monomials: The terms of the sum, in order. Must be non-empty.
    """

    def __init__(self, monomials: Sequence[Monomial] = ()):
        self.monomials = tuple(monomials)

    def check(self) -> None:
        if len(self.monomials) == 0:
            raise StructuralError("polynomial has no monomials")
        for ii, monomial in enumerate(self.monomials):
            if not isinstance(monomial, Monomial):
                raise StructuralError(
                    f"term {ii} of the polynomial has type {type(monomial).__name__}; "
                    "expected Monomial"
                )
            try:
                monomial.check()
            except StructuralError as e:
                raise StructuralError(f"error in monomial {ii}: {e}") from e
        check_shared_environment("Polynomial", *self.monomials)

    def __len__(self):
        return len(self.monomials)

    def __iter__(self):
        return iter(self.monomials)

    def variables(self) -> List:
        return unique_vars(v for monomial in self.monomials for v in monomial.variable_factors)

    def constant(self) -> float:
        return float(sum(m.coefficient for m in self.monomials if m.is_constant()))

    def degree(self) -> int:
        return max(m.degree() for m in self.monomials)

    def is_constant(self) -> bool:
        return len(self.variables()) == 0

    def constant_monomial_index(self) -> int:
        """Index of the first constant term, or -1."""
        for ii, monomial in enumerate(self.monomials):
            if monomial.is_constant():
                return ii
        return -1

    def variable_monomial_index(self, variable) -> int:
        """Index of the first term that is a multiple of ``variable``, or -1."""
        for ii, monomial in enumerate(self.monomials):
            if monomial.is_variable(variable):
                return ii
        return -1

    def monomial_index(self, monomial: Monomial) -> int:
        """Index of the first term with the same form as ``monomial``, or -1."""
        for ii, term in enumerate(self.monomials):
            if term.matches_form_of(monomial):
                return ii
        return -1

    def _merge(self, monomial: Monomial) -> "Polynomial":
        monomials = list(self.monomials)
        ii = self.monomial_index(monomial)
        if ii == -1:
            monomials.append(monomial)
        else:
            monomials[ii] = monomials[ii].with_coefficient(
                monomials[ii].coefficient + monomial.coefficient
            )
        return Polynomial(monomials)

    def plus(self, other):
        from .constant import K
        from .variable import Variable

        other = self._prepare_operand(other)
        if not isinstance(other, ScalarExpression):
            return self._broadcast(other, Polynomial.plus)

        if isinstance(other, (K, Variable, Monomial)):
            return self._merge(other.to_monomial())
        if isinstance(other, Polynomial):
            return Polynomial(self.monomials + other.monomials).simplify()
        raise UnsupportedInputError("Polynomial.plus", other)

    def multiply(self, other):
        from .constant import K
        from .variable import Variable

        other = self._prepare_operand(other)
        if not isinstance(other, ScalarExpression):
            return self._broadcast(other, Polynomial.multiply)

        if isinstance(other, (K, Variable, Monomial)):
            return Polynomial([m.multiply(other) for m in self.monomials])
        if isinstance(other, Polynomial):
            return Polynomial(
                [m.multiply(n) for n in other.monomials for m in self.monomials]
            ).simplify()
        raise UnsupportedInputError("Polynomial.multiply", other)

    def simplify(self) -> "Polynomial":
        """Merge like terms and drop zero terms, keeping first-occurrence order.

        A polynomial whose terms all cancel simplifies to the single constant
        term 0.
        """
        self.check()

        kept: List[Monomial] = []
        for monomial in self.monomials:
            if monomial.coefficient == 0.0:
                continue
            for ii, term in enumerate(kept):
                if term.matches_form_of(monomial):
                    kept[ii] = term.with_coefficient(term.coefficient + monomial.coefficient)
                    break
            else:
                kept.append(monomial)

        kept = [m for m in kept if m.coefficient != 0.0]
        if not kept:
            return Polynomial([Monomial(0.0)])
        return Polynomial(kept)

    def derivative_wrt(self, variable):
        from .constant import K
        from .variable import Variable

        self.check()
        if not isinstance(variable, Variable):
            raise UnsupportedInputError("Polynomial.derivative_wrt", variable)

        terms = []
        for monomial in self.monomials:
            if monomial.is_constant():
                continue
            derivative = monomial.derivative_wrt(variable)
            if isinstance(derivative, K):
                continue
            terms.append(derivative)

        if not terms:
            return K(0.0)
        return Polynomial(terms)

    def substitute_according_to(self, mapping) -> "Polynomial":
        self.check()
        mapping = prepare_substitution_map(mapping, "Polynomial.substitute")

        total = self.monomials[0].substitute_according_to(mapping)
        for monomial in self.monomials[1:]:
            total = total.plus(monomial.substitute_according_to(mapping))
        return total.to_polynomial().simplify()

    def linear_coeff(self, wrt=None) -> np.ndarray:
        self.check()
        wrt = self.variables() if wrt is None else list(wrt)
        if len(wrt) == 0:
            raise EmptyLinearCoeffsError(self)

        positions = {v: ii for ii, v in enumerate(wrt)}
        coeffs = np.zeros(len(wrt))
        nonlinear = []
        for monomial in self.monomials:
            if monomial.degree() == 1:
                ii = positions.get(monomial.variable_factors[0])
                if ii is not None:
                    coeffs[ii] += monomial.coefficient
            elif monomial.degree() > 1:
                nonlinear.append(monomial)

        if nonlinear:
            warnings.warn(
                f"ignoring {len(nonlinear)} nonlinear term(s) of {self} when computing linear "
                "coefficients",
                NonlinearTermsIgnoredWarning,
            )
        return coeffs

    def to_polynomial(self) -> "Polynomial":
        return self

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.monomials == other.monomials

    def __hash__(self):
        return hash(self.monomials)

    def __str__(self):
        out = str(self.monomials[0]) if self.monomials else "0"
        for monomial in self.monomials[1:]:
            term = str(monomial)
            if term.startswith("-"):
                out += " - " + term[1:]
            else:
                out += " + " + term
        return out
