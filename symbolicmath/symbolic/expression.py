"""Base classes and dispatch helpers for symbolic expressions.

Every symbolic value in symbolicmath is an :class:`Expression`. Expressions come
in three arities:

- :class:`ScalarExpression` - ``K``, ``Variable``, ``Monomial``, ``Polynomial``
- :class:`VectorExpression` - column vectors of a single scalar kind
- :class:`MatrixExpression` - row-major grids of a single scalar kind

All expressions are immutable values. Arithmetic (``plus``, ``minus``,
``multiply``, ``power``) and comparison (``less_eq``, ``greater_eq``, ``eq``)
always return new values; the Python operators ``+ - * @ ** <= >=`` and unary
``-`` map onto these methods. ``*`` and ``@`` both denote the matrix product
(with scalar broadcasting). ``==`` is structural equality, so variables can be
used as dictionary keys; equality constraints are built with :meth:`Expression.eq`.

Operands may be expressions, Python/numpy numbers, or numeric numpy arrays
(1-D arrays become ``KVector``, 2-D arrays become ``KMatrix``). Every public
arithmetic entry point validates both operands with ``check()`` before doing
any work, so malformed input is reported before a result is produced.
"""

import numbers
from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple

import numpy as np

from symbolicmath.errors import (
    DimensionError,
    EmptyLinearCoeffsError,
    EmptyMatrixError,
    EmptyVectorError,
    InvalidMatrixIndexError,
    InvalidVectorIndexError,
    MatrixColumnMismatchError,
    MixedEnvironmentError,
    NegativeExponentError,
    StructuralError,
    UnsupportedInputError,
)

from .sense import ConstrSense


class Expression:
    """Base class of every symbolic expression.

    Subclasses implement the abstract interface (``check``, ``variables``,
    ``dims``, ``constant``, ``degree``, ``plus``, ``multiply``, ``transpose``,
    ``comparison``, ``derivative_wrt``, ``substitute_according_to``, ``power``);
    the operators and the derived operations (``minus``, ``less_eq``, ...) are
    provided here.

    Attributes:
        __array_priority__: Priority for operations with numpy arrays (set to 1000)

    Note:
        When used in operations with numpy arrays, Expression objects take
        precedence, so ``np.ones(3) + x`` is handled by ``x.__radd__``.
    """

    # Give Expression objects higher priority than numpy arrays in operations
    __array_priority__ = 1000

    def check(self) -> None:
        """Validate the invariants of this expression.

        Raises:
            StructuralError: If the expression is malformed
        """
        raise NotImplementedError(f"check() not implemented for {self.__class__.__name__}")

    def variables(self) -> List["Variable"]:
        """Return the unique variables of the expression, in order of first appearance."""
        raise NotImplementedError(f"variables() not implemented for {self.__class__.__name__}")

    def dims(self) -> Tuple[int, int]:
        """Return ``(rows, columns)``; scalars are ``(1, 1)``, vectors ``(n, 1)``."""
        raise NotImplementedError(f"dims() not implemented for {self.__class__.__name__}")

    def constant(self):
        raise NotImplementedError(f"constant() not implemented for {self.__class__.__name__}")

    def degree(self) -> int:
        raise NotImplementedError(f"degree() not implemented for {self.__class__.__name__}")

    def plus(self, other) -> "Expression":
        raise NotImplementedError(f"plus() not implemented for {self.__class__.__name__}")

    def multiply(self, other) -> "Expression":
        raise NotImplementedError(f"multiply() not implemented for {self.__class__.__name__}")

    def transpose(self) -> "Expression":
        raise NotImplementedError(f"transpose() not implemented for {self.__class__.__name__}")

    def comparison(self, other, sense: ConstrSense):
        raise NotImplementedError(f"comparison() not implemented for {self.__class__.__name__}")

    def derivative_wrt(self, variable) -> "Expression":
        raise NotImplementedError(
            f"derivative_wrt() not implemented for {self.__class__.__name__}"
        )

    def substitute_according_to(self, mapping: Mapping) -> "Expression":
        raise NotImplementedError(
            f"substitute_according_to() not implemented for {self.__class__.__name__}"
        )

    def power(self, exponent: int) -> "Expression":
        raise NotImplementedError(f"power() not implemented for {self.__class__.__name__}")

    def linear_coeff(self, wrt=None) -> np.ndarray:
        raise NotImplementedError(f"linear_coeff() not implemented for {self.__class__.__name__}")

    # Derived operations

    def minus(self, other) -> "Expression":
        """Subtract ``other`` from this expression."""
        self.check()
        other = to_expression(other)
        other.check()
        check_dimensions_in_subtraction(self, other)
        return self.plus(other.multiply(-1.0))

    def less_eq(self, other):
        return self.comparison(other, ConstrSense.LESS_THAN_EQUAL)

    def greater_eq(self, other):
        return self.comparison(other, ConstrSense.GREATER_THAN_EQUAL)

    def eq(self, other):
        return self.comparison(other, ConstrSense.EQUAL)

    def substitute(self, variable, expression) -> "Expression":
        """Replace every occurrence of ``variable`` with the scalar ``expression``."""
        return self.substitute_according_to({variable: expression})

    def is_linear(self) -> bool:
        """Return True if the expression is affine (total degree at most one)."""
        self.check()
        return self.degree() <= 1

    def _prepare_operand(self, other) -> "Expression":
        self.check()
        other = to_expression(other)
        other.check()
        check_shared_environment(f"{self.__class__.__name__} operation", self, other)
        return other

    # Operators

    def __add__(self, other):
        return self.plus(other)

    def __radd__(self, other):
        return to_expression(other).plus(self)

    def __sub__(self, other):
        return self.minus(other)

    def __rsub__(self, other):
        # e.g. 5 - x  =>  K(5).minus(x)
        return to_expression(other).minus(self)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return to_expression(other).multiply(self)

    def __matmul__(self, other):
        return self.multiply(other)

    def __rmatmul__(self, other):
        return to_expression(other).multiply(self)

    def __neg__(self):
        return self.multiply(-1.0)

    def __pow__(self, exponent):
        return self.power(exponent)

    def __le__(self, other):
        return self.less_eq(other)

    def __ge__(self, other):
        return self.greater_eq(other)

    @property
    def T(self):
        """Transpose property, equivalent to ``transpose()``."""
        return self.transpose()

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"


class ScalarExpression(Expression):
    """Base class of the four scalar kinds: K, Variable, Monomial and Polynomial."""

    def dims(self) -> Tuple[int, int]:
        return (1, 1)

    def transpose(self) -> "ScalarExpression":
        return self

    def comparison(self, other, sense: ConstrSense):
        """Build a constraint ``self <sense> other``.

        A vector or matrix right-hand side yields a vector or matrix constraint in
        which this scalar is broadcast.
        """
        from .constraint import MatrixConstraint, ScalarConstraint, VectorConstraint

        other = self._prepare_operand(other)
        ConstrSense.validate(sense)
        check_dimensions_in_comparison(self, other, sense)

        if isinstance(other, ScalarExpression):
            return ScalarConstraint(self, other, sense)
        if isinstance(other, VectorExpression):
            return VectorConstraint(self, other, sense)
        return MatrixConstraint(self, other, sense)

    def power(self, exponent: int) -> Expression:
        """Raise the expression to a non-negative integer power by repeated multiplication."""
        from .constant import K

        self.check()
        _validate_exponent(exponent, f"{self.__class__.__name__}.power")

        result = K(1.0)
        for _ in range(exponent):
            result = result.multiply(self)
        return result

    def _broadcast(self, collection, operation: Callable) -> Expression:
        """Apply ``operation(self, element)`` to every entry of a vector or matrix."""
        return collection.map_elements(lambda element: operation(self, element))


class VectorExpression(Expression):
    """Base class of column-vector expressions.

    Subclasses store their entries and expose them through ``elements``; all
    entrywise arithmetic is implemented here in terms of scalar arithmetic and
    re-concretized to the tightest vector kind.
    """

    _element_type: type = ScalarExpression

    @property
    def elements(self) -> Tuple[ScalarExpression, ...]:
        raise NotImplementedError(f"elements not implemented for {self.__class__.__name__}")

    def check(self) -> None:
        elements = self.elements
        if len(elements) == 0:
            raise EmptyVectorError(self)
        for ii, element in enumerate(elements):
            if not isinstance(element, self._element_type):
                raise StructuralError(
                    f"element {ii} of {self.__class__.__name__} has type "
                    f"{type(element).__name__}; expected {self._element_type.__name__}"
                )
            element.check()

    def __len__(self):
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def dims(self) -> Tuple[int, int]:
        return (len(self.elements), 1)

    def at_vec(self, index: int) -> ScalarExpression:
        """Return the entry at ``index``.

        Raises:
            InvalidVectorIndexError: If ``index`` is outside ``[0, len)``
        """
        self.check()
        if not 0 <= index < len(self.elements):
            raise InvalidVectorIndexError(index, self)
        return self.elements[index]

    def __getitem__(self, index: int) -> ScalarExpression:
        if isinstance(index, numbers.Integral) and index < 0:
            index += len(self.elements)
        return self.at_vec(index)

    def variables(self) -> List["Variable"]:
        return unique_vars(v for element in self.elements for v in element.variables())

    def constant(self) -> np.ndarray:
        self.check()
        return np.array([element.constant() for element in self.elements], dtype=float)

    def degree(self) -> int:
        return max(element.degree() for element in self.elements)

    def map_elements(self, fn: Callable[[ScalarExpression], ScalarExpression]) -> "VectorExpression":
        """Apply ``fn`` to every entry and concretize the result."""
        from .concretize import concretize_vector

        return concretize_vector([fn(element) for element in self.elements])

    def plus(self, other) -> Expression:
        from .concretize import concretize_vector, grid_of

        other = self._prepare_operand(other)
        check_dimensions_in_addition(self, other)

        if isinstance(other, ScalarExpression):
            return self.map_elements(lambda element: element.plus(other))

        right = grid_of(other)
        return concretize_vector(
            [element.plus(right[ii][0]) for ii, element in enumerate(self.elements)]
        )

    def multiply(self, other) -> Expression:
        from .concretize import concretize_grid, grid_of, multiply_grids

        other = self._prepare_operand(other)
        check_dimensions_in_multiplication(self, other)

        if isinstance(other, ScalarExpression):
            return self.map_elements(lambda element: element.multiply(other))

        return concretize_grid(multiply_grids(grid_of(self), grid_of(other)))

    def transpose(self) -> "MatrixExpression":
        """Return the ``1 x n`` row matrix of the same kind."""
        from .concretize import concretize_matrix

        self.check()
        return concretize_matrix([list(self.elements)])

    def comparison(self, other, sense: ConstrSense):
        from .constraint import MatrixConstraint, VectorConstraint

        other = self._prepare_operand(other)
        ConstrSense.validate(sense)
        check_dimensions_in_comparison(self, other, sense)

        if isinstance(other, MatrixExpression):
            return MatrixConstraint(self, other, sense)
        return VectorConstraint(self, other, sense)

    def derivative_wrt(self, variable) -> "VectorExpression":
        self.check()
        return self.map_elements(lambda element: element.derivative_wrt(variable))

    def substitute_according_to(self, mapping: Mapping) -> "VectorExpression":
        self.check()
        mapping = prepare_substitution_map(mapping, f"{self.__class__.__name__}.substitute")
        return self.map_elements(lambda element: element.substitute_according_to(mapping))

    def power(self, exponent: int) -> Expression:
        return collection_power(self, exponent)

    def linear_coeff(self, wrt=None) -> np.ndarray:
        """Return the ``(n, len(wrt))`` matrix of linear coefficients of the entries."""
        self.check()
        wrt = list(self.variables() if wrt is None else wrt)
        if len(wrt) == 0:
            raise EmptyLinearCoeffsError(self)
        return np.vstack([element.linear_coeff(wrt) for element in self.elements])

    def to_polynomial_vector(self):
        from .polynomial_vector import PolynomialVector

        self.check()
        return PolynomialVector([element.to_polynomial() for element in self.elements])

    def __eq__(self, other):
        if not isinstance(other, VectorExpression):
            return NotImplemented
        return type(self) is type(other) and self.elements == other.elements

    __hash__ = None

    def __str__(self):
        inner = ", ".join(str(element) for element in self.elements)
        return f"{self.__class__.__name__} = [{inner}]"

    def __repr__(self):
        return str(self)


class MatrixExpression(Expression):
    """Base class of matrix expressions stored as row-major grids of one scalar kind."""

    _element_type: type = ScalarExpression

    @property
    def rows(self) -> Tuple[Tuple[ScalarExpression, ...], ...]:
        raise NotImplementedError(f"rows not implemented for {self.__class__.__name__}")

    def check(self) -> None:
        rows = self.rows
        if len(rows) == 0 or len(rows[0]) == 0:
            raise EmptyMatrixError(self)
        n_cols = len(rows[0])
        for ii, row in enumerate(rows):
            if len(row) != n_cols:
                raise MatrixColumnMismatchError(n_cols, len(row), ii)
            for element in row:
                if not isinstance(element, self._element_type):
                    raise StructuralError(
                        f"element of {self.__class__.__name__} in row {ii} has type "
                        f"{type(element).__name__}; expected {self._element_type.__name__}"
                    )
                element.check()

    def dims(self) -> Tuple[int, int]:
        rows = self.rows
        return (len(rows), len(rows[0]) if rows else 0)

    def at(self, row: int, column: int) -> ScalarExpression:
        """Return the entry at ``(row, column)``.

        Raises:
            InvalidMatrixIndexError: If either index is out of range
        """
        self.check()
        n_rows, n_cols = self.dims()
        if not (0 <= row < n_rows and 0 <= column < n_cols):
            raise InvalidMatrixIndexError(row, column, self)
        return self.rows[row][column]

    def __getitem__(self, index: Tuple[int, int]) -> ScalarExpression:
        row, column = index
        return self.at(row, column)

    def entries(self) -> List[ScalarExpression]:
        """Return the entries in row-major order."""
        return [element for row in self.rows for element in row]

    def variables(self) -> List["Variable"]:
        return unique_vars(v for element in self.entries() for v in element.variables())

    def constant(self) -> np.ndarray:
        self.check()
        return np.array(
            [[element.constant() for element in row] for row in self.rows], dtype=float
        )

    def degree(self) -> int:
        return max(element.degree() for element in self.entries())

    def map_elements(self, fn: Callable[[ScalarExpression], ScalarExpression]) -> "MatrixExpression":
        """Apply ``fn`` to every entry and concretize the result."""
        from .concretize import concretize_matrix

        return concretize_matrix([[fn(element) for element in row] for row in self.rows])

    def plus(self, other) -> Expression:
        from .concretize import concretize_matrix, grid_of

        other = self._prepare_operand(other)
        check_dimensions_in_addition(self, other)

        if isinstance(other, ScalarExpression):
            return self.map_elements(lambda element: element.plus(other))

        right = grid_of(other)
        return concretize_matrix(
            [
                [element.plus(right[ii][jj]) for jj, element in enumerate(row)]
                for ii, row in enumerate(self.rows)
            ]
        )

    def multiply(self, other) -> Expression:
        from .concretize import concretize_grid, grid_of, multiply_grids

        other = self._prepare_operand(other)
        check_dimensions_in_multiplication(self, other)

        if isinstance(other, ScalarExpression):
            return self.map_elements(lambda element: element.multiply(other))

        return concretize_grid(multiply_grids(grid_of(self), grid_of(other)))

    def transpose(self) -> "MatrixExpression":
        from .concretize import concretize_matrix

        self.check()
        return concretize_matrix([list(column) for column in zip(*self.rows)])

    def comparison(self, other, sense: ConstrSense):
        from .constraint import MatrixConstraint

        other = self._prepare_operand(other)
        ConstrSense.validate(sense)
        check_dimensions_in_comparison(self, other, sense)
        return MatrixConstraint(self, other, sense)

    def derivative_wrt(self, variable) -> "MatrixExpression":
        self.check()
        return self.map_elements(lambda element: element.derivative_wrt(variable))

    def substitute_according_to(self, mapping: Mapping) -> "MatrixExpression":
        self.check()
        mapping = prepare_substitution_map(mapping, f"{self.__class__.__name__}.substitute")
        return self.map_elements(lambda element: element.substitute_according_to(mapping))

    def power(self, exponent: int) -> Expression:
        return collection_power(self, exponent)

    def linear_coeff(self, wrt=None) -> np.ndarray:
        """Return the linear coefficients of the entries, one row per entry (row-major)."""
        self.check()
        wrt = list(self.variables() if wrt is None else wrt)
        if len(wrt) == 0:
            raise EmptyLinearCoeffsError(self)
        return np.vstack([element.linear_coeff(wrt) for element in self.entries()])

    def to_polynomial_matrix(self):
        from .polynomial_matrix import PolynomialMatrix

        self.check()
        return PolynomialMatrix([[element.to_polynomial() for element in row] for row in self.rows])

    def __eq__(self, other):
        if not isinstance(other, MatrixExpression):
            return NotImplemented
        return type(self) is type(other) and self.rows == other.rows

    __hash__ = None

    def __str__(self):
        inner = ", ".join("[" + ", ".join(str(e) for e in row) + "]" for row in self.rows)
        return f"{self.__class__.__name__} = [{inner}]"

    def __repr__(self):
        return str(self)


# ==================== CONVERSION ====================


def _is_number(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def to_expression(x: Any) -> Expression:
    """Convert a value to an Expression if it is not already one.

    Numbers become ``K``; numeric 1-D arrays (or flat lists) become ``KVector`` and
    2-D arrays (or nested lists) become ``KMatrix``.

    Raises:
        UnsupportedInputError: If ``x`` has no symbolic counterpart
    """
    from .constant import K
    from .constant_matrix import KMatrix
    from .constant_vector import KVector

    if isinstance(x, Expression):
        return x
    if _is_number(x):
        return K(float(x))
    if isinstance(x, (list, tuple)):
        try:
            x = np.asarray(x, dtype=float)
        except (TypeError, ValueError):
            raise UnsupportedInputError("to_expression", x) from None
    if isinstance(x, np.ndarray) and (
        np.issubdtype(x.dtype, np.integer) or np.issubdtype(x.dtype, np.floating)
    ):
        if x.ndim == 0:
            return K(float(x))
        if x.ndim == 1:
            return KVector(x)
        if x.ndim == 2:
            return KMatrix(x)
    raise UnsupportedInputError("to_expression", x)


def to_scalar_expression(x: Any) -> ScalarExpression:
    """Convert ``x`` to a scalar expression, rejecting vectors and matrices."""
    expression = to_expression(x)
    if not isinstance(expression, ScalarExpression):
        raise UnsupportedInputError("to_scalar_expression", x)
    return expression


def is_expression(x: Any) -> bool:
    try:
        to_expression(x)
    except UnsupportedInputError:
        return False
    return True


def is_scalar_expression(x: Any) -> bool:
    return isinstance(x, ScalarExpression) or _is_number(x)


def is_vector_expression(x: Any) -> bool:
    return isinstance(x, VectorExpression) or (isinstance(x, np.ndarray) and x.ndim == 1)


def is_matrix_expression(x: Any) -> bool:
    return isinstance(x, MatrixExpression) or (isinstance(x, np.ndarray) and x.ndim == 2)


# Every concrete expression kind is a polynomial in its variables; the
# polynomial-like predicates exist so callers can validate raw inputs.
is_polynomial_like = is_expression
is_polynomial_like_scalar = is_scalar_expression
is_polynomial_like_vector = is_vector_expression
is_polynomial_like_matrix = is_matrix_expression
to_polynomial_like = to_expression


def prepare_substitution_map(mapping: Mapping, function_name: str) -> Dict["Variable", ScalarExpression]:
    """Validate a variable -> replacement mapping and convert replacements to expressions."""
    from .variable import Variable

    if not isinstance(mapping, Mapping):
        raise UnsupportedInputError(function_name, mapping)

    prepared = {}
    for variable, replacement in mapping.items():
        if not isinstance(variable, Variable):
            raise UnsupportedInputError(function_name, variable)
        variable.check()
        if not is_scalar_expression(replacement):
            raise UnsupportedInputError(function_name, replacement)
        replacement = to_scalar_expression(replacement)
        replacement.check()
        prepared[variable] = replacement
    return prepared


def check_shared_environment(operation: str, *expressions: Expression) -> None:
    """Raise if the variables of ``expressions`` come from different environments.

    Variable IDs are only unique within one environment, so combining variables
    from two environments would silently alias distinct variables.

    Raises:
        MixedEnvironmentError: If two variables have different owning environments
    """
    first = None
    for expression in expressions:
        for v in expression.variables():
            if first is None:
                first = v
            elif v.environment is not first.environment:
                raise MixedEnvironmentError(operation, first, v)


def unique_vars(variables: Iterable["Variable"]) -> List["Variable"]:
    """Return the unique variables in order of first appearance."""
    seen = set()
    unique = []
    for v in variables:
        if v not in seen:
            seen.add(v)
            unique.append(v)
    return unique


def num_variables(expression: Expression) -> int:
    return len(expression.variables())


# ==================== DIMENSION CHECKS ====================


def _is_scalar(expression: Expression) -> bool:
    return isinstance(expression, ScalarExpression)


def check_dimensions_in_addition(left: Expression, right: Expression, operation: str = "Plus"):
    """Addition requires equal dimensions unless one operand is a scalar."""
    if _is_scalar(left) or _is_scalar(right):
        return
    if tuple(left.dims()) != tuple(right.dims()):
        raise DimensionError(operation, left.dims(), right.dims())


def check_dimensions_in_subtraction(left: Expression, right: Expression):
    check_dimensions_in_addition(left, right, operation="Minus")


def check_dimensions_in_multiplication(left: Expression, right: Expression):
    """Multiplication requires ``left.cols == right.rows`` unless one operand is a scalar."""
    if _is_scalar(left) or _is_scalar(right):
        return
    if left.dims()[1] != right.dims()[0]:
        raise DimensionError("Multiply", left.dims(), right.dims())


def check_dimensions_in_comparison(left: Expression, right: Expression, sense: ConstrSense):
    """Comparison requires equal dimensions unless one side is a scalar."""
    if _is_scalar(left) or _is_scalar(right):
        return
    if tuple(left.dims()) != tuple(right.dims()):
        raise DimensionError(f"Comparison ({sense})", left.dims(), right.dims())


# ==================== POWERS ====================


def _validate_exponent(exponent: Any, function_name: str):
    if not isinstance(exponent, numbers.Integral) or isinstance(exponent, bool):
        raise UnsupportedInputError(function_name, exponent)
    if exponent < 0:
        raise NegativeExponentError(int(exponent))


def collection_power(expression: Expression, exponent: int) -> Expression:
    """Raise a square vector/matrix expression to a non-negative power, starting from the identity."""
    from .linalg import identity, is_square

    expression.check()
    _validate_exponent(exponent, f"{expression.__class__.__name__}.power")
    if not is_square(expression):
        raise DimensionError("Power", expression.dims(), expression.dims())

    result = identity(expression.dims()[0])
    for _ in range(exponent):
        result = result.multiply(expression)
    return result
