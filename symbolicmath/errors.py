"""Exception types raised by the symbolic algebra.

Every error derives from :class:`SymbolicMathError` and also from the builtin
exception a caller would naturally catch (``ValueError`` for malformed values
and shape problems, ``TypeError`` for unsupported operands, ``IndexError`` for
out-of-range access). Errors carry the operation name and the operands that
triggered them so callers can inspect them without parsing messages.
"""

from typing import Any, Sequence, Tuple


def _dims_as_string(dims: Sequence[int]) -> str:
    return "(" + ",".join(str(d) for d in dims) + ")"


class SymbolicMathError(Exception):
    """Base class for every error raised by symbolicmath."""


class StructuralError(SymbolicMathError, ValueError):
    """A symbolic entity violates one of its own invariants."""


class EmptyVectorError(StructuralError):
    def __init__(self, expression: Any):
        self.expression = expression
        super().__init__(
            f"empty vector error: the vector of type {type(expression).__name__} is empty"
        )


class EmptyMatrixError(StructuralError):
    def __init__(self, expression: Any):
        self.expression = expression
        super().__init__(
            f"empty matrix error: the matrix of type {type(expression).__name__} is empty"
        )


class MatrixColumnMismatchError(StructuralError):
    def __init__(self, expected_n_columns: int, actual_n_columns: int, row: int):
        self.expected_n_columns = expected_n_columns
        self.actual_n_columns = actual_n_columns
        self.row = row
        super().__init__(
            f"matrix column mismatch error: expected {expected_n_columns} columns, "
            f"received {actual_n_columns} in row {row}"
        )


class InvalidSenseError(StructuralError):
    def __init__(self, sense: Any):
        self.sense = sense
        super().__init__(f"unexpected constraint sense: {sense!r}")


class DimensionError(SymbolicMathError, ValueError):
    """Two operands have incompatible shapes for an operation.

    Attributes:
        operation: Name of the operation that was attempted (e.g. ``"Plus"``)
        left_dims: Dimensions of the left operand
        right_dims: Dimensions of the right operand
    """

    def __init__(self, operation: str, left_dims: Sequence[int], right_dims: Sequence[int]):
        self.operation = operation
        self.left_dims: Tuple[int, ...] = tuple(left_dims)
        self.right_dims: Tuple[int, ...] = tuple(right_dims)
        super().__init__(
            f"dimension error: Cannot perform {operation} between expression of dimension "
            f"{_dims_as_string(self.left_dims)} and expression of dimension "
            f"{_dims_as_string(self.right_dims)}"
        )


class UnsupportedInputError(SymbolicMathError, TypeError):
    def __init__(self, function_name: str, input: Any):
        self.function_name = function_name
        self.input = input
        super().__init__(
            f"the input to {function_name} has unexpected type {type(input).__name__} ({input!r})"
        )


class LinearExpressionRequiredError(SymbolicMathError, ValueError):
    def __init__(self, operation: str, expression: Any):
        self.operation = operation
        self.expression = expression
        super().__init__(
            f"Linear expression required for operation {operation}; received an expression "
            f"which is not linear ({type(expression).__name__}: {expression})."
        )


class EqualityConstraintRequiredError(SymbolicMathError, ValueError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Equality constraint required for operation: {operation}")


class InequalityConstraintRequiredError(SymbolicMathError, ValueError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Inequality constraint required for operation: {operation}")


class NegativeExponentError(SymbolicMathError, ValueError):
    def __init__(self, exponent: int):
        self.exponent = exponent
        super().__init__(
            f"received negative exponent ({exponent}); expected non-negative exponent"
        )


class InvalidVectorIndexError(SymbolicMathError, IndexError):
    def __init__(self, index: int, expression: Any):
        self.index = index
        self.expression = expression
        super().__init__(
            f"invalid vector index error: index {index} is out of range for a vector of "
            f"length {expression.dims()[0]}"
        )


class InvalidMatrixIndexError(SymbolicMathError, IndexError):
    def __init__(self, row_index: int, column_index: int, expression: Any):
        self.row_index = row_index
        self.column_index = column_index
        self.expression = expression
        super().__init__(
            f"invalid matrix index error: index ({row_index},{column_index}) is out of range "
            f"for a matrix of dimension {_dims_as_string(expression.dims())}"
        )


class EmptyLinearCoeffsError(SymbolicMathError, ValueError):
    def __init__(self, expression: Any):
        self.expression = expression
        super().__init__(
            f"the expression of type {type(expression).__name__} has no variables to compute "
            "linear coefficients for"
        )


class VariableNotInOrderingError(SymbolicMathError, ValueError):
    def __init__(self, variable: Any, operation: str):
        self.variable = variable
        self.operation = operation
        super().__init__(
            f"variable {variable} appears in the expression given to {operation} but not in "
            "the requested variable ordering"
        )


class MixedEnvironmentError(StructuralError):
    """Variables allocated by different environments were combined in one expression."""

    def __init__(self, operation: str, first: Any, second: Any):
        self.operation = operation
        self.first = first
        self.second = second
        super().__init__(
            f"{operation} combines variable {first} and variable {second}, which belong to "
            "different environments"
        )


class NonlinearTermsIgnoredWarning(UserWarning):
    """Emitted when linear coefficients are read off an expression with nonlinear terms."""
