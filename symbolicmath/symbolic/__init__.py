# Core base classes, conversion and dimension checks
from .expression import (
    Expression,
    MatrixExpression,
    ScalarExpression,
    VectorExpression,
    check_dimensions_in_addition,
    check_dimensions_in_comparison,
    check_dimensions_in_multiplication,
    check_dimensions_in_subtraction,
    check_shared_environment,
    is_expression,
    is_matrix_expression,
    is_polynomial_like,
    is_polynomial_like_matrix,
    is_polynomial_like_scalar,
    is_polynomial_like_vector,
    is_scalar_expression,
    is_vector_expression,
    num_variables,
    to_expression,
    to_polynomial_like,
    to_scalar_expression,
    unique_vars,
)
from .sense import ConstrSense

# Scalars
from .constant import K
from .variable import Variable, VarType
from .monomial import Monomial
from .polynomial import Polynomial

# Vectors
from .constant_vector import KVector
from .variable_vector import VariableVector
from .monomial_vector import MonomialVector
from .polynomial_vector import PolynomialVector

# Matrices
from .constant_matrix import KMatrix
from .variable_matrix import VariableMatrix
from .monomial_matrix import MonomialMatrix
from .polynomial_matrix import PolynomialMatrix

# Concretization
from .concretize import ExpressionKind, concretize_grid, concretize_matrix, concretize_vector

# Constraints
from .constraint import Constraint, MatrixConstraint, ScalarConstraint, VectorConstraint

# Linear algebra helpers
from .get import kmatrix_from, kvector_from
from .linalg import hstack, identity, is_square, ones_matrix, ones_vector, vstack, zeros_matrix, zeros_vector

__all__ = [
    # Core base classes
    "Expression",
    "ScalarExpression",
    "VectorExpression",
    "MatrixExpression",
    "ConstrSense",
    # Conversion
    "to_expression",
    "to_scalar_expression",
    "to_polynomial_like",
    "is_expression",
    "is_scalar_expression",
    "is_vector_expression",
    "is_matrix_expression",
    "is_polynomial_like",
    "is_polynomial_like_scalar",
    "is_polynomial_like_vector",
    "is_polynomial_like_matrix",
    "unique_vars",
    "num_variables",
    # Dimension checks
    "check_dimensions_in_addition",
    "check_dimensions_in_subtraction",
    "check_dimensions_in_multiplication",
    "check_dimensions_in_comparison",
    "check_shared_environment",
    # Scalars
    "K",
    "Variable",
    "VarType",
    "Monomial",
    "Polynomial",
    # Vectors
    "KVector",
    "VariableVector",
    "MonomialVector",
    "PolynomialVector",
    # Matrices
    "KMatrix",
    "VariableMatrix",
    "MonomialMatrix",
    "PolynomialMatrix",
    # Concretization
    "ExpressionKind",
    "concretize_vector",
    "concretize_matrix",
    "concretize_grid",
    # Constraints
    "Constraint",
    "ScalarConstraint",
    "VectorConstraint",
    "MatrixConstraint",
    # Linear algebra helpers
    "identity",
    "zeros_vector",
    "ones_vector",
    "zeros_matrix",
    "ones_matrix",
    "is_square",
    "hstack",
    "vstack",
    "kvector_from",
    "kmatrix_from",
]
