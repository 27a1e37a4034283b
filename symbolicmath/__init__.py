# Core symbolic expressions - flat namespace for most common classes and functions
import symbolicmath.symbolic.linalg as linalg
from symbolicmath.config import EnvironmentConfig, VariableConfig
from symbolicmath.environment import Environment
from symbolicmath.errors import (
    DimensionError,
    EmptyLinearCoeffsError,
    EmptyMatrixError,
    EmptyVectorError,
    EqualityConstraintRequiredError,
    InequalityConstraintRequiredError,
    InvalidMatrixIndexError,
    InvalidSenseError,
    InvalidVectorIndexError,
    LinearExpressionRequiredError,
    MatrixColumnMismatchError,
    MixedEnvironmentError,
    NegativeExponentError,
    NonlinearTermsIgnoredWarning,
    StructuralError,
    SymbolicMathError,
    UnsupportedInputError,
    VariableNotInOrderingError,
)
from symbolicmath.symbolic import (
    ConstrSense,
    Constraint,
    Expression,
    K,
    KMatrix,
    KVector,
    MatrixConstraint,
    MatrixExpression,
    Monomial,
    MonomialMatrix,
    MonomialVector,
    Polynomial,
    PolynomialMatrix,
    PolynomialVector,
    ScalarConstraint,
    ScalarExpression,
    Variable,
    VariableMatrix,
    VariableVector,
    VarType,
    VectorConstraint,
    VectorExpression,
    hstack,
    identity,
    kmatrix_from,
    kvector_from,
    to_expression,
    vstack,
)

__all__ = [
    "linalg",
    # Environment and configuration
    "Environment",
    "EnvironmentConfig",
    "VariableConfig",
    # Expressions
    "Expression",
    "ScalarExpression",
    "VectorExpression",
    "MatrixExpression",
    "K",
    "Variable",
    "VarType",
    "Monomial",
    "Polynomial",
    "KVector",
    "VariableVector",
    "MonomialVector",
    "PolynomialVector",
    "KMatrix",
    "VariableMatrix",
    "MonomialMatrix",
    "PolynomialMatrix",
    "to_expression",
    "identity",
    "hstack",
    "vstack",
    "kvector_from",
    "kmatrix_from",
    # Constraints
    "ConstrSense",
    "Constraint",
    "ScalarConstraint",
    "VectorConstraint",
    "MatrixConstraint",
    # Errors
    "SymbolicMathError",
    "StructuralError",
    "EmptyVectorError",
    "EmptyMatrixError",
    "MatrixColumnMismatchError",
    "MixedEnvironmentError",
    "InvalidSenseError",
    "DimensionError",
    "UnsupportedInputError",
    "LinearExpressionRequiredError",
    "EqualityConstraintRequiredError",
    "InequalityConstraintRequiredError",
    "NegativeExponentError",
    "InvalidVectorIndexError",
    "InvalidMatrixIndexError",
    "EmptyLinearCoeffsError",
    "VariableNotInOrderingError",
    "NonlinearTermsIgnoredWarning",
]
