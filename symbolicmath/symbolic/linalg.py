"""Constructors and stacking helpers for vector and matrix expressions."""

from typing import List

import numpy as np

from symbolicmath.errors import DimensionError

from .constant_matrix import KMatrix
from .constant_vector import KVector
from .expression import Expression, to_expression


def identity(n: int) -> KMatrix:
    """Return the ``n x n`` identity matrix."""
    return KMatrix(np.eye(n))


def zeros_vector(n: int) -> KVector:
    return KVector(np.zeros(n))


def ones_vector(n: int) -> KVector:
    return KVector(np.ones(n))


def zeros_matrix(n_rows: int, n_cols: int) -> KMatrix:
    return KMatrix(np.zeros((n_rows, n_cols)))


def ones_matrix(n_rows: int, n_cols: int) -> KMatrix:
    return KMatrix(np.ones((n_rows, n_cols)))


def is_square(expression: Expression) -> bool:
    n_rows, n_cols = expression.dims()
    return n_rows == n_cols


def _prepare(expressions, name: str) -> List[Expression]:
    if len(expressions) == 0:
        raise ValueError(f"{name} requires at least one expression")
    converted = [to_expression(e) for e in expressions]
    for expression in converted:
        expression.check()
    return converted


def hstack(*expressions) -> Expression:
    """Concatenate expressions side by side.

    All operands must have the same number of rows. Scalars count as ``1 x 1``,
    vectors as ``n x 1``.

    Example:
        hstack(x_vec, y_vec)  # n x 2 matrix
    """
    from .concretize import concretize_grid, grid_of

    converted = _prepare(expressions, "hstack")
    for left, right in zip(converted, converted[1:]):
        if left.dims()[0] != right.dims()[0]:
            raise DimensionError("HStack", left.dims(), right.dims())

    grids = [grid_of(e) for e in converted]
    n_rows = len(grids[0])
    return concretize_grid([[e for grid in grids for e in grid[ii]] for ii in range(n_rows)])


def vstack(*expressions) -> Expression:
    """Concatenate expressions on top of each other.

    All operands must have the same number of columns; stacking scalars or
    vectors yields a vector.
    """
    from .concretize import concretize_grid, grid_of

    converted = _prepare(expressions, "vstack")
    for top, bottom in zip(converted, converted[1:]):
        if top.dims()[1] != bottom.dims()[1]:
            raise DimensionError("VStack", top.dims(), bottom.dims())

    return concretize_grid([row for e in converted for row in grid_of(e)])
