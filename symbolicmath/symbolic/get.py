from typing import Sequence

import numpy as np

from symbolicmath.errors import (
    EmptyMatrixError,
    EmptyVectorError,
    MatrixColumnMismatchError,
    UnsupportedInputError,
)

from .constant_matrix import KMatrix
from .constant_vector import KVector


def kvector_from(values: Sequence[float]) -> KVector:
    """Build a KVector from a flat sequence of numbers.

    Raises:
        UnsupportedInputError: If ``values`` is nested (two or more dimensions)
        EmptyVectorError: If ``values`` is empty
    """
    array = np.asarray(values, dtype=float)
    if array.ndim > 1:
        raise UnsupportedInputError("kvector_from", values)
    vector = KVector(array.reshape(-1))
    if len(vector) == 0:
        raise EmptyVectorError(vector)
    return vector


def kmatrix_from(rows: Sequence[Sequence[float]]) -> KMatrix:
    """Build a KMatrix from a list of rows.

    Raises:
        MatrixColumnMismatchError: If the rows have different lengths
        EmptyMatrixError: If there are no rows or the rows are empty
    """
    rows = [list(row) for row in rows]
    if not rows or not rows[0]:
        raise EmptyMatrixError(KMatrix(np.zeros((0, 0))))
    for ii, row in enumerate(rows):
        if len(row) != len(rows[0]):
            raise MatrixColumnMismatchError(len(rows[0]), len(row), ii)
    return KMatrix(np.array(rows, dtype=float))
