"""
Dense matrix types.

Public API:
    Matrix: immutable dense matrix with arithmetic, solve, inverse and
        determinant
    ColumnVector, RowVector: n x 1 and 1 x n wrappers around Matrix
"""

from pymatrix.matrix.matrix import Matrix
from pymatrix.matrix.vectors import ColumnVector, RowVector

__all__ = [
    "Matrix",
    "ColumnVector",
    "RowVector",
]
