"""
PyMatrix: dense real matrices with LU and QR solves.

An immutable double-precision Matrix type with arithmetic, transposition
and linear-system solution via two classical factorizations: partial-pivot
LU for square systems and Householder QR for least squares.

Submodules:
    matrix: Matrix, ColumnVector, RowVector
    decomposition: PivotingLUDecomposition, ReducedQRDecomposition
    linsolve: solve() front end returning a diagnostic Result
    core: Exceptions, validation, tolerances, timing
"""

__version__ = "0.1.0"

from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionError,
    UnsupportedOperationError,
    NotSquareError,
    SingularMatrixError,
    IndexOutOfRangeError,
    IllConditionedWarning,
)
from pymatrix.matrix import Matrix, ColumnVector, RowVector
from pymatrix.decomposition import PivotingLUDecomposition, ReducedQRDecomposition
from pymatrix.linsolve import solve
from pymatrix import linsolve

__all__ = [
    "__version__",
    # Types
    "Matrix",
    "ColumnVector",
    "RowVector",
    "PivotingLUDecomposition",
    "ReducedQRDecomposition",
    # Solving
    "solve",
    "linsolve",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "UnsupportedOperationError",
    "NotSquareError",
    "SingularMatrixError",
    "IndexOutOfRangeError",
    "IllConditionedWarning",
]
