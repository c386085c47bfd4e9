"""
Core infrastructure for PyMatrix.

This module provides shared abstractions and utilities used by the matrix
type, the decomposition engines and the linear-solve front end.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    memo: Write-once memoization for immutable objects
    compute: Tolerance policy and timing
"""

from pymatrix.core.result import Result
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

__all__ = [
    # Result
    "Result",
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
