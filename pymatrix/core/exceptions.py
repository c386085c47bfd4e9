"""
Exception hierarchy for PyMatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. The hierarchy mirrors the three ways a matrix
request can fail:

    - ValidationError: the arguments are malformed (invalid-argument)
    - UnsupportedOperationError: the arguments are well-formed, but the
      receiver's shape or rank cannot satisfy the request
    - IndexOutOfRangeError: a row or column index lies outside the matrix

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

import inspect
import os


class PyMatrixError(Exception):
    """Base exception for all PyMatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks: a value
    count that does not match the declared shape, empty input, rows of
    unequal length, or an empty slice.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when the operands of a sum, difference, product or solve do
    not have compatible shapes.
    """
    pass


class UnsupportedOperationError(PyMatrixError):
    """
    The receiver's mathematical shape cannot satisfy the request.

    Raised for well-formed requests that are ill-posed for the given
    matrix, e.g. solving an underdetermined system.
    """
    pass


class NotSquareError(UnsupportedOperationError):
    """
    Operation requires a square matrix.

    Attributes:
        shape: (rows, columns) of the offending matrix
    """

    def __init__(self, message: str, shape: tuple[int, int] | None = None):
        super().__init__(message)
        self.shape = shape


class SingularMatrixError(UnsupportedOperationError):
    """
    Matrix is singular or numerically rank-deficient.

    Raised when a solve or inverse requires a non-singular (or full column
    rank) matrix and the decomposition says otherwise.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Rank required for the operation to succeed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank


class IndexOutOfRangeError(PyMatrixError, IndexError):
    """
    Row or column index outside the matrix.

    Also an IndexError, so sequence protocols (iteration via __getitem__,
    unpacking) behave as they do for builtin containers.

    Attributes:
        index: The rejected index
        length: Number of valid indices along the accessed axis
    """

    def __init__(self, message: str, index: int | None = None, length: int | None = None):
        super().__init__(message)
        self.index = index
        self.length = length


class IllConditionedWarning(RuntimeWarning):
    """
    A solve succeeded against a nearly singular matrix.

    The result is returned, but its accuracy may be poor.
    """
    pass


def find_stack_level() -> int:
    """
    Stack level that attributes a warning to the first caller outside
    PyMatrix.

    The same engine warning can be reached through several entry points
    (Matrix.solve, Matrix.inverse, a decomposition's solve, the linsolve
    front end), each at a different call depth. Call this from the
    function that issues warnings.warn.
    """
    import pymatrix

    pkg_dir = os.path.dirname(pymatrix.__file__) + os.sep

    frame = inspect.currentframe()
    try:
        n = 0
        while frame is not None and frame.f_code.co_filename.startswith(pkg_dir):
            frame = frame.f_back
            n += 1
    finally:
        # Break the reference cycle through the frame object
        del frame
    return n
