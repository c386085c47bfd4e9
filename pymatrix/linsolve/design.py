"""
Linear system design.

LinearSystem pairs a coefficient matrix A with a right-hand side B and
checks, once, that the pair is a well-formed system AX = B. Backends
trust a built LinearSystem and do no further validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pymatrix.core.validation import (
    check_2d,
    check_array,
    check_finite,
    check_not_empty,
    check_row_agreement,
)
from pymatrix.matrix.matrix import Matrix
from pymatrix.matrix.vectors import ColumnVector


@dataclass(frozen=True)
class LinearSystem:
    """
    Validated linear system AX = B.

    Construction:
        LinearSystem.build(A, B)                 # Matrix operands
        LinearSystem.build(np_A, [1.0, 2.0])     # array-likes; 1D B is a column
        LinearSystem.build(A, ColumnVector(b))
    """
    _A: Matrix
    _B: Matrix

    @classmethod
    def build(cls, A: Matrix | ArrayLike, B: Matrix | ColumnVector | ArrayLike) -> LinearSystem:
        """
        Build and validate a system.

        Args:
            A: Coefficient matrix (M x N)
            B: Right-hand side (M x K), or a length-M vector

        Returns:
            LinearSystem ready for a backend

        Raises:
            ValidationError: If an operand is non-numeric, empty or
                contains NaN/Inf
            DimensionError: If an operand is not 2D or the row
                dimensions disagree
        """
        A_mat = _as_matrix(A, 'A', allow_vector=False)
        B_mat = _as_matrix(B, 'B', allow_vector=True)

        check_finite(np.asarray(A_mat), 'A')
        check_finite(np.asarray(B_mat), 'B')
        check_row_agreement(A_mat.row_dimension, B_mat.row_dimension, ('A', 'B'))

        return cls(_A=A_mat, _B=B_mat)

    # === Properties ===

    @property
    def A(self) -> Matrix:
        """Coefficient matrix."""
        return self._A

    @property
    def B(self) -> Matrix:
        """Right-hand side."""
        return self._B

    @property
    def n_rows(self) -> int:
        """Number of equations."""
        return self._A.row_dimension

    @property
    def n_cols(self) -> int:
        """Number of unknowns per right-hand side."""
        return self._A.column_dimension

    @property
    def n_rhs(self) -> int:
        """Number of right-hand side columns."""
        return self._B.column_dimension

    @property
    def is_square(self) -> bool:
        return self._A.is_square

    @property
    def is_overdetermined(self) -> bool:
        return self.n_rows > self.n_cols


def _as_matrix(value: Any, name: str, *, allow_vector: bool) -> Matrix:
    if isinstance(value, Matrix):
        return value
    if isinstance(value, ColumnVector):
        return value.to_matrix()

    arr = check_array(value, name)
    if allow_vector and arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    check_2d(arr, name)
    check_not_empty(arr, name)
    return Matrix.from_array(arr)
