"""
LU decomposition with partial pivoting.

Factors an M x N matrix A into

    P A = L U

where P is an M x M permutation matrix, L is M x K lower triangular with a
unit diagonal and U is K x N upper triangular (K = min(M, N)). The
primary use is the exact solution of square systems; pivoting on the
largest-magnitude candidate limits the growth of rounding error.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.tolerances import (
    ILL_CONDITIONED_RATIO,
    RANK_RTOL,
    diagonal_ratio,
    negligible_mask,
    numerical_rank,
)
from pymatrix.core.exceptions import (
    IllConditionedWarning,
    NotSquareError,
    SingularMatrixError,
    ValidationError,
    find_stack_level,
)
from pymatrix.core.memo import MemoCache
from pymatrix.core.validation import check_finite, check_row_agreement

if TYPE_CHECKING:
    from pymatrix.matrix.matrix import Matrix


class PivotingLUDecomposition:
    """
    LU decomposition of a matrix, with partial (row) pivoting.

    The factorization runs to completion in the constructor. L and U are
    kept packed in a single buffer: multipliers below the diagonal (the
    unit diagonal of L is implied), U on and above it.

    Args:
        matrix: The matrix to decompose
        rtol: Relative tolerance below which a diagonal entry of U counts
            as zero (see pymatrix.core.compute.tolerances)

    Attributes:
        matrix: The decomposed (source) matrix

    Raises:
        ValidationError: If the matrix contains NaN or Inf
    """

    def __init__(self, matrix: Matrix, *, rtol: float = RANK_RTOL):
        from pymatrix.matrix.matrix import Matrix

        if not isinstance(matrix, Matrix):
            raise ValidationError(
                f"PivotingLUDecomposition: expected a Matrix, got {type(matrix).__name__}"
            )

        self.matrix = matrix
        self._rtol = rtol
        self._rows, self._cols = matrix.shape
        self._memo = MemoCache()

        LU = matrix.to_numpy()
        check_finite(LU, "PivotingLUDecomposition: matrix")
        piv = np.arange(self._rows)
        pivot_sign = 1.0

        for j in range(min(self._rows, self._cols)):
            # argmax returns the first index on ties
            p = j + int(np.argmax(np.abs(LU[j:, j])))

            if p != j:
                LU[[p, j], :] = LU[[j, p], :]
                piv[[p, j]] = piv[[j, p]]
                pivot_sign = -pivot_sign

            # An exactly zero pivot leaves the column as is; the zero on
            # U's diagonal marks the matrix singular.
            if LU[j, j] != 0.0:
                LU[j + 1:, j] /= LU[j, j]
                LU[j + 1:, j + 1:] -= np.outer(LU[j + 1:, j], LU[j, j + 1:])

        LU.flags.writeable = False
        piv.flags.writeable = False
        self._LU: NDArray[np.float64] = LU
        self._piv: NDArray[np.intp] = piv
        self._pivot_sign = pivot_sign

    # === Packed state ===

    @property
    def pivot(self) -> tuple[int, ...]:
        """
        Row permutation: row i of P A is row pivot[i] of A.

        A pivot vector of (0, 2, 3, 1) corresponds to the pivot matrix

            1 0 0 0
            0 0 1 0
            0 0 0 1
            0 1 0 0
        """
        return tuple(int(i) for i in self._piv)

    @property
    def pivot_sign(self) -> int:
        """+1 for an even number of row exchanges, -1 for odd."""
        return int(self._pivot_sign)

    def _diagonal(self) -> NDArray[np.float64]:
        return np.diagonal(self._LU)

    def _require_square(self, operation: str) -> None:
        if self._rows != self._cols:
            raise NotSquareError(
                f"{operation}: matrix must be square, got {self._rows}x{self._cols}",
                shape=(self._rows, self._cols),
            )

    # === Factors ===

    @property
    def lower_factor(self) -> Matrix:
        """L: M x K, unit diagonal, zeros above the diagonal."""
        return self._memo.get('lower', self._build_lower)

    def _build_lower(self) -> Matrix:
        from pymatrix.matrix.matrix import Matrix

        k = min(self._rows, self._cols)
        L = np.tril(self._LU[:, :k], -1)
        L[:k, :k] += np.eye(k)
        return Matrix._wrap(L)

    @property
    def upper_factor(self) -> Matrix:
        """U: K x N, zeros below the diagonal."""
        return self._memo.get('upper', self._build_upper)

    def _build_upper(self) -> Matrix:
        from pymatrix.matrix.matrix import Matrix

        k = min(self._rows, self._cols)
        return Matrix._wrap(np.triu(self._LU[:k, :]))

    @property
    def pivot_matrix(self) -> Matrix:
        """P: M x M permutation matrix with P[i, pivot[i]] = 1."""
        return self._memo.get('pivot_matrix', self._build_pivot_matrix)

    def _build_pivot_matrix(self) -> Matrix:
        from pymatrix.matrix.matrix import Matrix

        P = np.zeros((self._rows, self._rows))
        P[np.arange(self._rows), self._piv] = 1.0
        return Matrix._wrap(P)

    # === Derived quantities ===

    @property
    def is_non_singular(self) -> bool:
        """
        Whether the decomposed matrix is invertible.

        True iff no diagonal entry of U is negligible under the rank
        tolerance.

        Raises:
            NotSquareError: If the decomposed matrix is not square
        """
        self._require_square('is_non_singular')
        return not bool(np.any(negligible_mask(self._diagonal(), self._rtol)))

    @property
    def rank(self) -> int:
        """Number of non-negligible diagonal entries of U."""
        return numerical_rank(self._diagonal(), self._rtol)

    @property
    def determinant(self) -> float:
        """
        Determinant: pivot sign times the product of U's diagonal.

        Raises:
            NotSquareError: If the decomposed matrix is not square
        """
        self._require_square('determinant')
        return self._memo.get(
            'determinant', lambda: float(self._pivot_sign * np.prod(self._diagonal()))
        )

    # === Solve ===

    def solve(self, B: Matrix) -> Matrix:
        """
        Solve AX = B for X, where A is the decomposed matrix.

        Procedure: permute B's rows by the pivot vector, forward substitute
        with the unit lower factor, then back substitute with the upper
        factor.

        Args:
            B: Right-hand side with the same row dimension as A

        Returns:
            X with A's column dimension rows and B's column dimension
            columns

        Raises:
            ValidationError: If B contains NaN or Inf
            DimensionError: If B's row dimension differs from A's
            NotSquareError: If A is not square
            SingularMatrixError: If A is singular
        """
        from pymatrix.matrix.matrix import Matrix

        if not isinstance(B, Matrix):
            raise ValidationError(f"solve: expected a Matrix, got {type(B).__name__}")
        check_row_agreement(self._rows, B.row_dimension, ('A', 'B'))
        check_finite(np.asarray(B), "solve: B")

        if not self.is_non_singular:
            rank = self.rank
            raise SingularMatrixError(
                f"solve: matrix is singular (rank={rank}, expected={self._cols})",
                matrix_name='A',
                rank=rank,
                expected_rank=self._cols,
            )
        self._warn_if_ill_conditioned()

        n = self._cols
        LU = self._LU
        X = np.asarray(B)[self._piv, :].astype(np.float64, copy=True)

        # Solve L Y = B(piv, :)
        for k in range(n):
            X[k + 1:, :] -= np.outer(LU[k + 1:n, k], X[k, :])

        # Solve U X = Y
        for k in range(n - 1, -1, -1):
            X[k, :] /= LU[k, k]
            X[:k, :] -= np.outer(LU[:k, k], X[k, :])

        return Matrix._wrap(X)

    @property
    def conditioning_warning(self) -> str | None:
        """
        Ill-conditioning message for solves against this factorization, or
        None when the smallest-to-largest pivot ratio is acceptable.
        """
        ratio = diagonal_ratio(self._diagonal())
        if ratio >= ILL_CONDITIONED_RATIO:
            return None
        return (
            f"Matrix is ill-conditioned: smallest-to-largest pivot ratio "
            f"{ratio:.3e} is below {ILL_CONDITIONED_RATIO:.0e}. "
            f"The solution may be inaccurate."
        )

    def _warn_if_ill_conditioned(self) -> None:
        message = self.conditioning_warning
        if message is not None:
            warnings.warn(message, IllConditionedWarning, stacklevel=find_stack_level())

    def __repr__(self) -> str:
        return (
            f"PivotingLUDecomposition(shape=({self._rows}, {self._cols}), "
            f"pivot={self.pivot}, pivot_sign={self.pivot_sign})"
        )

