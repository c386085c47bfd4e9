"""
Reduced QR decomposition via Householder reflections.

Factors an M x N matrix A (M >= N) into

    A = Q R

where Q is M x N with orthonormal columns and R is N x N upper triangular.
The primary use is the least-squares solution of overdetermined systems:
for full-rank A, X = R^-1 Q'B minimizes ||AX - B||.

The reflections are computed in place. After the factorization, column k
of the working buffer holds the k-th Householder vector on and below the
diagonal and row k of R above it; R's diagonal is kept separately because
elimination overwrites it with the Householder vector's leading entry.
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
    SingularMatrixError,
    ValidationError,
    find_stack_level,
)
from pymatrix.core.memo import MemoCache
from pymatrix.core.validation import check_finite, check_row_agreement

if TYPE_CHECKING:
    from pymatrix.matrix.matrix import Matrix


class ReducedQRDecomposition:
    """
    Reduced Householder QR decomposition of a matrix with M >= N.

    Args:
        matrix: The matrix to decompose
        rtol: Relative tolerance below which a diagonal entry of R counts
            as zero (see pymatrix.core.compute.tolerances)

    Attributes:
        matrix: The decomposed (source) matrix

    Raises:
        ValidationError: If the matrix has more columns than rows, or
            contains NaN or Inf
    """

    def __init__(self, matrix: Matrix, *, rtol: float = RANK_RTOL):
        from pymatrix.matrix.matrix import Matrix

        if not isinstance(matrix, Matrix):
            raise ValidationError(
                f"ReducedQRDecomposition: expected a Matrix, got {type(matrix).__name__}"
            )
        rows, cols = matrix.shape
        if rows < cols:
            raise ValidationError(
                f"ReducedQRDecomposition: matrix must have at least as many rows as "
                f"columns, got {rows}x{cols}"
            )

        self.matrix = matrix
        self._rtol = rtol
        self._rows, self._cols = rows, cols
        self._memo = MemoCache()

        QR = matrix.to_numpy()
        check_finite(QR, "ReducedQRDecomposition: matrix")
        Rdiag = np.zeros(cols)

        for k in range(cols):
            nrm = float(np.linalg.norm(QR[k:, k]))

            if nrm != 0.0:
                # Form k-th Householder vector; the sign avoids cancellation
                if QR[k, k] < 0:
                    nrm = -nrm
                QR[k:, k] /= nrm
                QR[k, k] += 1.0

                # Apply transformation to remaining columns
                s = QR[k:, k] @ QR[k:, k + 1:]
                s = -s / QR[k, k]
                QR[k:, k + 1:] += np.outer(QR[k:, k], s)

            Rdiag[k] = -nrm

        QR.flags.writeable = False
        Rdiag.flags.writeable = False
        self._QR: NDArray[np.float64] = QR
        self._Rdiag: NDArray[np.float64] = Rdiag

    # === Rank ===

    @property
    def r_diagonal(self) -> tuple[float, ...]:
        """Diagonal of the upper triangular factor R."""
        return tuple(self._Rdiag.tolist())

    @property
    def is_full_rank(self) -> bool:
        """Whether every diagonal entry of R is above the rank tolerance."""
        return self._memo.get(
            'full_rank', lambda: not bool(np.any(negligible_mask(self._Rdiag, self._rtol)))
        )

    @property
    def rank(self) -> int:
        """Number of non-negligible diagonal entries of R."""
        return numerical_rank(self._Rdiag, self._rtol)

    # === Factors ===

    @property
    def householder_matrix(self) -> Matrix:
        """Lower trapezoidal M x N matrix whose columns define the reflections."""
        return self._memo.get('householder', self._build_householder)

    def _build_householder(self) -> Matrix:
        from pymatrix.matrix.matrix import Matrix

        return Matrix._wrap(np.tril(self._QR))

    @property
    def upper_triangular_factor(self) -> Matrix:
        """R: N x N, Rdiag on the diagonal, zeros below it."""
        return self._memo.get('upper', self._build_upper)

    def _build_upper(self) -> Matrix:
        from pymatrix.matrix.matrix import Matrix

        n = self._cols
        R = np.triu(self._QR[:n, :], 1)
        R[np.arange(n), np.arange(n)] = self._Rdiag
        return Matrix._wrap(R)

    @property
    def orthogonal_factor(self) -> Matrix:
        """Q: M x N with orthonormal columns (for full-rank input)."""
        return self._memo.get('orthogonal', self._build_orthogonal)

    def _build_orthogonal(self) -> Matrix:
        from pymatrix.matrix.matrix import Matrix

        QR = self._QR
        Q = np.zeros((self._rows, self._cols))

        for k in range(self._cols - 1, -1, -1):
            Q[k, k] = 1.0
            if QR[k, k] != 0.0:
                s = QR[k:, k] @ Q[k:, k:]
                s = -s / QR[k, k]
                Q[k:, k:] += np.outer(QR[k:, k], s)

        return Matrix._wrap(Q)

    # === Solve ===

    def solve(self, B: Matrix) -> Matrix:
        """
        Least-squares solution of AX = B, where A is the decomposed matrix.

        Procedure: apply the reflections to B in forward order (Y = Q'B),
        back substitute against R, and keep the first N rows.

        Args:
            B: Right-hand side with the same row dimension as A

        Returns:
            X of shape N x B.column_dimension minimizing ||AX - B||

        Raises:
            ValidationError: If B contains NaN or Inf
            DimensionError: If B's row dimension differs from A's
            SingularMatrixError: If A is rank deficient
        """
        from pymatrix.matrix.matrix import Matrix

        if not isinstance(B, Matrix):
            raise ValidationError(f"solve: expected a Matrix, got {type(B).__name__}")
        check_row_agreement(self._rows, B.row_dimension, ('A', 'B'))
        check_finite(np.asarray(B), "solve: B")

        if not self.is_full_rank:
            rank = self.rank
            raise SingularMatrixError(
                f"solve: matrix is rank deficient (rank={rank}, expected={self._cols})",
                matrix_name='A',
                rank=rank,
                expected_rank=self._cols,
            )
        self._warn_if_ill_conditioned()

        n = self._cols
        QR = self._QR
        Rdiag = self._Rdiag
        X = B.to_numpy()

        # Compute Y = Q' B
        for k in range(n):
            s = QR[k:, k] @ X[k:, :]
            s = -s / QR[k, k]
            X[k:, :] += np.outer(QR[k:, k], s)

        # Solve R X = Y
        for k in range(n - 1, -1, -1):
            X[k, :] /= Rdiag[k]
            X[:k, :] -= np.outer(QR[:k, k], X[k, :])

        return Matrix._wrap(X[:n, :])

    @property
    def conditioning_warning(self) -> str | None:
        """Ill-conditioning message for least-squares solves, or None."""
        ratio = diagonal_ratio(self._Rdiag)
        if ratio >= ILL_CONDITIONED_RATIO:
            return None
        return (
            f"Matrix is ill-conditioned: smallest-to-largest diagonal ratio of R "
            f"{ratio:.3e} is below {ILL_CONDITIONED_RATIO:.0e}. "
            f"The least-squares solution may be inaccurate."
        )

    def _warn_if_ill_conditioned(self) -> None:
        message = self.conditioning_warning
        if message is not None:
            warnings.warn(message, IllConditionedWarning, stacklevel=find_stack_level())

    def __repr__(self) -> str:
        return (
            f"ReducedQRDecomposition(shape=({self._rows}, {self._cols}), "
            f"full_rank={self.is_full_rank})"
        )
