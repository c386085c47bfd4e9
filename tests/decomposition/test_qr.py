"""
Tests for ReducedQRDecomposition.

Validates:
    - Q R = A, orthonormal Q, triangular R, trapezoidal Householder matrix
    - Agreement with scipy.linalg.qr (economic mode)
    - Full-rank detection and rank under the relative rank tolerance
    - Least-squares solve() against numpy.linalg.lstsq
    - Errors and the ill-conditioning warning
"""

import numpy as np
import pytest
from scipy import linalg as sla

from pymatrix import (
    DimensionError,
    IllConditionedWarning,
    Matrix,
    ReducedQRDecomposition,
    SingularMatrixError,
    ValidationError,
)
from pymatrix.core.compute.tolerances import FP64


def _assert_factorization(qr, A):
    Q = np.asarray(qr.orthogonal_factor)
    R = np.asarray(qr.upper_triangular_factor)
    n = A.column_dimension
    np.testing.assert_allclose(Q @ R, np.asarray(A), rtol=FP64.rtol, atol=1e-10)
    np.testing.assert_allclose(Q.T @ Q, np.eye(n), atol=1e-12)
    np.testing.assert_array_equal(np.tril(R, -1), 0.0)


# ═══════════════════════════════════════════════════════════════════════
# Factorization
# ═══════════════════════════════════════════════════════════════════════


class TestFactors:

    def test_square_full_rank(self):
        A = Matrix([[1, 0, 2], [2, 1, 0], [3, 2, 1]])
        qr = ReducedQRDecomposition(A)
        assert qr.is_full_rank is True
        _assert_factorization(qr, A)

    def test_tall_full_rank(self):
        A = Matrix([[2, 5, 3], [4, 6, 6], [11, 3, 2], [4, -7, 9]])
        qr = A.qr_decomposition
        assert qr.orthogonal_factor.shape == (4, 3)
        assert qr.upper_triangular_factor.shape == (3, 3)
        assert qr.is_full_rank is True
        assert qr.rank == 3
        _assert_factorization(qr, A)

    def test_single_column(self):
        qr = ReducedQRDecomposition(Matrix([[3], [4]]))
        assert qr.r_diagonal == (-5.0,)
        np.testing.assert_allclose(np.asarray(qr.orthogonal_factor), [[-0.6], [-0.8]])

    def test_r_diagonal_matches_factor(self, tall_matrix):
        qr = tall_matrix.qr_decomposition
        np.testing.assert_array_equal(
            np.diag(np.asarray(qr.upper_triangular_factor)), qr.r_diagonal
        )

    def test_householder_matrix_is_trapezoidal(self, tall_matrix):
        H = np.asarray(tall_matrix.qr_decomposition.householder_matrix)
        assert H.shape == (8, 3)
        np.testing.assert_array_equal(np.triu(H, 1), 0.0)

    def test_random_tall(self, tall_matrix):
        _assert_factorization(tall_matrix.qr_decomposition, tall_matrix)

    @pytest.mark.parametrize("shape", [(4, 4), (9, 3), (6, 1)])
    def test_matches_scipy_up_to_sign(self, rng, shape):
        arr = rng.standard_normal(shape)
        qr = ReducedQRDecomposition(Matrix.from_array(arr))
        Q_ref, R_ref = sla.qr(arr, mode='economic')

        signs = np.sign(np.diag(R_ref)) * np.sign(np.asarray(qr.r_diagonal))
        np.testing.assert_allclose(np.asarray(qr.orthogonal_factor), Q_ref * signs, atol=1e-12)
        np.testing.assert_allclose(
            np.asarray(qr.upper_triangular_factor), R_ref * signs[:, None], atol=1e-12
        )

    def test_wide_rejected(self):
        with pytest.raises(ValidationError, match="at least as many rows"):
            ReducedQRDecomposition(Matrix.zero(2, 3))

    def test_rejects_non_matrix(self):
        with pytest.raises(ValidationError):
            ReducedQRDecomposition(np.eye(3))

    @pytest.mark.parametrize("bad", [np.nan, np.inf])
    def test_rejects_non_finite(self, bad):
        with pytest.raises(ValidationError, match="non-finite"):
            ReducedQRDecomposition(Matrix([[1.0, 2.0], [bad, 1.0], [0.0, 1.0]]))


# ═══════════════════════════════════════════════════════════════════════
# Rank
# ═══════════════════════════════════════════════════════════════════════


class TestRank:

    def test_dependent_columns(self):
        qr = ReducedQRDecomposition(Matrix([[1, 0, 1], [2, 1, 3], [3, 2, 5]]))
        assert qr.is_full_rank is False
        assert qr.rank == 2

    def test_proportional_columns(self, rank_deficient_tall):
        qr = rank_deficient_tall.qr_decomposition
        assert qr.is_full_rank is False
        assert qr.rank == 1

    def test_zero_column(self):
        qr = ReducedQRDecomposition(Matrix([[1, 0], [2, 0], [3, 0]]))
        assert qr.is_full_rank is False
        assert qr.r_diagonal[1] == 0.0

    def test_zero_matrix(self):
        qr = ReducedQRDecomposition(Matrix.zero(3, 2))
        assert qr.rank == 0

    def test_scale_invariant(self, tall_matrix, rank_deficient_tall):
        assert (tall_matrix * 1e-100).qr_decomposition.is_full_rank is True
        assert (rank_deficient_tall * 1e100).qr_decomposition.is_full_rank is False

    def test_rtol_override(self):
        A = Matrix([[1, 1], [1, 1 + 1e-10], [1, 1]])
        assert ReducedQRDecomposition(A).is_full_rank is True
        assert ReducedQRDecomposition(A, rtol=1e-8).is_full_rank is False

    def test_is_full_rank_memoized(self, tall_matrix):
        qr = tall_matrix.qr_decomposition
        assert qr.is_full_rank is qr.is_full_rank


# ═══════════════════════════════════════════════════════════════════════
# solve()
# ═══════════════════════════════════════════════════════════════════════


class TestSolve:

    def test_single_column(self):
        X = ReducedQRDecomposition(Matrix([[3], [4]])).solve(Matrix([[6], [8]]))
        np.testing.assert_allclose(np.asarray(X), [[2.0]], atol=1e-14)

    def test_square_exact(self):
        A = Matrix([[1, 0, 2], [2, 1, 0], [3, 2, 1]])
        B = Matrix([[5], [4], [10]])
        X = A.qr_decomposition.solve(B)
        np.testing.assert_allclose(np.asarray(A @ X), np.asarray(B), atol=1e-12)

    def test_least_squares_matches_lstsq(self, tall_matrix, rng):
        B = rng.standard_normal((8, 3))
        X = tall_matrix.qr_decomposition.solve(Matrix.from_array(B))
        expected, *_ = np.linalg.lstsq(np.asarray(tall_matrix), B, rcond=None)
        assert X.shape == (3, 3)
        np.testing.assert_allclose(np.asarray(X), expected, rtol=FP64.rtol, atol=1e-10)

    def test_residual_orthogonal_to_columns(self, tall_matrix, rng):
        B = Matrix.from_array(rng.standard_normal((8, 1)))
        X = tall_matrix.qr_decomposition.solve(B)
        residual = np.asarray(tall_matrix @ X - B)
        np.testing.assert_allclose(np.asarray(tall_matrix).T @ residual, 0.0, atol=1e-12)

    def test_consistent_tall_system(self):
        A = Matrix([[1, 0], [0, 1], [1, 1]])
        X = A.qr_decomposition.solve(Matrix([[1], [2], [3]]))
        np.testing.assert_allclose(np.asarray(X), [[1.0], [2.0]], atol=1e-12)

    def test_rank_deficient(self, rank_deficient_tall):
        with pytest.raises(SingularMatrixError) as exc_info:
            rank_deficient_tall.qr_decomposition.solve(Matrix([[1], [2], [3]]))
        assert exc_info.value.rank == 1
        assert exc_info.value.expected_rank == 2

    def test_row_mismatch(self, tall_matrix):
        with pytest.raises(DimensionError):
            tall_matrix.qr_decomposition.solve(Matrix.zero(3, 1))

    def test_ill_conditioned_warns(self):
        A = Matrix([[1, 1], [1, 1 + 1e-10], [1, 1]])
        with pytest.warns(IllConditionedWarning, match="least-squares"):
            A.qr_decomposition.solve(Matrix([[2], [2], [2]]))

    def test_warning_attributed_to_caller(self):
        qr = Matrix([[1, 1], [1, 1 + 1e-10], [1, 1]]).qr_decomposition
        with pytest.warns(IllConditionedWarning) as record:
            qr.solve(Matrix([[2], [2], [2]]))
        assert record[0].filename == __file__
        assert "least-squares" in qr.conditioning_warning

    def test_well_conditioned_has_no_message(self, tall_matrix):
        assert tall_matrix.qr_decomposition.conditioning_warning is None

    def test_non_finite_right_hand_side(self, tall_matrix):
        B = Matrix.from_array(np.full((8, 1), np.nan))
        with pytest.raises(ValidationError, match="solve: B"):
            tall_matrix.qr_decomposition.solve(B)


class TestMemoization:

    def test_factors_identical(self, tall_matrix):
        qr = tall_matrix.qr_decomposition
        assert qr.orthogonal_factor is qr.orthogonal_factor
        assert qr.upper_triangular_factor is qr.upper_triangular_factor
        assert qr.householder_matrix is qr.householder_matrix

    def test_repr(self, tall_matrix):
        assert repr(tall_matrix.qr_decomposition) == (
            "ReducedQRDecomposition(shape=(8, 3), full_rank=True)"
        )
