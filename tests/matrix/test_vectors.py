"""
Tests for ColumnVector and RowVector.
"""

import math
import pickle

import numpy as np
import pytest

from pymatrix import (
    ColumnVector,
    DimensionError,
    IndexOutOfRangeError,
    Matrix,
    RowVector,
    ValidationError,
)


class TestConstruction:

    def test_column_shape(self):
        v = ColumnVector([1, 2, 3])
        assert v.dimension == 3
        assert v.to_matrix().shape == (3, 1)

    def test_row_shape(self):
        assert RowVector([1, 2, 3]).to_matrix().shape == (1, 3)

    def test_values(self):
        assert ColumnVector([1, 2]).values == (1.0, 2.0)
        assert list(RowVector([4, 5])) == [4.0, 5.0]
        assert len(RowVector([4, 5])) == 2

    def test_rejects_empty(self):
        with pytest.raises(ValidationError):
            ColumnVector([])

    def test_rejects_2d(self):
        with pytest.raises(DimensionError):
            RowVector([[1, 2]])

    def test_from_matrix(self):
        m = Matrix([[1], [2]])
        v = ColumnVector.from_matrix(m)
        assert v.to_matrix() is m
        assert RowVector.from_matrix(m.transpose).values == (1.0, 2.0)

    def test_from_matrix_wrong_shape(self):
        with pytest.raises(DimensionError):
            ColumnVector.from_matrix(Matrix.zero(2, 2))
        with pytest.raises(DimensionError):
            RowVector.from_matrix(Matrix.zero(2, 1))

    def test_from_matrix_not_a_matrix(self):
        with pytest.raises(ValidationError):
            ColumnVector.from_matrix([[1], [2]])


class TestAccess:

    def test_value_at(self):
        assert ColumnVector([7, 8, 9]).value_at(2) == 9.0

    def test_value_at_out_of_range(self):
        with pytest.raises(IndexOutOfRangeError, match="column vector index 3"):
            ColumnVector([7, 8, 9]).value_at(3)

    def test_negative_index(self):
        with pytest.raises(IndexOutOfRangeError):
            RowVector([1]).value_at(-1)


class TestTranspose:

    def test_column_to_row(self):
        t = ColumnVector([1, 2, 3]).transpose
        assert isinstance(t, RowVector)
        assert t.values == (1.0, 2.0, 3.0)

    def test_row_to_column(self):
        assert isinstance(RowVector([1, 2]).transpose, ColumnVector)

    def test_involution(self):
        v = ColumnVector([1.5, -2.0, 3.25])
        assert v.transpose.transpose == v


class TestArithmetic:

    def test_sum_and_difference(self):
        a = ColumnVector([1, 2])
        b = ColumnVector([3, 5])
        assert a + b == ColumnVector([4, 7])
        assert b - a == ColumnVector([2, 3])

    def test_scalar(self):
        v = RowVector([2, 4])
        assert v * 0.5 == RowVector([1, 2])
        assert 3 * v == RowVector([6, 12])
        assert v / 2 == RowVector([1, 2])
        assert -v == RowVector([-2, -4])

    def test_mixed_orientation_rejected(self):
        with pytest.raises(TypeError):
            ColumnVector([1, 2]) + RowVector([1, 2])

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionError):
            ColumnVector([1, 2]) + ColumnVector([1, 2, 3])

    def test_dot(self):
        assert ColumnVector([1, 2, 3]).dot(RowVector([4, 5, 6])) == 32.0

    def test_dot_mismatch(self):
        with pytest.raises(DimensionError):
            ColumnVector([1, 2]).dot(ColumnVector([1, 2, 3]))

    def test_norm(self):
        assert ColumnVector([3, 4]).norm() == pytest.approx(5.0)
        assert RowVector([1, 1, 1, 1]).norm() == pytest.approx(2.0)

    def test_norm_matches_numpy(self, rng):
        values = rng.standard_normal(10)
        assert ColumnVector(values).norm() == pytest.approx(np.linalg.norm(values), rel=1e-14)

    def test_matrix_vector_product(self):
        A = Matrix([[1, 2], [3, 4]])
        v = ColumnVector([1, 1])
        assert ColumnVector.from_matrix(A @ v.to_matrix()) == ColumnVector([3, 7])


class TestEqualityAndImmutability:

    def test_orientation_matters(self):
        assert ColumnVector([1, 2]) != RowVector([1, 2])

    def test_hash(self):
        assert hash(ColumnVector([1, 2])) == hash(ColumnVector([1.0, 2.0]))
        assert len({ColumnVector([1, 2]), ColumnVector([1, 2])}) == 1

    def test_immutable(self):
        with pytest.raises(AttributeError):
            ColumnVector([1])._matrix = Matrix([[2]])

    def test_pickle(self):
        v = RowVector([1, 2, 3])
        assert pickle.loads(pickle.dumps(v)) == v

    def test_repr(self):
        assert repr(ColumnVector([1, 2])) == "ColumnVector([1.0, 2.0])"

    def test_array_protocol(self):
        np.testing.assert_array_equal(np.asarray(ColumnVector([1, 2])), [1.0, 2.0])
        assert math.isclose(sum(ColumnVector([0.5, 0.25])), 0.75)
