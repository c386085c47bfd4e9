"""
Row and column vectors.

Vectors are distinct types that wrap a general Matrix of shape n x 1
(ColumnVector) or 1 x n (RowVector) rather than subclassing it. They
convert to and from Matrix explicitly, and transposing one yields the
other.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterator, Sequence

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.core.validation import check_1d, check_array, check_index, check_not_empty
from pymatrix.matrix.matrix import Matrix


class _Vector:
    """Shared behavior of ColumnVector and RowVector."""

    __slots__ = ('_matrix',)

    __array_ufunc__ = None

    _orientation: str = ''

    def __init__(self, values: Sequence[float] | NDArray[np.floating]):
        arr = check_array(values, 'values')
        check_1d(arr, 'values')
        check_not_empty(arr, 'values')
        object.__setattr__(self, '_matrix', self._shape_values(arr))

    @classmethod
    def _shape_values(cls, arr: NDArray[np.float64]) -> Matrix:
        raise NotImplementedError

    @classmethod
    def _wrap(cls, matrix: Matrix):
        vector = cls.__new__(cls)
        object.__setattr__(vector, '_matrix', matrix)
        return vector

    @property
    def dimension(self) -> int:
        """Number of entries."""
        return len(self._matrix.values)

    @property
    def values(self) -> tuple[float, ...]:
        return self._matrix.values

    def value_at(self, index: int) -> float:
        """
        Entry at index.

        Raises:
            IndexOutOfRangeError: If index is negative or >= dimension
        """
        check_index(index, self.dimension, self._orientation)
        return self._matrix.values[index]

    def to_matrix(self) -> Matrix:
        """The wrapped Matrix (immutable, so shared rather than copied)."""
        return self._matrix

    def dot(self, other: _Vector) -> float:
        """
        Inner product with another vector of either orientation.

        Raises:
            DimensionError: If the dimensions differ
        """
        if not isinstance(other, _Vector):
            raise ValidationError(f"dot: expected a vector, got {type(other).__name__}")
        if other.dimension != self.dimension:
            raise DimensionError(
                f"dot: vector dimensions must match, got {self.dimension} and {other.dimension}"
            )
        return float(np.dot(np.ravel(self._matrix), np.ravel(other._matrix)))

    def norm(self) -> float:
        """Euclidean norm."""
        return math.hypot(*self.values)

    def __add__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        return self._wrap(self._matrix + other._matrix)

    def __sub__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        return self._wrap(self._matrix - other._matrix)

    def __mul__(self, other: object):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return self._wrap(self._matrix * other)

    __rmul__ = __mul__

    def __truediv__(self, other: object):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return self._wrap(self._matrix / other)

    def __neg__(self):
        return self._wrap(-self._matrix)

    def __array__(self, dtype=None, copy=None):
        arr = np.ravel(self._matrix)
        if dtype is not None:
            arr = arr.astype(dtype)
        if copy:
            arr = arr.copy()
        return arr

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __len__(self) -> int:
        return self.dimension

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._matrix == other._matrix

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._matrix))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable; cannot set '{name}'")

    def __reduce__(self):
        return (type(self), (self.values,))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.values)!r})"


class ColumnVector(_Vector):
    """
    n x 1 vector.

        v = ColumnVector([1.0, 2.0, 3.0])
        A @ v.to_matrix()              # matrix-vector product
        ColumnVector.from_matrix(A.solve(v.to_matrix()))
    """

    __slots__ = ()
    _orientation = 'column vector'

    @classmethod
    def _shape_values(cls, arr: NDArray[np.float64]) -> Matrix:
        return Matrix._wrap(arr.reshape(-1, 1))

    @classmethod
    def from_matrix(cls, matrix: Matrix) -> ColumnVector:
        """
        Wrap an n x 1 Matrix.

        Raises:
            DimensionError: If the matrix has more than one column
        """
        if not isinstance(matrix, Matrix):
            raise ValidationError(f"from_matrix: expected a Matrix, got {type(matrix).__name__}")
        if matrix.column_dimension != 1:
            raise DimensionError(
                f"ColumnVector.from_matrix: expected an n x 1 matrix, got "
                f"{matrix.row_dimension}x{matrix.column_dimension}"
            )
        return cls._wrap(matrix)

    @property
    def transpose(self) -> RowVector:
        return RowVector._wrap(self._matrix.transpose)


class RowVector(_Vector):
    """1 x n vector."""

    __slots__ = ()
    _orientation = 'row vector'

    @classmethod
    def _shape_values(cls, arr: NDArray[np.float64]) -> Matrix:
        return Matrix._wrap(arr.reshape(1, -1))

    @classmethod
    def from_matrix(cls, matrix: Matrix) -> RowVector:
        """
        Wrap a 1 x n Matrix.

        Raises:
            DimensionError: If the matrix has more than one row
        """
        if not isinstance(matrix, Matrix):
            raise ValidationError(f"from_matrix: expected a Matrix, got {type(matrix).__name__}")
        if matrix.row_dimension != 1:
            raise DimensionError(
                f"RowVector.from_matrix: expected a 1 x n matrix, got "
                f"{matrix.row_dimension}x{matrix.column_dimension}"
            )
        return cls._wrap(matrix)

    @property
    def transpose(self) -> ColumnVector:
        return ColumnVector._wrap(self._matrix.transpose)
