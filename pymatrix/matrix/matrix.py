"""
Immutable dense matrix.

Matrix stores float64 values row-packed in a read-only numpy array. Every
arithmetic or transforming operation returns a new Matrix; derived state
(decompositions, inverse, packed value tuples, hash) is computed on first
request and memoized for the lifetime of the instance.

Construction:
    Matrix([[1, 2, 3], [4, 5, 6]])            # from rows
    Matrix([1, 2, 3, 4, 5, 6], 3)             # row-packed values + column count
    Matrix.from_array(np.eye(3))              # from a 2D array-like
    Matrix.constant(1.0, 2, 3)
    Matrix.zero(2, 3)
    Matrix.identity(3)

Operators:
    A + B, A - B, -A      entrywise sum, difference, negation
    A * s, s * A, A / s   scalar product and division (real scalars only)
    A @ B                 matrix product
"""

from __future__ import annotations

import numbers
from collections.abc import Iterator, Sequence
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import (
    DimensionError,
    NotSquareError,
    UnsupportedOperationError,
    ValidationError,
)
from pymatrix.core.memo import MemoCache
from pymatrix.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_column_dimension,
    check_index,
    check_inner_dimensions,
    check_not_empty,
    check_row_agreement,
    check_row_lengths,
    check_same_shape,
    check_slice_bounds,
)

if TYPE_CHECKING:
    from pymatrix.decomposition.lu import PivotingLUDecomposition
    from pymatrix.decomposition.qr import ReducedQRDecomposition


class Matrix:
    """
    Immutable dense matrix of double-precision values.

    Args:
        values: Either a sequence of equal-length rows, or (when
            column_dimension is given) a flat row-packed sequence
        column_dimension: Number of columns for flat input

    Raises:
        ValidationError: If the input is empty, rows differ in length, or
            the flat value count is not a multiple of column_dimension
    """

    __slots__ = ('_data', '_memo')

    # Keep numpy operators from converting a Matrix operand to an ndarray;
    # mixed expressions fall through to the Matrix reflected operators.
    __array_ufunc__ = None

    _data: NDArray[np.float64]
    _memo: MemoCache

    def __init__(
        self,
        values: Sequence[Sequence[float]] | Sequence[float] | NDArray[Any],
        column_dimension: int | None = None,
    ):
        if column_dimension is None:
            data = _rows_to_array(values)
        else:
            data = _flat_to_array(values, column_dimension)
        self._assign(data)

    def _assign(self, data: NDArray[np.float64]) -> None:
        data = np.array(data, dtype=np.float64, order='C', copy=True)
        data.flags.writeable = False
        object.__setattr__(self, '_data', data)
        object.__setattr__(self, '_memo', MemoCache())

    # === Alternate constructors ===

    @classmethod
    def _wrap(cls, data: NDArray[np.floating[Any]]) -> Matrix:
        """Build from an already-validated 2D array (copied)."""
        matrix = cls.__new__(cls)
        matrix._assign(data)
        return matrix

    @classmethod
    def from_list(cls, values: Sequence[float], column_dimension: int) -> Matrix:
        """
        Build from row-packed values.

            Matrix.from_list([1.0, 2.0, 3.0,
                              4.0, 5.0, 6.0], 3)   # 2 x 3

        Raises:
            ValidationError: If len(values) is not a positive multiple of
                column_dimension
        """
        return cls(values, column_dimension)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Matrix:
        """Build from a sequence of equal-length rows."""
        return cls(rows)

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix:
        """
        Build from any 2D numeric array-like.

        Raises:
            ValidationError: If the input is non-numeric or empty
            DimensionError: If the input is not 2D
        """
        arr = check_array(array, 'array')
        check_2d(arr, 'array')
        check_not_empty(arr, 'array')
        return cls._wrap(arr)

    @classmethod
    def constant(cls, value: float, row_dimension: int, column_dimension: int) -> Matrix:
        """Matrix with every entry set to value."""
        _check_dimensions(row_dimension, column_dimension)
        return cls._wrap(np.full((row_dimension, column_dimension), float(value)))

    @classmethod
    def zero(cls, row_dimension: int, column_dimension: int) -> Matrix:
        """Matrix of zeros."""
        _check_dimensions(row_dimension, column_dimension)
        return cls._wrap(np.zeros((row_dimension, column_dimension)))

    @classmethod
    def identity(cls, size: int) -> Matrix:
        """Square identity matrix."""
        _check_dimensions(size, size)
        return cls._wrap(np.eye(size))

    # === Shape ===

    @property
    def row_dimension(self) -> int:
        """Number of rows."""
        return self._data.shape[0]

    @property
    def column_dimension(self) -> int:
        """Number of columns."""
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        """(row_dimension, column_dimension)."""
        return self._data.shape

    @property
    def is_square(self) -> bool:
        return self.row_dimension == self.column_dimension

    # === Value access ===

    @property
    def values(self) -> tuple[float, ...]:
        """Values in row-packed order."""
        return self.values_row_packed

    @property
    def values_row_packed(self) -> tuple[float, ...]:
        """Values in row-packed order: all of row 0, then all of row 1, ..."""
        return self._memo.get('row_packed', lambda: tuple(self._data.ravel().tolist()))

    @property
    def values_column_packed(self) -> tuple[float, ...]:
        """Values in column-packed order: all of column 0, then column 1, ..."""
        return self._memo.get(
            'column_packed', lambda: tuple(self._data.ravel(order='F').tolist())
        )

    def value_at(self, row: int, column: int) -> float:
        """
        Value at (row, column), zero-indexed.

        Bounds are not checked beyond what numpy indexing enforces.
        """
        return float(self._data[row, column])

    def row_at(self, index: int) -> tuple[float, ...]:
        """
        Copy of the row at index.

        Raises:
            IndexOutOfRangeError: If index is negative or >= row_dimension
        """
        check_index(index, self.row_dimension, 'row')
        return tuple(self._data[index].tolist())

    def column_at(self, index: int) -> tuple[float, ...]:
        """
        Copy of the column at index.

        Raises:
            IndexOutOfRangeError: If index is negative or >= column_dimension
        """
        check_index(index, self.column_dimension, 'column')
        return tuple(self._data[:, index].tolist())

    def sub_matrix(self, row_start: int, row_end: int, col_start: int, col_end: int) -> Matrix:
        """
        Rectangular slice [row_start, row_end) x [col_start, col_end).

        Raises:
            ValidationError: If an end index is not greater than its start
            IndexOutOfRangeError: If the slice extends outside the matrix
        """
        check_slice_bounds(row_start, row_end, self.row_dimension, 'row')
        check_slice_bounds(col_start, col_end, self.column_dimension, 'column')
        return Matrix._wrap(self._data[row_start:row_end, col_start:col_end])

    def to_numpy(self) -> NDArray[np.float64]:
        """Writable copy of the values as a 2D array."""
        return self._data.copy()

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        arr = self._data if dtype is None else self._data.astype(dtype)
        if copy:
            arr = arr.copy()
        return arr

    def __getitem__(self, key: int | tuple[int, int]) -> tuple[float, ...] | float:
        if isinstance(key, tuple):
            row, column = key
            check_index(row, self.row_dimension, 'row')
            check_index(column, self.column_dimension, 'column')
            return self.value_at(row, column)
        return self.row_at(key)

    def __iter__(self) -> Iterator[tuple[float, ...]]:
        for row in self._data:
            yield tuple(row.tolist())

    def __len__(self) -> int:
        return self.row_dimension

    # === Transforms and arithmetic ===

    @property
    def transpose(self) -> Matrix:
        """Transpose: dimensions swapped, values taken column-packed."""
        return Matrix._wrap(self._data.T)

    def entrywise_sum(self, other: Matrix) -> Matrix:
        """
        Entrywise sum C_ij = A_ij + B_ij.

        Raises:
            DimensionError: If the dimensions differ
        """
        other = _require_matrix(other, 'entrywise_sum')
        check_same_shape(self.shape, other.shape, 'entrywise_sum')
        return Matrix._wrap(self._data + other._data)

    def entrywise_difference(self, other: Matrix) -> Matrix:
        """
        Entrywise difference C_ij = A_ij - B_ij.

        Raises:
            DimensionError: If the dimensions differ
        """
        other = _require_matrix(other, 'entrywise_difference')
        check_same_shape(self.shape, other.shape, 'entrywise_difference')
        return Matrix._wrap(self._data - other._data)

    def entrywise_product(self, other: Matrix) -> Matrix:
        """
        Entrywise (Hadamard) product C_ij = A_ij * B_ij.

        Raises:
            DimensionError: If the dimensions differ
        """
        other = _require_matrix(other, 'entrywise_product')
        check_same_shape(self.shape, other.shape, 'entrywise_product')
        return Matrix._wrap(self._data * other._data)

    def scalar_product(self, s: float) -> Matrix:
        """Every value multiplied by s."""
        _require_real(s, 'scalar_product')
        return Matrix._wrap(self._data * float(s))

    def scalar_division(self, s: float) -> Matrix:
        """
        Every value divided by s.

        Division by zero follows IEEE-754 (inf, or nan for 0/0).
        """
        _require_real(s, 'scalar_division')
        with np.errstate(divide='ignore', invalid='ignore'):
            return Matrix._wrap(self._data / float(s))

    def matrix_product(self, other: Matrix) -> Matrix:
        """
        Matrix product AB.

        Raises:
            DimensionError: If A's column dimension differs from B's row
                dimension
        """
        other = _require_matrix(other, 'matrix_product')
        check_inner_dimensions(self.shape, other.shape)
        return Matrix._wrap(self._data @ other._data)

    def __add__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.entrywise_sum(other)

    def __sub__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.entrywise_difference(other)

    def __mul__(self, other: object) -> Matrix:
        if not _is_real(other):
            return NotImplemented
        return self.scalar_product(other)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Matrix:
        if not _is_real(other):
            return NotImplemented
        return self.scalar_division(other)

    def __matmul__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matrix_product(other)

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._data)

    # === Decompositions ===

    @property
    def lu_decomposition(self) -> PivotingLUDecomposition:
        """LU decomposition with partial pivoting (memoized)."""
        from pymatrix.decomposition.lu import PivotingLUDecomposition

        return self._memo.get('lu', lambda: PivotingLUDecomposition(self))

    @property
    def qr_decomposition(self) -> ReducedQRDecomposition:
        """
        Reduced Householder QR decomposition (memoized).

        Raises:
            ValidationError: If the matrix has more columns than rows
        """
        from pymatrix.decomposition.qr import ReducedQRDecomposition

        return self._memo.get('qr', lambda: ReducedQRDecomposition(self))

    @property
    def determinant(self) -> float:
        """
        Determinant, via the LU decomposition.

        Raises:
            ValidationError: If the matrix contains NaN or Inf
            NotSquareError: If the matrix is not square
        """
        return self.lu_decomposition.determinant

    @property
    def is_non_singular(self) -> bool:
        """
        Whether the matrix is square and invertible.

        Raises:
            ValidationError: If a square matrix contains NaN or Inf
        """
        if not self.is_square:
            return False
        return self.lu_decomposition.is_non_singular

    def solve(self, B: Matrix) -> Matrix:
        """
        Solve AX = B for X, where A is this matrix.

        Square A is solved exactly via LU; A with more rows than columns
        yields the least-squares solution via QR.

        Raises:
            ValidationError: If A or B contains NaN or Inf
            UnsupportedOperationError: If A has more columns than rows
            DimensionError: If B's row dimension differs from A's
            SingularMatrixError: If A is singular (square) or rank
                deficient (tall)
        """
        B = _require_matrix(B, 'solve')
        if self.column_dimension > self.row_dimension:
            raise UnsupportedOperationError(
                f"solve: underdetermined systems are not supported "
                f"(matrix is {self.row_dimension}x{self.column_dimension}, "
                f"more columns than rows)"
            )
        check_row_agreement(self.row_dimension, B.row_dimension, ('A', 'B'))

        if self.is_square:
            return self.lu_decomposition.solve(B)
        return self.qr_decomposition.solve(B)

    def solve_transpose(self, B: Matrix) -> Matrix:
        """
        Solve XA = B for X, where A is this matrix.

        Computed as the transpose of A'X' = B'.

        Raises:
            UnsupportedOperationError: If A has more rows than columns
            DimensionError: If B's column dimension differs from A's
            SingularMatrixError: If A' is singular or rank deficient
        """
        B = _require_matrix(B, 'solve_transpose')
        if self.row_dimension > self.column_dimension:
            raise UnsupportedOperationError(
                f"solve_transpose: matrix is {self.row_dimension}x{self.column_dimension}, "
                f"more rows than columns"
            )
        if B.column_dimension != self.column_dimension:
            raise DimensionError(
                f"column dimensions must agree: A has {self.column_dimension} columns, "
                f"B has {B.column_dimension}"
            )
        return self.transpose.solve(B.transpose).transpose

    @property
    def inverse(self) -> Matrix:
        """
        Inverse matrix, computed as the LU solution of AX = I (memoized).

        Raises:
            ValidationError: If the matrix contains NaN or Inf
            NotSquareError: If the matrix is not square
            SingularMatrixError: If the matrix is singular
        """
        return self._memo.get('inverse', self._compute_inverse)

    def _compute_inverse(self) -> Matrix:
        if not self.is_square:
            raise NotSquareError(
                f"inverse: matrix must be square, got "
                f"{self.row_dimension}x{self.column_dimension}",
                shape=self.shape,
            )
        return self.lu_decomposition.solve(Matrix.identity(self.row_dimension))

    # === Equality ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        # Adding 0.0 folds -0.0 into 0.0, which compare equal.
        return self._memo.get(
            'hash', lambda: hash((self.shape, (self._data + 0.0).tobytes()))
        )

    # === Immutability ===

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Matrix is immutable; cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Matrix is immutable; cannot delete '{name}'")

    def __reduce__(self) -> tuple[Any, ...]:
        return (Matrix, (self.values, self.column_dimension))

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"


def _rows_to_array(rows: Any) -> NDArray[np.float64]:
    """Validate a row sequence (or 2D array) and convert it to a 2D array."""
    if isinstance(rows, np.ndarray):
        arr = check_array(rows, 'rows')
        check_2d(arr, 'rows')
        check_not_empty(arr, 'rows')
        return arr

    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise ValidationError(
            f"rows: expected a sequence of rows, got {type(rows).__name__}"
        )
    for i, row in enumerate(rows):
        if np.ndim(row) != 1 or isinstance(row, (str, bytes)):
            raise ValidationError(
                f"rows: row {i} is not a sequence of numbers "
                f"(pass column_dimension for flat row-packed values)"
            )
    check_row_lengths(rows, 'rows')
    return check_array(rows, 'rows')


def _flat_to_array(values: Any, column_dimension: int) -> NDArray[np.float64]:
    """Validate row-packed values and reshape them to rows."""
    arr = check_array(values, 'values')
    check_1d(arr, 'values')
    check_column_dimension(column_dimension, arr.size, 'values')
    return arr.reshape(-1, int(column_dimension))


def _check_dimensions(row_dimension: int, column_dimension: int) -> None:
    for name, dim in (('row_dimension', row_dimension), ('column_dimension', column_dimension)):
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 1:
            raise ValidationError(f"{name} must be a positive integer, got {dim!r}")


def _is_real(value: object) -> bool:
    return isinstance(value, numbers.Real)


def _require_real(value: object, operation: str) -> None:
    if not _is_real(value):
        raise ValidationError(
            f"{operation}: expected a real scalar, got {type(value).__name__}"
        )


def _require_matrix(value: object, operation: str) -> Matrix:
    if not isinstance(value, Matrix):
        raise ValidationError(
            f"{operation}: expected a Matrix operand, got {type(value).__name__}"
        )
    return value
