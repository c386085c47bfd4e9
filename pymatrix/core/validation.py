"""
Input validation utilities for PyMatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types, ragged nesting or
    non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number) and result.dtype != np.bool_:
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype}, expected real data")

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.float64], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.float64], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.float64], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.float64], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_not_empty(array: NDArray[np.float64], name: str) -> None:
    """
    Verify array holds at least one value.

    Raises:
        ValidationError: If array has no elements
    """
    if array.size == 0:
        raise ValidationError(f"{name}: must contain at least one value, got shape {array.shape}")


def check_column_dimension(column_dimension: int, n_values: int, name: str) -> None:
    """
    Verify a flat value count fills a whole number of rows.

    Args:
        column_dimension: Declared number of columns
        n_values: Number of values supplied
        name: Parameter name for error messages

    Raises:
        ValidationError: If column_dimension is not a positive integer, or
            n_values is not a positive multiple of it
    """
    if isinstance(column_dimension, bool) or not isinstance(column_dimension, (int, np.integer)):
        raise ValidationError(
            f"{name}: column_dimension must be an integer, got {type(column_dimension).__name__}"
        )
    if column_dimension < 1:
        raise ValidationError(f"{name}: column_dimension must be >= 1, got {column_dimension}")
    if n_values == 0 or n_values % column_dimension != 0:
        raise ValidationError(
            f"{name}: the number of values ({n_values}) must be a positive multiple "
            f"of column_dimension ({column_dimension})"
        )


def check_row_lengths(rows: Sequence[Sequence[Any]], name: str) -> int:
    """
    Verify a list of rows is non-empty and rectangular.

    Args:
        rows: Sequence of row sequences
        name: Parameter name for error messages

    Returns:
        The common row length (column dimension)

    Raises:
        ValidationError: If there are no rows, a row is empty, or rows
            differ in length
    """
    if len(rows) == 0:
        raise ValidationError(f"{name}: must contain at least one row")

    lengths = [len(row) for row in rows]
    if lengths[0] == 0:
        raise ValidationError(f"{name}: rows must contain at least one value")
    if len(set(lengths)) > 1:
        raise ValidationError(f"{name}: rows have unequal lengths {lengths}")
    return lengths[0]


def check_same_shape(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two operands of an entrywise operation have identical shapes.

    Raises:
        DimensionError: If the shapes differ
    """
    if shape_a != shape_b:
        raise DimensionError(
            f"{operation}: matrix dimensions must match, got {shape_a[0]}x{shape_a[1]} "
            f"and {shape_b[0]}x{shape_b[1]}"
        )


def check_inner_dimensions(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
) -> None:
    """
    Verify A's column dimension equals B's row dimension.

    Raises:
        DimensionError: If the inner dimensions disagree
    """
    if shape_a[1] != shape_b[0]:
        raise DimensionError(
            f"matrix_product: inner dimensions must agree, got {shape_a[0]}x{shape_a[1]} "
            f"and {shape_b[0]}x{shape_b[1]}"
        )


def check_row_agreement(rows_a: int, rows_b: int, names: tuple[str, str]) -> None:
    """
    Verify the left- and right-hand sides of a system share a row dimension.

    Raises:
        DimensionError: If the row dimensions differ
    """
    if rows_a != rows_b:
        raise DimensionError(
            f"row dimensions must agree: {names[0]} has {rows_a} rows, "
            f"{names[1]} has {rows_b}"
        )


def check_index(index: int, length: int, axis: str) -> None:
    """
    Verify an index addresses an existing row or column.

    Args:
        index: Index to check (negative indices are rejected)
        length: Number of rows or columns
        axis: 'row' or 'column', for error messages

    Raises:
        IndexOutOfRangeError: If index is outside [0, length)
    """
    if index < 0 or index >= length:
        raise IndexOutOfRangeError(
            f"{axis} index {index} out of range [0, {length})",
            index=index,
            length=length,
        )


def check_slice_bounds(start: int, end: int, length: int, axis: str) -> None:
    """
    Verify an end-exclusive slice is non-empty and inside the matrix.

    Raises:
        ValidationError: If end is not strictly greater than start
        IndexOutOfRangeError: If the slice extends outside [0, length]
    """
    if end <= start:
        raise ValidationError(
            f"sub_matrix: {axis} end index ({end}) must be greater than "
            f"{axis} start index ({start})"
        )
    if start < 0 or end > length:
        raise IndexOutOfRangeError(
            f"sub_matrix: {axis} range [{start}, {end}) out of range [0, {length}]",
            index=start if start < 0 else end,
            length=length,
        )
