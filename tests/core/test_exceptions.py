"""
Tests for PyMatrix exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyMatrixError)
    - Diagnostic attributes on SingularMatrixError, NotSquareError,
      IndexOutOfRangeError
    - IndexOutOfRangeError doubles as a builtin IndexError
    - Default attribute values (None for optional attributes)
"""

import warnings

import pytest

from pymatrix.core.exceptions import (
    DimensionError,
    IllConditionedWarning,
    IndexOutOfRangeError,
    NotSquareError,
    PyMatrixError,
    SingularMatrixError,
    UnsupportedOperationError,
    ValidationError,
    find_stack_level,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyMatrixError."""

    def test_validation_error_is_pymatrix_error(self):
        with pytest.raises(PyMatrixError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_unsupported_is_pymatrix_error(self):
        with pytest.raises(PyMatrixError):
            raise UnsupportedOperationError("underdetermined")

    def test_not_square_is_unsupported(self):
        with pytest.raises(UnsupportedOperationError):
            raise NotSquareError("not square")

    def test_singular_is_unsupported(self):
        with pytest.raises(UnsupportedOperationError):
            raise SingularMatrixError("singular")

    def test_singular_is_not_validation_error(self):
        """A singular matrix is a well-formed argument."""
        assert not isinstance(SingularMatrixError("singular"), ValidationError)

    def test_index_error_is_pymatrix_error(self):
        with pytest.raises(PyMatrixError):
            raise IndexOutOfRangeError("row index 5 out of range")

    def test_index_error_is_builtin_index_error(self):
        with pytest.raises(IndexError):
            raise IndexOutOfRangeError("row index 5 out of range")

    def test_ill_conditioned_is_runtime_warning(self):
        with pytest.warns(RuntimeWarning):
            warnings.warn("nearly singular", IllConditionedWarning)


# ═══════════════════════════════════════════════════════════════════════
# Simple exceptions (no extra attributes)
# ═══════════════════════════════════════════════════════════════════════


class TestSimpleExceptions:
    """ValidationError, DimensionError, UnsupportedOperationError carry only a message."""

    def test_pymatrix_error_message(self):
        err = PyMatrixError("base error")
        assert str(err) == "base error"

    def test_validation_error_message(self):
        err = ValidationError("values: cannot convert to array")
        assert "cannot convert" in str(err)

    def test_dimension_error_message(self):
        err = DimensionError("entrywise_sum: matrix dimensions must match")
        assert "must match" in str(err)

    def test_unsupported_message(self):
        err = UnsupportedOperationError("solve: underdetermined")
        assert "underdetermined" in str(err)


# ═══════════════════════════════════════════════════════════════════════
# SingularMatrixError
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "A is singular",
            matrix_name="A",
            rank=1,
            expected_rank=2,
        )
        assert str(err) == "A is singular"
        assert err.matrix_name == "A"
        assert err.rank == 1
        assert err.expected_rank == 2

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.rank is None
        assert err.expected_rank is None

    def test_catchable_with_attributes(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            raise SingularMatrixError("singular", matrix_name="A", rank=0)
        assert exc_info.value.matrix_name == "A"
        assert exc_info.value.rank == 0


# ═══════════════════════════════════════════════════════════════════════
# NotSquareError / IndexOutOfRangeError
# ═══════════════════════════════════════════════════════════════════════


class TestNotSquareError:

    def test_shape_attribute(self):
        err = NotSquareError("determinant: matrix must be square", shape=(2, 3))
        assert err.shape == (2, 3)

    def test_shape_default_none(self):
        assert NotSquareError("not square").shape is None


class TestIndexOutOfRangeError:

    def test_attributes(self):
        err = IndexOutOfRangeError("row index 4 out of range [0, 3)", index=4, length=3)
        assert err.index == 4
        assert err.length == 3

    def test_defaults_are_none(self):
        err = IndexOutOfRangeError("out of range")
        assert err.index is None
        assert err.length is None


class TestFindStackLevel:

    def test_direct_call_from_outside_package(self):
        assert find_stack_level() == 1

    def test_warning_lands_on_caller(self):
        with pytest.warns(IllConditionedWarning) as record:
            warnings.warn("nearly singular", IllConditionedWarning, stacklevel=find_stack_level())
        assert record[0].filename == __file__
