"""
Solver dispatch for linear systems.

This module provides the solve() function (public API) and backend
selection.
"""

from typing import Literal

from numpy.typing import ArrayLike

from pymatrix.core.exceptions import NotSquareError, UnsupportedOperationError
from pymatrix.linsolve.backends.cpu import CPULUBackend, CPUQRBackend
from pymatrix.linsolve.design import LinearSystem
from pymatrix.linsolve.solution import LinearSystemSolution
from pymatrix.matrix.matrix import Matrix


MethodChoice = Literal['auto', 'lu', 'qr']


def solve(
    A: Matrix | ArrayLike,
    B: Matrix | ArrayLike,
    *,
    method: MethodChoice = 'auto',
) -> LinearSystemSolution:
    """
    Solve the linear system AX = B.

    Square systems are solved exactly; systems with more equations than
    unknowns are solved in the least-squares sense:
        min_X ||AX - B||

    Args:
        A: Coefficient matrix (M x N). A Matrix or any 2D array-like.
        B: Right-hand side (M x K), or a length-M vector.
        method: Decomposition to use:
            - 'auto': LU for square A, QR for tall A
            - 'lu': LU with partial pivoting (A must be square)
            - 'qr': Householder QR (A must have M >= N)

    Returns:
        LinearSystemSolution with the solution, residual and diagnostics

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If A and B have different row dimensions
        NotSquareError: If method='lu' and A is not square
        UnsupportedOperationError: If A has more columns than rows
        SingularMatrixError: If A is singular or rank deficient
        ValueError: If method is unknown

    Example:
        >>> from pymatrix.linsolve import solve
        >>> result = solve([[3, 2], [-6, 6]], [7, 6])
        >>> result.solution.shape
        (2, 1)
        >>> print(result.summary())
    """
    # === Input Validation ===
    system = LinearSystem.build(A, B)

    # === Select Backend ===
    backend = _get_backend(method, system)

    # === Solve ===
    result = backend.solve(system)

    # === Wrap and Return ===
    return LinearSystemSolution(_result=result, _system=system)


def _get_backend(choice: MethodChoice, system: LinearSystem):
    """
    Select and instantiate the backend for a method.

    Raises:
        ValueError: If unknown method specified
        NotSquareError: If LU is requested for a non-square system
        UnsupportedOperationError: If the system is underdetermined
    """
    if choice not in ('auto', 'lu', 'qr'):
        raise ValueError(f"Unknown method: {choice!r}")

    if system.n_cols > system.n_rows and choice != 'lu':
        raise UnsupportedOperationError(
            f"solve: underdetermined systems are not supported "
            f"(A is {system.n_rows}x{system.n_cols}, more columns than rows)"
        )

    if choice == 'auto':
        return CPULUBackend() if system.is_square else CPUQRBackend()

    elif choice == 'lu':
        if not system.is_square:
            raise NotSquareError(
                f"solve: method='lu' requires a square matrix, got "
                f"{system.n_rows}x{system.n_cols}",
                shape=(system.n_rows, system.n_cols),
            )
        return CPULUBackend()

    else:
        return CPUQRBackend()
