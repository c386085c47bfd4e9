"""
Linear system solving with diagnostics.

Public API:
    solve(A, B, ...) -> LinearSystemSolution

The solve() function handles:
    - Input validation (Matrix or array-like operands)
    - System construction
    - Backend selection (LU for square, QR for tall systems)
    - Result wrapping (residual, rank, timing, warnings)

Example:
    >>> from pymatrix.linsolve import solve
    >>> result = solve(A, B)
    >>> print(result.solution)
    >>> print(result.summary())
"""

from pymatrix.linsolve.design import LinearSystem
from pymatrix.linsolve.solution import LinearSystemSolution, SolveParams
from pymatrix.linsolve.solvers import solve

__all__ = [
    "solve",
    "LinearSystem",
    "LinearSystemSolution",
    "SolveParams",
]
