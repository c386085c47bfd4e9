"""
Linear solve solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from pymatrix.core.result import Result
from pymatrix.matrix.matrix import Matrix

if TYPE_CHECKING:
    from pymatrix.linsolve.design import LinearSystem


@dataclass(frozen=True)
class SolveParams:
    """
    Parameter payload for a linear solve.

    This is the immutable data computed by backends.
    """
    solution: Matrix
    residual: Matrix
    residual_norm: float
    rank: int


@dataclass
class LinearSystemSolution:
    """
    User-facing solve results.

    Wraps the backend Result and provides accessors for the solution and
    its diagnostics.
    """
    _result: Result[SolveParams]
    _system: 'LinearSystem'

    @property
    def solution(self) -> Matrix:
        """X, with one column per right-hand side column."""
        return self._result.params.solution

    @property
    def residual(self) -> Matrix:
        """A X - B."""
        return self._result.params.residual

    @property
    def residual_norm(self) -> float:
        """Frobenius norm of the residual."""
        return self._result.params.residual_norm

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def method(self) -> str:
        return self._result.info['method']

    @property
    def determinant(self) -> float | None:
        """Determinant of A for LU solves, None for least squares."""
        return self._result.info.get('determinant')

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate a plain-text summary."""
        lines = [
            "Linear System Solution",
            "=" * 60,
            f"System: {self._system.n_rows} x {self._system.n_cols}, "
            f"{self._system.n_rhs} right-hand side(s)",
            f"Method: {self.method}",
            f"Rank: {self.rank}",
        ]
        if self.determinant is not None:
            lines.append(f"Determinant: {self.determinant:.6g}")
        lines.append(f"Residual norm: {self.residual_norm:.6e}")
        lines.append("")
        lines.append("Solution:")
        lines.append("-" * 60)

        for i, row in enumerate(self.solution):
            values = " ".join(f"{v:14.6f}" for v in row)
            lines.append(f"  x[{i}]: {values}")

        lines.append("-" * 60)
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSystemSolution(shape=({self._system.n_rows}, {self._system.n_cols}), "
            f"method={self.method!r}, rank={self.rank}, "
            f"residual_norm={self.residual_norm:.3e})"
        )
