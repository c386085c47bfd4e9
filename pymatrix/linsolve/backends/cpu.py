"""
CPU backends for linear solves.

Both backends run on the package's own decomposition engines: LU with
partial pivoting for square systems and Householder QR for least
squares. An ill-conditioned factorization is reported twice: the engine
issues an IllConditionedWarning to the caller, and the backend records
the same message in Result.warnings.
"""

from typing import Any

import numpy as np

from pymatrix.core.compute.timing import Timer
from pymatrix.core.result import Result
from pymatrix.linsolve.design import LinearSystem
from pymatrix.linsolve.solution import SolveParams
from pymatrix.matrix.matrix import Matrix


class CPULUBackend:
    """
    CPU backend using LU decomposition with partial pivoting.

    Exact solve of a square system; also reports the determinant.
    """

    @property
    def name(self) -> str:
        return 'cpu_lu'

    def solve(self, system: LinearSystem) -> Result[SolveParams]:
        """
        Solve AX = B via LU.

        Algorithm:
            1. Factor PA = LU
            2. Forward and back substitution on the permuted B
            3. Residual AX - B

        Raises:
            NotSquareError: If A is not square
            SingularMatrixError: If A is singular
        """
        with Timer() as timer:
            with timer.section('decomposition'):
                lu = system.A.lu_decomposition

            with timer.section('substitution'):
                X = lu.solve(system.B)

            with timer.section('residual'):
                residual, residual_norm = _residual(system, X)

        params = SolveParams(
            solution=X,
            residual=residual,
            residual_norm=residual_norm,
            rank=lu.rank,
        )

        info: dict[str, Any] = {
            'method': 'lu',
            'rank': lu.rank,
            'determinant': lu.determinant,
            'pivot': lu.pivot,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=_collect_warnings(lu.conditioning_warning),
        )


class CPUQRBackend:
    """
    CPU backend using reduced Householder QR.

    Least-squares solve of a system with at least as many rows as
    columns.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, system: LinearSystem) -> Result[SolveParams]:
        """
        Solve min ||AX - B|| via QR.

        Algorithm:
            1. Factor A = QR
            2. Y = Q'B, then back substitution RX = Y
            3. Residual AX - B

        Raises:
            SingularMatrixError: If A is rank deficient
        """
        with Timer() as timer:
            with timer.section('decomposition'):
                qr = system.A.qr_decomposition

            with timer.section('substitution'):
                X = qr.solve(system.B)

            with timer.section('residual'):
                residual, residual_norm = _residual(system, X)

        params = SolveParams(
            solution=X,
            residual=residual,
            residual_norm=residual_norm,
            rank=qr.rank,
        )

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': qr.rank,
            'r_diagonal': qr.r_diagonal,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=_collect_warnings(qr.conditioning_warning),
        )


def _collect_warnings(*messages: str | None) -> tuple[str, ...]:
    return tuple(m for m in messages if m is not None)


def _residual(system: LinearSystem, X: Matrix) -> tuple[Matrix, float]:
    residual = system.A @ X - system.B
    return residual, float(np.linalg.norm(np.asarray(residual)))
