"""
Matrix decompositions.

Submodules:
    lu: LU decomposition with partial pivoting (square solves, determinant)
    qr: Reduced Householder QR decomposition (least squares)

Both engines run their factorization eagerly in the constructor and
memoize every derived factor. A Matrix builds and caches them lazily via
its lu_decomposition and qr_decomposition properties.
"""

from pymatrix.decomposition.lu import PivotingLUDecomposition
from pymatrix.decomposition.qr import ReducedQRDecomposition

__all__ = [
    "PivotingLUDecomposition",
    "ReducedQRDecomposition",
]
