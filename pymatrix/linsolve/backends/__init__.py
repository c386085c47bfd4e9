"""
Linear solve backends.

Available backends:
    CPULUBackend: Square systems via LU with partial pivoting
    CPUQRBackend: Least squares via reduced Householder QR
"""

from pymatrix.linsolve.backends.cpu import CPULUBackend, CPUQRBackend

__all__ = [
    "CPULUBackend",
    "CPUQRBackend",
]
