"""
Generic result container for PyMatrix computations.

The Result class provides a standardized envelope for computations that
carry diagnostics alongside their payload (linear solves, in particular).
This enables shared tooling for timing, reproducibility and reporting
while letting each front end define its own parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, rank, diagnostics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
    - provenance records library versions for reproducibility
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

import numpy as np

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Versions of the software stack that produced a result."""
    from pymatrix import __version__

    return {
        'pymatrix_version': __version__,
        'numpy_version': np.__version__,
        'python_version': platform.python_version(),
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for matrix computations.

    Type Parameters:
        P: The payload type

    Attributes:
        params: Computation payload (solution matrix, diagnostics, etc.)
        info: Structured metadata (method, rank, determinant)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the engine that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions used for the computation

    Examples:
        >>> Result(
        ...     params=SolveParams(solution=X, residual=R, residual_norm=0.0),
        ...     info={'method': 'lu', 'rank': 3},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_lu'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)
