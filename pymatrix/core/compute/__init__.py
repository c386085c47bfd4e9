"""
Shared compute infrastructure for PyMatrix.

Submodules:
    tolerances: Rank tolerance policy and comparison tiers
    timing: Execution timing utilities
"""

from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import (
    RANK_RTOL,
    ILL_CONDITIONED_RATIO,
    ToleranceTier,
)

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "RANK_RTOL",
    "ILL_CONDITIONED_RATIO",
    "ToleranceTier",
]
