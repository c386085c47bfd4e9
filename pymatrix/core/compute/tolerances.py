"""
Tolerance policy for numerical decisions and validation.

Two kinds of tolerance live here:

- The rank tolerance, used by both decomposition engines to decide when a
  diagonal entry of a triangular factor counts as zero. LU and QR share one
  relative policy: an entry d is negligible iff
      |d| <= RANK_RTOL * max_i |d_i|
  so rank decisions do not depend on the overall scale of the matrix.
- Tolerance tiers for comparing computed results against references, used
  by the test suite.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


# Relative threshold below which a triangular diagonal entry is treated as
# zero. Rounding residue of an exactly rank-deficient input sits near
# n * eps relative to the largest entry.
RANK_RTOL = 1e-12

# Smallest-to-largest diagonal magnitude ratio below which a solve that
# passes the rank check still emits an IllConditionedWarning.
ILL_CONDITIONED_RATIO = 1e-8


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Integer-valued inputs whose results are exactly representable
EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Bit-identical results',
)

# Double precision on well-conditioned problems
FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='Double precision, well-conditioned',
)


def negligible_mask(
    diagonal: NDArray[np.floating[Any]],
    rtol: float = RANK_RTOL,
) -> NDArray[np.bool_]:
    """
    Flag diagonal entries of a triangular factor that count as zero.

    Args:
        diagonal: Diagonal of U (LU) or R (QR)
        rtol: Relative tolerance against the largest diagonal magnitude

    Returns:
        Boolean mask, True where the entry is negligible. An all-zero
        diagonal is entirely negligible.
    """
    magnitudes = np.abs(diagonal)
    if magnitudes.size == 0:
        return np.zeros(0, dtype=bool)
    scale = float(magnitudes.max())
    return magnitudes <= rtol * scale


def numerical_rank(
    diagonal: NDArray[np.floating[Any]],
    rtol: float = RANK_RTOL,
) -> int:
    """Number of diagonal entries above the rank tolerance."""
    return int(np.count_nonzero(~negligible_mask(diagonal, rtol)))


def diagonal_ratio(diagonal: NDArray[np.floating[Any]]) -> float:
    """
    Smallest-to-largest diagonal magnitude ratio.

    A cheap conditioning indicator for triangular factors: 1.0 for a
    perfectly balanced diagonal, 0.0 when any entry vanishes.
    """
    magnitudes = np.abs(diagonal)
    if magnitudes.size == 0:
        return 1.0
    largest = float(magnitudes.max())
    if largest == 0.0:
        return 0.0
    return float(magnitudes.min()) / largest
