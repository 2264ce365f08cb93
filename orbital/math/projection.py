"""
Projection Math - equal-price decomposition

Splits a reserve point into its component along the equal-price direction
v = (1, ..., 1)/√n and the orthogonal remainder.

    parallel_magnitude = (x · 1) / √n
    orthogonal         = x - parallel_magnitude · v

For the 2-token slice used by the phase diagram this reduces to
    parallel = (x1 + x2)/√2,  distance = (x1 - x2)/√2
"""

import math
from typing import List, Sequence, Tuple

import numpy as np

SQRT2 = math.sqrt(2.0)


def decompose_reserves(reserves: Sequence[float]) -> Tuple[float, List[float]]:
    """
    Decompose reserves into (parallel_magnitude, orthogonal_component).

    Args:
        reserves: reserve vector (any length)

    Returns:
        (|x_parallel|, x - x_parallel)
    """
    n = len(reserves)
    if n == 0:
        return 0.0, []
    x = np.asarray(reserves, dtype=float)
    norm_factor = math.sqrt(n)
    parallel_mag = float(x.sum()) / norm_factor
    orthogonal = x - parallel_mag / norm_factor
    return parallel_mag, orthogonal.tolist()


def parallel_magnitude(x1, x2):
    """Projection of (x1, x2) onto the equal-price diagonal (scalar or array)"""
    return (x1 + x2) / SQRT2


def distance_from_equilibrium(x1, x2):
    """Signed orthogonal deviation from the diagonal x1 = x2 (scalar or array)"""
    return (x1 - x2) / SQRT2
