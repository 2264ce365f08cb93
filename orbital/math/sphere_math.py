"""
Sphere Math - per-tick invariant

Each tick keeps its reserve vector x on a sphere centered at (r, ..., r):

    Σᵢ (xᵢ - r)² = r² (n - 1)

where r is the tick's plane constant and n the number of tokens. Once a
token is driven to zero the tick is Boundary and the same equation is
applied to the positive subset S only:

    Σ_{i∈S} (xᵢ - r)² = r² (|S| - 1)

A zero coordinate contributes exactly r² to the full sum, so the two forms
agree and the solver can always work on the full vector.

Trade solution (input token i, output token j, others k):

    a   = x_i + Δin
    rem = r²(n-1) - Σ_k (x_k - r)² - (a - r)²
    b   = r ± √rem          (same side of r as x_j)
    Δout = x_j - b
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union, Optional

from ..constants import EPSILON, INVARIANT_TOLERANCE
from ..errors import ExceedsCapacityError, InvalidArgumentError


@dataclass(frozen=True)
class Interior:
    """All tokens hold strictly positive reserve."""

    def includes(self, index: int) -> bool:
        return True


@dataclass(frozen=True)
class Boundary:
    """One or more tokens saturated to zero; invariant restricted to `positive`."""
    positive: Tuple[int, ...]

    def includes(self, index: int) -> bool:
        return index in self.positive


TickStatus = Union[Interior, Boundary]


@dataclass(frozen=True)
class Fill:
    """Result of solving one tick for a trade."""
    amount_out: float
    consumed_amount_in: float
    becomes_boundary: bool


def sphere_radius(plane_constant: float, n_tokens: int) -> float:
    """Radius of the tick sphere: r·√(n-1)"""
    return plane_constant * math.sqrt(n_tokens - 1)


def invariant_target(plane_constant: float, n_tokens: int) -> float:
    """Right-hand side of the invariant: r²(n-1)"""
    return plane_constant * plane_constant * (n_tokens - 1)


def equal_reserve_point(plane_constant: float, n_tokens: int, above: bool = False) -> float:
    """
    Equal-reserve coordinate on the tick sphere: r(1 ∓ √((n-1)/n))

    Below the center (default) the marginal output of a swap falls as its
    input grows; above it the marginal output rises.
    """
    offset = math.sqrt((n_tokens - 1) / n_tokens)
    return plane_constant * (1.0 + offset if above else 1.0 - offset)


def positive_indices(reserves: Sequence[float], eps: float = EPSILON) -> Tuple[int, ...]:
    return tuple(i for i, x in enumerate(reserves) if x > eps)


def classify(reserves: Sequence[float], eps: float = EPSILON) -> TickStatus:
    """
    Interior/Boundary classification.

    Boundary iff any reserve is at or below `eps`; the Boundary variant carries
    the indices still holding positive reserve.
    """
    positive = positive_indices(reserves, eps)
    if len(positive) == len(reserves):
        return Interior()
    return Boundary(positive=positive)


def invariant_residual(
    reserves: Sequence[float],
    plane_constant: float,
    active: Optional[Sequence[int]] = None
) -> float:
    """
    Σ_{i∈S} (xᵢ - r)² - r²(|S| - 1)

    Zero when the reserves sit on the tick sphere. `active` restricts the sum
    to a subset of indices (Boundary form); default is every index.

    Args:
        reserves: reserve vector
        plane_constant: r
        active: optional index subset S

    Returns:
        signed residual (positive = outside the sphere)
    """
    indices = range(len(reserves)) if active is None else active
    r = plane_constant
    lhs = sum((reserves[i] - r) ** 2 for i in indices)
    return lhs - invariant_target(r, len(indices))


def is_on_sphere(
    reserves: Sequence[float],
    plane_constant: float,
    rel_tol: float = INVARIANT_TOLERANCE
) -> bool:
    """Invariant check within a relative tolerance of r²(n-1)"""
    target = invariant_target(plane_constant, len(reserves))
    scale = max(target, plane_constant * plane_constant)
    return abs(invariant_residual(reserves, plane_constant)) <= rel_tol * scale


def _others_sq(reserves: Sequence[float], r: float, i: int, j: int) -> float:
    return sum((x - r) ** 2 for k, x in enumerate(reserves) if k != i and k != j)


def solve_output(
    reserves: Sequence[float],
    plane_constant: float,
    from_index: int,
    to_index: int,
    amount_in: float,
    eps: float = EPSILON
) -> Fill:
    """
    Solve one tick for a swap of `amount_in` of token `from_index`.

    The output reserve b stays on its side of the center r:

    Upper side (x_j > r), b = r + √rem:
        b falls toward r as input grows. If rem < 0 the input is capped at
        a = r + √(r²(n-1) - others_sq), which drives b exactly to r.

    Lower side (x_j ≤ r), b = r - √rem:
        b falls toward 0 as a approaches r. Input beyond a = r would lower
        the output again, so it is capped there. If b ≤ 0 the tick saturates:
        b = 0 and the exact input is back-solved from
        (a* - r)² = r²(n-2) - others_sq.

    A partial fill reports consumed_amount_in < amount_in; the remainder is
    left for other ticks. consumed_amount_in never exceeds amount_in.

    A tick strictly inside its sphere is pulled onto it by the fill. Until
    the input is large enough to reach the sphere the target equation has
    no positive-output root, and the tick raises ExceedsCapacityError.

    Args:
        reserves: current tick reserves
        plane_constant: r > 0
        from_index: input token index i
        to_index: output token index j
        amount_in: requested input (> 0)
        eps: relative tolerance on radicands

    Returns:
        Fill(amount_out, consumed_amount_in, becomes_boundary)

    Raises:
        InvalidArgumentError: bad parameters
        ExceedsCapacityError: the tick cannot produce positive output
    """
    r = plane_constant
    if r <= 0:
        raise InvalidArgumentError(f"plane constant must be positive, got {r}")
    if amount_in <= 0:
        raise InvalidArgumentError(f"amount_in must be positive, got {amount_in}")
    if from_index == to_index:
        raise InvalidArgumentError("from and to tokens must differ")

    n = len(reserves)
    x_i = reserves[from_index]
    x_j = reserves[to_index]
    tol = eps * r * r

    capacity_sq = invariant_target(r, n) - _others_sq(reserves, r, from_index, to_index)
    if capacity_sq < -tol:
        raise ExceedsCapacityError("non-traded reserves exceed the tick sphere")
    capacity_sq = max(capacity_sq, 0.0)

    a = x_i + amount_in
    consumed = amount_in

    if x_j > r:
        rem = capacity_sq - (a - r) ** 2
        if rem < 0:
            if a < r:
                # more input only moves a toward r, away from the cap
                raise ExceedsCapacityError("input reserve lies outside the tick sphere")
            a = r + math.sqrt(capacity_sq)
            consumed = min(a - x_i, amount_in)
            amount_out = x_j - r
        else:
            amount_out = x_j - (r + math.sqrt(rem))
        if consumed <= 0 or amount_out <= 0:
            raise ExceedsCapacityError("input token cannot move the output reserve toward center")
        return Fill(amount_out=amount_out, consumed_amount_in=consumed, becomes_boundary=False)

    if x_i >= r:
        raise ExceedsCapacityError("input reserve is past the point of maximal output")
    if a > r:
        a = r
        consumed = r - x_i

    rem = capacity_sq - (a - r) ** 2
    if rem < -tol:
        raise ExceedsCapacityError("trade has no real solution on this tick")
    b = r - math.sqrt(max(rem, 0.0))

    if b <= eps * r:
        # saturate the output token; back-solve the exact input
        depth_sq = max(capacity_sq - r * r, 0.0)
        a_star = r - math.sqrt(depth_sq)
        consumed = min(max(a_star - x_i, 0.0), consumed)
        if consumed <= 0 or x_j <= 0:
            raise ExceedsCapacityError("output reserve already exhausted")
        return Fill(amount_out=x_j, consumed_amount_in=consumed, becomes_boundary=True)

    amount_out = x_j - b
    if amount_out <= 0:
        raise ExceedsCapacityError("trade yields no output on this tick")
    return Fill(amount_out=amount_out, consumed_amount_in=consumed, becomes_boundary=False)


def spot_price(
    reserves: Sequence[float],
    plane_constant: float,
    from_index: int,
    to_index: int,
    eps: float = EPSILON
) -> float:
    """
    Marginal units of `to` received per unit of `from`.

    Slope of the sphere along the (from, to) plane:
        -dx_to/dx_from = (x_from - r) / (x_to - r)

    Raises:
        InvalidArgumentError: the output coordinate sits on the center
    """
    r = plane_constant
    denom = reserves[to_index] - r
    if abs(denom) <= eps * max(r, 1.0):
        raise InvalidArgumentError("spot price undefined: output reserve is at the center")
    return (reserves[from_index] - r) / denom
