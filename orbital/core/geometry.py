"""
Geometry Sampler - 2-token phase space for visualisation.

Samples the (x1, x2) plane of the first two tokens on a regular grid and
projects every tick onto the same plane. Works on an immutable snapshot so
it can run alongside other readers.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..constants import PHASE_GRID_SIZE, PHASE_MARGIN
from ..errors import InvalidArgumentError
from ..math.projection import decompose_reserves, distance_from_equilibrium, parallel_magnitude
from ..math.sphere_math import sphere_radius
from .pool import PoolSnapshot
from .tick import TickView


@dataclass(frozen=True)
class PhasePoint:
    x1: float
    x2: float
    parallel_magnitude: float
    distance_from_equilibrium: float
    is_valid: bool

    def to_dict(self) -> dict:
        return {
            "x1": self.x1,
            "x2": self.x2,
            "parallel_magnitude": self.parallel_magnitude,
            "distance_from_equilibrium": self.distance_from_equilibrium,
            "is_valid": self.is_valid,
        }


@dataclass(frozen=True)
class TickProjection:
    index: int
    parallel_magnitude: float
    distance_from_equilibrium: float
    orthogonal_norm: float
    plane_constant: float
    reserves: Tuple[float, float]
    is_interior: bool
    is_boundary: bool

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "parallel_magnitude": self.parallel_magnitude,
            "distance_from_equilibrium": self.distance_from_equilibrium,
            "orthogonal_norm": self.orthogonal_norm,
            "plane_constant": self.plane_constant,
            "reserves": list(self.reserves),
            "is_interior": self.is_interior,
            "is_boundary": self.is_boundary,
        }


@dataclass(frozen=True)
class PhaseSample:
    equal_price_point: float
    radius: float
    bound: float
    phase_points: Tuple[PhasePoint, ...]
    current_ticks: Tuple[TickProjection, ...]

    def to_dict(self) -> dict:
        return {
            "equal_price_point": self.equal_price_point,
            "radius": self.radius,
            "bound": self.bound,
            "phase_points": [p.to_dict() for p in self.phase_points],
            "current_ticks": [t.to_dict() for t in self.current_ticks],
        }


def reference_tick(ticks: Tuple[TickView, ...]) -> Optional[TickView]:
    """Lowest-index Interior tick, else the lowest-index tick, else None"""
    for tick in ticks:
        if tick.is_interior:
            return tick
    return ticks[0] if ticks else None


def project_tick(tick: TickView) -> TickProjection:
    """Tick position in the (x1, x2) slice; orthogonal_norm is over every token"""
    x1, x2 = tick.reserves[0], tick.reserves[1]
    _, orthogonal = decompose_reserves(tick.reserves)
    return TickProjection(
        index=tick.index,
        parallel_magnitude=float(parallel_magnitude(x1, x2)),
        distance_from_equilibrium=float(distance_from_equilibrium(x1, x2)),
        orthogonal_norm=float(np.linalg.norm(orthogonal)),
        plane_constant=tick.plane_constant,
        reserves=(x1, x2),
        is_interior=tick.is_interior,
        is_boundary=tick.is_boundary,
    )


def sample_phase_space(
    snapshot: PoolSnapshot,
    grid_size: int = PHASE_GRID_SIZE,
    margin: float = PHASE_MARGIN
) -> PhaseSample:
    """
    Build the phase sample for the first two tokens.

    Args:
        snapshot: pool snapshot
        grid_size: points per axis (>= 2)
        margin: fraction of the largest reserve added to the grid bound

    Returns:
        PhaseSample with grid_size² points in row-major (x1, then x2) order
    """
    if grid_size < 2:
        raise InvalidArgumentError(f"grid_size must be at least 2, got {grid_size}")
    if margin < 0 or not math.isfinite(margin):
        raise InvalidArgumentError(f"margin must be non-negative, got {margin}")

    ref = reference_tick(snapshot.ticks)
    n = len(snapshot.token_names)
    equal_price_point = ref.plane_constant if ref else 0.0
    radius = sphere_radius(ref.plane_constant, n) if ref else 0.0

    max_reserve = max((x for t in snapshot.ticks for x in t.reserves), default=0.0)
    bound = max_reserve * (1.0 + margin) if max_reserve > 0 else 1.0

    axis = np.linspace(0.0, bound, grid_size)
    x1, x2 = np.meshgrid(axis, axis, indexing="ij")
    par = parallel_magnitude(x1, x2)
    dist = distance_from_equilibrium(x1, x2)
    valid = (x1 >= 0) & (x2 >= 0)

    points = tuple(
        PhasePoint(
            x1=float(a), x2=float(b),
            parallel_magnitude=float(p),
            distance_from_equilibrium=float(d),
            is_valid=bool(v),
        )
        for a, b, p, d, v in zip(x1.ravel(), x2.ravel(), par.ravel(), dist.ravel(), valid.ravel())
    )
    return PhaseSample(
        equal_price_point=equal_price_point,
        radius=radius,
        bound=bound,
        phase_points=points,
        current_ticks=tuple(project_tick(t) for t in snapshot.ticks),
    )
