"""
Math layer for the Orbital AMM

Pure functions, no pool state:
- sphere_math: per-tick sphere invariant, trade solver, classification, spot price
- projection: equal-price decomposition used by the phase diagram
"""

from .sphere_math import (
    Interior,
    Boundary,
    TickStatus,
    Fill,
    equal_reserve_point,
    classify,
    invariant_residual,
    invariant_target,
    is_on_sphere,
    solve_output,
    sphere_radius,
    spot_price,
)
from .projection import (
    decompose_reserves,
    parallel_magnitude,
    distance_from_equilibrium,
)
